"""Shared factories for tests."""

from app.core.config import Settings

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


def make_settings(**overrides: object) -> Settings:
    """Settings for an isolated in-memory database with fast bcrypt."""
    values: dict[str, object] = {
        "JWT_SECRET": TEST_SECRET,
        "DATABASE_URL": "sqlite+aiosqlite://",
        "DB_AUTO_CREATE": True,
        "BCRYPT_ROUNDS": 4,
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)
