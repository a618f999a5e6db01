"""Password hashing and JWT creation/verification for authentication."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from app.core.config import get_settings
from app.core.errors import ExpiredTokenError, InvalidTokenError, MalformedTokenError
from app.schemas.auth import TOKEN_SCHEMA_VERSION, TokenPayload

if TYPE_CHECKING:
    from app.core.config import Settings

# bcrypt only looks at the first 72 bytes of the secret.
BCRYPT_MAX_BYTES = 72


def _password_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    if rounds is None:
        rounds = get_settings().BCRYPT_ROUNDS
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_password_bytes(plain_password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Never raises on mismatch."""
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


async def hash_password_async(plain_password: str, rounds: int | None = None) -> str:
    """Hash in the threadpool so bcrypt does not block the event loop."""
    return await run_in_threadpool(hash_password, plain_password, rounds)


async def verify_password_async(plain_password: str, hashed: str) -> bool:
    """Verify in the threadpool so bcrypt does not block the event loop."""
    return await run_in_threadpool(verify_password, plain_password, hashed)


def create_access_token(
    user_id: int,
    email: str,
    *,
    settings: Settings | None = None,
    now: datetime | None = None,
) -> str:
    """Create a JWT carrying the user's id and email, valid for JWT_EXPIRE_DAYS."""
    settings = settings or get_settings()
    issued_at = now or datetime.now(UTC)
    expire = issued_at + timedelta(days=settings.JWT_EXPIRE_DAYS)
    payload: dict[str, Any] = {
        "v": TOKEN_SCHEMA_VERSION,
        "id": user_id,
        "email": email,
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str, *, settings: Settings | None = None) -> TokenPayload:
    """
    Decode and validate a JWT; return the typed payload.

    Raises ExpiredTokenError, InvalidTokenError or MalformedTokenError.
    """
    settings = settings or get_settings()
    try:
        raw = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise ExpiredTokenError("Token has expired") from e
    # InvalidSignatureError is a DecodeError subclass, so it must be caught first.
    except jwt.InvalidSignatureError as e:
        raise InvalidTokenError("Token signature is invalid") from e
    except jwt.DecodeError as e:
        raise MalformedTokenError(f"Token is not a valid JWT: {e}") from e
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError(f"Token was rejected: {e}") from e

    if raw.get("v") != TOKEN_SCHEMA_VERSION:
        raise InvalidTokenError(f"Unsupported token schema version: {raw.get('v')!r}")
    try:
        return TokenPayload.model_validate(raw)
    except ValidationError as e:
        raise MalformedTokenError("Token payload does not match schema") from e
