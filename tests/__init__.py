"""Test environment: settings are built at import time, so set them before importing app."""

import os

os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-long-enough-for-hs256")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["DB_AUTO_CREATE"] = "true"
os.environ["BCRYPT_ROUNDS"] = "4"
