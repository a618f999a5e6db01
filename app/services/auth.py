"""Registration, login and bearer-token authentication."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFoundError, TokenError, UnauthorizedError
from app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password_async,
    verify_password_async,
)
from app.models.user import User, UserRole
from app.schemas.auth import LoginRequest, RegisterRequest
from app.services.users import (
    DuplicateEmailError,
    create_user,
    get_user_by_email,
    get_user_by_id,
)

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


async def register_user(
    db: AsyncSession,
    data: RegisterRequest,
    settings: Settings | None = None,
) -> User:
    """
    Create a USER account for data.email.

    Raises DuplicateEmailError (409) if the email is taken, whether found by
    the lookup or rejected by the unique index on insert.
    """
    if await get_user_by_email(db, data.email) is not None:
        logger.info("Registration rejected: email already registered")
        raise DuplicateEmailError()

    rounds = settings.BCRYPT_ROUNDS if settings is not None else None
    password_hash = await hash_password_async(data.password, rounds)
    user = await create_user(
        db,
        fullname=data.fullname,
        email=data.email,
        password_hash=password_hash,
        role=UserRole.USER,
    )
    logger.info("Registered user id=%s", user.id, extra={"user_id": user.id})
    return user


async def login_user(
    db: AsyncSession,
    data: LoginRequest,
    settings: Settings | None = None,
) -> tuple[User, str]:
    """Check credentials and return the user with a freshly issued access token."""
    user = await get_user_by_email(db, data.email)
    if user is None:
        logger.info("Login failed: unknown_email", extra={"reason": "unknown_email"})
        raise NotFoundError("User not found")
    if not await verify_password_async(data.password, user.password_hash):
        logger.info(
            "Login failed: bad_password user_id=%s",
            user.id,
            extra={"reason": "bad_password", "user_id": user.id},
        )
        raise UnauthorizedError("Invalid credentials")

    token = create_access_token(user.id, user.email, settings=settings)
    logger.info("User logged in id=%s", user.id, extra={"user_id": user.id})
    return user, token


async def authenticate_token(
    db: AsyncSession,
    token: str,
    settings: Settings | None = None,
) -> User:
    """
    Resolve a bearer token to a stored user.

    The token only names the user; the user must still exist in the store, so
    tokens of deleted accounts stop working before they expire.
    """
    try:
        payload = decode_access_token(token, settings=settings)
    except TokenError as e:
        logger.info(
            "Token rejected: %s (%s)",
            e.kind.value,
            e.message,
            extra={"kind": e.kind.value, "reason": e.message},
        )
        raise

    user = await get_user_by_id(db, payload.id)
    if user is None:
        logger.info(
            "Token rejected: unknown_user (user_id=%s)",
            payload.id,
            extra={"kind": "unknown_user", "user_id": payload.id},
        )
        raise UnauthorizedError("User no longer exists")
    return user
