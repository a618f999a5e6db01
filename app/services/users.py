"""User persistence: lookups by unique field and account creation."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError, InternalError
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)


class DuplicateEmailError(ConflictError):
    """Raised when an account with the same email already exists."""

    def __init__(self, message: str = "User already exists") -> None:
        super().__init__(message)


class StoreUnavailableError(InternalError):
    """Raised when the database cannot serve a read or write."""

    def __init__(self, message: str = "User store is unavailable") -> None:
        super().__init__(message)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    try:
        result = await db.execute(select(User).where(User.email == email))
    except SQLAlchemyError as e:
        logger.error("User lookup by email failed: %s", e)
        raise StoreUnavailableError() from e
    return result.scalar_one_or_none()


async def get_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    try:
        return await db.get(User, user_id)
    except SQLAlchemyError as e:
        logger.error("User lookup by id failed: %s", e)
        raise StoreUnavailableError() from e


async def create_user(
    db: AsyncSession,
    *,
    fullname: str,
    email: str,
    password_hash: str,
    role: UserRole = UserRole.USER,
) -> User:
    """
    Insert a user and commit.

    The unique index on email is the final arbiter: a concurrent insert that
    loses the race surfaces here as DuplicateEmailError.
    """
    user = User(
        fullname=fullname,
        email=email,
        password_hash=password_hash,
        role=role,
        has_shipping_address=False,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.info("Rejected duplicate user insert: %s", str(e.orig)[:200])
        raise DuplicateEmailError() from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("User insert failed: %s", e)
        raise StoreUnavailableError() from e
    await db.refresh(user)
    return user
