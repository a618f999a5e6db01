"""Shared route dependencies: settings and the bearer-token guard."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.database import get_db
from app.core.errors import UnauthorizedError
from app.schemas.auth import CurrentUser
from app.services.auth import authenticate_token

security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was built with."""
    return request.app.state.settings


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT for an existing user.

    Raises UnauthorizedError (401) if the header is missing, the token fails
    verification, or the user is gone. On success the user is also stored on
    request.state.user.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Not authenticated")

    user = await authenticate_token(db, credentials.credentials, settings)
    current = CurrentUser.model_validate(user)
    request.state.user = current
    return current
