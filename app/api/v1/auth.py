"""User registration, login and the bearer-protected route."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_app_settings, get_current_user
from app.core.config import Settings
from app.core.database import get_db
from app.schemas.auth import (
    CurrentUser,
    LoginData,
    LoginRequest,
    LoginResponse,
    ProtectedResponse,
    RegisterRequest,
    RegisterResponse,
    UserOut,
)
from app.services.auth import login_user, register_user

router = APIRouter()


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> RegisterResponse:
    """Create an account. Returns the new user without its password hash."""
    user = await register_user(db, body, settings)
    return RegisterResponse(data=UserOut.model_validate(user))


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns the user and a JWT.
    Include the token in the Authorization header as: Bearer <token>
    """
    user, token = await login_user(db, body, settings)
    return LoginResponse(data=LoginData(user=UserOut.model_validate(user), token=token))


@router.get("/protected", response_model=ProtectedResponse)
async def protected(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ProtectedResponse:
    return ProtectedResponse(data=current_user)
