"""Pydantic request/response schemas."""

from app.schemas.auth import (
    CurrentUser,
    LoginData,
    LoginRequest,
    LoginResponse,
    ProtectedResponse,
    RegisterRequest,
    RegisterResponse,
    TokenPayload,
    UserOut,
)
from app.schemas.health import HealthResponse

__all__ = [
    "CurrentUser",
    "HealthResponse",
    "LoginData",
    "LoginRequest",
    "LoginResponse",
    "ProtectedResponse",
    "RegisterRequest",
    "RegisterResponse",
    "TokenPayload",
    "UserOut",
]
