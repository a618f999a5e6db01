"""Request/response schemas for auth endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.models.user import UserRole

FULLNAME_MIN_LEN = 3
FULLNAME_MAX_LEN = 30
PASSWORD_MIN_LEN = 6

# Bump when the claims layout changes; older tokens are then rejected.
TOKEN_SCHEMA_VERSION = 1


class _EmailNormalizingModel(BaseModel):
    @field_validator("email", check_fields=False)
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()


class RegisterRequest(_EmailNormalizingModel):
    """Payload for creating an account."""

    fullname: str = Field(
        ...,
        min_length=FULLNAME_MIN_LEN,
        max_length=FULLNAME_MAX_LEN,
        description="Full name",
    )
    email: EmailStr = Field(..., description="Email address, unique per account")
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        description="Password",
    )


class LoginRequest(_EmailNormalizingModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        description="Password",
    )


class UserOut(BaseModel):
    """User as returned to clients (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    fullname: str
    email: str
    role: UserRole
    has_shipping_address: bool
    created_at: datetime | None = None


class LoginData(BaseModel):
    user: UserOut
    token: str = Field(..., description="JWT access token; send as 'Authorization: Bearer <token>'")


class RegisterResponse(BaseModel):
    """Response body for POST /register."""

    message: str = "User created successfully"
    data: UserOut


class LoginResponse(BaseModel):
    """Response body for POST /login."""

    message: str = "User logged in successfully"
    data: LoginData


class CurrentUser(BaseModel):
    """Authenticated user (id, email, role) for dependency injection."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    fullname: str
    email: str
    role: UserRole


class ProtectedResponse(BaseModel):
    """Response body for GET /protected."""

    message: str = "Protected route"
    data: CurrentUser


class TokenPayload(BaseModel):
    """Claims carried by an access token. Types must match exactly (no coercion)."""

    model_config = ConfigDict(strict=True)

    v: Literal[1]
    id: int
    email: str
    iat: int
    exp: int
