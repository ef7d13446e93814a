"""Pydantic schemas for authentication.

Request and response models for registration, login, email confirmation
and the profile endpoint.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


if TYPE_CHECKING:
    from postsomething.auth.models import User


# ==============================================================================
# Request Schemas
# ==============================================================================


class RegisterRequest(BaseModel):
    """User registration request.

    Password strength is checked by the user directory, which reports every
    failing rule; the schema only checks presence.
    """

    email: EmailStr = Field(..., description="Email address")
    username: str = Field(..., min_length=1, max_length=100, description="Username")
    password: str = Field(..., min_length=1, description="Password")
    confirmation_password: str = Field(
        ..., min_length=1, description="Must match password"
    )
    address: str | None = Field(None, max_length=500, description="Postal address")

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return v.strip()


class LoginRequest(BaseModel):
    """User login request."""

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., description="Password")


# ==============================================================================
# Response Schemas
# ==============================================================================


class RegisteredUserResponse(BaseModel):
    """Returned after a successful registration."""

    email: str
    username: str


class UserResponse(BaseModel):
    """Public profile of a user."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str
    email_confirmed: bool
    address: str | None = None
    created_at: datetime

    @classmethod
    def from_user(cls, user: "User") -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            email_confirmed=user.email_confirmed,
            address=user.address,
            created_at=user.created_at,
        )


class TokenResponse(BaseModel):
    """JWT access token response."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str
