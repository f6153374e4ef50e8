"""
Pydantic schemas for account API requests and responses.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

_EMAIL_PATTERN = r"^[^@]+@[^@]+\.[^@]+$"


class RegisterRequest(BaseModel):
    """Request body for POST /api/auth/register."""

    username: str = Field(..., min_length=1, max_length=150)
    email: str = Field(..., pattern=_EMAIL_PATTERN)
    password: str = Field(..., min_length=1)
    full_name: str = Field(default="", max_length=100)
    phone_number: str = Field(default="", max_length=20)
    address: str = Field(default="", max_length=255)


class LoginRequest(BaseModel):
    """Request body for POST /api/auth/login."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Response for POST /api/auth/login."""

    account_id: int
    username: str
    role: str


class ProfileUpdateRequest(BaseModel):
    """Request body for PUT /api/users/me."""

    full_name: str = Field(..., min_length=2, max_length=100)
    phone_number: str = Field(..., pattern=r"^\+?[0-9 ()\-]{7,20}$")
    address: str = Field(..., min_length=5, max_length=255)


class PasswordResetRequest(BaseModel):
    """Request body for POST /api/auth/password-reset."""

    email: str = Field(..., pattern=_EMAIL_PATTERN)


class PasswordResetConfirmRequest(BaseModel):
    """Request body for POST /api/auth/password-reset/confirm."""

    uid: str
    token: str
    new_password: str = Field(..., min_length=1)


class AccountSchema(BaseModel):
    """Public view of an account."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    full_name: str
    phone_number: str
    address: str
    role: str
    date_joined: datetime

    @field_validator("role", mode="before")
    @classmethod
    def role_value(cls, value: object) -> str:
        """Role choices arrive as enum members on unsaved instances."""
        return str(value)
