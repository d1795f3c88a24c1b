"""
VeggieFresh Admin API — Auth Schemas
======================================

Login/refresh request bodies and the admin profile returned with tokens.
"""

import uuid
from typing import Optional

from pydantic import EmailStr, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from app.schemas.common import CamelModel

_email_adapter = TypeAdapter(EmailStr)


class AdminLoginRequest(CamelModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip()
        try:
            _email_adapter.validate_python(v)
        except PydanticValidationError:
            raise ValueError("Invalid email format")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v


class RefreshTokenRequest(CamelModel):
    refresh_token: str

    @field_validator("refresh_token")
    @classmethod
    def validate_refresh_token(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Refresh token is required")
        return v.strip()


class AdminUser(CamelModel):
    """Public view of an admin account (never includes the password hash)."""

    id: uuid.UUID
    name: str
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    role: str


class AdminProfile(CamelModel):
    user: AdminUser


class AuthTokens(CamelModel):
    user: AdminUser
    access_token: str
    refresh_token: str
