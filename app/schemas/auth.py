"""Request/response schemas for auth endpoints."""

import re

from pydantic import EmailStr, Field, field_validator

from app.core.security import USERNAME_MAX_LEN, USERNAME_MIN_LEN, password_rule_violations
from app.models.user import UserRole
from app.schemas.base import ApiModel

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9\-._@+]+$")
NAME_MAX_LEN = 30


def check_username(value: str) -> str:
    """Shared username rule for registration and profile updates."""
    if not USERNAME_PATTERN.fullmatch(value):
        raise ValueError(
            "Username may only contain letters, digits and the characters - . _ @ +"
        )
    return value


class LoginRequest(ApiModel):
    """Credentials for login."""

    username: str = Field(..., description="Username")
    password: str = Field(..., description="Password")


class RefreshAccessTokenRequest(ApiModel):
    """Refresh token to exchange for a new token pair."""

    refresh_token: str = Field(..., description="JWT refresh token")


class TokenPairResponse(ApiModel):
    """Access and refresh tokens returned after login or refresh."""

    access_token: str = Field(..., description="JWT access token (Bearer)")
    refresh_token: str = Field(..., description="JWT refresh token")


class RegisterRequest(ApiModel):
    """New account. Admin accounts cannot be self-registered."""

    username: str = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    password: str
    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN)
    last_name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN)
    role: UserRole

    _check_username = field_validator("username")(check_username)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        violations = password_rule_violations(v)
        if violations:
            raise ValueError(" ".join(violations))
        return v

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: UserRole) -> UserRole:
        if v is UserRole.ADMIN:
            raise ValueError("Admin accounts cannot be registered.")
        return v


class CurrentUser(ApiModel):
    """Authenticated caller (id, username, role) resolved from the access token."""

    id: str
    username: str
    role: UserRole
