"""Request/response schemas for user profile and account administration."""

from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from app.core.security import USERNAME_MAX_LEN, USERNAME_MIN_LEN
from app.models.user import UserRole
from app.schemas.auth import NAME_MAX_LEN, check_username
from app.schemas.base import ApiModel


class UserUpdate(ApiModel):
    username: str = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN)
    last_name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN)

    _check_username = field_validator("username")(check_username)


class UserRead(ApiModel):
    """Profile as seen by the account owner."""

    id: str
    username: str
    email: str
    first_name: str
    last_name: str
    role: UserRole


class AdminUserRead(UserRead):
    """Profile plus account state, as seen by an Admin."""

    is_banned: bool
    token_validity_threshold: datetime | None = None
