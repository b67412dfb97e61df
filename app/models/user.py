"""ORM model for user accounts (credentials, role, ban and revocation state)."""

import enum
import uuid

from sqlalchemy import Boolean, Column, DateTime, Enum, Index, String, func
from sqlalchemy.orm import relationship

from app.models.base import Base


class UserRole(str, enum.Enum):
    """Closed set of account roles; every account has exactly one."""

    REGISTERED_USER = "RegisteredUser"
    RESTAURANT_MANAGER = "RestaurantManager"
    ADMIN = "Admin"


def _new_user_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    token_validity_threshold: tokens issued at or before this instant are
    rejected. Advanced on logout and ban.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_user_id)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(30), nullable=False)
    last_name = Column(String(30), nullable=False)
    role = Column(
        Enum(
            UserRole,
            name="user_role",
            native_enum=False,
            length=32,
            values_callable=lambda roles: [r.value for r in roles],
        ),
        nullable=False,
    )
    is_banned = Column(Boolean, nullable=False, default=False)
    token_validity_threshold = Column(DateTime(timezone=True), nullable=True)

    restaurants = relationship(
        "Restaurant",
        back_populates="restaurant_manager",
        cascade="all, delete-orphan",
    )
    reservations = relationship(
        "Reservation",
        back_populates="reserving_user",
        cascade="all, delete-orphan",
    )

    @classmethod
    def username_is(cls, username: str):
        """Case-insensitive match on username; `Alice` and `alice` are one account."""
        return func.lower(cls.username) == username.lower()


Index("uq_users_username_lower", func.lower(User.username), unique=True)
