"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.city import City
from app.models.reservation import Reservation, ReservationStatus
from app.models.restaurant import Restaurant
from app.models.user import User, UserRole

__all__ = [
    "Base",
    "City",
    "Reservation",
    "ReservationStatus",
    "Restaurant",
    "User",
    "UserRole",
]
