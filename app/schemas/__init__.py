"""Pydantic request/response schemas."""

from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RefreshAccessTokenRequest,
    RegisterRequest,
    TokenPairResponse,
)
from app.schemas.city import CityRead, CityWrite
from app.schemas.health import HealthResponse
from app.schemas.reservation import ReservationCreate, ReservationRead, ReservationUpdate
from app.schemas.restaurant import RestaurantRead, RestaurantWrite
from app.schemas.user import AdminUserRead, UserRead, UserUpdate

__all__ = [
    "AdminUserRead",
    "CityRead",
    "CityWrite",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "RefreshAccessTokenRequest",
    "RegisterRequest",
    "ReservationCreate",
    "ReservationRead",
    "ReservationUpdate",
    "RestaurantRead",
    "RestaurantWrite",
    "TokenPairResponse",
    "UserRead",
    "UserUpdate",
]
