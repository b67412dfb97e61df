"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import auth, cities, health, reservations, restaurants, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, tags=["auth"])
router.include_router(cities.router, prefix="/cities", tags=["cities"])
router.include_router(
    restaurants.router,
    prefix="/cities/{city_id}/restaurants",
    tags=["restaurants"],
)
router.include_router(
    reservations.router,
    prefix="/cities/{city_id}/restaurants/{restaurant_id}/reservations",
    tags=["reservations"],
)
router.include_router(reservations.user_router, prefix="/reservations", tags=["reservations"])
router.include_router(users.router, prefix="/users", tags=["users"])
