"""Restaurants within a city: managers create and maintain their own, others read."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Request, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, require_roles
from app.api.v1.lookups import (
    commit_or_422,
    forbidden,
    get_city_or_404,
    get_restaurant_or_404,
    unprocessable,
    validate_body,
)
from app.core.database import get_db
from app.core.policy import can_modify_restaurant, can_view_restaurant
from app.models import City, Restaurant, UserRole
from app.schemas.auth import CurrentUser
from app.schemas.restaurant import RestaurantRead, RestaurantWrite

logger = logging.getLogger(__name__)
router = APIRouter()

DUPLICATE_RESTAURANT = (
    "A restaurant with the same name, street address and city already exists."
)


def _restaurant_exists(db: Session, city: City, data: RestaurantWrite) -> bool:
    # The record being updated is not excluded from the scan.
    return (
        db.query(Restaurant)
        .filter(
            Restaurant.city_id == city.id,
            Restaurant.name == data.name,
            Restaurant.street_address == data.street_address,
        )
        .first()
        is not None
    )


@router.get("", response_model=list[RestaurantRead])
def list_restaurants(
    city_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> list[Restaurant]:
    """List a city's restaurants; a restaurant manager only sees their own."""
    city = get_city_or_404(db, city_id)
    query = db.query(Restaurant).filter(Restaurant.city_id == city.id)
    if current_user.role is UserRole.RESTAURANT_MANAGER:
        query = query.filter(Restaurant.restaurant_manager_id == current_user.id)
    return query.order_by(Restaurant.id).all()


@router.get("/{restaurant_id}", response_model=RestaurantRead)
def get_restaurant(
    city_id: int,
    restaurant_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> Restaurant:
    city = get_city_or_404(db, city_id)
    restaurant = get_restaurant_or_404(db, city, restaurant_id)
    if not can_view_restaurant(current_user, restaurant):
        raise forbidden()
    return restaurant


@router.post("", response_model=RestaurantRead, status_code=status.HTTP_201_CREATED)
def create_restaurant(
    city_id: int,
    body: Annotated[dict[str, Any], Body()],
    request: Request,
    response: Response,
    manager: Annotated[CurrentUser, Depends(require_roles(UserRole.RESTAURANT_MANAGER))],
    db: Annotated[Session, Depends(get_db)],
) -> Restaurant:
    """Open a restaurant in the city, managed by the caller."""
    city = get_city_or_404(db, city_id)
    data = validate_body(RestaurantWrite, body)
    if _restaurant_exists(db, city, data):
        raise unprocessable(DUPLICATE_RESTAURANT)
    restaurant = Restaurant(
        name=data.name,
        description=data.description,
        street_address=data.street_address,
        website_url=data.website_url,
        city_id=city.id,
        restaurant_manager_id=manager.id,
    )
    db.add(restaurant)
    commit_or_422(db, DUPLICATE_RESTAURANT)
    db.refresh(restaurant)
    logger.info("Created restaurant id=%s city_id=%s", restaurant.id, city.id)
    response.headers["Location"] = str(
        request.url_for("get_restaurant", city_id=city.id, restaurant_id=restaurant.id)
    )
    return restaurant


@router.put("/{restaurant_id}", response_model=RestaurantRead)
def update_restaurant(
    city_id: int,
    restaurant_id: int,
    body: Annotated[dict[str, Any], Body()],
    manager: Annotated[CurrentUser, Depends(require_roles(UserRole.RESTAURANT_MANAGER))],
    db: Annotated[Session, Depends(get_db)],
) -> Restaurant:
    city = get_city_or_404(db, city_id)
    restaurant = get_restaurant_or_404(db, city, restaurant_id)
    if not can_modify_restaurant(manager, restaurant):
        raise forbidden()
    data = validate_body(RestaurantWrite, body)
    if _restaurant_exists(db, city, data):
        raise unprocessable(DUPLICATE_RESTAURANT)
    restaurant.name = data.name
    restaurant.description = data.description
    restaurant.street_address = data.street_address
    restaurant.website_url = data.website_url
    commit_or_422(db, DUPLICATE_RESTAURANT)
    db.refresh(restaurant)
    return restaurant


@router.delete("/{restaurant_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_restaurant(
    city_id: int,
    restaurant_id: int,
    current_user: Annotated[
        CurrentUser,
        Depends(require_roles(UserRole.RESTAURANT_MANAGER, UserRole.ADMIN)),
    ],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Delete a restaurant and its reservations (owning manager or Admin)."""
    city = get_city_or_404(db, city_id)
    restaurant = get_restaurant_or_404(db, city, restaurant_id)
    if not can_modify_restaurant(current_user, restaurant):
        raise forbidden()
    db.delete(restaurant)
    db.commit()
    logger.info("Deleted restaurant id=%s by user_id=%s", restaurant_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
