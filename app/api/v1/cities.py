"""Cities: readable by any authenticated caller, written by Admins only."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Request, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, require_roles
from app.api.v1.lookups import (
    commit_or_422,
    forbidden,
    get_city_or_404,
    unprocessable,
    validate_body,
)
from app.core.database import get_db
from app.core.policy import can_view_city
from app.models import City, Restaurant, UserRole
from app.schemas.auth import CurrentUser
from app.schemas.city import CityRead, CityWrite

logger = logging.getLogger(__name__)
router = APIRouter()

DUPLICATE_CITY = "A city with the same latitude, longitude and name already exists."

AdminUser = Annotated[CurrentUser, Depends(require_roles(UserRole.ADMIN))]


def _city_exists(db: Session, data: CityWrite) -> bool:
    # The record being updated is not excluded from the scan.
    return (
        db.query(City)
        .filter(
            City.latitude == data.latitude,
            City.longitude == data.longitude,
            City.name == data.name,
        )
        .first()
        is not None
    )


@router.get("", response_model=list[CityRead])
def list_cities(
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> list[City]:
    return db.query(City).order_by(City.id).all()


@router.get("/{city_id}", response_model=CityRead)
def get_city(
    city_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> City:
    """Return one city. Restaurant managers only see cities where they run a restaurant."""
    city = get_city_or_404(db, city_id)
    manages_here = (
        db.query(Restaurant)
        .filter(
            Restaurant.city_id == city.id,
            Restaurant.restaurant_manager_id == current_user.id,
        )
        .first()
        is not None
    )
    if not can_view_city(current_user, manages_here):
        raise forbidden()
    return city


@router.post("", response_model=CityRead, status_code=status.HTTP_201_CREATED)
def create_city(
    body: Annotated[dict[str, Any], Body()],
    request: Request,
    response: Response,
    _admin: AdminUser,
    db: Annotated[Session, Depends(get_db)],
) -> City:
    data = validate_body(CityWrite, body)
    if _city_exists(db, data):
        raise unprocessable(DUPLICATE_CITY)
    city = City(latitude=data.latitude, longitude=data.longitude, name=data.name)
    db.add(city)
    commit_or_422(db, DUPLICATE_CITY)
    db.refresh(city)
    logger.info("Created city id=%s", city.id)
    response.headers["Location"] = str(request.url_for("get_city", city_id=city.id))
    return city


@router.put("/{city_id}", response_model=CityRead)
def update_city(
    city_id: int,
    body: Annotated[dict[str, Any], Body()],
    _admin: AdminUser,
    db: Annotated[Session, Depends(get_db)],
) -> City:
    city = get_city_or_404(db, city_id)
    data = validate_body(CityWrite, body)
    if _city_exists(db, data):
        raise unprocessable(DUPLICATE_CITY)
    city.latitude = data.latitude
    city.longitude = data.longitude
    city.name = data.name
    commit_or_422(db, DUPLICATE_CITY)
    db.refresh(city)
    return city


@router.delete("/{city_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_city(
    city_id: int,
    _admin: AdminUser,
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Delete a city together with its restaurants and their reservations."""
    city = get_city_or_404(db, city_id)
    db.delete(city)
    db.commit()
    logger.info("Deleted city id=%s", city_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
