"""
Reservations. Registered users book tables and read their own bookings; a
restaurant's manager reads, updates (including status) and deletes the
bookings made at their restaurant.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Request, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import require_roles
from app.api.v1.lookups import (
    forbidden,
    get_city_or_404,
    get_reservation_or_404,
    get_restaurant_or_404,
    not_found,
    validate_body,
)
from app.core.database import get_db
from app.core.policy import can_manage_reservation, can_view_reservation
from app.models import Reservation, ReservationStatus, UserRole
from app.schemas.auth import CurrentUser
from app.schemas.reservation import ReservationCreate, ReservationRead, ReservationUpdate

logger = logging.getLogger(__name__)

# Nested under /cities/{city_id}/restaurants/{restaurant_id}/reservations
router = APIRouter()
# Top-level /reservations: the caller's own bookings across restaurants
user_router = APIRouter()

RegisteredUser = Annotated[CurrentUser, Depends(require_roles(UserRole.REGISTERED_USER))]
Manager = Annotated[CurrentUser, Depends(require_roles(UserRole.RESTAURANT_MANAGER))]
UserOrManager = Annotated[
    CurrentUser,
    Depends(require_roles(UserRole.REGISTERED_USER, UserRole.RESTAURANT_MANAGER)),
]


@user_router.get("", response_model=list[ReservationRead])
def list_my_reservations(
    current_user: RegisteredUser,
    db: Annotated[Session, Depends(get_db)],
) -> list[Reservation]:
    return (
        db.query(Reservation)
        .filter(Reservation.reserving_user_id == current_user.id)
        .order_by(Reservation.id)
        .all()
    )


@user_router.get("/{reservation_id}", response_model=ReservationRead)
def get_my_reservation(
    reservation_id: int,
    current_user: RegisteredUser,
    db: Annotated[Session, Depends(get_db)],
) -> Reservation:
    reservation = db.query(Reservation).filter(Reservation.id == reservation_id).first()
    if reservation is None:
        raise not_found("reservation")
    if not can_view_reservation(current_user, reservation):
        raise forbidden()
    return reservation


@router.get("", response_model=list[ReservationRead])
def list_reservations(
    city_id: int,
    restaurant_id: int,
    current_user: UserOrManager,
    db: Annotated[Session, Depends(get_db)],
) -> list[Reservation]:
    """
    A manager sees every booking at a restaurant they run (none for anyone
    else's); a registered user sees only their own bookings there.
    """
    city = get_city_or_404(db, city_id)
    restaurant = get_restaurant_or_404(db, city, restaurant_id)
    query = db.query(Reservation).filter(Reservation.restaurant_id == restaurant.id)
    if current_user.role is UserRole.RESTAURANT_MANAGER:
        if restaurant.restaurant_manager_id != current_user.id:
            return []
    else:
        query = query.filter(Reservation.reserving_user_id == current_user.id)
    return query.order_by(Reservation.id).all()


@router.get("/{reservation_id}", response_model=ReservationRead)
def get_reservation(
    city_id: int,
    restaurant_id: int,
    reservation_id: int,
    current_user: UserOrManager,
    db: Annotated[Session, Depends(get_db)],
) -> Reservation:
    city = get_city_or_404(db, city_id)
    restaurant = get_restaurant_or_404(db, city, restaurant_id)
    reservation = get_reservation_or_404(db, restaurant, reservation_id)
    if not can_view_reservation(current_user, reservation):
        raise forbidden()
    return reservation


@router.post("", response_model=ReservationRead, status_code=status.HTTP_201_CREATED)
def create_reservation(
    city_id: int,
    restaurant_id: int,
    body: Annotated[dict[str, Any], Body()],
    request: Request,
    response: Response,
    current_user: RegisteredUser,
    db: Annotated[Session, Depends(get_db)],
) -> Reservation:
    """Book a table. The reservation always starts as Pending."""
    city = get_city_or_404(db, city_id)
    restaurant = get_restaurant_or_404(db, city, restaurant_id)
    data = validate_body(ReservationCreate, body)
    reservation = Reservation(
        date=data.date,
        time=data.time,
        party_size=data.party_size,
        status=ReservationStatus.PENDING,
        restaurant_id=restaurant.id,
        reserving_user_id=current_user.id,
    )
    db.add(reservation)
    db.commit()
    db.refresh(reservation)
    logger.info(
        "Created reservation id=%s restaurant_id=%s user_id=%s",
        reservation.id,
        restaurant.id,
        current_user.id,
    )
    response.headers["Location"] = str(
        request.url_for(
            "get_reservation",
            city_id=city.id,
            restaurant_id=restaurant.id,
            reservation_id=reservation.id,
        )
    )
    return reservation


@router.put("/{reservation_id}", response_model=ReservationRead)
def update_reservation(
    city_id: int,
    restaurant_id: int,
    reservation_id: int,
    body: Annotated[dict[str, Any], Body()],
    manager: Manager,
    db: Annotated[Session, Depends(get_db)],
) -> Reservation:
    """Change date, time, party size or status (e.g. Pending -> Confirmed)."""
    city = get_city_or_404(db, city_id)
    restaurant = get_restaurant_or_404(db, city, restaurant_id)
    reservation = get_reservation_or_404(db, restaurant, reservation_id)
    if not can_manage_reservation(manager, reservation):
        raise forbidden()
    data = validate_body(ReservationUpdate, body)
    previous_status = reservation.status
    reservation.date = data.date
    reservation.time = data.time
    reservation.party_size = data.party_size
    reservation.status = data.status
    db.commit()
    db.refresh(reservation)
    if previous_status is not reservation.status:
        logger.info(
            "Reservation id=%s status %s -> %s",
            reservation.id,
            previous_status.value,
            reservation.status.value,
        )
    return reservation


@router.delete("/{reservation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_reservation(
    city_id: int,
    restaurant_id: int,
    reservation_id: int,
    manager: Manager,
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    city = get_city_or_404(db, city_id)
    restaurant = get_restaurant_or_404(db, city, restaurant_id)
    reservation = get_reservation_or_404(db, restaurant, reservation_id)
    if not can_manage_reservation(manager, reservation):
        raise forbidden()
    db.delete(reservation)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
