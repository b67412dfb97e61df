"""
Shared handler steps: resolve path resources (404), reject non-owners (403),
validate bodies with every violation reported (422), and commit.
"""

import logging
from typing import Any, TypeVar

from fastapi import HTTPException, status
from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import City, Reservation, Restaurant, User

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def not_found(resource: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"The requested {resource} was not found.",
    )


def forbidden() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="You do not have permission to perform this action.",
    )


def unprocessable(message: str, field: str = "") -> HTTPException:
    """Business-rule failure, in the same list shape as field validation errors."""
    return HTTPException(
        status_code=422,
        detail=[{"field": field, "error": message}],
    )


def format_validation_errors(exc: ValidationError) -> list[dict[str, str]]:
    """Flatten a Pydantic ValidationError into [{field, error}], one entry per violated rule."""
    errors: list[dict[str, str]] = []
    for err in exc.errors():
        message = err["msg"]
        if err["type"] == "value_error" and "error" in err.get("ctx", {}):
            message = str(err["ctx"]["error"])
        errors.append(
            {"field": ".".join(str(part) for part in err["loc"]), "error": message}
        )
    return errors


def validate_body(model: type[ModelT], body: dict[str, Any]) -> ModelT:
    """Validate a JSON object against a schema; raise 422 listing all violations."""
    try:
        return model.model_validate(body)
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=format_validation_errors(e),
        ) from e


def get_city_or_404(db: Session, city_id: int) -> City:
    city = db.query(City).filter(City.id == city_id).first()
    if city is None:
        raise not_found("city")
    return city


def get_restaurant_or_404(db: Session, city: City, restaurant_id: int) -> Restaurant:
    restaurant = (
        db.query(Restaurant)
        .filter(Restaurant.city_id == city.id, Restaurant.id == restaurant_id)
        .first()
    )
    if restaurant is None:
        raise not_found("restaurant")
    return restaurant


def get_reservation_or_404(
    db: Session, restaurant: Restaurant, reservation_id: int
) -> Reservation:
    reservation = (
        db.query(Reservation)
        .filter(
            Reservation.restaurant_id == restaurant.id,
            Reservation.id == reservation_id,
        )
        .first()
    )
    if reservation is None:
        raise not_found("reservation")
    return reservation


def get_user_or_404(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise not_found("user")
    return user


def commit_or_422(db: Session, conflict_message: str) -> None:
    """Commit; a unique-constraint race surfaces as the same 422 as the pre-check."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("Integrity error on commit: %s", e.orig)
        raise unprocessable(conflict_message) from e
