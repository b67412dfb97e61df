"""Request/response schemas for reservations, including the not-in-the-past rules."""

import datetime as dt

from pydantic import Field, ValidationInfo, field_validator

from app.models.reservation import ReservationStatus
from app.schemas.base import ApiModel


def _validate_date(v: dt.date) -> dt.date:
    if v < dt.date.today():
        raise ValueError("'Date' must be a valid date and not be in the past.")
    return v


def _validate_time(v: dt.time, info: ValidationInfo) -> dt.time:
    # Times are wall-clock at the restaurant; an offset cannot be stored.
    if v.tzinfo is not None:
        raise ValueError("'Time' must not carry a UTC offset.")
    # Midnight is the unset value and never a bookable slot.
    # The today check only applies once the date parsed; a bad date is already reported.
    booked_date = info.data.get("date")
    if v == dt.time(0, 0) or (
        booked_date == dt.date.today() and v < dt.datetime.now().time()
    ):
        raise ValueError("'Time' must be a valid time and not be in the past.")
    return v


class ReservationCreate(ApiModel):
    """Body for booking a table. Any status sent by the client is ignored."""

    date: dt.date
    time: dt.time
    party_size: int = Field(..., gt=0)

    _check_date = field_validator("date")(_validate_date)
    _check_time = field_validator("time")(_validate_time)


class ReservationUpdate(ReservationCreate):
    """Body for a manager updating a reservation, including its status."""

    status: ReservationStatus


class ReservationRead(ApiModel):
    id: int
    date: dt.date
    time: dt.time
    party_size: int
    status: ReservationStatus
    created_at: dt.datetime
    restaurant_id: int
    reserving_user_id: str
