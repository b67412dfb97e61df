"""Request/response schemas for cities."""

from decimal import ROUND_HALF_UP, Decimal

from pydantic import Field, field_validator

from app.schemas.base import ApiModel

# Coordinates are stored as NUMERIC with six decimal places.
COORDINATE_STEP = Decimal("0.000001")


def round_coordinate(value: Decimal) -> Decimal:
    """Round to the six decimal places the cities table stores."""
    return value.quantize(COORDINATE_STEP, rounding=ROUND_HALF_UP)


class CityWrite(ApiModel):
    """Body for creating or replacing a city. Extra decimal places are rounded, not rejected."""

    latitude: Decimal = Field(..., ge=-90, le=90)
    longitude: Decimal = Field(..., ge=-180, le=180)
    name: str = Field(..., min_length=1, max_length=30)

    _round_latitude = field_validator("latitude")(round_coordinate)
    _round_longitude = field_validator("longitude")(round_coordinate)


class CityRead(ApiModel):
    id: int
    latitude: float
    longitude: float
    name: str
