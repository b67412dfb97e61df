"""Request/response schemas for restaurants."""

import re

from pydantic import Field, field_validator

from app.schemas.base import ApiModel

# Optional scheme and www., a host of at least two labels, optional path.
WEBSITE_URL_PATTERN = re.compile(
    r"^(https?://)?(www\.)?[A-Za-z0-9-]{2,}(\.[A-Za-z0-9-]{2,})+(:\d{1,5})?(/\S*)?$"
)


class RestaurantWrite(ApiModel):
    """Body for creating or replacing a restaurant."""

    name: str = Field(..., min_length=1, max_length=30)
    description: str = Field(..., min_length=1, max_length=300)
    street_address: str = Field(..., min_length=1, max_length=100)
    website_url: str = Field(..., max_length=2048)

    @field_validator("website_url")
    @classmethod
    def validate_website_url(cls, v: str) -> str:
        if not WEBSITE_URL_PATTERN.fullmatch(v):
            raise ValueError("'Website Url' is not in the correct format.")
        return v


class RestaurantRead(ApiModel):
    id: int
    name: str
    description: str
    street_address: str
    website_url: str
    city_id: int
    restaurant_manager_id: str
