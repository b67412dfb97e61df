"""ORM model for cities that group restaurants."""

from sqlalchemy import Column, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.models.base import Base


class City(Base):
    """City identified by coordinates and name; (latitude, longitude, name) is unique."""

    __tablename__ = "cities"
    __table_args__ = (
        UniqueConstraint("latitude", "longitude", "name", name="uq_cities_lat_lng_name"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    latitude = Column(Numeric(8, 6), nullable=False)
    longitude = Column(Numeric(9, 6), nullable=False)
    name = Column(String(30), nullable=False)

    restaurants = relationship(
        "Restaurant",
        back_populates="city",
        cascade="all, delete-orphan",
    )
