"""ORM model for restaurants owned by a manager within a city."""

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.models.base import Base


class Restaurant(Base):
    """Restaurant; (city_id, name, street_address) is unique."""

    __tablename__ = "restaurants"
    __table_args__ = (
        UniqueConstraint(
            "city_id", "name", "street_address", name="uq_restaurants_city_name_street"
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(30), nullable=False)
    description = Column(String(300), nullable=False)
    street_address = Column(String(100), nullable=False)
    website_url = Column(String(2048), nullable=False)
    city_id = Column(
        Integer,
        ForeignKey("cities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    restaurant_manager_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    city = relationship("City", back_populates="restaurants")
    restaurant_manager = relationship("User", back_populates="restaurants")
    reservations = relationship(
        "Reservation",
        back_populates="restaurant",
        cascade="all, delete-orphan",
    )
