"""ORM model for table reservations."""

import enum

from sqlalchemy import CheckConstraint, Column, Date, DateTime, Enum, ForeignKey, Integer, String, Time
from sqlalchemy.orm import relationship

from app.models.base import Base, utc_now


class ReservationStatus(str, enum.Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    CANCELED = "Canceled"


class Reservation(Base):
    """
    Reservation made by a registered user at a restaurant.

    New reservations always start as Pending; only the restaurant's manager
    changes the status.
    """

    __tablename__ = "reservations"
    __table_args__ = (
        CheckConstraint("party_size > 0", name="ck_reservations_party_size_positive"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False)
    time = Column(Time, nullable=False)
    party_size = Column(Integer, nullable=False)
    status = Column(
        Enum(
            ReservationStatus,
            name="reservation_status",
            native_enum=False,
            length=16,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=ReservationStatus.PENDING,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    restaurant_id = Column(
        Integer,
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    reserving_user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    restaurant = relationship("Restaurant", back_populates="reservations")
    reserving_user = relationship("User", back_populates="reservations")
