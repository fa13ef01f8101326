"""Booking model definition."""

from datetime import date, datetime
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from ..core.database import Base

if TYPE_CHECKING:
    from .activity import Activity
    from .tour import Tour


class BookingStatus(str, Enum):
    """Status values the back-office works with.

    The column itself is free text; rows may carry values outside this set.
    """
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


def normalize_tracking_code(code: str) -> str:
    """Canonical stored/compared form of a tracking code."""
    return code.strip().upper()


class Booking(Base):
    """Customer booking request for a tour, an activity or a general inquiry."""

    __tablename__ = "bookings"

    # Primary key
    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    # Customer-facing lookup key, always stored upper-case
    tracking_code: Mapped[str] = mapped_column(String(32), nullable=False, unique=True, index=True)

    # Customer details
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    customer_phone: Mapped[str | None] = mapped_column(String(64), nullable=True)

    # Trip details
    travel_date: Mapped[date] = mapped_column(Date, nullable=False)
    number_of_guests: Mapped[int] = mapped_column(Integer, nullable=False)
    special_requests: Mapped[str | None] = mapped_column(Text, nullable=True)
    total_price: Mapped[int | None] = mapped_column(Integer, nullable=True)
    # Currency of total_price, copied from the booked item
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=BookingStatus.PENDING.value,
        index=True
    )

    # What was booked (both empty for general inquiries)
    tour_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("tours.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )
    activity_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("activities.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        nullable=False,
        server_default=func.now(),
        index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        nullable=False,
        server_default=func.now(),
        onupdate=func.now()
    )

    # Constraints
    __table_args__ = (
        CheckConstraint("number_of_guests > 0", name="ck_booking_guests_positive"),
        CheckConstraint("length(tracking_code) > 0", name="ck_booking_tracking_code_not_empty"),
        CheckConstraint("total_price IS NULL OR total_price >= 0", name="ck_booking_total_price_non_negative"),
    )

    # Relationships
    tour: Mapped["Tour | None"] = relationship("Tour")
    activity: Mapped["Activity | None"] = relationship("Activity")

    @validates("tracking_code")
    def _normalize_tracking_code(self, key: str, value: str) -> str:
        return normalize_tracking_code(value)

    @property
    def item_title(self) -> str | None:
        """Title of the booked tour or activity, if one is linked and loaded."""
        if self.tour is not None:
            return self.tour.title
        if self.activity is not None:
            return self.activity.title
        return None

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, tracking_code='{self.tracking_code}', "
            f"guests={self.number_of_guests}, status={self.status})>"
        )
