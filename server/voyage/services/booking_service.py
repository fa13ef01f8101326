"""Booking service for business logic operations."""

import logging
import secrets
import string
from datetime import date
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..core.observability import metrics_collector
from ..models.activity import Activity
from ..models.booking import Booking, BookingStatus
from ..models.tour import Tour
from ..schemas.booking import CreateBookingRequest, SearchBookingsRequest, UpdateBookingStatusRequest
from ..schemas.email import BookingEmailRequest
from .formatting import format_long_date
from .identifiers import parse_uuid

logger = logging.getLogger(__name__)

TRACKING_CODE_PREFIX = "IV-"
TRACKING_CODE_LENGTH = 6
MAX_CODE_ATTEMPTS = 10

GENERAL_INQUIRY = "General Inquiry"
DEFAULT_CURRENCY = "USD"


class BookingService:
    """Service for booking-related operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _generate_tracking_code(self) -> str:
        """Generate a random tracking code such as ``IV-7K2Q9B``."""
        alphabet = string.ascii_uppercase + string.digits
        suffix = ''.join(secrets.choice(alphabet) for _ in range(TRACKING_CODE_LENGTH))
        return f"{TRACKING_CODE_PREFIX}{suffix}"

    async def unused_tracking_code(self) -> str:
        for _ in range(MAX_CODE_ATTEMPTS):
            code = self._generate_tracking_code()
            stmt = select(Booking.id).where(Booking.tracking_code == code)
            if (await self.db.execute(stmt)).first() is None:
                return code

        logger.error("Could not allocate an unused tracking code", extra={"attempts": MAX_CODE_ATTEMPTS})
        raise ConflictError(detail="Could not allocate a tracking code, please retry")

    def _query(self):
        return (
            select(Booking)
            .options(selectinload(Booking.tour), selectinload(Booking.activity))
            .execution_options(populate_existing=True)
        )

    def check_travel_date(self, travel_date: date, today: Optional[date]) -> None:
        today = today or date.today()
        if travel_date < today:
            raise ValidationError(
                detail="Travel date cannot be in the past",
                violations=[{"path": "travel_date", "message": f"Must be on or after {today.isoformat()}"}]
            )

    async def resolve_item(self, tour_id: Optional[str], activity_id: Optional[str]):
        """Load the referenced tour and activity; either may be absent."""
        tour = None
        activity = None
        if tour_id:
            tour = await self.db.get(Tour, parse_uuid(tour_id, "tour"))
            if tour is None:
                raise NotFoundError(resource_type="tour", resource_id=tour_id)
        if activity_id:
            activity = await self.db.get(Activity, parse_uuid(activity_id, "activity"))
            if activity is None:
                raise NotFoundError(resource_type="activity", resource_id=activity_id)
        return tour, activity

    async def create_booking(self, request: CreateBookingRequest, today: Optional[date] = None) -> Booking:
        """
        Store a booking request with a fresh tracking code and status ``pending``.

        Args:
            request: Booking submission
            today: Reference date for the past-date check (defaults to today)

        Returns:
            Created booking with its tour/activity loaded

        Raises:
            ValidationError: If the travel date is in the past
            NotFoundError: If the referenced tour or activity does not exist
        """
        self.check_travel_date(request.travel_date, today)
        tour, activity = await self.resolve_item(request.tour_id, request.activity_id)

        # Estimate from the per-person price; the final price is set by the team
        item = tour or activity
        total_price = None
        if item is not None and item.price is not None:
            total_price = item.price * request.number_of_guests

        booking = Booking(
            tracking_code=await self.unused_tracking_code(),
            customer_name=request.customer_name.strip(),
            customer_email=str(request.customer_email),
            customer_phone=request.customer_phone or None,
            travel_date=request.travel_date,
            number_of_guests=request.number_of_guests,
            special_requests=request.special_requests or None,
            total_price=total_price,
            currency=item.currency if item is not None else DEFAULT_CURRENCY,
            status=BookingStatus.PENDING.value,
            tour_id=tour.id if tour else None,
            activity_id=activity.id if activity else None,
        )

        self.db.add(booking)
        await self.db.commit()

        booking = await self.get_booking_by_id(booking.id)

        item_type = "tour" if tour else "activity" if activity else "inquiry"
        metrics_collector.record_booking_created(item_type)
        logger.info(
            "Booking created successfully",
            extra={
                "booking_id": str(booking.id),
                "tracking_code": booking.tracking_code,
                "item_type": item_type,
                "guests": booking.number_of_guests,
            }
        )

        return booking

    async def get_booking_by_id(self, booking_id) -> Optional[Booking]:
        """Get booking by ID with its tour and activity loaded."""
        result = await self.db.execute(self._query().where(Booking.id == booking_id))
        return result.scalar_one_or_none()

    async def get_booking_by_id_or_raise(self, booking_id: str) -> Booking:
        """
        Get booking by ID or raise NotFoundError.

        Raises:
            NotFoundError: If the ID is malformed or unknown
        """
        booking = await self.get_booking_by_id(parse_uuid(booking_id, "booking"))
        if not booking:
            logger.warning("Booking not found", extra={"booking_id": booking_id})
            raise NotFoundError(resource_type="booking", resource_id=booking_id)
        return booking

    async def get_booking_by_tracking_code(self, normalized_code: str) -> Optional[Booking]:
        """
        Look a booking up by its normalized (trimmed, upper-case) tracking code.

        Stored codes are upper-case, so this is a plain indexed equality match.
        """
        result = await self.db.execute(self._query().where(Booking.tracking_code == normalized_code))
        return result.scalar_one_or_none()

    async def search_bookings(self, request: SearchBookingsRequest) -> list[Booking]:
        """List bookings newest first, filtered by customer name/email and status."""
        stmt = self._query()

        if request.search and request.search.strip():
            pattern = f"%{request.search.strip()}%"
            stmt = stmt.where(or_(
                Booking.customer_name.ilike(pattern),
                Booking.customer_email.ilike(pattern),
            ))

        if request.status != "all":
            stmt = stmt.where(Booking.status == request.status)

        stmt = stmt.order_by(Booking.created_at.desc(), Booking.id).limit(request.limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def update_status(self, request: UpdateBookingStatusRequest) -> Booking:
        """
        Set a booking's status.

        Any known status may follow any other; concurrent updates are
        last-write-wins.
        """
        booking = await self.get_booking_by_id_or_raise(request.id)
        previous = booking.status
        booking.status = request.status.value

        await self.db.commit()
        booking = await self.get_booking_by_id(booking.id)

        metrics_collector.record_status_change(booking.status)
        logger.info(
            "Booking status updated",
            extra={
                "booking_id": request.id,
                "tracking_code": booking.tracking_code,
                "from_status": previous,
                "to_status": booking.status,
            }
        )
        return booking

    async def delete_booking(self, booking_id: str, confirm: bool) -> None:
        """
        Hard-delete a booking.

        Raises:
            ValidationError: If ``confirm`` is not set
            NotFoundError: If the booking does not exist
        """
        if not confirm:
            raise ValidationError(
                detail="Deleting a booking is permanent and must be confirmed",
                violations=[{"path": "confirm", "message": "Must be true"}]
            )

        booking = await self.get_booking_by_id_or_raise(booking_id)
        await self.db.delete(booking)
        await self.db.commit()

        logger.info(
            "Booking deleted",
            extra={"booking_id": booking_id, "tracking_code": booking.tracking_code}
        )


def booking_notification(booking: Booking) -> BookingEmailRequest:
    """Build the email notification payload for a freshly created booking."""
    return BookingEmailRequest(
        customer_name=booking.customer_name,
        customer_email=booking.customer_email,
        customer_phone=booking.customer_phone or "Not provided",
        tour_name=booking.item_title or GENERAL_INQUIRY,
        travel_date=format_long_date(booking.travel_date),
        number_of_guests=booking.number_of_guests,
        special_requests=booking.special_requests or "None",
    )
