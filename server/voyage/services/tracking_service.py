"""Customer self-service booking lookups."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ValidationError
from ..core.observability import metrics_collector
from ..models.booking import Booking, normalize_tracking_code
from ..schemas.booking import TrackBookingResponse, TrackedBooking
from .booking_service import BookingService
from .status_display import status_presentation, voucher_available

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Booking Not Found"


def tracked_projection(booking: Booking) -> TrackedBooking:
    """Project a booking onto the fields shown by the public tracker."""
    return TrackedBooking(
        tracking_code=booking.tracking_code,
        customer_name=booking.customer_name,
        customer_email=booking.customer_email,
        customer_phone=booking.customer_phone,
        travel_date=booking.travel_date,
        number_of_guests=booking.number_of_guests,
        special_requests=booking.special_requests,
        status=booking.status,
        created_at=booking.created_at,
        tour_id=str(booking.tour_id) if booking.tour_id else None,
    )


class TrackingService:
    """Looks bookings up by tracking code for customers."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.booking_service = BookingService(db)

    async def track(self, tracking_code: str) -> TrackBookingResponse:
        """
        Find a booking by tracking code, ignoring case and surrounding spaces.

        An unknown code is a normal result with ``found`` false, never an error.

        Raises:
            ValidationError: If the code is blank
        """
        code = normalize_tracking_code(tracking_code)
        if not code:
            raise ValidationError(
                detail="Please enter a tracking code",
                violations=[{"path": "tracking_code", "message": "Must not be blank"}]
            )

        booking = await self.booking_service.get_booking_by_tracking_code(code)
        metrics_collector.record_tracking_lookup(found=booking is not None)

        if booking is None:
            logger.info("Tracking lookup missed", extra={"tracking_code": code})
            return TrackBookingResponse(found=False, tracking_code=code, message=NOT_FOUND_MESSAGE)

        logger.info(
            "Tracking lookup matched",
            extra={"tracking_code": code, "status": booking.status}
        )
        return TrackBookingResponse(
            found=True,
            tracking_code=code,
            booking=tracked_projection(booking),
            status_display=status_presentation(booking.status),
            voucher_available=voucher_available(booking.status),
        )
