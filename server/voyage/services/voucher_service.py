"""PDF booking vouchers."""

import io
import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from reportlab.lib.colors import Color, white
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen.canvas import Canvas
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.exceptions import ConflictError, NotFoundError
from ..core.observability import metrics_collector
from ..models.booking import Booking, BookingStatus, normalize_tracking_code
from .booking_service import GENERAL_INQUIRY, BookingService
from .formatting import format_long_date, format_money
from .status_display import voucher_available

logger = logging.getLogger(__name__)

CONFIRMATION_TITLE = "BOOKING CONFIRMATION VOUCHER"
REQUEST_TITLE = "BOOKING REQUEST VOUCHER"

GOLD = Color(212 / 255, 175 / 255, 55 / 255)
DARK = Color(26 / 255, 26 / 255, 26 / 255)
GRAY = Color(100 / 255, 100 / 255, 100 / 255)
LIGHT_GRAY = Color(200 / 255, 200 / 255, 200 / 255)
PANEL = Color(245 / 255, 245 / 255, 245 / 255)
RULE = Color(220 / 255, 220 / 255, 220 / 255)
GREEN = Color(34 / 255, 197 / 255, 94 / 255)
YELLOW = Color(234 / 255, 179 / 255, 8 / 255)
BLUE = Color(59 / 255, 130 / 255, 246 / 255)
RED = Color(239 / 255, 68 / 255, 68 / 255)

BADGES = {
    BookingStatus.CONFIRMED.value: (GREEN, "CONFIRMED"),
    BookingStatus.COMPLETED.value: (BLUE, "COMPLETED"),
    BookingStatus.CANCELLED.value: (RED, "CANCELLED"),
}
PENDING_BADGE = (YELLOW, "PENDING")

PAGE_WIDTH, PAGE_HEIGHT = A4
LEFT = 25 * mm
VALUE_X = 110 * mm


@dataclass
class VoucherDetails:
    """Booking fields printed on a voucher."""

    tracking_code: str
    customer_name: str
    customer_email: str
    tour_name: str
    travel_date: date
    number_of_guests: int
    status: str
    customer_phone: Optional[str] = None
    special_requests: Optional[str] = None
    total_price: Optional[int] = None
    currency: str = "USD"

    @classmethod
    def from_booking(cls, booking: Booking) -> "VoucherDetails":
        return cls(
            tracking_code=booking.tracking_code,
            customer_name=booking.customer_name,
            customer_email=booking.customer_email,
            customer_phone=booking.customer_phone,
            tour_name=booking.item_title or GENERAL_INQUIRY,
            travel_date=booking.travel_date,
            number_of_guests=booking.number_of_guests,
            special_requests=booking.special_requests,
            status=booking.status,
            total_price=booking.total_price,
            currency=booking.currency,
        )


def voucher_filename(tracking_code: str, confirmation: bool) -> str:
    """Download filename for a voucher."""
    kind = "Confirmation" if confirmation else "Booking"
    return f"Infinity-Voyage-{kind}-{tracking_code}.pdf"


def _top(offset_mm: float) -> float:
    # Layout is measured in millimetres from the top edge
    return PAGE_HEIGHT - offset_mm * mm


def _label_value(pdf: Canvas, y_mm: float, label: str, value: str, value_color=DARK) -> None:
    pdf.setFont("Helvetica", 10)
    pdf.setFillColor(GRAY)
    pdf.drawString(LEFT, _top(y_mm), label)
    pdf.setFont("Helvetica-Bold", 10)
    pdf.setFillColor(value_color)
    pdf.drawString(VALUE_X, _top(y_mm), value)


def render_voucher(details: VoucherDetails, confirmation: bool) -> bytes:
    """
    Render a single-page A4 voucher.

    Args:
        details: Booking fields to print
        confirmation: Title the document as a confirmation rather than a request

    Returns:
        PDF document bytes
    """
    buffer = io.BytesIO()
    # Uncompressed content streams keep the text greppable
    pdf = Canvas(buffer, pagesize=A4, pageCompression=0)
    pdf.setTitle(voucher_filename(details.tracking_code, confirmation))
    pdf.setAuthor(settings.company_name)

    # Header band
    pdf.setFillColor(DARK)
    pdf.rect(0, _top(55), PAGE_WIDTH, 55 * mm, stroke=0, fill=1)
    pdf.setFillColor(GOLD)
    pdf.rect(0, _top(58), PAGE_WIDTH, 3 * mm, stroke=0, fill=1)

    pdf.setFont("Helvetica-Bold", 28)
    pdf.drawCentredString(PAGE_WIDTH / 2, _top(25), "INFINITY VOYAGE")
    pdf.setFont("Helvetica", 10)
    pdf.setFillColor(white)
    pdf.drawCentredString(PAGE_WIDTH / 2, _top(35), "Tanzania Safari & Zanzibar Adventures")
    pdf.setFont("Helvetica", 14)
    pdf.drawCentredString(PAGE_WIDTH / 2, _top(48), CONFIRMATION_TITLE if confirmation else REQUEST_TITLE)

    # Status badge
    badge_color, badge_text = BADGES.get(details.status, PENDING_BADGE)
    pdf.setFillColor(badge_color)
    pdf.roundRect((PAGE_WIDTH - 60 * mm) / 2, _top(75), 60 * mm, 10 * mm, 2 * mm, stroke=0, fill=1)
    pdf.setFont("Helvetica-Bold", 10)
    pdf.setFillColor(white)
    pdf.drawCentredString(PAGE_WIDTH / 2, _top(72), badge_text)

    # Tracking code panel
    pdf.setFillColor(PANEL)
    pdf.roundRect(20 * mm, _top(107), PAGE_WIDTH - 40 * mm, 25 * mm, 3 * mm, stroke=0, fill=1)
    pdf.setFont("Helvetica", 10)
    pdf.setFillColor(GRAY)
    pdf.drawCentredString(PAGE_WIDTH / 2, _top(91), "TRACKING CODE")
    pdf.setFont("Helvetica-Bold", 22)
    pdf.setFillColor(DARK)
    pdf.drawCentredString(PAGE_WIDTH / 2, _top(102), details.tracking_code)

    # Booking details
    y = 120.0
    pdf.setStrokeColor(RULE)
    pdf.setLineWidth(0.5)
    pdf.line(LEFT, _top(y - 5), PAGE_WIDTH - LEFT, _top(y - 5))
    pdf.setFont("Helvetica-Bold", 12)
    pdf.setFillColor(GOLD)
    pdf.drawString(LEFT, _top(y), "BOOKING DETAILS")
    y += 12

    _label_value(pdf, y, "Guest Name:", details.customer_name)
    y += 10
    _label_value(pdf, y, "Email:", details.customer_email)
    y += 10
    if details.customer_phone:
        _label_value(pdf, y, "Phone:", details.customer_phone)
        y += 10

    tour_lines = simpleSplit(details.tour_name, "Helvetica-Bold", 10, 80 * mm)
    pdf.setFont("Helvetica", 10)
    pdf.setFillColor(GRAY)
    pdf.drawString(LEFT, _top(y), "Tour/Safari:")
    pdf.setFont("Helvetica-Bold", 10)
    pdf.setFillColor(DARK)
    for index, line in enumerate(tour_lines):
        pdf.drawString(VALUE_X, _top(y + index * 6), line)
    y += len(tour_lines) * 6 + 4

    _label_value(pdf, y, "Travel Date:", format_long_date(details.travel_date))
    y += 10
    _label_value(pdf, y, "Number of Guests:", str(details.number_of_guests))
    y += 10
    if details.total_price:
        _label_value(pdf, y, "Total Price:", format_money(details.total_price, details.currency), GREEN)
        y += 10

    if details.special_requests:
        y += 5
        pdf.line(LEFT, _top(y - 3), PAGE_WIDTH - LEFT, _top(y - 3))
        y += 5
        pdf.setFont("Helvetica-Bold", 10)
        pdf.setFillColor(GOLD)
        pdf.drawString(LEFT, _top(y), "SPECIAL REQUESTS")
        y += 8
        pdf.setFont("Helvetica", 10)
        pdf.setFillColor(DARK)
        request_lines = simpleSplit(details.special_requests, "Helvetica", 10, PAGE_WIDTH - 50 * mm)
        # Keep clear of the footer band
        max_lines = max(0, int((255 - y) // 5))
        for index, line in enumerate(request_lines[:max_lines]):
            pdf.drawString(LEFT, _top(y + index * 5), line)
        y += min(len(request_lines), max_lines) * 5 + 5

    if details.status == BookingStatus.PENDING.value:
        _notice(pdf, y + 10, 35, (255, 251, 235), YELLOW, "WHAT'S NEXT?", [
            "1. Our team will review your booking request within 24 hours.",
            "2. You will receive a confirmation email once approved.",
            "3. Use your tracking code to check status anytime.",
        ])
    elif details.status == BookingStatus.CONFIRMED.value:
        _notice(pdf, y + 10, 30, (240, 253, 244), GREEN, "YOUR BOOKING IS CONFIRMED!", [
            "Please keep this voucher with you during your trip.",
            "Present this voucher to your guide upon arrival.",
        ])

    # Footer band
    pdf.setFillColor(DARK)
    pdf.rect(0, _top(300), PAGE_WIDTH, 35 * mm, stroke=0, fill=1)
    pdf.setFillColor(GOLD)
    pdf.rect(0, _top(267), PAGE_WIDTH, 2 * mm, stroke=0, fill=1)
    pdf.setFont("Helvetica-Bold", 10)
    pdf.drawCentredString(PAGE_WIDTH / 2, _top(277), "INFINITY VOYAGE TOURS")
    pdf.setFont("Helvetica", 8)
    pdf.setFillColor(LIGHT_GRAY)
    pdf.drawCentredString(PAGE_WIDTH / 2, _top(284), settings.company_address)
    pdf.drawCentredString(PAGE_WIDTH / 2, _top(290), f"{settings.company_phone}  |  {settings.admin_email}")
    pdf.drawCentredString(PAGE_WIDTH / 2, _top(296), settings.company_website)

    pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def _notice(pdf: Canvas, y_mm: float, height_mm: float, fill_rgb, title_color, title: str, lines: list[str]) -> None:
    pdf.setFillColor(Color(*(channel / 255 for channel in fill_rgb)))
    pdf.roundRect(20 * mm, _top(y_mm - 5 + height_mm), PAGE_WIDTH - 40 * mm, height_mm * mm, 3 * mm, stroke=0, fill=1)
    pdf.setFont("Helvetica-Bold", 10)
    pdf.setFillColor(title_color)
    pdf.drawString(LEFT, _top(y_mm + 5), title)
    pdf.setFont("Helvetica", 9)
    pdf.setFillColor(GRAY)
    for index, line in enumerate(lines):
        pdf.drawString(LEFT, _top(y_mm + 15 + index * 7), line)


class VoucherService:
    """Issues vouchers for stored bookings."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.booking_service = BookingService(db)

    async def customer_voucher(self, tracking_code: str) -> tuple[str, bytes]:
        """
        Render the voucher a customer downloads from the tracker.

        Returns:
            (filename, pdf bytes)

        Raises:
            NotFoundError: If no booking has the code
            ConflictError: If the booking is not confirmed or completed
        """
        code = normalize_tracking_code(tracking_code)
        booking = await self.booking_service.get_booking_by_tracking_code(code)
        if booking is None:
            raise NotFoundError(
                resource_type="booking",
                detail=f"No booking with tracking code '{code}' could be found"
            )

        if not voucher_available(booking.status):
            logger.info(
                "Voucher refused for booking status",
                extra={"tracking_code": code, "status": booking.status}
            )
            raise ConflictError(
                detail="A voucher is only available once the booking is confirmed or completed",
                conflicting_resource={"tracking_code": code, "status": booking.status}
            )

        pdf = render_voucher(VoucherDetails.from_booking(booking), confirmation=True)
        metrics_collector.record_voucher_generated(booking.status)
        logger.info("Customer voucher generated", extra={"tracking_code": code, "status": booking.status})
        return voucher_filename(code, confirmation=True), pdf

    async def admin_voucher(self, booking_id: str) -> tuple[str, bytes]:
        """
        Render a voucher for any booking; only confirmed bookings get the confirmation title.

        Raises:
            NotFoundError: If the booking does not exist
        """
        booking = await self.booking_service.get_booking_by_id_or_raise(booking_id)
        confirmation = booking.status == BookingStatus.CONFIRMED.value

        pdf = render_voucher(VoucherDetails.from_booking(booking), confirmation=confirmation)
        metrics_collector.record_voucher_generated(booking.status)
        logger.info(
            "Back-office voucher generated",
            extra={"booking_id": booking_id, "tracking_code": booking.tracking_code, "status": booking.status}
        )
        return voucher_filename(booking.tracking_code, confirmation), pdf
