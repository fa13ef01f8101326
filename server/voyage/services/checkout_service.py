"""Cart checkout: one booking per cart item, or a messaging hand-off for the whole cart."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Union
from urllib.parse import quote

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.exceptions import ValidationError
from ..core.observability import metrics_collector
from ..models.activity import Activity
from ..models.booking import Booking, BookingStatus
from ..models.tour import Tour
from ..schemas.booking import CartItem, CartLinkRequest, CheckoutRequest
from .booking_service import BookingService
from .formatting import format_long_date, format_money

logger = logging.getLogger(__name__)

PRICE_ON_REQUEST = "Price on request"


@dataclass
class CartLine:
    """A cart item resolved against the catalog."""

    item: Union[Tour, Activity]
    item_type: str
    quantity: int

    @property
    def line_total(self) -> Optional[int]:
        if self.item.price is None:
            return None
        return self.item.price * self.quantity

    @property
    def currency(self) -> str:
        return self.item.currency


def cart_totals(lines: list[CartLine]) -> dict[str, int]:
    """Sum priced lines per currency, in order of first appearance."""
    totals: dict[str, int] = {}
    for line in lines:
        if line.line_total is not None:
            totals[line.currency] = totals.get(line.currency, 0) + line.line_total
    return totals


def itemized_requests(line: CartLine, nationality: Optional[str], notes: Optional[str]) -> str:
    """Special requests stored on a checkout booking."""
    parts = [f"{line.item.title} (Qty: {line.quantity})"]
    if nationality and nationality.strip():
        parts.append(f"Nationality: {nationality.strip()}")
    if notes and notes.strip():
        parts.append(f"Notes: {notes.strip()}")
    return " | ".join(parts)


def compose_cart_message(lines: list[CartLine], request: CartLinkRequest) -> str:
    """Text pre-filled into the messaging chat for a whole cart."""
    item_rows = [
        f"• {line.item.title} (x{line.quantity}) - "
        + (format_money(line.line_total, line.currency) if line.line_total is not None else PRICE_ON_REQUEST)
        for line in lines
    ]
    totals = cart_totals(lines)
    total_text = " + ".join(format_money(amount, currency) for currency, amount in totals.items())

    return "\n".join([
        "*New Booking Request*",
        "",
        "*Tours Selected:*",
        *item_rows,
        "",
        f"*Total: {total_text or PRICE_ON_REQUEST}*",
        "",
        "*Customer Details:*",
        f"Name: {request.customer_name or 'Not provided'}",
        f"Email: {request.customer_email or 'Not provided'}",
        f"Phone: {request.customer_phone or 'Not provided'}",
        f"Nationality: {request.nationality or 'Not provided'}",
        f"Travel Date: {format_long_date(request.travel_date) if request.travel_date else 'Not specified'}",
        f"Travelers: {request.number_of_guests}",
        "",
        "*Special Requests:*",
        request.special_requests or "None",
        "",
        "Please confirm availability and send me a quote!",
    ])


def _require_items(items: list[CartItem]) -> None:
    if not items:
        raise ValidationError(
            detail="Your cart is empty",
            violations=[{"path": "items", "message": "Add at least one tour or activity"}]
        )


class CheckoutService:
    """Turns a cart into booking requests or a chat link."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.bookings = BookingService(db)

    async def _resolve_lines(self, items: list[CartItem]) -> list[CartLine]:
        lines = []
        for cart_item in items:
            if cart_item.item_type == "activity":
                _, item = await self.bookings.resolve_item(None, cart_item.item_id)
            else:
                item, _ = await self.bookings.resolve_item(cart_item.item_id, None)
            lines.append(CartLine(item=item, item_type=cart_item.item_type, quantity=cart_item.quantity))
        return lines

    async def checkout(
        self, request: CheckoutRequest, today: Optional[date] = None
    ) -> list[tuple[Booking, CartLine]]:
        """
        Create one ``pending`` booking per cart item in a single transaction.

        Each booking is priced at the item price times its quantity, and its
        special requests list the item, the quantity, the nationality and the
        notes.

        Raises:
            ValidationError: If the cart is empty or the travel date is in the past
            NotFoundError: If a cart item no longer exists
        """
        _require_items(request.items)
        self.bookings.check_travel_date(request.travel_date, today)
        lines = await self._resolve_lines(request.items)

        created = []
        for line in lines:
            booking = Booking(
                tracking_code=await self.bookings.unused_tracking_code(),
                customer_name=request.customer_name.strip(),
                customer_email=str(request.customer_email),
                customer_phone=request.customer_phone.strip(),
                travel_date=request.travel_date,
                number_of_guests=request.number_of_guests,
                special_requests=itemized_requests(line, request.nationality, request.special_requests),
                total_price=line.line_total,
                currency=line.currency,
                status=BookingStatus.PENDING.value,
                tour_id=line.item.id if line.item_type == "tour" else None,
                activity_id=line.item.id if line.item_type == "activity" else None,
            )
            self.db.add(booking)
            # Flush so the next code check sees this one
            await self.db.flush()
            created.append((booking.id, line))

        await self.db.commit()

        results = []
        for booking_id, line in created:
            booking = await self.bookings.get_booking_by_id(booking_id)
            metrics_collector.record_booking_created(line.item_type)
            results.append((booking, line))

        logger.info(
            "Cart checked out",
            extra={
                "items": len(results),
                "tracking_codes": [booking.tracking_code for booking, _ in results],
            }
        )
        return results

    async def whatsapp_link(self, request: CartLinkRequest) -> tuple[str, str]:
        """
        Compose the chat message and deep link for the whole cart; nothing is stored.

        Raises:
            ValidationError: If the cart is empty
            NotFoundError: If a cart item no longer exists
        """
        _require_items(request.items)
        lines = await self._resolve_lines(request.items)

        message = compose_cart_message(lines, request)
        url = f"https://wa.me/{settings.whatsapp_number}?text={quote(message, safe='')}"

        logger.info("Cart chat link composed", extra={"items": len(lines)})
        return message, url
