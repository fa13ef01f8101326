"""Trip-planning form hand-off: messaging deep link or email."""

import logging
from datetime import date
from typing import Optional
from urllib.parse import quote

from ..core.config import settings
from ..core.exceptions import ValidationError
from ..core.observability import metrics_collector
from ..schemas.email import BookingEmailRequest
from ..schemas.trip_plan import TripPlanLink, TripPlanRequest, TripPlanSubmitted
from .email_service import EmailService
from .formatting import format_long_date

logger = logging.getLogger(__name__)

TRIP_PLANNING_TOUR_NAME = "Trip Planning Request"

INTERESTS = {
    "safari": "Wildlife Safari",
    "beach": "Beach & Relaxation",
    "culture": "Culture & History",
    "adventure": "Adventure Activities",
    "food": "Food & Cuisine",
    "photography": "Photography Tours",
}

ACCOMMODATION_TYPES = {
    "budget": "Budget ($50-100/night)",
    "mid-range": "Mid-Range ($100-200/night)",
    "luxury": "Luxury ($200-400/night)",
    "ultra-luxury": "Ultra Luxury ($400+/night)",
}

NOT_SPECIFIED = "Not specified"


def interest_labels(interest_ids: list[str]) -> str:
    """Selected interests as labels in catalogue order; unknown ids are ignored."""
    selected = set(interest_ids)
    labels = [label for key, label in INTERESTS.items() if key in selected]
    return ", ".join(labels) or NOT_SPECIFIED


def accommodation_label(value: str) -> str:
    return ACCOMMODATION_TYPES.get(value, NOT_SPECIFIED)


def _date_or_placeholder(value) -> str:
    return format_long_date(value) if value else "Not selected"


def compose_chat_message(form: TripPlanRequest) -> str:
    """Text pre-filled into the messaging chat (uses *bold* markup)."""
    return "\n".join([
        "*NEW TRIP PLANNING REQUEST*",
        "",
        "*Personal Information:*",
        f"Name: {form.full_name}",
        f"Email: {form.email}",
        f"Phone: {form.phone or 'Not provided'}",
        "",
        "*Trip Details:*",
        f"From: {_date_or_placeholder(form.from_date)}",
        f"To: {_date_or_placeholder(form.to_date)}",
        f"Travelers: {form.travelers}",
        f"Budget: {form.budget or NOT_SPECIFIED}",
        f"Accommodation: {accommodation_label(form.accommodation)}",
        "",
        "*Interests:*",
        interest_labels(form.interests),
        "",
        "*Additional Notes:*",
        form.additional_info or "None",
    ])


def compose_email_details(form: TripPlanRequest) -> str:
    """Plain-text trip details sent as the email's special requests."""
    return "\n".join([
        TRIP_PLANNING_TOUR_NAME,
        "",
        "Personal Information:",
        f"- Name: {form.full_name}",
        f"- Email: {form.email}",
        f"- Phone: {form.phone or 'Not provided'}",
        "",
        "Trip Details:",
        f"- From: {_date_or_placeholder(form.from_date)}",
        f"- To: {_date_or_placeholder(form.to_date)}",
        f"- Travelers: {form.travelers}",
        f"- Budget: {form.budget or NOT_SPECIFIED}",
        f"- Accommodation: {accommodation_label(form.accommodation)}",
        "",
        f"Interests: {interest_labels(form.interests)}",
        "",
        f"Additional Notes: {form.additional_info or 'None'}",
    ])


def _require(form: TripPlanRequest, fields: tuple[str, ...]) -> None:
    missing = [
        field for field in fields
        if getattr(form, field) is None or (isinstance(getattr(form, field), str) and not getattr(form, field).strip())
    ]
    if missing:
        raise ValidationError(
            detail="Please fill in all required fields",
            violations=[{"path": field, "message": "Field required"} for field in missing]
        )


def _check_dates(form: TripPlanRequest, today: Optional[date]) -> None:
    """Trips start today or later and end on or after their first day."""
    today = today or date.today()
    violations = []
    if form.from_date is not None and form.from_date < today:
        violations.append({"path": "from_date", "message": f"Must be on or after {today.isoformat()}"})
    if form.from_date is not None and form.to_date is not None and form.to_date < form.from_date:
        violations.append({"path": "to_date", "message": "Must be on or after from_date"})
    if violations:
        raise ValidationError(detail="Please choose valid trip dates", violations=violations)


class TripPlanService:
    """Turns a trip-planning form into a chat link or a booking email."""

    def __init__(self, email_service: EmailService):
        self.email_service = email_service

    def whatsapp_link(self, form: TripPlanRequest, today: Optional[date] = None) -> TripPlanLink:
        """
        Compose the chat deep link. Nothing is stored or sent.

        Raises:
            ValidationError: If name or email is missing, or a chosen date is out of range
        """
        _require(form, ("full_name", "email"))
        _check_dates(form, today)

        message = compose_chat_message(form)
        url = f"https://wa.me/{settings.whatsapp_number}?text={quote(message, safe='')}"

        metrics_collector.record_trip_plan("whatsapp")
        logger.info("Trip plan chat link composed", extra={"interests": len(form.interests)})
        return TripPlanLink(message=message, whatsapp_url=url)

    async def submit(self, form: TripPlanRequest, today: Optional[date] = None) -> TripPlanSubmitted:
        """
        Email the trip plan to the team and a confirmation to the visitor.

        Both dates are checked before any network call: the trip cannot start
        before today or end before it starts.

        Raises:
            ValidationError: If name, email or either date is missing or out of range
            EmailDeliveryError: If the email step fails; its detail is passed through unchanged
        """
        _require(form, ("full_name", "email", "from_date", "to_date"))
        _check_dates(form, today)

        payload = BookingEmailRequest(
            customer_name=form.full_name.strip(),
            customer_email=form.email.strip(),
            customer_phone=form.phone or "Not provided",
            tour_name=TRIP_PLANNING_TOUR_NAME,
            travel_date=format_long_date(form.from_date),
            number_of_guests=form.travelers,
            special_requests=compose_email_details(form),
        )

        await self.email_service.send_booking_emails(payload)

        metrics_collector.record_trip_plan("email")
        logger.info(
            "Trip plan submitted by email",
            extra={"from_date": form.from_date.isoformat(), "to_date": form.to_date.isoformat()}
        )
        return TripPlanSubmitted(
            message="Request submitted! We'll contact you via email with a personalized itinerary."
        )
