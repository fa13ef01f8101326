"""Unit tests for the trip-planning hand-off."""

import json
from datetime import date
from urllib.parse import parse_qs, urlparse

import pytest

from voyage.core.exceptions import ValidationError
from voyage.schemas.trip_plan import TripPlanRequest
from voyage.services.trip_plan_service import (
    TripPlanService,
    accommodation_label,
    compose_chat_message,
    compose_email_details,
    interest_labels,
)

# The day the fixture form is filled in
PLANNING_DAY = date(2026, 8, 1)


@pytest.fixture
def trip_form():
    """A completed trip-planning form."""
    return TripPlanRequest(
        full_name="Sofia Marchetti",
        email="sofia.marchetti@gmail.com",
        phone="+39 333 123 4567",
        from_date=date(2026, 9, 3),
        to_date=date(2026, 9, 12),
        travelers=2,
        budget="5000-10000",
        accommodation="luxury",
        interests=["beach", "safari"],
        additional_info="Honeymoon trip",
    )


def test_interest_labels_in_catalogue_order():
    """Labels follow the catalogue order, not the selection order."""
    assert interest_labels(["photography", "safari"]) == "Wildlife Safari, Photography Tours"


def test_interest_labels_empty_and_unknown():
    """No interests, or only unknown ones, read as not specified."""
    assert interest_labels([]) == "Not specified"
    assert interest_labels(["skydiving"]) == "Not specified"
    assert interest_labels(["skydiving", "food"]) == "Food & Cuisine"


def test_accommodation_label():
    assert accommodation_label("mid-range") == "Mid-Range ($100-200/night)"
    assert accommodation_label("") == "Not specified"


def test_compose_chat_message(trip_form):
    """The chat text lists the visitor's details and interests."""
    message = compose_chat_message(trip_form)

    assert message.startswith("*NEW TRIP PLANNING REQUEST*")
    assert "Name: Sofia Marchetti" in message
    assert "From: September 03, 2026" in message
    assert "To: September 12, 2026" in message
    assert "Accommodation: Luxury ($200-400/night)" in message
    assert "Wildlife Safari, Beach & Relaxation" in message
    assert message.endswith("Honeymoon trip")


def test_compose_chat_message_placeholders():
    """Empty optional fields get readable placeholders."""
    message = compose_chat_message(TripPlanRequest(full_name="Ali Hassan", email="ali.hassan@outlook.com"))

    assert "Phone: Not provided" in message
    assert "From: Not selected" in message
    assert "Budget: Not specified" in message
    assert "*Interests:*\nNot specified" in message
    assert message.endswith("None")


def test_whatsapp_link_encodes_message(trip_form):
    """The deep link carries the full message, percent-encoded."""
    link = TripPlanService(email_service=None).whatsapp_link(trip_form, today=PLANNING_DAY)

    parsed = urlparse(link.whatsapp_url)
    assert parsed.netloc == "wa.me"
    assert parsed.path == "/255758241294"
    assert " " not in link.whatsapp_url
    assert "&" not in parsed.query.split("text=", 1)[1]
    assert parse_qs(parsed.query)["text"][0] == link.message


def test_whatsapp_link_requires_name_and_email():
    """Name and email are required for the chat hand-off; dates are not."""
    service = TripPlanService(email_service=None)

    with pytest.raises(ValidationError) as exc_info:
        service.whatsapp_link(TripPlanRequest(full_name="  ", email="ali.hassan@outlook.com"))

    assert exc_info.value.extensions["violations"] == [{"path": "full_name", "message": "Field required"}]


@pytest.mark.asyncio
async def test_submit_sends_trip_plan_emails(trip_form, email_service, email_outbox):
    """Submitting by email notifies the team and the visitor."""
    service = TripPlanService(email_service)

    result = await service.submit(trip_form, today=PLANNING_DAY)

    assert result.success is True
    assert email_outbox.recipients == ["info@infinityvoyagetours.com", "sofia.marchetti@gmail.com"]
    admin_payload = json.loads(email_outbox.requests[0].content)
    assert admin_payload["subject"] == "New Booking: Trip Planning Request - Sofia Marchetti"
    assert "Honeymoon trip" in admin_payload["html"]


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["from_date", "to_date"])
async def test_submit_requires_both_dates(trip_form, email_service, email_outbox, missing):
    """A missing date is rejected before anything is sent."""
    service = TripPlanService(email_service)
    form = trip_form.model_copy(update={missing: None})

    with pytest.raises(ValidationError) as exc_info:
        await service.submit(form, today=PLANNING_DAY)

    assert exc_info.value.extensions["violations"] == [{"path": missing, "message": "Field required"}]
    assert email_outbox.requests == []


def test_email_details_use_not_specified_for_no_interests(trip_form):
    """The emailed details say when no interests were picked."""
    details = compose_email_details(trip_form.model_copy(update={"interests": []}))

    assert details.startswith("Trip Planning Request")
    assert "Interests: Not specified" in details
    assert "- Travelers: 2" in details


@pytest.mark.asyncio
async def test_submit_rejects_trip_starting_in_the_past(trip_form, email_service, email_outbox):
    """A start date before today is refused and nothing is sent."""
    service = TripPlanService(email_service)

    with pytest.raises(ValidationError) as exc_info:
        await service.submit(trip_form, today=date(2026, 9, 4))

    assert exc_info.value.extensions["violations"] == [
        {"path": "from_date", "message": "Must be on or after 2026-09-04"}
    ]
    assert email_outbox.requests == []


@pytest.mark.asyncio
async def test_submit_rejects_trip_ending_before_it_starts(trip_form, email_service, email_outbox):
    """Both date problems are reported together."""
    service = TripPlanService(email_service)
    form = trip_form.model_copy(update={"from_date": date(2020, 6, 10), "to_date": date(2019, 6, 1)})

    with pytest.raises(ValidationError) as exc_info:
        await service.submit(form, today=PLANNING_DAY)

    assert [v["path"] for v in exc_info.value.extensions["violations"]] == ["from_date", "to_date"]
    assert email_outbox.requests == []


@pytest.mark.asyncio
async def test_submit_allows_single_day_trip_starting_today(trip_form, email_service, email_outbox):
    service = TripPlanService(email_service)
    form = trip_form.model_copy(update={"from_date": PLANNING_DAY, "to_date": PLANNING_DAY})

    result = await service.submit(form, today=PLANNING_DAY)

    assert result.success is True
    assert len(email_outbox.requests) == 2


def test_whatsapp_link_checks_chosen_dates(trip_form):
    """Dates are optional for the chat hand-off, but a chosen range must be valid."""
    service = TripPlanService(email_service=None)
    form = trip_form.model_copy(update={"to_date": date(2026, 9, 1)})

    with pytest.raises(ValidationError) as exc_info:
        service.whatsapp_link(form, today=PLANNING_DAY)

    assert exc_info.value.extensions["violations"][0]["path"] == "to_date"


def test_form_accepts_camel_case_fields():
    """The form binds the field names the website sends."""
    form = TripPlanRequest.model_validate({
        "fullName": "Sofia Marchetti",
        "email": "sofia.marchetti@gmail.com",
        "fromDate": "2026-09-03",
        "toDate": "2026-09-12",
        "additionalInfo": "Honeymoon trip",
    })

    assert form.full_name == "Sofia Marchetti"
    assert form.from_date == date(2026, 9, 3)
    assert form.to_date == date(2026, 9, 12)
    assert form.additional_info == "Honeymoon trip"
