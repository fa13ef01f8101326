"""Unit tests for booking emails."""

import json

import httpx
import pytest

from voyage.core.config import settings
from voyage.core.exceptions import EmailDeliveryError
from voyage.schemas.email import BookingEmailRequest
from voyage.services.email_service import EmailService, admin_email_html, customer_email_html


@pytest.fixture
def booking_email():
    """Notification payload for a booking."""
    return BookingEmailRequest(
        customer_name="Amina Mwakilema",
        customer_email="amina.mwakilema@gmail.com",
        customer_phone="+255 712 345 678",
        tour_name="Zanzibar Beach Escape",
        travel_date="August 14, 2026",
        number_of_guests=1,
        special_requests="Sea-view room\nLate check-in",
    )


def test_booking_email_request_accepts_camel_case():
    """The function payload uses camelCase keys."""
    request = BookingEmailRequest.model_validate({
        "customerName": "Tom Becker",
        "customerEmail": "tbecker@outlook.com",
        "tourName": "Stone Town Walking Tour",
        "travelDate": "May 02, 2026",
        "numberOfGuests": 2,
    })

    assert request.customer_name == "Tom Becker"
    assert request.number_of_guests == 2


def test_admin_email_html(booking_email):
    """The team sees all details; special requests keep their line breaks."""
    html = admin_email_html(booking_email)

    assert "Amina Mwakilema" in html
    assert "mailto:amina.mwakilema@gmail.com" in html
    assert "Sea-view room<br>Late check-in" in html


def test_admin_email_html_escapes_input(booking_email):
    """Customer input is escaped."""
    html = admin_email_html(booking_email.model_copy(update={"customer_name": "<script>x</script>"}))

    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_customer_email_html_guest_wording(booking_email):
    """One guest reads as a person, more as people."""
    assert "1 person" in customer_email_html(booking_email)
    assert "3 people" in customer_email_html(booking_email.model_copy(update={"number_of_guests": 3}))
    assert "Jambo Amina Mwakilema!" in customer_email_html(booking_email)


@pytest.mark.asyncio
async def test_send_booking_emails(booking_email, email_service, email_outbox):
    """Both emails go out through the provider API."""
    result = await email_service.send_booking_emails(booking_email)

    assert result.success is True
    assert result.message == "Emails sent successfully"
    assert result.admin_sent is True
    assert result.customer_sent is True
    assert email_outbox.recipients == [settings.admin_email, "amina.mwakilema@gmail.com"]

    request = email_outbox.requests[1]
    assert request.headers["Authorization"] == f"Bearer {settings.resend_api_key}"
    payload = json.loads(request.content)
    assert payload["from"] == settings.email_from
    assert payload["subject"] == f"Booking Received - Zanzibar Beach Escape | {settings.company_name}"


@pytest.mark.asyncio
async def test_rejected_email_does_not_fail(booking_email, email_service, email_outbox):
    """A non-2xx answer is reported but the call still succeeds."""
    email_outbox.status_code = 422

    result = await email_service.send_booking_emails(booking_email)

    assert result.success is True
    assert result.admin_sent is False
    assert result.customer_sent is False
    assert result.message != "Emails sent successfully"
    assert len(email_outbox.requests) == 2


@pytest.mark.asyncio
async def test_unreachable_provider_raises(booking_email):
    """A transport failure becomes an email delivery error."""
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    service = EmailService(transport=httpx.MockTransport(refuse))

    with pytest.raises(EmailDeliveryError) as exc_info:
        await service.send_booking_emails(booking_email)

    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_missing_api_key_raises(booking_email, email_service, email_outbox, monkeypatch):
    """Without an API key nothing is sent."""
    monkeypatch.setattr(settings, "resend_api_key", "")

    with pytest.raises(EmailDeliveryError) as exc_info:
        await email_service.send_booking_emails(booking_email)

    assert exc_info.value.status_code == 502
    assert "RESEND_API_KEY" in exc_info.value.detail
    assert email_outbox.requests == []


@pytest.mark.asyncio
async def test_notify_in_background_swallows_delivery_errors(booking_email, email_service, email_outbox, monkeypatch):
    """Background notifications never raise."""
    monkeypatch.setattr(settings, "resend_api_key", "")

    await email_service.notify_in_background(booking_email)

    assert email_outbox.requests == []
