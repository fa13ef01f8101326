"""Unit tests for customer booking tracking."""

import pytest

from voyage.core.exceptions import ValidationError
from voyage.services.tracking_service import TrackingService


@pytest.mark.asyncio
async def test_track_ignores_case_and_spaces(test_session, stored_booking):
    """A lower-case code with stray spaces finds the stored booking."""
    await stored_booking("IV-TEST01", status="confirmed", special_requests="Airport pickup")
    service = TrackingService(test_session)

    result = await service.track("  iv-test01 ")

    assert result.found is True
    assert result.tracking_code == "IV-TEST01"
    assert result.booking.tracking_code == "IV-TEST01"
    assert result.booking.customer_name == "Jonas Lindqvist"
    assert result.booking.number_of_guests == 4
    assert result.booking.special_requests == "Airport pickup"
    assert result.status_display.label == "Confirmed"
    assert result.voucher_available is True


@pytest.mark.asyncio
async def test_track_unknown_code(test_session):
    """Unknown codes are a normal, not-found result."""
    service = TrackingService(test_session)

    result = await service.track("iv-missing")

    assert result.found is False
    assert result.tracking_code == "IV-MISSING"
    assert result.message == "Booking Not Found"
    assert result.booking is None
    assert result.voucher_available is False


@pytest.mark.asyncio
async def test_track_pending_booking_has_no_voucher(test_session, stored_booking):
    """Pending bookings are shown but offer no voucher."""
    await stored_booking("IV-PEND01")
    service = TrackingService(test_session)

    result = await service.track("IV-PEND01")

    assert result.found is True
    assert result.status_display.label == "Pending Review"
    assert result.voucher_available is False


@pytest.mark.asyncio
async def test_track_unknown_status_shown_as_pending(test_session, stored_booking):
    """A status outside the known set is presented like pending."""
    await stored_booking("IV-ODD001", status="on-hold")
    service = TrackingService(test_session)

    result = await service.track("IV-ODD001")

    assert result.booking.status == "on-hold"
    assert result.status_display.label == "Pending Review"
    assert result.voucher_available is False


@pytest.mark.asyncio
@pytest.mark.parametrize("code", ["", "   "])
async def test_track_blank_code_rejected(test_session, code):
    """Blank codes never reach the database."""
    service = TrackingService(test_session)

    with pytest.raises(ValidationError):
        await service.track(code)
