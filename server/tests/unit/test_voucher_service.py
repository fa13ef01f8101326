"""Unit tests for PDF vouchers."""

from datetime import date
from uuid import uuid4

import pytest

from voyage.core.exceptions import ConflictError, NotFoundError
from voyage.services.voucher_service import VoucherDetails, VoucherService, render_voucher, voucher_filename


def _details(**overrides) -> VoucherDetails:
    fields = {
        "tracking_code": "IV-TEST01",
        "customer_name": "Jonas Lindqvist",
        "customer_email": "jonas.lindqvist@outlook.com",
        "tour_name": "Zanzibar Beach Escape",
        "travel_date": date(2026, 8, 14),
        "number_of_guests": 2,
        "status": "confirmed",
    }
    fields.update(overrides)
    return VoucherDetails(**fields)


def test_render_voucher_is_a_pdf_with_booking_details():
    """The rendered document carries the code, guests and date."""
    pdf = render_voucher(_details(total_price=120000), confirmation=True)

    assert pdf.startswith(b"%PDF")
    assert b"(IV-TEST01)" in pdf
    assert b"(2)" in pdf
    assert b"(August 14, 2026)" in pdf
    assert b"(BOOKING CONFIRMATION VOUCHER)" in pdf
    assert b"($1,200)" in pdf


def test_render_request_voucher_title():
    """Non-confirmation vouchers are titled as requests."""
    pdf = render_voucher(_details(status="pending"), confirmation=False)

    assert b"(BOOKING REQUEST VOUCHER)" in pdf
    assert b"(PENDING)" in pdf


def test_render_voucher_with_long_special_requests():
    """Very long notes are wrapped and clipped to the page."""
    pdf = render_voucher(_details(special_requests="Please arrange a birthday cake. " * 200), confirmation=True)

    assert pdf.startswith(b"%PDF")
    assert b"(SPECIAL REQUESTS)" in pdf
    assert b"(INFINITY VOYAGE TOURS)" in pdf


def test_voucher_filename():
    """Filenames say whether the voucher is a confirmation."""
    assert voucher_filename("IV-TEST01", True) == "Infinity-Voyage-Confirmation-IV-TEST01.pdf"
    assert voucher_filename("IV-TEST01", False) == "Infinity-Voyage-Booking-IV-TEST01.pdf"


@pytest.mark.asyncio
async def test_customer_voucher_for_confirmed_booking(test_session, stored_booking):
    """Customers download a confirmation for confirmed bookings."""
    await stored_booking("IV-TEST01", status="confirmed", number_of_guests=4)
    service = VoucherService(test_session)

    filename, pdf = await service.customer_voucher("iv-test01")

    assert filename == "Infinity-Voyage-Confirmation-IV-TEST01.pdf"
    assert b"(IV-TEST01)" in pdf
    assert b"(4)" in pdf
    assert b"(General Inquiry)" in pdf


@pytest.mark.asyncio
async def test_customer_voucher_for_completed_booking(test_session, stored_booking):
    """Completed bookings keep their voucher."""
    await stored_booking("IV-DONE01", status="completed")
    service = VoucherService(test_session)

    _, pdf = await service.customer_voucher("IV-DONE01")

    assert b"(COMPLETED)" in pdf


@pytest.mark.asyncio
@pytest.mark.parametrize("status", ["pending", "cancelled", "on-hold"])
async def test_customer_voucher_refused_before_confirmation(test_session, stored_booking, status):
    """No voucher for bookings that are not confirmed or completed."""
    await stored_booking("IV-NOPE01", status=status)
    service = VoucherService(test_session)

    with pytest.raises(ConflictError):
        await service.customer_voucher("IV-NOPE01")


@pytest.mark.asyncio
async def test_customer_voucher_unknown_code(test_session):
    """Unknown codes are a not-found."""
    service = VoucherService(test_session)

    with pytest.raises(NotFoundError):
        await service.customer_voucher("IV-MISSING")


@pytest.mark.asyncio
async def test_admin_voucher_for_pending_booking(test_session, stored_booking):
    """The back-office can print a request voucher for any status."""
    booking = await stored_booking("IV-ADM001")
    service = VoucherService(test_session)

    filename, pdf = await service.admin_voucher(str(booking.id))

    assert filename == "Infinity-Voyage-Booking-IV-ADM001.pdf"
    assert b"(BOOKING REQUEST VOUCHER)" in pdf


@pytest.mark.asyncio
async def test_admin_voucher_for_confirmed_booking(test_session, stored_booking):
    """Confirmed bookings get the confirmation title."""
    booking = await stored_booking("IV-ADM002", status="confirmed")
    service = VoucherService(test_session)

    filename, pdf = await service.admin_voucher(str(booking.id))

    assert filename == "Infinity-Voyage-Confirmation-IV-ADM002.pdf"
    assert b"(BOOKING CONFIRMATION VOUCHER)" in pdf


@pytest.mark.asyncio
async def test_admin_voucher_unknown_booking(test_session):
    """Unknown IDs are a not-found."""
    service = VoucherService(test_session)

    with pytest.raises(NotFoundError):
        await service.admin_voucher(str(uuid4()))
