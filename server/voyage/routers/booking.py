"""Booking router for submissions, tracking, vouchers and back-office management."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Response
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import AdminAuth
from ..core.exceptions import ProblemDetailsException, unexpected_error
from ..schemas.booking import (
    Booking,
    BookingCreated,
    BookingList,
    CartLink,
    CartLinkRequest,
    CheckoutBooking,
    CheckoutRequest,
    CheckoutResponse,
    CreateBookingRequest,
    SearchBookingsRequest,
    TrackBookingRequest,
    TrackBookingResponse,
    UpdateBookingStatusRequest,
    VoucherRequest,
)
from ..schemas.common import DeleteRequest, DeleteResponse, GetByIdRequest, Money, money_or_none
from ..services.booking_service import BookingService, booking_notification
from ..services.checkout_service import CheckoutService, cart_totals
from ..services.email_service import EmailService, get_email_service
from ..services.tracking_service import TrackingService
from ..services.voucher_service import VoucherService
from .catalog import json_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/booking", tags=["booking"])

# Define dependencies to avoid B008 linting errors
DB_DEPENDENCY = Depends(get_db)
EMAIL_DEPENDENCY = Depends(get_email_service)


def _convert_booking_to_schema(booking_model) -> Booking:
    """Convert booking model to schema."""
    return Booking(
        id=str(booking_model.id),
        tracking_code=booking_model.tracking_code,
        customer_name=booking_model.customer_name,
        customer_email=booking_model.customer_email,
        customer_phone=booking_model.customer_phone,
        travel_date=booking_model.travel_date,
        number_of_guests=booking_model.number_of_guests,
        special_requests=booking_model.special_requests,
        status=booking_model.status,
        total_price=money_or_none(booking_model.total_price, booking_model.currency),
        tour_id=str(booking_model.tour_id) if booking_model.tour_id else None,
        activity_id=str(booking_model.activity_id) if booking_model.activity_id else None,
        item_title=booking_model.item_title,
        created_at=booking_model.created_at,
    )


def _pdf_response(filename: str, pdf: bytes) -> Response:
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/create", response_model=BookingCreated, status_code=201)
async def create_booking(
    request: CreateBookingRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = DB_DEPENDENCY,
    email_service: EmailService = EMAIL_DEPENDENCY,
) -> JSONResponse:
    """
    Submit a booking request.

    The booking is stored as ``pending`` with a new tracking code. Notification
    emails are sent after the response; their failure never fails the booking.
    """
    try:
        booking = await BookingService(db).create_booking(request)
        background_tasks.add_task(email_service.notify_in_background, booking_notification(booking))

        response_data = BookingCreated(
            id=str(booking.id),
            tracking_code=booking.tracking_code,
            status=booking.status,
            created_at=booking.created_at,
        )
        return json_response(response_data, status_code=201)

    except ProblemDetailsException:
        raise

    except Exception as e:
        raise unexpected_error(logger, "Unexpected error in booking creation", e) from e


@router.post("/checkout", response_model=CheckoutResponse, status_code=201)
async def checkout_cart(
    request: CheckoutRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = DB_DEPENDENCY,
    email_service: EmailService = EMAIL_DEPENDENCY,
) -> JSONResponse:
    """
    Book every item in the cart.

    One ``pending`` booking is stored per item, all or none. Each booking's
    notification emails are sent after the response.
    """
    try:
        results = await CheckoutService(db).checkout(request)

        bookings = []
        for booking, line in results:
            background_tasks.add_task(email_service.notify_in_background, booking_notification(booking))
            bookings.append(CheckoutBooking(
                id=str(booking.id),
                tracking_code=booking.tracking_code,
                status=booking.status,
                item_title=booking.item_title,
                quantity=line.quantity,
                total_price=money_or_none(booking.total_price, booking.currency),
            ))

        totals = cart_totals([line for _, line in results])
        response_data = CheckoutResponse(
            bookings=bookings,
            totals=[Money(amount=amount, currency=currency) for currency, amount in totals.items()],
        )
        return json_response(response_data, status_code=201)

    except ProblemDetailsException:
        raise

    except Exception as e:
        raise unexpected_error(logger, "Unexpected error in cart checkout", e) from e


@router.post("/checkout-whatsapp-link", response_model=CartLink)
async def checkout_whatsapp_link(
    request: CartLinkRequest,
    db: AsyncSession = DB_DEPENDENCY,
) -> JSONResponse:
    """Compose the chat message and deep link for the whole cart; nothing is stored."""
    try:
        message, url = await CheckoutService(db).whatsapp_link(request)
        return json_response(CartLink(message=message, whatsapp_url=url))

    except ProblemDetailsException:
        raise

    except Exception as e:
        raise unexpected_error(logger, "Unexpected error composing cart link", e) from e


@router.post("/track", response_model=TrackBookingResponse)
async def track_booking(
    request: TrackBookingRequest,
    db: AsyncSession = DB_DEPENDENCY,
) -> JSONResponse:
    """
    Look a booking up by tracking code (case-insensitive).

    Unknown codes answer 200 with ``found: false``.
    """
    try:
        return json_response(await TrackingService(db).track(request.tracking_code))

    except ProblemDetailsException:
        raise

    except Exception as e:
        raise unexpected_error(logger, "Unexpected error in booking tracking", e) from e


@router.post("/voucher", response_class=Response)
async def download_voucher(
    request: VoucherRequest,
    db: AsyncSession = DB_DEPENDENCY,
) -> Response:
    """Download the PDF voucher of a confirmed or completed booking."""
    try:
        filename, pdf = await VoucherService(db).customer_voucher(request.tracking_code)
        return _pdf_response(filename, pdf)

    except ProblemDetailsException:
        raise

    except Exception as e:
        raise unexpected_error(logger, "Unexpected error generating voucher", e) from e


@router.post("/search", response_model=BookingList)
async def search_bookings(
    request: SearchBookingsRequest,
    db: AsyncSession = DB_DEPENDENCY,
    user: dict = AdminAuth,
) -> JSONResponse:
    """List bookings for the back-office, newest first."""
    try:
        bookings = await BookingService(db).search_bookings(request)
        return json_response(BookingList(items=[_convert_booking_to_schema(b) for b in bookings]))

    except ProblemDetailsException:
        raise

    except Exception as e:
        raise unexpected_error(logger, "Unexpected error in booking search", e) from e


@router.post("/get", response_model=Booking)
async def get_booking(
    request: GetByIdRequest,
    db: AsyncSession = DB_DEPENDENCY,
    user: dict = AdminAuth,
) -> JSONResponse:
    """Get a booking by ID."""
    try:
        booking = await BookingService(db).get_booking_by_id_or_raise(request.id)
        return json_response(_convert_booking_to_schema(booking))

    except ProblemDetailsException:
        raise

    except Exception as e:
        raise unexpected_error(logger, "Unexpected error in booking retrieval", e, booking_id=request.id) from e


@router.post("/update-status", response_model=Booking)
async def update_booking_status(
    request: UpdateBookingStatusRequest,
    db: AsyncSession = DB_DEPENDENCY,
    user: dict = AdminAuth,
) -> JSONResponse:
    """Set a booking's status (any known status, from any status)."""
    try:
        booking = await BookingService(db).update_status(request)
        return json_response(_convert_booking_to_schema(booking))

    except ProblemDetailsException:
        raise

    except Exception as e:
        raise unexpected_error(logger, "Unexpected error updating booking status", e, booking_id=request.id) from e


@router.post("/delete", response_model=DeleteResponse)
async def delete_booking(
    request: DeleteRequest,
    db: AsyncSession = DB_DEPENDENCY,
    user: dict = AdminAuth,
) -> JSONResponse:
    """Permanently delete a booking; requires ``confirm: true``."""
    try:
        await BookingService(db).delete_booking(request.id, request.confirm)
        return json_response(DeleteResponse(id=request.id, deleted=True))

    except ProblemDetailsException:
        raise

    except Exception as e:
        raise unexpected_error(logger, "Unexpected error in booking deletion", e, booking_id=request.id) from e


@router.post("/admin-voucher", response_class=Response)
async def download_admin_voucher(
    request: GetByIdRequest,
    db: AsyncSession = DB_DEPENDENCY,
    user: dict = AdminAuth,
) -> Response:
    """Download a voucher for any booking, whatever its status."""
    try:
        filename, pdf = await VoucherService(db).admin_voucher(request.id)
        return _pdf_response(filename, pdf)

    except ProblemDetailsException:
        raise

    except Exception as e:
        raise unexpected_error(logger, "Unexpected error generating voucher", e, booking_id=request.id) from e
