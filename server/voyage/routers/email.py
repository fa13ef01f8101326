"""Booking email function router."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..core.exceptions import ProblemDetailsException, unexpected_error
from ..schemas.email import BookingEmailRequest, EmailDispatchResult
from ..services.email_service import EmailService, get_email_service
from .catalog import json_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/email", tags=["email"])

EMAIL_DEPENDENCY = Depends(get_email_service)


@router.post("/send-booking", response_model=EmailDispatchResult)
async def send_booking_email(
    request: BookingEmailRequest,
    email_service: EmailService = EMAIL_DEPENDENCY,
) -> JSONResponse:
    """Send the admin notification and the customer confirmation for a booking."""
    try:
        return json_response(await email_service.send_booking_emails(request))

    except ProblemDetailsException:
        raise

    except Exception as e:
        raise unexpected_error(logger, "Unexpected error sending booking emails", e) from e
