"""Trip-planning form router."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..core.exceptions import ProblemDetailsException, unexpected_error
from ..schemas.trip_plan import TripPlanLink, TripPlanRequest, TripPlanSubmitted
from ..services.email_service import EmailService, get_email_service
from ..services.trip_plan_service import TripPlanService
from .catalog import json_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/trip-plan", tags=["trip-plan"])

EMAIL_DEPENDENCY = Depends(get_email_service)


@router.post("/whatsapp-link", response_model=TripPlanLink)
async def trip_plan_whatsapp_link(
    request: TripPlanRequest,
    email_service: EmailService = EMAIL_DEPENDENCY,
) -> JSONResponse:
    """Compose the chat message and deep link; nothing is stored or sent."""
    try:
        return json_response(TripPlanService(email_service).whatsapp_link(request))

    except ProblemDetailsException:
        raise

    except Exception as e:
        raise unexpected_error(logger, "Unexpected error composing trip plan link", e) from e


@router.post("/submit", response_model=TripPlanSubmitted)
async def submit_trip_plan(
    request: TripPlanRequest,
    email_service: EmailService = EMAIL_DEPENDENCY,
) -> JSONResponse:
    """
    Email the trip plan to the team.

    Name, email and both dates are required. An email failure is returned as
    a 502 problem carrying the provider error.
    """
    try:
        return json_response(await TripPlanService(email_service).submit(request))

    except ProblemDetailsException:
        raise

    except Exception as e:
        raise unexpected_error(logger, "Unexpected error submitting trip plan", e) from e
