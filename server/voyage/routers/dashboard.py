"""Back-office dashboard router."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import AdminAuth
from ..core.exceptions import ProblemDetailsException, unexpected_error
from ..schemas.dashboard import DashboardStats
from ..services.dashboard_service import DashboardService
from .catalog import json_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/admin", tags=["admin"])

DB_DEPENDENCY = Depends(get_db)


@router.post("/dashboard", response_model=DashboardStats)
async def dashboard(
    db: AsyncSession = DB_DEPENDENCY,
    user: dict = AdminAuth,
) -> JSONResponse:
    """Headline counts and revenue."""
    try:
        return json_response(await DashboardService(db).get_stats())

    except ProblemDetailsException:
        raise

    except Exception as e:
        raise unexpected_error(logger, "Unexpected error building dashboard", e) from e
