"""Site settings router."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import AdminAuth
from ..core.exceptions import ProblemDetailsException, unexpected_error
from ..schemas.settings import SaveSettingsRequest, SiteSettingsResponse
from ..services.settings_service import SettingsService
from .catalog import json_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/settings", tags=["settings"])

DB_DEPENDENCY = Depends(get_db)


@router.post("/get", response_model=SiteSettingsResponse)
async def get_settings(db: AsyncSession = DB_DEPENDENCY) -> JSONResponse:
    """Return all settings groups (public)."""
    try:
        return json_response(await SettingsService(db).get_all())

    except ProblemDetailsException:
        raise

    except Exception as e:
        raise unexpected_error(logger, "Unexpected error reading site settings", e) from e


@router.post("/save", response_model=SiteSettingsResponse)
async def save_settings(
    request: SaveSettingsRequest,
    db: AsyncSession = DB_DEPENDENCY,
    user: dict = AdminAuth,
) -> JSONResponse:
    """Overwrite one settings group and return all groups."""
    try:
        service = SettingsService(db)
        await service.save(request.key, request.value)
        return json_response(await service.get_all())

    except ProblemDetailsException:
        raise

    except Exception as e:
        raise unexpected_error(logger, "Unexpected error saving site settings", e, key=request.key.value) from e
