"""Tour router for safari and climbing packages."""

import logging

from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ProblemDetailsException, unexpected_error
from ..schemas.catalog import (
    CreateTourRequest,
    ItineraryDay,
    PricingResponse,
    Tour,
    TourList,
    UpdateTourRequest,
)
from ..schemas.common import money_or_none
from ..services.catalog_service import TourService
from .catalog import DB_DEPENDENCY, build_catalog_router, json_response

logger = logging.getLogger(__name__)


def _convert_tour_to_schema(tour_model) -> Tour:
    """Convert tour model to schema."""
    return Tour(
        id=str(tour_model.id),
        title=tour_model.title,
        slug=tour_model.slug,
        description=tour_model.description,
        short_description=tour_model.short_description,
        duration=tour_model.duration,
        featured_image=tour_model.featured_image,
        gallery=tour_model.gallery or [],
        is_featured=tour_model.is_featured,
        is_published=tour_model.is_published,
        created_at=tour_model.created_at,
        updated_at=tour_model.updated_at,
        price=money_or_none(tour_model.price, tour_model.currency),
        category=tour_model.category,
        difficulty=tour_model.difficulty,
        max_group_size=tour_model.max_group_size,
        included=tour_model.included or [],
        excluded=tour_model.excluded or [],
        highlights=tour_model.highlights or [],
        itinerary=[ItineraryDay.model_validate(day) for day in tour_model.itinerary or []],
    )


router = build_catalog_router(
    entity="tour",
    service_class=TourService,
    create_model=CreateTourRequest,
    update_model=UpdateTourRequest,
    item_model=Tour,
    list_model=TourList,
    to_schema=_convert_tour_to_schema,
)


@router.post("/pricing", response_model=PricingResponse)
async def tour_pricing(db: AsyncSession = DB_DEPENDENCY) -> JSONResponse:
    """
    Published tours grouped for the price list (safari, zanzibar, climbing).

    Each group is ordered by ascending price.
    """
    try:
        groups = await TourService(db).pricing_groups()
        response_data = PricingResponse(**{
            name: [_convert_tour_to_schema(tour) for tour in tours]
            for name, tours in groups.items()
        })
        return json_response(response_data)

    except ProblemDetailsException:
        raise

    except Exception as e:
        raise unexpected_error(logger, "Unexpected error building tour pricing", e) from e
