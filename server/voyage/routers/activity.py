"""Activity router for Zanzibar excursions."""

from ..schemas.catalog import Activity, ActivityList, CreateActivityRequest, UpdateActivityRequest
from ..schemas.common import money_or_none
from ..services.catalog_service import ActivityService
from .catalog import build_catalog_router


def _convert_activity_to_schema(activity_model) -> Activity:
    """Convert activity model to schema."""
    return Activity(
        id=str(activity_model.id),
        title=activity_model.title,
        slug=activity_model.slug,
        description=activity_model.description,
        short_description=activity_model.short_description,
        duration=activity_model.duration,
        featured_image=activity_model.featured_image,
        gallery=activity_model.gallery or [],
        is_featured=activity_model.is_featured,
        is_published=activity_model.is_published,
        created_at=activity_model.created_at,
        updated_at=activity_model.updated_at,
        price=money_or_none(activity_model.price, activity_model.currency),
        location=activity_model.location,
        category=activity_model.category,
        included=activity_model.included or [],
        excluded=activity_model.excluded or [],
        highlights=activity_model.highlights or [],
    )


router = build_catalog_router(
    entity="activity",
    service_class=ActivityService,
    create_model=CreateActivityRequest,
    update_model=UpdateActivityRequest,
    item_model=Activity,
    list_model=ActivityList,
    to_schema=_convert_activity_to_schema,
)
