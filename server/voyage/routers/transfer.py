"""Transfer router for airport, ferry and island transport."""

from ..schemas.catalog import CreateTransferRequest, Transfer, TransferList, UpdateTransferRequest
from ..schemas.common import money_or_none
from ..services.catalog_service import TransferService
from .catalog import build_catalog_router


def _convert_transfer_to_schema(transfer_model) -> Transfer:
    """Convert transfer model to schema."""
    return Transfer(
        id=str(transfer_model.id),
        title=transfer_model.title,
        slug=transfer_model.slug,
        description=transfer_model.description,
        short_description=transfer_model.short_description,
        duration=transfer_model.duration,
        featured_image=transfer_model.featured_image,
        gallery=transfer_model.gallery or [],
        is_featured=transfer_model.is_featured,
        is_published=transfer_model.is_published,
        created_at=transfer_model.created_at,
        updated_at=transfer_model.updated_at,
        transfer_type=transfer_model.transfer_type,
        route_from=transfer_model.route_from,
        route_to=transfer_model.route_to,
        price_small_group=money_or_none(transfer_model.price_small_group, transfer_model.currency),
        price_large_group=money_or_none(transfer_model.price_large_group, transfer_model.currency),
        vehicle_type=transfer_model.vehicle_type,
        max_passengers=transfer_model.max_passengers,
        features=transfer_model.features or [],
    )


router = build_catalog_router(
    entity="transfer",
    service_class=TransferService,
    create_model=CreateTransferRequest,
    update_model=UpdateTransferRequest,
    item_model=Transfer,
    list_model=TransferList,
    to_schema=_convert_transfer_to_schema,
)
