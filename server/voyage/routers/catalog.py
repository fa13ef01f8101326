"""Shared RPC routes for catalog entities (tours, activities, transfers)."""

import logging
from typing import Callable, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import AdminAuth, OptionalAuth, is_admin
from ..core.exceptions import ProblemDetailsException, unexpected_error
from ..schemas.catalog import GetBySlugRequest, SearchCatalogRequest, TogglePublishRequest
from ..schemas.common import DeleteRequest, DeleteResponse, GetByIdRequest
from ..services.catalog_service import CatalogService

logger = logging.getLogger(__name__)

# Define dependencies to avoid B008 linting errors
DB_DEPENDENCY = Depends(get_db)


def json_response(model: BaseModel, status_code: int = 200) -> JSONResponse:
    """Serialize a response schema."""
    return JSONResponse(status_code=status_code, content=model.model_dump(mode="json"))


def build_catalog_router(
    entity: str,
    service_class: type[CatalogService],
    create_model: type[BaseModel],
    update_model: type[BaseModel],
    item_model: type[BaseModel],
    list_model: type[BaseModel],
    to_schema: Callable,
) -> APIRouter:
    """
    Build the search/get/create/update/toggle-publish/delete routes for one entity.

    Visitors only ever see published items; a bearer token with the admin
    role unlocks drafts on the read routes.
    """
    router = APIRouter(prefix=f"/v1/{entity}", tags=[entity])

    @router.post("/search", response_model=list_model)
    async def search_items(
        request: SearchCatalogRequest,
        db: AsyncSession = DB_DEPENDENCY,
        user: Optional[dict] = OptionalAuth,
    ) -> JSONResponse:
        """List items; drafts are included for admins only."""
        try:
            items = await service_class(db).search(
                include_unpublished=is_admin(user),
                search=request.search,
                category=request.category,
                featured_only=request.featured_only,
                limit=request.limit,
            )
            return json_response(list_model(items=[to_schema(item) for item in items]))

        except ProblemDetailsException:
            raise

        except Exception as e:
            raise unexpected_error(logger, f"Unexpected error in {entity} search", e, entity=entity) from e

    @router.post("/get", response_model=item_model)
    async def get_item_by_slug(
        request: GetBySlugRequest,
        db: AsyncSession = DB_DEPENDENCY,
        user: Optional[dict] = OptionalAuth,
    ) -> JSONResponse:
        """Get an item by slug for its detail page."""
        try:
            item = await service_class(db).get_by_slug(request.slug, include_unpublished=is_admin(user))
            return json_response(to_schema(item))

        except ProblemDetailsException:
            raise

        except Exception as e:
            raise unexpected_error(
                logger, f"Unexpected error in {entity} retrieval", e, entity=entity, slug=request.slug
            ) from e

    @router.post("/get-by-id", response_model=item_model)
    async def get_item_by_id(
        request: GetByIdRequest,
        db: AsyncSession = DB_DEPENDENCY,
        user: dict = AdminAuth,
    ) -> JSONResponse:
        """Get any item by ID for the back-office editor."""
        try:
            item = await service_class(db).get_by_id_or_raise(request.id)
            return json_response(to_schema(item))

        except ProblemDetailsException:
            raise

        except Exception as e:
            raise unexpected_error(
                logger, f"Unexpected error in {entity} retrieval", e, entity=entity, item_id=request.id
            ) from e

    @router.post("/create", response_model=item_model, status_code=201)
    async def create_item(
        request: create_model,
        db: AsyncSession = DB_DEPENDENCY,
        user: dict = AdminAuth,
    ) -> JSONResponse:
        """Create an item; it stays a draft unless ``is_published`` is set."""
        try:
            item = await service_class(db).create(request)
            return json_response(to_schema(item), status_code=201)

        except ProblemDetailsException:
            raise

        except Exception as e:
            raise unexpected_error(
                logger, f"Unexpected error in {entity} creation", e, entity=entity, user_id=user["user_id"]
            ) from e

    @router.post("/update", response_model=item_model)
    async def update_item(
        request: update_model,
        db: AsyncSession = DB_DEPENDENCY,
        user: dict = AdminAuth,
    ) -> JSONResponse:
        """Partially update an item; omitted fields keep their values."""
        try:
            item = await service_class(db).update(request)
            return json_response(to_schema(item))

        except ProblemDetailsException:
            raise

        except Exception as e:
            raise unexpected_error(
                logger, f"Unexpected error in {entity} update", e, entity=entity, item_id=request.id
            ) from e

    @router.post("/toggle-publish", response_model=item_model)
    async def toggle_publish(
        request: TogglePublishRequest,
        db: AsyncSession = DB_DEPENDENCY,
        user: dict = AdminAuth,
    ) -> JSONResponse:
        """Flip the publish flag."""
        try:
            item = await service_class(db).toggle_publish(request.id)
            return json_response(to_schema(item))

        except ProblemDetailsException:
            raise

        except Exception as e:
            raise unexpected_error(
                logger, f"Unexpected error toggling {entity} publish state", e, entity=entity, item_id=request.id
            ) from e

    @router.post("/delete", response_model=DeleteResponse)
    async def delete_item(
        request: DeleteRequest,
        db: AsyncSession = DB_DEPENDENCY,
        user: dict = AdminAuth,
    ) -> JSONResponse:
        """Permanently delete an item; requires ``confirm: true``."""
        try:
            await service_class(db).delete(request.id, request.confirm)
            return json_response(DeleteResponse(id=request.id, deleted=True))

        except ProblemDetailsException:
            raise

        except Exception as e:
            raise unexpected_error(
                logger, f"Unexpected error in {entity} deletion", e, entity=entity, item_id=request.id
            ) from e

    return router
