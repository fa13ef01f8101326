"""Catalog services for tours, activities and transfers."""

import logging
from typing import Any, Generic, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..core.observability import metrics_collector
from ..models.activity import Activity
from ..models.tour import Tour
from ..models.transfer import Transfer
from .identifiers import parse_uuid, slugify

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", Tour, Activity, Transfer)

SAFARI_KEYWORDS = ("safari", "wildlife", "adventure")
ZANZIBAR_KEYWORDS = ("beach", "marine", "cultural", "excursion")
CLIMBING_KEYWORDS = ("climbing", "trek")


class CatalogService(Generic[ModelT]):
    """
    Shared CRUD for published catalog entities.

    Subclasses bind ``model`` and ``entity``. Visibility is decided by the
    caller: every read takes ``include_unpublished`` explicitly.
    """

    model: type[ModelT]
    entity: str = "item"
    # Columns matched by the free-text filter
    search_columns: tuple[str, ...] = ("title",)
    # Column matched by the category filter
    category_column: Optional[str] = "category"
    # Public listings put featured items first
    featured_first: bool = False
    # Non-nullable columns an update may not clear
    required_fields: tuple[str, ...] = ("title", "slug")

    def __init__(self, db: AsyncSession):
        self.db = db

    async def search(
        self,
        include_unpublished: bool,
        search: Optional[str] = None,
        category: Optional[str] = None,
        featured_only: bool = False,
        limit: int = 100,
    ) -> list[ModelT]:
        """
        List catalog items.

        Args:
            include_unpublished: Whether drafts are visible to the caller
            search: Case-insensitive substring filter on the search columns
            category: Exact category filter
            featured_only: Only return featured items
            limit: Maximum number of items

        Returns:
            Items, newest first (featured first where the entity does so)
        """
        stmt = select(self.model)

        if not include_unpublished:
            stmt = stmt.where(self.model.is_published.is_(True))

        if search and search.strip():
            pattern = f"%{search.strip()}%"
            stmt = stmt.where(or_(*(
                getattr(self.model, column).ilike(pattern)
                for column in self.search_columns
            )))

        if category and self.category_column:
            stmt = stmt.where(getattr(self.model, self.category_column) == category)

        if featured_only:
            stmt = stmt.where(self.model.is_featured.is_(True))

        ordering = [self.model.created_at.desc(), self.model.id]
        if self.featured_first and not include_unpublished:
            ordering.insert(0, self.model.is_featured.desc())

        result = await self.db.execute(stmt.order_by(*ordering).limit(limit))
        return list(result.scalars().all())

    async def get_by_id(self, item_id: UUID) -> Optional[ModelT]:
        """Get an item by ID regardless of its publish state."""
        stmt = select(self.model).where(self.model.id == item_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id_or_raise(self, item_id: str) -> ModelT:
        """
        Get an item by ID or raise NotFoundError.

        Raises:
            NotFoundError: If the ID is malformed or unknown
        """
        item = await self.get_by_id(parse_uuid(item_id, self.entity))
        if not item:
            logger.warning(
                "Catalog item not found",
                extra={"entity": self.entity, "item_id": item_id}
            )
            raise NotFoundError(resource_type=self.entity, resource_id=item_id)
        return item

    async def get_by_slug(self, slug: str, include_unpublished: bool = False) -> ModelT:
        """
        Get an item by slug.

        Raises:
            NotFoundError: If no item has the slug, or it is a draft the caller may not see
        """
        stmt = select(self.model).where(self.model.slug == slug)
        if not include_unpublished:
            stmt = stmt.where(self.model.is_published.is_(True))

        result = await self.db.execute(stmt)
        item = result.scalar_one_or_none()
        if not item:
            raise NotFoundError(
                resource_type=self.entity,
                detail=f"No {self.entity} with slug '{slug}' could be found"
            )
        return item

    async def _raise_if_slug_taken(self, slug: str, exclude_id: Optional[UUID] = None) -> None:
        stmt = select(self.model).where(self.model.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)
        existing = (await self.db.execute(stmt)).scalar_one_or_none()
        if existing:
            logger.warning(
                "Catalog write rejected - slug already exists",
                extra={"entity": self.entity, "slug": slug, "existing_id": str(existing.id)}
            )
            raise ConflictError(
                detail=f"{self.entity.capitalize()} with slug '{slug}' already exists",
                conflicting_resource={
                    "id": str(existing.id),
                    "slug": existing.slug,
                    "title": existing.title,
                }
            )

    async def create(self, request: BaseModel) -> ModelT:
        """
        Create an item; the slug is derived from the title when omitted.

        Raises:
            ValidationError: If no slug can be derived from the title
            ConflictError: If the slug is already used by another item
        """
        data = request.model_dump()
        data["slug"] = data.get("slug") or slugify(data["title"])
        if not data["slug"]:
            raise ValidationError(
                detail="A slug could not be derived from the title",
                violations=[{"path": "slug", "message": "Provide a slug made of a-z, 0-9 and '-'"}]
            )

        await self._raise_if_slug_taken(data["slug"])

        item = self.model(**data)
        try:
            self.db.add(item)
            await self.db.commit()
            await self.db.refresh(item)
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(
                "Catalog item creation failed due to integrity constraint",
                extra={"entity": self.entity, "slug": data["slug"], "error": str(e)}
            )
            raise ConflictError(detail=f"{self.entity.capitalize()} creation failed due to constraint violation")

        metrics_collector.record_catalog_change(self.entity, "create")
        logger.info(
            "Catalog item created",
            extra={"entity": self.entity, "item_id": str(item.id), "slug": item.slug}
        )
        return item

    async def update(self, request: BaseModel) -> ModelT:
        """
        Apply a partial update. Only fields present in the payload are written.

        Concurrent updates are last-write-wins.

        Raises:
            NotFoundError: If the item does not exist
            ConflictError: If the new slug is used by another item
        """
        item = await self.get_by_id_or_raise(request.id)

        changes: dict[str, Any] = request.model_dump(exclude_unset=True, exclude={"id"})
        for field in self.required_fields:
            if field in changes and changes[field] is None:
                del changes[field]

        if "slug" in changes and changes["slug"] != item.slug:
            await self._raise_if_slug_taken(changes["slug"], exclude_id=item.id)

        for field, value in changes.items():
            setattr(item, field, value)

        try:
            await self.db.commit()
            await self.db.refresh(item)
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(
                "Catalog item update failed due to integrity constraint",
                extra={"entity": self.entity, "item_id": request.id, "error": str(e)}
            )
            raise ConflictError(detail=f"{self.entity.capitalize()} update failed due to constraint violation")

        metrics_collector.record_catalog_change(self.entity, "update")
        logger.info(
            "Catalog item updated",
            extra={"entity": self.entity, "item_id": request.id, "fields": sorted(changes)}
        )
        return item

    async def toggle_publish(self, item_id: str) -> ModelT:
        """Flip ``is_published``; no other field is written."""
        item = await self.get_by_id_or_raise(item_id)
        item.is_published = not item.is_published

        await self.db.commit()
        await self.db.refresh(item)

        metrics_collector.record_catalog_change(self.entity, "toggle_publish")
        logger.info(
            "Catalog item publish state changed",
            extra={"entity": self.entity, "item_id": item_id, "is_published": item.is_published}
        )
        return item

    async def delete(self, item_id: str, confirm: bool) -> None:
        """
        Hard-delete an item.

        Raises:
            ValidationError: If ``confirm`` is not set
            NotFoundError: If the item does not exist
        """
        if not confirm:
            raise ValidationError(
                detail=f"Deleting a {self.entity} is permanent and must be confirmed",
                violations=[{"path": "confirm", "message": "Must be true"}]
            )

        item = await self.get_by_id_or_raise(item_id)
        await self.db.delete(item)
        await self.db.commit()

        metrics_collector.record_catalog_change(self.entity, "delete")
        logger.info(
            "Catalog item deleted",
            extra={"entity": self.entity, "item_id": item_id}
        )


class TourService(CatalogService[Tour]):
    """Service for safari and climbing packages."""

    model = Tour
    entity = "tour"

    async def pricing_groups(self) -> dict[str, list[Tour]]:
        """
        Group published tours for the price list, cheapest first.

        Tours without a price sort last. A tour may land in several groups.
        """
        stmt = (
            select(Tour)
            .where(Tour.is_published.is_(True))
            .order_by(Tour.price.is_(None), Tour.price.asc(), Tour.title)
        )
        tours = list((await self.db.execute(stmt)).scalars().all())

        groups: dict[str, list[Tour]] = {"safari": [], "zanzibar": [], "climbing": []}
        for tour in tours:
            category = (tour.category or "").lower()
            title = tour.title.lower()
            if _contains_any(category, SAFARI_KEYWORDS):
                groups["safari"].append(tour)
            if _contains_any(category, ZANZIBAR_KEYWORDS) or "zanzibar" in title:
                groups["zanzibar"].append(tour)
            if _contains_any(category, CLIMBING_KEYWORDS) or "kilimanjaro" in title:
                groups["climbing"].append(tour)
        return groups


class ActivityService(CatalogService[Activity]):
    """Service for Zanzibar excursions."""

    model = Activity
    entity = "activity"


class TransferService(CatalogService[Transfer]):
    """Service for airport, ferry and island transfers."""

    model = Transfer
    entity = "transfer"
    search_columns = ("title", "route_from", "route_to")
    category_column = "transfer_type"
    featured_first = True
    required_fields = ("title", "slug", "route_from", "route_to")


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)
