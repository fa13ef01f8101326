"""Catalog (tour, activity, transfer) Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from .common import Money

SLUG_PATTERN = r"^[a-z0-9-]+$"


class ItineraryDay(BaseModel):
    """One day of a tour itinerary."""

    day: int = Field(..., ge=1, description="Day number")
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field("", max_length=5000)
    activities: list[str] = Field(default_factory=list)


class CatalogFields(BaseModel):
    """Writable fields shared by every catalog entity.

    Every field has a default so update requests only carry what changes.
    """

    title: str | None = Field(None, min_length=1, max_length=255, description="Display title")
    slug: str | None = Field(None, min_length=1, max_length=255, pattern=SLUG_PATTERN, description="URL slug; derived from the title when omitted")
    description: str | None = Field(None, max_length=20000)
    short_description: str | None = Field(None, max_length=1000)
    duration: str | None = Field(None, max_length=100, description="Human readable duration, e.g. '5 days'")
    featured_image: str | None = Field(None, description="Image URL")
    gallery: list[str] = Field(default_factory=list, description="Image URLs")
    is_featured: bool = Field(False)
    is_published: bool = Field(False)


class TourFields(CatalogFields):
    """Writable tour fields."""

    price: int | None = Field(None, ge=0, description="Per-person price in minor units")
    currency: str = Field("USD", pattern=r"^[A-Z]{3}$")
    category: str | None = Field(None, max_length=100)
    difficulty: str | None = Field(None, max_length=50)
    max_group_size: int | None = Field(None, ge=1)
    included: list[str] = Field(default_factory=list)
    excluded: list[str] = Field(default_factory=list)
    highlights: list[str] = Field(default_factory=list)
    itinerary: list[ItineraryDay] = Field(default_factory=list)


class ActivityFields(CatalogFields):
    """Writable activity fields."""

    price: int | None = Field(None, ge=0, description="Per-person price in minor units")
    currency: str = Field("USD", pattern=r"^[A-Z]{3}$")
    location: str | None = Field(None, max_length=255)
    category: str | None = Field(None, max_length=100)
    included: list[str] = Field(default_factory=list)
    excluded: list[str] = Field(default_factory=list)
    highlights: list[str] = Field(default_factory=list)


class TransferFields(CatalogFields):
    """Writable transfer fields."""

    transfer_type: str | None = Field(None, max_length=50)
    route_from: str | None = Field(None, max_length=255)
    route_to: str | None = Field(None, max_length=255)
    price_small_group: int | None = Field(None, ge=0, description="Vehicle price in minor units")
    price_large_group: int | None = Field(None, ge=0, description="Vehicle price in minor units")
    currency: str = Field("USD", pattern=r"^[A-Z]{3}$")
    vehicle_type: str | None = Field(None, max_length=100)
    max_passengers: int | None = Field(None, ge=1)
    features: list[str] = Field(default_factory=list)


class CreateTourRequest(TourFields):
    """Request schema for creating a tour."""

    title: str = Field(..., min_length=1, max_length=255, description="Display title")


class CreateActivityRequest(ActivityFields):
    """Request schema for creating an activity."""

    title: str = Field(..., min_length=1, max_length=255, description="Display title")


class CreateTransferRequest(TransferFields):
    """Request schema for creating a transfer."""

    title: str = Field(..., min_length=1, max_length=255, description="Display title")
    route_from: str = Field(..., min_length=1, max_length=255)
    route_to: str = Field(..., min_length=1, max_length=255)


class UpdateTourRequest(TourFields):
    """Partial tour update; only the fields present in the payload are written."""

    id: str = Field(..., description="Tour ID")


class UpdateActivityRequest(ActivityFields):
    """Partial activity update."""

    id: str = Field(..., description="Activity ID")


class UpdateTransferRequest(TransferFields):
    """Partial transfer update."""

    id: str = Field(..., description="Transfer ID")


class SearchCatalogRequest(BaseModel):
    """Request schema for listing catalog items."""

    search: str | None = Field(None, max_length=255, description="Case-insensitive text filter")
    category: str | None = Field(None, max_length=100, description="Exact category filter")
    featured_only: bool = Field(False, description="Only featured items")
    limit: int = Field(100, ge=1, le=500, description="Maximum number of results")


class GetBySlugRequest(BaseModel):
    """Request schema for fetching an item by slug."""

    slug: str = Field(..., min_length=1, max_length=255)


class TogglePublishRequest(BaseModel):
    """Request schema for flipping the publish flag."""

    id: str = Field(..., description="Item ID")


class CatalogItem(BaseModel):
    """Fields common to every catalog response."""

    id: str
    title: str
    slug: str
    description: str | None = None
    short_description: str | None = None
    duration: str | None = None
    featured_image: str | None = None
    gallery: list[str] = Field(default_factory=list)
    is_featured: bool
    is_published: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Tour(CatalogItem):
    """Tour response schema."""

    price: Money | None = None
    category: str | None = None
    difficulty: str | None = None
    max_group_size: int | None = None
    included: list[str] = Field(default_factory=list)
    excluded: list[str] = Field(default_factory=list)
    highlights: list[str] = Field(default_factory=list)
    itinerary: list[ItineraryDay] = Field(default_factory=list)


class Activity(CatalogItem):
    """Activity response schema."""

    price: Money | None = None
    location: str | None = None
    category: str | None = None
    included: list[str] = Field(default_factory=list)
    excluded: list[str] = Field(default_factory=list)
    highlights: list[str] = Field(default_factory=list)


class Transfer(CatalogItem):
    """Transfer response schema."""

    transfer_type: str | None = None
    route_from: str
    route_to: str
    price_small_group: Money | None = None
    price_large_group: Money | None = None
    vehicle_type: str | None = None
    max_passengers: int | None = None
    features: list[str] = Field(default_factory=list)


class TourList(BaseModel):
    """Response schema for tour searches."""

    items: list[Tour]


class ActivityList(BaseModel):
    """Response schema for activity searches."""

    items: list[Activity]


class TransferList(BaseModel):
    """Response schema for transfer searches."""

    items: list[Transfer]


class PricingResponse(BaseModel):
    """Published tours grouped for the price list page."""

    safari: list[Tour]
    zanzibar: list[Tour]
    climbing: list[Tour]
