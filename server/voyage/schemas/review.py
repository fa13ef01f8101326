"""Tour review schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class SubmitReviewRequest(BaseModel):
    """Review left by a visitor on a tour page."""

    tour_id: str = Field(..., min_length=1, description="Reviewed tour")
    name: str = Field("", max_length=255, description="Reviewer name")
    rating: int = Field(5, ge=1, le=5, description="Stars, 1 to 5")
    comment: str = Field("", max_length=5000)


class Review(BaseModel):
    """Review as shown on a tour page and in the back-office."""

    id: str
    tour_id: str
    name: str
    rating: int
    comment: str
    is_approved: bool
    created_at: datetime | None = None


class TourReviewsRequest(BaseModel):
    """Request schema for a tour's public reviews."""

    tour_id: str = Field(..., min_length=1)


class TourReviews(BaseModel):
    """Approved reviews of one tour, newest first."""

    items: list[Review]
    review_count: int = Field(..., ge=0)
    average_rating: float | None = Field(None, description="Mean rating to one decimal; null without reviews")


class SearchReviewsRequest(BaseModel):
    """Back-office review list filters."""

    status: Literal["all", "pending", "approved"] = "all"
    tour_id: str | None = None
    limit: int = Field(200, ge=1, le=1000)


class ReviewList(BaseModel):
    """Response schema for review searches."""

    items: list[Review]


class ApproveReviewRequest(BaseModel):
    """Request schema for moderating a review."""

    id: str = Field(..., min_length=1)
    is_approved: bool = Field(True, description="False hides the review again")
