"""Admin dashboard schemas."""

from pydantic import BaseModel, Field

from .common import Money


class DashboardStats(BaseModel):
    """Back-office headline numbers."""

    total_tours: int = Field(..., ge=0)
    published_tours: int = Field(..., ge=0)
    total_activities: int = Field(..., ge=0)
    published_activities: int = Field(..., ge=0)
    total_transfers: int = Field(..., ge=0)
    published_transfers: int = Field(..., ge=0)
    total_bookings: int = Field(..., ge=0)
    pending_bookings: int = Field(..., ge=0)
    total_revenue: list[Money] = Field(
        default_factory=list,
        description="Sum of known booking totals, one entry per currency"
    )
