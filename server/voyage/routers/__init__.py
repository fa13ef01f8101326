"""FastAPI routers package."""

from .activity import router as activity_router
from .booking import router as booking_router
from .dashboard import router as dashboard_router
from .email import router as email_router
from .health import router as health_router
from .metrics import router as metrics_router
from .review import router as review_router
from .settings import router as settings_router
from .tour import router as tour_router
from .transfer import router as transfer_router
from .trip_plan import router as trip_plan_router

__all__ = [
    "activity_router",
    "booking_router",
    "dashboard_router",
    "email_router",
    "health_router",
    "metrics_router",
    "review_router",
    "settings_router",
    "tour_router",
    "transfer_router",
    "trip_plan_router",
]
