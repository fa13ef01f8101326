"""Service layer package."""

from .booking_service import BookingService
from .catalog_service import ActivityService, CatalogService, TourService, TransferService
from .checkout_service import CheckoutService
from .dashboard_service import DashboardService
from .email_service import EmailService
from .review_service import ReviewService
from .settings_service import SettingsService
from .tracking_service import TrackingService
from .trip_plan_service import TripPlanService
from .voucher_service import VoucherService

__all__ = [
    "ActivityService",
    "BookingService",
    "CatalogService",
    "CheckoutService",
    "DashboardService",
    "EmailService",
    "ReviewService",
    "SettingsService",
    "TourService",
    "TrackingService",
    "TransferService",
    "TripPlanService",
    "VoucherService",
]
