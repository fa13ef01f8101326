"""Models module exporting all database models."""

from .activity import Activity
from .booking import Booking, BookingStatus, normalize_tracking_code
from .review import Review
from .site_setting import SiteSetting
from .tour import Tour
from .transfer import Transfer

__all__ = [
    # Catalog entities
    "Tour",
    "Activity",
    "Transfer",

    # Booking entity
    "Booking",
    "BookingStatus",
    "normalize_tracking_code",

    # Review entity
    "Review",

    # Settings entity
    "SiteSetting",
]
