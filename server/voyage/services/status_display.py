"""Customer-facing presentation of booking statuses."""

from ..models.booking import BookingStatus
from ..schemas.booking import StatusPresentation

_PRESENTATIONS = {
    BookingStatus.PENDING.value: ("Pending Review", "amber", "clock"),
    BookingStatus.CONFIRMED.value: ("Confirmed", "green", "check-circle"),
    BookingStatus.CANCELLED.value: ("Cancelled", "red", "x-circle"),
    BookingStatus.COMPLETED.value: ("Completed", "blue", "sparkles"),
}

VOUCHER_STATUSES = frozenset({BookingStatus.CONFIRMED.value, BookingStatus.COMPLETED.value})


def status_presentation(status: str | None) -> StatusPresentation:
    """
    Map a stored status to its label, color and icon.

    Matching is exact. Anything unrecognised, including ``None`` and
    differently-cased values, is shown as pending.
    """
    key = status if status in _PRESENTATIONS else BookingStatus.PENDING.value
    label, color, icon = _PRESENTATIONS[key]
    return StatusPresentation(status=key, label=label, color=color, icon=icon)


def voucher_available(status: str | None) -> bool:
    """Return True when a voucher may be issued for ``status``."""
    return status in VOUCHER_STATUSES
