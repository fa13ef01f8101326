"""Booking-related Pydantic schemas."""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field

from ..models.booking import BookingStatus
from .common import Money


class CreateBookingRequest(BaseModel):
    """Request schema for submitting a booking request."""

    customer_name: str = Field(..., min_length=2, max_length=255, description="Full name")
    customer_email: EmailStr = Field(..., description="Contact email")
    customer_phone: str | None = Field(None, max_length=64, description="Optional phone number")
    travel_date: date = Field(..., description="Requested travel date")
    number_of_guests: int = Field(2, ge=1, le=100, description="Number of guests")
    special_requests: str | None = Field(None, max_length=5000, description="Free-text notes")
    tour_id: str | None = Field(None, description="Booked tour")
    activity_id: str | None = Field(None, description="Booked activity")


class BookingCreated(BaseModel):
    """Response schema for a new booking request."""

    id: str = Field(..., description="Booking ID")
    tracking_code: str = Field(..., description="Code the customer uses to track the booking")
    status: str = Field(..., description="Initial status")
    created_at: datetime | None = Field(None, description="Submission time (ISO 8601)")


class Booking(BaseModel):
    """Full booking record as seen by the back-office."""

    id: str
    tracking_code: str
    customer_name: str
    customer_email: str
    customer_phone: str | None = None
    travel_date: date
    number_of_guests: int
    special_requests: str | None = None
    status: str
    total_price: Money | None = None
    tour_id: str | None = None
    activity_id: str | None = None
    item_title: str | None = Field(None, description="Title of the booked tour or activity")
    created_at: datetime | None = None


class BookingList(BaseModel):
    """Response schema for booking searches."""

    items: list[Booking]


class SearchBookingsRequest(BaseModel):
    """Back-office booking list filters."""

    search: str | None = Field(None, max_length=255, description="Matches customer name or email")
    status: str = Field("all", description="'all' or one of the booking statuses")
    limit: int = Field(200, ge=1, le=1000)


class UpdateBookingStatusRequest(BaseModel):
    """Request schema for changing a booking status."""

    id: str = Field(..., description="Booking ID")
    status: BookingStatus = Field(..., description="New status")


class TrackBookingRequest(BaseModel):
    """Request schema for a customer tracking lookup."""

    tracking_code: str = Field(..., max_length=64, description="Tracking code, any case (e.g. IV-ABC123)")


class StatusPresentation(BaseModel):
    """How a booking status is shown to customers."""

    status: str = Field(..., description="Status the presentation belongs to")
    label: str
    color: str
    icon: str


class TrackedBooking(BaseModel):
    """Fixed projection of a booking returned to the public tracker."""

    tracking_code: str
    customer_name: str
    customer_email: str
    customer_phone: str | None = None
    travel_date: date
    number_of_guests: int
    special_requests: str | None = None
    status: str
    created_at: datetime | None = None
    tour_id: str | None = None


class TrackBookingResponse(BaseModel):
    """Tracker result; ``found`` is false for unknown codes."""

    found: bool
    tracking_code: str = Field(..., description="Normalized code that was looked up")
    message: str | None = None
    booking: TrackedBooking | None = None
    status_display: StatusPresentation | None = None
    voucher_available: bool = False


class VoucherRequest(BaseModel):
    """Request schema for a customer voucher download."""

    tracking_code: str = Field(..., min_length=1, max_length=64)


class CartItem(BaseModel):
    """One line of the visitor's cart."""

    item_type: Literal["tour", "activity"] = Field("tour", description="Kind of catalog item")
    item_id: str = Field(..., min_length=1, description="Tour or activity ID")
    quantity: int = Field(1, ge=1, le=50, description="Number of places")


class CheckoutRequest(BaseModel):
    """Request schema for booking every item in the cart at once."""

    customer_name: str = Field(..., min_length=2, max_length=255)
    customer_email: EmailStr
    customer_phone: str = Field(..., min_length=1, max_length=64)
    nationality: str | None = Field(None, max_length=100)
    travel_date: date
    number_of_guests: int = Field(2, ge=1, le=100)
    special_requests: str | None = Field(None, max_length=5000)
    items: list[CartItem] = Field(default_factory=list, max_length=50)


class CheckoutBooking(BaseModel):
    """A booking created for one cart line."""

    id: str
    tracking_code: str
    status: str
    item_title: str | None = None
    quantity: int
    total_price: Money | None = None


class CheckoutResponse(BaseModel):
    """Response schema for a cart checkout."""

    bookings: list[CheckoutBooking]
    totals: list[Money] = Field(default_factory=list, description="Cart total per currency")


class CartLinkRequest(BaseModel):
    """Cart and whatever contact details the visitor has filled in so far."""

    items: list[CartItem] = Field(default_factory=list, max_length=50)
    customer_name: str = Field("", max_length=255)
    customer_email: str = Field("", max_length=255)
    customer_phone: str = Field("", max_length=64)
    nationality: str = Field("", max_length=100)
    travel_date: date | None = None
    number_of_guests: int = Field(2, ge=1, le=100)
    special_requests: str = Field("", max_length=5000)


class CartLink(BaseModel):
    """Messaging hand-off for the whole cart."""

    message: str
    whatsapp_url: str
