"""Booking email function schemas."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BookingEmailRequest(BaseModel):
    """Payload of the booking email function (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    customer_name: str = Field(..., min_length=1, max_length=255)
    customer_email: str = Field(..., min_length=3, max_length=255)
    customer_phone: str | None = Field(None, max_length=64)
    tour_name: str = Field(..., min_length=1, max_length=255)
    travel_date: str = Field(..., min_length=1, max_length=100)
    number_of_guests: int = Field(..., ge=1)
    special_requests: str | None = Field(None, max_length=10000)


class EmailDispatchResult(BaseModel):
    """Outcome of sending the admin and customer emails."""

    success: bool
    message: str
    admin_sent: bool
    customer_sent: bool
