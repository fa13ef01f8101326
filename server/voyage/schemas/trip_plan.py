"""Trip-planning form schemas."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TripPlanRequest(BaseModel):
    """Trip-planning form as filled in by a visitor.

    Required fields are checked by the service so both submission paths can
    report what is missing in the same way.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    full_name: str = Field("", max_length=255)
    email: str = Field("", max_length=255)
    phone: str = Field("", max_length=64)
    from_date: date | None = Field(None, description="First day of the trip")
    to_date: date | None = Field(None, description="Last day of the trip")
    travelers: int = Field(2, ge=1, le=100)
    budget: str = Field("", max_length=50, description="Budget range, e.g. '2000-5000'")
    accommodation: str = Field("", max_length=50, description="Accommodation type key")
    interests: list[str] = Field(default_factory=list, description="Interest ids")
    additional_info: str = Field("", max_length=5000)


class TripPlanLink(BaseModel):
    """Messaging hand-off for the trip-planning form."""

    message: str = Field(..., description="Composed request text")
    whatsapp_url: str = Field(..., description="Deep link opening a chat with the text pre-filled")


class TripPlanSubmitted(BaseModel):
    """Response schema for the email submission path."""

    success: bool = True
    message: str
