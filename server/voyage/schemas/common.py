"""Common Pydantic schemas."""

from typing import List, Optional

from pydantic import BaseModel, Field


class Money(BaseModel):
    """Money representation with amount in minor units."""

    amount: int = Field(..., ge=0, description="Amount in minor units (e.g., cents)")
    currency: str = Field(..., min_length=3, max_length=3, pattern=r"^[A-Z]{3}$", description="ISO 4217 currency code")


class Violation(BaseModel):
    """Validation error violation."""

    path: str = Field(..., description="Path to the invalid field")
    message: str = Field(..., description="Validation error message")


class Problem(BaseModel):
    """RFC 9457 Problem Details response."""

    type: Optional[str] = Field(None, description="Problem type URI")
    title: str = Field(..., description="Short human-readable summary")
    status: int = Field(..., description="HTTP status code")
    detail: Optional[str] = Field(None, description="Human-readable explanation")
    instance: Optional[str] = Field(None, description="URI reference for this occurrence")
    retryable: Optional[bool] = Field(None, description="Whether the operation can be retried")
    violations: Optional[List[Violation]] = Field(None, description="Validation errors")


class GetByIdRequest(BaseModel):
    """Request schema for fetching a record by ID."""

    id: str = Field(..., min_length=1, description="Record ID")


class DeleteRequest(BaseModel):
    """Request schema for a hard delete; the caller must confirm explicitly."""

    id: str = Field(..., min_length=1, description="Record ID")
    confirm: bool = Field(False, description="Must be true to perform the delete")


class DeleteResponse(BaseModel):
    """Response schema for deletes."""

    id: str = Field(..., description="Deleted record ID")
    deleted: bool = Field(True, description="Whether the record was removed")


def money_or_none(amount: Optional[int], currency: str) -> Optional[Money]:
    """Wrap a nullable minor-unit amount."""
    if amount is None:
        return None
    return Money(amount=amount, currency=currency)
