"""
Pydantic schemas for Ticket Sales Service.
Handles request/response validation and serialization.
"""

from pydantic import BaseModel, Field, AliasChoices, field_validator
from typing import Any, Optional, List
from datetime import datetime
from decimal import Decimal


# Request schemas
class TicketTierCreate(BaseModel):
    """Schema for creating a ticket tier."""

    name: str = Field(..., min_length=1, max_length=255, description="Display name of the tier")
    price: Decimal = Field(..., ge=0, description="Unit price")
    quantity: int = Field(..., ge=0, description="Total number of tickets issued")

    @field_validator('price')
    @classmethod
    def validate_price(cls, v):
        """Validate price has at most 2 decimal places."""
        if v.as_tuple().exponent < -2:
            raise ValueError('Price cannot have more than 2 decimal places')
        return v


class PurchaseRequest(BaseModel):
    """Schema for buying tickets.

    Quantity is taken as sent and checked by the purchase flow, so anything
    but a positive integer surfaces as INVALID_QUANTITY.
    """

    ticket_tier_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("ticket_tier_id", "ticketTierId", "ticketTypeId"),
        description="ID of the ticket tier to buy"
    )
    user_id: str = Field(
        ...,
        min_length=1,
        max_length=255,
        validation_alias=AliasChoices("user_id", "userId"),
        description="Buyer identifier"
    )
    quantity: Any = Field(..., description="Number of tickets to buy")


# Response schemas
class TicketTierResponse(BaseModel):
    """Schema for ticket tier response."""

    id: str
    name: str
    price: float
    quantity: int
    available: int

    class Config:
        from_attributes = True


class BookingResponse(BaseModel):
    """Schema for booking response."""

    id: str
    ticket_tier_id: str
    user_id: str
    quantity: int
    created_at: datetime

    class Config:
        from_attributes = True


class PaymentDetails(BaseModel):
    """Payment receipt returned with a purchase."""

    transaction_id: Optional[str]
    amount: float
    currency: str


class PurchaseResponse(BaseModel):
    """Schema for a completed purchase."""

    success: bool = True
    message: str
    booking: BookingResponse
    total_charged: float
    payment: PaymentDetails


class BookingListResponse(BaseModel):
    """Schema for booking list response."""

    items: List[BookingResponse]
    total: int


class HealthCheckResponse(BaseModel):
    """Schema for health check response."""

    status: str
    version: str
    database: str
