"""
Booking API endpoints for Ticket Sales Service.
Handles ticket purchases and booking listings.
"""

from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import Optional
import logging

from ticket_sales.api.dependencies import get_purchase_service, get_ticket_service
from ticket_sales.services.purchase_service import PurchaseService
from ticket_sales.services.ticket_service import TicketService
from ticket_sales.schemas.ticket import (
    PurchaseRequest,
    PurchaseResponse,
    BookingResponse,
    BookingListResponse,
    PaymentDetails
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", response_model=PurchaseResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    purchase_data: PurchaseRequest,
    service: PurchaseService = Depends(get_purchase_service)
):
    """
    Buy tickets: charge the buyer, reserve stock and record the booking.

    Args:
        purchase_data: Tier, buyer and quantity

    Returns:
        Booking, total charged and payment receipt

    Raises:
        PurchaseError: Mapped to 400/402/404/409/500 by the exception handler
    """
    result = await service.purchase(
        tier_id=purchase_data.ticket_tier_id,
        user_id=purchase_data.user_id,
        quantity=purchase_data.quantity
    )

    return PurchaseResponse(
        success=True,
        message="Booking confirmed! Payment processed successfully.",
        booking=BookingResponse.model_validate(result.booking),
        total_charged=float(result.total_charged),
        payment=PaymentDetails(
            transaction_id=result.payment.transaction_id,
            amount=float(result.payment.amount),
            currency=result.payment.currency
        )
    )


@router.get("", response_model=BookingListResponse)
async def list_bookings(
    user_id: Optional[str] = Query(None, description="Filter by buyer"),
    ticket_tier_id: Optional[str] = Query(None, description="Filter by ticket tier"),
    service: TicketService = Depends(get_ticket_service)
):
    """
    List bookings, newest first.

    Returns:
        Bookings matching the filters
    """
    try:
        bookings = await service.list_bookings(user_id=user_id, ticket_tier_id=ticket_tier_id)
    except Exception as e:
        logger.error(f"Failed to list bookings: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve bookings"
        )

    return BookingListResponse(
        items=[BookingResponse.model_validate(booking) for booking in bookings],
        total=len(bookings)
    )
