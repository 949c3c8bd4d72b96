"""
Ticket tier API endpoints for Ticket Sales Service.
"""

from fastapi import APIRouter, Depends, HTTPException, status, Path
from typing import List
import logging

from ticket_sales.api.dependencies import get_ticket_service
from ticket_sales.services.ticket_service import TicketService
from ticket_sales.schemas.ticket import TicketTierCreate, TicketTierResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tickets", tags=["tickets"])


@router.get("", response_model=List[TicketTierResponse])
async def list_tickets(service: TicketService = Depends(get_ticket_service)):
    """
    List all ticket tiers, most expensive first.

    Returns:
        Ticket tiers with their current availability
    """
    try:
        return await service.list_tiers()
    except Exception as e:
        logger.error(f"Error fetching tickets: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch tickets"
        )


@router.get("/{tier_id}", response_model=TicketTierResponse)
async def get_ticket(
    tier_id: str = Path(..., description="Ticket tier ID"),
    service: TicketService = Depends(get_ticket_service)
):
    """
    Get a single ticket tier.

    Raises:
        TierNotFoundError: If the tier does not exist (mapped to 404)
    """
    return await service.get_tier(tier_id)


@router.post("", response_model=TicketTierResponse, status_code=status.HTTP_201_CREATED)
async def create_ticket(
    tier_data: TicketTierCreate,
    service: TicketService = Depends(get_ticket_service)
):
    """
    Add a ticket tier to the catalog.

    Args:
        tier_data: Name, unit price and total quantity

    Returns:
        The created tier with all stock available
    """
    try:
        return await service.create_tier(
            name=tier_data.name,
            price=tier_data.price,
            quantity=tier_data.quantity
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
