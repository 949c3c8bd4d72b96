"""
Main API router for Ticket Sales Service.
Combines all API endpoints and provides health checks.
"""

from fastapi import APIRouter
import logging

from ticket_sales import __version__
from ticket_sales.api.dependencies import check_service_health
from ticket_sales.api.v1.bookings import router as bookings_router
from ticket_sales.api.v1.tickets import router as tickets_router
from ticket_sales.schemas.ticket import HealthCheckResponse

logger = logging.getLogger(__name__)

# Create main router
router = APIRouter(prefix="/api/v1")

router.include_router(tickets_router)
router.include_router(bookings_router)


@router.get("/health", response_model=HealthCheckResponse)
async def health_check():
    """
    Health check endpoint for the ticket sales service.

    Returns:
        Service health status
    """
    try:
        health_status = await check_service_health()

        return HealthCheckResponse(
            status=health_status["overall"],
            version=__version__,
            database=health_status["database"]
        )

    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return HealthCheckResponse(
            status="unhealthy",
            version=__version__,
            database="unknown"
        )
