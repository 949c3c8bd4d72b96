"""
API dependencies for Ticket Sales Service.
"""

import logging
from typing import Dict

from ticket_sales.db.database import db_manager
from ticket_sales.services.purchase_service import PurchaseService, purchase_service
from ticket_sales.services.ticket_service import TicketService, ticket_service

logger = logging.getLogger(__name__)


def get_ticket_service() -> TicketService:
    """FastAPI dependency for the ticket query service."""
    return ticket_service


def get_purchase_service() -> PurchaseService:
    """FastAPI dependency for the purchase service."""
    return purchase_service


async def check_service_health() -> Dict[str, str]:
    """
    Check health of the service's backing store.

    Returns:
        Component health status
    """
    database_ok = await db_manager.health_check()
    database = "healthy" if database_ok else "unhealthy"

    if not database_ok:
        logger.warning("Database health check failed")

    return {
        "database": database,
        "overall": database
    }
