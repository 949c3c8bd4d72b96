"""
Ticket Service for Ticket Sales Service.
Read-side queries over tiers and bookings, plus catalog setup.
"""

from decimal import Decimal
from typing import Optional, List, Tuple
import logging

from ticket_sales.core.exceptions import TierNotFoundError
from ticket_sales.db.database import db_manager
from ticket_sales.db.inventory_store import InventoryStore
from ticket_sales.models.ticket import Booking, TicketTier

logger = logging.getLogger(__name__)

# (name, price, quantity)
DEFAULT_TIERS: Tuple[Tuple[str, Decimal, int], ...] = (
    ("VIP", Decimal("100.00"), 20),
    ("Front Row", Decimal("50.00"), 30),
    ("General Admission", Decimal("10.00"), 50),
)


class TicketService:
    """
    Query service for the ticket catalog.
    Every call reads committed state; nothing is cached.
    """

    async def list_tiers(self) -> List[TicketTier]:
        """Return all ticket tiers ordered by price, highest first."""
        async with db_manager.get_async_session() as session:
            return await InventoryStore(session).list_tiers()

    async def get_tier(self, tier_id: str) -> TicketTier:
        """
        Return a ticket tier by ID.

        Raises:
            TierNotFoundError: If the tier does not exist
        """
        async with db_manager.get_async_session() as session:
            tier = await InventoryStore(session).get_tier(tier_id)

        if tier is None:
            raise TierNotFoundError(tier_id)
        return tier

    async def list_bookings(
        self,
        user_id: Optional[str] = None,
        ticket_tier_id: Optional[str] = None
    ) -> List[Booking]:
        """Return bookings newest first, optionally filtered by buyer or tier."""
        async with db_manager.get_async_session() as session:
            return await InventoryStore(session).list_bookings(
                user_id=user_id,
                ticket_tier_id=ticket_tier_id
            )

    async def create_tier(self, name: str, price: Decimal, quantity: int) -> TicketTier:
        """
        Add a ticket tier with its full quantity available.

        Raises:
            ValueError: If the name is blank or price/quantity is negative
        """
        if not name or not name.strip():
            raise ValueError("Tier name is required")
        if Decimal(price) < 0:
            raise ValueError("Price cannot be negative")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
            raise ValueError("Quantity must be a non-negative integer")

        async with db_manager.get_async_session() as session:
            tier = await InventoryStore(session).create_tier(name.strip(), Decimal(price), quantity)

        logger.info(f"Created ticket tier {tier.id} ({tier.name}, {tier.quantity} @ {tier.price})")
        return tier

    async def seed_default_tiers(self) -> List[TicketTier]:
        """
        Insert the default tiers that do not exist yet, matched by name.

        Returns:
            The tiers created by this call
        """
        created = []
        async with db_manager.get_async_session() as session:
            store = InventoryStore(session)
            for name, price, quantity in DEFAULT_TIERS:
                if await store.get_tier_by_name(name) is None:
                    created.append(await store.create_tier(name, price, quantity))

        logger.info(f"Seeded {len(created)} ticket tiers")
        return created


# Global service instance
ticket_service = TicketService()
