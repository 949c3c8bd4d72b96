"""
Inventory store for Ticket Sales Service.
Repository over the ticket_tiers and bookings tables. All methods run on the
session they are given so callers control transaction boundaries.
"""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_sales.models.ticket import Booking, TicketTier


class InventoryStore:
    """
    Repository for ticket tiers and bookings.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_tier(self, tier_id: str, refresh: bool = False) -> Optional[TicketTier]:
        """
        Point lookup of a tier by ID.

        Args:
            tier_id: ID of the tier
            refresh: Overwrite any copy already loaded in this session with
                the row as the database currently holds it
        """
        query = select(TicketTier).where(TicketTier.id == tier_id)
        if refresh:
            query = query.execution_options(populate_existing=True)

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_tier_by_name(self, name: str) -> Optional[TicketTier]:
        """Return the first tier with the given name."""
        result = await self.session.execute(
            select(TicketTier).where(TicketTier.name == name).limit(1)
        )
        return result.scalar_one_or_none()

    async def list_tiers(self) -> List[TicketTier]:
        """Return all tiers, most expensive first."""
        result = await self.session.execute(
            select(TicketTier).order_by(TicketTier.price.desc(), TicketTier.name.asc())
        )
        return list(result.scalars().all())

    async def create_tier(self, name: str, price: Decimal, quantity: int) -> TicketTier:
        """Insert a new tier with all of its stock available."""
        tier = TicketTier(name=name, price=price, quantity=quantity, available=quantity)
        self.session.add(tier)
        await self.session.flush()
        return tier

    async def decrement_available(self, tier_id: str, quantity: int) -> int:
        """
        Conditionally decrement a tier's available stock.

        Issues a single UPDATE guarded by `available >= quantity`, so the
        check and the write are one statement as seen by every other
        connection.

        Returns:
            Number of rows affected (0 or 1)
        """
        stmt = (
            update(TicketTier)
            .where(TicketTier.id == tier_id, TicketTier.available >= quantity)
            .values(available=TicketTier.available - quantity)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def insert_booking(self, tier_id: str, user_id: str, quantity: int) -> Booking:
        """Append a booking row and flush it into the current transaction."""
        booking = Booking(ticket_tier_id=tier_id, user_id=user_id, quantity=quantity)
        self.session.add(booking)
        await self.session.flush()
        return booking

    async def list_bookings(
        self,
        user_id: Optional[str] = None,
        ticket_tier_id: Optional[str] = None
    ) -> List[Booking]:
        """Return bookings newest first, optionally filtered."""
        query = select(Booking)

        if user_id:
            query = query.where(Booking.user_id == user_id)
        if ticket_tier_id:
            query = query.where(Booking.ticket_tier_id == ticket_tier_id)

        result = await self.session.execute(query.order_by(Booking.created_at.desc()))
        return list(result.scalars().all())
