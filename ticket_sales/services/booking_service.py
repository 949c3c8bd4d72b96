"""
Booking Service for Ticket Sales Service.
Records the booking that goes with a successful reservation.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ticket_sales.db.inventory_store import InventoryStore
from ticket_sales.models.ticket import Booking

logger = logging.getLogger(__name__)


class BookingService:
    """
    Booking recorder.

    Performs no stock check of its own; it must run right after a
    successful reservation of the same tier and quantity, on the same
    session, so both writes commit or roll back together.
    """

    async def record_booking(
        self,
        session: AsyncSession,
        tier_id: str,
        user_id: str,
        quantity: int
    ) -> Booking:
        """
        Insert a booking row.

        Args:
            session: Session holding the reservation's transaction
            tier_id: ID of the reserved tier
            user_id: Caller-supplied buyer identifier
            quantity: Quantity that was reserved

        Returns:
            The flushed Booking
        """
        store = InventoryStore(session)
        try:
            booking = await store.insert_booking(tier_id, user_id, quantity)
        except Exception as e:
            logger.error(
                f"Reconciliation candidate: stock reserved but booking not recorded "
                f"(tier={tier_id}, user={user_id}, quantity={quantity}): {e}"
            )
            raise

        logger.info(f"Booking recorded: {booking.id} ({quantity} x tier {tier_id} for user {user_id})")
        return booking


# Global service instance
booking_service = BookingService()
