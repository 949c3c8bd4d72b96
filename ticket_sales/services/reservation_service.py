"""
Reservation Service for Ticket Sales Service.
Consumes tier stock with a single conditional update per reservation.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ticket_sales.core.exceptions import (
    InvalidQuantityError,
    TierNotFoundError,
    InsufficientStockError
)
from ticket_sales.db.inventory_store import InventoryStore
from ticket_sales.models.ticket import MAX_TICKET_COUNT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReservationResult:
    """Outcome of a successful reservation."""

    tier_id: str
    tier_name: str
    unit_price: Decimal
    quantity: int
    available_before: int
    available_after: int


def validate_quantity(quantity: Any) -> int:
    """
    Ensure a requested quantity is a positive integer.

    Raises:
        InvalidQuantityError: If the quantity is not an int or is <= 0
    """
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidQuantityError(quantity)
    return quantity


class ReservationService:
    """
    Reservation engine for ticket tiers.

    No in-process locks are taken: the database serializes concurrent
    conditional updates on the same row, so the first one to apply wins and
    later ones see the reduced stock.
    """

    async def _raise_unavailable(self, store: InventoryStore, tier_id: str, quantity: int):
        """Raise TierNotFoundError or InsufficientStockError for a failed reservation."""
        tier = await store.get_tier(tier_id, refresh=True)
        if tier is None:
            logger.warning(f"Reservation failed: tier {tier_id} not found")
            raise TierNotFoundError(tier_id)

        logger.warning(
            f"Reservation failed: tier {tier_id} has {tier.available} available, "
            f"{quantity} requested"
        )
        raise InsufficientStockError(tier_id, quantity, tier.available)

    async def reserve(self, session: AsyncSession, tier_id: str, quantity: int) -> ReservationResult:
        """
        Atomically take `quantity` tickets from a tier.

        The decrement is the first statement issued on the session so the
        transaction goes straight for the write lock.

        Args:
            session: Session whose transaction the decrement joins
            tier_id: ID of the tier
            quantity: Number of tickets to reserve

        Returns:
            ReservationResult with the stock levels around the decrement

        Raises:
            InvalidQuantityError: If quantity is not a positive integer
            TierNotFoundError: If the tier does not exist
            InsufficientStockError: If fewer than `quantity` tickets remain
        """
        validate_quantity(quantity)

        store = InventoryStore(session)

        # No stored count can cover more than the column holds
        if quantity > MAX_TICKET_COUNT:
            await self._raise_unavailable(store, tier_id, quantity)

        affected = await store.decrement_available(tier_id, quantity)

        if affected == 0:
            # Read only to pick the right error; the update is not retried
            await self._raise_unavailable(store, tier_id, quantity)

        tier = await store.get_tier(tier_id, refresh=True)
        result = ReservationResult(
            tier_id=tier.id,
            tier_name=tier.name,
            unit_price=tier.price,
            quantity=quantity,
            available_before=tier.available + quantity,
            available_after=tier.available
        )

        logger.info(f"Reserved {quantity} tickets from tier {tier_id} ({result.available_after} left)")
        return result


# Global service instance
reservation_service = ReservationService()
