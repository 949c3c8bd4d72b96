"""
Purchase Service for Ticket Sales Service.
Orchestrates validate -> price lookup -> payment -> reserve -> record.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
import logging

from sqlalchemy.exc import SQLAlchemyError

from ticket_sales.core.exceptions import (
    PurchaseError,
    TierNotFoundError,
    InsufficientStockError,
    PaymentFailedError,
    PurchaseInternalError
)
from ticket_sales.db.database import db_manager
from ticket_sales.db.inventory_store import InventoryStore
from ticket_sales.models.ticket import Booking
from .booking_service import booking_service
from .payment_service import PaymentGateway, PaymentResult, create_payment_gateway
from .reservation_service import reservation_service, validate_quantity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PurchaseResult:
    """Successful purchase: the booking, what was charged and the payment receipt."""

    booking: Booking
    total_charged: Decimal
    payment: PaymentResult


class PurchaseService:
    """
    Purchase orchestration.

    Payment runs before the reservation, so a declined card never consumes
    stock. The reservation and the booking insert share one transaction, so
    stock is never decremented without a booking.
    """

    def __init__(self, payment_gateway: Optional[PaymentGateway] = None):
        self.payment_gateway = payment_gateway

    async def _get_payment_gateway(self) -> PaymentGateway:
        """Get payment gateway instance."""
        if self.payment_gateway is None:
            self.payment_gateway = await create_payment_gateway()
        return self.payment_gateway

    async def _charge(self, amount: Decimal, user_id: str) -> PaymentResult:
        gateway = await self._get_payment_gateway()
        try:
            payment = await gateway.charge(amount, user_id)
        except Exception as e:
            logger.error(f"Payment gateway error for user {user_id}: {e}")
            raise PaymentFailedError("Payment gateway error") from e

        if not payment.success:
            raise PaymentFailedError(payment.error or "Payment declined")
        return payment

    async def purchase(self, tier_id: str, user_id: str, quantity: int) -> PurchaseResult:
        """
        Buy `quantity` tickets of a tier for a user.

        Args:
            tier_id: ID of the ticket tier
            user_id: Caller-supplied buyer identifier
            quantity: Number of tickets

        Returns:
            PurchaseResult with the booking and total charged

        Raises:
            InvalidQuantityError: If quantity is not a positive integer
            TierNotFoundError: If the tier does not exist
            PaymentFailedError: If the payment is declined
            InsufficientStockError: If the tier is smaller than the request or sold out first
            PurchaseInternalError: If the store fails
        """
        validate_quantity(quantity)

        try:
            async with db_manager.get_async_session() as session:
                tier = await InventoryStore(session).get_tier(tier_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load tier {tier_id}: {e}")
            raise PurchaseInternalError() from e

        if tier is None:
            logger.warning(f"Purchase rejected: tier {tier_id} not found")
            raise TierNotFoundError(tier_id)

        if quantity > tier.quantity:
            logger.warning(
                f"Purchase rejected: {quantity} tickets requested from tier {tier_id} "
                f"which only has {tier.quantity} in total"
            )
            raise InsufficientStockError(tier_id, quantity, tier.available)

        total = tier.price * quantity

        # No transaction is open while the payment is pending
        payment = await self._charge(total, user_id)

        try:
            async with db_manager.get_async_transaction_session() as session:
                await reservation_service.reserve(session, tier_id, quantity)
                booking = await booking_service.record_booking(session, tier_id, user_id, quantity)
        except PurchaseError as e:
            logger.error(
                f"Reconciliation candidate: payment {payment.transaction_id} "
                f"({payment.amount} {payment.currency}) taken from user {user_id} "
                f"but no tickets issued: {e}"
            )
            raise
        except Exception as e:
            logger.error(
                f"Reconciliation candidate: payment {payment.transaction_id} "
                f"({payment.amount} {payment.currency}) taken from user {user_id} "
                f"but purchase failed in the store: {e}"
            )
            raise PurchaseInternalError() from e

        logger.info(
            f"Purchase completed: booking {booking.id}, {quantity} x {tier.name} "
            f"for user {user_id}, charged {total} {payment.currency}"
        )
        return PurchaseResult(booking=booking, total_charged=total, payment=payment)


# Global service instance
purchase_service = PurchaseService()
