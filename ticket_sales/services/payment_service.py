"""
Payment gateways for Ticket Sales Service.
The simulated gateway stands in for a real card processor.
"""

import asyncio
import random
import string
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
import logging

from ticket_sales.core.config import config

logger = logging.getLogger(__name__)

DECLINE_REASONS = (
    "Insufficient funds",
    "Card declined",
    "Payment gateway timeout",
    "Invalid card details",
)


@dataclass(frozen=True)
class PaymentResult:
    """Outcome of a charge attempt."""

    success: bool
    amount: Decimal
    currency: str = "USD"
    transaction_id: Optional[str] = None
    error: Optional[str] = None


class PaymentGateway(ABC):
    """Interface for charging a buyer."""

    @abstractmethod
    async def charge(self, amount: Decimal, user_id: str) -> PaymentResult:
        """Charge `amount` to the buyer and report the outcome."""
        ...


class ApprovingPaymentGateway(PaymentGateway):
    """Gateway that approves every charge immediately."""

    def __init__(self, currency: str = "USD"):
        self.currency = currency

    async def charge(self, amount: Decimal, user_id: str) -> PaymentResult:
        return PaymentResult(
            success=True,
            amount=amount,
            currency=self.currency,
            transaction_id=f"txn_{int(time.time() * 1000)}_approved"
        )


class SimulatedPaymentGateway(PaymentGateway):
    """
    Simulated card processor with random latency and occasional declines.
    """

    def __init__(
        self,
        failure_rate: float = 0.05,
        min_delay_ms: int = 100,
        max_delay_ms: int = 500,
        currency: str = "USD",
        rng: Optional[random.Random] = None
    ):
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError("failure_rate must be between 0 and 1")
        if min_delay_ms < 0 or max_delay_ms < min_delay_ms:
            raise ValueError("Invalid payment delay range")

        self.failure_rate = failure_rate
        self.min_delay_ms = min_delay_ms
        self.max_delay_ms = max_delay_ms
        self.currency = currency
        self._rng = rng or random.Random()

    def _generate_transaction_id(self) -> str:
        suffix = "".join(self._rng.choices(string.ascii_lowercase + string.digits, k=9))
        return f"txn_{int(time.time() * 1000)}_{suffix}"

    async def charge(self, amount: Decimal, user_id: str) -> PaymentResult:
        """
        Simulate a charge.

        Args:
            amount: Total to charge
            user_id: Buyer identifier

        Returns:
            PaymentResult with a transaction ID on approval or a decline
            reason otherwise
        """
        delay_ms = self._rng.uniform(self.min_delay_ms, self.max_delay_ms)
        await asyncio.sleep(delay_ms / 1000)

        if self._rng.random() < self.failure_rate:
            reason = self._rng.choice(DECLINE_REASONS)
            logger.warning(f"Payment declined for user {user_id}: {reason}")
            return PaymentResult(success=False, amount=amount, currency=self.currency, error=reason)

        transaction_id = self._generate_transaction_id()
        logger.info(f"Payment successful! Transaction ID: {transaction_id}")
        return PaymentResult(
            success=True,
            amount=amount,
            currency=self.currency,
            transaction_id=transaction_id
        )


async def create_payment_gateway() -> PaymentGateway:
    """Build the payment gateway described by configuration."""
    payment_config = await config.get_payment_config()

    if not payment_config["enabled"]:
        logger.info("Payment simulation disabled; approving all charges")
        return ApprovingPaymentGateway(currency=payment_config["currency"])

    return SimulatedPaymentGateway(
        failure_rate=payment_config["failure_rate"],
        min_delay_ms=payment_config["min_delay_ms"],
        max_delay_ms=payment_config["max_delay_ms"],
        currency=payment_config["currency"]
    )
