"""
Purchase error types for Ticket Sales Service.
Each error carries a stable error code that the API layer maps to a status.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Purchase error codes."""
    INVALID_QUANTITY = "INVALID_QUANTITY"
    TIER_NOT_FOUND = "TIER_NOT_FOUND"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    PAYMENT_FAILED = "PAYMENT_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class PurchaseError(Exception):
    """Base purchase error with code and caller-safe message."""

    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"


class InvalidQuantityError(PurchaseError):
    """Raised when the requested quantity is not a positive integer."""

    error_code = ErrorCode.INVALID_QUANTITY

    def __init__(self, quantity: Any):
        super().__init__("Quantity must be positive", {"quantity": quantity})
        self.quantity = quantity


class TierNotFoundError(PurchaseError):
    """Raised when a ticket tier does not exist."""

    error_code = ErrorCode.TIER_NOT_FOUND

    def __init__(self, tier_id: str):
        super().__init__("Ticket type not found", {"ticket_tier_id": tier_id})
        self.tier_id = tier_id


class InsufficientStockError(PurchaseError):
    """Raised when a tier has fewer tickets available than requested."""

    error_code = ErrorCode.INSUFFICIENT_STOCK

    def __init__(self, tier_id: str, requested: int, available: int):
        super().__init__(
            "Not enough tickets available",
            {"ticket_tier_id": tier_id, "requested": requested, "available": available}
        )
        self.tier_id = tier_id
        self.requested = requested
        self.available = available


class PaymentFailedError(PurchaseError):
    """Raised when the payment gateway declines a charge."""

    error_code = ErrorCode.PAYMENT_FAILED

    def __init__(self, reason: str):
        super().__init__(f"Payment failed: {reason}", {"reason": reason})
        self.reason = reason


class PurchaseInternalError(PurchaseError):
    """Raised when the store is unavailable or fails unexpectedly."""

    error_code = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
