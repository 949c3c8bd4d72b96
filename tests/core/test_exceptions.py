"""
Tests for purchase error types.
"""

from ticket_sales.core.exceptions import (
    ErrorCode,
    PurchaseError,
    InvalidQuantityError,
    TierNotFoundError,
    InsufficientStockError,
    PaymentFailedError,
    PurchaseInternalError
)


class TestPurchaseErrors:
    """Test error codes and details."""

    def test_error_codes(self):
        assert InvalidQuantityError(0).error_code == ErrorCode.INVALID_QUANTITY
        assert TierNotFoundError("x").error_code == ErrorCode.TIER_NOT_FOUND
        assert InsufficientStockError("x", 2, 1).error_code == ErrorCode.INSUFFICIENT_STOCK
        assert PaymentFailedError("Card declined").error_code == ErrorCode.PAYMENT_FAILED
        assert PurchaseInternalError().error_code == ErrorCode.INTERNAL_ERROR

    def test_all_errors_share_base(self):
        for error in [
            InvalidQuantityError(-1),
            TierNotFoundError("x"),
            InsufficientStockError("x", 2, 1),
            PaymentFailedError("Card declined"),
            PurchaseInternalError(),
        ]:
            assert isinstance(error, PurchaseError)

    def test_insufficient_stock_details(self):
        error = InsufficientStockError("tier-1", 3, 1)

        assert error.details == {"ticket_tier_id": "tier-1", "requested": 3, "available": 1}
        assert str(error) == "INSUFFICIENT_STOCK: Not enough tickets available"

    def test_payment_failed_message(self):
        error = PaymentFailedError("Insufficient funds")

        assert error.message == "Payment failed: Insufficient funds"
        assert error.reason == "Insufficient funds"
