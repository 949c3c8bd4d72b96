"""
Tests for the payment gateways.
"""

import random
import re

import pytest
from decimal import Decimal
from unittest.mock import patch

from ticket_sales.services.payment_service import (
    ApprovingPaymentGateway,
    SimulatedPaymentGateway,
    DECLINE_REASONS,
    create_payment_gateway
)


class TestSimulatedPaymentGateway:
    """Test SimulatedPaymentGateway."""

    @pytest.mark.asyncio
    async def test_successful_charge(self):
        gateway = SimulatedPaymentGateway(failure_rate=0.0, min_delay_ms=0, max_delay_ms=0, rng=random.Random(1))

        result = await gateway.charge(Decimal("30.00"), "user-1")

        assert result.success is True
        assert result.amount == Decimal("30.00")
        assert result.currency == "USD"
        assert result.error is None
        assert re.fullmatch(r"txn_\d+_[a-z0-9]{9}", result.transaction_id)

    @pytest.mark.asyncio
    async def test_declined_charge(self):
        gateway = SimulatedPaymentGateway(failure_rate=1.0, min_delay_ms=0, max_delay_ms=0, rng=random.Random(1))

        result = await gateway.charge(Decimal("30.00"), "user-1")

        assert result.success is False
        assert result.transaction_id is None
        assert result.error in DECLINE_REASONS

    @pytest.mark.asyncio
    async def test_delay_within_configured_range(self):
        gateway = SimulatedPaymentGateway(failure_rate=0.0, min_delay_ms=100, max_delay_ms=500)

        with patch("ticket_sales.services.payment_service.asyncio.sleep") as sleep:
            await gateway.charge(Decimal("1.00"), "user-1")

        delay = sleep.call_args[0][0]
        assert 0.1 <= delay <= 0.5

    @pytest.mark.parametrize("kwargs", [
        {"failure_rate": -0.1},
        {"failure_rate": 1.5},
        {"min_delay_ms": -1},
        {"min_delay_ms": 50, "max_delay_ms": 10},
    ])
    def test_invalid_settings_rejected(self, kwargs):
        with pytest.raises(ValueError):
            SimulatedPaymentGateway(**kwargs)


class TestCreatePaymentGateway:
    """Test gateway selection from configuration."""

    @pytest.mark.asyncio
    async def test_simulated_gateway_by_default(self, monkeypatch):
        monkeypatch.setenv("PAYMENT_FAILURE_RATE", "0.25")
        monkeypatch.delenv("PAYMENT_ENABLED", raising=False)

        gateway = await create_payment_gateway()

        assert isinstance(gateway, SimulatedPaymentGateway)
        assert gateway.failure_rate == 0.25

    @pytest.mark.asyncio
    async def test_disabled_payment_approves(self, monkeypatch):
        monkeypatch.setenv("PAYMENT_ENABLED", "false")

        gateway = await create_payment_gateway()
        result = await gateway.charge(Decimal("10.00"), "user-1")

        assert isinstance(gateway, ApprovingPaymentGateway)
        assert result.success is True
