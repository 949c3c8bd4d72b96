"""
Tests for TicketTier and Booking models.
"""

import pytest
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy.exc import IntegrityError

from ticket_sales.db.inventory_store import InventoryStore
from ticket_sales.models.ticket import Booking, TicketTier


class TestTicketTierModel:
    """Test TicketTier model creation and properties."""

    def test_tier_creation(self):
        tier = TicketTier(id="tier-1", name="VIP", price=Decimal("100.00"), quantity=20, available=15)

        assert tier.name == "VIP"
        assert tier.price == Decimal("100.00")
        assert tier.sold == 5
        assert tier.is_sold_out is False

    def test_tier_sold_out(self):
        tier = TicketTier(id="tier-1", name="VIP", price=Decimal("100.00"), quantity=20, available=0)

        assert tier.is_sold_out is True
        assert tier.sold == 20

    def test_tier_to_dict(self):
        tier = TicketTier(id="tier-1", name="VIP", price=Decimal("100.00"), quantity=20, available=20)

        assert tier.to_dict() == {
            "id": "tier-1",
            "name": "VIP",
            "price": 100.0,
            "quantity": 20,
            "available": 20
        }

    @pytest.mark.asyncio
    async def test_available_cannot_go_negative(self, tier, database):
        with pytest.raises(IntegrityError):
            async with database.get_async_session() as session:
                stored = await InventoryStore(session).get_tier(tier.id)
                stored.available = -1

    @pytest.mark.asyncio
    async def test_available_cannot_exceed_quantity(self, tier, database):
        with pytest.raises(IntegrityError):
            async with database.get_async_session() as session:
                stored = await InventoryStore(session).get_tier(tier.id)
                stored.available = stored.quantity + 1


class TestBookingModel:
    """Test Booking model."""

    def test_booking_to_dict(self):
        created_at = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
        booking = Booking(
            id="booking-1",
            ticket_tier_id="tier-1",
            user_id="user-1",
            quantity=2,
            created_at=created_at
        )

        assert booking.to_dict() == {
            "id": "booking-1",
            "ticket_tier_id": "tier-1",
            "user_id": "user-1",
            "quantity": 2,
            "created_at": created_at.isoformat()
        }

    @pytest.mark.asyncio
    async def test_ids_and_timestamp_assigned_on_insert(self, tier, database):
        async with database.get_async_session() as session:
            booking = await InventoryStore(session).insert_booking(tier.id, "user-1", 1)

        assert len(booking.id) == 36
        assert booking.created_at is not None

    @pytest.mark.asyncio
    async def test_booking_quantity_must_be_positive(self, tier, database):
        with pytest.raises(IntegrityError):
            async with database.get_async_session() as session:
                await InventoryStore(session).insert_booking(tier.id, "user-1", 0)
