"""
Test configuration and fixtures for Ticket Sales Service.
Uses a file-backed SQLite database so concurrent sessions get real,
separate connections.
"""

import pytest
import pytest_asyncio
from decimal import Decimal
from fastapi.testclient import TestClient

from ticket_sales.api.dependencies import get_purchase_service
from ticket_sales.db.database import db_manager
from ticket_sales.db.inventory_store import InventoryStore
from ticket_sales.main import app
from ticket_sales.services.payment_service import ApprovingPaymentGateway, PaymentGateway, PaymentResult
from ticket_sales.services.purchase_service import PurchaseService


class DecliningPaymentGateway(PaymentGateway):
    """Gateway that declines every charge."""

    def __init__(self, reason: str = "Card declined"):
        self.reason = reason
        self.charges = 0

    async def charge(self, amount, user_id):
        self.charges += 1
        return PaymentResult(success=False, amount=amount, error=self.reason)


@pytest.fixture
def database_url(tmp_path):
    """SQLite database URL in a per-test temporary directory."""
    return f"sqlite+aiosqlite:///{tmp_path / 'ticket_sales_test.db'}"


@pytest_asyncio.fixture
async def database(database_url):
    """Initialize the global database manager against a fresh database."""
    await db_manager.initialize(database_url)
    await db_manager.create_tables()
    try:
        yield db_manager
    finally:
        await db_manager.drop_tables()
        await db_manager.close()


@pytest_asyncio.fixture
async def create_tier(database):
    """Factory that inserts a ticket tier and returns it."""

    async def _create_tier(name="VIP", price="100.00", quantity=20):
        async with database.get_async_session() as session:
            return await InventoryStore(session).create_tier(name, Decimal(price), quantity)

    return _create_tier


@pytest_asyncio.fixture
async def tier(create_tier):
    """A tier with 5 tickets at 25.00."""
    return await create_tier(name="General Admission", price="25.00", quantity=5)


@pytest_asyncio.fixture
async def inventory_snapshot(database):
    """Read a tier's available count and its booked total straight from the store."""

    async def _snapshot(tier_id):
        async with database.get_async_session() as session:
            store = InventoryStore(session)
            tier = await store.get_tier(tier_id)
            bookings = await store.list_bookings(ticket_tier_id=tier_id)
            return tier, bookings

    return _snapshot


@pytest.fixture
def approving_gateway():
    """Payment gateway that approves every charge."""
    return ApprovingPaymentGateway()


@pytest.fixture
def declining_gateway():
    """Payment gateway that declines every charge."""
    return DecliningPaymentGateway()


@pytest.fixture
def purchase_service(approving_gateway):
    """Purchase service wired to an approving gateway."""
    return PurchaseService(payment_gateway=approving_gateway)


@pytest.fixture
def client(database_url, monkeypatch):
    """
    Test client whose lifespan initializes the database.
    The database is opened inside the client's own event loop.
    """
    monkeypatch.setenv("DATABASE_URL", database_url)
    app.dependency_overrides[get_purchase_service] = lambda: PurchaseService(
        payment_gateway=ApprovingPaymentGateway()
    )

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def sample_tiers():
    """Sample catalog for API tests."""
    return [
        {"name": "General Admission", "price": "10.00", "quantity": 50},
        {"name": "VIP", "price": "100.00", "quantity": 20},
        {"name": "Front Row", "price": "50.00", "quantity": 30},
    ]
