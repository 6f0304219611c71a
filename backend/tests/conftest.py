"""
Pytest fixtures and configuration for MarketLink Backend tests

This file provides shared fixtures that can be used across all test modules.

Author: TM3
Date: 2026-10-19
"""
import pytest
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

from marketlink.core.auth import TokenUser, create_access_token
from marketlink.core.config import settings
from marketlink.domain.product import Product

TEST_AUTH_SECRET = "test-secret-key"


@pytest.fixture(autouse=True)
def auth_secret(monkeypatch):
    """
    Signs and verifies tokens with a fixed secret

    Scope: function (restored after each test)
    """
    monkeypatch.setattr(settings, "AUTH_SECRET", TEST_AUTH_SECRET)
    return TEST_AUTH_SECRET


@pytest.fixture
def mock_db():
    """
    Provides a (connection, cursor) pair of mocks

    The cursor returns dict rows like RealDictCursor does.
    """
    conn = MagicMock()
    cursor = MagicMock()
    conn.cursor.return_value = cursor
    return conn, cursor


@pytest.fixture
def supplier_user():
    return TokenUser(id="SUP1", email="sales@lankawholesale.lk", name="Lanka Wholesale", role="supplier")


@pytest.fixture
def supermarket_user():
    return TokenUser(id="SM1", email="orders@freshmart.lk", name="Fresh Mart", role="supermarket")


@pytest.fixture
def supplier_headers(supplier_user):
    return {"Authorization": f"Bearer {create_access_token(supplier_user)}"}


@pytest.fixture
def supermarket_headers(supermarket_user):
    return {"Authorization": f"Bearer {create_access_token(supermarket_user)}"}


@pytest.fixture
def item_a():
    """Item A from supplier S1, price 10.00"""
    return Product(id="A", name="Basmati Rice", price=Decimal("10.00"), category="Grains",
                   description="Long grain", supplier_id="S1")


@pytest.fixture
def item_b():
    """Item B from supplier S2, price 5.00"""
    return Product(id="B", name="Coconut Oil", price=Decimal("5.00"), category="Oils",
                   description="Cold pressed", supplier_id="S2")


@pytest.fixture
def item_c():
    """Item C from supplier S1, price 2.50"""
    return Product(id="C", name="Red Lentils", price=Decimal("2.50"), category="Grains",
                   description=None, supplier_id="S1")


@pytest.fixture
def sample_order_row():
    """
    Provides an order row as returned by the orders SELECT
    """
    return {
        "id": "ORD1",
        "supplier_id": "SUP1",
        "supermarket_id": "SM1",
        "status": "pending",
        "total_amount": Decimal("25.00"),
        "delivery_address": "45 Temple St, Kandy",
        "delivery_date": None,
        "payment_method": "cash",
        "note": None,
        "created_at": datetime(2026, 10, 1, 9, 30, tzinfo=timezone.utc),
        "updated_at": None,
        "supplier_name": "Lanka Wholesale",
        "supermarket_name": "Fresh Mart",
    }
