# tests/conftest.py
import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from main import app
from schemas import Customer, Product
from stores import CatalogStore, CustomerStore, StoreState


@pytest.fixture
def state():
    """A small store: two products and one customer."""
    return StoreState(
        catalog=CatalogStore([
            Product(id="p1", code="C001", name="Coffee", category="Drinks", stock=5, price=Decimal("2.00")),
            Product(id="p2", code="C002", name="Tea", category="Drinks", stock=1, price=Decimal("1.50")),
        ]),
        customers=CustomerStore([
            Customer(id="c1", name="Ana", email="ana@example.com"),
        ]),
    )


@pytest.fixture
def fixed_today():
    return lambda: datetime.date(2024, 3, 15)


@pytest.fixture
def client(state):
    """Test client running against the ``state`` fixture instead of the seed data."""
    original = app.state.store
    app.state.store = state
    with TestClient(app) as test_client:
        yield test_client
    app.state.store = original
