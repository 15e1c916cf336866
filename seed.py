"""Demo data a fresh process starts with."""
from decimal import Decimal

from schemas import Customer, Product
from stores import CatalogStore, CustomerStore, StoreState

DEMO_PRODUCTS = [
    {"id": "prod001", "code": "ABC001", "name": "Sugar 1kg", "category": "Groceries", "stock": 50, "price": Decimal("1.25")},
    {"id": "prod002", "code": "ABC002", "name": "Vegetable Oil 1L", "category": "Groceries", "stock": 30, "price": Decimal("3.50")},
    {"id": "prod003", "code": "XYZ003", "name": "Whole Milk 1L", "category": "Dairy", "stock": 20, "price": Decimal("1.10")},
    {"id": "prod004", "code": "PQR004", "name": "Sliced Bread", "category": "Bakery", "stock": 5, "price": Decimal("2.00")},
    {"id": "prod005", "code": "QWE005", "name": "Cola 2.5L", "category": "Drinks", "stock": 0, "price": Decimal("2.75")},
    {"id": "prod006", "code": "MNB006", "name": "Chocolate Chip Cookies", "category": "Snacks", "stock": 40, "price": Decimal("1.70")},
    {"id": "prod007", "code": "JKL007", "name": "Orange Juice 1L", "category": "Drinks", "stock": 25, "price": Decimal("2.15")},
    {"id": "prod008", "code": "FGH008", "name": "Rice 5kg", "category": "Groceries", "stock": 15, "price": Decimal("6.00")},
]

DEMO_CUSTOMERS = [
    {"id": "cust001", "name": "Walk-in Customer", "email": "counter@example.com", "phone": None},
    {"id": "cust002", "name": "Maria Lopez", "email": "maria.lopez@example.com", "phone": "555-0142"},
]


def seeded_state() -> StoreState:
    return StoreState(
        catalog=CatalogStore(Product(**p) for p in DEMO_PRODUCTS),
        customers=CustomerStore(Customer(**c) for c in DEMO_CUSTOMERS),
    )
