import pytest

from errors import NotFoundError, ValidationError
from stores import CustomerStore, SalesLedger


def test_insert_and_get():
    customers = CustomerStore()
    customer = customers.insert({"name": "Luis", "email": "luis@example.com", "phone": "555-0101"})
    assert customer.id.startswith("cust")
    assert customers.get(customer.id).email == "luis@example.com"
    assert customer.id in customers


@pytest.mark.parametrize("candidate", [
    {"name": "Luis"},
    {"email": "luis@example.com"},
    {"name": "", "email": "luis@example.com"},
])
def test_insert_requires_name_and_email(candidate):
    customers = CustomerStore()
    with pytest.raises(ValidationError):
        customers.insert(candidate)
    assert len(customers) == 0


def test_get_unknown_customer():
    with pytest.raises(NotFoundError):
        CustomerStore().get("nobody")


def test_ledger_get_unknown_sale():
    with pytest.raises(NotFoundError):
        SalesLedger().get("sale-x")
