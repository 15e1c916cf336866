from decimal import Decimal

import pytest

from errors import ConflictError, InsufficientStockError, NotFoundError, ValidationError
from schemas import ProductCreate
from stores import CatalogStore


def test_list_keeps_insertion_order(state):
    state.catalog.insert({"name": "Sugar", "stock": 3, "price": "0.90"})
    assert [p.id for p in state.catalog.list()][:2] == ["p1", "p2"]
    assert state.catalog.list()[-1].name == "Sugar"


def test_get_unknown_product():
    with pytest.raises(NotFoundError):
        CatalogStore().get("nope")


def test_insert_assigns_id():
    catalog = CatalogStore()
    product = catalog.insert(ProductCreate(name="Rice", stock=10, price=Decimal("6.00")))
    assert product.id.startswith("prod")
    assert catalog.get(product.id) == product
    assert len(catalog) == 1


@pytest.mark.parametrize("candidate", [
    {"name": "Rice", "stock": 10},
    {"name": "Rice", "price": 1},
    {"stock": 1, "price": 1},
    {"name": "Rice", "stock": -1, "price": 1},
    {"name": "Rice", "stock": 1, "price": -0.5},
    {"name": "Rice", "stock": 1.5, "price": 1},
    {"name": "Rice", "stock": 1, "price": "abc"},
])
def test_insert_rejects_malformed_candidate(state, candidate):
    before = len(state.catalog)
    with pytest.raises(ValidationError):
        state.catalog.insert(candidate)
    assert len(state.catalog) == before


def test_insert_duplicate_code_conflicts(state):
    with pytest.raises(ConflictError):
        state.catalog.insert({"code": "C001", "name": "Other", "stock": 1, "price": 1})


def test_insert_without_code_never_conflicts():
    catalog = CatalogStore()
    catalog.insert({"name": "A", "stock": 1, "price": 1})
    catalog.insert({"name": "B", "stock": 1, "price": 1})
    assert len(catalog) == 2


def test_update_merges_only_given_fields(state):
    updated = state.catalog.update("p1", {"price": "2.50"})
    assert updated.id == "p1"
    assert updated.price == Decimal("2.50")
    assert updated.name == "Coffee"
    assert updated.stock == 5
    assert updated.code == "C001"


def test_update_unknown_product(state):
    with pytest.raises(NotFoundError):
        state.catalog.update("missing", {"name": "x"})


@pytest.mark.parametrize("patch", [
    {"stock": -2},
    {"price": -1},
    {"name": None},
    {"id": "hijack"},
])
def test_update_rejects_bad_patch(state, patch):
    with pytest.raises(ValidationError):
        state.catalog.update("p1", patch)
    assert state.catalog.get("p1").stock == 5


def test_update_code_to_taken_code_conflicts(state):
    with pytest.raises(ConflictError):
        state.catalog.update("p2", {"code": "C001"})
    # keeping its own code is fine
    assert state.catalog.update("p1", {"code": "C001", "stock": 7}).stock == 7


def test_delete_twice(state):
    state.catalog.delete("p1")
    with pytest.raises(NotFoundError):
        state.catalog.delete("p1")
    assert "p1" not in state.catalog


def test_adjust_stock_never_goes_negative(state):
    assert state.catalog.adjust_stock("p1", -5).stock == 0
    with pytest.raises(InsufficientStockError):
        state.catalog.adjust_stock("p2", -2)
    assert state.catalog.get("p2").stock == 1


@pytest.mark.parametrize("delta", [0, 3])
def test_adjust_stock_only_decrements(state, delta):
    with pytest.raises(ValidationError):
        state.catalog.adjust_stock("p1", delta)
    assert state.catalog.get("p1").stock == 5


def test_blank_code_is_treated_as_absent():
    catalog = CatalogStore()
    first = catalog.insert({"code": "", "name": "A", "stock": 1, "price": 1})
    second = catalog.insert({"code": "  ", "name": "B", "stock": 1, "price": 1})
    assert first.code is None
    assert second.code is None
    assert len(catalog) == 2
