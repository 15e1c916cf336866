"""
In-memory collections for products, customers and sales.

Nothing here is persisted: a StoreState lives for as long as the process
does, and a restart starts over from the seed data.
"""
import logging
import threading
import uuid
from typing import Dict, Iterable, List, Mapping, Optional, Type, TypeVar, Union

import pydantic

from errors import ConflictError, InsufficientStockError, NotFoundError, ValidationError
from schemas import Customer, CustomerCreate, Product, ProductCreate, ProductPatch, Sale

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def new_id(prefix: str) -> str:
    return prefix + uuid.uuid4().hex[:10]


def parse(model: Type[ModelT], data: Union[ModelT, Mapping]) -> ModelT:
    """Validate ``data`` as ``model``, raising our ValidationError on failure."""
    if isinstance(data, model):
        return data
    if isinstance(data, pydantic.BaseModel):
        data = data.model_dump(exclude_unset=True)
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError(describe_errors(e.errors())) from e


def describe_errors(errors: Iterable[Mapping]) -> str:
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


class CatalogStore:
    """
    Product records keyed by identifier, kept in insertion order.

    ``lock`` is re-entrant so the sale engine can hold it across its
    check-then-decrement sequence while still calling get/adjust_stock.
    """

    def __init__(self, products: Iterable[Product] = ()):
        self.lock = threading.RLock()
        self._products: Dict[str, Product] = {}
        for product in products:
            self._products[product.id] = product

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id: str) -> bool:
        return product_id in self._products

    def list(self) -> List[Product]:
        with self.lock:
            return list(self._products.values())

    def get(self, product_id: str) -> Product:
        product = self._products.get(product_id)
        if product is None:
            raise NotFoundError(f"Product '{product_id}' not found")
        return product

    def _code_owner(self, code: Optional[str]) -> Optional[Product]:
        if code is None:
            return None
        return next((p for p in self._products.values() if p.code == code), None)

    def insert(self, candidate: Union[ProductCreate, Mapping]) -> Product:
        data = parse(ProductCreate, candidate)
        with self.lock:
            if self._code_owner(data.code) is not None:
                raise ConflictError(f"Product with code '{data.code}' already exists")
            product = Product(id=new_id("prod"), **data.model_dump())
            self._products[product.id] = product
        logger.info("Created product %s (%s)", product.id, product.name)
        return product

    def update(self, product_id: str, patch: Union[ProductPatch, Mapping]) -> Product:
        changes = parse(ProductPatch, patch).changes()
        with self.lock:
            current = self.get(product_id)
            owner = self._code_owner(changes.get("code"))
            if owner is not None and owner.id != product_id:
                raise ConflictError(f"Product with code '{changes['code']}' already exists")
            merged = parse(Product, {**current.model_dump(), **changes, "id": current.id})
            self._products[product_id] = merged
        logger.info("Updated product %s: %s", product_id, sorted(changes))
        return merged

    def delete(self, product_id: str) -> None:
        with self.lock:
            if self._products.pop(product_id, None) is None:
                raise NotFoundError(f"Product '{product_id}' not found")
        logger.info("Deleted product %s", product_id)

    def adjust_stock(self, product_id: str, delta: int) -> Product:
        """Decrement a product's stock; ``delta`` must be negative."""
        if delta >= 0:
            raise ValidationError(f"Stock adjustment must be negative, got {delta}")
        with self.lock:
            product = self.get(product_id)
            new_stock = product.stock + delta
            if new_stock < 0:
                raise InsufficientStockError([product_id])
            product = product.model_copy(update={"stock": new_stock})
            self._products[product_id] = product
        logger.debug("Stock for %s adjusted by %d to %d", product_id, delta, new_stock)
        return product


class CustomerStore:
    def __init__(self, customers: Iterable[Customer] = ()):
        self._lock = threading.Lock()
        self._customers: Dict[str, Customer] = {c.id: c for c in customers}

    def __len__(self) -> int:
        return len(self._customers)

    def __contains__(self, customer_id: str) -> bool:
        return customer_id in self._customers

    def list(self) -> List[Customer]:
        with self._lock:
            return list(self._customers.values())

    def get(self, customer_id: str) -> Customer:
        customer = self._customers.get(customer_id)
        if customer is None:
            raise NotFoundError(f"Customer '{customer_id}' not found")
        return customer

    def insert(self, candidate: Union[CustomerCreate, Mapping]) -> Customer:
        data = parse(CustomerCreate, candidate)
        customer = Customer(id=new_id("cust"), **data.model_dump())
        with self._lock:
            self._customers[customer.id] = customer
        logger.info("Created customer %s (%s)", customer.id, customer.name)
        return customer


class SalesLedger:
    """Append-only record of completed sales, in creation order."""

    def __init__(self, sales: Iterable[Sale] = ()):
        self._lock = threading.Lock()
        self._sales: Dict[str, Sale] = {s.id: s for s in sales}

    def __len__(self) -> int:
        return len(self._sales)

    def __contains__(self, sale_id: str) -> bool:
        return sale_id in self._sales

    def list(self) -> List[Sale]:
        with self._lock:
            return list(self._sales.values())

    def get(self, sale_id: str) -> Sale:
        sale = self._sales.get(sale_id)
        if sale is None:
            raise NotFoundError(f"Sale '{sale_id}' not found")
        return sale

    def append(self, sale: Sale) -> None:
        with self._lock:
            if sale.id in self._sales:
                raise ConflictError(f"Sale '{sale.id}' already recorded")
            self._sales[sale.id] = sale


class StoreState:
    """The three collections one running application works against."""

    def __init__(
        self,
        catalog: Optional[CatalogStore] = None,
        customers: Optional[CustomerStore] = None,
        ledger: Optional[SalesLedger] = None,
    ):
        self.catalog = catalog if catalog is not None else CatalogStore()
        self.customers = customers if customers is not None else CustomerStore()
        self.ledger = ledger if ledger is not None else SalesLedger()
