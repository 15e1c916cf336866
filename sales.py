"""
Sale registration.

A sale is all-or-nothing: every line is checked against the catalog before
any stock moves, and a single rejected line rejects the whole sale.
"""
import datetime
import logging
from decimal import Decimal
from typing import Callable, Dict, List, Mapping, Union

from errors import InsufficientStockError, ValidationError
from schemas import Sale, SaleIn, SaleItem
from stores import StoreState, new_id, parse

logger = logging.getLogger(__name__)


class SaleEngine:
    def __init__(self, state: StoreState, today: Callable[[], datetime.date] = datetime.date.today):
        self.state = state
        self.today = today

    def register(self, request: Union[SaleIn, Mapping]) -> Sale:
        request = parse(SaleIn, request)
        if not request.items:
            raise ValidationError("A sale needs at least one item")
        if request.customer_id not in self.state.customers:
            raise ValidationError(f"Customer '{request.customer_id}' does not exist")

        # Lines naming the same product draw on the same stock.
        requested: Dict[str, int] = {}
        for item in request.items:
            requested[item.product_id] = requested.get(item.product_id, 0) + item.quantity

        catalog = self.state.catalog
        with catalog.lock:
            rejected: List[str] = []
            for product_id, quantity in requested.items():
                if product_id not in catalog or catalog.get(product_id).stock < quantity:
                    rejected.append(product_id)
            if rejected:
                logger.warning("Rejected sale for customer %s: %s", request.customer_id, rejected)
                raise InsufficientStockError(rejected)

            # Prices and names are captured before stock changes.
            items = []
            for item in request.items:
                product = catalog.get(item.product_id)
                items.append(SaleItem(
                    product_id=product.id,
                    name=product.name,
                    quantity=item.quantity,
                    unit_price=product.price,
                ))

            sale_id = new_id("sale")
            while sale_id in self.state.ledger:
                sale_id = new_id("sale")
            sale = Sale(
                id=sale_id,
                date=self.today(),
                customer_id=request.customer_id,
                total=sum((i.subtotal for i in items), Decimal("0")),
                items=items,
            )
            self.state.ledger.append(sale)

            # Every line was checked above, so no decrement can fail.
            for product_id, quantity in requested.items():
                catalog.adjust_stock(product_id, -quantity)

        logger.info("Registered sale %s for customer %s, total %s", sale.id, sale.customer_id, sale.total)
        return sale
