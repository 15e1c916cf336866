"""
Errors raised by the stores and the sale engine.

Each carries the HTTP status it maps to; main.py turns them into JSON bodies.
"""
from typing import Iterable, List


class StoreError(Exception):
    """Base exception for store and sale errors."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StoreError):
    """Raised when a required field is missing or malformed."""
    status_code = 400


class ConflictError(StoreError):
    """Raised when a product business code is already taken."""
    status_code = 409


class NotFoundError(StoreError):
    """Raised when an identifier does not exist."""
    status_code = 404


class InsufficientStockError(StoreError):
    """Raised when one or more sale lines cannot be fulfilled."""
    status_code = 400

    def __init__(self, product_ids: Iterable[str]):
        self.product_ids: List[str] = list(product_ids)
        super().__init__(
            "Insufficient stock or unknown product: " + ", ".join(self.product_ids)
        )
