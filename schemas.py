"""
Schemas for the store backend

Each Pydantic model is either an input shape (what a client may send) or a
stored record (what the stores hold and return). Stored records are frozen;
the stores replace them rather than mutate them in place.

JSON field names are camelCase; Python attributes are snake_case.
"""
import datetime
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_serializer, model_validator

# Product models

def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


# A blank code means the product has none.
BusinessCode = Annotated[Optional[str], BeforeValidator(_blank_to_none)]


class ProductCreate(BaseModel):
    code: BusinessCode = Field(None, description="Business code, unique when given")
    name: str = Field(..., min_length=1, description="Product name")
    category: Optional[str] = Field(None, description="Category name")
    stock: int = Field(..., ge=0, description="Units on hand")
    price: Decimal = Field(..., ge=0, description="Unit price")


class ProductReplace(BaseModel):
    """Body of a full update: name, stock and price are required."""
    model_config = ConfigDict(extra="forbid")

    code: BusinessCode = None
    name: str = Field(..., min_length=1)
    category: Optional[str] = None
    stock: int = Field(..., ge=0)
    price: Decimal = Field(..., ge=0)


class ProductPatch(BaseModel):
    """
    Partial update. Only fields present in the request are applied;
    anything else keeps its current value.
    """
    model_config = ConfigDict(extra="forbid")

    code: BusinessCode = None
    name: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = None
    stock: Optional[int] = Field(None, ge=0)
    price: Optional[Decimal] = Field(None, ge=0)

    @model_validator(mode="after")
    def _required_fields_not_null(self):
        for field in ("name", "stock", "price"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class Product(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    code: Optional[str] = None
    name: str = Field(..., min_length=1)
    category: Optional[str] = None
    stock: int = Field(..., ge=0)
    price: Decimal = Field(..., ge=0)

    @field_serializer("price", when_used="json")
    def _price_as_number(self, value: Decimal) -> float:
        return float(value)


# Customer models

class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    phone: Optional[str] = None


class Customer(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str
    phone: Optional[str] = None


# Sale models

class SaleItemIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., alias="productId")
    quantity: int = Field(..., gt=0)


class SaleIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    customer_id: str = Field(..., alias="customerId")
    items: List[SaleItemIn]


class SaleItem(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    product_id: str = Field(..., alias="productId")
    name: str
    quantity: int = Field(..., gt=0)
    unit_price: Decimal = Field(..., ge=0, alias="unitPrice")

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity

    @field_serializer("unit_price", when_used="json")
    def _unit_price_as_number(self, value: Decimal) -> float:
        return float(value)


class Sale(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    date: datetime.date
    customer_id: str = Field(..., alias="customerId")
    total: Decimal = Field(..., ge=0)
    items: List[SaleItem]

    @field_serializer("total", when_used="json")
    def _total_as_number(self, value: Decimal) -> float:
        return float(value)
