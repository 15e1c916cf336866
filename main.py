import logging
from typing import Any, Dict, List

from fastapi import Body, Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import get_settings
from errors import InsufficientStockError, StoreError
from logging_config import configure_logging
from sales import SaleEngine
from schemas import (
    Customer,
    CustomerCreate,
    Product,
    ProductCreate,
    ProductPatch,
    ProductReplace,
    Sale,
    SaleIn,
)
from seed import seeded_state
from stores import StoreState, describe_errors, parse

settings = get_settings()
configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Store API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Process-lifetime state; a restart goes back to the seed data.
app.state.store = seeded_state() if settings.SEED_DATA else StoreState()


def get_state(request: Request) -> StoreState:
    return request.app.state.store


@app.exception_handler(StoreError)
def handle_store_error(request: Request, exc: StoreError):
    body = {"error": type(exc).__name__, "detail": exc.message}
    if isinstance(exc, InsufficientStockError):
        body["productIds"] = exc.product_ids
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(RequestValidationError)
def handle_request_validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "ValidationError", "detail": describe_errors(exc.errors())},
    )


@app.get("/")
def read_root():
    return {"name": "Store API", "status": "ok"}


@app.get("/health")
def health():
    return {"status": "ok"}


# Products

@app.get("/products", response_model=List[Product])
def list_products(state: StoreState = Depends(get_state)):
    return state.catalog.list()


@app.get("/products/{product_id}", response_model=Product)
def get_product(product_id: str, state: StoreState = Depends(get_state)):
    return state.catalog.get(product_id)


@app.post("/products", response_model=Product, status_code=201)
def create_product(product: ProductCreate, state: StoreState = Depends(get_state)):
    return state.catalog.insert(product)


@app.put("/products/{product_id}", response_model=Product)
def replace_product(product_id: str, body: Dict[str, Any] = Body(...), state: StoreState = Depends(get_state)):
    # An unknown product is a 404 whatever the body holds.
    state.catalog.get(product_id)
    product = parse(ProductReplace, body)
    return state.catalog.update(product_id, product.model_dump(exclude_unset=True))


@app.patch("/products/{product_id}", response_model=Product)
def patch_product(product_id: str, patch: ProductPatch, state: StoreState = Depends(get_state)):
    return state.catalog.update(product_id, patch)


@app.delete("/products/{product_id}", status_code=204)
def delete_product(product_id: str, state: StoreState = Depends(get_state)):
    state.catalog.delete(product_id)
    return Response(status_code=204)


# Customers

@app.get("/customers", response_model=List[Customer])
def list_customers(state: StoreState = Depends(get_state)):
    return state.customers.list()


@app.get("/customers/{customer_id}", response_model=Customer)
def get_customer(customer_id: str, state: StoreState = Depends(get_state)):
    return state.customers.get(customer_id)


@app.post("/customers", response_model=Customer, status_code=201)
def create_customer(customer: CustomerCreate, state: StoreState = Depends(get_state)):
    return state.customers.insert(customer)


# Sales

@app.get("/sales", response_model=List[Sale])
def list_sales(state: StoreState = Depends(get_state)):
    return state.ledger.list()


@app.get("/sales/{sale_id}", response_model=Sale)
def get_sale(sale_id: str, state: StoreState = Depends(get_state)):
    return state.ledger.get(sale_id)


@app.post("/sales", response_model=Sale, status_code=201)
def create_sale(sale: SaleIn, state: StoreState = Depends(get_state)):
    logger.debug("POST /sales for customer %s with %d items", sale.customer_id, len(sale.items))
    return SaleEngine(state).register(sale)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
