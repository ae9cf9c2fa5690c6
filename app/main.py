# app/main.py
from typing import Any, Dict, Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .database import ProductStore
from .dependencies import get_store, json_body, require_api_key, validate_product
from .errors import NotFoundError, install_error_handlers
from .logger import get_logger, setup_logging
from .middleware import RequestLoggingMiddleware
from .models import ProductPage, ProductStats, product_from_payload
from .query import DEFAULT_LIMIT, DEFAULT_PAGE, filter_products, paginate, parse_positive_int

logger = get_logger(__name__)

router = APIRouter()

ENDPOINTS = {
    "GET /api/products": "Get all products (supports filtering, pagination, search)",
    "GET /api/products/:id": "Get a specific product",
    "POST /api/products": "Create a new product (requires API key)",
    "PUT /api/products/:id": "Update a product (requires API key)",
    "DELETE /api/products/:id": "Delete a product (requires API key)",
    "GET /api/products/stats": "Get product statistics",
}

# Mutating routes: body parser -> auth -> validation -> handler
WRITE_PIPELINE = [Depends(json_body), Depends(require_api_key), Depends(validate_product)]
DELETE_PIPELINE = [Depends(require_api_key)]


# ---------------------------
# Product endpoints
# ---------------------------
@router.get("/api/products")
async def list_products(
    category: Optional[str] = None,
    inStock: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    store: ProductStore = Depends(get_store),
):
    filtered = filter_products(store.list(), category=category, in_stock=inStock, search=search)
    page_no = parse_positive_int(page, DEFAULT_PAGE)
    page_size = parse_positive_int(limit, DEFAULT_LIMIT)
    items, pagination = paginate(filtered, page_no, page_size)
    return ProductPage(products=[p.to_json() for p in items], pagination=pagination).model_dump()


# registered before /{product_id} so "stats" is never read as an id
@router.get("/api/products/stats")
async def product_stats(store: ProductStore = Depends(get_store)):
    products = store.list()
    categories: Dict[str, int] = {}
    for p in products:
        categories[p.category] = categories.get(p.category, 0) + 1
    in_stock = sum(1 for p in products if p.in_stock)
    average = sum(p.price for p in products) / len(products) if products else 0
    return ProductStats(
        totalProducts=len(products),
        inStock=in_stock,
        outOfStock=len(products) - in_stock,
        categories=categories,
        averagePrice=average,
    ).model_dump()


@router.get("/api/products/{product_id}")
async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    p = store.find_by_id(product_id)
    if p is None:
        raise NotFoundError("Product not found")
    return p.to_json()


@router.post("/api/products", status_code=201, dependencies=WRITE_PIPELINE)
async def create_product(
    payload: Dict[str, Any] = Depends(json_body),
    store: ProductStore = Depends(get_store),
):
    product = product_from_payload(store.new_id(), payload)
    store.insert(product)
    logger.info("created product %s", product.id)
    return product.to_json()


@router.put("/api/products/{product_id}", dependencies=WRITE_PIPELINE)
async def update_product(
    product_id: str,
    payload: Dict[str, Any] = Depends(json_body),
    store: ProductStore = Depends(get_store),
):
    idx = store.find_index_by_id(product_id)
    if idx is None:
        raise NotFoundError("Product not found")
    product = product_from_payload(product_id, payload)
    store.replace_at(idx, product)
    return product.to_json()


@router.delete("/api/products/{product_id}", status_code=204, dependencies=DELETE_PIPELINE)
async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
    idx = store.find_index_by_id(product_id)
    if idx is None:
        raise NotFoundError("Product not found")
    store.remove_at(idx)
    logger.info("deleted product %s", product_id)
    return Response(status_code=204)


@router.get("/")
async def root():
    return {"message": "Welcome to Products API", "endpoints": ENDPOINTS}


# ---------------------------
# Application factory
# ---------------------------
def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(level=settings.log_level, json_format=settings.log_format == "json")

    application = FastAPI(title="Products API", docs_url=None, redoc_url=None, openapi_url=None)
    application.state.settings = settings
    application.state.store = store if store is not None else ProductStore.seeded()

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(RequestLoggingMiddleware)
    install_error_handlers(application)

    application.include_router(router)
    return application


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    logger.info("Server is running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
