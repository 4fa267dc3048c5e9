"""Products — CRUD, listing and category stats over the product store.

Invariants:
    - Mounted under the protected prefix: the pipeline has authorized every request here
    - POST/PUT bodies are validated (validated_product_payload) before the store is called
    - Unknown ids → 404 {"error": "Product not found"} raised by the store
    - stats/category registered before /{product_id} routes

Design Decisions:
    - Handlers await every store call: a future IO-backed store needs no route changes
    - Collection routes answer with and without trailing slash (no 307 redirect)
"""

from typing import Any

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_product_store, validated_product_payload
from app.core.domain_types import ProductId
from app.core.product_query import ProductQuery
from app.core.repository_protocols import ProductRepository
from app.schemas.product import (
    CategoryStatsResponse,
    ProductDeletedResponse,
    ProductPageResponse,
    ProductResponse,
)

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=ProductPageResponse)
@router.get("/", response_model=ProductPageResponse, include_in_schema=False)
async def list_products(
    page: str | None = None,
    limit: str | None = None,
    category: str | None = None,
    search: str | None = None,
    store: ProductRepository = Depends(get_product_store),
):
    """List with category filter, name search and page/limit pagination."""
    query = ProductQuery.from_params(page, limit, category, search)
    return ProductPageResponse.from_domain(await store.list_products(query))


@router.get("/stats/category", response_model=CategoryStatsResponse)
async def category_stats(store: ProductRepository = Depends(get_product_store)):
    return CategoryStatsResponse.from_domain(await store.count_by_category())


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: str, store: ProductRepository = Depends(get_product_store),
):
    return ProductResponse.from_domain(await store.get(ProductId(product_id)))


@router.post(
    "", response_model=ProductResponse, status_code=status.HTTP_201_CREATED,
)
@router.post(
    "/", response_model=ProductResponse, status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def create_product(
    payload: dict[str, Any] = Depends(validated_product_payload),
    store: ProductRepository = Depends(get_product_store),
):
    return ProductResponse.from_domain(await store.create(payload))


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    payload: dict[str, Any] = Depends(validated_product_payload),
    store: ProductRepository = Depends(get_product_store),
):
    """Full replacement: fields not supplied are not carried over."""
    return ProductResponse.from_domain(
        await store.update(ProductId(product_id), payload),
    )


@router.delete("/{product_id}", response_model=ProductDeletedResponse)
async def delete_product(
    product_id: str, store: ProductRepository = Depends(get_product_store),
):
    removed = await store.delete(ProductId(product_id))
    return ProductDeletedResponse(product=ProductResponse.from_domain(removed))
