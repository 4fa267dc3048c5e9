"""Product Store — in-memory product collection behind the ProductRepository protocol.

Invariants:
    - Collection order is insertion order; update keeps the position, delete closes the gap
    - ids come from id_factory and are unique within the collection (collisions are retried away)
    - Every stored product has passed validate_product (checked again here, before insert/update)
    - Returned products are frozen; callers never hold a reference into the container
    - No method awaits mid-mutation; the lock serializes mutations for threaded servers

Design Decisions:
    - One store instance per app (app.state), not a module-level list: tests build
      their own store and nothing shares ambient state
    - Async methods over sync: matches ProductRepository so IO-backed stores drop in
"""

import logging
import threading
from typing import Any, Iterable
from uuid import uuid4

from app.core.domain_types import IdFactory, ProductId
from app.core.errors import NotFoundError
from app.core.product import Product
from app.core.product_query import (
    CategoryStats, ProductPage, ProductQuery, query_products, summarize_categories,
)
from app.core.validate_product import validate_product

logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND = "Product not found"

SAMPLE_PRODUCTS: tuple[dict[str, Any], ...] = (
    {"name": "Laptop", "description": "A fast laptop", "price": 1200,
     "category": "electronics", "inStock": True},
    {"name": "Coffee Mug", "description": "Ceramic mug", "price": 8.5,
     "category": "home", "inStock": True},
    {"name": "Notebook", "description": "200 pages", "price": 3,
     "category": "stationery", "inStock": False},
)


def new_product_id() -> str:
    return str(uuid4())


class InMemoryProductStore:
    """Process-lifetime product collection. State is lost on restart."""

    def __init__(
        self,
        id_factory: IdFactory = new_product_id,
        seed: Iterable[dict[str, Any]] = (),
    ):
        self._id_factory = id_factory
        self._products: list[Product] = []
        self._ids: set[str] = set()
        self._lock = threading.Lock()
        for payload in seed:
            self._insert(payload)

    # ─── Reads ───────────────────────────────────────────────────

    async def list_products(self, query: ProductQuery) -> ProductPage:
        return query_products(self._snapshot(), query)

    async def get(self, product_id: ProductId) -> Product:
        with self._lock:
            return self._products[self._index_of(product_id)]

    async def count_by_category(self) -> CategoryStats:
        return summarize_categories(self._snapshot())

    # ─── Mutations ───────────────────────────────────────────────

    async def create(self, payload: dict[str, Any]) -> Product:
        with self._lock:
            product = self._insert(payload)
        logger.info("Product created", extra={"product_id": product.id})
        return product

    async def update(self, product_id: ProductId, payload: dict[str, Any]) -> Product:
        with self._lock:
            idx = self._index_of(product_id)
            validate_product(payload)
            updated = Product.from_payload(self._products[idx].id, payload)
            self._products[idx] = updated
        logger.info("Product updated", extra={"product_id": product_id})
        return updated

    async def delete(self, product_id: ProductId) -> Product:
        with self._lock:
            removed = self._products.pop(self._index_of(product_id))
            self._ids.discard(removed.id)
        logger.info("Product deleted", extra={"product_id": product_id})
        return removed

    # ─── Internals ───────────────────────────────────────────────

    def _snapshot(self) -> list[Product]:
        with self._lock:
            return list(self._products)

    def _index_of(self, product_id: ProductId) -> int:
        for idx, product in enumerate(self._products):
            if product.id == product_id:
                return idx
        raise NotFoundError(PRODUCT_NOT_FOUND)

    def _next_id(self) -> ProductId:
        product_id = self._id_factory()
        while product_id in self._ids:
            product_id = self._id_factory()
        return ProductId(product_id)

    def _insert(self, payload: dict[str, Any]) -> Product:
        validate_product(payload)
        product = Product.from_payload(self._next_id(), payload)
        self._products.append(product)
        self._ids.add(product.id)
        return product


def create_product_store(seed_samples: bool = True) -> InMemoryProductStore:
    """Store factory used by the app factory. Seeds the three sample products by default."""
    return InMemoryProductStore(seed=SAMPLE_PRODUCTS if seed_samples else ())
