"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Store access goes through ProductRepository; routes never touch a container directly
    - Implementations provided by shell via dependency injection (app.state)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: the in-memory store never suspends, but a future store doing
      IO can be swapped in without touching routes (every call site already awaits)
"""

from typing import Any, Protocol

from app.core.domain_types import ProductId
from app.core.product import Product
from app.core.product_query import CategoryStats, ProductPage, ProductQuery


class ProductRepository(Protocol):
    """Contract for product storage — implemented by shell."""
    async def list_products(self, query: ProductQuery) -> ProductPage: ...
    async def get(self, product_id: ProductId) -> Product: ...
    async def create(self, payload: dict[str, Any]) -> Product: ...
    async def update(self, product_id: ProductId, payload: dict[str, Any]) -> Product: ...
    async def delete(self, product_id: ProductId) -> Product: ...
    async def count_by_category(self) -> CategoryStats: ...
