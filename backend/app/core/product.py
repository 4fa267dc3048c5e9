"""Product Entity — the single stored resource.

Invariants:
    - id is assigned once at creation and never changes
    - Only the five domain fields are carried over from a payload; unknown keys are dropped
    - Instances are frozen: updates produce a new Product with the same id

Design Decisions:
    - Frozen dataclass over ORM/Pydantic model: core stays framework-free, and
      handing out an instance can never expose mutable store state
"""

from dataclasses import dataclass
from typing import Any

from app.core.domain_types import ProductId


@dataclass(frozen=True)
class Product:
    id: ProductId
    name: str
    description: str
    price: int | float
    category: str
    in_stock: bool

    @classmethod
    def from_payload(cls, product_id: ProductId, payload: dict[str, Any]) -> "Product":
        """Build from an already-validated payload. Fields not supplied are not inherited."""
        return cls(
            id=product_id,
            name=payload["name"],
            description=payload["description"],
            price=payload["price"],
            category=payload["category"],
            in_stock=payload["inStock"],
        )
