"""Product Schemas — JSON envelopes for every /api/products response.

Invariants:
    - ProductResponse serializes in_stock as "inStock"
    - price keeps its JSON number type (1200 stays 1200, never 1200.0)
    - ProductPageResponse.total is the filtered count, data is the requested window

Design Decisions:
    - Built from core dataclasses via from_domain(): routes never hand-assemble dicts
"""

from pydantic import BaseModel, ConfigDict, Field

from app.core.product import Product
from app.core.product_query import CategoryStats, ProductPage


class ProductResponse(BaseModel):
    """Public representation of a stored product."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    price: int | float
    category: str
    in_stock: bool = Field(alias="inStock")

    @classmethod
    def from_domain(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            category=product.category,
            in_stock=product.in_stock,
        )


class ProductPageResponse(BaseModel):
    page: int
    limit: int
    total: int
    data: list[ProductResponse]

    @classmethod
    def from_domain(cls, page: ProductPage) -> "ProductPageResponse":
        return cls(
            page=page.page,
            limit=page.limit,
            total=page.total,
            data=[ProductResponse.from_domain(p) for p in page.data],
        )


class ProductDeletedResponse(BaseModel):
    message: str = "Deleted"
    product: ProductResponse


class CategoryStatsResponse(BaseModel):
    total: int
    counts: dict[str, int]

    @classmethod
    def from_domain(cls, stats: CategoryStats) -> "CategoryStatsResponse":
        return cls(total=stats.total, counts=dict(stats.counts))
