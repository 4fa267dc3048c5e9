"""Product Query — pure filtering, search, pagination and aggregation.

Invariants:
    - Order of application: category filter, then name search, then total, then slice
    - category matches exactly, case-insensitively; search is a case-insensitive substring of name
    - total counts the filtered result before slicing
    - page/limit are never clamped: out-of-range values yield an empty page, never an error
    - count_by_category keys are the stored category strings (not normalized)

Design Decisions:
    - Integer-prefix parsing ("2abc" -> 2, "3.9" -> 3, "abc" -> default): query strings
      from existing clients are accepted leniently
    - Python slice semantics for the page window: negative bounds count from the end
"""

import re
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Sequence

from app.core.domain_types import DEFAULT_LIMIT, DEFAULT_PAGE
from app.core.product import Product

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def parse_int_prefix(value: str | int | None, default: int) -> int:
    """Leading integer of value, or default when value has none."""
    if value is None:
        return default
    if isinstance(value, int):
        return value
    match = _INT_PREFIX.match(value)
    if not match:
        return default
    return int(match.group(1))


@dataclass(frozen=True)
class ProductQuery:
    """Parsed list query. Build with from_params() to get lenient parsing."""
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    category: str | None = None
    search: str | None = None

    @classmethod
    def from_params(
        cls,
        page: str | int | None = None,
        limit: str | int | None = None,
        category: str | None = None,
        search: str | None = None,
    ) -> "ProductQuery":
        return cls(
            page=parse_int_prefix(page, DEFAULT_PAGE),
            limit=parse_int_prefix(limit, DEFAULT_LIMIT),
            category=category or None,
            search=search or None,
        )


@dataclass(frozen=True)
class ProductPage:
    page: int
    limit: int
    total: int
    data: list[Product]


def filter_products(
    products: Iterable[Product],
    category: str | None = None,
    search: str | None = None,
) -> list[Product]:
    """Apply category match then name search, preserving input order."""
    results = list(products)
    if category:
        wanted = category.lower()
        results = [p for p in results if p.category.lower() == wanted]
    if search:
        needle = search.lower()
        results = [p for p in results if needle in p.name.lower()]
    return results


def paginate(items: Sequence[Product], page: int, limit: int) -> list[Product]:
    """Window [(page-1)*limit, (page-1)*limit+limit) over items."""
    start = (page - 1) * limit
    return list(items[start:start + limit])


def query_products(products: Iterable[Product], query: ProductQuery) -> ProductPage:
    filtered = filter_products(products, query.category, query.search)
    return ProductPage(
        page=query.page,
        limit=query.limit,
        total=len(filtered),
        data=paginate(filtered, query.page, query.limit),
    )


def count_by_category(products: Iterable[Product]) -> dict[str, int]:
    """Count every product once under its own stored category string."""
    return dict(Counter(p.category for p in products))


@dataclass(frozen=True)
class CategoryStats:
    total: int
    counts: dict[str, int]


def summarize_categories(products: Sequence[Product]) -> CategoryStats:
    return CategoryStats(total=len(products), counts=count_by_category(products))
