"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ProductId wraps the opaque string id — assigned at creation, never client-supplied
    - Query defaults apply whenever page/limit are missing or not numeric

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - IdFactory is injected into the store so ids are deterministic in tests
"""

from typing import Callable, NewType


# ─── Identity Types ──────────────────────────────────────────────

ProductId = NewType("ProductId", str)

IdFactory = Callable[[], str]


# ─── Query Defaults ──────────────────────────────────────────────

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
