"""Product Validation — pure field rules applied before any insert or update.

Invariants:
    - Every rule is evaluated (no short-circuit) so all violations are reported together
    - Reasons are joined with ", " in field order: name, description, price, category, inStock
    - bool is never accepted as a number (True is an int subclass in Python)
    - NaN and infinite prices are rejected (not representable in a JSON response)

Design Decisions:
    - Hand-written rules over a Pydantic input model: reasons must read exactly as
      clients already expect, one short sentence per field
    - Raises ValidationError instead of returning an error dict: the pipeline
      diverts to the error normalizer on raise
"""

import math
from typing import Any

from app.core.errors import ValidationError

REASON_SEPARATOR = ", "


def _is_non_blank_string(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) >= 1


def _is_non_negative_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, float) and not math.isfinite(value):
        return False
    return value >= 0


def collect_violations(payload: dict[str, Any]) -> list[str]:
    """Return every violated rule description for payload. Empty list = valid."""
    reasons: list[str] = []
    if not _is_non_blank_string(payload.get("name")):
        reasons.append("name is required")
    if not isinstance(payload.get("description"), str):
        reasons.append("description must be a string")
    if not _is_non_negative_number(payload.get("price")):
        reasons.append("price must be a non-negative number")
    if not _is_non_blank_string(payload.get("category")):
        reasons.append("category is required")
    if not isinstance(payload.get("inStock"), bool):
        reasons.append("inStock must be a boolean")
    return reasons


def validate_product(payload: dict[str, Any]) -> dict[str, Any]:
    """Pass payload through unchanged, or raise one ValidationError listing every violation."""
    reasons = collect_violations(payload)
    if reasons:
        raise ValidationError(REASON_SEPARATOR.join(reasons), reasons)
    return payload
