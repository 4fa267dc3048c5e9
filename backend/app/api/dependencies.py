"""Route Dependencies — store handle and body validation stage.

Invariants:
    - Routes get the store from app.state, never from a module-level global
    - validated_product_payload runs before the handler body: an invalid payload
      never reaches the store (422 wins over 404 on PUT)
    - Undecodable JSON (syntax, oversized integers, excessive nesting) → 400
    - Empty body, non-JSON content type or non-object JSON → empty payload,
      which fails validation with every rule listed
"""

import json
from typing import Any

from fastapi import HTTPException, Request, status

from app.core.repository_protocols import ProductRepository
from app.core.validate_product import validate_product

MALFORMED_BODY_MESSAGE = "Malformed JSON body"


def get_product_store(request: Request) -> ProductRepository:
    return request.app.state.product_store


async def read_json_payload(request: Request) -> dict[str, Any]:
    """Decode a JSON object body; anything else decodes to {}."""
    content_type = request.headers.get("content-type", "")
    body = await request.body()
    if not body or "json" not in content_type.lower():
        return {}
    try:
        payload = json.loads(body)
    except (UnicodeDecodeError, ValueError, RecursionError):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=MALFORMED_BODY_MESSAGE)
    return payload if isinstance(payload, dict) else {}


async def validated_product_payload(request: Request) -> dict[str, Any]:
    return validate_product(await read_json_payload(request))
