"""Auth Enforcement — pure shared-secret check for the protected namespace.

Invariants:
    - Paths outside the namespace are never checked
    - The namespace root ("/" or "" relative to the prefix) always passes
    - Header credential wins over query credential; an empty header falls through to the query
    - Credential must equal the secret exactly (constant-time comparison)

Design Decisions:
    - DEFAULT_API_KEY = "changeme" is a known-weak fallback kept for compatibility with
      existing clients. INSECURE: deployments must set API_KEY (startup logs a warning)
    - Pure function over FastAPI dependency: the gate runs before route matching, so
      unknown paths under the namespace are rejected with 401, not 404
"""

import hmac

from app.core.errors import UnauthorizedError

DEFAULT_API_KEY = "changeme"
API_KEY_HEADER = "x-api-key"
API_KEY_QUERY_PARAM = "api_key"


def namespace_relative_path(path: str, prefix: str) -> str | None:
    """Path relative to prefix, or None when path is outside the namespace.

    "/api/products" -> "/products", "/api" -> "", "/apiary" -> None.
    """
    prefix = prefix.rstrip("/")
    if path == prefix:
        return ""
    if path.startswith(prefix + "/"):
        return path[len(prefix):]
    return None


def select_credential(header_value: str | None, query_value: str | None) -> str | None:
    """Header takes precedence; falls back to the query parameter when header is absent or empty."""
    return header_value or query_value or None


def authorize(relative_path: str, supplied: str | None, secret: str) -> None:
    """Allow the namespace root unconditionally; otherwise require supplied == secret."""
    if relative_path in ("", "/"):
        return
    if not supplied or not hmac.compare_digest(
        supplied.encode("utf-8"), secret.encode("utf-8"),
    ):
        raise UnauthorizedError()
