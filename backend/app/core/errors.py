"""Error Hierarchy — typed exceptions for every client-facing failure mode.

Invariants:
    - Every AppError has a message (str), kind (ErrorKind) and http_status (int)
    - Every AppError is operational: surfaced to the client with its exact status and message
    - Anything that is not an AppError is an internal fault (500, generic message)
    - Errors are recognized by type, never by matching on message text

Design Decisions:
    - Single hierarchy with AppError base: one normalizer maps all of them (uniform error shape)
    - ErrorKind as str Enum: serializes into log records without custom encoders
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Error classification — drives status code and log severity."""
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    UNAUTHORIZED = "unauthorized"
    INTERNAL = "internal"


class AppError(Exception):
    """Base exception for all operational (expected, client-facing) errors."""

    is_operational = True

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        http_status: int = 400,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {"error": self.message}


class NotFoundError(AppError):
    """Requested resource id does not exist."""
    def __init__(self, message: str = "Not Found"):
        super().__init__(message, ErrorKind.NOT_FOUND, 404)


class ValidationError(AppError):
    """One or more field rules violated. Message is the joined list of reasons."""
    def __init__(self, message: str = "Validation Error", reasons: list[str] | None = None):
        super().__init__(message, ErrorKind.VALIDATION, 422)
        self.reasons = list(reasons or [])


class UnauthorizedError(AppError):
    """Credential missing or not equal to the shared secret."""
    def __init__(self, message: str = "Unauthorized: invalid API key"):
        super().__init__(message, ErrorKind.UNAUTHORIZED, 401)


def is_operational_error(exc: BaseException) -> bool:
    """True when exc is an expected, client-facing error."""
    return isinstance(exc, AppError) and exc.is_operational
