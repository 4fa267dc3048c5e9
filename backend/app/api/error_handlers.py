"""Error Normalizer — maps any raised error to exactly one status + JSON error body.

Invariants:
    - AppError (operational) → its http_status, {"error": message}
    - Framework HTTP errors (404 unknown route, 405, 400 malformed body) → their status and detail
    - RequestValidationError → 422 with the joined field messages
    - Other exceptions carrying an int status_code/status (400-599) → that status,
      {"error": str(exc) or "Internal Server Error"}
    - Anything else → 500 {"error": "Internal Server Error"}; details only go to the log
    - normalize_error never raises

Design Decisions:
    - One pure mapping (normalize_error) shared by every seam: pipeline stages,
      route handlers, framework routing errors
    - Operational errors logged at WARNING, internal faults at ERROR with traceback
    - Catch-all for plain exceptions lives in the request pipeline middleware:
      an Exception handler registered on the app is re-raised by Starlette after responding
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import AppError, ErrorKind, is_operational_error

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


def normalize_error(exc: BaseException) -> tuple[int, dict]:
    """Status code and response body for exc. Pure, never raises."""
    if is_operational_error(exc):
        return exc.http_status, exc.to_response()
    if isinstance(exc, StarletteHTTPException):
        return exc.status_code, {"error": str(exc.detail or INTERNAL_ERROR_MESSAGE)}
    if isinstance(exc, RequestValidationError):
        return (
            422,
            {"error": _join_validation_messages(exc)},
        )
    attached = attached_status(exc)
    if attached is not None:
        return attached, {"error": str(exc) or INTERNAL_ERROR_MESSAGE}
    return status.HTTP_500_INTERNAL_SERVER_ERROR, {"error": INTERNAL_ERROR_MESSAGE}


def attached_status(exc: BaseException) -> int | None:
    """HTTP error status carried by exc as status_code or status, if any."""
    for attr in ("status_code", "status"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool) and 400 <= value <= 599:
            return value
    return None


def error_kind(exc: BaseException) -> ErrorKind:
    if isinstance(exc, AppError):
        return exc.kind
    if isinstance(exc, RequestValidationError):
        return ErrorKind.VALIDATION
    if isinstance(exc, StarletteHTTPException) and exc.status_code == 404:
        return ErrorKind.NOT_FOUND
    return ErrorKind.INTERNAL


def error_response(exc: BaseException, path: str) -> JSONResponse:
    """Log exc and build its normalized response."""
    status_code, body = normalize_error(exc)
    extra = {
        "error_code": error_kind(exc).value,
        "path": path,
        "status_code": status_code,
    }
    if status_code >= 500:
        logger.error(
            f"Unhandled exception on {path}: {exc!r}",
            extra=extra, exc_info=exc,
        )
    else:
        logger.warning(f"{type(exc).__name__}: {body['error']}", extra=extra)
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    """Route framework-caught errors through the normalizer."""
    _register_app_error_handler(app)
    _register_http_error_handler(app)
    _register_validation_error_handler(app)


def _register_app_error_handler(app: FastAPI) -> None:

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return error_response(exc, request.url.path)


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc, request.url.path)


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        return error_response(exc, request.url.path)


def _join_validation_messages(exc: RequestValidationError) -> str:
    return ", ".join(
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
        for e in exc.errors()
    )
