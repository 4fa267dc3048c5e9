"""Request Pipeline — ordered cross-cutting stages run before route dispatch.

Invariants:
    - Stage order is static: log_request → authorize_request → route dispatch
    - Every request is logged exactly once, before auth, whatever its outcome
    - A raising stage skips every later stage, including route dispatch and store access
    - Any error escaping a stage or a route reaches the error normalizer exactly once
      and produces exactly one response

Design Decisions:
    - Explicit tuple of stage functions over a shared RequestContext instead of
      stacked middlewares: the chain is auditable in one place
    - Auth runs before route matching so the whole namespace is gated,
      including paths no route serves
"""

import logging
from dataclasses import dataclass
from typing import Callable

from starlette.datastructures import Headers, QueryParams
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from app.api.error_handlers import error_response
from app.config import Settings
from app.core.enforce_auth import (
    API_KEY_HEADER, API_KEY_QUERY_PARAM,
    authorize, namespace_relative_path, select_credential,
)

logger = logging.getLogger(__name__)


@dataclass
class RequestContext:
    """Per-request state shared by the stages."""
    method: str
    path: str
    query_string: str
    headers: Headers
    query_params: QueryParams
    settings: Settings

    @classmethod
    def from_request(cls, request: Request, settings: Settings) -> "RequestContext":
        return cls(
            method=request.method,
            path=request.url.path,
            query_string=request.url.query,
            headers=request.headers,
            query_params=request.query_params,
            settings=settings,
        )

    @property
    def original_url(self) -> str:
        if self.query_string:
            return f"{self.path}?{self.query_string}"
        return self.path


Stage = Callable[[RequestContext], None]


def log_request(ctx: RequestContext) -> None:
    """Audit line per request. No control-flow impact."""
    logger.info(
        f"{ctx.method} {ctx.original_url}",
        extra={"method": ctx.method, "path": ctx.path},
    )


def authorize_request(ctx: RequestContext) -> None:
    """Gate the protected namespace on the shared secret."""
    relative_path = namespace_relative_path(ctx.path, ctx.settings.api_prefix)
    if relative_path is None:
        return
    supplied = select_credential(
        ctx.headers.get(API_KEY_HEADER),
        ctx.query_params.get(API_KEY_QUERY_PARAM),
    )
    authorize(relative_path, supplied, ctx.settings.api_key)


REQUEST_STAGES: tuple[Stage, ...] = (log_request, authorize_request)


def run_stages(ctx: RequestContext, stages: tuple[Stage, ...] = REQUEST_STAGES) -> None:
    for stage in stages:
        stage(ctx)


class RequestPipelineMiddleware(BaseHTTPMiddleware):
    """Runs REQUEST_STAGES, then the app; diverts any escaping error to the normalizer."""

    def __init__(
        self,
        app: ASGIApp,
        settings: Settings,
        stages: tuple[Stage, ...] = REQUEST_STAGES,
    ):
        super().__init__(app)
        self.settings = settings
        self.stages = stages

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        ctx = RequestContext.from_request(request, self.settings)
        try:
            run_stages(ctx, self.stages)
            return await call_next(request)
        except Exception as exc:
            return error_response(exc, ctx.path)
