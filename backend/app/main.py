"""Products API — FastAPI application factory and entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Every request runs the same static chain: request log → auth gate →
      route dispatch → body validation (POST/PUT) → store → JSON response
    - Every error, whatever stage raised it, is mapped by the error normalizer
    - The product store is owned by the app instance (app.state), never module-global

Design Decisions:
    - create_app() factory over a bare module-level app: tests inject Settings and
      a store without touching the process environment
    - Lifespan over @app.on_event: cleaner startup/shutdown logging
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.error_handlers import register_error_handlers
from app.api.pipeline import RequestPipelineMiddleware
from app.api.routes import products, root
from app.config import Settings, get_settings
from app.core.repository_protocols import ProductRepository
from app.infrastructure.observability import setup_logging
from app.services.product_store import create_product_store

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    store: ProductRepository | None = None,
) -> FastAPI:
    """Build the application with its own settings and product store."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        if settings.uses_default_api_key:
            logger.warning(
                "API_KEY not set: using the insecure default shared secret",
            )
        logger.info(f"Products API started on port {settings.port}")
        yield
        logger.info("Products API shutting down")

    app = FastAPI(title="Products API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.product_store = (
        store if store is not None
        else create_product_store(seed_samples=settings.seed_products)
    )

    app.add_middleware(RequestPipelineMiddleware, settings=settings)
    register_error_handlers(app)

    app.include_router(root.router)
    app.include_router(products.router, prefix=settings.api_prefix)
    return app


app = create_app()
