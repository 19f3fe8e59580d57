"""userbase API - FastAPI application factory.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - repository -> service -> handler composed once per app, from one AppContext
    - CORS configured from settings (not hardcoded)
    - The store client is disposed on shutdown via the lifespan context manager

Design Decisions:
    - create_app(context) factory over a module-level app: tests hand in a context bound
      to in-memory SQLite; production runs `uvicorn userbase.main:create_app --factory`
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from userbase.api.error_handlers import register_error_handlers
from userbase.api.middleware import register_request_logging
from userbase.api.routes.health import register_health_routes
from userbase.api.routes.users import register_user_routes
from userbase.bootstrap import AppContext, build_context
from userbase.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def create_app(context: AppContext | None = None) -> FastAPI:
    """Build the FastAPI application around a single AppContext."""
    context = context or build_context()
    settings = context.settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        logger.info("userbase API started")
        yield
        await context.db.dispose()
        logger.info("userbase API shutting down")

    app = FastAPI(
        title="userbase API",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.docs_enabled else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_request_logging(app)
    register_error_handlers(app)

    # Routes - explicit registration
    register_health_routes(app, context.db)
    register_user_routes(app, context.db, prefix=f"{settings.api_prefix}/users")

    if not settings.docs_enabled:
        logger.info("OpenAPI docs are disabled in production environment.")
    return app
