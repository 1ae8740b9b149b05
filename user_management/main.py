"""User Management API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UserManagementError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Logging and database initialized on startup via lifespan, engine disposed on shutdown

Design Decisions:
    - create_app() factory: tests and the CLI build the app from explicit Settings;
      the module-level `app` serves `uvicorn user_management.main:app`
    - Settings live on app.state so request dependencies see the app's own
      instance, not the process-wide get_settings() cache
    - Middleware order: RequestID wraps AccessLog so every access line carries the id
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_management.api.error_handlers import register_error_handlers
from user_management.api.middleware import AccessLogMiddleware, RequestIDMiddleware
from user_management.api.routes import health, users
from user_management.config import Settings, get_settings
from user_management.infrastructure.database import close_db, init_db
from user_management.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def _build_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(
            settings.log_level, settings.log_format,
            service=settings.service_name, environment=settings.environment,
        )
        manager = init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        if settings.database_create_tables:
            await manager.create_tables()
        logger.info("User Management API started")
        yield
        await close_db()
        logger.info("User Management API shutting down")

    return lifespan


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application."""
    settings = settings or get_settings()
    app = FastAPI(
        title="User Management API", version="1.0.0",
        lifespan=_build_lifespan(settings),
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    )
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.include_router(health.router)
    app.include_router(users.router)

    register_error_handlers(app)
    return app


app = create_app()
