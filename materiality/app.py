"""Materiality Workbench — FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from materiality.config import Settings, get_settings
from materiality.errors import register_error_handlers
from materiality.middleware import (
    configure_cors,
    configure_rate_limiting,
    configure_request_logging,
    lifespan,
)
from materiality.routers import assessments, catalog, health, sessions


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="IFRS S1 / SASB financial materiality assessment service",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Store settings on app state
    app.state.settings = settings

    # Middleware
    configure_request_logging(app)
    configure_rate_limiting(app, settings)
    configure_cors(app, settings)
    register_error_handlers(app)

    # Routers
    app.include_router(health.router)
    app.include_router(catalog.router, prefix=settings.api_prefix)
    app.include_router(sessions.router, prefix=settings.api_prefix)
    app.include_router(assessments.router, prefix=settings.api_prefix)

    return app


# Default app instance for uvicorn
app = create_app()
