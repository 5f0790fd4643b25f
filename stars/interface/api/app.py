"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI

from stars.interface.api.routes import health, ratings
from stars.interface.error import register_error_handlers
from stars.util.di.container import create_container, setup_di
from stars.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to serve from; the production container
            (settings loaded from environment) when omitted
    """
    app_instance = FastAPI(
        title="Stars API",
        description="Star ratings with per-dimension cached averages",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    register_error_handlers(app_instance)

    setup_di(app_instance, container or create_container())

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(ratings.router)

    return app_instance
