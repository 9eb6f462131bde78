"""FastAPI application factory for the Global Error Handler.

Builds a FastAPI application with the error handling middleware wired to
the configured alerting channel. Services embedding the middleware in their
own application call ``setup_error_handler`` directly instead.

Endpoints:
    - GET /api/v1/health - Health check
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, FastAPI, Request

from global_error_handler.api.lifespan import lifespan_context
from global_error_handler.api.middleware import setup_error_handler
from global_error_handler.application.interfaces import AlertSinkInterface
from global_error_handler.core.registry import ExceptionRegistry
from global_error_handler.infrastructure.alert_sinks import build_alert_sink
from global_error_handler.infrastructure.config import Settings, get_settings
from global_error_handler.telemetry.structured_logging import configure_logging

logger = logging.getLogger(__name__)

system_router = APIRouter(tags=["System"])


@system_router.get("/health")
async def health(request: Request) -> dict[str, object]:
    """Report service status and the number of registered status mappings."""
    registry: ExceptionRegistry = request.app.state.exception_registry
    return {"status": "ok", "status_mappings": len(registry.mappings())}


def create_app(
    settings: Settings | None = None,
    alert_sink: AlertSinkInterface | None = None,
    registry: ExceptionRegistry | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. None uses get_settings().
        alert_sink: Alerting channel. None picks one from settings.
        registry: Status code registry. None uses default_registry().

    Returns:
        A fully configured FastAPI application instance.
    """
    settings = settings or get_settings()
    configure_logging(settings.api.log_level)

    app = FastAPI(
        title=settings.api.title,
        version=settings.api.version,
        lifespan=lifespan_context,
    )
    setup_error_handler(
        app,
        alert_sink=alert_sink or build_alert_sink(settings),
        registry=registry,
        settings=settings,
    )
    app.include_router(system_router, prefix="/api/v1")
    return app
