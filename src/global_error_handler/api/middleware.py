"""Error handling middleware.

This module provides the ASGI middleware that turns unhandled exceptions
into uniform JSON error responses and reports them to an alerting channel.

Key Features:
    - Classification: Status codes resolved through an ExceptionRegistry
    - Diagnostics: Request snapshot (headers, body, exception chain) sent as
      a JSON attachment to the alert sink
    - Non-destructive body capture: The body is copied while the application
      reads it, never consumed on its behalf
    - Deadline: Body drain and alert dispatch share one timeout

Pure ASGI middleware: it wraps the request body stream and tracks whether
the response has started.

Error Handling Flow:
    1. Run the downstream application
    2. On exception: resolve the status code
    3. Build the request context and snapshot
    4. Send the alert (failures propagate, nothing is written)
    5. Write the ErrorResponse JSON with the resolved status code

Per-request state lives in locals of each invocation; the middleware
instance itself only holds configuration and collaborators.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from global_error_handler.api.models import ErrorResponse
from global_error_handler.api.request_capture import (
    BodyCapture,
    build_request_context,
    build_snapshot,
)
from global_error_handler.application.reporting import ReportErrorUseCase
from global_error_handler.core.registry import ExceptionRegistry, default_registry
from global_error_handler.domain.exceptions import DomainError
from global_error_handler.infrastructure.config import HandlerConfig, get_settings
from global_error_handler.telemetry.structured_logging import log_error_event

if TYPE_CHECKING:
    from fastapi import FastAPI

    from global_error_handler.application.interfaces import AlertSinkInterface
    from global_error_handler.infrastructure.config import Settings

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware:
    """Catches unhandled exceptions and returns structured JSON error responses.

    Attributes:
        app: The wrapped ASGI application.
        registry: Exception to status code registry.
        config: Middleware behavior (environment, deadline, body limit).
    """

    def __init__(
        self,
        app: ASGIApp,
        alert_sink: AlertSinkInterface,
        registry: ExceptionRegistry | None = None,
        config: HandlerConfig | None = None,
    ) -> None:
        """Initialize error handling middleware.

        Args:
            app: The ASGI application.
            alert_sink: Alerting channel receiving failure reports.
            registry: Status code registry. None uses default_registry().
            config: Handler configuration. None uses HandlerConfig defaults.
        """
        self.app = app
        self.registry = registry if registry is not None else default_registry()
        self.config = config or HandlerConfig()
        self._reporter = ReportErrorUseCase(
            alert_sink,
            environment=self.config.environment,
            attachment_filename=self.config.attachment_filename,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        capture = BodyCapture(receive, self.config.max_body_bytes)
        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, capture, send_wrapper)
        except Exception as exc:
            status_code = self.registry.resolve(exc)
            await self._report(exc, status_code, scope, capture)

            if response_started:
                logger.error(
                    "response_already_started: path=%s, error_type=%s",
                    scope.get("path", ""),
                    type(exc).__name__,
                )
                raise

            response = JSONResponse(
                status_code=status_code,
                content=ErrorResponse(
                    status=status_code,
                    message=self._client_message(exc, status_code),
                    name=type(exc).__name__,
                ).model_dump(),
            )
            await response(scope, capture, send)

    async def _report(
        self,
        exc: Exception,
        status_code: int,
        scope: Scope,
        capture: BodyCapture,
    ) -> None:
        """Log the failure and send the alert within the configured deadline."""
        context = build_request_context(scope)
        logger.error(
            "unhandled_exception: method=%s, url=%s, client_ip=%s, status_code=%s, error=%s",
            context.method,
            context.url,
            context.client_ip,
            status_code,
            exc,
            exc_info=exc,
        )

        async with asyncio.timeout(self.config.alert_timeout_seconds):
            body = await capture.drain()
            snapshot = build_snapshot(scope, body, exc)
            log_error_event(
                {
                    "event": "unhandled_exception",
                    "status_code": status_code,
                    "error_type": type(exc).__name__,
                    "error_message": str(exc),
                    "method": context.method,
                    "path": snapshot.path,
                    "client_ip": context.client_ip,
                    "environment": self.config.environment,
                    "body_truncated": capture.truncated,
                    "exception_details": snapshot.exception_details,
                }
            )
            await self._reporter.execute(exc, context, snapshot.to_payload())

    def _client_message(self, exc: Exception, status_code: int) -> str:
        if (
            status_code >= 500
            and not isinstance(exc, DomainError)
            and not self.config.expose_unclassified_messages
        ):
            return self.config.unclassified_message
        return str(exc)


def setup_error_handler(
    app: FastAPI,
    alert_sink: AlertSinkInterface,
    registry: ExceptionRegistry | None = None,
    settings: Settings | None = None,
) -> ExceptionRegistry:
    """Add the error handling middleware to a FastAPI application.

    Call before the application starts. The registry is returned (and kept
    on ``app.state.exception_registry``) so callers can register custom
    mappings at startup.

    Args:
        app: FastAPI application instance.
        alert_sink: Alerting channel receiving failure reports.
        registry: Status code registry. None uses default_registry().
        settings: Application settings. None uses get_settings().

    Returns:
        The registry used by the middleware.
    """
    settings = settings or get_settings()
    registry = registry if registry is not None else default_registry()

    app.add_middleware(
        ErrorHandlerMiddleware,
        alert_sink=alert_sink,
        registry=registry,
        config=settings.handler,
    )
    app.state.exception_registry = registry
    app.state.alert_sink = alert_sink
    logger.info(
        "Error handling middleware registered (environment=%s)",
        settings.handler.environment,
    )
    return registry


__all__ = ["ErrorHandlerMiddleware", "setup_error_handler"]
