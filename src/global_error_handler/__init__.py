"""Global Error Handler - error handling middleware for FastAPI services."""

from global_error_handler.api import (
    ErrorHandlerMiddleware,
    ErrorResponse,
    RequestContext,
    RequestSnapshot,
    setup_error_handler,
)
from global_error_handler.application import AlertSinkInterface, ReportErrorUseCase
from global_error_handler.core import (
    ExceptionRegistry,
    default_registry,
    render_exception_details,
)
from global_error_handler.domain import (
    BadRequestError,
    DomainError,
    ErrorKind,
    NotFoundError,
    PermissionDeniedError,
)
from global_error_handler.infrastructure import (
    Settings,
    StructuredLogAlertSink,
    TelegramAlertSink,
    build_alert_sink,
    get_settings,
)

__all__ = [
    "AlertSinkInterface",
    "BadRequestError",
    "DomainError",
    "ErrorHandlerMiddleware",
    "ErrorKind",
    "ErrorResponse",
    "ExceptionRegistry",
    "NotFoundError",
    "PermissionDeniedError",
    "ReportErrorUseCase",
    "RequestContext",
    "RequestSnapshot",
    "Settings",
    "StructuredLogAlertSink",
    "TelegramAlertSink",
    "build_alert_sink",
    "default_registry",
    "get_settings",
    "render_exception_details",
    "setup_error_handler",
]
