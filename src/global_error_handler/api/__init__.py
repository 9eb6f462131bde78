"""HTTP layer: middleware, request capture, models and app factory."""

from global_error_handler.api.middleware import ErrorHandlerMiddleware, setup_error_handler
from global_error_handler.api.models import ErrorResponse, RequestContext, RequestSnapshot

__all__ = [
    "ErrorHandlerMiddleware",
    "ErrorResponse",
    "RequestContext",
    "RequestSnapshot",
    "setup_error_handler",
]
