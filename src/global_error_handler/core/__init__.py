"""Core helpers for the Global Error Handler."""

from global_error_handler.core.exception_chain import (
    describe_source,
    inner_exception,
    render_exception_details,
    walk_exception_chain,
)
from global_error_handler.core.registry import (
    DEFAULT_STATUS_CODE,
    ExceptionRegistry,
    default_registry,
)

__all__ = [
    "DEFAULT_STATUS_CODE",
    "ExceptionRegistry",
    "default_registry",
    "describe_source",
    "inner_exception",
    "render_exception_details",
    "walk_exception_chain",
]
