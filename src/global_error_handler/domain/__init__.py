"""Domain layer for the Global Error Handler.

Pure Python exceptions and value objects with no framework dependencies.
"""

from global_error_handler.domain.exceptions import (
    BadRequestError,
    DomainError,
    ErrorKind,
    NotFoundError,
    PermissionDeniedError,
    classify,
)
from global_error_handler.domain.value_objects import ExceptionRecord

__all__ = [
    "BadRequestError",
    "DomainError",
    "ErrorKind",
    "ExceptionRecord",
    "NotFoundError",
    "PermissionDeniedError",
    "classify",
]
