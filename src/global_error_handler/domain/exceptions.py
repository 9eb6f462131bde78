"""Domain exceptions for the Global Error Handler.

This module defines pure domain exceptions with no framework dependencies.
Request handlers raise these when they detect a business rule violation;
the error handling middleware classifies them into HTTP status codes.

Design Principles:
    - Framework-agnostic: No FastAPI, Starlette, or pydantic deps
    - Closed set: Every domain exception carries one ErrorKind tag
    - Safe messages: The message is meant to be shown to the caller

Exception Hierarchy:
    - DomainError: Base exception for all domain errors (kind GENERIC)
    - NotFoundError: Requested resource does not exist
    - BadRequestError: Request violates a business rule
    - PermissionDeniedError: Caller may not perform the operation
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed enumeration of domain error kinds."""

    NOT_FOUND = "not_found"
    BAD_REQUEST = "bad_request"
    PERMISSION_DENIED = "permission_denied"
    GENERIC = "generic"


class DomainError(Exception):
    """Base exception for all domain errors.

    Subclasses pin ``kind`` and provide a default message, so handlers can
    raise them without arguments.

    Attributes:
        kind: Error kind used for status code classification.
        message: Human-readable message returned to the caller.
    """

    kind: ErrorKind = ErrorKind.GENERIC

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "Item not found") -> None:
        super().__init__(message)


class BadRequestError(DomainError):
    """Raised when a request violates a business rule."""

    kind = ErrorKind.BAD_REQUEST

    def __init__(self, message: str = "Something went wrong") -> None:
        super().__init__(message)


class PermissionDeniedError(DomainError):
    """Raised when the caller is not allowed to perform an operation."""

    kind = ErrorKind.PERMISSION_DENIED

    def __init__(self, message: str = "You have no access") -> None:
        super().__init__(message)


def classify(exc: BaseException) -> ErrorKind:
    """Return the error kind of an exception.

    Anything that is not a DomainError is GENERIC.
    """
    match exc:
        case DomainError():
            return exc.kind
        case _:
            return ErrorKind.GENERIC


__all__ = [
    "BadRequestError",
    "DomainError",
    "ErrorKind",
    "NotFoundError",
    "PermissionDeniedError",
    "classify",
]
