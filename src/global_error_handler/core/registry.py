"""Exception to HTTP status code registry."""

from __future__ import annotations

import logging
import threading
from http import HTTPStatus

from global_error_handler.domain.exceptions import DomainError, ErrorKind, classify

logger = logging.getLogger(__name__)

DEFAULT_STATUS_CODE = HTTPStatus.INTERNAL_SERVER_ERROR.value

MappingKey = ErrorKind | type[BaseException]


class ExceptionRegistry:
    """Maps error kinds and exception classes to HTTP status codes.

    Exception classes are matched along the MRO of the raised exception, so
    registering a base class covers its subclasses. Walking up the MRO, a
    class registration wins over a kind registration on the same domain
    class, and a kind registration wins over any class registered above the
    domain class that defines that kind.

    Example
    -------
    >>> registry = default_registry()
    >>> registry.register(KeyError, 404)
    >>> registry.resolve(KeyError("id"))
    404
    """

    __slots__ = ("default_status", "_by_kind", "_by_type", "_lock")

    def __init__(self, default_status: int | HTTPStatus = DEFAULT_STATUS_CODE) -> None:
        self.default_status = _validate_status(default_status)
        self._by_kind: dict[ErrorKind, int] = {}
        self._by_type: dict[type[BaseException], int] = {}
        self._lock = threading.Lock()

    def register(self, key: MappingKey, status_code: int | HTTPStatus) -> None:
        """Map *key* to *status_code*, overwriting any previous mapping."""

        code = _validate_status(status_code)
        with self._lock:
            match key:
                case ErrorKind():
                    self._by_kind[key] = code
                case type() if issubclass(key, BaseException):
                    self._by_type[key] = code
                case _:
                    raise TypeError(
                        f"Expected an ErrorKind or exception class, got {key!r}"
                    )
        logger.debug("Registered status %s for %s", code, key)

    def resolve(self, exc: BaseException) -> int:
        """Return the status code for *exc*, or the default when unmapped."""

        with self._lock:
            for cls in type(exc).__mro__:
                code = self._by_type.get(cls)  # type: ignore[arg-type]
                if code is not None:
                    return code
                if "kind" in vars(cls) and issubclass(cls, DomainError):
                    code = self._by_kind.get(cls.kind)
                    if code is not None:
                        return code
            return self._by_kind.get(classify(exc), self.default_status)

    def mappings(self) -> dict[MappingKey, int]:
        """Return a copy of all registered mappings."""

        with self._lock:
            return {**self._by_kind, **self._by_type}


def default_registry() -> ExceptionRegistry:
    """Build a registry with the standard domain error mappings."""

    registry = ExceptionRegistry()
    registry.register(ErrorKind.NOT_FOUND, HTTPStatus.NOT_FOUND)
    registry.register(ErrorKind.BAD_REQUEST, HTTPStatus.BAD_REQUEST)
    registry.register(ErrorKind.PERMISSION_DENIED, HTTPStatus.FORBIDDEN)
    return registry


def _validate_status(status_code: int | HTTPStatus) -> int:
    code = int(status_code)
    if not 100 <= code <= 599:
        raise ValueError(f"Invalid HTTP status code: {code}")
    return code


__all__ = ["DEFAULT_STATUS_CODE", "ExceptionRegistry", "MappingKey", "default_registry"]
