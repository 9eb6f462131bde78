"""Exception chain rendering.

Walks the cause relation of an exception depth-first and turns every
exception into an ExceptionRecord. Exception groups recurse into each of
their members; any other exception recurses into its explicit cause, or
into its implicit context unless that was suppressed with ``raise ... from
None``.

Example:
    >>> try:
    ...     try:
    ...         raise KeyError("id")
    ...     except KeyError as exc:
    ...         raise LookupError("user missing") from exc
    ... except LookupError as exc:
    ...     render_exception_details(exc)
    ['LookupError: user missing (at ...)', "  KeyError: 'id' (at ...)"]
"""

from __future__ import annotations

import traceback
from collections.abc import Iterator

from global_error_handler.domain.value_objects import ExceptionRecord


def describe_source(exc: BaseException) -> str:
    """Return the innermost traceback frame of *exc* as "file:line in func".

    Returns an empty string for exceptions that were never raised.
    """
    if exc.__traceback__ is None:
        return ""
    frames = traceback.extract_tb(exc.__traceback__)
    if not frames:
        return ""
    frame = frames[-1]
    return f"{frame.filename}:{frame.lineno} in {frame.name}"


def inner_exception(exc: BaseException) -> BaseException | None:
    """Return the exception that caused *exc*, if any."""
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__suppress_context__:
        return None
    return exc.__context__


def walk_exception_chain(exc: BaseException) -> Iterator[ExceptionRecord]:
    """Yield one record per exception in the chain, outer to inner."""
    seen: set[int] = set()

    def _walk(current: BaseException, depth: int) -> Iterator[ExceptionRecord]:
        if id(current) in seen:
            return
        seen.add(id(current))

        yield ExceptionRecord(
            type_name=type(current).__name__,
            message=str(current),
            source=describe_source(current),
            depth=depth,
        )

        match current:
            case BaseExceptionGroup():
                for member in current.exceptions:
                    yield from _walk(member, depth + 1)
            case _:
                inner = inner_exception(current)
                if inner is not None:
                    yield from _walk(inner, depth + 1)

    yield from _walk(exc, 0)


def render_exception_details(exc: BaseException) -> list[str]:
    """Render the chain of *exc* as indented lines."""
    return [record.render() for record in walk_exception_chain(exc)]


__all__ = [
    "describe_source",
    "inner_exception",
    "render_exception_details",
    "walk_exception_chain",
]
