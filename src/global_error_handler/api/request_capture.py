"""Request capture for diagnostic snapshots.

This module collects everything the error handling middleware reports
about a failed request: client IP, headers, URL and body.

Body Capture:
    The request body is an ASGI message stream that can only be consumed
    once. BodyCapture wraps ``receive`` and keeps a copy of every body chunk
    the downstream application reads, so capture never takes the body away
    from the application. After a failure, whatever the application left
    unread is drained from the original stream.

Client IP Resolution (first non-empty wins):
    1. X-Forwarded-For (first comma-separated entry, trimmed)
    2. X-Real-IP
    3. REMOTE_ADDR header
    4. Transport peer address
    5. Empty string
"""

from __future__ import annotations

import json
import logging
from typing import Any

from starlette.requests import HTTPConnection
from starlette.types import Message, Receive, Scope

from global_error_handler.api.models import RequestContext, RequestSnapshot
from global_error_handler.core.exception_chain import render_exception_details

logger = logging.getLogger(__name__)


class BodyCapture:
    """Buffering wrapper around an ASGI ``receive`` callable.

    Pass the instance to the downstream application in place of
    ``receive``. Messages are forwarded untouched; body chunks are copied
    up to ``max_bytes``.

    Attributes:
        max_bytes: Maximum number of body bytes kept.
        complete: True once the final body chunk has been seen.
        truncated: True if the body exceeded ``max_bytes``.
    """

    __slots__ = ("_chunks", "_receive", "_size", "complete", "max_bytes", "truncated")

    def __init__(self, receive: Receive, max_bytes: int) -> None:
        self._receive = receive
        self._chunks: list[bytes] = []
        self._size = 0
        self.max_bytes = max_bytes
        self.complete = False
        self.truncated = False

    async def __call__(self) -> Message:
        message = await self._receive()
        self._record(message)
        return message

    def _record(self, message: Message) -> None:
        if message["type"] != "http.request":
            return
        chunk: bytes = message.get("body", b"")
        if chunk and not self.truncated:
            room = self.max_bytes - self._size
            if len(chunk) > room:
                chunk = chunk[:room]
                self.truncated = True
            self._chunks.append(chunk)
            self._size += len(chunk)
        if not message.get("more_body", False):
            self.complete = True

    @property
    def body(self) -> bytes:
        """Body bytes captured so far."""
        return b"".join(self._chunks)

    async def drain(self) -> bytes:
        """Read the rest of the body the application did not consume.

        Stops at the end of the body, on client disconnect, or once
        ``max_bytes`` is exceeded.
        """
        while not self.complete and not self.truncated:
            message = await self._receive()
            if message["type"] == "http.disconnect":
                break
            self._record(message)
        return self.body


def resolve_client_ip(connection: HTTPConnection) -> str:
    """Resolve the client IP address of *connection*."""
    forwarded = connection.headers.get("x-forwarded-for")
    if forwarded:
        first = next((part.strip() for part in forwarded.split(",") if part.strip()), "")
        if first:
            return first

    for header in ("x-real-ip", "remote_addr"):
        value = (connection.headers.get(header) or "").strip()
        if value:
            return value

    if connection.client is not None and connection.client.host:
        return connection.client.host
    return ""


def collect_headers(connection: HTTPConnection) -> dict[str, str]:
    """Return request headers as a dict, joining repeated headers with ", "."""
    headers: dict[str, str] = {}
    for name, value in connection.headers.items():
        headers[name] = f"{headers[name]}, {value}" if name in headers else value
    return headers


def parse_body(raw: bytes) -> Any:
    """Parse a captured body for the snapshot.

    Returns:
        None for an empty body, the decoded JSON value when the body is
        valid JSON, otherwise ``{"raw": <text>}``. A literal ``null`` and
        bodies containing ``NaN``/``Infinity`` are kept raw.
    """
    if not raw:
        return None
    text = raw.decode("utf-8", errors="replace")
    try:
        value = json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        logger.debug("Request body kept raw: %s", exc)
        return {"raw": text}
    if value is None:
        return {"raw": text}
    return value


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-finite JSON constant {name}")


def build_request_context(scope: Scope) -> RequestContext:
    """Build the RequestContext for an HTTP scope."""
    connection = HTTPConnection(scope)
    return RequestContext(
        method=scope.get("method", ""),
        url=str(connection.url),
        client_ip=resolve_client_ip(connection),
        user_agent=connection.headers.get("user-agent"),
    )


def build_snapshot(scope: Scope, body: bytes, exc: BaseException) -> RequestSnapshot:
    """Build the diagnostic snapshot of a failed request.

    Args:
        scope: ASGI HTTP scope of the request.
        body: Captured request body bytes. May be empty.
        exc: The exception that failed the request.
    """
    connection = HTTPConnection(scope)
    return RequestSnapshot(
        method=scope.get("method", ""),
        path=connection.url.path,
        headers=collect_headers(connection),
        query_string=connection.url.query,
        body=parse_body(body),
        exception_details=render_exception_details(exc),
    )


__all__ = [
    "BodyCapture",
    "build_request_context",
    "build_snapshot",
    "collect_headers",
    "parse_body",
    "resolve_client_ip",
]
