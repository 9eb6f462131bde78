"""Reusable test utilities and helpers for Global Error Handler tests.

This module provides a recording alert sink, a FastAPI application with
routes that fail in well-known ways, and helpers for driving the raw ASGI
middleware without a test client.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import Any

from fastapi import FastAPI, Request

from global_error_handler.api.middleware import setup_error_handler
from global_error_handler.core.registry import ExceptionRegistry
from global_error_handler.domain.exceptions import (
    BadRequestError,
    NotFoundError,
    PermissionDeniedError,
)
from global_error_handler.infrastructure.config import Settings


@dataclass
class RecordedAlert:
    message: str
    snapshot: dict[str, Any]
    filename: str


class RecordingAlertSink:
    """Alert sink that keeps every alert in memory."""

    def __init__(self, fail_with: Exception | None = None, delay: float = 0.0) -> None:
        self.alerts: list[RecordedAlert] = []
        self.fail_with = fail_with
        self.delay = delay
        self.closed = False

    async def send_error(self, message: str, attachment: bytes, filename: str) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_with is not None:
            raise self.fail_with
        self.alerts.append(
            RecordedAlert(
                message=message,
                snapshot=json.loads(attachment.decode("utf-8")),
                filename=filename,
            )
        )

    async def close(self) -> None:
        self.closed = True


class OuterError(Exception):
    pass


class MiddleError(Exception):
    pass


class InnerError(Exception):
    pass


def raise_chain() -> None:
    """Raise OuterError caused by MiddleError caused by InnerError."""
    try:
        try:
            raise InnerError("disk full")
        except InnerError as exc:
            raise MiddleError("write failed") from exc
    except MiddleError as exc:
        raise OuterError("save failed") from exc


KIND_ERRORS = {
    "not_found": NotFoundError,
    "bad_request": BadRequestError,
    "permission_denied": PermissionDeniedError,
    "generic": RuntimeError,
}


def build_test_app(
    alert_sink: RecordingAlertSink,
    registry: ExceptionRegistry | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create a FastAPI app with the middleware and failing routes."""
    app = FastAPI()
    setup_error_handler(
        app,
        alert_sink=alert_sink,
        registry=registry,
        settings=settings or Settings(),
    )

    @app.get("/items/{item_id}")
    async def get_item(item_id: str) -> dict[str, str]:
        raise NotFoundError(f"Item {item_id} not found")

    @app.post("/orders")
    async def create_order() -> dict[str, str]:
        # Never reads the body.
        raise BadRequestError("Invalid order")

    @app.post("/validate")
    async def validate(request: Request) -> dict[str, str]:
        await request.body()
        raise BadRequestError("Validation failed")

    @app.post("/echo")
    async def echo(request: Request) -> dict[str, str]:
        body = await request.body()
        return {"body": body.decode("utf-8")}

    @app.get("/admin")
    async def admin() -> dict[str, str]:
        raise PermissionDeniedError()

    @app.get("/boom")
    async def boom() -> dict[str, str]:
        raise RuntimeError("database exploded")

    @app.get("/key")
    async def key() -> dict[str, str]:
        raise KeyError("missing")

    @app.get("/chain")
    async def chain() -> dict[str, str]:
        raise_chain()
        return {}

    @app.post("/kinds/{kind}")
    async def fail_with_kind(kind: str, request: Request) -> dict[str, str]:
        payload = await request.json()
        await asyncio.sleep(payload["delay"])
        raise KIND_ERRORS[kind](f"{kind}:{payload['token']}")

    return app


def http_scope(
    method: str = "GET",
    path: str = "/",
    query_string: bytes = b"",
    headers: list[tuple[bytes, bytes]] | None = None,
    client: tuple[str, int] | None = ("10.0.0.1", 50000),
) -> dict[str, Any]:
    """Build a minimal ASGI HTTP scope."""
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "server": ("testserver", 80),
        "path": path,
        "raw_path": path.encode(),
        "root_path": "",
        "query_string": query_string,
        "headers": [(b"host", b"testserver"), *(headers or [])],
        "client": client,
    }


def scripted_receive(*chunks: bytes):
    """Return a receive callable that yields *chunks* as body messages."""
    messages = [
        {"type": "http.request", "body": chunk, "more_body": index < len(chunks) - 1}
        for index, chunk in enumerate(chunks)
    ] or [{"type": "http.request", "body": b"", "more_body": False}]
    calls = {"count": 0}

    async def receive() -> dict[str, Any]:
        if calls["count"] < len(messages):
            message = messages[calls["count"]]
            calls["count"] += 1
            return message
        return {"type": "http.disconnect"}

    receive.calls = calls  # type: ignore[attr-defined]
    return receive


class SentMessages(list):
    """Collects ASGI messages passed to ``send``."""

    async def __call__(self, message: dict[str, Any]) -> None:
        self.append(message)

    @property
    def status(self) -> int | None:
        for message in self:
            if message["type"] == "http.response.start":
                return message["status"]
        return None

    @property
    def body(self) -> bytes:
        return b"".join(m.get("body", b"") for m in self if m["type"] == "http.response.body")
