"""Error reporting use case.

Formats the alert header for a failed request and hands it, together with
the serialized request snapshot, to the alerting channel.

Design Principles:
    - Dependency Inversion: Depends on AlertSinkInterface, not a concrete sink
    - Framework-agnostic: No FastAPI or Starlette imports
    - No local recovery: Alerting failures propagate to the caller
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from global_error_handler.core.exception_chain import describe_source, inner_exception

if TYPE_CHECKING:
    from global_error_handler.api.models import RequestContext
    from global_error_handler.application.interfaces import AlertSinkInterface


def format_alert_message(
    exc: BaseException,
    context: RequestContext,
    environment: str | None = None,
) -> str:
    """Build the human-readable alert header for *exc*.

    Args:
        exc: The exception caught by the middleware.
        context: Metadata of the failed request.
        environment: Environment tag (e.g., "production"). Omitted when None
            or empty.

    Returns:
        Multi-line message. The first line is always "<Type>: <message>".
    """
    lines = [f"{type(exc).__name__}: {exc}"]
    inner = inner_exception(exc)
    if inner is not None:
        lines.append(f"Inner Exception: {inner}")
    if environment:
        lines.append(f"Environment: {environment}")

    lines += [
        "",
        f"Source: {describe_source(exc)}",
        "",
        "Request",
        f"Method: [{context.method}]",
        f"Path: {context.url}",
        f"IP Address: {context.client_ip}",
        f"User Agent: {context.user_agent or ''}",
    ]
    return "\n".join(lines)


def encode_snapshot(snapshot: Mapping[str, Any]) -> bytes:
    """Serialize a snapshot payload as a UTF-8 JSON attachment."""
    return json.dumps(snapshot, ensure_ascii=False, indent=2, default=str).encode("utf-8")


class ReportErrorUseCase:
    """Use case for reporting a failed request to the alerting channel.

    Attributes:
        _alert_sink: Alerting channel implementing AlertSinkInterface.
        _environment: Environment tag added to every alert.
        _attachment_filename: Filename used for the snapshot attachment.
    """

    def __init__(
        self,
        alert_sink: AlertSinkInterface,
        environment: str | None = None,
        attachment_filename: str = "request.json",
    ) -> None:
        self._alert_sink = alert_sink
        self._environment = environment
        self._attachment_filename = attachment_filename

    async def execute(
        self,
        exc: BaseException,
        context: RequestContext,
        snapshot: Mapping[str, Any],
    ) -> str:
        """Send one alert for *exc*.

        Args:
            exc: The exception caught by the middleware.
            context: Metadata of the failed request.
            snapshot: Snapshot payload, already keyed by its wire names.

        Returns:
            The alert message that was sent.

        Raises:
            Exception: Whatever the alert sink raises.
        """
        message = format_alert_message(exc, context, self._environment)
        await self._alert_sink.send_error(
            message,
            encode_snapshot(snapshot),
            self._attachment_filename,
        )
        return message


__all__ = ["ReportErrorUseCase", "encode_snapshot", "format_alert_message"]
