"""Alerting channel implementations.

This module provides concrete implementations of AlertSinkInterface.

Key Sinks:
    - TelegramAlertSink: Posts alerts to a Telegram chat via the Bot API
    - StructuredLogAlertSink: Writes alerts to the structured error log

Note:
    Delivery failures propagate to the caller.
"""

from __future__ import annotations

import json
import logging
import types

import httpx

from global_error_handler.infrastructure.config import Settings, TelegramConfig
from global_error_handler.telemetry.structured_logging import log_error_event

logger = logging.getLogger(__name__)

TELEGRAM_MESSAGE_LIMIT = 4096
"""Maximum text length accepted by Telegram's sendMessage."""


class TelegramAlertSink:
    """Alert sink that posts to a Telegram chat.

    Sends the alert header with ``sendMessage`` and the snapshot attachment
    with ``sendDocument``. The httpx client is created lazily on first use
    and can be shared across concurrent requests.

    Attributes:
        config: Telegram configuration (token, chat id, base URL, timeout).
        client: httpx.AsyncClient instance (initialized lazily).
    """

    __slots__ = ("_transport", "client", "config")

    def __init__(
        self,
        config: TelegramConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Telegram sink.

        Args:
            config: Telegram configuration. Must have bot_token and chat_id.
            transport: Custom httpx transport (used by tests).

        Raises:
            ValueError: If the bot token or chat id is missing.
        """
        if not config.enabled:
            raise ValueError("Telegram alerting requires bot_token and chat_id")
        self.config = config
        self.client: httpx.AsyncClient | None = None
        self._transport = transport

    async def __aenter__(self) -> TelegramAlertSink:
        self._ensure_client()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        await self.close()

    def _ensure_client(self) -> httpx.AsyncClient:
        if self.client is None:
            self.client = httpx.AsyncClient(
                base_url=f"{self.config.api_base_url}/bot{self.config.bot_token}",
                timeout=httpx.Timeout(self.config.timeout),
                transport=self._transport,
            )
        return self.client

    async def send_error(self, message: str, attachment: bytes, filename: str) -> None:
        """Post the alert header and the snapshot document.

        Raises:
            httpx.HTTPStatusError: If Telegram rejects either call.
            httpx.RequestError: If Telegram is unreachable.
        """
        client = self._ensure_client()

        response = await client.post(
            "/sendMessage",
            json={
                "chat_id": self.config.chat_id,
                "text": message[:TELEGRAM_MESSAGE_LIMIT],
            },
        )
        response.raise_for_status()

        response = await client.post(
            "/sendDocument",
            data={"chat_id": self.config.chat_id},
            files={"document": (filename, attachment, "application/json")},
        )
        response.raise_for_status()
        logger.debug("Telegram alert delivered to chat %s", self.config.chat_id)

    async def close(self) -> None:
        """Close the httpx client. Safe to call multiple times."""
        if self.client:
            await self.client.aclose()
            self.client = None


class StructuredLogAlertSink:
    """Alert sink that writes alerts to the structured error log.

    Used when no external alerting channel is configured.
    """

    async def send_error(self, message: str, attachment: bytes, filename: str) -> None:
        """Append an ``error_alert`` event to the JSONL error log."""
        logger.error("error_alert: %s", message.splitlines()[0] if message else "")
        log_error_event(
            {
                "event": "error_alert",
                "message": message,
                "filename": filename,
                "snapshot": json.loads(attachment.decode("utf-8")),
            }
        )

    async def close(self) -> None:
        return None


def build_alert_sink(settings: Settings) -> TelegramAlertSink | StructuredLogAlertSink:
    """Pick the alert sink for *settings*.

    Telegram when it is fully configured, the structured log otherwise.
    """
    if settings.telegram.enabled:
        logger.info("Alerting via Telegram chat %s", settings.telegram.chat_id)
        return TelegramAlertSink(settings.telegram)
    logger.info("Telegram not configured, alerting via structured error log")
    return StructuredLogAlertSink()


__all__ = ["StructuredLogAlertSink", "TelegramAlertSink", "build_alert_sink"]
