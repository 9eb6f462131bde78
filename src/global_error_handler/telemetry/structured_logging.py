"""Structured logging utilities for the Global Error Handler.

This module provides JSON-based structured logging for error events. All
events are written in JSON Lines (JSONL) format to a log file for easy
parsing and analysis.

Key Features:
    - JSON Lines Format: One JSON object per line for easy parsing
    - Automatic Timestamps: Injected if not present in event data
    - Custom Serialization: Handles datetime and Path objects correctly
    - Isolation: Non-propagating logger to avoid duplicate logs

Log File Configuration:
    - Location: ``logs/errors.jsonl`` under the working directory of the
      process, created on the first event (nothing is written at import)
    - Format: JSON Lines (one JSON object per line)
    - Encoding: UTF-8

Event Schema:
    All events should include:
        - event: Event type identifier (e.g., "unhandled_exception")
        - timestamp: ISO 8601 timestamp (auto-injected if missing)
        - Additional fields: status_code, error_type, method, path, etc.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter


def get_logs_dir() -> Path:
    """Get logs directory, creating it if it doesn't exist.

    Resolved against the current working directory.
    """
    logs_dir = Path.cwd() / "logs"
    logs_dir.mkdir(exist_ok=True)
    return logs_dir


ERROR_LOGGER = logging.getLogger("global_error_handler.errors")
ERROR_LOGGER.setLevel(logging.INFO)
ERROR_LOGGER.propagate = False


def _ensure_file_handler() -> None:
    """Attach the JSONL file handler on first use."""
    if not ERROR_LOGGER.handlers:
        handler = logging.FileHandler(get_logs_dir() / "errors.jsonl", encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(message)s"))
        ERROR_LOGGER.addHandler(handler)


def _json_default(value: Any) -> Any:
    """Fallback serializer for datetime and Path objects."""
    match value:
        case datetime():
            return TypeAdapter(datetime).dump_python(value, mode="json")
        case Path():
            return str(value)
        case _:
            return str(value)


def configure_logging(level: str = "info") -> None:
    """Configure root logging for the application.

    Args:
        level: Log level name (debug, info, warning, error, critical).
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


def log_error_event(event: dict[str, Any]) -> None:
    """Emit a structured error event.

    Writes a JSON-formatted log entry to the errors log file. Injects a
    timestamp if the event doesn't carry one (mutates the input dict).

    Args:
        event: Event payload dictionary. Should contain:
            - event: str - Event type identifier (e.g., "unhandled_exception",
              "error_alert")
            - Additional fields as needed:
                - status_code: HTTP status written to the client
                - error_type: Exception class name
                - error_message: Exception message
                - method / path / client_ip: Request metadata

    Example:
        >>> log_error_event({
        ...     "event": "unhandled_exception",
        ...     "status_code": 404,
        ...     "error_type": "NotFoundError",
        ... })
    """
    event.setdefault("timestamp", datetime.now(UTC).isoformat())
    _ensure_file_handler()
    ERROR_LOGGER.info(json.dumps(event, default=_json_default, ensure_ascii=False))


__all__ = ["configure_logging", "get_logs_dir", "log_error_event"]
