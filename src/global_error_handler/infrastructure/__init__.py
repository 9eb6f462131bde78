"""Infrastructure implementations for the Global Error Handler."""

from global_error_handler.infrastructure.alert_sinks import (
    StructuredLogAlertSink,
    TelegramAlertSink,
    build_alert_sink,
)
from global_error_handler.infrastructure.config import Settings, get_settings

__all__ = [
    "Settings",
    "StructuredLogAlertSink",
    "TelegramAlertSink",
    "build_alert_sink",
    "get_settings",
]
