"""Application layer for the Global Error Handler.

Use cases orchestrating alert formatting and dispatch, plus the
interfaces they depend on.
"""

from global_error_handler.application.interfaces import AlertSinkInterface
from global_error_handler.application.reporting import (
    ReportErrorUseCase,
    encode_snapshot,
    format_alert_message,
)

__all__ = [
    "AlertSinkInterface",
    "ReportErrorUseCase",
    "encode_snapshot",
    "format_alert_message",
]
