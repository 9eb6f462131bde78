"""Telemetry utilities (structured logging)."""

from global_error_handler.telemetry.structured_logging import (
    configure_logging,
    log_error_event,
)

__all__ = ["configure_logging", "log_error_event"]
