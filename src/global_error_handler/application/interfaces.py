"""Interfaces (Protocols) for application layer dependencies.

The application layer depends on these interfaces, not concrete
implementations, so alerting channels can be swapped or mocked freely.

Key Interfaces:
    - AlertSinkInterface: External alerting/notification channel

Note:
    Implementations don't need to explicitly inherit from these protocols;
    they just need to implement the required methods.
"""

from __future__ import annotations

from typing import Protocol


class AlertSinkInterface(Protocol):
    """Protocol for alerting channel implementations.

    An alert consists of a short human-readable message and a binary
    attachment (the serialized request snapshot).
    """

    async def send_error(self, message: str, attachment: bytes, filename: str) -> None:
        """Deliver one error alert.

        Args:
            message: Human-readable alert header.
            attachment: UTF-8 encoded JSON document with request diagnostics.
            filename: Suggested filename for the attachment.

        Raises:
            Exception: Any delivery failure. Callers do not recover from
                alerting failures, so implementations should not swallow them.
        """
        ...

    async def close(self) -> None:
        """Release resources held by the sink. Safe to call multiple times."""
        ...


__all__ = ["AlertSinkInterface"]
