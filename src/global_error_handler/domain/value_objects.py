"""Value objects for the Global Error Handler.

Key Value Objects:
    - ExceptionRecord: One rendered entry of an exception chain
"""

from __future__ import annotations

from dataclasses import dataclass

INDENT = "  "
"""Indentation unit for one level of exception nesting."""


@dataclass(slots=True, frozen=True)
class ExceptionRecord:
    """Value object describing one exception in a cause chain.

    Attributes:
        type_name: Class name of the exception (e.g., "ValueError").
        message: ``str()`` of the exception. May be empty.
        source: Innermost frame of the traceback as "file:line in function".
            Empty string when the exception was never raised.
        depth: Nesting depth in the chain. 0 for the caught exception.

    Raises:
        ValueError: If depth is negative.
    """

    type_name: str
    message: str
    source: str = ""
    depth: int = 0

    def __post_init__(self) -> None:
        if self.depth < 0:
            raise ValueError("depth must be >= 0")

    def render(self) -> str:
        """Render as a single line indented by depth."""
        line = f"{INDENT * self.depth}{self.type_name}: {self.message}"
        if self.source:
            line = f"{line} (at {self.source})"
        return line
