"""API models for the Global Error Handler.

Pydantic models for the error response body and the diagnostic request
snapshot, plus the per-request context record.

Key Models:
    - ErrorResponse: JSON body returned to clients for failed requests
    - RequestSnapshot: Diagnostic capture of a failed request
    - RequestContext: Request metadata used in alert headers
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Response model for error responses.

    Standardized error body written by the error handling middleware.

    Attributes:
        status: HTTP status code. Always equals the response status.
        message: Human-readable error message.
        name: Exception class name, for client-side branching.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    status: int = Field(..., ge=100, le=599, description="HTTP status code")
    message: str = Field(..., description="Error message")
    name: str = Field(..., description="Exception type name")


class RequestSnapshot(BaseModel):
    """Diagnostic capture of one failed request.

    Serialized with PascalCase keys (``Method``, ``Path``, ``Headers``,
    ``QueryString``, ``Body``, ``ExceptionDetails``) for the alert attachment.

    Attributes:
        method: HTTP method.
        path: Request path without query string.
        headers: Request headers. Repeated headers are joined with ", ".
        query_string: Raw query string without the leading "?".
        body: Parsed JSON body, ``{"raw": text}`` for non-JSON bodies, or
            None when the request had no body.
        exception_details: Rendered exception chain, outer to inner.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    method: str = Field(..., alias="Method")
    path: str = Field(..., alias="Path")
    headers: dict[str, str] = Field(default_factory=dict, alias="Headers")
    query_string: str = Field(default="", alias="QueryString")
    body: Any = Field(default=None, alias="Body")
    exception_details: list[str] = Field(default_factory=list, alias="ExceptionDetails")

    def to_payload(self) -> dict[str, Any]:
        """Return the snapshot as a JSON-compatible dict keyed by wire names."""
        return self.model_dump(by_alias=True, mode="json")


@dataclass(slots=True, frozen=True)
class RequestContext:
    """Context of a failed request.

    Immutable record built once per failed request from the ASGI scope.

    Attributes:
        method: HTTP method.
        url: Full URL (scheme, host, path and query string).
        client_ip: Resolved client IP address. Empty string if unknown.
        user_agent: User-Agent header value. None if not present.
    """

    method: str
    url: str
    client_ip: str
    user_agent: str | None = None


__all__ = ["ErrorResponse", "RequestContext", "RequestSnapshot"]
