"""Error taxonomy for generation calls.

Transport failures (DNS, refused connections, timeouts) are not wrapped: they
propagate as `httpx.TransportError` subclasses so callers can tell "backend
unreachable" apart from "backend answered with an error".
"""

from __future__ import annotations


class AssistantAPIError(RuntimeError):
    """Base class for client-side generation failures."""


class InvalidURLError(AssistantAPIError):
    """An endpoint or image URL could not be built or is not fetchable."""


class ServerError(AssistantAPIError):
    """The backend answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class DecodingError(AssistantAPIError):
    """A response body, base64 payload, or image did not decode."""
