"""Error types for the model adapter.

Every failure is raised once from the response sequence and ends it. There
is no retry here; retry policy belongs to the caller.
"""

from __future__ import annotations


class AdapterError(Exception):
    """Base error for all model-adapter failures."""


class ConversionError(AdapterError):
    """Request content could not be converted; nothing was sent."""


class EncodeError(ConversionError):
    """A function-call or function-response payload could not be JSON-encoded."""


class TransportError(AdapterError):
    """The request could not be delivered (connect/send failure)."""


class UpstreamError(AdapterError):
    """The upstream endpoint answered with a non-2xx status."""

    def __init__(self, status: int, body: str = "") -> None:
        self.status = status
        self.body = body
        super().__init__(f"API error: {status}" + (f" - {body}" if body else ""))


class DecodeError(AdapterError):
    """A response, or accumulated tool-call arguments, were not valid JSON."""


class StreamError(AdapterError):
    """Reading the event stream failed mid-way."""
