"""Transpiler protocol — converts between the generic model and a wire format.

A transpiler translates an :class:`LLMRequest` into a provider request and a
complete provider response back into an :class:`LLMResponse`. Streaming
responses are decoded incrementally by :mod:`otter.core.interface.stream`.
"""

from typing import Any, Protocol

from otter.core.interface.models import LLMRequest, LLMResponse
from otter.core.interface.wire import WireRequest


class Transpiler(Protocol):
    """Protocol for provider-specific request/response transpilers."""

    def to_provider(self, request: LLMRequest, *, model: str, stream: bool = False) -> WireRequest:
        """Convert a generic request into the provider's request shape.

        Raises ``ConversionError`` if any content cannot be expressed; the
        request is then never sent.
        """
        ...

    def from_provider(self, response: dict[str, Any]) -> LLMResponse:
        """Convert one complete provider response into an ``LLMResponse``.

        Raises ``DecodeError`` on malformed responses.
        """
        ...
