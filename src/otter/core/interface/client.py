"""ModelClient — the agent runtime's entry point to an OpenAI-compatible model.

``generate_content`` is an async generator: it yields partial responses
(streaming only) followed by one final response, and raises an
:class:`~otter.core.interface.errors.AdapterError` exactly once if anything
fails. Production is driven by consumption; nothing is read ahead.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator

import httpx
from opentelemetry.trace import Span, Status, StatusCode

from otter.core.interface.config import ModelConfig
from otter.core.interface.errors import DecodeError, StreamError
from otter.core.interface.models import LLMRequest, LLMResponse
from otter.core.interface.stream import StreamDecoder
from otter.core.interface.transpiler import Transpiler
from otter.core.interface.transpilers.openai import OpenAITranspiler
from otter.core.interface.transport import HTTPTransport
from otter.utils.telemetry import (
    ATTR_FINISH_REASON,
    ATTR_MODEL,
    ATTR_PARTIAL_COUNT,
    ATTR_STREAM,
    ATTR_TOKENS_COMPLETION,
    ATTR_TOKENS_PROMPT,
    ATTR_TOKENS_TOTAL,
    ATTR_TOOL_COUNT,
    ATTR_TURN_COUNT,
    get_tracer,
)

logger = logging.getLogger(__name__)

_tracer = get_tracer(__name__)


class ModelClient:
    """Async client for any OpenAI-compatible chat-completion endpoint.

    Usage::

        client = ModelClient(ModelConfig(model="deepseek-chat", api_key="sk-..."))
        async with contextlib.aclosing(client.generate_content(request, stream=True)) as responses:
            async for response in responses:
                ...

    Stopping early (``break`` + ``aclose()``) closes the HTTP response.
    """

    def __init__(self, config: ModelConfig, http_client: httpx.AsyncClient | None = None) -> None:
        self.config = config
        self.transpiler: Transpiler = OpenAITranspiler()
        self.transport = HTTPTransport(config, http_client)

    @property
    def name(self) -> str:
        return self.config.model

    async def generate_content(
        self,
        request: LLMRequest,
        *,
        stream: bool = False,
    ) -> AsyncIterator[LLMResponse]:
        """Generate a response for *request*.

        Args:
            request: The generic request; it is never modified.
            stream: Yield partial responses as tokens arrive.

        Yields:
            ``LLMResponse`` values; only the last one has ``partial=False``.
        """
        wire = self.transpiler.to_provider(request, model=self.config.model, stream=stream)

        span = _tracer.start_span("model.generate")
        span.set_attribute(ATTR_MODEL, self.config.model)
        span.set_attribute(ATTR_STREAM, stream)
        span.set_attribute(ATTR_TURN_COUNT, len(request.contents))
        span.set_attribute(ATTR_TOOL_COUNT, len(request.tools))
        try:
            async with self.transport.post(wire.to_payload()) as response:
                if stream:
                    partials = 0
                    async for item in StreamDecoder().decode(response.aiter_lines()):
                        if item.partial:
                            partials += 1
                        else:
                            _record_result(span, item)
                        yield item
                    span.set_attribute(ATTR_PARTIAL_COUNT, partials)
                else:
                    result = self.transpiler.from_provider(await _read_json(response))
                    _record_result(span, result)
                    yield result
        except Exception as exc:
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR, str(exc)))
            raise
        finally:
            span.end()


async def _read_json(response: httpx.Response) -> dict:
    try:
        raw = await response.aread()
    except httpx.HTTPError as exc:
        logger.error("failed to read response: %s", exc)
        msg = f"failed to read response: {exc}"
        raise StreamError(msg) from exc

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.error("failed to decode response: %s", exc)
        msg = f"failed to decode response: {exc}"
        raise DecodeError(msg) from exc

    if not isinstance(payload, dict):
        msg = "response body is not a JSON object"
        raise DecodeError(msg)
    return payload


def _record_result(span: Span, result: LLMResponse) -> None:
    if result.finish_reason is not None:
        span.set_attribute(ATTR_FINISH_REASON, result.finish_reason.value)
    usage = result.usage_metadata
    if usage is not None:
        span.set_attribute(ATTR_TOKENS_PROMPT, usage.prompt_token_count)
        span.set_attribute(ATTR_TOKENS_COMPLETION, usage.candidates_token_count)
        span.set_attribute(ATTR_TOKENS_TOTAL, usage.total_token_count)
