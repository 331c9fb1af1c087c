"""Server-Sent-Events decoder for streaming chat completions.

The decoder is a small state machine (``IDLE -> ACCUMULATING -> FINISHED``)
fed one ``data: <json>`` line at a time. Text deltas are yielded straight
away as partial responses; tool-call deltas are merged per ``index`` until a
``finish_reason`` (or the end of the stream) triggers the final response.

All accumulation state lives on the decoder instance, so each invocation
gets its own buffers.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, AsyncIterator
from enum import Enum

import httpx
from pydantic import ValidationError

from otter.core.interface.assembler import ResponseAssembler
from otter.core.interface.errors import DecodeError, StreamError
from otter.core.interface.models import LLMResponse, TextPart
from otter.core.interface.wire import WireResponse, WireToolCall, WireUsage
from otter.core.polyfills.inline_tool_calls import InlineToolCallParser

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_MARKER = "[DONE]"


class StreamState(str, Enum):
    IDLE = "idle"
    ACCUMULATING = "accumulating"
    FINISHED = "finished"


class StreamDecoder:
    """Rebuilds complete responses from an incremental chunk stream.

    Usage::

        decoder = StreamDecoder()
        async for response in decoder.decode(http_response.aiter_lines()):
            ...
    """

    def __init__(self) -> None:
        self.state = StreamState.IDLE
        self._text: list[str] = []
        self._reasoning: list[str] = []
        self._tool_calls: list[WireToolCall] = []
        self._usage: WireUsage | None = None
        self._assembler = ResponseAssembler()
        self._inline_parser = InlineToolCallParser()

    async def decode(self, lines: AsyncIterable[str]) -> AsyncIterator[LLMResponse]:
        """Consume *lines* and yield partial responses, then the final one.

        Stops reading as soon as a chunk carries a finish reason. Raises
        :class:`StreamError` if reading the underlying stream fails.
        """
        try:
            async for line in lines:
                for response in self.feed(line):
                    yield response
                if self.state is StreamState.FINISHED:
                    return
        except (httpx.HTTPError, httpx.StreamError, OSError) as exc:
            self.state = StreamState.FINISHED
            logger.error("stream error: %s", exc)
            msg = f"stream error: {exc}"
            raise StreamError(msg) from exc

        final = self.finish()
        if final is not None:
            yield final

    def feed(self, line: str) -> list[LLMResponse]:
        """Process one line of the event stream.

        Returns the responses this line produces: at most one partial text
        increment, one partial reasoning increment, and the final response.
        """
        if self.state is StreamState.FINISHED or not line.startswith(DATA_PREFIX):
            return []

        data = line[len(DATA_PREFIX) :].strip()
        if data == DONE_MARKER:
            final = self.finish()
            return [final] if final is not None else []

        try:
            chunk = WireResponse.model_validate_json(data)
        except ValidationError as exc:
            logger.debug("skipping malformed stream chunk: %s", exc)
            return []

        self.state = StreamState.ACCUMULATING
        responses: list[LLMResponse] = []

        if chunk.usage is not None:
            self._usage = chunk.usage

        if not chunk.choices:
            return responses

        choice = chunk.choices[0]
        delta = choice.delta
        if delta is not None:
            reasoning = delta.reasoning_content
            if isinstance(reasoning, str) and reasoning:
                self._reasoning.append(reasoning)
                responses.append(_partial(TextPart(text=reasoning, thought=True)))

            if isinstance(delta.content, str) and delta.content:
                self._text.append(delta.content)
                responses.append(_partial(TextPart(text=delta.content)))

            for position, tool_call in enumerate(delta.tool_calls or []):
                index = tool_call.index if tool_call.index is not None else position
                if index < 0:
                    logger.error("negative tool call index in stream delta: %d", index)
                    msg = f"invalid tool call index: {index}"
                    raise DecodeError(msg)
                self._merge_tool_call(index, tool_call)

        if choice.finish_reason:
            responses.append(self._build_final(choice.finish_reason))

        return responses

    def finish(self) -> LLMResponse | None:
        """Close the stream without a finish reason.

        If text or tool calls were accumulated, a final ``stop`` response is
        synthesized; otherwise there is nothing to emit.
        """
        if self.state is StreamState.FINISHED:
            return None
        if not self._text and not self._tool_calls:
            self.state = StreamState.FINISHED
            return None
        return self._build_final("stop")

    def _merge_tool_call(self, index: int, delta: WireToolCall) -> None:
        while len(self._tool_calls) <= index:
            self._tool_calls.append(WireToolCall())

        current = self._tool_calls[index]
        if delta.id:
            current.id = delta.id
        if delta.type:
            current.type = delta.type
        if delta.function.name:
            current.function.name = delta.function.name
        current.function.arguments += delta.function.arguments

    def _build_final(self, finish_reason: str) -> LLMResponse:
        self.state = StreamState.FINISHED

        text = "".join(self._text)
        tool_calls = [tc for tc in self._tool_calls if tc.function.name or tc.function.arguments]

        if not tool_calls and "{" in text:
            result = self._inline_parser.parse(text)
            if result.tool_calls:
                tool_calls = result.tool_calls
                text = result.remainder

        return self._assembler.build(
            text=text,
            tool_calls=tool_calls,
            reasoning="".join(self._reasoning) or None,
            usage=self._usage,
            finish_reason=finish_reason,
        )


def _partial(part: TextPart) -> LLMResponse:
    return LLMResponse(parts=[part], partial=True)
