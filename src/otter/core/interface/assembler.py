"""Response assembly shared by the synchronous and streaming decoders.

Turns decoded wire pieces (text, tool calls, reasoning, usage, finish
reason) into a final :class:`LLMResponse`. Part order is always reasoning,
then answer text, then one function call per tool call.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from otter.core.interface.errors import DecodeError
from otter.core.interface.models import (
    FinishReason,
    FunctionCallPart,
    LLMResponse,
    Part,
    TextPart,
    UsageMetadata,
    new_call_id,
)
from otter.core.interface.wire import WireToolCall, WireUsage

logger = logging.getLogger(__name__)

_FINISH_REASONS: dict[str, FinishReason] = {
    "stop": FinishReason.STOP,
    "length": FinishReason.MAX_TOKENS,
    "tool_calls": FinishReason.STOP,
    "content_filter": FinishReason.SAFETY,
}

# Keys providers use for reasoning text inside structured reasoning payloads.
_REASONING_KEYS = ("text", "content", "reasoning", "reasoning_content")


def map_finish_reason(reason: str | None) -> FinishReason:
    """Map an OpenAI ``finish_reason`` string to a :class:`FinishReason`."""
    return _FINISH_REASONS.get(reason or "", FinishReason.OTHER)


def build_usage_metadata(usage: WireUsage | None) -> UsageMetadata | None:
    if usage is None:
        return None
    metadata = UsageMetadata(
        prompt_token_count=usage.prompt_tokens,
        candidates_token_count=usage.completion_tokens,
        total_token_count=usage.total_tokens,
    )
    if usage.prompt_tokens_details is not None:
        metadata.cached_content_token_count = usage.prompt_tokens_details.cached_tokens
    return metadata


def extract_reasoning_parts(reasoning: Any) -> list[TextPart]:
    """Collect reasoning texts from a provider-specific reasoning field.

    Accepts a string, a list (walked recursively) or a mapping holding the
    text under one of the usual keys.
    """
    parts: list[TextPart] = []
    _collect_reasoning(reasoning, parts)
    return parts


def _collect_reasoning(value: Any, parts: list[TextPart]) -> None:
    if isinstance(value, str):
        if value:
            parts.append(TextPart(text=value, thought=True))
    elif isinstance(value, list):
        for item in value:
            _collect_reasoning(item, parts)
    elif isinstance(value, dict):
        for key in _REASONING_KEYS:
            text = value.get(key)
            if isinstance(text, str) and text:
                parts.append(TextPart(text=text, thought=True))


def parse_arguments(raw: str) -> dict[str, Any]:
    """Decode a tool call's JSON arguments string into a mapping.

    An empty string or ``null`` means no arguments. Anything that is not a
    JSON object raises :class:`DecodeError`.
    """
    if not raw.strip():
        return {}
    try:
        args = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.error("failed to unmarshal function arguments: %s", exc)
        msg = f"failed to unmarshal function arguments: {exc}"
        raise DecodeError(msg) from exc
    if args is None:
        return {}
    if not isinstance(args, dict):
        msg = f"function arguments must be a JSON object, got {type(args).__name__}"
        raise DecodeError(msg)
    return args


def tool_call_parts(tool_calls: list[WireToolCall]) -> list[FunctionCallPart]:
    return [
        FunctionCallPart(
            id=tc.id or new_call_id(),
            name=tc.function.name,
            args=parse_arguments(tc.function.arguments),
        )
        for tc in tool_calls
    ]


class ResponseAssembler:
    """Builds the final (non-partial) response of an invocation."""

    def build(
        self,
        *,
        text: str = "",
        tool_calls: list[WireToolCall] | None = None,
        reasoning: Any = None,
        usage: WireUsage | None = None,
        finish_reason: str | None = None,
    ) -> LLMResponse:
        parts: list[Part] = []
        parts.extend(extract_reasoning_parts(reasoning))
        if text:
            parts.append(TextPart(text=text))
        parts.extend(tool_call_parts(tool_calls or []))

        return LLMResponse(
            parts=parts,
            finish_reason=map_finish_reason(finish_reason),
            usage_metadata=build_usage_metadata(usage),
            partial=False,
        )
