"""Tests for response assembly helpers."""

import pytest

from otter.core.interface.assembler import (
    ResponseAssembler,
    build_usage_metadata,
    extract_reasoning_parts,
    map_finish_reason,
    parse_arguments,
)
from otter.core.interface.errors import DecodeError
from otter.core.interface.models import FinishReason, FunctionCallPart, TextPart
from otter.core.interface.wire import PromptTokensDetails, WireFunctionCall, WireToolCall, WireUsage


class TestFinishReason:
    @pytest.mark.parametrize(
        ("reason", "expected"),
        [
            ("stop", FinishReason.STOP),
            ("length", FinishReason.MAX_TOKENS),
            ("tool_calls", FinishReason.STOP),
            ("content_filter", FinishReason.SAFETY),
            ("unexpected_code", FinishReason.OTHER),
            (None, FinishReason.OTHER),
        ],
    )
    def test_mapping(self, reason: str | None, expected: FinishReason) -> None:
        assert map_finish_reason(reason) is expected


class TestUsage:
    def test_none(self) -> None:
        assert build_usage_metadata(None) is None

    def test_without_cache_details(self) -> None:
        usage = build_usage_metadata(WireUsage(prompt_tokens=1, completion_tokens=2, total_tokens=3))
        assert usage is not None
        assert (usage.prompt_token_count, usage.candidates_token_count, usage.total_token_count) == (1, 2, 3)
        assert usage.cached_content_token_count is None

    def test_with_cache_details(self) -> None:
        usage = build_usage_metadata(
            WireUsage(total_tokens=4, prompt_tokens_details=PromptTokensDetails(cached_tokens=2))
        )
        assert usage is not None
        assert usage.cached_content_token_count == 2


class TestReasoning:
    def test_string(self) -> None:
        parts = extract_reasoning_parts("thinking")
        assert parts == [TextPart(text="thinking", thought=True)]

    def test_nested_structures(self) -> None:
        parts = extract_reasoning_parts(
            [{"text": "a"}, {"reasoning_content": "b", "other": "ignored"}, "c", [""], None]
        )
        assert [p.text for p in parts] == ["a", "b", "c"]
        assert all(p.thought for p in parts)

    def test_none_and_empty(self) -> None:
        assert extract_reasoning_parts(None) == []
        assert extract_reasoning_parts("") == []


class TestParseArguments:
    def test_object(self) -> None:
        assert parse_arguments('{"a": [1, 2]}') == {"a": [1, 2]}

    @pytest.mark.parametrize("raw", ["", "  ", "{}", "null"])
    def test_empty_forms(self, raw: str) -> None:
        assert parse_arguments(raw) == {}

    def test_malformed(self) -> None:
        with pytest.raises(DecodeError, match="failed to unmarshal"):
            parse_arguments('{"a": ')

    def test_non_object(self) -> None:
        with pytest.raises(DecodeError, match="JSON object"):
            parse_arguments("[1, 2]")


class TestResponseAssembler:
    def test_build_orders_parts(self) -> None:
        response = ResponseAssembler().build(
            text="Done.",
            tool_calls=[WireToolCall(id="", function=WireFunctionCall(name="now", arguments="{}"))],
            reasoning="why",
            usage=WireUsage(total_tokens=1),
            finish_reason="length",
        )
        assert response.partial is False
        assert isinstance(response.parts[0], TextPart) and response.parts[0].thought
        assert response.parts[1] == TextPart(text="Done.")
        call = response.parts[2]
        assert isinstance(call, FunctionCallPart)
        assert call.id.startswith("call_")
        assert response.finish_reason is FinishReason.MAX_TOKENS

    def test_empty_text_omitted(self) -> None:
        response = ResponseAssembler().build(finish_reason="stop")
        assert response.parts == []
        assert response.usage_metadata is None
