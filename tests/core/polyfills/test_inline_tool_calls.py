"""Tests for InlineToolCallParser."""

import json

from otter.core.polyfills.inline_tool_calls import InlineToolCallParser


class TestInlineToolCallParser:
    def setup_method(self) -> None:
        self.parser = InlineToolCallParser()

    def test_recovers_call_and_strips_span(self) -> None:
        text = (
            'Sure, one sec. {"name":"create_event","arguments":'
            '{"summary":"Standup","dtstart":"2024-05-06T09:00:00Z"}} done.'
        )
        result = self.parser.parse(text)
        assert result.remainder == "Sure, one sec.  done."
        assert len(result.tool_calls) == 1
        call = result.tool_calls[0]
        assert call.type == "function"
        assert call.function.name == "create_event"
        assert json.loads(call.function.arguments) == {
            "summary": "Standup",
            "dtstart": "2024-05-06T09:00:00Z",
        }
        assert call.id.startswith("call_")

    def test_string_arguments_kept_verbatim(self) -> None:
        result = self.parser.parse('{"name": "now", "arguments": "{\\"tz\\": \\"UTC\\"}"}')
        assert result.tool_calls[0].function.arguments == '{"tz": "UTC"}'
        assert result.remainder == ""

    def test_explicit_id_is_used(self) -> None:
        result = self.parser.parse('{"id": "call_given", "name": "now", "arguments": {}}')
        assert result.tool_calls[0].id == "call_given"

    def test_braces_inside_strings_do_not_confuse_scan(self) -> None:
        text = 'Note {"name": "create_event", "arguments": {"summary": "Fix } and { bugs"}} end'
        result = self.parser.parse(text)
        assert result.remainder == "Note  end"
        assert json.loads(result.tool_calls[0].function.arguments) == {"summary": "Fix } and { bugs"}

    def test_non_tool_json_kept_in_text(self) -> None:
        text = 'The payload {"tz": "UTC", "name": "x"} is fine.'
        result = self.parser.parse(text)
        assert result.tool_calls == []
        assert result.remainder == text

    def test_invalid_json_brace_treated_as_text(self) -> None:
        text = "Use {curly} braces {"
        result = self.parser.parse(text)
        assert result.tool_calls == []
        assert result.remainder == text

    def test_multiple_calls_in_order(self) -> None:
        text = (
            '{"name": "list_events", "arguments": {"day": "mon"}} then '
            '{"name": "create_event", "arguments": {"summary": "1:1"}}'
        )
        result = self.parser.parse(text)
        assert [c.function.name for c in result.tool_calls] == ["list_events", "create_event"]
        assert result.remainder == "then"

    def test_fabricated_ids_unique(self) -> None:
        text = '{"name": "a", "arguments": {}} {"name": "b", "arguments": {}}'
        ids = [c.id for c in self.parser.parse(text).tool_calls]
        assert len(set(ids)) == 2

    def test_name_must_be_string(self) -> None:
        result = self.parser.parse('{"name": 3, "arguments": {}}')
        assert result.tool_calls == []
        assert result.remainder == '{"name": 3, "arguments": {}}'

    def test_empty_text(self) -> None:
        result = self.parser.parse("")
        assert result.tool_calls == []
        assert result.remainder == ""

    def test_plain_text_is_trimmed(self) -> None:
        assert self.parser.parse("  just prose  ").remainder == "just prose"
