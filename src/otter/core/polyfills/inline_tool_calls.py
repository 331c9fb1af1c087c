"""Inline tool-call parser — recovers tool calls written into assistant text.

Some OpenAI-compatible models ignore the structured ``tool_calls`` field and
print the call as a JSON object in their prose instead, e.g.::

    Sure, one sec. {"name": "create_event", "arguments": {"summary": "Standup"}}

The parser finds each ``{``, lets :meth:`json.JSONDecoder.raw_decode` report
where a valid JSON value ends (so braces inside string literals never
confuse it), and keeps objects with a string ``name`` plus an ``arguments``
key as tool calls. Everything else stays in the text verbatim.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from otter.core.interface.models import new_call_id
from otter.core.interface.wire import WireFunctionCall, WireToolCall

_decoder = json.JSONDecoder()


@dataclass
class InlineParseResult:
    """Tool calls found in the text, and the text with them removed."""

    tool_calls: list[WireToolCall] = field(default_factory=list)
    remainder: str = ""


class InlineToolCallParser:
    """Extracts tool calls embedded as raw JSON inside assistant text."""

    def parse(self, text: str) -> InlineParseResult:
        """Scan *text* left to right for JSON tool-call objects.

        Recovered calls are returned in the order found. The remainder is the
        original text minus the accepted JSON spans, whitespace-trimmed.
        """
        if not text:
            return InlineParseResult()

        tool_calls: list[WireToolCall] = []
        remainder: list[str] = []
        cursor = 0

        while cursor < len(text):
            brace = text.find("{", cursor)
            if brace == -1:
                remainder.append(text[cursor:])
                break

            remainder.append(text[cursor:brace])

            try:
                candidate, end = _decoder.raw_decode(text, brace)
            except json.JSONDecodeError:
                # Not JSON: keep the brace as literal text.
                remainder.append("{")
                cursor = brace + 1
                continue

            tool_call = self._to_tool_call(candidate)
            if tool_call is not None:
                tool_calls.append(tool_call)
            else:
                remainder.append(text[brace:end])
            cursor = end

        return InlineParseResult(tool_calls=tool_calls, remainder="".join(remainder).strip())

    @staticmethod
    def _to_tool_call(candidate: object) -> WireToolCall | None:
        if not isinstance(candidate, dict):
            return None
        name = candidate.get("name")
        if not isinstance(name, str) or "arguments" not in candidate:
            return None

        args = candidate["arguments"]
        arguments = args if isinstance(args, str) else json.dumps(args, ensure_ascii=False)

        call_id = candidate.get("id")
        if not isinstance(call_id, str) or not call_id:
            call_id = new_call_id()

        return WireToolCall(
            id=call_id,
            type="function",
            function=WireFunctionCall(name=name, arguments=arguments),
        )
