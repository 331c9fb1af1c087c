"""Workarounds for models with weak native tool calling."""

from otter.core.polyfills.inline_tool_calls import InlineParseResult, InlineToolCallParser

__all__ = [
    "InlineParseResult",
    "InlineToolCallParser",
]
