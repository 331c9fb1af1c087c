"""Shared CLI output formatters."""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.table import Table

from otter.core.interface.models import FunctionCallPart, LLMResponse  # noqa: TC001

console = Console()


def print_payload(payload: dict[str, Any]) -> None:
    """Pretty-print a wire request payload."""
    console.print_json(json.dumps(payload, ensure_ascii=False))


def print_increment(response: LLMResponse) -> None:
    """Print one partial response without a trailing newline."""
    for thought in response.thoughts:
        console.print(thought, style="dim", end="", markup=False, highlight=False)
    if response.text:
        console.print(response.text, end="", markup=False, highlight=False)


def print_response(response: LLMResponse, *, as_json: bool = False, show_text: bool = True) -> None:
    """Pretty-print a final response."""
    if as_json:
        console.print_json(response.model_dump_json())
        return

    if show_text:
        for thought in response.thoughts:
            console.print(thought, style="dim", markup=False, highlight=False)
        if response.text:
            console.print(response.text, markup=False, highlight=False)

    if response.function_calls:
        print_tool_calls_table(response.function_calls)

    finish = response.finish_reason.value if response.finish_reason else "-"
    usage = response.usage_metadata
    if usage is not None:
        console.print(
            f"[bold]finish:[/bold] {finish}  "
            f"[bold]tokens:[/bold] {usage.prompt_token_count} prompt / "
            f"{usage.candidates_token_count} completion / {usage.total_token_count} total"
        )
    else:
        console.print(f"[bold]finish:[/bold] {finish}")


def print_tool_calls_table(calls: list[FunctionCallPart]) -> None:
    """Pretty-print tool calls as a table."""
    table = Table(title="Tool Calls")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Arguments")

    for call in calls:
        table.add_row(call.id, call.name, _truncate(json.dumps(call.args, ensure_ascii=False)))

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
