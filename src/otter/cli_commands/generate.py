"""``otter generate`` — send one prompt through the model adapter."""

from __future__ import annotations

import asyncio
import sys
from contextlib import aclosing
from pathlib import Path

import click

from otter.cli_commands._output import console, print_increment, print_payload, print_response
from otter.core.interface.client import ModelClient
from otter.core.interface.errors import AdapterError
from otter.core.interface.models import LLMRequest, LLMResponse, Turn


@click.command()
@click.argument("prompt")
@click.option(
    "--config", "-c", "config_path", type=click.Path(exists=True), required=True,
    help="Settings YAML file.",
)
@click.option("--system", "-s", default=None, help="System instruction.")
@click.option("--stream", is_flag=True, help="Stream tokens as they arrive.")
@click.option("--json-output", "as_json", is_flag=True, help="Print the final response as JSON.")
@click.option("--dry-run", is_flag=True, help="Print the wire request only, do not send it.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option("--telemetry", is_flag=True, help="Export tracing spans to the console.")
def generate(
    prompt: str,
    config_path: str,
    system: str | None,
    stream: bool,
    as_json: bool,
    dry_run: bool,
    verbose: bool,
    telemetry: bool,
) -> None:
    """Send PROMPT to the configured model and print the response."""
    from otter.sdk.factory import new_deepseek_model
    from otter.sdk.loader import SettingsLoader
    from otter.utils.log_setup import configure_logging

    try:
        settings = SettingsLoader(Path(config_path)).load()
    except Exception as exc:
        console.print(f"[red]Settings error:[/red] {exc}")
        sys.exit(1)

    configure_logging(settings.log, verbose=verbose)

    request = LLMRequest(system_instruction=system, contents=[Turn.user(prompt)])
    model = new_deepseek_model(settings.llm.deepseek)

    if dry_run:
        try:
            wire = model.transpiler.to_provider(request, model=model.name, stream=stream)
        except AdapterError as exc:
            console.print(f"[red]Conversion error:[/red] {exc}")
            sys.exit(1)
        print_payload(wire.to_payload())
        return

    if telemetry:
        from otter.utils.telemetry import configure_telemetry

        configure_telemetry()

    try:
        final = asyncio.run(_collect(model, request, stream=stream, echo=stream and not as_json))
    except AdapterError as exc:
        console.print(f"[red]Generation error:[/red] {exc}")
        sys.exit(1)

    if final is None:
        console.print("[yellow]No response received.[/yellow]")
        sys.exit(1)

    if stream and not as_json:
        console.print()
    print_response(final, as_json=as_json, show_text=not stream)


async def _collect(
    model: ModelClient,
    request: LLMRequest,
    *,
    stream: bool,
    echo: bool,
) -> LLMResponse | None:
    """Drain the response sequence, echoing increments; return the final response."""
    final: LLMResponse | None = None
    async with aclosing(model.generate_content(request, stream=stream)) as responses:
        async for response in responses:
            if response.partial:
                if echo:
                    print_increment(response)
            else:
                final = response
    return final
