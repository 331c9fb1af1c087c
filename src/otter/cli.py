"""otter CLI entrypoint."""

from __future__ import annotations

import click

from otter import __version__


@click.group()
@click.version_option(version=__version__, prog_name="otter")
def main() -> None:
    """otter — talk to an OpenAI-compatible model through the agent adapter."""


# Register subcommands
from otter.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
