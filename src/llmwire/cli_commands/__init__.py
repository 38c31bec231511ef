"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from llmwire.cli_commands.convert import request_cmd, response_cmd
    from llmwire.cli_commands.providers import providers
    from llmwire.cli_commands.stream import stream

    cli.add_command(stream)
    cli.add_command(request_cmd)
    cli.add_command(response_cmd)
    cli.add_command(providers)
