"""``llmwire providers`` — list supported providers."""

from __future__ import annotations

import click

from llmwire.cli_commands._output import print_providers_table


@click.command()
def providers() -> None:
    """List supported providers, their aliases and stream styles."""
    from llmwire.translate import PROVIDER_ALIASES

    print_providers_table(PROVIDER_ALIASES)
