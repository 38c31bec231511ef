"""llmwire CLI entrypoint."""

from __future__ import annotations

import logging

import click

from llmwire import __version__


@click.group()
@click.version_option(version=__version__, prog_name="llmwire")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option("--trace", is_flag=True, help="Export tracing spans to the console.")
@click.option(
    "--otlp-endpoint",
    default=None,
    metavar="URL",
    help="Export tracing spans to an OTLP/gRPC collector.",
)
def main(verbose: bool, trace: bool, otlp_endpoint: str | None) -> None:
    """llmwire — translate LLM wire formats to and from a neutral representation."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if trace or otlp_endpoint:
        from llmwire.utils.telemetry import configure_telemetry

        configure_telemetry(export_to_console=trace, otlp_endpoint=otlp_endpoint)


# Register subcommands
from llmwire.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
