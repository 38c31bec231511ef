"""Shared CLI output formatters."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from llmwire.utils.json import dumps, replace_non_finite

console = Console()

STREAM_STYLES: dict[str, str] = {
    "anthropic": "discrete events",
    "openai": "delta chunks",
    "gemini": "full snapshots",
}


def print_payload(payload: Any, *, pretty: bool = False) -> None:
    """Write one JSON document to stdout without markup or wrapping."""
    if not pretty:
        console.out(dumps(payload), highlight=False)
        return
    text = json.dumps(replace_non_finite(payload), ensure_ascii=False, indent=2)
    console.out(text, highlight=False)


def sse_frame(provider: str, payload: dict[str, Any]) -> str:
    """Encode one payload as a server-sent events frame."""
    data = dumps(payload)
    if provider == "anthropic":
        return f"event: {payload.get('type', 'message')}\ndata: {data}\n"
    return f"data: {data}\n"


def sse_trailer(provider: str) -> str | None:
    """Return the terminal frame a provider's stream ends with, if any."""
    if provider == "openai":
        return "data: [DONE]\n"
    return None


def print_error(label: str, exc: object) -> None:
    console.print(f"[red]{label}:[/red] {escape(str(exc))}", highlight=False)


def print_providers_table(aliases: Mapping[str, str]) -> None:
    """Pretty-print the supported providers and their aliases as a table."""
    table = Table(title="Providers")
    table.add_column("Provider", style="cyan")
    table.add_column("Aliases")
    table.add_column("Stream style")

    for provider, style in STREAM_STYLES.items():
        names = sorted(a for a, target in aliases.items() if target == provider and a != provider)
        table.add_row(provider, ", ".join(names) or "-", style)

    console.print(table)
