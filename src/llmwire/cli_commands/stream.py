"""``llmwire stream`` — translate a recorded neutral event stream."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from llmwire.cli_commands._output import console, print_error, print_payload, sse_frame, sse_trailer
from llmwire.core.config import StreamOptions
from llmwire.core.errors import TranslationError


def _read_events(path: Path) -> list[dict[str, Any]]:
    events: list[dict[str, Any]] = []
    for lineno, line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
        if not line.strip():
            continue
        try:
            events.append(json.loads(line))
        except json.JSONDecodeError as exc:
            raise click.ClickException(f"line {lineno}: {exc.msg}") from exc
    return events


@click.command()
@click.argument("provider")
@click.argument("events_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--id", "stream_id", default="msg_llmwire", show_default=True, help="Message id.")
@click.option("--model", default="unknown", show_default=True, help="Model name to report.")
@click.option("--created", type=int, default=None, help="Creation timestamp (openai).")
@click.option("--sse", is_flag=True, help="Emit server-sent events frames.")
def stream(
    provider: str,
    events_file: str,
    stream_id: str,
    model: str,
    created: int | None,
    sse: bool,
) -> None:
    """Translate neutral events in EVENTS_FILE (JSON Lines) into PROVIDER payloads."""
    from llmwire.translate import resolve_provider, translate_stream

    try:
        canonical = resolve_provider(provider)
        options = StreamOptions(id=stream_id, model=model, created=created)
        events = _read_events(Path(events_file))
        for payload in translate_stream(events, canonical, options):
            if sse:
                console.out(sse_frame(canonical, payload), highlight=False)
            else:
                print_payload(payload)
    except (TranslationError, ValidationError) as exc:
        print_error("Translation error", exc)
        sys.exit(1)

    trailer = sse_trailer(canonical) if sse else None
    if trailer is not None:
        console.out(trailer, highlight=False)
