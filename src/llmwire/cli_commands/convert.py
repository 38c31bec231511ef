"""``llmwire request`` / ``llmwire response`` — one-shot conversions."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from llmwire.cli_commands._output import print_error, print_payload
from llmwire.core.errors import TranslationError
from llmwire.core.models import ModelResponse


def _load_json(path: str) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"{path}: {exc.msg}") from exc


@click.command("request")
@click.argument("provider")
@click.argument("request_file", type=click.Path(exists=True, dir_okay=False))
def request_cmd(provider: str, request_file: str) -> None:
    """Convert a PROVIDER request body in REQUEST_FILE to neutral params."""
    from llmwire.translate import convert_request

    body = _load_json(request_file)
    try:
        params = convert_request(provider, body)
    except (TranslationError, ValidationError) as exc:
        print_error("Conversion error", exc)
        sys.exit(1)

    print_payload(params.to_wire(), pretty=True)


@click.command("response")
@click.argument("provider")
@click.argument("response_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--id", "response_id", default=None, help="Override the response id.")
@click.option("--model", default=None, help="Override the reported model.")
def response_cmd(provider: str, response_file: str, response_id: str | None, model: str | None) -> None:
    """Convert a neutral result in RESPONSE_FILE to a PROVIDER response body."""
    from llmwire.translate import convert_response

    data = _load_json(response_file)
    try:
        response = ModelResponse.model_validate(data)
        body = convert_response(provider, response, id=response_id, model=model)
    except (TranslationError, ValidationError) as exc:
        print_error("Conversion error", exc)
        sys.exit(1)

    print_payload(body, pretty=True)
