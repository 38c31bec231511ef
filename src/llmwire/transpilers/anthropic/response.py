"""Anthropic response transpiler — neutral result to a ``Message``."""

from __future__ import annotations

from typing import Any

from llmwire.core.events import Usage
from llmwire.core.models import ModelResponse, ToolCallPart
from llmwire.transpilers.anthropic.stream import convert_stop_reason


def anthropic_response_from_result(
    response: ModelResponse,
    *,
    id: str | None = None,
    model: str | None = None,
) -> dict[str, Any]:
    """Build an Anthropic ``Message`` from a complete neutral result.

    ``id`` and ``model`` override the values recorded in ``response.response``.
    """
    return {
        "id": id if id is not None else response.response.id,
        "type": "message",
        "role": "assistant",
        "model": model if model is not None else response.response.model_id,
        "content": _content_blocks(response),
        "stop_reason": convert_stop_reason(response.finish_reason),
        "stop_sequence": None,
        "usage": _usage(response.usage),
    }


def _content_blocks(response: ModelResponse) -> list[dict[str, Any]]:
    blocks: list[dict[str, Any]] = []
    if response.text:
        blocks.append(_text_block(response.text))
    for tool_call in response.tool_calls:
        blocks.append(_tool_use_block(tool_call))
    # Anthropic requires at least one content block
    if not blocks:
        blocks.append(_text_block(""))
    return blocks


def _text_block(text: str) -> dict[str, Any]:
    return {"type": "text", "text": text, "citations": None}


def _tool_use_block(tool_call: ToolCallPart) -> dict[str, Any]:
    return {
        "type": "tool_use",
        "id": tool_call.tool_call_id,
        "name": tool_call.tool_name,
        "input": tool_call.input,
    }


def _usage(usage: Usage) -> dict[str, Any]:
    return {
        "input_tokens": usage.input_tokens or 0,
        "output_tokens": usage.output_tokens or 0,
        "cache_creation_input_tokens": None,
        "cache_read_input_tokens": None,
        "cache_creation": None,
        "server_tool_use": None,
        "service_tier": None,
    }
