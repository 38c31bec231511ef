"""Gemini response transpiler — neutral result to a ``GenerateContentResponse``."""

from __future__ import annotations

from typing import Any

from llmwire.core.models import ModelResponse
from llmwire.transpilers.gemini.stream import convert_finish_reason


def gemini_response_from_result(
    response: ModelResponse,
    *,
    response_id: str | None = None,
    model_version: str | None = None,
) -> dict[str, Any]:
    """Build a Gemini ``GenerateContentResponse`` with a single candidate."""
    parts: list[dict[str, Any]] = []
    if response.text:
        parts.append({"text": response.text})
    for tool_call in response.tool_calls:
        parts.append(
            {
                "functionCall": {
                    "id": tool_call.tool_call_id,
                    "name": tool_call.tool_name,
                    "args": tool_call.input,
                }
            }
        )

    input_tokens = response.usage.input_tokens or 0
    output_tokens = response.usage.output_tokens or 0
    total_tokens = response.usage.total_tokens

    return {
        "responseId": response_id if response_id is not None else response.response.id,
        "modelVersion": (
            model_version if model_version is not None else response.response.model_id
        ),
        "candidates": [
            {
                "content": {"role": "model", "parts": parts or [{"text": ""}]},
                "finishReason": convert_finish_reason(response.finish_reason),
            }
        ],
        "usageMetadata": {
            "promptTokenCount": input_tokens,
            "candidatesTokenCount": output_tokens,
            "totalTokenCount": (
                total_tokens if total_tokens is not None else input_tokens + output_tokens
            ),
        },
    }
