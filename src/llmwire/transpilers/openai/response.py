"""OpenAI response transpiler — neutral result to a ``chat.completion``."""

from __future__ import annotations

from typing import Any

from llmwire.core.models import ModelResponse
from llmwire.transpilers.openai.stream import convert_finish_reason, convert_usage
from llmwire.utils.json import dumps


def openai_response_from_result(
    response: ModelResponse,
    *,
    id: str | None = None,
    model: str | None = None,
    created: int | None = None,
) -> dict[str, Any]:
    """Build an OpenAI ``ChatCompletion`` from a complete neutral result.

    ``created`` defaults to the result timestamp in unix seconds.
    """
    message: dict[str, Any] = {
        "role": "assistant",
        "content": response.text or None,
        "refusal": None,
    }
    if response.tool_calls:
        message["tool_calls"] = [
            {
                "id": tc.tool_call_id,
                "type": "function",
                "function": {"name": tc.tool_name, "arguments": dumps(tc.input)},
            }
            for tc in response.tool_calls
        ]

    return {
        "id": id if id is not None else response.response.id,
        "object": "chat.completion",
        "created": (
            created
            if created is not None
            else int(response.response.timestamp.timestamp())
        ),
        "model": model if model is not None else response.response.model_id,
        "choices": [
            {
                "index": 0,
                "message": message,
                "logprobs": None,
                "finish_reason": convert_finish_reason(response.finish_reason),
            }
        ],
        "usage": convert_usage(response.usage),
    }
