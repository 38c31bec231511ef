"""Gemini stream adapter — neutral events to ``GenerateContentResponse`` snapshots.

Gemini streams resend the whole response so far on every increment. The
context accumulates text and function-call arguments, and each emitting event
rebuilds the full candidate content from that accumulator rather than
diffing against the previous snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, Field

from llmwire.core.config import StreamOptions
from llmwire.core.events import (
    ErrorEvent,
    FinishEvent,
    FinishStepEvent,
    StreamEvent,
    TextDeltaEvent,
    ToolCallEvent,
    ToolInputDeltaEvent,
    ToolInputEndEvent,
    ToolInputStartEvent,
    check_finish_reason,
)
from llmwire.core.results import (
    SKIP,
    BaseResult,
    ErrorResult,
    SkipResult,
    error_message,
    unknown_event,
    unknown_tool_call,
)
from llmwire.utils.json import dumps, parse_or_empty

logger = logging.getLogger(__name__)


class AccumulatedFunctionCall(BaseModel):
    name: str
    args: str = ""


class GeminiStreamContext(BaseModel):
    """Per-stream state for the Gemini adapter.

    ``accumulated_function_calls`` keeps insertion order, which is the order
    function-call parts appear in every snapshot.
    """

    response_id: str
    model_version: str
    accumulated_text: str = ""
    accumulated_function_calls: dict[str, AccumulatedFunctionCall] = Field(
        default_factory=dict
    )
    input_tokens: int = 0
    output_tokens: int = 0


class GeminiResponseResult(BaseResult):
    outcome: Literal["response"] = "response"
    response: dict[str, Any]

    def payloads(self) -> list[dict[str, Any]]:
        return [self.response]


GeminiStreamResult = GeminiResponseResult | SkipResult | ErrorResult


def create_stream_context(options: StreamOptions) -> GeminiStreamContext:
    """Return a fresh context for one Gemini stream."""
    return GeminiStreamContext(response_id=options.id, model_version=options.model)


def convert_event(event: StreamEvent, context: GeminiStreamContext) -> GeminiStreamResult:
    """Convert one neutral event to at most one full response snapshot."""
    handler = _HANDLERS.get(getattr(event, "type", None))
    if handler is None:
        return unknown_event(event)
    return handler(event, context)


class GeminiStreamTranspiler:
    """Stateless :class:`~llmwire.core.transpiler.StreamTranspiler` for Gemini."""

    provider = "gemini"

    def create_context(self, options: StreamOptions) -> GeminiStreamContext:
        return create_stream_context(options)

    def convert(self, event: StreamEvent, context: GeminiStreamContext) -> GeminiStreamResult:
        return convert_event(event, context)


# ---------------------------------------------------------------------------
# Finish reasons
# ---------------------------------------------------------------------------

FINISH_REASONS: dict[str, str] = {
    "stop": "STOP",
    "length": "MAX_TOKENS",
    "content-filter": "SAFETY",
    # Gemini reports a plain STOP when the content holds function calls
    "tool-calls": "STOP",
}


def convert_finish_reason(finish_reason: str) -> str:
    """Map a neutral finish reason to a Gemini ``FinishReason``."""
    check_finish_reason(finish_reason)
    return FINISH_REASONS.get(finish_reason, "OTHER")


# ---------------------------------------------------------------------------
# Snapshot construction
# ---------------------------------------------------------------------------


def build_content(context: GeminiStreamContext) -> dict[str, Any]:
    """Rebuild the candidate content from everything accumulated so far."""
    parts: list[dict[str, Any]] = []

    if context.accumulated_text:
        parts.append({"text": context.accumulated_text})

    for call_id, call in context.accumulated_function_calls.items():
        parts.append(
            {
                "functionCall": {
                    "id": call_id,
                    "name": call.name,
                    "args": parse_or_empty(call.args),
                }
            }
        )

    if not parts:
        parts.append({"text": ""})

    return {"role": "model", "parts": parts}


def _snapshot(
    context: GeminiStreamContext,
    *,
    input_tokens: int,
    output_tokens: int,
    total_tokens: int | None = None,
    finish_reason: str | None = None,
) -> GeminiResponseResult:
    candidate: dict[str, Any] = {"content": build_content(context)}
    if finish_reason is not None:
        candidate["finishReason"] = finish_reason

    return GeminiResponseResult(
        response={
            "responseId": context.response_id,
            "modelVersion": context.model_version,
            "candidates": [candidate],
            "usageMetadata": {
                "promptTokenCount": input_tokens,
                "candidatesTokenCount": output_tokens,
                "totalTokenCount": (
                    total_tokens if total_tokens is not None else input_tokens + output_tokens
                ),
            },
        }
    )


def _incremental(context: GeminiStreamContext) -> GeminiResponseResult:
    return _snapshot(
        context,
        input_tokens=context.input_tokens,
        output_tokens=context.output_tokens,
    )


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _on_text_delta(event: TextDeltaEvent, context: GeminiStreamContext) -> GeminiStreamResult:
    context.accumulated_text += event.text
    return _incremental(context)


def _on_tool_input_start(
    event: ToolInputStartEvent, context: GeminiStreamContext
) -> GeminiStreamResult:
    context.accumulated_function_calls[event.id] = AccumulatedFunctionCall(
        name=event.tool_name
    )
    return SKIP


def _on_tool_input_delta(
    event: ToolInputDeltaEvent, context: GeminiStreamContext
) -> GeminiStreamResult:
    call = context.accumulated_function_calls.get(event.id)
    if call is None:
        logger.debug("Delta for unknown tool call %s", event.id)
        return unknown_tool_call(event.id)

    call.args += event.delta
    return _incremental(context)


def _on_tool_input_end(
    event: ToolInputEndEvent, context: GeminiStreamContext
) -> GeminiStreamResult:
    if event.id not in context.accumulated_function_calls:
        logger.debug("End for unknown tool call %s", event.id)
        return unknown_tool_call(event.id)
    return _incremental(context)


def _on_tool_call(event: ToolCallEvent, context: GeminiStreamContext) -> GeminiStreamResult:
    context.accumulated_function_calls[event.tool_call_id] = AccumulatedFunctionCall(
        name=event.tool_name, args=dumps(event.input)
    )
    return _incremental(context)


def _on_finish_step(
    event: FinishStepEvent, context: GeminiStreamContext
) -> GeminiStreamResult:
    if event.usage.input_tokens is not None:
        context.input_tokens = event.usage.input_tokens
    if event.usage.output_tokens is not None:
        context.output_tokens = event.usage.output_tokens
    return SKIP


def _on_finish(event: FinishEvent, context: GeminiStreamContext) -> GeminiStreamResult:
    usage = event.total_usage
    return _snapshot(
        context,
        input_tokens=(
            usage.input_tokens if usage.input_tokens is not None else context.input_tokens
        ),
        output_tokens=(
            usage.output_tokens if usage.output_tokens is not None else context.output_tokens
        ),
        total_tokens=usage.total_tokens,
        finish_reason=convert_finish_reason(event.finish_reason),
    )


def _on_error(event: ErrorEvent, context: GeminiStreamContext) -> GeminiStreamResult:
    return ErrorResult(error=error_message(event.error))


def _skip(event: Any, context: GeminiStreamContext) -> GeminiStreamResult:
    return SKIP


_HANDLERS: dict[str, Callable[[Any, GeminiStreamContext], GeminiStreamResult]] = {
    "start": _skip,
    "start-step": _skip,
    # text is accumulated on delta only
    "text-start": _skip,
    "text-delta": _on_text_delta,
    "text-end": _skip,
    "reasoning-start": _skip,
    "reasoning-delta": _skip,
    "reasoning-end": _skip,
    "tool-input-start": _on_tool_input_start,
    "tool-input-delta": _on_tool_input_delta,
    "tool-input-end": _on_tool_input_end,
    "tool-call": _on_tool_call,
    "tool-result": _skip,
    "tool-error": _skip,
    "finish-step": _on_finish_step,
    "finish": _on_finish,
    "abort": _skip,
    "error": _on_error,
    "source": _skip,
    "file": _skip,
    "raw": _skip,
}
