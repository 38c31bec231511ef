"""OpenAI stream adapter — neutral events to ``chat.completion.chunk`` objects.

Every chunk shares the same envelope (id, created, model) and a single choice
whose ``delta`` carries only what changed. Tool calls are addressed by a flat
array index assigned the first time an id is seen; there is no block or
end-of-call concept, so several neutral events produce nothing.
"""

from __future__ import annotations

import logging
import time
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
    Usage,
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
from llmwire.utils.json import dumps

logger = logging.getLogger(__name__)


class OpenAIStreamContext(BaseModel):
    """Per-stream state for the OpenAI adapter."""

    id: str
    model: str
    created: int
    tool_call_indices: dict[str, int] = Field(default_factory=dict)
    next_tool_call_index: int = 0

    def tool_call_index(self, tool_call_id: str) -> int:
        """Return the flat index for *tool_call_id*, assigning the next one on first sight."""
        index = self.tool_call_indices.get(tool_call_id)
        if index is None:
            index = self.next_tool_call_index
            self.next_tool_call_index += 1
            self.tool_call_indices[tool_call_id] = index
        return index


class OpenAIChunkResult(BaseResult):
    outcome: Literal["chunk"] = "chunk"
    chunk: dict[str, Any]

    def payloads(self) -> list[dict[str, Any]]:
        return [self.chunk]


OpenAIStreamResult = OpenAIChunkResult | SkipResult | ErrorResult


def create_stream_context(options: StreamOptions) -> OpenAIStreamContext:
    """Return a fresh context for one OpenAI stream.

    ``created`` defaults to the current unix time, read once here.
    """
    created = options.created if options.created is not None else int(time.time())
    return OpenAIStreamContext(id=options.id, model=options.model, created=created)


def convert_event(event: StreamEvent, context: OpenAIStreamContext) -> OpenAIStreamResult:
    """Convert one neutral event to at most one OpenAI chunk."""
    handler = _HANDLERS.get(getattr(event, "type", None))
    if handler is None:
        return unknown_event(event)
    return handler(event, context)


class OpenAIStreamTranspiler:
    """Stateless :class:`~llmwire.core.transpiler.StreamTranspiler` for OpenAI."""

    provider = "openai"

    def create_context(self, options: StreamOptions) -> OpenAIStreamContext:
        return create_stream_context(options)

    def convert(self, event: StreamEvent, context: OpenAIStreamContext) -> OpenAIStreamResult:
        return convert_event(event, context)


# ---------------------------------------------------------------------------
# Finish reasons and usage
# ---------------------------------------------------------------------------

FINISH_REASONS: dict[str, str] = {
    "stop": "stop",
    "length": "length",
    "content-filter": "content_filter",
    "tool-calls": "tool_calls",
}


def convert_finish_reason(finish_reason: str) -> str:
    """Map a neutral finish reason to an OpenAI ``finish_reason``."""
    check_finish_reason(finish_reason)
    return FINISH_REASONS.get(finish_reason, "stop")


def convert_usage(usage: Usage) -> dict[str, int]:
    """Build a ``CompletionUsage`` dict; missing counts are 0 and total falls back to the sum."""
    prompt_tokens = usage.input_tokens or 0
    completion_tokens = usage.output_tokens or 0
    total_tokens = (
        usage.total_tokens
        if usage.total_tokens is not None
        else prompt_tokens + completion_tokens
    )
    return {
        "prompt_tokens": prompt_tokens,
        "completion_tokens": completion_tokens,
        "total_tokens": total_tokens,
    }


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _chunk(
    context: OpenAIStreamContext,
    delta: dict[str, Any],
    finish_reason: str | None = None,
    usage: dict[str, int] | None = None,
) -> OpenAIChunkResult:
    chunk: dict[str, Any] = {
        "id": context.id,
        "object": "chat.completion.chunk",
        "created": context.created,
        "model": context.model,
        "choices": [
            {
                "index": 0,
                "delta": delta,
                "finish_reason": finish_reason,
                "logprobs": None,
            }
        ],
    }
    if usage is not None:
        chunk["usage"] = usage
    return OpenAIChunkResult(chunk=chunk)


def _on_text_start(event: Any, context: OpenAIStreamContext) -> OpenAIStreamResult:
    # the role is announced once, on the first content-bearing chunk
    return _chunk(context, {"role": "assistant", "content": ""})


def _on_text_delta(event: TextDeltaEvent, context: OpenAIStreamContext) -> OpenAIStreamResult:
    return _chunk(context, {"content": event.text})


def _on_tool_input_start(
    event: ToolInputStartEvent, context: OpenAIStreamContext
) -> OpenAIStreamResult:
    index = context.tool_call_index(event.id)
    tool_call = {
        "index": index,
        "id": event.id,
        "type": "function",
        "function": {"name": event.tool_name, "arguments": ""},
    }
    return _chunk(context, {"tool_calls": [tool_call]})


def _on_tool_input_delta(
    event: ToolInputDeltaEvent, context: OpenAIStreamContext
) -> OpenAIStreamResult:
    index = context.tool_call_indices.get(event.id)
    if index is None:
        logger.debug("Delta for unknown tool call %s", event.id)
        return unknown_tool_call(event.id)

    tool_call = {"index": index, "function": {"arguments": event.delta}}
    return _chunk(context, {"tool_calls": [tool_call]})


def _on_tool_input_end(
    event: ToolInputEndEvent, context: OpenAIStreamContext
) -> OpenAIStreamResult:
    if event.id not in context.tool_call_indices:
        logger.debug("End for unknown tool call %s", event.id)
        return unknown_tool_call(event.id)
    return SKIP


def _on_tool_call(event: ToolCallEvent, context: OpenAIStreamContext) -> OpenAIStreamResult:
    index = context.tool_call_index(event.tool_call_id)
    tool_call = {
        "index": index,
        "id": event.tool_call_id,
        "type": "function",
        "function": {"name": event.tool_name, "arguments": dumps(event.input)},
    }
    return _chunk(context, {"tool_calls": [tool_call]})


def _on_finish_step(
    event: FinishStepEvent, context: OpenAIStreamContext
) -> OpenAIStreamResult:
    return _chunk(
        context,
        {},
        finish_reason=convert_finish_reason(event.finish_reason),
        usage=convert_usage(event.usage),
    )


def _on_finish(event: FinishEvent, context: OpenAIStreamContext) -> OpenAIStreamResult:
    return _chunk(
        context,
        {},
        finish_reason=convert_finish_reason(event.finish_reason),
        usage=convert_usage(event.total_usage),
    )


def _on_error(event: ErrorEvent, context: OpenAIStreamContext) -> OpenAIStreamResult:
    return ErrorResult(error=error_message(event.error))


def _skip(event: Any, context: OpenAIStreamContext) -> OpenAIStreamResult:
    return SKIP


_HANDLERS: dict[str, Callable[[Any, OpenAIStreamContext], OpenAIStreamResult]] = {
    "start": _skip,
    "start-step": _skip,
    "text-start": _on_text_start,
    "text-delta": _on_text_delta,
    "text-end": _skip,
    # no reasoning stream in chat completions
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
