"""Anthropic stream adapter — neutral events to ``RawMessageStreamEvent`` lists.

Anthropic streams a message as discrete typed events. Content is an array of
indexed blocks (text, thinking, tool_use), each opened with
``content_block_start``, grown with ``content_block_delta`` and closed with
``content_block_stop``. The whole message is wrapped in ``message_start`` /
``message_delta`` / ``message_stop``.

One neutral event may produce several Anthropic events (for example the
first ``text-start`` also opens the message), so results carry a list.
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
    ReasoningDeltaEvent,
    ReasoningEndEvent,
    ReasoningStartEvent,
    StreamEvent,
    TextDeltaEvent,
    TextEndEvent,
    TextStartEvent,
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
from llmwire.utils.json import dumps

logger = logging.getLogger(__name__)


class AnthropicStreamContext(BaseModel):
    """Per-stream state for the Anthropic adapter."""

    id: str
    model: str
    content_block_index: int = 0
    tool_call_indices: dict[str, int] = Field(default_factory=dict)
    tool_call_inputs: dict[str, str] = Field(default_factory=dict)
    message_started: bool = False
    input_tokens: int = 0
    output_tokens: int = 0


class AnthropicEventsResult(BaseResult):
    outcome: Literal["events"] = "events"
    events: list[dict[str, Any]]

    def payloads(self) -> list[dict[str, Any]]:
        return list(self.events)


AnthropicStreamResult = AnthropicEventsResult | SkipResult | ErrorResult


def create_stream_context(options: StreamOptions) -> AnthropicStreamContext:
    """Return a fresh context for one Anthropic stream."""
    return AnthropicStreamContext(id=options.id, model=options.model)


def convert_event(
    event: StreamEvent, context: AnthropicStreamContext
) -> AnthropicStreamResult:
    """Convert one neutral event to zero or more Anthropic stream events.

    *context* is mutated in place and must not be shared between streams.
    """
    handler = _HANDLERS.get(getattr(event, "type", None))
    if handler is None:
        return unknown_event(event)
    return handler(event, context)


class AnthropicStreamTranspiler:
    """Stateless :class:`~llmwire.core.transpiler.StreamTranspiler` for Anthropic."""

    provider = "anthropic"

    def create_context(self, options: StreamOptions) -> AnthropicStreamContext:
        return create_stream_context(options)

    def convert(
        self, event: StreamEvent, context: AnthropicStreamContext
    ) -> AnthropicStreamResult:
        return convert_event(event, context)


# ---------------------------------------------------------------------------
# Stop reasons
# ---------------------------------------------------------------------------

STOP_REASONS: dict[str, str] = {
    "stop": "end_turn",
    "length": "max_tokens",
    "tool-calls": "tool_use",
    "content-filter": "refusal",
}


def convert_stop_reason(finish_reason: str) -> str:
    """Map a neutral finish reason to an Anthropic ``stop_reason``."""
    check_finish_reason(finish_reason)
    return STOP_REASONS.get(finish_reason, "end_turn")


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _events(events: list[dict[str, Any]]) -> AnthropicStreamResult:
    if not events:
        return SKIP
    return AnthropicEventsResult(events=events)


def _open_message(context: AnthropicStreamContext, events: list[dict[str, Any]]) -> None:
    """Append ``message_start`` the first time anything opens the message."""
    if context.message_started:
        return
    events.append(
        {
            "type": "message_start",
            "message": {
                "id": context.id,
                "type": "message",
                "role": "assistant",
                "model": context.model,
                "content": [],
                "stop_reason": None,
                "stop_sequence": None,
                "usage": {
                    "input_tokens": context.input_tokens,
                    "output_tokens": 0,
                    "cache_creation_input_tokens": None,
                    "cache_read_input_tokens": None,
                    "cache_creation": None,
                    "server_tool_use": None,
                    "service_tier": None,
                },
            },
        }
    )
    context.message_started = True


def _block_start(index: int, block: dict[str, Any]) -> dict[str, Any]:
    return {"type": "content_block_start", "index": index, "content_block": block}


def _block_delta(index: int, delta: dict[str, Any]) -> dict[str, Any]:
    return {"type": "content_block_delta", "index": index, "delta": delta}


def _block_stop(index: int) -> dict[str, Any]:
    return {"type": "content_block_stop", "index": index}


def _on_start(event: Any, context: AnthropicStreamContext) -> AnthropicStreamResult:
    events: list[dict[str, Any]] = []
    _open_message(context, events)
    return _events(events)


def _on_text_start(
    event: TextStartEvent, context: AnthropicStreamContext
) -> AnthropicStreamResult:
    events: list[dict[str, Any]] = []
    _open_message(context, events)
    events.append(
        _block_start(
            context.content_block_index,
            {"type": "text", "text": "", "citations": None},
        )
    )
    return _events(events)


def _on_text_delta(
    event: TextDeltaEvent, context: AnthropicStreamContext
) -> AnthropicStreamResult:
    delta = {"type": "text_delta", "text": event.text}
    return _events([_block_delta(context.content_block_index, delta)])


def _on_block_end(
    event: TextEndEvent | ReasoningEndEvent, context: AnthropicStreamContext
) -> AnthropicStreamResult:
    events = [_block_stop(context.content_block_index)]
    context.content_block_index += 1
    return _events(events)


def _on_reasoning_start(
    event: ReasoningStartEvent, context: AnthropicStreamContext
) -> AnthropicStreamResult:
    events: list[dict[str, Any]] = []
    _open_message(context, events)
    events.append(
        _block_start(
            context.content_block_index,
            {"type": "thinking", "thinking": "", "signature": ""},
        )
    )
    return _events(events)


def _on_reasoning_delta(
    event: ReasoningDeltaEvent, context: AnthropicStreamContext
) -> AnthropicStreamResult:
    delta = {"type": "thinking_delta", "thinking": event.text}
    return _events([_block_delta(context.content_block_index, delta)])


def _on_tool_input_start(
    event: ToolInputStartEvent, context: AnthropicStreamContext
) -> AnthropicStreamResult:
    events: list[dict[str, Any]] = []
    _open_message(context, events)

    index = context.content_block_index
    context.tool_call_indices[event.id] = index
    context.tool_call_inputs[event.id] = ""

    events.append(
        _block_start(
            index,
            {"type": "tool_use", "id": event.id, "name": event.tool_name, "input": {}},
        )
    )
    return _events(events)


def _on_tool_input_delta(
    event: ToolInputDeltaEvent, context: AnthropicStreamContext
) -> AnthropicStreamResult:
    index = context.tool_call_indices.get(event.id)
    if index is None:
        logger.debug("Delta for unknown tool call %s", event.id)
        return unknown_tool_call(event.id)

    context.tool_call_inputs[event.id] = (
        context.tool_call_inputs.get(event.id, "") + event.delta
    )
    delta = {"type": "input_json_delta", "partial_json": event.delta}
    return _events([_block_delta(index, delta)])


def _on_tool_input_end(
    event: ToolInputEndEvent, context: AnthropicStreamContext
) -> AnthropicStreamResult:
    index = context.tool_call_indices.get(event.id)
    if index is None:
        logger.debug("End for unknown tool call %s", event.id)
        return unknown_tool_call(event.id)

    events = [_block_stop(index)]
    context.content_block_index += 1
    return _events(events)


def _on_tool_call(
    event: ToolCallEvent, context: AnthropicStreamContext
) -> AnthropicStreamResult:
    """Replay a complete tool call as start, one full-input delta, and stop."""
    events: list[dict[str, Any]] = []
    _open_message(context, events)

    index = context.content_block_index
    context.tool_call_indices[event.tool_call_id] = index

    events.append(
        _block_start(
            index,
            {
                "type": "tool_use",
                "id": event.tool_call_id,
                "name": event.tool_name,
                "input": {},
            },
        )
    )
    events.append(
        _block_delta(index, {"type": "input_json_delta", "partial_json": dumps(event.input)})
    )
    events.append(_block_stop(index))
    context.content_block_index += 1
    return _events(events)


def _on_finish_step(
    event: FinishStepEvent, context: AnthropicStreamContext
) -> AnthropicStreamResult:
    # message_delta is only emitted on "finish"; keep the running counts
    if event.usage.input_tokens is not None:
        context.input_tokens = event.usage.input_tokens
    if event.usage.output_tokens is not None:
        context.output_tokens = event.usage.output_tokens
    return SKIP


def _on_finish(
    event: FinishEvent, context: AnthropicStreamContext
) -> AnthropicStreamResult:
    events: list[dict[str, Any]] = []
    _open_message(context, events)

    usage = event.total_usage
    events.append(
        {
            "type": "message_delta",
            "delta": {
                "stop_reason": convert_stop_reason(event.finish_reason),
                "stop_sequence": None,
            },
            "usage": {
                "output_tokens": (
                    usage.output_tokens
                    if usage.output_tokens is not None
                    else context.output_tokens
                ),
                "input_tokens": (
                    usage.input_tokens
                    if usage.input_tokens is not None
                    else context.input_tokens
                ),
                "cache_creation_input_tokens": None,
                "cache_read_input_tokens": None,
                "server_tool_use": None,
            },
        }
    )
    events.append({"type": "message_stop"})
    return _events(events)


def _on_error(event: ErrorEvent, context: AnthropicStreamContext) -> AnthropicStreamResult:
    return ErrorResult(error=error_message(event.error))


def _skip(event: Any, context: AnthropicStreamContext) -> AnthropicStreamResult:
    return SKIP


_HANDLERS: dict[str, Callable[[Any, AnthropicStreamContext], AnthropicStreamResult]] = {
    "start": _on_start,
    "start-step": _skip,
    "text-start": _on_text_start,
    "text-delta": _on_text_delta,
    "text-end": _on_block_end,
    "reasoning-start": _on_reasoning_start,
    "reasoning-delta": _on_reasoning_delta,
    "reasoning-end": _on_block_end,
    "tool-input-start": _on_tool_input_start,
    "tool-input-delta": _on_tool_input_delta,
    "tool-input-end": _on_tool_input_end,
    "tool-call": _on_tool_call,
    # tool results are produced by the caller, not the model
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
