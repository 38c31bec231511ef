"""Neutral stream event vocabulary.

Every stream adapter consumes the same closed set of events, one per unit of
generation progress. The union is discriminated on ``type`` so a raw AI SDK
stream part (camelCase JSON) validates straight into the matching model.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal, Union, get_args

from pydantic import ConfigDict, Field, TypeAdapter

from llmwire.core.base import CamelModel

logger = logging.getLogger(__name__)

FinishReason = Literal[
    "stop",
    "length",
    "content-filter",
    "tool-calls",
    "error",
    "other",
    "unknown",
]

FINISH_REASONS: frozenset[str] = frozenset(get_args(FinishReason))


def check_finish_reason(finish_reason: str) -> None:
    """Log a finish reason outside the neutral vocabulary.

    Conversion still proceeds with the vendor's default label.
    """
    if finish_reason not in FINISH_REASONS:
        logger.warning("Unrecognized finish reason %r, using default", finish_reason)


class Usage(CamelModel):
    """Token counts; ``None`` means the upstream engine did not report the field."""

    input_tokens: int | None = None
    output_tokens: int | None = None
    total_tokens: int | None = None
    reasoning_tokens: int | None = None
    cached_input_tokens: int | None = None


class _Event(CamelModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class StartEvent(_Event):
    type: Literal["start"] = "start"


class StartStepEvent(_Event):
    type: Literal["start-step"] = "start-step"
    request: dict[str, Any] = {}
    warnings: list[Any] = []


class FinishStepEvent(_Event):
    type: Literal["finish-step"] = "finish-step"
    usage: Usage = Field(default_factory=Usage)
    finish_reason: str = "unknown"
    response: dict[str, Any] = {}
    provider_metadata: dict[str, Any] | None = None


class FinishEvent(_Event):
    type: Literal["finish"] = "finish"
    finish_reason: str = "unknown"
    total_usage: Usage = Field(default_factory=Usage)


class AbortEvent(_Event):
    type: Literal["abort"] = "abort"


class ErrorEvent(_Event):
    """Terminal error; ``error`` may be an exception, a string, or any JSON value."""

    type: Literal["error"] = "error"
    error: Any = None


# ---------------------------------------------------------------------------
# Text and reasoning spans
# ---------------------------------------------------------------------------


class TextStartEvent(_Event):
    type: Literal["text-start"] = "text-start"
    id: str
    provider_metadata: dict[str, Any] | None = None


class TextDeltaEvent(_Event):
    type: Literal["text-delta"] = "text-delta"
    id: str
    text: str
    provider_metadata: dict[str, Any] | None = None


class TextEndEvent(_Event):
    type: Literal["text-end"] = "text-end"
    id: str
    provider_metadata: dict[str, Any] | None = None


class ReasoningStartEvent(_Event):
    type: Literal["reasoning-start"] = "reasoning-start"
    id: str
    provider_metadata: dict[str, Any] | None = None


class ReasoningDeltaEvent(_Event):
    type: Literal["reasoning-delta"] = "reasoning-delta"
    id: str
    text: str
    provider_metadata: dict[str, Any] | None = None


class ReasoningEndEvent(_Event):
    type: Literal["reasoning-end"] = "reasoning-end"
    id: str
    provider_metadata: dict[str, Any] | None = None


# ---------------------------------------------------------------------------
# Tool calls
# ---------------------------------------------------------------------------


class ToolInputStartEvent(_Event):
    type: Literal["tool-input-start"] = "tool-input-start"
    id: str
    tool_name: str
    provider_executed: bool | None = None


class ToolInputDeltaEvent(_Event):
    """A fragment of the tool's raw JSON input text."""

    type: Literal["tool-input-delta"] = "tool-input-delta"
    id: str
    delta: str


class ToolInputEndEvent(_Event):
    type: Literal["tool-input-end"] = "tool-input-end"
    id: str


class ToolCallEvent(_Event):
    """A complete tool call delivered in one piece, with already-parsed input."""

    type: Literal["tool-call"] = "tool-call"
    tool_call_id: str
    tool_name: str
    input: Any = None


class ToolResultEvent(_Event):
    type: Literal["tool-result"] = "tool-result"
    tool_call_id: str
    tool_name: str
    input: Any = None
    output: Any = None


class ToolErrorEvent(_Event):
    type: Literal["tool-error"] = "tool-error"
    tool_call_id: str
    tool_name: str
    input: Any = None
    error: Any = None


# ---------------------------------------------------------------------------
# Inert pass-through kinds
# ---------------------------------------------------------------------------


class SourceEvent(_Event):
    model_config = ConfigDict(extra="allow")

    type: Literal["source"] = "source"


class FileEvent(_Event):
    model_config = ConfigDict(extra="allow")

    type: Literal["file"] = "file"


class RawEvent(_Event):
    type: Literal["raw"] = "raw"
    raw_value: Any = None


StreamEvent = Annotated[
    Union[
        StartEvent,
        StartStepEvent,
        TextStartEvent,
        TextDeltaEvent,
        TextEndEvent,
        ReasoningStartEvent,
        ReasoningDeltaEvent,
        ReasoningEndEvent,
        ToolInputStartEvent,
        ToolInputDeltaEvent,
        ToolInputEndEvent,
        ToolCallEvent,
        ToolResultEvent,
        ToolErrorEvent,
        FinishStepEvent,
        FinishEvent,
        AbortEvent,
        ErrorEvent,
        SourceEvent,
        FileEvent,
        RawEvent,
    ],
    Field(discriminator="type"),
]

EVENT_MODELS: tuple[type[_Event], ...] = get_args(get_args(StreamEvent)[0])

EVENT_TYPES: tuple[str, ...] = tuple(
    model.model_fields["type"].default for model in EVENT_MODELS
)

_event_adapter: TypeAdapter[StreamEvent] = TypeAdapter(StreamEvent)


def parse_event(data: dict[str, Any]) -> StreamEvent:
    """Validate one AI SDK stream part into its event model.

    Raises :class:`pydantic.ValidationError` for unknown types or bad payloads.
    """
    return _event_adapter.validate_python(data)
