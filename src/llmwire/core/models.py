"""Neutral request and response models.

The neutral format mirrors the AI SDK's ``ModelMessage`` and generate-result
shapes. Request converters turn vendor payloads into :class:`ModelParams`;
response converters turn a :class:`ModelResponse` into vendor payloads.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, Literal, Union

from pydantic import Field

from llmwire.core.base import CamelModel
from llmwire.core.events import Usage

# ---------------------------------------------------------------------------
# Content parts
# ---------------------------------------------------------------------------


class TextPart(CamelModel):
    """Plain text content part."""

    type: Literal["text"] = "text"
    text: str


class ImagePart(CamelModel):
    """Image content part; ``image`` is a URL or a ``data:`` URL."""

    type: Literal["image"] = "image"
    image: str
    media_type: str | None = None


class FilePart(CamelModel):
    """Inline file content part (base64 data)."""

    type: Literal["file"] = "file"
    data: str
    media_type: str


UserPart = Annotated[Union[TextPart, ImagePart, FilePart], Field(discriminator="type")]


# ---------------------------------------------------------------------------
# Tool calls
# ---------------------------------------------------------------------------


class ToolCallPart(CamelModel):
    """A tool invocation emitted by the assistant."""

    type: Literal["tool-call"] = "tool-call"
    tool_call_id: str
    tool_name: str
    input: Any = None


class ToolResultOutput(CamelModel):
    type: Literal["text", "json", "error-text", "error-json"] = "text"
    value: Any = ""


class ToolResultPart(CamelModel):
    """The result of executing a tool."""

    type: Literal["tool-result"] = "tool-result"
    tool_call_id: str
    tool_name: str = ""
    output: ToolResultOutput = Field(default_factory=ToolResultOutput)

    @classmethod
    def from_text(cls, tool_call_id: str, text: str, tool_name: str = "") -> ToolResultPart:
        """Create a tool result with a text output."""
        return cls(
            tool_call_id=tool_call_id,
            tool_name=tool_name,
            output=ToolResultOutput(type="text", value=text),
        )


AssistantPart = Annotated[Union[TextPart, ToolCallPart], Field(discriminator="type")]


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------


class SystemMessage(CamelModel):
    role: Literal["system"] = "system"
    content: str


class UserMessage(CamelModel):
    role: Literal["user"] = "user"
    content: str | list[UserPart]


class AssistantMessage(CamelModel):
    role: Literal["assistant"] = "assistant"
    content: str | list[AssistantPart]

    @property
    def tool_calls(self) -> list[ToolCallPart]:
        """Return the tool-call parts of this message."""
        if isinstance(self.content, str):
            return []
        return [part for part in self.content if isinstance(part, ToolCallPart)]


class ToolMessage(CamelModel):
    role: Literal["tool"] = "tool"
    content: list[ToolResultPart]


ModelMessage = Annotated[
    Union[SystemMessage, UserMessage, AssistantMessage, ToolMessage],
    Field(discriminator="role"),
]


def message_text(message: SystemMessage | UserMessage | AssistantMessage) -> str:
    """Concatenate the text of a message, ignoring non-text parts."""
    if isinstance(message.content, str):
        return message.content
    return "".join(part.text for part in message.content if isinstance(part, TextPart))


# ---------------------------------------------------------------------------
# Request parameters
# ---------------------------------------------------------------------------


class ToolSpec(CamelModel):
    """A callable tool offered to the model."""

    description: str | None = None
    input_schema: dict[str, Any] = Field(default_factory=dict)


class ToolChoiceTool(CamelModel):
    """Force the model to call one named tool."""

    type: Literal["tool"] = "tool"
    tool_name: str


ToolChoice = Literal["auto", "none", "required"] | ToolChoiceTool


class ModelParams(CamelModel):
    """Generation parameters in the neutral format."""

    model: str
    messages: list[ModelMessage] = []
    system: str | None = None
    max_output_tokens: int | None = None
    temperature: float | None = None
    top_p: float | None = None
    top_k: int | None = None
    frequency_penalty: float | None = None
    presence_penalty: float | None = None
    stop_sequences: list[str] | None = None
    seed: int | None = None
    tools: dict[str, ToolSpec] | None = None
    tool_choice: ToolChoice | None = None


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------


class ResponseMetadata(CamelModel):
    id: str
    model_id: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ModelResponse(CamelModel):
    """A complete (non-streamed) generation result."""

    text: str = ""
    tool_calls: list[ToolCallPart] = []
    finish_reason: str = "stop"
    usage: Usage = Field(default_factory=Usage)
    response: ResponseMetadata
