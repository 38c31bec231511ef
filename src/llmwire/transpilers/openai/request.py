"""OpenAI request transpiler — chat completion request body to neutral params.

Chat completions are the closest vendor format to the neutral one, so this is
mostly a one-to-one mapping. Tool-call arguments arrive as JSON text and are
parsed when possible; unparseable arguments pass through as the raw string.
"""

from __future__ import annotations

from typing import Any

from llmwire.core.errors import UnsupportedContentError
from llmwire.core.models import (
    AssistantMessage,
    AssistantPart,
    FilePart,
    ImagePart,
    ModelMessage,
    ModelParams,
    SystemMessage,
    TextPart,
    ToolCallPart,
    ToolChoice,
    ToolChoiceTool,
    ToolMessage,
    ToolResultPart,
    ToolSpec,
    UserMessage,
    UserPart,
)
from llmwire.utils.json import parse_or_passthrough


def openai_request_to_params(body: dict[str, Any]) -> ModelParams:
    """Convert an OpenAI chat completion request body to neutral params.

    Raises :class:`~llmwire.core.errors.UnsupportedContentError` for unknown
    message roles or user content part types.
    """
    max_tokens = body.get("max_completion_tokens")
    if max_tokens is None:
        max_tokens = body.get("max_tokens")

    return ModelParams(
        model=body["model"],
        messages=[_convert_message(msg) for msg in body.get("messages", [])],
        max_output_tokens=max_tokens,
        temperature=body.get("temperature"),
        top_p=body.get("top_p"),
        frequency_penalty=body.get("frequency_penalty"),
        presence_penalty=body.get("presence_penalty"),
        stop_sequences=_convert_stop(body.get("stop")),
        seed=body.get("seed"),
        tools=_convert_tools(body.get("tools")),
        tool_choice=_convert_tool_choice(body.get("tool_choice")),
    )


def _convert_message(msg: dict[str, Any]) -> ModelMessage:
    role = msg.get("role")
    if role in ("system", "developer"):
        content = msg.get("content")
        return SystemMessage(content=content if isinstance(content, str) else "")
    if role == "user":
        return UserMessage(content=_convert_user_content(msg["content"]))
    if role == "assistant":
        return AssistantMessage(content=_convert_assistant_content(msg))
    if role == "tool":
        return ToolMessage(
            content=[
                ToolResultPart.from_text(
                    msg["tool_call_id"], _tool_result_text(msg.get("content"))
                )
            ]
        )
    if role == "function":
        # deprecated function-role messages carry only the function name
        name = msg.get("name")
        return ToolMessage(
            content=[
                ToolResultPart.from_text(
                    name or "function",
                    _tool_result_text(msg.get("content")),
                    tool_name=name or "",
                )
            ]
        )
    raise UnsupportedContentError("message role", role)


def _convert_user_content(content: str | list[dict[str, Any]]) -> str | list[UserPart]:
    if isinstance(content, str):
        return content
    return [_convert_user_part(part) for part in content]


def _convert_user_part(part: dict[str, Any]) -> UserPart:
    part_type = part.get("type")
    if part_type == "text":
        return TextPart(text=part["text"])
    if part_type == "image_url":
        return ImagePart(image=part["image_url"]["url"])
    if part_type == "input_audio":
        # no neutral audio part
        return TextPart(text="")
    if part_type == "file":
        file_data = part["file"].get("file_data")
        if file_data:
            return FilePart(data=file_data, media_type="application/octet-stream")
        # a bare file_id cannot be resolved here
        return TextPart(text="")
    raise UnsupportedContentError("content part type", part_type)


def _convert_assistant_content(msg: dict[str, Any]) -> list[AssistantPart]:
    parts: list[AssistantPart] = []

    content = msg.get("content")
    if isinstance(content, str):
        if content:
            parts.append(TextPart(text=content))
    elif content:
        # refusal parts have no neutral equivalent
        parts.extend(TextPart(text=p["text"]) for p in content if p.get("type") == "text")

    for tool_call in msg.get("tool_calls") or []:
        if tool_call.get("type") != "function":
            continue
        function = tool_call["function"]
        parts.append(
            ToolCallPart(
                tool_call_id=tool_call["id"],
                tool_name=function["name"],
                input=parse_or_passthrough(function.get("arguments", "")),
            )
        )

    return parts


def _tool_result_text(content: str | list[dict[str, Any]] | None) -> str:
    if not content:
        return ""
    if isinstance(content, str):
        return content
    return "".join(part.get("text", "") for part in content)


def _convert_stop(stop: str | list[str] | None) -> list[str] | None:
    if stop is None:
        return None
    if isinstance(stop, str):
        return [stop]
    return list(stop)


def _convert_tools(tools: list[dict[str, Any]] | None) -> dict[str, ToolSpec] | None:
    if not tools:
        return None

    converted: dict[str, ToolSpec] = {}
    for tool in tools:
        if tool.get("type") != "function":
            continue
        function = tool["function"]
        converted[function["name"]] = ToolSpec(
            description=function.get("description"),
            input_schema=function.get("parameters") or {},
        )
    return converted or None


def _convert_tool_choice(tool_choice: str | dict[str, Any] | None) -> ToolChoice | None:
    if tool_choice is None:
        return None
    if tool_choice in ("none", "auto", "required"):
        return tool_choice
    if isinstance(tool_choice, dict):
        choice_type = tool_choice.get("type")
        if choice_type == "function":
            return ToolChoiceTool(tool_name=tool_choice["function"]["name"])
        if choice_type == "custom":
            return ToolChoiceTool(tool_name=tool_choice["custom"]["name"])
        if choice_type == "allowed_tools":
            # a restricted tool set has no neutral form
            return "auto"
    return None
