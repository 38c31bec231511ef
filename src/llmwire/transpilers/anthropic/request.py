"""Anthropic request transpiler — ``MessageCreateParams`` to neutral params.

Key differences from the neutral format:
- System prompt is a separate top-level parameter (string or text blocks).
- Tool results are embedded in user messages as ``tool_result`` blocks; they
  become a separate ``tool`` message placed before the remaining user content.
- Thinking blocks in assistant turns are carried over as plain text.
"""

from __future__ import annotations

from typing import Any

from llmwire.core.models import (
    AssistantMessage,
    AssistantPart,
    FilePart,
    ImagePart,
    ModelMessage,
    ModelParams,
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


def anthropic_request_to_params(body: dict[str, Any]) -> ModelParams:
    """Convert an Anthropic messages request body to neutral params."""
    messages: list[ModelMessage] = []
    for msg in body.get("messages", []):
        messages.extend(_convert_message(msg))

    return ModelParams(
        model=body["model"],
        messages=messages,
        system=_convert_system(body.get("system")),
        max_output_tokens=body.get("max_tokens"),
        temperature=body.get("temperature"),
        top_p=body.get("top_p"),
        top_k=body.get("top_k"),
        stop_sequences=body.get("stop_sequences"),
        tools=_convert_tools(body.get("tools")),
        tool_choice=_convert_tool_choice(body.get("tool_choice")),
    )


def _convert_system(system: str | list[dict[str, Any]] | None) -> str | None:
    if not system:
        return None
    if isinstance(system, str):
        return system
    return "\n".join(block.get("text", "") for block in system)


def _convert_message(msg: dict[str, Any]) -> list[ModelMessage]:
    if msg["role"] == "user":
        return _convert_user_message(msg["content"])
    return _convert_assistant_message(msg["content"])


def _convert_user_message(content: str | list[dict[str, Any]]) -> list[ModelMessage]:
    """Split user content into a tool-result message and a user message."""
    if isinstance(content, str):
        return [UserMessage(content=content)]

    user_parts: list[UserPart] = []
    tool_results: list[ToolResultPart] = []

    for block in content:
        if block["type"] == "tool_result":
            tool_results.append(_convert_tool_result_block(block))
        else:
            part = _convert_user_block(block)
            if part is not None:
                user_parts.append(part)

    messages: list[ModelMessage] = []
    # tool results answer the previous assistant turn, so they come first
    if tool_results:
        messages.append(ToolMessage(content=tool_results))
    if user_parts:
        messages.append(UserMessage(content=user_parts))
    elif not tool_results:
        messages.append(UserMessage(content=""))
    return messages


def _convert_user_block(block: dict[str, Any]) -> UserPart | None:
    block_type = block["type"]
    if block_type == "text":
        return TextPart(text=block["text"])
    if block_type == "image":
        return _convert_image_block(block)
    if block_type == "document":
        return _convert_document_block(block)
    # tool_use, thinking, server tool blocks etc. have no place in user content
    return None


def _convert_image_block(block: dict[str, Any]) -> UserPart | None:
    source = block["source"]
    if source["type"] == "base64":
        return ImagePart(
            image=f"data:{source['media_type']};base64,{source['data']}",
            media_type=source["media_type"],
        )
    if source["type"] == "url":
        return ImagePart(image=source["url"])
    return None


def _convert_document_block(block: dict[str, Any]) -> UserPart | None:
    source = block["source"]
    source_type = source["type"]
    if source_type == "base64":
        return FilePart(data=source["data"], media_type=source["media_type"])
    if source_type == "url":
        return TextPart(text=f"[Document: {source['url']}]")
    if source_type == "text":
        return TextPart(text=source["data"])
    if source_type == "content":
        inner = source["content"]
        if isinstance(inner, str):
            return TextPart(text=inner)
        return TextPart(
            text="\n".join(c["text"] for c in inner if c.get("type") == "text")
        )
    return None


def _convert_assistant_message(content: str | list[dict[str, Any]]) -> list[ModelMessage]:
    if isinstance(content, str):
        return [AssistantMessage(content=[TextPart(text=content)])]

    parts: list[AssistantPart] = []
    for block in content:
        block_type = block["type"]
        if block_type == "text":
            parts.append(TextPart(text=block["text"]))
        elif block_type == "tool_use":
            parts.append(
                ToolCallPart(
                    tool_call_id=block["id"],
                    tool_name=block["name"],
                    input=block.get("input", {}),
                )
            )
        elif block_type == "thinking":
            parts.append(TextPart(text=block["thinking"]))
        # redacted_thinking is encrypted; other block types are not assistant output

    if not parts:
        return []
    return [AssistantMessage(content=parts)]


def _convert_tool_result_block(block: dict[str, Any]) -> ToolResultPart:
    # Anthropic tool results carry no tool name
    return ToolResultPart.from_text(
        block["tool_use_id"], _tool_result_text(block.get("content"))
    )


def _tool_result_text(content: str | list[dict[str, Any]] | None) -> str:
    if not content:
        return ""
    if isinstance(content, str):
        return content
    return "\n".join(part["text"] for part in content if part.get("type") == "text")


def _convert_tools(tools: list[dict[str, Any]] | None) -> dict[str, ToolSpec] | None:
    if not tools:
        return None

    converted: dict[str, ToolSpec] = {}
    for tool in tools:
        # only custom tools declare an input schema; built-in server tools are skipped
        if "input_schema" in tool:
            converted[tool["name"]] = ToolSpec(
                description=tool.get("description"),
                input_schema=tool["input_schema"],
            )
    return converted or None


def _convert_tool_choice(tool_choice: dict[str, Any] | None) -> ToolChoice | None:
    if not tool_choice:
        return None

    choice_type = tool_choice.get("type")
    if choice_type == "auto":
        return "auto"
    if choice_type == "any":
        return "required"
    if choice_type == "none":
        return "none"
    if choice_type == "tool":
        return ToolChoiceTool(tool_name=tool_choice["name"])
    return None
