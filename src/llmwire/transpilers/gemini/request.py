"""Gemini request transpiler — ``generateContent`` parameters to neutral params.

Key differences from the neutral format:
- Role "model" becomes "assistant".
- ``contents`` may be a Content, a list of Contents, a part, or a list of parts.
- Function results are user parts (``functionResponse``) and become a
  separate ``tool`` message.
- System instructions and generation settings live under ``config``.
- Function declarations may use Gemini's uppercase ``Schema`` instead of JSON Schema.
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
from llmwire.utils.json import dumps

Part = dict[str, Any]
Content = dict[str, Any]


def gemini_request_to_params(params: dict[str, Any]) -> ModelParams:
    """Convert Gemini ``generateContent`` parameters to neutral params."""
    config: dict[str, Any] = params.get("config") or {}
    tool_config: dict[str, Any] = config.get("toolConfig") or {}

    messages: list[ModelMessage] = []
    for content in _normalize_contents(params.get("contents", [])):
        messages.extend(_convert_content(content))

    return ModelParams(
        model=params["model"],
        messages=messages,
        system=_convert_system_instruction(config.get("systemInstruction")),
        max_output_tokens=config.get("maxOutputTokens"),
        temperature=config.get("temperature"),
        top_p=config.get("topP"),
        top_k=config.get("topK"),
        stop_sequences=config.get("stopSequences"),
        presence_penalty=config.get("presencePenalty"),
        frequency_penalty=config.get("frequencyPenalty"),
        seed=config.get("seed"),
        tools=_convert_tools(config.get("tools")),
        tool_choice=_convert_tool_choice(tool_config.get("functionCallingConfig")),
    )


# ---------------------------------------------------------------------------
# Contents
# ---------------------------------------------------------------------------


def _to_part(part: str | Part) -> Part:
    if isinstance(part, str):
        return {"text": part}
    return part


def _is_content(value: Any) -> bool:
    return isinstance(value, dict) and "role" in value


def _normalize_contents(contents: Any) -> list[Content]:
    """Normalize every accepted ``contents`` shape to a list of Content dicts."""
    if _is_content(contents):
        return [contents]
    if isinstance(contents, list):
        if contents and _is_content(contents[0]):
            return contents
        return [{"role": "user", "parts": [_to_part(p) for p in contents]}]
    return [{"role": "user", "parts": [_to_part(contents)]}]


def _convert_content(content: Content) -> list[ModelMessage]:
    if content.get("role") == "model":
        return _convert_model_content(content)
    # unknown roles are treated as user content
    return _convert_user_content(content)


def _convert_user_content(content: Content) -> list[ModelMessage]:
    user_parts: list[UserPart] = []
    tool_results: list[ToolResultPart] = []

    for part in content.get("parts") or []:
        if part.get("functionResponse") is not None:
            tool_results.append(_convert_function_response(part["functionResponse"]))
        else:
            converted = _convert_user_part(part)
            if converted is not None:
                user_parts.append(converted)

    messages: list[ModelMessage] = []
    if tool_results:
        messages.append(ToolMessage(content=tool_results))
    if user_parts:
        messages.append(UserMessage(content=user_parts))
    elif not tool_results:
        messages.append(UserMessage(content=""))
    return messages


def _convert_user_part(part: Part) -> UserPart | None:
    if part.get("text") is not None:
        return TextPart(text=part["text"])

    inline = part.get("inlineData")
    if inline:
        mime_type = inline.get("mimeType") or "application/octet-stream"
        data = inline.get("data") or ""
        if mime_type.startswith("image/"):
            return ImagePart(image=f"data:{mime_type};base64,{data}", media_type=mime_type)
        return FilePart(data=data, media_type=mime_type)

    file_data = part.get("fileData")
    if file_data:
        return TextPart(text=f"[File: {file_data.get('fileUri')}]")

    # executable code and code execution results are not user content
    return None


def _convert_function_response(response: dict[str, Any]) -> ToolResultPart:
    name = response.get("name") or ""
    return ToolResultPart.from_text(
        response.get("id") or name,
        _function_response_text(response.get("response")),
        tool_name=name,
    )


def _function_response_text(response: dict[str, Any] | None) -> str:
    if not response:
        return ""
    if "output" in response:
        return _as_text(response["output"])
    if "error" in response:
        return _as_text(response["error"])
    return dumps(response)


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return dumps(value)


def _convert_model_content(content: Content) -> list[ModelMessage]:
    parts: list[AssistantPart] = []
    for part in content.get("parts") or []:
        # thought parts are carried over as plain text
        if part.get("text") is not None:
            parts.append(TextPart(text=part["text"]))
        call = part.get("functionCall")
        if call is not None:
            name = call.get("name") or ""
            parts.append(
                ToolCallPart(
                    tool_call_id=call.get("id") or name,
                    tool_name=name,
                    input=call.get("args") or {},
                )
            )

    if not parts:
        return []
    return [AssistantMessage(content=parts)]


def _convert_system_instruction(instruction: Any) -> str | None:
    if not instruction:
        return None
    if isinstance(instruction, str):
        return instruction
    if isinstance(instruction, list):
        return "\n".join(_texts(instruction))
    if isinstance(instruction, dict):
        if instruction.get("parts"):
            return "\n".join(_texts(instruction["parts"]))
        if isinstance(instruction.get("text"), str):
            return instruction["text"]
    return None


def _texts(parts: list[Any]) -> list[str]:
    texts: list[str] = []
    for part in parts:
        if isinstance(part, str):
            texts.append(part)
        elif isinstance(part, dict) and isinstance(part.get("text"), str):
            texts.append(part["text"])
    return texts


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


def _convert_tools(tools: list[dict[str, Any]] | None) -> dict[str, ToolSpec] | None:
    if not tools:
        return None

    converted: dict[str, ToolSpec] = {}
    for tool in tools:
        for declaration in tool.get("functionDeclarations") or []:
            name = declaration.get("name")
            if name:
                converted[name] = ToolSpec(
                    description=declaration.get("description"),
                    input_schema=_declaration_schema(declaration),
                )
    return converted or None


def _declaration_schema(declaration: dict[str, Any]) -> dict[str, Any]:
    json_schema = declaration.get("parametersJsonSchema")
    if isinstance(json_schema, dict):
        return json_schema
    if declaration.get("parameters"):
        return schema_to_json_schema(declaration["parameters"])
    return {"type": "object", "properties": {}}


def schema_to_json_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """Lower a Gemini ``Schema`` (uppercase types) to JSON Schema."""
    result: dict[str, Any] = {}
    if schema.get("type"):
        result["type"] = schema["type"].lower()
    if schema.get("description"):
        result["description"] = schema["description"]
    if schema.get("enum") is not None:
        result["enum"] = schema["enum"]
    if schema.get("items") is not None:
        result["items"] = schema_to_json_schema(schema["items"])
    if schema.get("properties") is not None:
        result["properties"] = {
            key: schema_to_json_schema(value) for key, value in schema["properties"].items()
        }
    if schema.get("required") is not None:
        result["required"] = schema["required"]
    return result


def _convert_tool_choice(config: dict[str, Any] | None) -> ToolChoice | None:
    if not config:
        return None

    mode = config.get("mode")
    if mode in ("AUTO", "MODE_UNSPECIFIED", "VALIDATED"):
        return "auto"
    if mode == "ANY":
        allowed = config.get("allowedFunctionNames") or []
        if len(allowed) == 1:
            return ToolChoiceTool(tool_name=allowed[0])
        return "required"
    if mode == "NONE":
        return "none"
    return None
