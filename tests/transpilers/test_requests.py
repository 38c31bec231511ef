"""Tests for vendor request body to neutral params conversion."""

from __future__ import annotations

import pytest

from llmwire.core.errors import UnsupportedContentError
from llmwire.core.models import (
    AssistantMessage,
    FilePart,
    ImagePart,
    SystemMessage,
    TextPart,
    ToolCallPart,
    ToolChoiceTool,
    ToolMessage,
    UserMessage,
)
from llmwire.transpilers.anthropic.request import anthropic_request_to_params
from llmwire.transpilers.gemini.request import gemini_request_to_params, schema_to_json_schema
from llmwire.transpilers.openai.request import openai_request_to_params

# ---------------------------------------------------------------------------
# Anthropic
# ---------------------------------------------------------------------------


class TestAnthropicRequest:
    def test_basic_fields(self) -> None:
        params = anthropic_request_to_params(
            {
                "model": "claude-test",
                "max_tokens": 256,
                "system": [{"type": "text", "text": "Be brief."}, {"type": "text", "text": "Be kind."}],
                "temperature": 0.2,
                "top_k": 5,
                "stop_sequences": ["END"],
                "messages": [{"role": "user", "content": "Hello"}],
            }
        )
        assert params.model == "claude-test"
        assert params.max_output_tokens == 256
        assert params.system == "Be brief.\nBe kind."
        assert params.top_k == 5
        assert params.stop_sequences == ["END"]
        assert params.messages == [UserMessage(content="Hello")]

    def test_tool_results_precede_user_content(self) -> None:
        params = anthropic_request_to_params(
            {
                "model": "m",
                "messages": [
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": "and also"},
                            {
                                "type": "tool_result",
                                "tool_use_id": "tu_1",
                                "content": [{"type": "text", "text": "72F"}],
                            },
                        ],
                    }
                ],
            }
        )
        tool_msg, user_msg = params.messages
        assert isinstance(tool_msg, ToolMessage)
        assert tool_msg.content[0].tool_call_id == "tu_1"
        assert tool_msg.content[0].output.value == "72F"
        assert isinstance(user_msg, UserMessage)
        assert user_msg.content == [TextPart(text="and also")]

    def test_image_and_document_blocks(self) -> None:
        params = anthropic_request_to_params(
            {
                "model": "m",
                "messages": [
                    {
                        "role": "user",
                        "content": [
                            {
                                "type": "image",
                                "source": {"type": "base64", "media_type": "image/png", "data": "AAA"},
                            },
                            {"type": "image", "source": {"type": "url", "url": "https://x/cat.png"}},
                            {
                                "type": "document",
                                "source": {"type": "base64", "media_type": "application/pdf", "data": "PDF"},
                            },
                            {"type": "document", "source": {"type": "text", "data": "notes"}},
                        ],
                    }
                ],
            }
        )
        parts = params.messages[0].content
        assert parts == [
            ImagePart(image="data:image/png;base64,AAA", media_type="image/png"),
            ImagePart(image="https://x/cat.png"),
            FilePart(data="PDF", media_type="application/pdf"),
            TextPart(text="notes"),
        ]

    def test_assistant_tool_use_and_thinking(self) -> None:
        params = anthropic_request_to_params(
            {
                "model": "m",
                "messages": [
                    {
                        "role": "assistant",
                        "content": [
                            {"type": "thinking", "thinking": "plan", "signature": "s"},
                            {"type": "text", "text": "Checking."},
                            {"type": "tool_use", "id": "tu_1", "name": "weather", "input": {"city": "SF"}},
                        ],
                    }
                ],
            }
        )
        msg = params.messages[0]
        assert isinstance(msg, AssistantMessage)
        assert msg.content[0] == TextPart(text="plan")
        assert msg.tool_calls == [
            ToolCallPart(tool_call_id="tu_1", tool_name="weather", input={"city": "SF"})
        ]

    def test_tools_and_choice(self) -> None:
        params = anthropic_request_to_params(
            {
                "model": "m",
                "messages": [],
                "tools": [
                    {"name": "weather", "description": "Get weather", "input_schema": {"type": "object"}},
                    {"type": "web_search_20250305", "name": "web_search"},
                ],
                "tool_choice": {"type": "tool", "name": "weather"},
            }
        )
        assert params.tools is not None
        assert list(params.tools) == ["weather"]
        assert params.tools["weather"].input_schema == {"type": "object"}
        assert params.tool_choice == ToolChoiceTool(tool_name="weather")

    @pytest.mark.parametrize(
        ("choice", "expected"),
        [({"type": "auto"}, "auto"), ({"type": "any"}, "required"), ({"type": "none"}, "none")],
    )
    def test_tool_choice_modes(self, choice: dict, expected: str) -> None:
        params = anthropic_request_to_params({"model": "m", "tool_choice": choice})
        assert params.tool_choice == expected


# ---------------------------------------------------------------------------
# OpenAI
# ---------------------------------------------------------------------------


class TestOpenAIRequest:
    def test_messages(self) -> None:
        params = openai_request_to_params(
            {
                "model": "gpt-test",
                "max_completion_tokens": 100,
                "max_tokens": 50,
                "stop": "END",
                "seed": 7,
                "messages": [
                    {"role": "developer", "content": "Rules."},
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": "Look"},
                            {"type": "image_url", "image_url": {"url": "https://x/y.png"}},
                        ],
                    },
                    {
                        "role": "assistant",
                        "content": None,
                        "tool_calls": [
                            {
                                "id": "call_1",
                                "type": "function",
                                "function": {"name": "f", "arguments": '{"a":1}'},
                            }
                        ],
                    },
                    {"role": "tool", "tool_call_id": "call_1", "content": "ok"},
                ],
            }
        )
        assert params.max_output_tokens == 100
        assert params.stop_sequences == ["END"]
        assert params.seed == 7

        system, user, assistant, tool = params.messages
        assert system == SystemMessage(content="Rules.")
        assert isinstance(user, UserMessage)
        assert user.content == [TextPart(text="Look"), ImagePart(image="https://x/y.png")]
        assert isinstance(assistant, AssistantMessage)
        assert assistant.tool_calls[0].input == {"a": 1}
        assert isinstance(tool, ToolMessage)
        assert tool.content[0].output.value == "ok"

    def test_unparseable_arguments_pass_through(self) -> None:
        params = openai_request_to_params(
            {
                "model": "m",
                "messages": [
                    {
                        "role": "assistant",
                        "tool_calls": [
                            {"id": "c", "type": "function", "function": {"name": "f", "arguments": "{oops"}}
                        ],
                    }
                ],
            }
        )
        assert params.messages[0].tool_calls[0].input == "{oops"

    def test_function_role(self) -> None:
        params = openai_request_to_params(
            {"model": "m", "messages": [{"role": "function", "name": "lookup", "content": "42"}]}
        )
        part = params.messages[0].content[0]
        assert part.tool_call_id == "lookup"
        assert part.tool_name == "lookup"

    def test_unknown_role_raises(self) -> None:
        with pytest.raises(UnsupportedContentError, match="message role"):
            openai_request_to_params({"model": "m", "messages": [{"role": "robot", "content": "x"}]})

    def test_unknown_part_type_raises(self) -> None:
        with pytest.raises(UnsupportedContentError, match="content part type"):
            openai_request_to_params(
                {"model": "m", "messages": [{"role": "user", "content": [{"type": "video"}]}]}
            )

    def test_tools_and_choice(self) -> None:
        params = openai_request_to_params(
            {
                "model": "m",
                "tools": [
                    {
                        "type": "function",
                        "function": {"name": "f", "description": "d", "parameters": {"type": "object"}},
                    }
                ],
                "tool_choice": {"type": "function", "function": {"name": "f"}},
            }
        )
        assert params.tools is not None
        assert params.tools["f"].description == "d"
        assert params.tool_choice == ToolChoiceTool(tool_name="f")

    def test_string_tool_choice(self) -> None:
        assert openai_request_to_params({"model": "m", "tool_choice": "required"}).tool_choice == "required"


# ---------------------------------------------------------------------------
# Gemini
# ---------------------------------------------------------------------------


class TestGeminiRequest:
    def test_string_contents(self) -> None:
        params = gemini_request_to_params({"model": "gemini-test", "contents": "Hi"})
        assert params.messages == [UserMessage(content=[TextPart(text="Hi")])]

    def test_list_of_parts(self) -> None:
        params = gemini_request_to_params({"model": "m", "contents": ["a", {"text": "b"}]})
        assert params.messages == [UserMessage(content=[TextPart(text="a"), TextPart(text="b")])]

    def test_conversation(self) -> None:
        params = gemini_request_to_params(
            {
                "model": "m",
                "contents": [
                    {"role": "user", "parts": [{"text": "Weather?"}]},
                    {
                        "role": "model",
                        "parts": [{"functionCall": {"id": "fc1", "name": "weather", "args": {"c": "SF"}}}],
                    },
                    {
                        "role": "user",
                        "parts": [
                            {"functionResponse": {"id": "fc1", "name": "weather", "response": {"output": "72F"}}}
                        ],
                    },
                ],
                "config": {
                    "systemInstruction": {"parts": [{"text": "Be brief."}]},
                    "maxOutputTokens": 64,
                    "topK": 3,
                },
            }
        )
        assert params.system == "Be brief."
        assert params.max_output_tokens == 64
        assert params.top_k == 3

        user, model, tool = params.messages
        assert isinstance(user, UserMessage)
        assert isinstance(model, AssistantMessage)
        assert model.tool_calls[0] == ToolCallPart(
            tool_call_id="fc1", tool_name="weather", input={"c": "SF"}
        )
        assert isinstance(tool, ToolMessage)
        assert tool.content[0].tool_name == "weather"
        assert tool.content[0].output.value == "72F"

    def test_inline_data(self) -> None:
        params = gemini_request_to_params(
            {
                "model": "m",
                "contents": [
                    {
                        "role": "user",
                        "parts": [
                            {"inlineData": {"mimeType": "image/jpeg", "data": "IMG"}},
                            {"inlineData": {"mimeType": "audio/wav", "data": "WAV"}},
                        ],
                    }
                ],
            }
        )
        assert params.messages[0].content == [
            ImagePart(image="data:image/jpeg;base64,IMG", media_type="image/jpeg"),
            FilePart(data="WAV", media_type="audio/wav"),
        ]

    def test_tools_with_gemini_schema(self) -> None:
        params = gemini_request_to_params(
            {
                "model": "m",
                "config": {
                    "tools": [
                        {
                            "functionDeclarations": [
                                {
                                    "name": "weather",
                                    "parameters": {
                                        "type": "OBJECT",
                                        "properties": {"city": {"type": "STRING"}},
                                        "required": ["city"],
                                    },
                                }
                            ]
                        }
                    ],
                    "toolConfig": {
                        "functionCallingConfig": {"mode": "ANY", "allowedFunctionNames": ["weather"]}
                    },
                },
            }
        )
        assert params.tools is not None
        assert params.tools["weather"].input_schema == {
            "type": "object",
            "properties": {"city": {"type": "string"}},
            "required": ["city"],
        }
        assert params.tool_choice == ToolChoiceTool(tool_name="weather")

    @pytest.mark.parametrize(
        ("mode", "expected"),
        [("AUTO", "auto"), ("ANY", "required"), ("NONE", "none")],
    )
    def test_tool_choice_modes(self, mode: str, expected: str) -> None:
        params = gemini_request_to_params(
            {"model": "m", "config": {"toolConfig": {"functionCallingConfig": {"mode": mode}}}}
        )
        assert params.tool_choice == expected

    @pytest.mark.parametrize(
        ("output", "expected"),
        [
            ("72F", "72F"),
            (True, "true"),
            (None, "null"),
            ({"a": 1}, '{"a":1}'),
            ([1, "b"], '[1,"b"]'),
        ],
    )
    def test_function_response_output_text(self, output: object, expected: str) -> None:
        params = gemini_request_to_params(
            {
                "model": "m",
                "contents": [
                    {
                        "role": "user",
                        "parts": [{"functionResponse": {"name": "f", "response": {"output": output}}}],
                    }
                ],
            }
        )
        assert params.messages[0].content[0].output.value == expected

    def test_function_response_error_text(self) -> None:
        params = gemini_request_to_params(
            {
                "model": "m",
                "contents": [
                    {
                        "role": "user",
                        "parts": [
                            {"functionResponse": {"name": "f", "response": {"error": {"code": 404}}}}
                        ],
                    }
                ],
            }
        )
        assert params.messages[0].content[0].output.value == '{"code":404}'

    def test_empty_function_response_is_a_tool_result(self) -> None:
        params = gemini_request_to_params(
            {"model": "m", "contents": [{"role": "user", "parts": [{"functionResponse": {}}]}]}
        )
        (message,) = params.messages
        assert isinstance(message, ToolMessage)
        assert message.content[0].output.value == ""

    def test_empty_function_call_is_kept(self) -> None:
        params = gemini_request_to_params(
            {"model": "m", "contents": [{"role": "model", "parts": [{"functionCall": {}}]}]}
        )
        assert params.messages[0].tool_calls == [
            ToolCallPart(tool_call_id="", tool_name="", input={})
        ]

    def test_schema_keeps_empty_collections(self) -> None:
        assert schema_to_json_schema(
            {"type": "OBJECT", "properties": {}, "required": [], "enum": []}
        ) == {"type": "object", "enum": [], "properties": {}, "required": []}

    def test_schema_items(self) -> None:
        assert schema_to_json_schema({"type": "ARRAY", "items": {"type": "INTEGER"}}) == {
            "type": "array",
            "items": {"type": "integer"},
        }
