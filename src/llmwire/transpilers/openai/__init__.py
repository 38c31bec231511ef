"""OpenAI Chat Completions API transpilers."""

from llmwire.transpilers.openai.request import openai_request_to_params
from llmwire.transpilers.openai.response import openai_response_from_result
from llmwire.transpilers.openai.stream import (
    OpenAIChunkResult,
    OpenAIStreamContext,
    OpenAIStreamResult,
    OpenAIStreamTranspiler,
    convert_event,
    convert_finish_reason,
    create_stream_context,
)

__all__ = [
    "OpenAIChunkResult",
    "OpenAIStreamContext",
    "OpenAIStreamResult",
    "OpenAIStreamTranspiler",
    "convert_event",
    "convert_finish_reason",
    "create_stream_context",
    "openai_request_to_params",
    "openai_response_from_result",
]
