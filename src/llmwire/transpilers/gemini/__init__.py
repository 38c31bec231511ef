"""Google GenAI (Gemini) transpilers."""

from llmwire.transpilers.gemini.request import gemini_request_to_params
from llmwire.transpilers.gemini.response import gemini_response_from_result
from llmwire.transpilers.gemini.stream import (
    GeminiResponseResult,
    GeminiStreamContext,
    GeminiStreamResult,
    GeminiStreamTranspiler,
    convert_event,
    convert_finish_reason,
    create_stream_context,
)

__all__ = [
    "GeminiResponseResult",
    "GeminiStreamContext",
    "GeminiStreamResult",
    "GeminiStreamTranspiler",
    "convert_event",
    "convert_finish_reason",
    "create_stream_context",
    "gemini_request_to_params",
    "gemini_response_from_result",
]
