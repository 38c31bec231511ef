"""Anthropic Messages API transpilers."""

from llmwire.transpilers.anthropic.request import anthropic_request_to_params
from llmwire.transpilers.anthropic.response import anthropic_response_from_result
from llmwire.transpilers.anthropic.stream import (
    AnthropicEventsResult,
    AnthropicStreamContext,
    AnthropicStreamResult,
    AnthropicStreamTranspiler,
    convert_event,
    convert_stop_reason,
    create_stream_context,
)

__all__ = [
    "AnthropicEventsResult",
    "AnthropicStreamContext",
    "AnthropicStreamResult",
    "AnthropicStreamTranspiler",
    "anthropic_request_to_params",
    "anthropic_response_from_result",
    "convert_event",
    "convert_stop_reason",
    "create_stream_context",
]
