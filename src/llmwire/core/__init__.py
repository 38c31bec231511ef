"""Neutral format, stream configuration, and shared result types."""

from llmwire.core.config import StreamOptions
from llmwire.core.errors import (
    StreamTranslationError,
    TranslationError,
    UnsupportedContentError,
    UnsupportedProviderError,
)
from llmwire.core.events import EVENT_TYPES, StreamEvent, Usage, parse_event
from llmwire.core.models import ModelParams, ModelResponse, ResponseMetadata, ToolCallPart
from llmwire.core.results import BaseResult, ErrorResult, SkipResult
from llmwire.core.transpiler import StreamTranspiler

__all__ = [
    "EVENT_TYPES",
    "BaseResult",
    "ErrorResult",
    "ModelParams",
    "ModelResponse",
    "ResponseMetadata",
    "SkipResult",
    "StreamEvent",
    "StreamOptions",
    "StreamTranslationError",
    "StreamTranspiler",
    "ToolCallPart",
    "TranslationError",
    "UnsupportedContentError",
    "UnsupportedProviderError",
    "Usage",
    "parse_event",
]
