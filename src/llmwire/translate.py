"""Provider registry and stream driver.

Resolves provider names to transpilers and drives a whole neutral event
sequence through a stream adapter, so callers only deal with vendor payloads.

Usage::

    options = StreamOptions(id="msg_123", model="claude-sonnet-4")
    for payload in translate_stream(events, "anthropic", options):
        sink.send(payload)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from llmwire.core.config import StreamOptions
from llmwire.core.errors import StreamTranslationError, UnsupportedProviderError
from llmwire.core.events import FinishEvent, StreamEvent, parse_event
from llmwire.core.models import ModelParams, ModelResponse
from llmwire.core.results import ErrorResult
from llmwire.core.transpiler import StreamTranspiler
from llmwire.transpilers.anthropic import (
    AnthropicStreamTranspiler,
    anthropic_request_to_params,
    anthropic_response_from_result,
)
from llmwire.transpilers.gemini import (
    GeminiStreamTranspiler,
    gemini_request_to_params,
    gemini_response_from_result,
)
from llmwire.transpilers.openai import (
    OpenAIStreamTranspiler,
    openai_request_to_params,
    openai_response_from_result,
)
from llmwire.utils.telemetry import (
    ATTR_ERROR,
    ATTR_EVENTS,
    ATTR_FINISH_REASON,
    ATTR_MODEL,
    ATTR_PAYLOADS,
    ATTR_PROVIDER,
    get_tracer,
)

logger = logging.getLogger(__name__)

_tracer = get_tracer(__name__)

PROVIDER_ALIASES: dict[str, str] = {
    "anthropic": "anthropic",
    "openai": "openai",
    "gemini": "gemini",
    "google": "gemini",
    "vertex_ai": "gemini",
}

_REQUEST_CONVERTERS: dict[str, Callable[[dict[str, Any]], ModelParams]] = {
    "anthropic": anthropic_request_to_params,
    "openai": openai_request_to_params,
    "gemini": gemini_request_to_params,
}


def _gemini_response(
    response: ModelResponse, *, id: str | None = None, model: str | None = None
) -> dict[str, Any]:
    return gemini_response_from_result(response, response_id=id, model_version=model)


_RESPONSE_CONVERTERS: dict[str, Callable[..., dict[str, Any]]] = {
    "anthropic": anthropic_response_from_result,
    "openai": openai_response_from_result,
    "gemini": _gemini_response,
}


def resolve_provider(provider: str) -> str:
    """Return the canonical provider name for *provider* or an alias of it."""
    canonical = PROVIDER_ALIASES.get(provider.lower())
    if canonical is None:
        raise UnsupportedProviderError(provider)
    return canonical


def get_stream_transpiler(provider: str) -> StreamTranspiler:
    """Return the stream transpiler for a provider."""
    mapping: dict[str, StreamTranspiler] = {
        "anthropic": AnthropicStreamTranspiler(),
        "openai": OpenAIStreamTranspiler(),
        "gemini": GeminiStreamTranspiler(),
    }
    return mapping[resolve_provider(provider)]


def convert_request(provider: str, body: dict[str, Any]) -> ModelParams:
    """Convert a vendor request body to neutral params."""
    return _REQUEST_CONVERTERS[resolve_provider(provider)](body)


def convert_response(
    provider: str,
    response: ModelResponse,
    *,
    id: str | None = None,
    model: str | None = None,
) -> dict[str, Any]:
    """Convert a complete neutral result to a vendor response body.

    *id* and *model* override the response metadata in the vendor body.
    """
    converter = _RESPONSE_CONVERTERS[resolve_provider(provider)]
    return converter(response, id=id, model=model)


def translate_stream(
    events: Iterable[StreamEvent | dict[str, Any]],
    provider: str,
    options: StreamOptions,
) -> Iterator[dict[str, Any]]:
    """Drive *events* through one provider's stream adapter and yield vendor payloads.

    A single context is created for the whole sequence. Skipped events yield
    nothing. The first error result ends the stream by raising
    :class:`~llmwire.core.errors.StreamTranslationError`, since the context is
    no longer consistent after it.
    """
    transpiler = get_stream_transpiler(provider)
    context = transpiler.create_context(options)

    with _tracer.start_as_current_span("llmwire.stream.translate") as span:
        span.set_attribute(ATTR_PROVIDER, transpiler.provider)
        span.set_attribute(ATTR_MODEL, options.model)
        event_count = 0
        payload_count = 0

        for raw in events:
            event = parse_event(raw) if isinstance(raw, dict) else raw
            event_count += 1
            if isinstance(event, FinishEvent):
                span.set_attribute(ATTR_FINISH_REASON, event.finish_reason)

            result = transpiler.convert(event, context)
            if isinstance(result, ErrorResult):
                logger.warning(
                    "%s stream ended on event %d: %s",
                    transpiler.provider,
                    event_count,
                    result.error,
                )
                span.set_attribute(ATTR_ERROR, result.error)
                raise StreamTranslationError(transpiler.provider, result.error)

            for payload in result.payloads():
                payload_count += 1
                yield payload

        span.set_attribute(ATTR_EVENTS, event_count)
        span.set_attribute(ATTR_PAYLOADS, payload_count)
