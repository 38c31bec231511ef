"""Stream transpiler protocol — converts neutral stream events to a vendor stream.

Each provider (OpenAI, Anthropic, Gemini) has a concrete stream transpiler.
Transpilers are stateless; all per-stream state lives in the context object
they create, which the caller threads through every ``convert`` call.
"""

from typing import Any, Protocol, runtime_checkable

from llmwire.core.config import StreamOptions
from llmwire.core.events import StreamEvent
from llmwire.core.results import BaseResult


@runtime_checkable
class StreamTranspiler(Protocol):
    """Protocol for provider-specific stream transpilers."""

    provider: str

    def create_context(self, options: StreamOptions) -> Any:
        """Create a fresh conversion context for one logical stream.

        The context is mutated by every ``convert`` call and must not be
        shared between streams or used from concurrent callers.
        """
        ...

    def convert(self, event: StreamEvent, context: Any) -> BaseResult:
        """Convert one neutral event.

        Returns the provider's payload result, a skip result, or an error
        result. Never raises for malformed event ordering.
        """
        ...
