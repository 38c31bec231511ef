"""Provider-specific transpiler implementations."""

from llmwire.transpilers.anthropic import AnthropicStreamTranspiler
from llmwire.transpilers.gemini import GeminiStreamTranspiler
from llmwire.transpilers.openai import OpenAIStreamTranspiler

__all__ = ["AnthropicStreamTranspiler", "GeminiStreamTranspiler", "OpenAIStreamTranspiler"]
