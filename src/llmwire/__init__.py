"""llmwire — translate between LLM vendor wire formats and a neutral representation."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from llmwire.translate import convert_request as convert_request
    from llmwire.translate import convert_response as convert_response
    from llmwire.translate import get_stream_transpiler as get_stream_transpiler
    from llmwire.translate import translate_stream as translate_stream

_TRANSLATE_EXPORTS = {
    "convert_request": "llmwire.translate",
    "convert_response": "llmwire.translate",
    "get_stream_transpiler": "llmwire.translate",
    "translate_stream": "llmwire.translate",
}


def __getattr__(name: str) -> object:
    module_path = _TRANSLATE_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'llmwire' has no attribute {name!r}")
