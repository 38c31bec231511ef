"""Smoke test to verify the project scaffolding works."""

from __future__ import annotations


def test_import() -> None:
    import llmwire

    assert llmwire.__version__ == "0.1.0"


def test_cli_entrypoint() -> None:
    from llmwire.cli import main

    assert callable(main)


def test_core_imports() -> None:
    from llmwire.core import (
        EVENT_TYPES,
        ErrorResult,
        SkipResult,
        StreamOptions,
        StreamTranspiler,
        parse_event,
    )

    assert len(EVENT_TYPES) == 21
    assert ErrorResult is not None
    assert SkipResult is not None
    assert StreamOptions is not None
    assert StreamTranspiler is not None
    assert parse_event is not None


def test_transpilers_satisfy_protocol() -> None:
    from llmwire.core import StreamTranspiler
    from llmwire.transpilers import (
        AnthropicStreamTranspiler,
        GeminiStreamTranspiler,
        OpenAIStreamTranspiler,
    )

    for cls in (AnthropicStreamTranspiler, OpenAIStreamTranspiler, GeminiStreamTranspiler):
        assert isinstance(cls(), StreamTranspiler)


def test_lazy_import_from_llmwire() -> None:
    import llmwire

    assert callable(llmwire.translate_stream)
    assert callable(llmwire.get_stream_transpiler)
