"""Tests for shared result variants and error extraction."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from llmwire.core.events import TextStartEvent
from llmwire.core.results import (
    SKIP,
    ErrorResult,
    error_message,
    unknown_event,
    unknown_tool_call,
)


class _Oops:
    message = "from attribute"


class TestResults:
    def test_skip_has_no_payloads(self) -> None:
        assert SKIP.outcome == "skip"
        assert SKIP.payloads() == []

    def test_error_has_no_payloads(self) -> None:
        result = ErrorResult(error="boom")
        assert result.outcome == "error"
        assert result.payloads() == []

    def test_results_are_frozen(self) -> None:
        result = ErrorResult(error="boom")
        with pytest.raises(ValidationError):
            result.error = "other"  # type: ignore[misc]

    def test_unknown_tool_call(self) -> None:
        assert unknown_tool_call("c9").error == "Unknown tool call id: c9"

    def test_unknown_event(self) -> None:
        assert unknown_event(TextStartEvent(id="t")).error == "Unknown event type: text-start"
        assert unknown_event(object()).error == "Unknown event type: object"


class TestErrorMessage:
    def test_exception_message(self) -> None:
        assert error_message(RuntimeError("rate limited")) == "rate limited"

    def test_exception_without_message(self) -> None:
        assert error_message(RuntimeError()) == "RuntimeError"

    def test_string(self) -> None:
        assert error_message("plain") == "plain"

    def test_mapping_message(self) -> None:
        assert error_message({"message": "overloaded", "code": 529}) == "overloaded"

    def test_mapping_without_message(self) -> None:
        assert error_message({"code": 529}) == "{'code': 529}"

    def test_object_message_attribute(self) -> None:
        assert error_message(_Oops()) == "from attribute"

    def test_none(self) -> None:
        assert error_message(None) == "None"
