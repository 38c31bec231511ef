"""Result variants shared by the stream adapters.

An adapter call never raises. It returns one of three outcomes: a vendor
payload variant (defined next to each adapter), :class:`SkipResult`, or
:class:`ErrorResult`. Callers branch on ``outcome``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict


class BaseResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    def payloads(self) -> list[dict[str, Any]]:
        """Vendor payloads carried by this result, in emission order."""
        return []


class SkipResult(BaseResult):
    """No output for this input event; keep driving the stream."""

    outcome: Literal["skip"] = "skip"


class ErrorResult(BaseResult):
    """Terminal for the stream: the message should be surfaced and the stream stopped."""

    outcome: Literal["error"] = "error"
    error: str


SKIP = SkipResult()


def unknown_tool_call(tool_call_id: str) -> ErrorResult:
    """Result for a delta or end event whose id was never started."""
    return ErrorResult(error=f"Unknown tool call id: {tool_call_id}")


def unknown_event(event: object) -> ErrorResult:
    kind = getattr(event, "type", type(event).__name__)
    return ErrorResult(error=f"Unknown event type: {kind}")


def error_message(error: Any) -> str:
    """Extract a human-readable message from an upstream error value.

    Exceptions give their message, mappings and exception-like objects give a
    string ``message`` entry, anything else is converted with ``str()``.
    """
    if isinstance(error, BaseException):
        return str(error) or type(error).__name__
    if isinstance(error, Mapping):
        message = error.get("message")
        if isinstance(message, str):
            return message
        return str(error)
    message = getattr(error, "message", None)
    if isinstance(message, str):
        return message
    return str(error)
