"""JSON helpers shared by the request, response, and stream converters.

The vendor clients parse tool arguments back with their own JSON decoders, so
serialization mirrors ``JSON.stringify``: compact separators, no ASCII
escaping, and key insertion order.
"""

from __future__ import annotations

import json
import math
from typing import Any


def dumps(value: Any) -> str:
    """Serialize *value* to compact JSON text.

    Non-finite floats become ``null``, as ``JSON.stringify`` writes them.
    """
    return json.dumps(replace_non_finite(value), separators=(",", ":"), ensure_ascii=False)


def replace_non_finite(value: Any) -> Any:
    """Return *value* with NaN and infinities replaced by ``None``, recursively."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: replace_non_finite(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [replace_non_finite(item) for item in value]
    return value


def parse_or_passthrough(text: str) -> Any:
    """Parse *text* as JSON, returning the original string if it is not valid JSON."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return text


def parse_or_empty(text: str) -> dict[str, Any]:
    """Parse *text* as a JSON object.

    Partial tool arguments are expected mid-stream, so empty text, invalid
    JSON, and non-object values all degrade to ``{}``.
    """
    if not text:
        return {}
    try:
        result = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return {}
    if not isinstance(result, dict):
        return {}
    return result
