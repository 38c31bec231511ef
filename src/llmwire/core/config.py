"""Stream configuration — the stable identifiers a conversion context is built from."""

from pydantic import BaseModel, Field


class StreamOptions(BaseModel):
    """Identifiers stamped on every payload of one logical stream.

    ``id`` and ``model`` become the vendor's response id and model name
    (``responseId`` / ``modelVersion`` for Gemini). ``created`` is a unix
    timestamp in seconds used only by the OpenAI adapter; when omitted the
    OpenAI context reads the clock once at construction.
    """

    id: str = Field(min_length=1)
    model: str
    created: int | None = None
