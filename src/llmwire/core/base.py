"""Base model for the neutral format.

The neutral format travels as AI SDK JSON, which is camelCase. Python code
uses snake_case attribute names; the alias generator maps between the two.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Pydantic model that accepts both field names and camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Dump to a camelCase dict, omitting unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
