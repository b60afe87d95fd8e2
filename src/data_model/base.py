"""Shared Pydantic base models."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """Base model with strict, immutable defaults."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    def to_json_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dictionary.

        Returns:
            Dictionary with enums and sets reduced to JSON primitives.
        """
        return self.model_dump(mode="json")
