"""
Collection and index specifications consumed by collection creation.
"""

from collections.abc import Mapping
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field


class IndexSpec(BaseModel):
    """
    One declared secondary index.

    Usage:
        IndexSpec(index={"sku": 1}, options={"unique": True})
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    index: dict[str, Any] = Field(..., min_length=1, description="Index key definition")
    options: dict[str, Any] = Field(
        default_factory=dict, description="Index creation options"
    )

    @classmethod
    def from_value(cls, value: "IndexSpec | Mapping[str, Any]") -> Self:
        if isinstance(value, cls):
            return value
        return cls.model_validate(value)

    def index_keys(self) -> list[tuple[str, Any]]:
        """Index key as an ordered list of (field, direction) pairs."""
        return list(self.index.items())


class CollectionSpec(BaseModel):
    """Declared indexes for a collection."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    indexes: list[IndexSpec] = Field(default_factory=list)

    @classmethod
    def from_value(cls, value: "CollectionSpec | Mapping[str, Any] | None") -> Self:
        if isinstance(value, cls):
            return value
        return cls.model_validate(dict(value or {}))
