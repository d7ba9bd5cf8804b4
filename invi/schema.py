"""Named collections of fields."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from invi.types import Field


@dataclass
class Schema:
    """A named list of fields describing the shape of a value store."""

    name: str
    fields: list[Field] = field(default_factory=list)

    @classmethod
    def create(cls, name: str, fields: Iterable[Field]) -> Schema:
        return cls(name, list(fields))

    def get_field(self, name: str) -> Field | None:
        """Return the first field called ``name``, or None."""
        return next((f for f in self.fields if f.name == name), None)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "fields": [f.to_dict() for f in self.fields]}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Schema:
        return cls(data["name"], [Field.from_dict(f) for f in data["fields"]])