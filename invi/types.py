"""Field types and the dynamic value model used by schemas and value stores."""

from __future__ import annotations

import enum
import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

_U64_MAX = 2**64 - 1


class FieldType(enum.Enum):
    """The kind of value a schema field accepts."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"

    def is_valid(self, value: Value) -> bool:
        """Return whether ``value`` is of this field type."""
        return value._kind is self


def _normalize(data: Any) -> Any:
    if isinstance(data, Value):
        return data._data
    if data is None or isinstance(data, (bool, str)):
        return data
    if isinstance(data, int):
        if not 0 <= data <= _U64_MAX:
            raise ValueError(f"number out of range for an unsigned 64-bit value: {data}")
        return data
    if isinstance(data, float):
        raise ValueError(f"fractional numbers are not supported: {data}")
    if isinstance(data, Mapping):
        for key in data:
            if not isinstance(key, str):
                raise TypeError(f"object keys must be strings, got {key!r}")
        return {key: Value(data[key]) for key in sorted(data)}
    if isinstance(data, (list, tuple)):
        return [Value(item) for item in data]
    raise TypeError(f"unsupported value type: {type(data).__name__}")


class Value:
    """A JSON-like value: string, unsigned number, object, array, boolean or null.

    Numbers are non-negative integers; measurements use millimetres as the base unit.
    Object keys are kept in sorted order.
    """

    __slots__ = ("_data",)
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, data: Any = None) -> None:
        self._data = _normalize(data)

    @classmethod
    def from_json(cls, data: Any) -> Value:
        """Build a value from plain JSON data (dicts, lists, str, int, bool, None)."""
        if isinstance(data, Value):
            return data
        return cls(data)

    def to_json(self) -> Any:
        """Return the value as plain JSON data."""
        data = self._data
        if isinstance(data, dict):
            return {key: item.to_json() for key, item in data.items()}
        if isinstance(data, list):
            return [item.to_json() for item in data]
        return data

    @property
    def _kind(self) -> FieldType | None:
        data = self._data
        if data is None:
            return None
        if isinstance(data, bool):
            return FieldType.BOOLEAN
        if isinstance(data, str):
            return FieldType.STRING
        if isinstance(data, int):
            return FieldType.NUMBER
        if isinstance(data, dict):
            return FieldType.OBJECT
        return FieldType.ARRAY

    def as_str(self) -> str | None:
        return self._data if self._kind is FieldType.STRING else None

    def as_i64(self) -> int | None:
        return self._data if self._kind is FieldType.NUMBER else None

    def as_object(self) -> dict[str, Value] | None:
        return self._data if self._kind is FieldType.OBJECT else None

    def as_array(self) -> list[Value] | None:
        return self._data if self._kind is FieldType.ARRAY else None

    def as_bool(self) -> bool | None:
        return self._data if self._kind is FieldType.BOOLEAN else None

    def is_null(self) -> bool:
        return self._data is None

    def is_object(self) -> bool:
        return self._kind is FieldType.OBJECT

    def to_value_string(self) -> str:
        """Render the value as text; arrays and objects as pretty-printed JSON."""
        kind = self._kind
        if kind is None:
            return "null"
        if kind is FieldType.STRING:
            return self._data
        if kind is FieldType.BOOLEAN:
            return "true" if self._data else "false"
        if kind is FieldType.NUMBER:
            return str(self._data)
        return json.dumps(self.to_json(), indent=2, ensure_ascii=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self._kind is other._kind and self._data == other._data

    def __repr__(self) -> str:
        return f"Value({self.to_json()!r})"


@dataclass
class Field:
    """A named, typed field of a schema."""

    name: str
    field_type: FieldType
    required: bool
    default: Value

    def __post_init__(self) -> None:
        self.field_type = FieldType(self.field_type)
        if not isinstance(self.default, Value):
            self.default = Value(self.default)

    @classmethod
    def create(cls, name: str, field_type: FieldType, required: bool, default: Any) -> Field:
        return cls(name, field_type, required, default)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "field_type": self.field_type.value,
            "required": self.required,
            "default": self.default.to_json(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Field:
        return cls(
            name=data["name"],
            field_type=FieldType(data["field_type"]),
            required=bool(data["required"]),
            default=Value.from_json(data["default"]),
        )