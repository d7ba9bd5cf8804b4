"""Key/value stores of dynamic values bound to a schema."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any

from invi.types import Value

# Key under which serialized nested-object schema names are read back.
_PROPERTIES_KEY_ON_READ = "object_properties_schamas"


class ValueStoreError(Exception):
    """Base error for value store conversions."""


class NotAnObject(ValueStoreError):
    """The value given is not an object."""


class CannotConvertFromValue(ValueStoreError):
    """The object lacks a ``values`` object."""


def _as_value(value: Any) -> Value:
    return value if isinstance(value, Value) else Value(value)


class ValueStore:
    """Values keyed by name, optionally tied to a schema.

    ``object_properties_schemas`` maps a key holding an object to the name of
    the schema that object must follow.
    """

    def __init__(self, schema_name: str | None = None) -> None:
        self.schema_name = schema_name
        self.object_properties_schemas: dict[str, str] = {}
        self._values: dict[str, Value] = {}

    def with_object_properties_schemas(
        self, object_properties_schemas: Mapping[str, str]
    ) -> ValueStore:
        self.object_properties_schemas = dict(object_properties_schemas)
        return self

    def insert(self, key: str, value: Any) -> None:
        self._values[key] = _as_value(value)

    def string(self, key: str, value: str) -> ValueStore:
        if not isinstance(value, str):
            raise TypeError(f"expected a string for {key!r}")
        self.insert(key, Value(value))
        return self

    def number(self, key: str, value: int) -> ValueStore:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"expected an unsigned integer for {key!r}")
        self.insert(key, Value(value))
        return self

    def object(self, key: str, value: Any) -> ValueStore:
        self.insert(key, value)
        return self

    def array(self, key: str, value: Iterable[Any]) -> ValueStore:
        self.insert(key, Value(list(value)))
        return self

    def get(self, key: str) -> Value | None:
        return self._values.get(key)

    def get_all(self) -> dict[str, Value]:
        """Return all values, ordered by key."""
        return dict(sorted(self._values.items()))

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    @classmethod
    def from_object_value(
        cls,
        schema_name: str | None,
        value: Any,
        object_properties_schemas: Mapping[str, str],
    ) -> ValueStore:
        store = cls.from_value_shallow(value)
        store.schema_name = schema_name
        return store.with_object_properties_schemas(object_properties_schemas)

    @classmethod
    def from_value_shallow(cls, value: Any) -> ValueStore:
        """Build a schema-less store from the entries of an object value."""
        mapping = _as_value(value).as_object()
        if mapping is None:
            raise NotAnObject("value is not an object")
        store = cls(None)
        for key, item in mapping.items():
            store.insert(key, item)
        return store

    @classmethod
    def from_value(cls, value: Any) -> ValueStore:
        """Build a store from its serialized object form."""
        mapping = _as_value(value).as_object()
        if mapping is None:
            raise NotAnObject("value is not an object")
        name_value = mapping.get("schema_name")
        store = cls(name_value.as_str() if name_value is not None else None)
        properties = mapping.get(_PROPERTIES_KEY_ON_READ)
        if properties is not None and properties.as_object() is not None:
            store.with_object_properties_schemas(
                {k: v.as_str() or "" for k, v in properties.as_object().items()}
            )
        values = mapping.get("values")
        if values is None or values.as_object() is None:
            raise CannotConvertFromValue("missing 'values' object")
        for key, item in values.as_object().items():
            store.insert(key, item)
        return store

    @classmethod
    def from_json(cls, data: Any) -> ValueStore:
        """Build a store from JSON text or from already parsed JSON data."""
        if isinstance(data, (str, bytes, bytearray)):
            data = json.loads(data)
        return cls.from_value(Value.from_json(data))

    def to_json(self) -> str:
        """Serialize the store as compact JSON."""
        return json.dumps(
            {
                "schema_name": self.schema_name,
                "object_properties_schemas": self.object_properties_schemas,
                "values": {k: v.to_json() for k, v in self.get_all().items()},
            },
            separators=(",", ":"),
            ensure_ascii=False,
        )

    def __str__(self) -> str:
        return self.to_json()

    def __repr__(self) -> str:
        return (
            f"ValueStore(schema_name={self.schema_name!r}, "
            f"object_properties_schemas={self.object_properties_schemas!r}, "
            f"values={self.get_all()!r})"
        )