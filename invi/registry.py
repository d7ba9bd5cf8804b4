"""A thread-safe registry of schemas by name."""

from __future__ import annotations

import threading
from collections.abc import Iterable

from invi.schema import Schema


class Registry:
    """Maps schema names to schemas."""

    def __init__(self) -> None:
        self._schemas: dict[str, Schema] = {}
        self._lock = threading.Lock()

    def register(self, name: str, schema: Schema) -> None:
        """Register ``schema`` under ``name``, replacing any earlier one."""
        with self._lock:
            self._schemas[name] = schema

    def get_schema(self, name: str) -> Schema | None:
        with self._lock:
            return self._schemas.get(name)

    @classmethod
    def load_from_schemas(cls, schemas: Iterable[Schema]) -> Registry:
        """Build a registry holding each schema under its own name."""
        registry = cls()
        for schema in schemas:
            registry.register(schema.name, schema)
        return registry