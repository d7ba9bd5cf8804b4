"""Validation of value stores against registered schemas."""

from __future__ import annotations

from invi.registry import Registry
from invi.schema import Schema
from invi.value_store import ValueStore, ValueStoreError


class ValidatorError(Exception):
    """Base error for validation failures."""


class MissingField(ValidatorError):
    """A schema field has no entry in the value store."""


class InvalidType(ValidatorError):
    """A value does not match its field's type."""


class RequiredFieldMissing(ValidatorError):
    """A required field holds null."""


class SchemaNotFound(ValidatorError):
    """The named schema is not registered."""


class SchemaIdentifierMissing(ValidatorError):
    """The value store names no schema."""


class Validator:
    """Checks value stores, including nested objects, against a registry."""

    def __init__(self, registry: Registry) -> None:
        self.registry = registry

    def validate(self, value: ValueStore) -> None:
        """Raise a ValidatorError if ``value`` does not satisfy its schema."""
        schema_name = value.schema_name
        if schema_name is None:
            raise SchemaIdentifierMissing("value store has no schema name")
        schema = self.registry.get_schema(schema_name)
        if schema is None:
            raise SchemaNotFound(schema_name)
        self._validate(schema, value)

    def _validate(self, schema: Schema, value: ValueStore) -> None:
        self._validate_fields(schema, value)
        self._validate_inner_objects(value)

    @staticmethod
    def _validate_fields(schema: Schema, value: ValueStore) -> None:
        for field in schema.fields:
            field_value = value.get(field.name)
            if field_value is None:
                raise MissingField(f"Field '{field.name}' is missing in the value store")
            if field.required and field_value.is_null():
                raise RequiredFieldMissing(field.name)
            if not field_value.is_null() and not field.field_type.is_valid(field_value):
                raise InvalidType(
                    f"Field '{field.name}' has invalid type: "
                    f"expected {field.field_type!r}, got {field_value!r}"
                )

    def _validate_inner_objects(self, value: ValueStore) -> None:
        properties = value.object_properties_schemas
        for field_name, schema_name in properties.items():
            inner = value.get(field_name)
            if inner is None:
                continue
            schema = self.registry.get_schema(schema_name)
            if schema is None:
                raise SchemaNotFound(schema_name)
            try:
                nested = ValueStore.from_object_value(schema_name, inner, properties)
            except ValueStoreError as exc:
                raise ValidatorError(f"field '{field_name}': {exc}") from exc
            self._validate(schema, nested)