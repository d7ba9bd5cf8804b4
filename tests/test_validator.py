import pytest

from invi.registry import Registry
from invi.schema import Schema
from invi.types import Field, FieldType, Value
from invi.validator import (
    InvalidType,
    MissingField,
    RequiredFieldMissing,
    SchemaIdentifierMissing,
    SchemaNotFound,
    ValidatorError,
    Validator,
)
from invi.value_store import NotAnObject, ValueStore


def _registry(with_inner=True):
    registry = Registry()
    registry.register(
        "TestSchema",
        Schema.create(
            "TestSchema",
            [
                Field.create("name", FieldType.STRING, True, Value(None)),
                Field.create("age", FieldType.NUMBER, False, Value(30)),
                Field.create("other", FieldType.OBJECT, True, Value(None)),
            ],
        ),
    )
    if with_inner:
        registry.register(
            "InnerSchema",
            Schema.create(
                "InnerSchema", [Field.create("a", FieldType.NUMBER, True, Value(None))]
            ),
        )
    return registry


def _store(other):
    return (
        ValueStore("TestSchema")
        .with_object_properties_schemas({"other": "InnerSchema"})
        .string("name", "Ookuma Wakana")
        .number("age", 23)
        .object("other", Value(other))
    )


def test_value_validation():
    validator = Validator(_registry())
    assert validator.validate(_store({"a": 10})) is None


def test_value_invalidation():
    validator = Validator(_registry())
    value = _store({"b": 10})
    with pytest.raises(MissingField):
        validator.validate(value)
    value.remove("other")
    with pytest.raises(MissingField, match="other"):
        validator.validate(value)


def test_schema_name_required():
    with pytest.raises(SchemaIdentifierMissing):
        Validator(_registry()).validate(ValueStore(None))


def test_unknown_schema():
    with pytest.raises(SchemaNotFound):
        Validator(_registry()).validate(ValueStore("Unknown"))


def test_unregistered_inner_schema():
    with pytest.raises(SchemaNotFound, match="InnerSchema"):
        Validator(_registry(with_inner=False)).validate(_store({"a": 10}))


def test_required_null_field():
    value = _store({"a": 10})
    value.insert("name", Value(None))
    with pytest.raises(RequiredFieldMissing):
        Validator(_registry()).validate(value)


def test_invalid_type():
    value = _store({"a": 10})
    value.insert("age", Value("old"))
    with pytest.raises(InvalidType, match="age"):
        Validator(_registry()).validate(value)


def test_inner_invalid_type():
    with pytest.raises(InvalidType):
        Validator(_registry()).validate(_store({"a": "ten"}))


def test_inner_value_not_an_object():
    registry = _registry()
    registry.register(
        "Loose",
        Schema.create("Loose", [Field.create("other", FieldType.NUMBER, False, Value(None))]),
    )
    value = (
        ValueStore("Loose")
        .with_object_properties_schemas({"other": "InnerSchema"})
        .number("other", 5)
    )
    with pytest.raises(ValidatorError) as info:
        Validator(registry).validate(value)
    assert isinstance(info.value.__cause__, NotAnObject)