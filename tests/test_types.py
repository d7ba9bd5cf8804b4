import json

import pytest

from invi.types import Field, FieldType, Value

SAMPLES = {
    FieldType.STRING: Value("text"),
    FieldType.NUMBER: Value(7),
    FieldType.BOOLEAN: Value(True),
    FieldType.ARRAY: Value([1, 2]),
    FieldType.OBJECT: Value({"a": 1}),
}


@pytest.mark.parametrize("field_type", list(FieldType))
def test_field_type_accepts_only_its_own_kind(field_type):
    for kind, value in SAMPLES.items():
        assert field_type.is_valid(value) == (kind is field_type)
    assert not field_type.is_valid(Value(None))


def test_boolean_is_not_a_number():
    value = Value(True)
    assert value.as_i64() is None
    assert value.as_bool() is True


def test_nested_json_round_trip():
    data = {"b": [1, "x", None, True], "a": {"inner": 3}}
    assert Value.from_json(data).to_json() == data


def test_object_keys_are_sorted():
    value = Value.from_json({"z": 1, "a": 2, "m": 3})
    assert list(value.as_object()) == sorted(["z", "a", "m"])


@pytest.mark.parametrize("bad", [-1, 1.5, 2**64])
def test_from_json_rejects_non_u64_numbers(bad):
    with pytest.raises(ValueError):
        Value.from_json(bad)


def test_accessors_return_none_on_mismatch():
    value = Value("hello")
    assert value.as_str() == "hello"
    assert value.as_i64() is None
    assert value.as_object() is None
    assert value.as_array() is None
    assert value.as_bool() is None
    assert not value.is_null()
    assert not value.is_object()


def test_to_value_string_scalars():
    assert Value("abc").to_value_string() == "abc"
    assert Value(42).to_value_string() == str(42)
    assert Value(None).to_value_string() == "null"


def test_to_value_string_object_is_json():
    data = {"k": [1, 2], "j": "v"}
    assert json.loads(Value(data).to_value_string()) == data


def test_equality_distinguishes_kinds():
    assert Value(1) == Value(1)
    assert not Value(1) == Value(True)


def test_field_dict_round_trip():
    field = Field.create("age", FieldType.NUMBER, False, Value(30))
    data = field.to_dict()
    assert data["field_type"] == "number"
    assert Field.from_dict(data) == field


def test_field_default_is_coerced():
    field = Field.create("name", FieldType.STRING, True, None)
    assert field.default.is_null()