import json

from invi.schema import Schema
from invi.types import Field, FieldType, Value


def _schema():
    return Schema.create(
        "TestSchema",
        [
            Field.create("name", FieldType.STRING, True, Value(None)),
            Field.create("age", FieldType.NUMBER, False, Value(30)),
        ],
    )


def test_schema_creation():
    schema = _schema()
    assert schema.name == "TestSchema"
    assert len(schema.fields) == 2
    age_field = schema.get_field("age")
    assert age_field is not None
    assert not age_field.required


def test_get_field_missing_returns_none():
    assert _schema().get_field("unknown") is None


def test_json_creation_round_trip():
    schema = _schema()
    text = json.dumps(schema.to_dict(), indent=2)
    restored = Schema.from_dict(json.loads(text))
    assert restored == schema
    assert restored.get_field("age").default.as_i64() == 30