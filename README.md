# invi

invi is a small inventory library. It stores items and their stock movements
in a SQLite database. Each item carries free-form JSON metadata. That metadata
can be checked against schemas you define.

It uses only the standard library.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Schemas and metadata

These modules describe and check the shape of metadata:

- `invi.types`: `FieldType`, `Value` and `Field`
- `invi.schema`: `Schema`
- `invi.registry`: `Registry`
- `invi.value_store`: `ValueStore`
- `invi.validator`: `Validator`

```python
from invi.types import Field, FieldType, Value
from invi.schema import Schema
from invi.registry import Registry
from invi.value_store import ValueStore
from invi.validator import Validator

registry = Registry()
registry.register("Box", Schema.create("Box", [
    Field.create("name", FieldType.STRING, True, None),
    Field.create("width", FieldType.NUMBER, False, 30),
    Field.create("size", FieldType.OBJECT, True, None),
]))
registry.register("Size", Schema.create("Size", [
    Field.create("a", FieldType.NUMBER, True, None),
]))

store = (
    ValueStore("Box")
    .with_object_properties_schemas({"size": "Size"})
    .string("name", "Shelf box")
    .number("width", 23)
    .object("size", Value.from_json({"a": 10}))
)

Validator(registry).validate(store)   # raises a ValidatorError on failure
```

### Values

A `Value` holds one of these:

- a string
- a whole non-negative number, up to 2**64 - 1, with measurements taken to be in millimetres
- an object with string keys, kept in sorted order
- an array
- a boolean
- null

Fractional numbers raise `ValueError`. Negative numbers and numbers that are
too large raise `ValueError` too.

The `as_str`, `as_i64`, `as_object`, `as_array` and `as_bool` methods return
the content, or `None` if the value is of another kind.

`to_value_string()` renders a value as text. Arrays and objects come out as
indented JSON.

### Validation

`Validator.validate` looks up the store's schema in the registry. It then
checks each field of that schema:

- Every field must have an entry in the store. A field with no entry fails,
  even if it is optional.
- A required field may not hold null.
- A non-null entry must match the field's type.

Each entry named in `object_properties_schemas` is validated against its own
schema in the same way.

A failed check raises a subclass of `ValidatorError`:

| Error | Cause |
| --- | --- |
| `MissingField` | a field of the schema has no entry in the store |
| `RequiredFieldMissing` | a required field holds null |
| `InvalidType` | an entry does not match its field's type |
| `SchemaNotFound` | a schema name is not registered |
| `SchemaIdentifierMissing` | the store has no schema name |

### Saving and reading stores

`ValueStore.to_json()` turns a store into compact JSON text. It writes three
keys: `schema_name`, `object_properties_schemas` and `values`.

`ValueStore.from_json()` accepts either JSON text or already parsed data.
Reading back restores the schema name and the values. It does not restore the
`object_properties_schemas` mapping: the reader looks for that mapping under
the key `object_properties_schamas`, so the key written by `to_json()` is not
picked up.

It raises these errors:

- `NotAnObject` if the data is not an object.
- `CannotConvertFromValue` if the `values` object is missing.

`ValueStore.from_value_shallow()` builds a store with no schema name straight
from the entries of an object value.

## Items and stock records

`invi.store.connect(db_url)` opens a database and returns a `ModelManager`.
The URL has this form:

```
sqlite://<path>[?params]
```

- `sqlite:` and `sqlite://file:<path>` are accepted too.
- Files are opened read-write. They are created only when the URL asks for it
  with `mode=rwc`.
- `:memory:` gives a fresh in-memory database on each connection.

Other store functions:

- `execute_sql_file` runs each `;`-separated statement of a file.
- `apply_migrations` runs every `.sql` file of a directory, in path order.
- `open_dev_env(db_url, migration_dir)` applies the migrations, then returns a
  new manager.

`ModelManager` can be used as a context manager.

```python
from invi.store import open_dev_env
from invi.value_store import ValueStore
from invi import items, records

with open_dev_env("sqlite://inventory.db?mode=rwc", "migrations") as mm:
    item_id = items.create(mm, "Bolt M6", ValueStore(None).to_json(), 1, 1)

    records.create(mm, item_id, 1700000000, False, 10, False)  # 10 in
    records.create(mm, item_id, 1700000100, True, 3, False)    # 3 out
    records.get_last_total(mm, item_id)                        # 7

    item = items.get(mm, item_id)
    ValueStore.from_json(item.metadata)
```

### Items

`invi.items` provides:

- `create`, which returns the new id
- `get`, which returns an `Item` whose `metadata` is the parsed JSON
- `update_name`
- `update_metadata`
- `delete`, which returns the id it deleted

`get`, the update functions and `delete` raise `QueryNotFound` when no item
has the given id.

### Stock records

In `invi.records`, each record moves a quantity in or out and stores the
running total after the move. The direction is a `TransactionType`:

| Direction | Flag |
| --- | --- |
| `IN` | `False` |
| `OUT` | `True` |

Either the enum or the flag is accepted.

`apply_transaction` computes a new total. It raises `OverflowError` if the
total would drop below zero or exceed 2**32 - 1.

Reading records:

- `get` returns a `Record`. It raises `ParseError` when there is none.
- `get_all` and `get_in_timeframe` return `Records`, newest first. The time
  frame is inclusive at both ends.
- `get_last` returns the newest record or `None`.
- `get_last_total` returns the current total, or 0 if there are no records.

Changing records:

- `update` changes the quantity of the item's newest record. Any other record
  raises `RecordUpdateForbidden`.
- `delete` removes the newest record. An older record is cancelled instead, by
  appending a correction record that moves its quantity the other way, dated
  now. If the item has no records, it raises `QueryError`.

Database failures are raised as subclasses of `invi.errors.ModelError`.
`invi.errors.from_sqlite_error` maps other exceptions onto them.

## What invi does not do

The package has no command-line tool and no user interface. It does not ship
the SQL that creates its tables. You supply migration files that create:

- an `items` table with these columns:
  - `id`
  - `name`
  - `item_metadata`
  - `location`
  - `image`
- a `records` table with these columns:
  - `id`
  - `item_id`
  - `date` (a Unix timestamp)
  - `transaction_type`
  - `quantity`
  - `total`
  - `correction`

There is no configuration loading. Every function takes its database URL or
its manager directly.