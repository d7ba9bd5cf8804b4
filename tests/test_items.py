import pytest

from invi import items
from invi.errors import QueryNotFound
from invi.store import open_dev_env
from invi.value_store import ValueStore

MIGRATION = """
CREATE TABLE items (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    item_metadata TEXT NOT NULL,
    location INTEGER NOT NULL,
    image INTEGER NOT NULL
);
INSERT INTO items (name, item_metadata, location, image) VALUES ('Item 1', '{}', 1, 1);
"""


@pytest.fixture
def mm(tmp_path):
    migrations = tmp_path / "migrations"
    migrations.mkdir()
    (migrations / "0001_items.sql").write_text(MIGRATION)
    manager = open_dev_env(f"sqlite://file:{(tmp_path / 'dev.db').as_posix()}?mode=rwc", migrations)
    yield manager
    manager.close()


def test_item_get(mm):
    item = items.get(mm, 1)
    assert item.id == 1
    assert item.name == "Item 1"


def test_item_create_and_delete(mm):
    metadata = ValueStore(None).string("test_key", "test_value")
    item_id = items.create(mm, "TestItem2", metadata.to_json(), 1, 1)

    item = items.get(mm, item_id)
    assert item.id == item_id
    assert item.name == "TestItem2"
    assert item.image == 1
    assert item.location == 1

    stored = ValueStore.from_json(item.metadata)
    assert stored.get("test_key").as_str() == "test_value"

    assert items.delete(mm, item_id) == item_id
    with pytest.raises(QueryNotFound):
        items.get(mm, item_id)


def test_item_update_name(mm):
    item_id = items.create(mm, "TestItem2", ValueStore(None).to_json(), 1, 1)
    items.update_name(mm, item_id, "UpdatedItemName")
    assert items.get(mm, item_id).name == "UpdatedItemName"
    items.delete(mm, item_id)


def test_item_update_metadata(mm):
    metadata = ValueStore(None).string("test_key", "test_value")
    item_id = items.create(mm, "TestItem2", metadata.to_json(), 1, 1)

    updated = ValueStore("TestSchema").string("a", "this is a string").number("b", 10)
    items.update_metadata(mm, item_id, updated.to_json())

    stored = ValueStore.from_json(items.get(mm, item_id).metadata)
    assert stored.get("a").as_str() == "this is a string"
    assert stored.get("b").as_i64() == 10
    assert stored.schema_name == "TestSchema"
    items.delete(mm, item_id)


def test_get_missing_item(mm):
    with pytest.raises(QueryNotFound) as info:
        items.get(mm, 9999)
    assert info.value.id == 9999


def test_update_missing_item(mm):
    with pytest.raises(QueryNotFound):
        items.update_name(mm, 9999, "nothing")
    with pytest.raises(QueryNotFound):
        items.update_metadata(mm, 9999, "{}")


def test_delete_missing_item(mm):
    with pytest.raises(QueryNotFound) as info:
        items.delete(mm, 9999)
    assert info.value.id == 9999


def test_get_with_broken_metadata(mm):
    item_id = items.create(mm, "Broken", "not json", 1, 1)
    with pytest.raises(QueryNotFound):
        items.get(mm, item_id)