"""Inventory items stored in the ``items`` table."""

from __future__ import annotations

import json
import sqlite3
from dataclasses import dataclass
from typing import Any

from invi.errors import IntegerConversionError, QueryNotFound, from_sqlite_error
from invi.store import ModelManager

_U32_MAX = 2**32 - 1


@dataclass(frozen=True)
class Item:
    """A stored item; ``metadata`` holds the parsed JSON of its metadata column."""

    id: int
    name: str
    metadata: Any
    image: int
    location: int


def _to_u32(value: int) -> int:
    if not 0 <= value <= _U32_MAX:
        raise IntegerConversionError(f"out of range integral type conversion attempted: {value}")
    return value


def _item_from_row(row: sqlite3.Row) -> Item:
    values = {key: row[key] for key in ("id", "name", "item_metadata", "image", "location")}
    if any(v is None for v in values.values()):
        raise ValueError("item row holds null")
    return Item(
        id=values["id"],
        name=values["name"],
        metadata=json.loads(values["item_metadata"]),
        image=values["image"],
        location=values["location"],
    )


def create(mm: ModelManager, name: str, metadata: str, image_data: int, location: int) -> int:
    """Insert an item and return its id."""
    try:
        cursor = mm.db.execute(
            "INSERT INTO items (name, item_metadata, location, image) VALUES (?, ?, ?, ?)",
            (name, metadata, location, image_data),
        )
    except sqlite3.Error as exc:
        raise from_sqlite_error(exc) from exc
    return _to_u32(cursor.lastrowid)


def get(mm: ModelManager, item_id: int) -> Item:
    """Return the item with ``item_id``, or raise QueryNotFound."""
    try:
        row = mm.db.execute("SELECT * FROM items WHERE id = ?", (item_id,)).fetchone()
        if row is None:
            raise QueryNotFound(item_id)
        return _item_from_row(row)
    except (sqlite3.Error, ValueError, TypeError, IndexError, KeyError) as exc:
        raise QueryNotFound(item_id) from exc


def _update_column(mm: ModelManager, item_id: int, column: str, value: str) -> None:
    try:
        cursor = mm.db.execute(f"UPDATE items SET {column} = ? WHERE id = ?", (value, item_id))
    except sqlite3.Error as exc:
        raise QueryNotFound(item_id) from exc
    if cursor.rowcount != 1:
        raise QueryNotFound(item_id)


def update_name(mm: ModelManager, item_id: int, updated_name: str) -> None:
    _update_column(mm, item_id, "name", updated_name)


def update_metadata(mm: ModelManager, item_id: int, metadata: str) -> None:
    _update_column(mm, item_id, "item_metadata", metadata)


def delete(mm: ModelManager, item_id: int) -> int:
    """Delete the item and return its id; raise QueryNotFound if there was none."""
    try:
        cursor = mm.db.execute("DELETE FROM items WHERE id = ?", (item_id,))
    except sqlite3.Error as exc:
        raise from_sqlite_error(exc) from exc
    if cursor.rowcount == 0:
        raise QueryNotFound(item_id)
    return item_id