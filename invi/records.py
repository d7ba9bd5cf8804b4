"""Stock movement records stored in the ``records`` table.

Each record moves a quantity of an item in or out and stores the running
total after the move. Only the latest record of an item may be changed or
removed outright; older records are cancelled by a correction record.
"""

from __future__ import annotations

import enum
import sqlite3
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from invi.errors import (
    IntegerConversionError,
    ParseError,
    QueryError,
    RecordUpdateForbidden,
    from_sqlite_error,
)
from invi.store import ModelManager

_U32_MAX = 2**32 - 1

_RECORD_COLUMNS = "id, date, transaction_type, quantity, correction"


class TransactionType(enum.Enum):
    """Direction of a stock movement; the value is the stored flag."""

    IN = False
    OUT = True

    def opposite(self) -> TransactionType:
        return TransactionType.OUT if self is TransactionType.IN else TransactionType.IN

    @classmethod
    def from_flag(cls, flag: Any) -> TransactionType:
        """Map a stored flag to a direction: false is IN, true is OUT."""
        return cls(bool(flag))


@dataclass(frozen=True)
class Record:
    """One stock movement of an item."""

    id: int
    date: datetime
    transaction_type: TransactionType
    quantity: int
    correction: bool


@dataclass(frozen=True)
class Records:
    """The records of one item, newest first."""

    item_id: int
    records: tuple[Record, ...]

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)


def _coerce_type(transaction_type: TransactionType | bool) -> TransactionType:
    if isinstance(transaction_type, TransactionType):
        return transaction_type
    return TransactionType.from_flag(transaction_type)


def apply_transaction(
    transaction_type: TransactionType | bool, last_total: int, quantity: int
) -> int:
    """Return the total after moving ``quantity`` in or out of ``last_total``."""
    if _coerce_type(transaction_type) is TransactionType.IN:
        total = last_total + quantity
    else:
        total = last_total - quantity
    if not 0 <= total <= _U32_MAX:
        raise OverflowError(
            f"total out of range: {last_total} and {quantity} give {total}"
        )
    return total


def _to_u32(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U32_MAX:
        raise ParseError(f"{what} is not an unsigned 32-bit integer: {value!r}")
    return value


def _parse_date(value: Any) -> datetime:
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise ParseError(f"invalid timestamp: {value!r}") from exc
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError as exc:
            raise ParseError(f"invalid date: {value!r}") from exc
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    raise ParseError(f"invalid date: {value!r}")


def _record_from_row(row: sqlite3.Row) -> Record:
    try:
        return Record(
            id=_to_u32(row["id"], "id"),
            date=_parse_date(row["date"]),
            transaction_type=TransactionType.from_flag(row["transaction_type"]),
            quantity=_to_u32(row["quantity"], "quantity"),
            correction=bool(row["correction"]),
        )
    except (IndexError, KeyError) as exc:
        raise ParseError(f"record row is missing a column: {exc}") from exc


def _execute(mm: ModelManager, sql: str, params: tuple[Any, ...]) -> sqlite3.Cursor:
    try:
        return mm.db.execute(sql, params)
    except sqlite3.Error as exc:
        raise from_sqlite_error(exc) from exc


def create(
    mm: ModelManager,
    item_id: int,
    date_create: int,
    transaction_type: TransactionType | bool,
    quantity: int,
    correction: bool,
) -> int:
    """Insert a record for ``item_id``, updating the running total; return its id."""
    kind = _coerce_type(transaction_type)
    total = apply_transaction(kind, get_last_total(mm, item_id), quantity)
    cursor = _execute(
        mm,
        "INSERT INTO records (item_id, date, transaction_type, quantity, total, correction) "
        "VALUES (?, ?, ?, ?, ?, ?)",
        (item_id, date_create, int(kind.value), quantity, total, int(bool(correction))),
    )
    record_id = cursor.lastrowid
    if record_id is None or not 0 <= record_id <= _U32_MAX:
        raise IntegerConversionError(
            f"out of range integral type conversion attempted: {record_id}"
        )
    return record_id


def get(mm: ModelManager, record_id: int) -> Record:
    """Return the record with ``record_id``; raise ParseError if there is none."""
    row = _execute(
        mm, f"SELECT {_RECORD_COLUMNS} FROM records WHERE id = ?", (record_id,)
    ).fetchone()
    if row is None:
        raise ParseError(
            "no rows returned by a query that expected to return at least one row"
        )
    return _record_from_row(row)


def get_all(mm: ModelManager, item_id: int) -> Records:
    """Return every record of ``item_id``, newest first."""
    rows = _execute(
        mm,
        f"SELECT {_RECORD_COLUMNS} FROM records WHERE item_id = ? ORDER BY date DESC",
        (item_id,),
    ).fetchall()
    return Records(item_id, tuple(_record_from_row(row) for row in rows))


def get_in_timeframe(mm: ModelManager, item_id: int, start: int, end: int) -> Records:
    """Return the records of ``item_id`` dated from ``start`` to ``end`` inclusive."""
    rows = _execute(
        mm,
        f"SELECT {_RECORD_COLUMNS} FROM records "
        "WHERE item_id = ? AND date BETWEEN ? AND ? ORDER BY date DESC",
        (item_id, start, end),
    ).fetchall()
    return Records(item_id, tuple(_record_from_row(row) for row in rows))


def get_last_total(mm: ModelManager, item_id: int) -> int:
    """Return the running total of ``item_id``, or 0 if it has no records."""
    row = _execute(
        mm,
        "SELECT total FROM records WHERE item_id = ? ORDER BY date DESC LIMIT 1",
        (item_id,),
    ).fetchone()
    if row is None:
        return 0
    return _to_u32(row["total"], "total")


def get_last(mm: ModelManager, item_id: int) -> Record | None:
    """Return the newest record of ``item_id``, or None."""
    row = _execute(
        mm,
        f"SELECT {_RECORD_COLUMNS}, total FROM records "
        "WHERE item_id = ? ORDER BY date DESC LIMIT 1",
        (item_id,),
    ).fetchone()
    return None if row is None else _record_from_row(row)


def update(mm: ModelManager, item_id: int, record_id: int, quantity: int) -> None:
    """Change the quantity of the newest record of ``item_id`` and its total.

    Raise RecordUpdateForbidden if the item has no records or ``record_id``
    is not its newest one.
    """
    last_record = get_last(mm, item_id)
    if last_record is None:
        raise RecordUpdateForbidden(f"Record data not existent for item_id {item_id}")
    if last_record.id != record_id:
        raise RecordUpdateForbidden(
            f"Record with id {record_id} is not the last record for item_id {item_id}"
        )

    last_total = get_last_total(mm, item_id)
    kind = last_record.transaction_type
    previous_total = apply_transaction(kind.opposite(), last_total, last_record.quantity)
    new_total = apply_transaction(kind, previous_total, quantity)

    _execute(
        mm,
        "UPDATE records SET quantity = ?, total = ? WHERE id = ?",
        (quantity, new_total, record_id),
    )


def delete(mm: ModelManager, record_id: int, item_id: int) -> None:
    """Remove a record of ``item_id``.

    The newest record is deleted; an older one is cancelled by appending a
    correction record that moves its quantity the other way.
    """
    last_record = get_last(mm, item_id)
    if last_record is None:
        raise QueryError(f"Record with id {record_id} not found")

    if last_record.id == record_id:
        _execute(mm, "DELETE FROM records WHERE id = ?", (record_id,))
        return

    target = get(mm, record_id)
    now = int(datetime.now(timezone.utc).timestamp())
    create(
        mm,
        item_id,
        now,
        target.transaction_type.opposite(),
        target.quantity,
        True,
    )