"""Database connections, SQL script execution and the development environment."""

from __future__ import annotations

import sqlite3
from os import PathLike
from pathlib import Path
from urllib.parse import parse_qsl, quote, urlencode

from invi.errors import FailToCreatePool, from_sqlite_error


class ModelManager:
    """Owns the database connection used by the stores."""

    def __init__(self, db: sqlite3.Connection) -> None:
        db.row_factory = sqlite3.Row
        self._db = db

    @property
    def db(self) -> sqlite3.Connection:
        return self._db

    def close(self) -> None:
        self._db.close()

    def __enter__(self) -> ModelManager:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _parse_url(db_url: str) -> tuple[str, bool]:
    for scheme in ("sqlite://", "sqlite:"):
        if db_url.startswith(scheme):
            rest = db_url[len(scheme):]
            break
    else:
        raise FailToCreatePool(f"unsupported database url: {db_url!r}")

    path, _, query = rest.partition("?")
    if path.startswith("file:"):
        path = path[len("file:"):]
    if path == ":memory:":
        return ":memory:", False
    if not path:
        raise FailToCreatePool(f"database url names no file: {db_url!r}")

    params = dict(parse_qsl(query, keep_blank_values=True))
    params.setdefault("mode", "rw")
    return f"file:{quote(path, safe='/:')}?{urlencode(params)}", True


def connect(db_url: str) -> ModelManager:
    """Open the SQLite database at ``db_url``.

    Files are not created unless the url asks for it with ``mode=rwc``.
    """
    target, uri = _parse_url(db_url)
    try:
        connection = sqlite3.connect(
            target, uri=uri, isolation_level=None, check_same_thread=False
        )
        connection.execute("PRAGMA foreign_keys = ON")
    except sqlite3.Error as exc:
        raise FailToCreatePool(str(exc)) from exc
    return ModelManager(connection)


def _connection_of(connection: ModelManager | sqlite3.Connection) -> sqlite3.Connection:
    return connection.db if isinstance(connection, ModelManager) else connection


def execute_sql_file(
    connection: ModelManager | sqlite3.Connection, path: str | PathLike[str]
) -> None:
    """Run each ';'-separated statement of an SQL file, skipping blank ones."""
    db = _connection_of(connection)
    content = Path(path).read_text(encoding="utf-8")
    for statement in content.split(";"):
        statement = statement.strip()
        if not statement:
            continue
        try:
            db.execute(statement)
        except sqlite3.Error as exc:
            raise from_sqlite_error(exc) from exc


def apply_migrations(
    connection: ModelManager | sqlite3.Connection, migration_dir: str | PathLike[str]
) -> list[Path]:
    """Run every ``.sql`` file of a directory in path order; return the files run."""
    paths = sorted(p for p in Path(migration_dir).iterdir() if p.suffix == ".sql")
    for path in paths:
        execute_sql_file(connection, path)
    return paths


def open_dev_env(db_url: str, migration_dir: str | PathLike[str]) -> ModelManager:
    """Apply the migrations to the database, then return a fresh manager for it."""
    with connect(db_url) as manager:
        apply_migrations(manager, migration_dir)
    return connect(db_url)