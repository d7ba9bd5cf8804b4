"""Errors raised by the storage layer."""

from __future__ import annotations

import sqlite3


class ModelError(Exception):
    """Base error for the storage layer."""


class FailToCreatePool(ModelError):
    """The database could not be opened or its address is invalid."""


class FailToOpenCache(ModelError):
    """The cache could not be opened."""


class ParseError(ModelError):
    """A result or an input could not be interpreted."""


class QueryNotFound(ModelError):
    """No row exists for the given id."""

    def __init__(self, id: int) -> None:
        super().__init__(f"no row found for id {id}")
        self.id = id


class QueryError(ModelError):
    """A query did not do what was asked of it."""


class DatabaseError(ModelError):
    """The database engine reported an error."""


class RecordUpdateForbidden(ModelError):
    """The record may not be changed."""


class IntegerConversionError(ModelError):
    """An integer is out of range for its target type."""


def from_sqlite_error(error: BaseException) -> ModelError:
    """Map an error raised while talking to the database to a ModelError."""
    if isinstance(error, ModelError):
        return error
    message = str(error)
    if isinstance(error, OSError):
        return FailToCreatePool(message)
    if isinstance(error, sqlite3.DatabaseError):
        return DatabaseError(message)
    return ParseError(message)