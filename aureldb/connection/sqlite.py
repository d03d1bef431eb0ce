"""``sqlite3`` driver.

Uses the standard library's named paramstyle (``:name``), which matches the
placeholders rendered by the grammar, so statements go to the driver
unchanged.
"""
from __future__ import annotations

import sqlite3
from collections.abc import Mapping
from contextlib import closing
from typing import Any

from aureldb.connection.base import Connection


class SQLiteConnection(Connection):
    """Wraps a ``sqlite3.Connection``.

    The handle is used as given: no commits are issued here.  Handles created
    by :class:`~aureldb.connection.registry.ConnectionFactory` are opened in
    autocommit mode (``isolation_level=None``), so every write is durable as
    soon as it returns.
    """

    def __init__(self, handle: sqlite3.Connection) -> None:
        super().__init__()
        self._handle = handle

    @property
    def driver_handle(self) -> sqlite3.Connection:
        return self._handle

    def close(self) -> None:
        self._handle.close()

    def _fetch_all(self, sql: str, params: dict[str, Any]) -> list[Mapping[str, Any]]:
        with closing(self._handle.execute(sql, params)) as cursor:
            columns = _column_names(cursor)
            return [dict(zip(columns, row)) for row in cursor.fetchall()]

    def _fetch_one(self, sql: str, params: dict[str, Any]) -> Mapping[str, Any] | None:
        with closing(self._handle.execute(sql, params)) as cursor:
            row = cursor.fetchone()
            if row is None:
                return None
            return dict(zip(_column_names(cursor), row))

    def _execute(self, sql: str, params: dict[str, Any]) -> int | None:
        with closing(self._handle.execute(sql, params)) as cursor:
            return cursor.lastrowid


def _column_names(cursor: sqlite3.Cursor) -> list[str]:
    return [description[0] for description in cursor.description or ()]
