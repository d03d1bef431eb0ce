"""Caller-owned database handle.

``Database`` holds a :class:`~aureldb.config.DatabaseConfig`, opens one
:class:`~aureldb.connection.base.Connection` on first use, and reuses it
until :meth:`Database.close`.  There is no process-wide instance: create one
where the application is wired up and pass it to whoever needs it::

    db = Database(DatabaseConfig(database="app.db"))
    db.table("users").insert({"name": "ada"})

Concurrent callers should each own a ``Database`` (or share nothing but the
config); the lazily created connection is not guarded by a lock.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from aureldb.config import DatabaseConfig
from aureldb.connection.base import Connection
from aureldb.connection.registry import ConnectionFactory
from aureldb.query.builder import QueryBuilder
from aureldb.rows import RowShape


class Database:
    """Lazily connected entry point exposing the connection's operations.

    Args:
        config: Connection settings; defaults to ``DatabaseConfig()``, which
            reads ``AUREL_DB_*`` environment variables.
    """

    def __init__(self, config: DatabaseConfig | None = None) -> None:
        self._config = config if config is not None else DatabaseConfig()
        self._connection: Connection | None = None

    @property
    def config(self) -> DatabaseConfig:
        return self._config

    def connection(self) -> Connection:
        """Return the connection, opening it on first call."""
        if self._connection is None:
            self._connection = ConnectionFactory.create(self._config)
        return self._connection

    def close(self) -> None:
        """Close the connection if one was opened.  A later call reconnects."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Connection operations
    # ------------------------------------------------------------------

    def query(self) -> QueryBuilder:
        return self.connection().query()

    def table(self, table: str) -> QueryBuilder:
        return self.connection().table(table)

    def select(
        self, sql: str, params: Mapping[str, Any] | None = None, shape: RowShape = dict
    ) -> list[Any]:
        return self.connection().select(sql, params, shape)

    def select_one(
        self, sql: str, params: Mapping[str, Any] | None = None, shape: RowShape = dict
    ) -> Any | None:
        return self.connection().select_one(sql, params, shape)

    def insert(self, sql: str, params: Mapping[str, Any] | None = None) -> bool:
        return self.connection().insert(sql, params)

    def update(self, sql: str, params: Mapping[str, Any] | None = None) -> bool:
        return self.connection().update(sql, params)

    def delete(self, sql: str, params: Mapping[str, Any] | None = None) -> bool:
        return self.connection().delete(sql, params)

    def last_insert_id(self) -> int:
        return self.connection().last_insert_id()
