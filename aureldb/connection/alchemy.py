"""SQLAlchemy driver.

Statements are wrapped in :func:`sqlalchemy.text`, whose ``:name`` bind
syntax matches the grammar on every SQLAlchemy backend (MySQL, PostgreSQL,
SQLite, ...).  SQLAlchemy translates it to the DBAPI's own paramstyle.

Install the optional dependency before using this module::

    pip install "aureldb[sqlalchemy]"
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, ClassVar

from sqlalchemy import Connection as SAConnection
from sqlalchemy import Engine, text
from sqlalchemy.exc import DBAPIError

from aureldb.connection.base import Connection

logger = logging.getLogger(__name__)


class SQLAlchemyConnection(Connection):
    """Wraps a SQLAlchemy :class:`~sqlalchemy.Engine`.

    Reads run on a connection checked out for the call.  Each write runs in
    its own ``engine.begin()`` block and is committed when it returns; no
    transaction spans more than one call.

    Drivers whose cursor ``lastrowid`` is not the generated key (psycopg
    only reports an OID) read it with a follow-up query on the same
    connection, keyed by dialect name in ``generated_id_queries``.
    """

    generated_id_queries: ClassVar[dict[str, str]] = {
        "postgresql": "select lastval()",
    }

    def __init__(self, engine: Engine) -> None:
        super().__init__()
        self._engine = engine

    @property
    def driver_handle(self) -> Engine:
        return self._engine

    def close(self) -> None:
        self._engine.dispose()

    def _fetch_all(self, sql: str, params: dict[str, Any]) -> list[Mapping[str, Any]]:
        with self._engine.connect() as conn:
            return [dict(row) for row in conn.execute(text(sql), params).mappings()]

    def _fetch_one(self, sql: str, params: dict[str, Any]) -> Mapping[str, Any] | None:
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), params).mappings().first()
            return None if row is None else dict(row)

    def _execute(self, sql: str, params: dict[str, Any]) -> int | None:
        with self._engine.begin() as conn:
            result = conn.execute(text(sql), params)
            return result.lastrowid

    def _insert(self, sql: str, params: dict[str, Any]) -> int | None:
        with self._engine.begin() as conn:
            result = conn.execute(text(sql), params)
            id_query = self.generated_id_queries.get(conn.dialect.name)
            if id_query is None:
                return result.lastrowid
            return self._generated_id(conn, id_query)

    @staticmethod
    def _generated_id(conn: SAConnection, id_query: str) -> int | None:
        # lastval() errors when no sequence was used in this session; the
        # savepoint keeps that error from aborting the insert.
        try:
            with conn.begin_nested():
                return conn.execute(text(id_query)).scalar()
        except DBAPIError as exc:
            logger.debug("Generated id lookup %r failed: %s", id_query, exc)
            return None
