"""Connection abstraction: the boundary between the builder and a DB driver.

The Template Method pattern is used:

- ``Connection`` implements the public operations (``select``,
  ``select_one``, ``insert``, ``update``, ``delete``) once, including row
  mapping and statement logging.
- Driver subclasses implement the driver-specific steps: fetching rows as
  column mappings, executing a write, and closing the handle.

Every call prepares its statement fresh; nothing is cached between calls.
Driver errors are never caught or wrapped here.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from aureldb.query.builder import QueryBuilder
from aureldb.rows import RowShape, map_row, map_rows

logger = logging.getLogger(__name__)


class Connection(ABC):
    """Executes rendered statements against one driver handle.

    Subclasses wrap the handle and record the id generated by the last
    insert in ``_last_insert_id``.
    """

    def __init__(self) -> None:
        self._last_insert_id: int = 0

    # ------------------------------------------------------------------
    # Builder entry points
    # ------------------------------------------------------------------

    def query(self) -> QueryBuilder:
        """Return a fresh builder bound to this connection."""
        return QueryBuilder(self)

    def table(self, table: str) -> QueryBuilder:
        """Return a fresh builder targeting ``table``."""
        return self.query().from_(table)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def select(
        self,
        sql: str,
        params: Mapping[str, Any] | None = None,
        shape: RowShape = dict,
    ) -> list[Any]:
        """Run a SELECT and return every row mapped to ``shape``."""
        self._log(sql, params)
        return map_rows(self._fetch_all(sql, dict(params or {})), shape)

    def select_one(
        self,
        sql: str,
        params: Mapping[str, Any] | None = None,
        shape: RowShape = dict,
    ) -> Any | None:
        """Run a SELECT and return its first row, or ``None`` if there is none."""
        self._log(sql, params)
        row = self._fetch_one(sql, dict(params or {}))
        return None if row is None else map_row(row, shape)

    def insert(self, sql: str, params: Mapping[str, Any] | None = None) -> bool:
        """Run an INSERT and record the id the driver reports for it."""
        self._log(sql, params)
        self._last_insert_id = int(self._insert(sql, dict(params or {})) or 0)
        return True

    def update(self, sql: str, params: Mapping[str, Any] | None = None) -> bool:
        """Run an UPDATE."""
        self._persist(sql, params)
        return True

    def delete(self, sql: str, params: Mapping[str, Any] | None = None) -> bool:
        """Run a DELETE."""
        self._persist(sql, params)
        return True

    def last_insert_id(self) -> int:
        """Return the id the driver reported for the last insert.

        The value is whatever the driver exposes after the insert, and for
        SQLite (``last_insert_rowid``) and PostgreSQL (``lastval``) that is
        connection-scoped: an insert into a table without a generated key
        reports the id of the previous generating insert on the same
        connection, or ``0`` if there was none.
        """
        return self._last_insert_id

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    @abstractmethod
    def driver_handle(self) -> Any:
        """The wrapped driver object (``sqlite3.Connection``, ``Engine``, ...)."""

    @abstractmethod
    def close(self) -> None:
        """Release the driver handle."""

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Driver steps
    # ------------------------------------------------------------------

    @abstractmethod
    def _fetch_all(self, sql: str, params: dict[str, Any]) -> list[Mapping[str, Any]]:
        """Execute ``sql`` and return all rows as column-name mappings."""

    @abstractmethod
    def _fetch_one(self, sql: str, params: dict[str, Any]) -> Mapping[str, Any] | None:
        """Execute ``sql`` and return the first row, or ``None``."""

    @abstractmethod
    def _execute(self, sql: str, params: dict[str, Any]) -> int | None:
        """Execute a write and return the driver's last-row id, if any."""

    def _insert(self, sql: str, params: dict[str, Any]) -> int | None:
        """Execute an INSERT and return the generated id, if any.

        Defaults to :meth:`_execute`; drivers whose last-row id is not the
        generated key override this.
        """
        return self._execute(sql, params)

    def _persist(self, sql: str, params: Mapping[str, Any] | None) -> int | None:
        self._log(sql, params)
        return self._execute(sql, dict(params or {}))

    @staticmethod
    def _log(sql: str, params: Mapping[str, Any] | None) -> None:
        logger.debug("Executing %s with params %s", sql, sorted(params or {}))
