"""aureldb – a small fluent SQL query builder over DB-API and SQLAlchemy.

Compose statements with chained calls, bind values by name, and let the
driver do the rest.

Public API
----------
``Database``
    Caller-owned handle: config in, lazily opened connection out.

``DatabaseConfig``
    Connection settings, read from keyword arguments or ``AUREL_DB_*``
    environment variables.

``QueryBuilder``
    Fluent builder for ``select``, ``insert``, ``update`` and ``delete``.

``Paginator``
    One page of results with navigation metadata.

Example::

    from aureldb import Database, DatabaseConfig

    db = Database(DatabaseConfig(database="app.db"))
    page = (
        db.table("users")
        .where("active = :active", {"active": 1})
        .order_by("name")
        .paginate(per_page=20, page=request.query_params.get("page"))
    )

Only values passed through a params / attributes mapping are bound by the
driver.  Table names, columns, where and join fragments, and order
directions are trusted raw SQL.

Extensibility
-------------
New drivers can be registered via::

    from aureldb.connection.registry import ConnectionFactory

    @ConnectionFactory.register("duckdb")
    def connect_duckdb(config):
        ...
"""
from __future__ import annotations

from aureldb.config import DatabaseConfig
from aureldb.connection.base import Connection
from aureldb.connection.registry import ConnectionFactory
from aureldb.connection.sqlite import SQLiteConnection
from aureldb.database import Database
from aureldb.errors import AurelDBError, ConfigError, PaginationError, QueryBuildError
from aureldb.pagination import Paginator, page_from_query
from aureldb.query.builder import QueryBuilder
from aureldb.query.clauses import Raw, raw
from aureldb.rows import RowShape, map_row

__all__ = [
    # Entry points
    "Database",
    "DatabaseConfig",
    # Connections
    "Connection",
    "ConnectionFactory",
    "SQLiteConnection",
    # Query building
    "QueryBuilder",
    "Raw",
    "raw",
    "RowShape",
    "map_row",
    # Pagination
    "Paginator",
    "page_from_query",
    # Errors
    "AurelDBError",
    "ConfigError",
    "QueryBuildError",
    "PaginationError",
]
