"""Driver registry: driver name → connector.

A *connector* is a callable taking a :class:`~aureldb.config.DatabaseConfig`
and returning a ready :class:`~aureldb.connection.base.Connection`.  Register
a connector once; :class:`~aureldb.database.Database` looks it up by
``config.driver``::

    from aureldb.connection.registry import ConnectionFactory

    @ConnectionFactory.register("duckdb")
    def connect_duckdb(config):
        ...
"""
from __future__ import annotations

import logging
import sqlite3
from collections.abc import Callable
from typing import ClassVar

from aureldb.config import DatabaseConfig
from aureldb.connection.base import Connection
from aureldb.connection.sqlite import SQLiteConnection
from aureldb.errors import ConfigError

logger = logging.getLogger(__name__)

#: ``(config) -> Connection``
Connector = Callable[[DatabaseConfig], Connection]


class ConnectionFactory:
    """Registry mapping driver names to connectors."""

    _connectors: ClassVar[dict[str, Connector]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[Connector], Connector]:
        """Decorator that registers a connector under ``name``."""

        def decorator(connector: Connector) -> Connector:
            cls._connectors[name] = connector
            return connector

        return decorator

    @classmethod
    def register_connector(cls, name: str, connector: Connector) -> None:
        """Register a connector without using the decorator form."""
        cls._connectors[name] = connector

    @classmethod
    def create(cls, config: DatabaseConfig) -> Connection:
        """Open a connection for ``config``.

        Raises:
            ConfigError: If no connector is registered for ``config.driver``
                or the config lacks what the connector needs.
        """
        connector = cls._connectors.get(config.driver)
        if connector is None:
            raise ConfigError(
                f"Unsupported driver: '{config.driver}'. "
                f"Registered drivers: {cls.registered_drivers()}.",
                field="driver",
            )
        connection = connector(config)
        logger.info("Opened %s connection", config.driver)
        return connection

    @classmethod
    def registered_drivers(cls) -> list[str]:
        """Return the registered driver names, sorted."""
        return sorted(cls._connectors)


# ---------------------------------------------------------------------------
# Built-in connectors
# ---------------------------------------------------------------------------


@ConnectionFactory.register("sqlite")
def connect_sqlite(config: DatabaseConfig) -> Connection:
    """Open a ``sqlite3`` handle in autocommit mode."""
    options = {"isolation_level": None, **config.options}
    return SQLiteConnection(sqlite3.connect(config.database, **options))


def _connect_sqlalchemy(config: DatabaseConfig, drivername: str | None) -> Connection:
    from sqlalchemy import URL, create_engine

    from aureldb.connection.alchemy import SQLAlchemyConnection

    if config.url:
        url: str | URL = config.url
    elif drivername is None:
        raise ConfigError("Driver 'sqlalchemy' requires a url.", field="url")
    else:
        url = URL.create(
            drivername,
            username=config.username,
            password=config.secret_password(),
            host=config.require_host(),
            port=config.port,
            database=config.database,
        )
    return SQLAlchemyConnection(create_engine(url, **config.options))


@ConnectionFactory.register("sqlalchemy")
def connect_sqlalchemy(config: DatabaseConfig) -> Connection:
    """Open a SQLAlchemy engine from ``config.url``."""
    return _connect_sqlalchemy(config, None)


@ConnectionFactory.register("mysql")
def connect_mysql(config: DatabaseConfig) -> Connection:
    """Open a SQLAlchemy engine on ``mysql+pymysql`` unless ``url`` is set."""
    return _connect_sqlalchemy(config, "mysql+pymysql")


@ConnectionFactory.register("postgresql")
def connect_postgresql(config: DatabaseConfig) -> Connection:
    """Open a SQLAlchemy engine on ``postgresql+psycopg`` unless ``url`` is set."""
    return _connect_sqlalchemy(config, "postgresql+psycopg")
