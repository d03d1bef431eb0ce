"""aureldb connection layer: drivers and the driver registry.

The SQLAlchemy driver lives in :mod:`aureldb.connection.alchemy` and is not
imported here, so ``sqlalchemy`` stays optional.
"""
from aureldb.connection.base import Connection
from aureldb.connection.registry import ConnectionFactory
from aureldb.connection.sqlite import SQLiteConnection

__all__ = [
    "Connection",
    "ConnectionFactory",
    "SQLiteConnection",
]
