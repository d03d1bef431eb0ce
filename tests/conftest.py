"""Shared pytest fixtures for aureldb unit and integration tests."""
from __future__ import annotations

import sqlite3
from collections.abc import Iterator

import pytest

from aureldb.connection.sqlite import SQLiteConnection
from tests.fixtures import TEAMS, USERS, load_ddl


@pytest.fixture()
def sqlite_handle() -> Iterator[sqlite3.Connection]:
    """In-memory autocommit database with the sample schema and no rows."""
    handle = sqlite3.connect(":memory:", isolation_level=None)
    handle.executescript(load_ddl("sqlite"))
    yield handle
    handle.close()


@pytest.fixture()
def connection(sqlite_handle: sqlite3.Connection) -> SQLiteConnection:
    return SQLiteConnection(sqlite_handle)


@pytest.fixture()
def seeded(connection: SQLiteConnection) -> SQLiteConnection:
    """``connection`` with two teams and five users inserted."""
    for team in TEAMS:
        connection.table("teams").insert(team)
    for user in USERS:
        connection.table("users").insert(user)
    return connection
