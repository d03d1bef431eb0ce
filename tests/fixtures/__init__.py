"""Test fixtures: sample DDL, seed rows, and a recording connection."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from aureldb.connection.base import Connection

_FIXTURES_DIR = Path(__file__).parent

TEAMS = [
    {"name": "core"},
    {"name": "infra"},
]

USERS = [
    {"team_id": 1, "name": "ada", "age": 36, "email": "ada@example.com"},
    {"team_id": 1, "name": "alan", "age": 41, "email": "alan@example.com"},
    {"team_id": 2, "name": "grace", "age": 85, "email": "grace@example.com"},
    {"team_id": 2, "name": "linus", "age": 28, "email": "linus@example.com"},
    {"team_id": None, "name": "barbara", "age": 52, "email": "barbara@example.com"},
]


def load_ddl(target: str = "sqlite") -> str:
    """Return the sample DDL SQL string for the given backend."""
    return (_FIXTURES_DIR / f"ddl_{target}.sql").read_text()


class RecordingConnection(Connection):
    """Connection that records statements instead of running them.

    ``rows`` is returned by every read; ``last_id`` by every write.

    Attributes:
        statements: ``(kind, sql, params)`` tuples in execution order, where
            ``kind`` is ``"select"``, ``"select_one"`` or ``"write"``.
    """

    def __init__(
        self, rows: list[Mapping[str, Any]] | None = None, last_id: int = 0
    ) -> None:
        super().__init__()
        self.rows = list(rows or [])
        self.last_id = last_id
        self.statements: list[tuple[str, str, dict[str, Any]]] = []
        self.closed = False

    @property
    def driver_handle(self) -> None:
        return None

    def close(self) -> None:
        self.closed = True

    @property
    def last_statement(self) -> tuple[str, str, dict[str, Any]]:
        return self.statements[-1]

    def _fetch_all(self, sql: str, params: dict[str, Any]) -> list[Mapping[str, Any]]:
        self.statements.append(("select", sql, params))
        return list(self.rows)

    def _fetch_one(self, sql: str, params: dict[str, Any]) -> Mapping[str, Any] | None:
        self.statements.append(("select_one", sql, params))
        return self.rows[0] if self.rows else None

    def _execute(self, sql: str, params: dict[str, Any]) -> int | None:
        self.statements.append(("write", sql, params))
        return self.last_id
