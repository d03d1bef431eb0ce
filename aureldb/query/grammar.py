"""Rendering of :class:`~aureldb.query.state.QueryState` into SQL text.

The four statement forms share one *tail* routine (``where``, ``group by``,
``order by``, ``limit``, ``offset``)::

    select <columns> from <table><joins><tail>
    insert into <table> (<keys>) values (<:key, ...>)
    update <table> set <key = :key, ...><tail>
    delete from <table><tail>

Nothing rendered here is escaped.  Table names, columns, join and where
fragments, and order directions are caller-trusted :class:`Raw` text; only the
values behind ``:name`` placeholders are bound by the driver.

Limit and offset are rendered only when truthy, so ``limit(0)`` and
``offset(0)`` are indistinguishable from "unset".
"""
from __future__ import annotations

from collections.abc import Iterable

from aureldb.errors import QueryBuildError
from aureldb.query.clauses import JoinClause, OrderClause, WhereClause
from aureldb.query.state import QueryState


class Grammar:
    """Stateless renderer for the four statement forms."""

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def compile_select(self, state: QueryState) -> str:
        columns = ", ".join(str(c) for c in state.columns)
        return (
            f"select {columns} from {self._table(state)}"
            f"{self.compile_joins(state.joins)}{self.compile_tail(state)}"
        )

    def compile_insert(self, state: QueryState, keys: Iterable[str]) -> str:
        keys = self._keys(keys, "insert")
        placeholders = ", ".join(f":{key}" for key in keys)
        return (
            f"insert into {self._table(state)} "
            f"({', '.join(keys)}) values ({placeholders})"
        )

    def compile_update(self, state: QueryState, keys: Iterable[str]) -> str:
        keys = self._keys(keys, "update")
        assignments = ", ".join(f"{key} = :{key}" for key in keys)
        return f"update {self._table(state)} set {assignments}{self.compile_tail(state)}"

    def compile_delete(self, state: QueryState) -> str:
        return f"delete from {self._table(state)}{self.compile_tail(state)}"

    # ------------------------------------------------------------------
    # Clauses
    # ------------------------------------------------------------------

    def compile_joins(self, joins: list[JoinClause]) -> str:
        return "".join(f" {join.type} join {join.fragment}" for join in joins)

    def compile_wheres(self, wheres: list[WhereClause]) -> str:
        if not wheres:
            return ""
        sql = " where"
        for index, where in enumerate(wheres):
            if index:
                sql += f" {where.boolean}"
            sql += f" {where.fragment}"
        return sql

    def compile_orders(self, orders: list[OrderClause]) -> str:
        if not orders:
            return ""
        return " order by " + ", ".join(f"{o.column} {o.direction}" for o in orders)

    def compile_tail(self, state: QueryState) -> str:
        """Render where / group by / order by / limit / offset, in that order."""
        sql = self.compile_wheres(state.wheres)
        if state.groups:
            sql += " group by " + ", ".join(str(g) for g in state.groups)
        sql += self.compile_orders(state.orders)
        if state.limit:
            sql += f" limit {state.limit}"
        if state.offset:
            sql += f" offset {state.offset}"
        return sql

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _table(state: QueryState) -> str:
        if state.table is None:
            raise QueryBuildError("No table set; call from_() first.", clause="from")
        return str(state.table)

    @staticmethod
    def _keys(keys: Iterable[str], clause: str) -> list[str]:
        keys = list(keys)
        if not keys:
            raise QueryBuildError(f"Cannot {clause} without attributes.", clause=clause)
        return keys
