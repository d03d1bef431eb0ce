"""Fluent query builder: clause state in, SQL text and bound parameters out.

``QueryBuilder`` accumulates clause state through chained calls and renders
it on demand through :class:`~aureldb.query.grammar.Grammar`.  Execution is
delegated to the :class:`~aureldb.connection.base.Connection` the builder was
created from::

    users = (
        connection.table("users")
        .select("id", "name")
        .where("age > :age", {"age": 18})
        .or_where("name = :name", {"name": "root"})
        .order_by("name")
        .limit(10)
        .get()
    )

Trust boundary
--------------
Table names, column expressions, where and join fragments, and order
directions are interpolated into the SQL verbatim.  They are caller-trusted
raw expressions and are **not** escaped.  Only values passed in a ``params``
or ``attributes`` mapping reach the driver as bound parameters.

Parameter map
-------------
Every statement shares one name → value map.  Bindings with a name already
present overwrite the earlier value.  ``update`` merges its attributes over
the where parameters, so an attribute named like a where placeholder replaces
the where value (last write wins).
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from aureldb.errors import QueryBuildError
from aureldb.pagination import DEFAULT_PAGE_NAME, Paginator, check_per_page, resolve_page
from aureldb.query.clauses import (
    JOIN_TYPES,
    WHERE_BOOLEANS,
    JoinClause,
    OrderClause,
    Raw,
    WhereClause,
    raw,
)
from aureldb.query.grammar import Grammar
from aureldb.query.state import DEFAULT_COLUMNS, QueryState
from aureldb.rows import RowShape

if TYPE_CHECKING:
    from aureldb.connection.base import Connection

logger = logging.getLogger(__name__)

_GRAMMAR = Grammar()


class QueryBuilder:
    """Accumulates clause state and runs it through a connection.

    A builder is owned by the caller that created it.  Every chaining method
    mutates the builder and returns it.

    Args:
        connection: The connection statements are executed on.
        grammar: Optional renderer; defaults to the shared :class:`Grammar`.
    """

    def __init__(self, connection: Connection, grammar: Grammar | None = None) -> None:
        self._connection = connection
        self._grammar = grammar or _GRAMMAR
        self._state = QueryState()
        self._shape: RowShape = dict

    # ------------------------------------------------------------------
    # Clause state
    # ------------------------------------------------------------------

    def from_(self, table: str | Raw) -> QueryBuilder:
        """Set the table.  The name is not validated or quoted."""
        self._state.table = raw(table)
        return self

    def select(self, *columns: str | Raw | Sequence[str | Raw]) -> QueryBuilder:
        """Set the projection, replacing any previous one.

        Accepts varargs (``select("id", "name")``) or a single sequence
        (``select(["id", "name"])``).  No argument selects ``*``.
        """
        if len(columns) == 1 and not isinstance(columns[0], (str, Raw)):
            columns = tuple(columns[0])
        self._state.columns = [raw(c) for c in columns] or list(DEFAULT_COLUMNS)
        return self

    def where(
        self,
        fragment: str | Raw,
        params: Mapping[str, Any] | None = None,
        boolean: str = "and",
    ) -> QueryBuilder:
        """Append a raw boolean fragment and merge ``params``.

        Args:
            fragment: Raw SQL condition, e.g. ``"age > :age"``.
            params: Values for the fragment's placeholders.
            boolean: ``"and"`` or ``"or"``; ignored for the first fragment.
        """
        if boolean not in WHERE_BOOLEANS:
            raise QueryBuildError(
                f"Unknown where boolean {boolean!r}; expected 'and' or 'or'.",
                clause="where",
            )
        self._state.wheres.append(WhereClause(raw(fragment), boolean))  # type: ignore[arg-type]
        self._bind(params)
        return self

    def or_where(
        self, fragment: str | Raw, params: Mapping[str, Any] | None = None
    ) -> QueryBuilder:
        """Like :meth:`where`, joined to the previous fragment with ``or``."""
        return self.where(fragment, params, "or")

    def inner_join(self, fragment: str | Raw) -> QueryBuilder:
        """Append an ``inner join``."""
        return self.join(fragment, "inner")

    def left_join(self, fragment: str | Raw) -> QueryBuilder:
        """Append a ``left join``."""
        return self.join(fragment, "left")

    def cross_join(self, fragment: str | Raw) -> QueryBuilder:
        """Append a ``cross join``."""
        return self.join(fragment, "cross")

    def join(self, fragment: str | Raw, join_type: str = "inner") -> QueryBuilder:
        """Append a join of ``join_type``; ``fragment`` follows the ``join`` keyword."""
        if join_type not in JOIN_TYPES:
            raise QueryBuildError(
                f"Unknown join type {join_type!r}; expected one of {sorted(JOIN_TYPES)}.",
                clause="join",
            )
        self._state.joins.append(JoinClause(join_type, raw(fragment)))  # type: ignore[arg-type]
        return self

    def order_by(self, column: str | Raw, direction: str = "asc") -> QueryBuilder:
        """Append an ordering.  ``direction`` is interpolated verbatim."""
        self._state.orders.append(OrderClause(raw(column), direction))
        return self

    def group_by(self, column: str | Raw) -> QueryBuilder:
        """Append a ``group by`` column."""
        self._state.groups.append(raw(column))
        return self

    def limit(self, limit: int | None) -> QueryBuilder:
        """Set the limit.  ``0`` and ``None`` both render no limit."""
        self._state.limit = limit
        return self

    def offset(self, offset: int | None) -> QueryBuilder:
        """Set the offset.  ``0`` and ``None`` both render no offset."""
        self._state.offset = offset
        return self

    def as_instances_of(self, shape: RowShape) -> QueryBuilder:
        """Map result rows to ``shape`` (see :mod:`aureldb.rows`)."""
        self._shape = shape
        return self

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self) -> list[Any]:
        """Run the SELECT and return every row mapped to the row shape."""
        return self._connection.select(self.to_sql(), self.get_bindings(), self._shape)

    def first(self) -> Any | None:
        """Run the same SELECT as :meth:`get` and return its first row.

        The SQL is not given a ``limit 1``; the connection fetches one row.
        """
        return self._connection.select_one(self.to_sql(), self.get_bindings(), self._shape)

    def count(self) -> int:
        """Count matching rows.

        Without ``group by`` this is the scalar ``count(*)``.  With
        ``group by`` it is the number of groups returned.  The builder's own
        projection is left untouched.
        """
        state = self._state.copy()
        state.columns = [Raw("count(*) count")]
        rows = self._connection.select(
            self._grammar.compile_select(state), dict(state.parameters), dict
        )
        if state.groups:
            return len(rows)
        return int(rows[0]["count"]) if rows else 0

    def paginate(
        self,
        per_page: int = 15,
        page: int | float | str | None = None,
        page_name: str = DEFAULT_PAGE_NAME,
    ) -> Paginator:
        """Fetch one page of results plus the total row count.

        Sets ``limit``/``offset`` on this builder, runs :meth:`get`, and
        counts through :meth:`clone_for_count` so projection, ordering and
        paging do not leak into the count.

        Args:
            per_page: Page size; must be positive.
            page: Requested 1-based page.  ``None``, non-numeric values and
                numbers below 1 mean page 1.  Use
                :func:`~aureldb.pagination.page_from_query` to read it from a
                request's query string.
            page_name: Query-string key recorded on the paginator.

        Raises:
            PaginationError: If ``per_page`` is not positive.
        """
        check_per_page(per_page)
        current = resolve_page(page)
        self.limit(per_page).offset(per_page * (current - 1))
        items = self.get()
        total = self.clone_for_count().count()
        return Paginator(items, total, per_page, current, page_name)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert(self, attributes: Mapping[str, Any]) -> bool:
        """Insert one row; keys are columns, values are bound as ``:key``."""
        sql = self._grammar.compile_insert(self._state, attributes.keys())
        return self._connection.insert(sql, dict(attributes))

    def insert_get_id(self, attributes: Mapping[str, Any]) -> int:
        """Insert one row and return its auto-generated id.

        The id is the one the driver reports (see
        :meth:`~aureldb.connection.base.Connection.last_insert_id`).  For a
        table without an auto-increment key nothing is generated: the result
        is ``0`` on a connection that has not generated an id yet, otherwise
        the connection-scoped id of the previous generating insert.  Callers
        that need an id from such a table must not rely on this value.
        """
        self.insert(attributes)
        inserted_id = self._connection.last_insert_id()
        if not inserted_id:
            logger.warning("Insert into %s produced no generated id.", self._state.table)
        return inserted_id

    def update(self, attributes: Mapping[str, Any]) -> bool:
        """Update matching rows with ``column = :column`` for each attribute.

        Attribute values are merged over the where parameters: an attribute
        sharing a name with a where placeholder replaces its value.
        """
        sql = self._grammar.compile_update(self._state, attributes.keys())
        return self._connection.update(sql, {**self._state.parameters, **attributes})

    def delete(self) -> bool:
        """Delete the rows matching the current where clauses."""
        return self._connection.delete(
            self._grammar.compile_delete(self._state), self.get_bindings()
        )

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def to_sql(self) -> str:
        """Return the SELECT statement for the current state without running it."""
        return self._grammar.compile_select(self._state)

    def get_bindings(self) -> dict[str, Any]:
        """Return a copy of the bound parameter map."""
        return dict(self._state.parameters)

    def clone_for_count(self) -> QueryBuilder:
        """Return an independent builder suited to counting rows.

        Keeps the table, joins, wheres, groups, parameters and row shape.
        Resets the projection to ``*``, clears ordering, and unsets limit and
        offset.  Changes to the clone never affect this builder.
        """
        clone = QueryBuilder(self._connection, self._grammar)
        state = self._state.copy()
        state.columns = list(DEFAULT_COLUMNS)
        state.orders = []
        state.limit = None
        state.offset = None
        clone._state = state
        clone._shape = self._shape
        return clone

    @property
    def connection(self) -> Connection:
        """The connection this builder executes on."""
        return self._connection

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _bind(self, params: Mapping[str, Any] | None) -> None:
        if params:
            self._state.parameters.update(params)
