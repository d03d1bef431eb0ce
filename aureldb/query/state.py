"""Mutable clause state owned by a single :class:`~aureldb.query.builder.QueryBuilder`."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from aureldb.query.clauses import JoinClause, OrderClause, Raw, WhereClause

DEFAULT_COLUMNS: tuple[Raw, ...] = (Raw("*"),)


@dataclass
class QueryState:
    """Everything the grammar needs to render a statement.

    Insertion order of every list is significant: it becomes SQL token order.

    Attributes:
        table: Target table, rendered verbatim.
        columns: Projected expressions for SELECT.
        joins: Join clauses in insertion order.
        wheres: Where clauses in insertion order.
        groups: Group-by expressions.
        orders: Order-by clauses.
        limit: Row limit; omitted from SQL unless truthy.
        offset: Row offset; omitted from SQL unless truthy.
        parameters: Named values bound by the driver.  Later bindings
            overwrite earlier ones with the same name.
    """

    table: Raw | None = None
    columns: list[Raw] = field(default_factory=lambda: list(DEFAULT_COLUMNS))
    joins: list[JoinClause] = field(default_factory=list)
    wheres: list[WhereClause] = field(default_factory=list)
    groups: list[Raw] = field(default_factory=list)
    orders: list[OrderClause] = field(default_factory=list)
    limit: int | None = None
    offset: int | None = None
    parameters: dict[str, Any] = field(default_factory=dict)

    def copy(self) -> QueryState:
        """Return an independent copy; no list or dict is shared."""
        return QueryState(
            table=self.table,
            columns=list(self.columns),
            joins=list(self.joins),
            wheres=list(self.wheres),
            groups=list(self.groups),
            orders=list(self.orders),
            limit=self.limit,
            offset=self.offset,
            parameters=dict(self.parameters),
        )
