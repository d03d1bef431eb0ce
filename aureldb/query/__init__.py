"""aureldb query layer: fluent clause state → SQL text + bound parameters."""
from aureldb.query.builder import QueryBuilder
from aureldb.query.clauses import JoinClause, OrderClause, Raw, WhereClause, raw
from aureldb.query.grammar import Grammar
from aureldb.query.state import QueryState

__all__ = [
    "QueryBuilder",
    "Grammar",
    "QueryState",
    "Raw",
    "raw",
    "WhereClause",
    "JoinClause",
    "OrderClause",
]
