"""Clause value objects accumulated by the query builder.

Every SQL fragment held here is a :class:`Raw` expression: caller-trusted
text interpolated into the statement as-is.  Raw fragments are **not**
escaped.  Values that come from users must go through the parameter map and
a ``:name`` placeholder instead, where the driver binds them safely.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

#: Joiner keywords accepted by ``where``.
WhereBoolean = Literal["and", "or"]

#: Join kinds accepted by the builder.
JoinType = Literal["inner", "left", "cross"]

WHERE_BOOLEANS: frozenset[str] = frozenset({"and", "or"})
JOIN_TYPES: frozenset[str] = frozenset({"inner", "left", "cross"})


@dataclass(frozen=True)
class Raw:
    """A caller-trusted SQL fragment.

    Wrapping a string in ``Raw`` does not make it safe; it marks the text as
    something the caller vouches for.  Builder methods accept either a plain
    ``str`` or a ``Raw`` and store both as ``Raw``.

    Attributes:
        sql: The fragment text, rendered verbatim.
    """

    sql: str

    def __str__(self) -> str:
        return self.sql


def raw(value: str | Raw) -> Raw:
    """Return ``value`` as a :class:`Raw` fragment."""
    if isinstance(value, Raw):
        return value
    return Raw(str(value))


@dataclass(frozen=True)
class WhereClause:
    """One ``where`` fragment and the keyword joining it to the previous one.

    The keyword of the first clause is never rendered.
    """

    fragment: Raw
    boolean: WhereBoolean = "and"


@dataclass(frozen=True)
class JoinClause:
    """A join of ``type`` followed by the raw ``fragment``.

    ``fragment`` is everything after the ``join`` keyword, e.g.
    ``"posts on posts.user_id = users.id"``.
    """

    type: JoinType
    fragment: Raw


@dataclass(frozen=True)
class OrderClause:
    column: Raw
    direction: str = "asc"
