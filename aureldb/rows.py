"""Mapping of driver rows into the caller's row shape.

A *row shape* is whatever the caller wants each result row turned into:

``dict`` (default)
    A plain ``dict`` of column name to value.
pydantic ``BaseModel`` subclass
    Built with ``model_validate(row)``, so field validation applies.
any other callable
    Called with the row's columns as keyword arguments, e.g. a dataclass
    or :class:`types.SimpleNamespace`.
"""
from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel

RowShape = type[dict] | type[BaseModel] | Callable[..., Any]


def map_row(row: Mapping[str, Any], shape: RowShape = dict) -> Any:
    """Convert one column-name → value mapping into ``shape``."""
    if shape is dict:
        return dict(row)
    if isinstance(shape, type) and issubclass(shape, BaseModel):
        return shape.model_validate(dict(row))
    return shape(**row)


def map_rows(rows: list[Mapping[str, Any]], shape: RowShape = dict) -> list[Any]:
    return [map_row(row, shape) for row in rows]
