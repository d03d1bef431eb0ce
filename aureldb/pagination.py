"""Page-of-results value object returned by ``QueryBuilder.paginate``."""
from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from aureldb.errors import PaginationError

DEFAULT_PAGE_NAME = "page"


def resolve_page(value: Any) -> int:
    """Normalise a requested page number.

    ``None``, non-numeric values, fractional floats, and numbers below 1 all
    resolve to page 1.  Integral floats such as ``2.0`` are whole pages.

    Args:
        value: An ``int``, an integral ``float``, a numeric string (``"3"``),
            or ``None``.

    Returns:
        A 1-based page number.
    """
    if value is None or isinstance(value, bool):
        return 1
    if isinstance(value, float):
        if not value.is_integer():
            return 1
        value = int(value)
    try:
        page = int(str(value).strip())
    except ValueError:
        return 1
    return page if page >= 1 else 1


def page_from_query(
    query: Mapping[str, Any], page_name: str = DEFAULT_PAGE_NAME
) -> int:
    """Read the page number from a query-string mapping.

    Keeps web frameworks out of the builder: pass ``request.query_params``
    (or any mapping) here and hand the result to ``paginate(page=...)``.
    """
    return resolve_page(query.get(page_name))


def check_per_page(per_page: int) -> None:
    """Raise :class:`PaginationError` unless ``per_page`` is a positive int."""
    if isinstance(per_page, bool) or not isinstance(per_page, int) or per_page < 1:
        raise PaginationError(
            f"per_page must be a positive integer, got {per_page!r}.",
            per_page=per_page if isinstance(per_page, int) else None,
        )


@dataclass(frozen=True)
class Paginator:
    """One page of query results plus the metadata needed to navigate.

    Attributes:
        items: Rows on the current page, already mapped to the row shape.
        total: Total number of rows across all pages.
        per_page: Page size.  Must be positive.
        current_page: 1-based number of this page.
        page_name: Query-string key the page number was read from.
    """

    items: list[Any]
    total: int
    per_page: int
    current_page: int
    page_name: str = DEFAULT_PAGE_NAME

    def __post_init__(self) -> None:
        check_per_page(self.per_page)

    @property
    def last_page(self) -> int:
        return math.ceil(self.total / self.per_page)

    @property
    def has_pages(self) -> bool:
        return self.last_page > 1

    @property
    def on_first_page(self) -> bool:
        return self.current_page == 1

    @property
    def has_more_pages(self) -> bool:
        return self.current_page < self.last_page

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
