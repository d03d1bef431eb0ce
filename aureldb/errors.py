"""Custom exception hierarchy for aureldb.

All library errors inherit from :class:`AurelDBError` so callers can catch
the base class for any aureldb-specific failure.

Driver errors (``sqlite3.Error``, ``sqlalchemy.exc.DBAPIError``, ...) are
deliberately *not* part of this hierarchy: they propagate to the caller
unchanged, carrying the driver's native message.
"""
from __future__ import annotations


class AurelDBError(Exception):
    """Base exception for all aureldb errors."""


class ConfigError(AurelDBError):
    """Raised when a :class:`~aureldb.config.DatabaseConfig` cannot be used.

    Args:
        message: Human-readable description.
        field: The configuration field at fault, when there is one.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class QueryBuildError(AurelDBError):
    """Raised when builder state cannot be rendered into a statement.

    Detected before any SQL reaches the driver.

    Args:
        message: Human-readable description.
        clause: The clause being built when the error occurred
            (e.g. ``"from"``, ``"where"``).
    """

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(message)
        self.clause = clause


class PaginationError(AurelDBError):
    """Raised when a page size cannot produce a page count.

    Args:
        message: Human-readable description.
        per_page: The rejected page size.
    """

    def __init__(self, message: str, per_page: int | None = None) -> None:
        super().__init__(message)
        self.per_page = per_page
