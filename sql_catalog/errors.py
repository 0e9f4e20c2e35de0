"""Exception types raised by the catalog and its database façade."""

from typing import Optional


class CatalogError(Exception):
    """Base class for every error raised by sql_catalog."""


class DatabaseIOError(CatalogError, OSError):
    """A database file could not be opened, created, or copied."""


class NotFoundError(CatalogError, LookupError):
    """A snapshot, table, or data file does not exist."""


class DatabaseClosedError(CatalogError):
    """An operation was attempted on a closed database."""


class QueryError(CatalogError):
    """A statement failed to execute.

    Wraps the engine's diagnostic; the original exception is chained as
    ``__cause__``.
    """

    def __init__(self, message: str, sql: Optional[str] = None):
        super().__init__(message)
        self.sql = sql


class SchemaError(CatalogError):
    """A table or data file does not have the columns or constraints it should."""
