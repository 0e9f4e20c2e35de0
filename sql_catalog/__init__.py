"""Relational schemas for movies and Shopify apps on SQLite, with an async
database façade and SQL builders."""

from .config import CatalogConfig, DatabaseConfig
from .database import Database
from .errors import (
    CatalogError,
    DatabaseClosedError,
    DatabaseIOError,
    NotFoundError,
    QueryError,
    SchemaError,
)
from .table_names import MOVIE_TABLES, SHOPIFY_TABLES, registry_for

__version__ = "0.1.0"

__all__ = [
    "CatalogConfig",
    "CatalogError",
    "Database",
    "DatabaseClosedError",
    "DatabaseConfig",
    "DatabaseIOError",
    "MOVIE_TABLES",
    "NotFoundError",
    "QueryError",
    "SHOPIFY_TABLES",
    "SchemaError",
    "registry_for",
]
