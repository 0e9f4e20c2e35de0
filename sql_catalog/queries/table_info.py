"""SQLite schema introspection statements."""

from .select import Query, quote_identifier


def table_info(table: str) -> str:
    """``PRAGMA table_info`` for ``table``: one row per column, in order.

    Rows carry ``cid``, ``name``, ``type``, ``notnull``, ``dflt_value``
    and ``pk`` (1-based position in the primary key, 0 if not a member).
    """
    return f"PRAGMA table_info({quote_identifier(table)})"


def select_table_exists(table: str) -> Query:
    return Query(
        "SELECT name FROM sqlite_master WHERE type = 'table' AND name = ? COLLATE NOCASE",
        (table,),
    )
