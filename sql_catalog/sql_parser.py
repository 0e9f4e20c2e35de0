"""SQL file loading and statement splitting.

Handles multiline statements, semicolon splitting, and comment stripping.
Uses sqlparse for robust SQL parsing.
"""

import logging
import re
from pathlib import Path
from typing import List

import sqlparse

logger = logging.getLogger(__name__)

# Statement types that produce result rows
ROW_RETURNING_TYPES = {"SELECT", "PRAGMA", "EXPLAIN", "WITH"}


def load_sql_file(file_path: str) -> str:
    """Load a SQL file and return its contents as a string.

    Args:
        file_path: Path to the .sql file.

    Returns:
        The raw SQL content.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is empty.
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"SQL file not found: {file_path}")

    if path.suffix.lower() != ".sql":
        logger.warning("File '%s' does not have a .sql extension.", file_path)

    content = path.read_text(encoding="utf-8")

    if not content.strip():
        raise ValueError(f"SQL file is empty: {file_path}")

    logger.info("Loaded SQL file: %s (%d bytes)", file_path, len(content))
    return content


def strip_comments(sql: str) -> str:
    """Remove SQL comments (single-line and multi-line) from SQL text."""
    return sqlparse.format(sql, strip_comments=True)


def split_statements(sql_content: str) -> List[str]:
    """Split a SQL script into individual executable statements.

    Comments and empty statements are dropped, and trailing semicolons are
    removed.

    Args:
        sql_content: Raw SQL content, possibly holding several statements.

    Returns:
        Statements in script order.
    """
    statements: List[str] = []
    for stmt in sqlparse.split(strip_comments(sql_content)):
        trimmed = stmt.strip()
        if trimmed.endswith(";"):
            trimmed = trimmed[:-1].strip()
        if trimmed:
            statements.append(trimmed)

    logger.debug("Split SQL into %d executable statements.", len(statements))
    return statements


def get_statement_type(query: str) -> str:
    """Determine the type of SQL statement.

    Args:
        query: A single SQL statement.

    Returns:
        Statement type string (e.g., 'SELECT', 'INSERT', 'CREATE', 'PRAGMA',
        'OTHER').
    """
    parsed = sqlparse.parse(query)
    if parsed:
        stmt_type = parsed[0].get_type()
        if stmt_type and stmt_type != "UNKNOWN":
            return stmt_type.upper()

    # sqlparse reports PRAGMA and EXPLAIN as UNKNOWN
    first_token = query.strip().split()[0].upper() if query.strip() else ""
    if first_token in ("PRAGMA", "EXPLAIN", "WITH"):
        return first_token
    return "OTHER"


def returns_rows(query: str) -> bool:
    """True when ``query`` is a statement that yields result rows."""
    return get_statement_type(query) in ROW_RETURNING_TYPES


def truncate_query_text(query: str, max_length: int = 200) -> str:
    """Truncate query text for display purposes.

    Args:
        query: Full SQL query text.
        max_length: Maximum character length for display.

    Returns:
        Truncated query text with ellipsis if needed.
    """
    # Normalize whitespace
    normalized = re.sub(r"\s+", " ", query).strip()
    if len(normalized) <= max_length:
        return normalized
    return normalized[:max_length] + "..."
