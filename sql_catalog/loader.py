"""Bulk loading of CSV exports into catalog tables."""

import csv
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .database import Database
from .errors import NotFoundError, SchemaError
from .queries import quote_identifier

logger = logging.getLogger(__name__)


def load_csv_rows(path: Path) -> List[Dict[str, Optional[str]]]:
    """Read a CSV file with a header row.

    Empty cells become None so that nullable columns stay NULL instead of
    holding empty strings.

    Raises:
        NotFoundError: If the file does not exist.
        SchemaError: If a row has more cells than the header has columns.
    """
    if not path.is_file():
        raise NotFoundError(f"Data file not found: {path}")

    rows = []
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for row in reader:
            # DictReader files surplus cells under a None key
            if None in row:
                raise SchemaError(
                    f"{path}, line {reader.line_num}: more cells than header columns"
                )
            rows.append({key: (value if value != "" else None) for key, value in row.items()})
    return rows


def insert_statement(table: str, columns: Sequence[str]) -> str:
    cols = ", ".join(quote_identifier(c) for c in columns)
    placeholders = ", ".join("?" for _ in columns)
    return f"INSERT INTO {quote_identifier(table)} ({cols}) VALUES ({placeholders})"


async def insert_rows(db: Database, table: str, rows: Sequence[Dict[str, Any]]) -> int:
    """Insert dict rows sharing the same keys. Returns the number inserted."""
    if not rows:
        return 0
    columns = list(rows[0].keys())
    values = [tuple(row[c] for c in columns) for row in rows]
    await db.execute_many(insert_statement(table, columns), values)
    return len(values)


async def load_table(db: Database, table: str, csv_path: Path) -> int:
    rows = load_csv_rows(csv_path)
    count = await insert_rows(db, table, rows)
    logger.info("Loaded %d rows into %s from %s", count, table, csv_path)
    return count
