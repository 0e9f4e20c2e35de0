"""Async access to a single file-backed SQLite database.

Provides a small façade over one aiosqlite connection: open a fresh file
or a copy of an earlier snapshot, run statements, fetch rows as dicts, and
introspect tables. A ``Database`` owns its connection exclusively and does
no locking; callers must not overlap operations on the same instance.
"""

import asyncio
import logging
import shutil
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

import aiosqlite

from .config import DatabaseConfig
from .errors import DatabaseClosedError, DatabaseIOError, NotFoundError, QueryError
from .models import ColumnInfo
from .queries import select_table_exists, table_info
from .sql_parser import split_statements, truncate_query_text

logger = logging.getLogger(__name__)

Row = Dict[str, Any]
Params = Sequence[Any]


def _remove_snapshot(path: Path) -> None:
    if path.is_file():
        path.unlink()
        logger.info("Removed partial snapshot %s", path)


async def _copy_snapshot(source: Path, target: Path) -> None:
    """Copy ``source`` to ``target`` in a worker thread.

    The thread cannot be interrupted, so on cancellation this waits for it
    to finish before removing the target. A failed copy leaves no target.
    """
    copy = asyncio.ensure_future(asyncio.to_thread(shutil.copyfile, source, target))
    try:
        await asyncio.shield(copy)
    except asyncio.CancelledError:
        await asyncio.gather(copy, return_exceptions=True)
        _remove_snapshot(target)
        raise
    except OSError:
        _remove_snapshot(target)
        raise


class Database:
    """Owns one open connection to an on-disk SQLite database.

    Use :meth:`open_fresh` or :meth:`from_existing` to obtain an open
    instance; :meth:`close` returns it to the closed state.
    """

    def __init__(
        self,
        path: Union[str, Path],
        config: Optional[DatabaseConfig] = None,
        read_only: bool = False,
    ):
        """Initialize a closed database handle.

        Args:
            path: Database file location.
            config: Database configuration instance.
            read_only: Open the file with ``mode=ro``; writes then fail
                with QueryError and the file is never created.
        """
        self.path = Path(path)
        self.config = config or DatabaseConfig()
        self.read_only = read_only
        self._connection: Optional[aiosqlite.Connection] = None

    @classmethod
    async def open_fresh(
        cls, path: Union[str, Path], config: Optional[DatabaseConfig] = None
    ) -> "Database":
        """Create an empty database file at ``path`` and open it.

        An existing file at ``path`` is replaced.

        Raises:
            DatabaseIOError: If the file cannot be created or opened.
        """
        db = cls(path, config)
        try:
            db.path.parent.mkdir(parents=True, exist_ok=True)
            db.path.unlink(missing_ok=True)
        except OSError as e:
            raise DatabaseIOError(f"Cannot create database at {db.path}: {e}") from e
        await db.connect()
        return db

    @classmethod
    async def from_existing(
        cls,
        source_label: str,
        target_label: str,
        *,
        domain: str,
        config: Optional[DatabaseConfig] = None,
    ) -> "Database":
        """Copy snapshot ``source_label`` to ``target_label`` and open the copy.

        The source snapshot is never modified.

        Raises:
            NotFoundError: If the source snapshot does not exist.
            DatabaseIOError: If the copy fails.
        """
        config = config or DatabaseConfig()
        source = config.snapshot_path(domain, source_label)
        target = config.snapshot_path(domain, target_label)

        if not source.is_file():
            raise NotFoundError(f"Snapshot not found: {source}")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            await _copy_snapshot(source, target)
        except OSError as e:
            raise DatabaseIOError(f"Failed to copy {source} to {target}: {e}") from e
        logger.info("Copied snapshot %s -> %s", source, target)

        db = cls(target, config)
        try:
            await db.connect()
        except BaseException:
            _remove_snapshot(target)
            raise
        return db

    async def connect(self) -> None:
        """Open the connection if it is not open yet.

        Raises:
            DatabaseIOError: If SQLite cannot open the file.
        """
        if self._connection is not None:
            return
        try:
            if self.read_only:
                conn = await aiosqlite.connect(
                    f"{self.path.resolve().as_uri()}?mode=ro", uri=True
                )
            else:
                conn = await aiosqlite.connect(self.path)
        except aiosqlite.Error as e:
            raise DatabaseIOError(f"Failed to open SQLite database {self.path}: {e}") from e

        conn.row_factory = aiosqlite.Row
        if self.config.foreign_keys:
            try:
                await conn.execute("PRAGMA foreign_keys = ON")
            except aiosqlite.Error as e:
                await conn.close()
                raise DatabaseIOError(
                    f"Failed to enable foreign keys on {self.path}: {e}"
                ) from e
        self._connection = conn
        logger.info(
            "Connected to SQLite%s: %s", " (read-only)" if self.read_only else "", self.path
        )

    @property
    def connection(self) -> aiosqlite.Connection:
        """Get the active database connection.

        Raises:
            DatabaseClosedError: If not connected.
        """
        if self._connection is None:
            raise DatabaseClosedError(f"Database {self.path} is closed.")
        return self._connection

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    async def execute(self, sql: str, params: Params = ()) -> int:
        """Run a statement that returns no rows and commit it.

        Returns:
            Number of rows changed, as reported by the engine.

        Raises:
            QueryError: On syntax errors or constraint violations.
        """
        conn = self.connection
        logger.debug("Executing: %s", truncate_query_text(sql))
        try:
            async with conn.execute(sql, tuple(params)) as cur:
                rowcount = cur.rowcount
            await conn.commit()
        except aiosqlite.Error as e:
            await self._rollback()
            raise QueryError(f"Statement failed: {e}", sql=sql) from e
        return rowcount

    async def execute_many(self, sql: str, rows: Iterable[Params]) -> int:
        """Run ``sql`` once per parameter row in a single transaction."""
        conn = self.connection
        logger.debug("Executing many: %s", truncate_query_text(sql))
        try:
            async with conn.executemany(sql, rows) as cur:
                rowcount = cur.rowcount
            await conn.commit()
        except aiosqlite.Error as e:
            await self._rollback()
            raise QueryError(f"Bulk statement failed: {e}", sql=sql) from e
        return rowcount

    async def execute_script(self, script: str) -> int:
        """Run every statement of a multi-statement script, in order.

        Returns:
            Number of statements executed.
        """
        statements = split_statements(script)
        for stmt in statements:
            await self.execute(stmt)
        return len(statements)

    async def fetch_one(
        self, sql: str, params: Params = (), exactly_one: bool = False
    ) -> Optional[Row]:
        """Run a query and return its first row, or None if it has none.

        Args:
            sql: Row-returning statement.
            params: Values for the statement's placeholders.
            exactly_one: Raise instead of ignoring additional rows.

        Raises:
            QueryError: On execution failure, or when ``exactly_one`` is set
                and more than one row matched.
        """
        logger.debug("Fetching one: %s", truncate_query_text(sql))
        try:
            async with self.connection.execute(sql, tuple(params)) as cur:
                rows = await cur.fetchmany(2)
        except aiosqlite.Error as e:
            raise QueryError(f"Query failed: {e}", sql=sql) from e

        if not rows:
            return None
        if exactly_one and len(rows) > 1:
            raise QueryError("Expected exactly one row, got more.", sql=sql)
        return dict(rows[0])

    async def fetch_many(self, sql: str, params: Params = ()) -> List[Row]:
        """Run a query and return all rows in the order the engine produced them."""
        logger.debug("Fetching many: %s", truncate_query_text(sql))
        try:
            async with self.connection.execute(sql, tuple(params)) as cur:
                rows = await cur.fetchall()
        except aiosqlite.Error as e:
            raise QueryError(f"Query failed: {e}", sql=sql) from e
        return [dict(row) for row in rows]

    # Names used by the stage scripts
    create_table = execute
    select_single_row = fetch_one
    select_multiple_rows = fetch_many

    async def table_exists(self, name: str) -> bool:
        return await self.fetch_one(*select_table_exists(name)) is not None

    async def column_info(self, table: str) -> List[ColumnInfo]:
        """Describe the columns of ``table`` in declaration order.

        Raises:
            NotFoundError: If the table does not exist.
        """
        rows = await self.fetch_many(table_info(table))
        if not rows:
            raise NotFoundError(f"Table not found: {table}")
        return [ColumnInfo.from_row(row) for row in rows]

    async def column_exists(self, table: str, column: str) -> bool:
        """True when ``table`` exists and has a column named ``column``."""
        rows = await self.fetch_many(table_info(table))
        return any(row["name"].lower() == column.lower() for row in rows)

    async def _rollback(self) -> None:
        try:
            await self.connection.rollback()
            logger.debug("Transaction rolled back.")
        except aiosqlite.Error as e:
            logger.error("Rollback failed: %s", e)

    async def close(self) -> None:
        """Close the database connection. Safe to call more than once."""
        if self._connection is not None:
            try:
                await self._connection.close()
                logger.info("Database connection closed: %s", self.path)
            finally:
                self._connection = None

    async def __aenter__(self) -> "Database":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        await self.close()
        return False
