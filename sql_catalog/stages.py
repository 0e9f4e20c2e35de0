"""Snapshot stages for the movies and Shopify databases.

Each stage opens the snapshot left by the previous stage (or a fresh file
for the first one), applies its DDL and data, verifies the result, and
leaves a new snapshot behind. A failed stage deletes its partial snapshot,
so later stages cannot run on top of it.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .config import DatabaseConfig
from .database import Database
from .errors import NotFoundError, SchemaError
from .loader import load_table
from .models import RelationshipTable, check_relationship_columns
from .schema import movies, shopify
from .table_names import MOVIE_TABLES, SHOPIFY_TABLES, MovieTables, ShopifyTables

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Stage:
    """One step of a domain's snapshot chain."""

    domain: str
    label: str
    source_label: Optional[str]
    description: str
    statements: Tuple[str, ...] = ()
    load_tables: Tuple[str, ...] = ()
    expected_tables: Tuple[str, ...] = ()
    relationships: Tuple[RelationshipTable, ...] = ()


@dataclass
class StageResult:
    """Outcome of running a single stage."""

    domain: str
    label: str
    snapshot: Path
    statements_executed: int = 0
    rows_loaded: Dict[str, int] = field(default_factory=dict)
    execution_time_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to a dictionary for serialization."""
        return {
            "domain": self.domain,
            "label": self.label,
            "snapshot": str(self.snapshot),
            "statements_executed": self.statements_executed,
            "rows_loaded": dict(self.rows_loaded),
            "execution_time_ms": round(self.execution_time_ms, 2),
        }


def movie_stages(tables: MovieTables = MOVIE_TABLES) -> Tuple[Stage, ...]:
    relationships = movies.relationship_descriptors(tables)
    return (
        Stage(
            "movies", "01", None, "Create entity tables",
            statements=tuple(movies.entity_tables(tables)),
            expected_tables=tables.entity_tables,
        ),
        Stage(
            "movies", "02", "01", "Load entity data",
            load_tables=tables.entity_tables,
        ),
        Stage(
            "movies", "03", "02", "Create lookup indexes",
            statements=tuple(movies.lookup_indexes(tables)),
        ),
        Stage(
            "movies", "04", "03", "Create relationship tables",
            statements=tuple(movies.relationship_tables(tables)),
            expected_tables=tables.relationship_tables,
            relationships=relationships,
        ),
        Stage(
            "movies", "05", "04", "Load relationship data",
            load_tables=tables.relationship_tables,
        ),
    )


def shopify_stages(tables: ShopifyTables = SHOPIFY_TABLES) -> Tuple[Stage, ...]:
    relationships = shopify.relationship_descriptors(tables)
    return (
        Stage(
            "shopify", "01", None, "Create entity tables",
            statements=tuple(shopify.entity_tables(tables)),
            expected_tables=tables.entity_tables,
        ),
        Stage(
            "shopify", "02", "01", "Load entity data",
            load_tables=tables.entity_tables,
        ),
        Stage(
            "shopify", "03", "02", "Create and load relationship tables",
            statements=tuple(shopify.relationship_tables(tables) + shopify.lookup_indexes(tables)),
            load_tables=tables.relationship_tables,
            expected_tables=tables.relationship_tables,
            relationships=relationships,
        ),
        Stage(
            "shopify", "04", "03", "Queries across tables",
            expected_tables=tables.all_tables,
        ),
    )


_STAGES = {
    "movies": movie_stages(),
    "shopify": shopify_stages(),
}


def stages_for(domain: str) -> Tuple[Stage, ...]:
    """Return the stages of ``domain`` in execution order."""
    return _STAGES[domain]


def get_stage(domain: str, label: str) -> Stage:
    for stage in stages_for(domain):
        if stage.label == label:
            return stage
    raise NotFoundError(f"No stage {label!r} for domain {domain!r}")


async def check_relationships(
    db: Database, relationships: Tuple[RelationshipTable, ...]
) -> Dict[str, List[str]]:
    """Introspect junction tables and report invariant violations per table."""
    report: Dict[str, List[str]] = {}
    for table in relationships:
        columns = await db.column_info(table.name)
        report[table.name] = check_relationship_columns(table, columns)
    return report


async def apply_stage(db: Database, stage: Stage, config: DatabaseConfig) -> StageResult:
    """Run ``stage`` against an open database.

    Raises:
        QueryError: If a statement fails.
        NotFoundError: If a data file or expected table is missing.
        SchemaError: If a relationship table has the wrong shape.
    """
    result = StageResult(domain=stage.domain, label=stage.label, snapshot=db.path)
    start_time = time.perf_counter()

    for stmt in stage.statements:
        await db.execute(stmt)
        result.statements_executed += 1

    data_dir = Path(config.data_dir) / stage.domain
    for table in stage.load_tables:
        result.rows_loaded[table] = await load_table(db, table, data_dir / f"{table}.csv")

    for table in stage.expected_tables:
        if not await db.table_exists(table):
            raise NotFoundError(f"Table {table} missing after stage {stage.label}")

    report = await check_relationships(db, stage.relationships)
    problems = [p for table_problems in report.values() for p in table_problems]
    if problems:
        raise SchemaError("; ".join(problems))

    result.execution_time_ms = (time.perf_counter() - start_time) * 1000.0
    logger.info(
        "Stage %s/%s done in %.2f ms (%d statements, %d rows)",
        stage.domain,
        stage.label,
        result.execution_time_ms,
        result.statements_executed,
        sum(result.rows_loaded.values()),
    )
    return result


async def open_for_stage(stage: Stage, config: DatabaseConfig) -> Database:
    """Open the database a stage writes to: fresh, or a copy of its source."""
    if stage.source_label is None:
        return await Database.open_fresh(config.snapshot_path(stage.domain, stage.label), config)
    return await Database.from_existing(
        stage.source_label, stage.label, domain=stage.domain, config=config
    )


async def run_stage(domain: str, label: str, config: Optional[DatabaseConfig] = None) -> StageResult:
    """Build snapshot ``label`` of ``domain`` from its predecessor."""
    config = config or DatabaseConfig()
    stage = get_stage(domain, label)
    logger.info("Running stage %s/%s: %s", domain, label, stage.description)

    target = config.snapshot_path(domain, label)
    db: Optional[Database] = None
    try:
        db = await open_for_stage(stage, config)
        return await apply_stage(db, stage, config)
    except BaseException:
        if db is not None:
            await db.close()
        if target.is_file():
            target.unlink()
        logger.error("Stage %s/%s failed; removed %s", domain, label, target)
        raise
    finally:
        if db is not None:
            await db.close()


async def run_all(
    domain: str, config: Optional[DatabaseConfig] = None, until: Optional[str] = None
) -> List[StageResult]:
    """Run the stages of ``domain`` in order, stopping after ``until``."""
    results: List[StageResult] = []
    for stage in stages_for(domain):
        results.append(await run_stage(domain, stage.label, config))
        if stage.label == until:
            break
    return results
