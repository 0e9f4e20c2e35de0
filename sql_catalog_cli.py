"""SQL Catalog — command-line entry point.

Usage:
    python sql_catalog_cli.py stage --domain movies --label 04
    python sql_catalog_cli.py stage --domain shopify --all
    python sql_catalog_cli.py query --domain shopify --label 04 --file top.sql --json rows.json
    python sql_catalog_cli.py check --domain movies --label 04
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from rich.console import Console

from sql_catalog.config import CatalogConfig, DatabaseConfig, setup_logging
from sql_catalog.database import Database
from sql_catalog.errors import CatalogError
from sql_catalog.report import (
    print_check_results,
    print_rows,
    print_stage_results,
    save_json_rows,
)
from sql_catalog.sql_parser import (
    load_sql_file,
    returns_rows,
    split_statements,
    truncate_query_text,
)
from sql_catalog.stages import check_relationships, get_stage, run_stage, stages_for
from sql_catalog.table_names import DOMAINS

console = Console()
logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="sql_catalog",
        description="Build and query staged SQLite snapshots of the movies and Shopify schemas.",
    )

    # Shared settings
    parser.add_argument(
        "--snapshot-dir",
        default=None,
        help="Directory holding snapshot files (default: db).",
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Directory holding <domain>/<table>.csv files (default: data).",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging verbosity level (default: WARNING).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Path to log file.",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    stage = sub.add_parser("stage", help="Build one or all snapshots of a domain.")
    stage.add_argument("--domain", choices=DOMAINS, required=True)
    target = stage.add_mutually_exclusive_group(required=True)
    target.add_argument("--label", help="Stage label, e.g. 04.")
    target.add_argument("--all", action="store_true", help="Run every stage in order.")
    stage.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Maximum seconds per stage (default: 180).",
    )

    query = sub.add_parser("query", help="Run SQL against a snapshot and print the rows.")
    query.add_argument("--domain", choices=DOMAINS, required=True)
    query.add_argument("--label", required=True, help="Snapshot label.")
    source = query.add_mutually_exclusive_group(required=True)
    source.add_argument("--file", "-f", help="Path to a .sql file.")
    source.add_argument("--sql", help="SQL text.")
    query.add_argument("--json", dest="json_path", default=None, help="Save rows to a JSON file.")

    check = sub.add_parser("check", help="Validate the relationship tables of a snapshot.")
    check.add_argument("--domain", choices=DOMAINS, required=True)
    check.add_argument("--label", required=True, help="Snapshot label.")

    return parser


def build_configs(args: argparse.Namespace) -> tuple[DatabaseConfig, CatalogConfig]:
    """Build configuration objects from CLI args and environment variables.

    Args:
        args: Parsed CLI arguments.

    Returns:
        Tuple of (DatabaseConfig, CatalogConfig).
    """
    # Start from environment, then override with CLI args
    db_config = DatabaseConfig.from_env()
    catalog_config = CatalogConfig.from_env()

    if args.snapshot_dir:
        db_config.snapshot_dir = args.snapshot_dir
    if args.data_dir:
        db_config.data_dir = args.data_dir

    catalog_config.colored_output = not args.no_color
    catalog_config.log_level = args.log_level
    if args.log_file:
        catalog_config.log_file = args.log_file
    if getattr(args, "timeout", None):
        catalog_config.stage_timeout_s = args.timeout

    return db_config, catalog_config


async def run_stages(
    args: argparse.Namespace, db_config: DatabaseConfig, catalog_config: CatalogConfig
) -> int:
    labels = [s.label for s in stages_for(args.domain)] if args.all else [args.label]
    results = []
    for label in labels:
        try:
            result = await asyncio.wait_for(
                run_stage(args.domain, label, db_config),
                timeout=catalog_config.stage_timeout_s,
            )
        except asyncio.TimeoutError:
            console.print(
                f"[red]Stage {args.domain}/{label} exceeded "
                f"{catalog_config.stage_timeout_s:.0f}s[/red]"
            )
            return 1
        results.append(result)

    print_stage_results(results, colored=catalog_config.colored_output)
    return 0


async def run_query(
    args: argparse.Namespace, db_config: DatabaseConfig, catalog_config: CatalogConfig
) -> int:
    sql_text = load_sql_file(args.file) if args.file else args.sql
    statements = split_statements(sql_text)
    if not statements:
        console.print("[yellow]No executable SQL statements found.[/yellow]")
        return 0

    # Snapshots are immutable once written; only row-returning statements run
    writes = [stmt for stmt in statements if not returns_rows(stmt)]
    if writes:
        console.print(
            f"[red]Refusing to modify a snapshot: {truncate_query_text(writes[0], 80)}[/red]"
        )
        return 1

    path = db_config.snapshot_path(args.domain, args.label)
    if not path.is_file():
        console.print(f"[red]Snapshot not found: {path}[/red]")
        return 1

    rows: List[dict] = []
    async with Database(path, db_config, read_only=True) as db:
        for stmt in statements:
            rows = await db.fetch_many(stmt)
            print_rows(rows, title=stmt, colored=catalog_config.colored_output)

    if args.json_path:
        save_json_rows(rows, args.json_path)
    return 0


async def run_check(
    args: argparse.Namespace, db_config: DatabaseConfig, catalog_config: CatalogConfig
) -> int:
    # The stage that creates the junction tables knows their expected shape
    relationships = ()
    for stage in stages_for(args.domain):
        if stage.relationships:
            relationships = stage.relationships
            break

    path = db_config.snapshot_path(args.domain, args.label)
    if not path.is_file():
        console.print(f"[red]Snapshot not found: {path}[/red]")
        return 1

    async with Database(path, db_config, read_only=True) as db:
        report = await check_relationships(db, relationships)
    passed = print_check_results(report, colored=catalog_config.colored_output)
    return 0 if passed else 1


COMMANDS = {
    "stage": run_stages,
    "query": run_query,
    "check": run_check,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the SQL Catalog CLI."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    # Build configurations
    db_config, catalog_config = build_configs(args)

    # Setup logging
    setup_logging(catalog_config)

    if args.command == "stage" and args.label:
        # Fail fast on an unknown label before touching any file
        try:
            get_stage(args.domain, args.label)
        except CatalogError as e:
            console.print(f"[red]{e}[/red]")
            return 1

    try:
        return asyncio.run(COMMANDS[args.command](args, db_config, catalog_config))
    except (CatalogError, FileNotFoundError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
