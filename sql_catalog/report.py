"""Report generation: console output and JSON export.

Renders query rows, stage results and relationship-table checks with Rich,
and saves row sets to JSON files.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .sql_parser import truncate_query_text
from .stages import StageResult

logger = logging.getLogger(__name__)

console = Console()


def print_rows(
    rows: Sequence[Dict[str, Any]],
    title: Optional[str] = None,
    colored: bool = True,
) -> None:
    """Print query rows as a table.

    Args:
        rows: Rows as returned by ``Database.fetch_many``.
        title: Optional caption, typically the query text.
        colored: Whether to use colored output.
    """
    if not rows:
        console.print("[yellow]No rows.[/yellow]" if colored else "No rows.")
        return

    table = Table(
        title=truncate_query_text(title, 100) if title else None,
        show_header=True,
        header_style="bold cyan" if colored else "",
    )
    columns = list(rows[0].keys())
    for col in columns:
        table.add_column(col)
    for row in rows:
        table.add_row(*("NULL" if row[c] is None else str(row[c]) for c in columns))

    console.print(table)
    console.print(f"[dim]{len(rows)} row(s)[/dim]" if colored else f"{len(rows)} row(s)")


def print_stage_results(results: List[StageResult], colored: bool = True) -> None:
    """Print a summary of completed stages."""
    table = Table(title="Stages", header_style="bold" if colored else "")
    table.add_column("Stage")
    table.add_column("Snapshot")
    table.add_column("Statements", justify="right")
    table.add_column("Rows Loaded", justify="right")
    table.add_column("Time (ms)", justify="right")

    for result in results:
        table.add_row(
            f"{result.domain}/{result.label}",
            str(result.snapshot),
            str(result.statements_executed),
            str(sum(result.rows_loaded.values())),
            f"{result.execution_time_ms:.2f}",
        )

    console.print(table)


def print_check_results(report: Dict[str, List[str]], colored: bool = True) -> bool:
    """Print relationship-table checks.

    Returns:
        True when every table passed.
    """
    lines = []
    for table_name, problems in report.items():
        if not problems:
            lines.append(f"[green]✓[/green] {table_name}" if colored else f"OK   {table_name}")
            continue
        lines.append(f"[red]✗[/red] {table_name}" if colored else f"FAIL {table_name}")
        lines.extend(f"    {p}" for p in problems)

    passed = all(not problems for problems in report.values())
    if colored:
        border = "green" if passed else "red"
        console.print(Panel("\n".join(lines), title="Relationship tables", border_style=border))
    else:
        console.print("\n".join(lines), markup=False, highlight=False)
    return passed


def save_json_rows(rows: Sequence[Dict[str, Any]], output_path: str) -> None:
    """Save query rows to a JSON file.

    Args:
        rows: Rows to save.
        output_path: Path to write the JSON file.
    """
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(list(rows), f, indent=2, default=str)

    logger.info("JSON report saved to: %s", output_path)
    console.print(f"[green]Rows saved to: {output_path}[/green]")
