"""Output formatting for admin CLI results."""

from __future__ import annotations

import csv
import json
import sys
from enum import Enum
from typing import Any

from rich.console import Console
from rich.table import Table

console = Console(stderr=True)


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"
    CSV = "csv"


def _cell(value: Any) -> str:
    """Render one table/CSV cell; nested values become compact JSON."""
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str, separators=(",", ":"))
    return str(value)


def unwrap_page(data: Any) -> tuple[Any, str | None]:
    """Split a list envelope into its rows and a "showing N of M" note."""
    if isinstance(data, dict) and isinstance(data.get("items"), list) and "total" in data:
        items = data["items"]
        offset = data.get("offset") or 0
        if not items:
            return items, f"0 of {data['total']}"
        return items, f"{offset + 1}-{offset + len(items)} of {data['total']}"
    return data, None


def print_output(
    data: list[dict[str, Any]] | dict[str, Any],
    fmt: OutputFormat = OutputFormat.TABLE,
    columns: list[str] | None = None,
    title: str | None = None,
) -> None:
    """Print an API result in the requested format.

    JSON output is the raw result, envelope included. Table and CSV output
    unwrap ``{"items": [...], "total": N}`` envelopes into rows.

    Args:
        data: A list of rows, a single object, or a page envelope.
        fmt: Output format (table, json, csv).
        columns: Which columns to show in table/csv mode. None = all.
        title: Optional title for table output.
    """
    if fmt == OutputFormat.JSON:
        print_json(data)
        return

    rows, note = unwrap_page(data)
    if fmt == OutputFormat.CSV:
        print_csv(rows, columns)
    else:
        print_table(rows, columns, title)
        if note:
            console.print(f"[dim]Showing {note}[/dim]")


def print_json(data: Any) -> None:
    """Print data as formatted JSON to stdout."""
    json.dump(data, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")


def print_table(
    data: list[dict[str, Any]] | dict[str, Any],
    columns: list[str] | None = None,
    title: str | None = None,
) -> None:
    """Print rows as a Rich table; a single object prints as field/value pairs."""
    if isinstance(data, dict):
        table = Table(title=title, show_header=False)
        table.add_column("field", style="bold")
        table.add_column("value", overflow="fold")
        for key in columns or list(data.keys()):
            table.add_row(key, _cell(data.get(key)))
        console.print(table)
        return

    if not data:
        console.print("[dim]No results.[/dim]")
        return

    if columns is None:
        columns = list(data[0].keys())

    table = Table(title=title, show_lines=False)
    for col in columns:
        table.add_column(col, overflow="fold")
    for row in data:
        table.add_row(*[_cell(row.get(col)) for col in columns])

    console.print(table)


def print_csv(
    data: list[dict[str, Any]] | dict[str, Any],
    columns: list[str] | None = None,
) -> None:
    """Print rows as CSV to stdout."""
    if isinstance(data, dict):
        data = [data]

    if not data:
        return

    if columns is None:
        columns = list(data[0].keys())

    writer = csv.DictWriter(sys.stdout, fieldnames=columns, extrasaction="ignore", lineterminator="\n")
    writer.writeheader()
    for row in data:
        writer.writerow({k: _cell(row.get(k)) for k in columns})
