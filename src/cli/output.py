"""
Output Rendering

Renders executor results as human-readable text, JSON, CSV or a rich table.
Results go to stdout; errors go to stderr.
"""

from __future__ import annotations

import csv
import io
import json
from enum import Enum
from typing import Any

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from src.productive_core.executors import ExecutorResult, ExecutorValidationError
from src.productive_core.resolution import ResolveError, SearchMatch

console = Console()
err_console = Console(stderr=True)


class OutputFormat(str, Enum):
    HUMAN = "human"
    JSON = "json"
    CSV = "csv"
    TABLE = "table"


def _row(item: Any) -> dict[str, Any]:
    if hasattr(item, "to_row"):
        return item.to_row()
    if isinstance(item, BaseModel):
        return item.model_dump()
    if isinstance(item, SearchMatch):
        return item.to_dict()
    if isinstance(item, dict):
        return item
    return {"value": item}


def _rows(data: Any) -> list[dict[str, Any]]:
    if data is None:
        return []
    if isinstance(data, list):
        return [_row(item) for item in data]
    return [_row(data)]


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def render_json(result: ExecutorResult[Any]) -> None:
    typer.echo(json.dumps(result.to_dict(), indent=2, default=str))


def render_csv(result: ExecutorResult[Any]) -> None:
    rows = _rows(result.data)
    if not rows:
        return
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(rows[0].keys()), extrasaction="ignore")
    writer.writeheader()
    for row in rows:
        writer.writerow({key: _cell(value) for key, value in row.items()})
    typer.echo(buffer.getvalue().rstrip("\n"))


def render_table(result: ExecutorResult[Any], title: str | None = None) -> None:
    rows = _rows(result.data)
    if not rows:
        console.print("[yellow]No results[/yellow]")
        return
    table = Table(title=title)
    for column in rows[0]:
        table.add_column(column, style="bold" if column == "id" else None)
    for row in rows:
        table.add_row(*(_cell(row.get(column)) for column in rows[0]))
    console.print(table)


def render_resolution_hints(result: ExecutorResult[Any]) -> None:
    for key, info in (result.resolved or {}).items():
        console.print(
            f"[dim]Resolved {key}: {escape(info.query)} → {escape(info.label)} ({info.id})[/dim]"
        )


def render_human(result: ExecutorResult[Any], title: str | None = None) -> None:
    render_resolution_hints(result)

    data = result.data
    if isinstance(data, dict) and data.get("deleted"):
        console.print(f"[green]Deleted[/green] {title or 'resource'} {data['id']}")
        return

    if isinstance(data, list):
        if not data:
            console.print("[yellow]No results[/yellow]")
            return
        for item in data:
            label = escape(str(getattr(item, "label", None) or getattr(item, "id", item)))
            suffix = " [green](exact)[/green]" if getattr(item, "exact", False) else ""
            console.print(f"[bold]{label}[/bold] [dim]#{getattr(item, 'id', '')}[/dim]{suffix}")
        meta = result.meta
        if meta is not None and meta.total_pages:
            console.print(
                f"[dim]Page {meta.current_page or 1}/{meta.total_pages} "
                f"({meta.total_count or len(data)} total)[/dim]"
            )
        return

    row = _row(data)
    heading = getattr(data, "label", None) or row.get("id", "")
    console.print(f"[bold]{escape(str(heading))}[/bold]")
    for key, value in row.items():
        if value is None or value == "":
            continue
        console.print(f"  [cyan]{key}[/cyan]: {escape(_cell(value))}")


def render_result(
    result: ExecutorResult[Any],
    output_format: OutputFormat,
    title: str | None = None,
) -> None:
    if output_format is OutputFormat.JSON:
        render_json(result)
    elif output_format is OutputFormat.CSV:
        render_csv(result)
    elif output_format is OutputFormat.TABLE:
        render_resolution_hints(result)
        render_table(result, title)
    else:
        render_human(result, title)


def render_error(error: Exception) -> None:
    """Print an error message (and suggestions for resolve errors) to stderr."""
    if isinstance(error, ResolveError):
        err_console.print(f"[red]Error:[/red] {error.message}")
        if error.suggestions:
            err_console.print("Did you mean:")
            for match in error.suggestions:
                err_console.print(f"  - {match.label} ({match.id})")
        return
    if isinstance(error, ExecutorValidationError):
        err_console.print(f"[red]Error:[/red] {error.message} [dim]({error.field})[/dim]")
        return
    err_console.print(f"[red]Error:[/red] {error}")
