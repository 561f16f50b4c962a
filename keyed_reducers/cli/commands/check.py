"""
Check command: shape-validate a reducer mapping
"""

import json
import warnings
from typing import Any, Dict, List

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...core.actions import Action, ActionTypes
from ...core.errors import ShapeError, ShapeWarning
from ...core.state import ABSENT
from ...validation import assert_reducer_shapes
from ..loader import LoadError, load_reducer_map

console = Console()


def _check_one(key: str, reducer: Any, strict: bool) -> Dict[str, Any]:
    row: Dict[str, Any] = {"key": str(key), "status": "ok", "initial": None, "message": ""}
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", ShapeWarning)
        try:
            assert_reducer_shapes({key: reducer}, strict=strict)
        except ShapeError as e:
            row["status"] = "error"
            row["message"] = str(e)
            return row

    shape_warnings = [w for w in caught if issubclass(w.category, ShapeWarning)]
    if shape_warnings:
        row["status"] = "warning"
        row["message"] = str(shape_warnings[0].message)
    row["initial"] = repr(reducer(ABSENT, Action(type=ActionTypes.INIT)))
    return row


def check_command(
    target: str = typer.Argument(..., help="Reducer mapping as module:attr or file.py:attr"),
    strict: bool = typer.Option(False, "--strict", help="Treat unknown-action probe failures as errors"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Shape-validate every reducer in a mapping.

    Examples:
        keyed-reducers check myapp.store:reducers
        keyed-reducers check ./reducers.py:REDUCERS --strict
    """
    try:
        reducers = load_reducer_map(target)
    except LoadError as e:
        if json_output:
            print(json.dumps({"error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2)

    rows: List[Dict[str, Any]] = [_check_one(key, reducer, strict) for key, reducer in reducers.items()]
    failed = any(row["status"] == "error" for row in rows)

    if json_output:
        print(json.dumps({"success": not failed, "reducers": rows}, indent=2))
    else:
        table = Table(title=f"Reducer Shapes ({target})")
        table.add_column("Key", style="green")
        table.add_column("Status")
        table.add_column("Initial", style="cyan")
        table.add_column("Message", overflow="fold")

        styles = {"ok": "[green]ok[/green]", "warning": "[yellow]warning[/yellow]", "error": "[red]error[/red]"}
        for row in rows:
            table.add_row(
                escape(row["key"]),
                styles[row["status"]],
                escape(row["initial"] or ""),
                escape(row["message"]),
            )

        console.print(table)
        if failed:
            console.print("[red]✗ Shape validation failed[/red]")
        else:
            console.print(f"[green]✓ {len(rows)} reducers passed shape validation[/green]")

    raise typer.Exit(1 if failed else 0)
