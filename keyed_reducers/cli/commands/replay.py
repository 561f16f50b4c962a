"""
Replay command: combine a reducer mapping and replay an action file
"""

import json
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...combine import combine
from ...config import CombineConfig
from ...core.errors import ShapeError, UndefinedStateError
from ...replay import replay as replay_actions
from ..loader import LoadError, load_reducer_map, read_actions

console = Console()


def replay_command(
    target: str = typer.Argument(..., help="Reducer mapping as module:attr or file.py:attr"),
    actions_path: str = typer.Option(..., "--actions", "-a", help="Path to JSON-lines action file"),
    until: Optional[int] = typer.Option(None, "--until", "-u", help="Replay only the first N actions"),
    show_state: bool = typer.Option(False, "--show-state", "-s", help="Show final state"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Replay actions through the combined reducer and report the result.

    Examples:
        keyed-reducers replay myapp.store:reducers --actions actions.jsonl
        keyed-reducers replay ./reducers.py:REDUCERS -a actions.jsonl --until 10 --show-state
    """

    def fail(message: str, code: int) -> None:
        if json_output:
            print(json.dumps({"success": False, "error": message}))
        else:
            console.print(f"[red]Error:[/red] {escape(message)}")
        raise typer.Exit(code)

    try:
        reducers = load_reducer_map(target)
        actions = read_actions(actions_path)
    except FileNotFoundError:
        fail(f"Action file not found: {actions_path}", 2)
    except LoadError as e:
        fail(str(e), 2)

    try:
        root = combine(reducers, config=CombineConfig.from_env())
        result = replay_actions(root, actions, until=until)
    except (ShapeError, UndefinedStateError) as e:
        fail(str(e), 1)

    action_counts = {}
    for action in actions[: result.applied]:
        action_counts[action.type] = action_counts.get(action.type, 0) + 1

    if json_output:
        output = {
            "success": True,
            "actions_applied": result.applied,
            "state_changes": result.changed,
            "keys": sorted(result.state.keys()),
            "action_counts": action_counts,
        }
        if show_state:
            output["state"] = result.state.to_dict()
        print(json.dumps(output, indent=2, sort_keys=True, default=repr))
        raise typer.Exit(0)

    console.print(f"[green]✓ Replayed {result.applied} actions successfully[/green]")
    console.print(f"  State changes: [cyan]{result.changed}[/cyan]")

    table = Table(title="Action Counts")
    table.add_column("Action Type", style="green")
    table.add_column("Count", style="cyan", justify="right")
    for action_type in sorted(action_counts.keys()):
        table.add_row(escape(action_type), str(action_counts[action_type]))
    console.print(table)

    if show_state:
        state_table = Table(title="Final State")
        state_table.add_column("Key", style="green")
        state_table.add_column("Value", overflow="fold")
        for key in sorted(result.state.keys()):
            state_table.add_row(escape(key), escape(repr(result.state.get(key))))
        console.print(state_table)

    raise typer.Exit(0)
