#!/usr/bin/env python3
"""
keyed-reducers CLI

Main entrypoint for the keyed-reducers command-line tool.
"""

import sys

import typer
from rich.console import Console
from rich.table import Table

from ..logging_config import setup_logging
from .commands import check, replay

app = typer.Typer(
    name="keyed-reducers",
    help="Inspect and replay combined keyed reducers",
    add_completion=False,
)

console = Console()

app.command(name="check")(check.check_command)
app.command(name="replay")(replay.replay_command)


@app.command()
def version():
    """Show version information."""
    from .. import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]keyed-reducers[/bold]", f"v{__version__}")
    table.add_row("State backend", "pyrsistent PMap")

    console.print(table)


def main():
    """Main entrypoint."""
    # stdout is reserved for command output (--json)
    setup_logging(stream=sys.stderr)
    app()


if __name__ == "__main__":
    main()
