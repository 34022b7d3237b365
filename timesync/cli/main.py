#!/usr/bin/env python3
"""
timesync CLI

Main entrypoint for the timesync command-line tool.
"""

import typer
from rich.console import Console
from rich.table import Table

from timesync.cli.commands import simulate, snapshot

app = typer.Typer(
    name="timesync",
    help="Timeline event synchronizer CLI",
    add_completion=False,
)

console = Console()

# Add command groups
app.add_typer(snapshot.app, name="snapshot", help="Snapshot operations")

# Add standalone commands
app.command(name="simulate")(simulate.simulate_command)


@app.command()
def version():
    """Show version information."""
    from timesync import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]timesync[/bold]", f"v{__version__}")
    table.add_row("Snapshot format", "name + targetTime")

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
