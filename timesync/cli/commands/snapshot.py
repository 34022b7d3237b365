"""
Snapshot commands: check
"""

import json

import typer
from rich.console import Console
from rich.table import Table

from timesync.core.errors import SnapshotFormatError
from timesync.core.snapshot import loads_snapshot

app = typer.Typer()
console = Console()


@app.command()
def check(
    document: str = typer.Argument(..., help="Snapshot JSON, e.g. '[{\"name\": \"a\", \"targetTime\": 5}]'"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Validate a snapshot document and list its events.

    Examples:
        timesync snapshot check '[{"name": "intro", "targetTime": 2.5}]'
        timesync snapshot check '[]' --json
    """
    try:
        events = loads_snapshot(document)
    except SnapshotFormatError as e:
        if json_output:
            print(json.dumps({"valid": False, "error": str(e)}))
        else:
            console.print(f"[red]Invalid snapshot:[/red] {e}")
        raise typer.Exit(2)

    if json_output:
        print(json.dumps({"valid": True, "events": [e.to_dict() for e in events], "count": len(events)}))
        return

    if not events:
        console.print("[yellow]Snapshot is empty[/yellow]")
        return

    table = Table(title="Saved Time Events")
    table.add_column("#", style="dim")
    table.add_column("Name", style="green")
    table.add_column("Target (s)", style="cyan", justify="right")

    for index, event in enumerate(events):
        table.add_row(str(index), event.name, f"{event.target_time:g}")

    console.print(table)
    console.print(f"\n[bold]Total events:[/bold] {len(events)}")
