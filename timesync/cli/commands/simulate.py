"""
Simulate command: replay a scripted scene through the synchronizer
"""

import json
import math
import sys
from typing import List, Optional, Tuple

import typer
from rich.console import Console
from rich.table import Table

from timesync.config import Settings
from timesync.core.errors import TimeSyncError
from timesync.logging_config import setup_logging
from timesync.scene import SceneContext, SceneMeta, Step
from timesync.store.memory_store import InMemorySnapshotStore

console = Console()


def parse_steps(tokens: List[str]) -> List[Step]:
    """
    Numbers become seconds to advance, anything else an event name.
    """
    steps: List[Step] = []
    for token in tokens:
        try:
            seconds = float(token)
        except ValueError:
            steps.append(token)
            continue
        steps.append(seconds if math.isfinite(seconds) else token)
    return steps


def parse_override(value: str) -> Tuple[str, float]:
    name, sep, seconds = value.rpartition("=")
    if not sep or not name:
        raise typer.BadParameter(f"expected NAME=SECONDS, got {value!r}")
    try:
        return name, float(seconds)
    except ValueError:
        raise typer.BadParameter(f"offset of {name!r} is not a number: {seconds!r}")


def simulate_command(
    steps: List[str] = typer.Argument(..., help="Seconds to advance or event names to wait for"),
    fps: Optional[int] = typer.Option(None, "--fps", help="Frames per second (default: TIMESYNC_FPS or 30)"),
    first_frame: int = typer.Option(0, "--first-frame", help="Absolute frame the scene starts at"),
    snapshot: Optional[str] = typer.Option(None, "--snapshot", "-s", help="Saved events JSON to start from"),
    overrides: Optional[List[str]] = typer.Option(None, "--set", help="Change an event offset: NAME=SECONDS"),
    preserve: bool = typer.Option(True, "--preserve/--no-preserve", help="Keep later target times fixed"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Replay a scene script, apply offset overrides and show the result.

    Examples:
        timesync simulate 2 intro 1.5 outro
        timesync simulate 2 intro 1 outro --set intro=3
        timesync simulate 4 intro --snapshot '[{"name": "intro", "targetTime": 5}]' --json
    """
    try:
        parsed_steps = parse_steps(steps)
        parsed_overrides = [parse_override(value) for value in overrides or []]

        settings = Settings.from_env()
        # Keep stdout free for table and JSON output.
        setup_logging(settings, stream=sys.stderr)

        store = InMemorySnapshotStore.from_json(snapshot) if snapshot else InMemorySnapshotStore()
        scene = SceneContext(
            "cli",
            fps=fps,
            first_frame=first_frame,
            meta=SceneMeta(time_events=store),
            settings=settings,
        )

        scene.settle(parsed_steps)
        unknown = []
        for name, offset in parsed_overrides:
            if scene.time_events.get(name) is None:
                unknown.append(name)
                continue
            scene.time_events.set(name, offset, preserve)
            scene.settle(parsed_steps)

        events = scene.time_events.events
        frames = {
            event.name: scene.first_frame + scene.playback.seconds_to_frames(event.target_time)
            for event in events
        }
        scene.dispose()
    except (TimeSyncError, typer.BadParameter) as e:
        if json_output:
            print(json.dumps({"error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    if json_output:
        output = {
            "events": [dict(event.to_dict(), frame=frames[event.name]) for event in events],
            "snapshot": json.loads(store.to_json()),
            "passes": scene.passes,
            "writes": store.write_count,
            "unknown": unknown,
        }
        print(json.dumps(output, indent=2))
        return

    for name in unknown:
        console.print(f"[yellow]Unknown event ignored:[/yellow] {name}")

    table = Table(title=f"Time Events ({scene.playback.fps} fps)")
    table.add_column("Name", style="green")
    table.add_column("Initial (s)", justify="right")
    table.add_column("Offset (s)", style="cyan", justify="right")
    table.add_column("Target (s)", style="yellow", justify="right")
    table.add_column("Frame", style="dim", justify="right")

    for event in events:
        table.add_row(
            event.name,
            f"{event.initial_time:g}",
            f"{event.offset:g}",
            f"{event.target_time:g}",
            str(frames[event.name]),
        )

    console.print(table)
    console.print(f"\n[bold]Passes:[/bold] {scene.passes}  [bold]Snapshot writes:[/bold] {store.write_count}")
    console.print(f"[bold]Snapshot:[/bold] {store.to_json()}")
