"""
Minimal scene host.

SceneContext provides what TimeEventsManager consumes from a scene: a playback
cursor, the first frame, reload/recalculate/reset signals, a reload request and
the metadata store. It replays a flat list of steps; it does not render or
schedule anything on its own.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from .config import Settings
from .core.playback import PlaybackStatus
from .core.signal import EventDispatcher, Subscribable
from .logging_config import get_logger
from .store.memory_store import InMemorySnapshotStore
from .store.store import SnapshotStore
from .sync.manager import Logger, TimeEventsManager

# A number advances playback by that many seconds, a string waits for the
# named time event.
Step = Union[float, int, str]


@dataclass
class SceneMeta:
    """Metadata fields of a scene that the synchronizer reads and writes."""
    time_events: SnapshotStore = field(default_factory=InMemorySnapshotStore)


class SceneContext:
    """
    In-process scene with a TimeEventsManager attached.

    Usage:
        scene = SceneContext("intro", fps=30)
        scene.run_pass([2.0, "title-in", 1.0, "title-out"])
        scene.time_events.set("title-in", 3.0)
        scene.settle([2.0, "title-in", 1.0, "title-out"])
    """

    def __init__(
        self,
        name: str = "scene",
        fps: Optional[int] = None,
        first_frame: int = 0,
        meta: Optional[SceneMeta] = None,
        settings: Optional[Settings] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self.name = name
        self.settings = settings or Settings()
        self.first_frame = first_frame
        self.playback = PlaybackStatus(fps=fps or self.settings.fps, frame=first_frame)
        self.meta = meta or SceneMeta()
        self.logger = logger or get_logger(__name__, trace_id=name)
        self.reload_requested = False
        self.passes = 0

        self._reloaded = EventDispatcher()
        self._recalculated = EventDispatcher()
        self._reset = EventDispatcher()

        self.time_events = TimeEventsManager(self, settings=self.settings, logger=self.logger)

    @property
    def on_reloaded(self) -> Subscribable:
        return self._reloaded.subscribable

    @property
    def on_recalculated(self) -> Subscribable:
        return self._recalculated.subscribable

    @property
    def on_reset(self) -> Subscribable:
        return self._reset.subscribable

    def reload(self) -> None:
        """Request a new pass. The host decides when to run it."""
        self.reload_requested = True

    def reset(self) -> None:
        self.playback.frame = self.first_frame
        self._reset.dispatch()

    def run_pass(self, steps: Sequence[Step]) -> List[int]:
        """
        Replay steps from the first frame.

        Args:
            steps: Seconds to advance, or event names to wait for

        Returns:
            Frame returned by the manager for each event step, in order
        """
        self.reload_requested = False
        self._reloaded.dispatch()
        self.playback.frame = self.first_frame

        frames = []
        for step in steps:
            if isinstance(step, str):
                frame = self.time_events.register(step)
                frames.append(frame)
                if frame > self.playback.frame:
                    self.playback.frame = frame
            else:
                self.playback.frame += self.playback.seconds_to_frames(step)

        self.passes += 1
        self._recalculated.dispatch()
        return frames

    def settle(self, steps: Sequence[Step], max_passes: int = 10) -> List[int]:
        """
        Run passes until no further reload is requested.

        Returns:
            Frames of the last pass
        """
        frames = self.run_pass(steps)
        remaining = max_passes - 1
        while self.reload_requested and remaining > 0:
            frames = self.run_pass(steps)
            remaining -= 1
        if self.reload_requested:
            self.logger.warning("Scene did not settle after %d passes", max_passes)
        return frames

    def dispose(self) -> None:
        self.time_events.dispose()
        self._reloaded.clear()
        self._recalculated.clear()
        self._reset.clear()
