"""
Time events manager: registration, reconciliation and persistence of the named
wait points of one scene.

Lifecycle per pass:
    on_reloaded      -> per-pass tables cleared (lookup survives)
    register(name)   -> once per event, in playback order
    on_recalculated  -> preserve policy restored, events published, snapshot
                        written if anything changed
External edits of the snapshot arrive through the store's on_changed signal and
trigger a reload of the scene.
"""

import dataclasses
import logging
import traceback
from typing import Dict, List, Optional, Protocol, Set, Union

from ..config import Settings
from ..core.events import SavedTimeEvent, TimeEvent
from ..core.playback import PlaybackStatus
from ..core.signal import Subscribable, Unsubscribe, ValueDispatcher
from ..core.snapshot import to_saved
from ..logging_config import get_logger
from ..store.store import SnapshotStore

Logger = Union[logging.Logger, logging.LoggerAdapter]


class SceneMetaLike(Protocol):
    time_events: SnapshotStore


class SceneLike(Protocol):
    """Collaborator contract the manager consumes from its owning scene."""

    name: str
    first_frame: int
    playback: PlaybackStatus
    meta: SceneMetaLike
    on_reloaded: Subscribable
    on_recalculated: Subscribable
    on_reset: Subscribable

    def reload(self) -> None:
        ...


class TimeEventsManager:
    """
    Manages time events for a given scene.

    Usage:
        manager = TimeEventsManager(scene)
        frame = manager.register("fade-out")   # resume playback at this frame
        manager.set("fade-out", 1.5)            # editor changed the duration
    """

    def __init__(
        self,
        scene: SceneLike,
        settings: Optional[Settings] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self.scene = scene
        self.settings = settings or Settings()
        self.logger = logger or get_logger(__name__, trace_id=scene.name)

        self._events: ValueDispatcher[List[TimeEvent]] = ValueDispatcher([])
        self._registered_events: Dict[str, TimeEvent] = {}
        self._lookup: Dict[str, TimeEvent] = {}
        self._collision_lookup: Set[str] = set()
        self._did_events_change = False
        self._preserve_timing = True

        store = scene.meta.time_events
        self._previous_reference: List[SavedTimeEvent] = store.get()
        self.load(self._previous_reference)

        self._subscriptions: List[Unsubscribe] = [
            scene.on_reloaded.subscribe(self._handle_reload),
            scene.on_recalculated.subscribe(self._handle_recalculated),
            scene.on_reset.subscribe(self._handle_reset),
            store.on_changed.subscribe(self._handle_meta_changed, False),
        ]

    @property
    def on_changed(self) -> Subscribable:
        """
        Triggered when the time events change.

        Delivers the registered events in registration order.
        """
        return self._events.subscribable

    @property
    def events(self) -> List[TimeEvent]:
        return self._events.current

    def get(self, name: str) -> Optional[TimeEvent]:
        """
        Get an event registered during the current pass.

        Returns:
            TimeEvent or None if the name was not registered in this pass
        """
        return self._registered_events.get(name)

    def set(self, name: str, offset: float, preserve: bool = True) -> None:
        """
        Change the time offset of the given event.

        Args:
            name: Event name
            offset: New duration in seconds
            preserve: Keep the target times of later events fixed on the next
                pass. When False, later events keep their offsets and slide
                along with this one.
        """
        offset = max(0.0, offset)
        current = self._lookup.get(name)
        if current is None or current.offset == offset:
            return

        self._preserve_timing = preserve
        event = dataclasses.replace(
            current,
            target_time=current.initial_time + offset,
            offset=offset,
        )
        self._lookup[name] = event
        self._registered_events[name] = event
        self._events.current = list(self._registered_events.values())
        self._did_events_change = True
        self.logger.debug("Offset of %r set to %ss (preserve=%s)", name, offset, preserve)
        self.scene.reload()

    def register(self, name: str) -> int:
        """
        Register a time event for the current pass.

        Args:
            name: Event name, unique within a pass

        Returns:
            Absolute frame at which the event ends. 0 when the name has already
            been registered during this pass.
        """
        if name in self._collision_lookup:
            self.logger.error(
                'name "%s" has already been used for another event name.',
                name,
                extra={"event_name": name, "stack": self._capture_stack()},
            )
            return 0

        self._collision_lookup.add(name)

        playback = self.scene.playback
        initial_time = playback.frames_to_seconds(playback.frame - self.scene.first_frame)
        stack = self._capture_stack()

        previous = self._lookup.get(name)
        if previous is None:
            self._did_events_change = True
            self._lookup[name] = TimeEvent(
                name=name,
                initial_time=initial_time,
                target_time=initial_time,
                offset=0.0,
                stack=stack,
            )
        else:
            event = self._reconcile(previous, initial_time, stack)
            if event is not previous:
                self._lookup[name] = event

        self._registered_events[name] = self._lookup[name]

        return self.scene.first_frame + playback.seconds_to_frames(self._lookup[name].target_time)

    def _reconcile(self, event: TimeEvent, initial_time: float, stack: Optional[str]) -> TimeEvent:
        """
        Merge a fresh observation into an existing record.

        Under preserve timing the target stays put and the offset absorbs the
        drift of initial_time. Otherwise the offset stays put and the target
        slides. Returns the same object when nothing changed.
        """
        changes = {}
        if event.stack != stack:
            changes["stack"] = stack
        if event.initial_time != initial_time:
            changes["initial_time"] = initial_time

        if self._preserve_timing:
            offset = max(0.0, event.target_time - initial_time)
            if event.offset != offset:
                changes["offset"] = offset
        else:
            target = initial_time + event.offset
            if event.target_time != target:
                changes["target_time"] = target
                self._did_events_change = True

        if not changes:
            return event
        return dataclasses.replace(event, **changes)

    def load(self, events: List[SavedTimeEvent]) -> None:
        """
        Merge saved target times into the lookup.

        Only target_time is taken from the snapshot; initial_time and offset of
        known events are kept and re-derived on the next registration.
        """
        for saved in events:
            previous = self._lookup.get(saved.name) or TimeEvent.stub(saved.name)
            self._lookup[saved.name] = dataclasses.replace(previous, target_time=saved.target_time)

    def dispose(self) -> None:
        """
        Detach from the scene and the store.
        """
        for unsubscribe in self._subscriptions:
            unsubscribe()
        self._subscriptions.clear()
        self._events.clear()

    def _capture_stack(self) -> Optional[str]:
        if not self.settings.capture_stack:
            return None
        # Drop the frames of the manager itself.
        frames = traceback.extract_stack()[:-2]
        if self.settings.stack_limit:
            frames = frames[-self.settings.stack_limit:]
        return "".join(traceback.format_list(frames))

    def _handle_reload(self) -> None:
        self._registered_events = {}
        self._collision_lookup.clear()

    def _handle_recalculated(self) -> None:
        self._preserve_timing = True
        self._events.current = list(self._registered_events.values())

        if self._did_events_change or len(self._previous_reference or []) != len(self._events.current):
            self._did_events_change = False
            self._previous_reference = to_saved(self._registered_events.values())
            self.logger.debug("Writing %d time event(s)", len(self._previous_reference))
            self.scene.meta.time_events.set(self._previous_reference)

    def _handle_reset(self) -> None:
        self._collision_lookup.clear()

    def _handle_meta_changed(self, data: List[SavedTimeEvent]) -> None:
        # Our own write coming back, or another part of the metadata changed.
        if data is self._previous_reference:
            return
        self.logger.debug("Time events changed externally: %d event(s)", len(data))
        self._previous_reference = data
        self.load(data)
        self.scene.reload()
