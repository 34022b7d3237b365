"""
Core primitives for the timeline event synchronizer.

This module provides:
- TimeEvent / SavedTimeEvent: Live and persisted event records
- PlaybackStatus: Frame cursor and frame/second conversion
- EventDispatcher / ValueDispatcher: Synchronous publish/subscribe
- Snapshot codec: Canonical JSON for persisted events
"""

from .events import TimeEvent, SavedTimeEvent
from .playback import PlaybackStatus
from .signal import EventDispatcher, ValueDispatcher, Subscribable
from .snapshot import to_saved, dumps_snapshot, loads_snapshot
from .errors import TimeSyncError, InvalidPlaybackError, SnapshotFormatError

__all__ = [
    "TimeEvent",
    "SavedTimeEvent",
    "PlaybackStatus",
    "EventDispatcher",
    "ValueDispatcher",
    "Subscribable",
    "to_saved",
    "dumps_snapshot",
    "loads_snapshot",
    "TimeSyncError",
    "InvalidPlaybackError",
    "SnapshotFormatError",
]
