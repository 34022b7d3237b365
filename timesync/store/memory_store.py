"""
In-memory snapshot store.

Stands in for a scene's metadata field: holds the list by reference and
broadcasts it through a ValueDispatcher.
"""

import logging
from typing import List, Optional

from ..core.events import SavedTimeEvent
from ..core.signal import Subscribable, ValueDispatcher
from ..core.snapshot import dumps_snapshot, loads_snapshot
from .store import SnapshotStore

logger = logging.getLogger(__name__)


class InMemorySnapshotStore(SnapshotStore):
    """
    Snapshot store kept in process memory.

    write_count counts set() calls, including external replacements.
    """

    def __init__(self, initial: Optional[List[SavedTimeEvent]] = None) -> None:
        self._value: ValueDispatcher[List[SavedTimeEvent]] = ValueDispatcher(
            initial if initial is not None else []
        )
        self.write_count = 0

    @classmethod
    def from_json(cls, text: str) -> "InMemorySnapshotStore":
        """
        Create a store seeded from snapshot JSON.

        Raises:
            SnapshotFormatError: If the text is not a valid snapshot
        """
        return cls(loads_snapshot(text))

    def get(self) -> List[SavedTimeEvent]:
        return self._value.current

    def set(self, events: List[SavedTimeEvent]) -> None:
        self.write_count += 1
        logger.debug("Snapshot set: %d event(s)", len(events))
        self._value.current = events

    @property
    def on_changed(self) -> Subscribable:
        return self._value.subscribable

    def replace_from_json(self, text: str) -> List[SavedTimeEvent]:
        """
        Apply an external edit: decode text and publish it as a new list.

        Returns:
            The newly stored list

        Raises:
            SnapshotFormatError: If the text is not a valid snapshot
        """
        events = loads_snapshot(text)
        self.set(events)
        return events

    def to_json(self) -> str:
        return dumps_snapshot(self.get())
