"""
SnapshotStore abstract interface.

Defines the contract between the synchronizer and whatever holds the persisted
list of saved time events.
"""

from abc import ABC, abstractmethod
from typing import List

from ..core.events import SavedTimeEvent
from ..core.signal import Subscribable


class SnapshotStore(ABC):
    """
    Abstract snapshot storage interface.

    All implementations must guarantee:
    - get() returns the very list object that was last set or loaded
    - on_changed delivers that same object (identity is what lets the
      synchronizer recognise its own writes)
    - set() notifies subscribers synchronously or later, never zero times
    """

    @abstractmethod
    def get(self) -> List[SavedTimeEvent]:
        """
        Return the current snapshot.
        """
        ...

    @abstractmethod
    def set(self, events: List[SavedTimeEvent]) -> None:
        """
        Replace the current snapshot and notify subscribers.

        Args:
            events: New snapshot (kept by reference, not copied)
        """
        ...

    @property
    @abstractmethod
    def on_changed(self) -> Subscribable:
        """
        Subscribable delivering the latest snapshot list.
        """
        ...
