"""
Time event records.

TimeEvent is the live, per-scene record of a named wait point. SavedTimeEvent
is the reduced projection that gets persisted.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class TimeEvent:
    """
    Immutable time event record.

    Fields:
        name: Unique event name (identity key)
        initial_time: Seconds from scene start at which the event was registered
        target_time: Seconds from scene start at which the event ends
        offset: Duration of the event in seconds (target_time - initial_time)
        stack: Call-site capture from the last registration (diagnostics only)

    Records are never mutated in place. Use dataclasses.replace() to derive an
    updated copy.
    """
    name: str
    initial_time: float
    target_time: float
    offset: float
    stack: Optional[str] = None

    @staticmethod
    def stub(name: str, target_time: float = 0.0) -> "TimeEvent":
        """
        Zero-initialized record for a name that has not been registered yet.

        The offset is re-derived on the next registration pass.
        """
        return TimeEvent(name=name, initial_time=0.0, target_time=target_time, offset=0.0)

    def to_saved(self) -> "SavedTimeEvent":
        return SavedTimeEvent(name=self.name, target_time=self.target_time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "initialTime": self.initial_time,
            "targetTime": self.target_time,
            "offset": self.offset,
        }


@dataclass(frozen=True)
class SavedTimeEvent:
    """
    Persisted projection of a TimeEvent.

    Only target_time is durable. Everything else is re-derived from the live
    playback position on the next pass.
    """
    name: str
    target_time: float

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "targetTime": self.target_time}
