"""
Snapshot codec for persisted time events.

Persisted form is an ordered JSON array of {"name": str, "targetTime": number}
records. There is no versioning and no checksum; any other key is rejected.
"""

import json
import math
from typing import Any, Iterable, List

from .events import SavedTimeEvent, TimeEvent
from .errors import SnapshotFormatError

SAVED_EVENT_KEYS = frozenset({"name", "targetTime"})


def to_saved(events: Iterable[TimeEvent]) -> List[SavedTimeEvent]:
    """
    Project live events onto their persisted form, preserving order.
    """
    return [event.to_saved() for event in events]


def dumps_snapshot(saved: Iterable[SavedTimeEvent]) -> str:
    """
    Canonical JSON for a snapshot.

    Keys are sorted and separators carry no whitespace, so the same snapshot
    always produces the same string. Record order is kept as given.
    """
    records = [event.to_dict() for event in saved]
    return json.dumps(records, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _validate_record(index: int, record: Any) -> SavedTimeEvent:
    if not isinstance(record, dict):
        raise SnapshotFormatError(f"record {index}: expected an object, got {type(record).__name__}")

    keys = set(record.keys())
    if keys != SAVED_EVENT_KEYS:
        missing = sorted(SAVED_EVENT_KEYS - keys)
        extra = sorted(keys - SAVED_EVENT_KEYS)
        raise SnapshotFormatError(f"record {index}: missing keys {missing}, unexpected keys {extra}")

    name = record["name"]
    if not isinstance(name, str) or not name:
        raise SnapshotFormatError(f"record {index}: name must be a non-empty string")

    target_time = record["targetTime"]
    # bool is an int subclass
    if isinstance(target_time, bool) or not isinstance(target_time, (int, float)):
        raise SnapshotFormatError(f"record {index}: targetTime must be a number")
    if not math.isfinite(target_time):
        raise SnapshotFormatError(f"record {index}: targetTime must be finite")

    return SavedTimeEvent(name=name, target_time=float(target_time))


def loads_snapshot(text: str) -> List[SavedTimeEvent]:
    """
    Decode and validate a snapshot document.

    Args:
        text: JSON text

    Returns:
        Saved events in document order

    Raises:
        SnapshotFormatError: If the text is not valid JSON or does not match
            the saved event schema
    """
    try:
        data = json.loads(text)
    except ValueError as ex:
        raise SnapshotFormatError(f"invalid JSON: {ex}") from ex

    if not isinstance(data, list):
        raise SnapshotFormatError(f"expected a list of events, got {type(data).__name__}")

    return [_validate_record(index, record) for index, record in enumerate(data)]
