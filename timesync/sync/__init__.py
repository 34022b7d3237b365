"""
Time event synchronization for a single scene.

TimeEventsManager registers named events during a pass, reconciles their
timing and mirrors the result to a snapshot store.
"""

from .manager import TimeEventsManager, SceneLike

__all__ = [
    "TimeEventsManager",
    "SceneLike",
]
