"""
Playback position and frame/second conversion.
"""

import math
from dataclasses import dataclass

from .errors import InvalidPlaybackError


@dataclass
class PlaybackStatus:
    """
    Mutable playback cursor of a scene.

    Fields:
        fps: Frames per second (must be positive)
        frame: Current absolute frame
    """
    fps: int = 30
    frame: int = 0

    def __post_init__(self) -> None:
        if self.fps <= 0:
            raise InvalidPlaybackError(f"fps must be positive, got {self.fps}")

    def frames_to_seconds(self, frames: int) -> float:
        return frames / self.fps

    def seconds_to_frames(self, seconds: float) -> int:
        """
        Convert seconds to a whole number of frames.

        Rounds up so that a wait never resolves before its target time. The
        product is rounded to nanoframe precision first so that a value read
        back from frames_to_seconds() maps onto the same frame.
        """
        return math.ceil(round(seconds * self.fps, 9))
