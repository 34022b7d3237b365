"""
Tests for frame/second conversion.
"""

import pytest

from timesync.core.errors import InvalidPlaybackError
from timesync.core.playback import PlaybackStatus


def test_conversions():
    playback = PlaybackStatus(fps=30)

    assert playback.frames_to_seconds(60) == 2.0
    assert playback.seconds_to_frames(2.0) == 60


def test_seconds_round_up_to_next_frame():
    """A partial frame resolves to the following frame."""
    playback = PlaybackStatus(fps=10)

    assert playback.seconds_to_frames(0.11) == 2
    assert playback.seconds_to_frames(0.0) == 0


def test_frames_survive_conversion_round_trip():
    """Frame -> seconds -> frame is stable despite float error."""
    playback = PlaybackStatus(fps=30)

    for frame in range(0, 301):
        assert playback.seconds_to_frames(playback.frames_to_seconds(frame)) == frame


@pytest.mark.parametrize("fps", [0, -24])
def test_invalid_fps(fps):
    with pytest.raises(InvalidPlaybackError):
        PlaybackStatus(fps=fps)
