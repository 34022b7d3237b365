"""
Exception types for the timeline event synchronizer.
"""


class TimeSyncError(Exception):
    """Base class for synchronizer errors."""
    pass


class InvalidPlaybackError(TimeSyncError):
    """Raised when playback parameters cannot produce a valid timeline."""
    pass


class SnapshotFormatError(TimeSyncError):
    """Raised when a persisted snapshot does not match the saved event schema."""
    pass
