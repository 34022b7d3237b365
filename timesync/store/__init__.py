"""
Snapshot storage.

This module provides:
- SnapshotStore: Abstract interface for persisted saved events
- InMemorySnapshotStore: Reference-preserving in-process store
"""

from .store import SnapshotStore
from .memory_store import InMemorySnapshotStore

__all__ = [
    "SnapshotStore",
    "InMemorySnapshotStore",
]
