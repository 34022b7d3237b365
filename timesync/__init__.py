"""
Timeline Event Synchronizer

Tracks named time events raised while a scene is replayed, reconciles their
timing against a persisted snapshot and republishes the result on every pass.
"""

__version__ = "0.1.0"
