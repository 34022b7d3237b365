"""
Test suite for the timeline event synchronizer.

Focus areas:
- Registration and in-pass collisions
- Preserve / non-preserve reconciliation
- Snapshot write and echo suppression
- Snapshot codec, signals, configuration and CLI
"""
