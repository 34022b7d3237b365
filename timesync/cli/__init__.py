"""
timesync CLI

Commands:
- timesync simulate - Replay a scripted scene and show reconciled events
- timesync snapshot check - Validate a persisted snapshot document
- timesync version - Show version information
"""
