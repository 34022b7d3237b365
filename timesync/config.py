"""
Environment-driven settings.

Environment Variables:
    TIMESYNC_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: INFO
    TIMESYNC_LOG_FORMAT: Log format (json, text) - default: text
    TIMESYNC_CAPTURE_STACK: Capture registration call sites (1/0) - default: 1
    TIMESYNC_STACK_LIMIT: Max captured stack frames - default: unlimited
    TIMESYNC_FPS: Default frames per second for scenes - default: 30
"""

import os
from dataclasses import dataclass
from typing import Optional

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("json", "text")

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def _env_int(key: str) -> Optional[int]:
    val = os.getenv(key)
    if not val:
        return None
    try:
        parsed = int(val)
    except ValueError:
        return None
    return parsed if parsed > 0 else None


def _env_bool(key: str, default: bool) -> bool:
    val = os.getenv(key)
    if val is None:
        return default
    val = val.strip().lower()
    if val in _TRUE:
        return True
    if val in _FALSE:
        return False
    return default


def _env_choice(key: str, choices: tuple, default: str, upper: bool = False) -> str:
    val = os.getenv(key, default).strip()
    val = val.upper() if upper else val.lower()
    return val if val in choices else default


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings.

    Fields:
        log_level: Root log level name
        log_format: "json" or "text"
        capture_stack: Record the call site of each registration
        stack_limit: Max frames kept in a captured stack (None = all)
        fps: Default frames per second for new scenes
    """
    log_level: str = "INFO"
    log_format: str = "text"
    capture_stack: bool = True
    stack_limit: Optional[int] = None
    fps: int = 30

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            log_level=_env_choice("TIMESYNC_LOG_LEVEL", LOG_LEVELS, "INFO", upper=True),
            log_format=_env_choice("TIMESYNC_LOG_FORMAT", LOG_FORMATS, "text"),
            capture_stack=_env_bool("TIMESYNC_CAPTURE_STACK", True),
            stack_limit=_env_int("TIMESYNC_STACK_LIMIT"),
            fps=_env_int("TIMESYNC_FPS") or 30,
        )
