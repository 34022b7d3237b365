"""
Logging configuration for timesync.

Provides JSON or text formatted logs with a trace_id field that carries the
scene name, so that messages from several scenes can be told apart.

Usage:
    from timesync.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, trace_id="intro-scene")
    logger.error("Duplicate event", extra={"event_name": "fade"})
"""

import logging
import sys
from typing import Optional, TextIO

from pythonjsonlogger.json import JsonFormatter

from .config import Settings


def setup_logging(settings: Optional[Settings] = None, stream: Optional[TextIO] = None) -> None:
    """
    Configure root logger.

    Args:
        settings: Settings to apply (default: Settings.from_env())
        stream: Output stream for log lines (default: sys.stdout)
    """
    settings = settings or Settings.from_env()
    level = getattr(logging, settings.log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level)
    handler.addFilter(TraceIDFilter())

    if settings.log_format == "json":
        formatter: logging.Formatter = JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(trace_id)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [trace_id=%(trace_id)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str, trace_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger with optional trace_id for correlation.

    Args:
        name: Logger name (typically __name__)
        trace_id: Trace ID for correlating logs (typically the scene name)

    Returns:
        LoggerAdapter with trace_id in extra fields
    """
    logger = logging.getLogger(name)
    return TraceLoggerAdapter(logger, {"trace_id": trace_id or "N/A"})


class TraceLoggerAdapter(logging.LoggerAdapter):
    """
    LoggerAdapter that merges per-call extra fields with the adapter's own.

    The stock adapter replaces the caller's extra dict, which would drop the
    event_name/stack fields attached to collision errors.
    """

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


class TraceIDFilter(logging.Filter):
    """
    Logging filter that adds trace_id to all log records.

    Ensures all logs have a trace_id field, even if not set via LoggerAdapter.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            record.trace_id = "N/A"  # type: ignore
        return True
