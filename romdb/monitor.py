"""Runtime monitoring and event logging helpers for romdb."""

from __future__ import annotations

import logging
import os
import sys
from collections import deque
from pathlib import Path
from typing import Optional

LOGGER_NAME = "romdb"

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _default_log_path() -> Path:
    from .settings import DEFAULT_LOG_FILE

    return Path(DEFAULT_LOG_FILE)


def get_log_path(log_file: Optional[str] = None) -> Path:
    """Return the event log path for this session."""
    return Path(log_file) if log_file else _default_log_path()


def setup_monitoring(log_file: Optional[str] = None, echo: bool = False) -> logging.Logger:
    """
    Configure the romdb logger.

    Handlers from a previous call are replaced, so calling this again with a
    different file or echo setting takes effect immediately.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    log_path = get_log_path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if echo:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    logger.info("Monitoring initialized, log file: %s", log_path)
    return logger


def log_event(event: str, message: str, level: int = logging.INFO) -> None:
    """Emit one 'event: message' line on the romdb logger."""
    logging.getLogger(LOGGER_NAME).log(level, "%s: %s", event, message)


def monitor_action(action: str, *, logger: Optional[logging.Logger] = None) -> None:
    """Emit a real-time action event."""
    (logger or logging.getLogger(LOGGER_NAME)).info("action: %s", action)


def tail_events(log_file: Optional[str] = None, lines: int = 50) -> int:
    """Print the last lines of the event log; returns how many were printed."""
    path = get_log_path(log_file)
    if not os.path.exists(path):
        print(f"No event log at {path}")
        return 0
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        last = deque(f, maxlen=lines)
    for line in last:
        print(line.rstrip("\n"))
    return len(last)
