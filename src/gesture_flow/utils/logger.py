"""
Logging setup and gesture event logging.

Console output stays compact; the optional rotating log file gets the
verbose format down to DEBUG.
"""

import logging
import logging.handlers
import time
from collections import Counter
from functools import wraps
from pathlib import Path

CONSOLE_FORMAT = "%(asctime)s  %(levelname)-5s  %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)-32s | %(message)s"
DATE_FORMAT = "%H:%M:%S"

EVENTS_LOGGER = "gesture_events"


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=DATE_FORMAT))
    return handler


def setup_logging(level="INFO", log_file=None, max_size_mb=10, backup_count=3):
    """
    Configure the root logger. Any handlers already installed are replaced.

    Args:
        level: Root level name; unknown names fall back to INFO
        log_file: Optional path for a rotating DEBUG log
        max_size_mb: Rotation size of the log file
        backup_count: Rotated files kept

    Returns:
        The root logger
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    for existing in list(root.handlers):
        root.removeHandler(existing)

    root.addHandler(_handler(logging.StreamHandler(), logging.INFO, CONSOLE_FORMAT))

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        rotating = logging.handlers.RotatingFileHandler(
            path,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
        )
        root.addHandler(_handler(rotating, logging.DEBUG, FILE_FORMAT))

    return root


class GestureLogger:
    """Event log for recorded gestures and hand tracking transitions."""

    def __init__(self):
        self.logger = logging.getLogger(EVENTS_LOGGER)
        self._counts = Counter()
        self._tracking = None

    def log_gesture(self, result, latency_ms=None):
        """Log a classification that made it into the history."""
        self._counts[result.name] += 1
        latency = "N/A" if latency_ms is None else f"{latency_ms:.1f}ms"
        self.logger.info(
            "Gesture: %-12s | Confidence: %.2f | Latency: %s",
            result.name, result.confidence, latency,
        )

    def log_status(self, active):
        """Log when the hand appears or disappears; repeats are ignored."""
        if active == self._tracking:
            return
        self._tracking = active
        if active:
            self.logger.info("Hand tracking")
        else:
            self.logger.info("Hand lost, waiting")

    @property
    def total_gestures(self):
        return sum(self._counts.values())

    def summary(self):
        """Per-gesture counts, most frequent first."""
        return self._counts.most_common()


def log_timing(func):
    """Decorator logging each call's duration at DEBUG on the caller's module logger."""
    timing_logger = logging.getLogger(func.__module__)

    @wraps(func)
    def timed(*args, **kwargs):
        started = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            timing_logger.debug("%s took %.2fms", func.__qualname__,
                                (time.perf_counter() - started) * 1000)

    return timed
