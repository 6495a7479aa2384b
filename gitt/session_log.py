"""In-memory log buffer shown by the log pane.

The terminal is in raw alternate-screen mode while a session runs, so log
records are kept here instead of being written to stderr.
"""

from __future__ import annotations

import logging
import threading
from collections import deque

SESSION_LOG_MAX_LINES = 500
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


class SessionLogBuffer(logging.Handler):
    """Logging handler retaining the most recent formatted records."""

    def __init__(self, max_lines: int = SESSION_LOG_MAX_LINES) -> None:
        super().__init__()
        self._lines: deque[str] = deque(maxlen=max(1, max_lines))
        self._lines_lock = threading.Lock()
        self.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
        except Exception:
            self.handleError(record)
            return
        with self._lines_lock:
            for line in message.splitlines() or [""]:
                self._lines.append(line)

    def lines(self) -> list[str]:
        with self._lines_lock:
            return list(self._lines)

    def clear(self) -> None:
        with self._lines_lock:
            self._lines.clear()


def configure_logging(verbose: bool, *, buffer: SessionLogBuffer | None = None) -> logging.Logger:
    """Attach ``buffer`` (if any) to the package logger and set its level."""
    package_logger = logging.getLogger("gitt")
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if buffer is not None:
        for handler in list(package_logger.handlers):
            if isinstance(handler, SessionLogBuffer) and handler is not buffer:
                package_logger.removeHandler(handler)
        if buffer not in package_logger.handlers:
            package_logger.addHandler(buffer)
    # Raw mode owns the terminal; buffered records must not reach stderr handlers.
    package_logger.propagate = buffer is None
    return package_logger


__all__ = [
    "LOG_DATE_FORMAT",
    "LOG_FORMAT",
    "SESSION_LOG_MAX_LINES",
    "SessionLogBuffer",
    "configure_logging",
]
