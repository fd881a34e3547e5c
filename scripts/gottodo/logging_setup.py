"""
Diagnostic logging for gottodo.

With diagnostics off the ``gottodo`` logger only carries a NullHandler.
With diagnostics on, records go to an in-memory ring buffer shown in the
debug panel and, optionally, to an append-only log file.

Call ``setup_logging`` once, before the store is loaded.
"""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path

LOGGER_NAME = "gottodo"
DEBUG_HISTORY = 20


class RingBufferHandler(logging.Handler):
    """Keeps the last ``capacity`` formatted lines in memory."""

    def __init__(self, capacity: int = DEBUG_HISTORY) -> None:
        super().__init__(level=logging.DEBUG)
        self._lines: deque[str] = deque(maxlen=capacity)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._lines.append(self.format(record))
        except Exception:
            self.handleError(record)

    def tail(self, n: int) -> list[str]:
        """Return the newest ``n`` lines, oldest first."""
        if n <= 0:
            return []
        return list(self._lines)[-n:]

    def clear(self) -> None:
        self._lines.clear()


def setup_logging(
    *,
    debug: bool = False,
    log_file: str | Path | None = None,
) -> RingBufferHandler | None:
    """Configure the ``gottodo`` logger hierarchy.

    Returns the ring buffer handler when diagnostics are enabled, else None.
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    # Keep log lines out of the terminal the TUI is drawing on.
    logger.propagate = False

    if not debug:
        logger.setLevel(logging.WARNING)
        logger.addHandler(logging.NullHandler())
        return None

    logger.setLevel(logging.DEBUG)

    ring = RingBufferHandler()
    ring.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(ring)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_path), mode="a", encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(fh)

    logger.debug("Debug mode enabled")
    return ring
