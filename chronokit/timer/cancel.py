"""External cancellation signal shared by stopwatches and countdowns."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal

logger = logging.getLogger(__name__)


class CancelToken(QObject):
    """One-shot cancellation signal.

    ``cancel()`` may be called any number of times; only the first call
    emits ``cancelled``.  ``is_cancelled`` is safe to query from any
    thread, which is how a running countdown observes it on each tick.

    Signals
    -------
    cancelled()
        Emitted once, on the first ``cancel()``.
    """

    cancelled = pyqtSignal()

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._event = threading.Event()
        self._lock = threading.Lock()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
        logger.debug("cancel token %#x fired", id(self))
        self.cancelled.emit()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until cancelled.  Returns False if *timeout* ran out."""
        return self._event.wait(timeout)
