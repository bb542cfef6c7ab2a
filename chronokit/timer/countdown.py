"""Cancellable countdown with optional lossy progress reporting.

States
------
CREATED     Constructed, not started yet.
RUNNING     Waiting on the Qt event loop; one tick per interval.
COMPLETED   Duration elapsed; ``on_complete`` was invoked exactly once.
CANCELLED   Stopped or cancelled before completion; no callback.

Transitions
-----------
CREATED → RUNNING                 (start)
CREATED → CANCELLED               (stop before start)
RUNNING → COMPLETED               (tick observes elapsed >= duration)
RUNNING → CANCELLED               (stop, or the CancelToken fires)

A countdown starts at most once.  ``stop()`` is idempotent and does
nothing once the countdown has finished either way.

Each tick races three things: the deadline, an explicit ``stop()``, and
the external ``CancelToken``.  Cancellation is cooperative: a token
cancelled from another thread is seen at the next tick.  In progress
mode every tick offers ``elapsed / duration`` to a ``ProgressChannel``;
if the consumer has not caught up the update is dropped.
"""

from __future__ import annotations

import logging
import math
import time
from datetime import timedelta
from enum import Enum
from typing import TYPE_CHECKING, Callable

from PyQt6.QtCore import QObject, Qt, QTimer, pyqtSignal

from .cancel import CancelToken
from .errors import InvalidDurationError, TimerStateError
from .format import to_seconds
from .progress import DEFAULT_CAPACITY, ProgressChannel

if TYPE_CHECKING:
    from ..settings import Settings

logger = logging.getLogger(__name__)


class CountdownState(Enum):
    CREATED = "created"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# ── constants ─────────────────────────────────────────────────────────────

TICK_INTERVAL_MS = 100
PROGRESS_BUFFER = DEFAULT_CAPACITY

_FINISHED = (CountdownState.COMPLETED, CountdownState.CANCELLED)


# ── countdown ─────────────────────────────────────────────────────────────


class Countdown(QObject):
    """Invoke *on_complete* once *duration* seconds after ``start()``.

    Signals
    -------
    progress_changed(fraction: float)
        Emitted on every tick before completion, fraction in [0, 1).
    completed()
        Emitted right after ``on_complete`` returns.
    cancelled()
        Emitted when the countdown ends without completing.
    state_changed(new_state: CountdownState)
        Emitted on every transition.
    """

    progress_changed = pyqtSignal(float)
    completed = pyqtSignal()
    cancelled = pyqtSignal()
    state_changed = pyqtSignal(object)

    def __init__(
        self,
        duration: float | timedelta,
        on_complete: Callable[[], None],
        parent: QObject | None = None,
        *,
        report_progress: bool = False,
        tick_interval_ms: int = TICK_INTERVAL_MS,
        progress_buffer: int = PROGRESS_BUFFER,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(parent)
        if tick_interval_ms <= 0:
            raise ValueError("tick_interval_ms must be positive")

        self._duration: float = to_seconds(duration)
        self._on_complete = on_complete
        self._clock = clock
        self._tick_interval_ms = tick_interval_ms

        self._state: CountdownState = CountdownState.CREATED
        self._start_time: float | None = None
        self._end_time: float | None = None
        self._cancel_token: CancelToken | None = None

        self._channel: ProgressChannel | None = (
            ProgressChannel(progress_buffer) if report_progress else None
        )

        self._qt_timer = QTimer(self)
        self._qt_timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._qt_timer.setInterval(tick_interval_ms)
        self._qt_timer.timeout.connect(self._on_tick)

    @classmethod
    def from_settings(
        cls,
        duration: float | timedelta,
        on_complete: Callable[[], None],
        settings: Settings,
        parent: QObject | None = None,
        *,
        report_progress: bool = False,
    ) -> Countdown:
        return cls(
            duration,
            on_complete,
            parent,
            report_progress=report_progress,
            tick_interval_ms=settings.tick_interval_ms,
            progress_buffer=settings.progress_buffer,
        )

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> CountdownState:
        return self._state

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def is_running(self) -> bool:
        return self._state == CountdownState.RUNNING

    @property
    def elapsed(self) -> float:
        """Seconds since ``start()``, frozen once finished."""
        if self._start_time is None:
            return 0.0
        end = self._end_time if self._end_time is not None else self._clock()
        return end - self._start_time

    @property
    def remaining(self) -> float:
        if self._state == CountdownState.COMPLETED:
            return 0.0
        return max(0.0, self._duration - self.elapsed)

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress.

        Reads 1.0 as soon as the deadline passes, even before the tick
        that completes the countdown has run.
        """
        if self._state == CountdownState.COMPLETED:
            return 1.0
        if not math.isfinite(self._duration) or self._duration <= 0:
            return 0.0
        return max(0.0, min(1.0, self.elapsed / self._duration))

    def progress(self) -> ProgressChannel | None:
        """The progress channel, or None when not in progress mode."""
        return self._channel

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self, cancel_token: CancelToken | None = None) -> None:
        """Launch the background wait.  Valid once, from CREATED only."""
        if not math.isfinite(self._duration) or self._duration <= 0:
            raise InvalidDurationError(self._duration)
        if self._state != CountdownState.CREATED:
            raise TimerStateError(
                "start", self._state,
                f"countdown cannot start, it is already {self._state.value}",
            )

        self._start_time = self._clock()
        self._set_state(CountdownState.RUNNING)
        logger.debug("countdown %#x started for %.3fs", id(self), self._duration)

        if cancel_token is not None:
            if cancel_token.is_cancelled:
                self._finish(CountdownState.CANCELLED)
                return
            self._cancel_token = cancel_token
            cancel_token.cancelled.connect(self._on_token_cancelled)

        self._schedule_next_tick()
        self._qt_timer.start()

    def stop(self) -> None:
        """End the countdown early without invoking the callback.

        Safe to call repeatedly, before ``start()`` or after completion.
        """
        if self._state in _FINISHED:
            return
        self._finish(CountdownState.CANCELLED)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — tick loop
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        if self._state != CountdownState.RUNNING:
            return

        if self._cancel_token is not None and self._cancel_token.is_cancelled:
            logger.debug("countdown %#x observed cancellation", id(self))
            self._finish(CountdownState.CANCELLED)
            return

        fraction = (self._clock() - self._start_time) / self._duration
        if fraction >= 1.0:
            self._finish(CountdownState.COMPLETED)
            return

        if self._channel is not None:
            self._channel.offer(fraction)
        self.progress_changed.emit(fraction)
        self._schedule_next_tick()

    def _schedule_next_tick(self) -> None:
        # last interval is trimmed to land on the deadline
        remaining_ms = math.ceil(self.remaining * 1000)
        self._qt_timer.setInterval(max(1, min(self._tick_interval_ms, remaining_ms)))

    def _on_token_cancelled(self) -> None:
        if self._state == CountdownState.RUNNING:
            self._finish(CountdownState.CANCELLED)

    def _finish(self, outcome: CountdownState) -> None:
        self._qt_timer.stop()
        self._end_time = self._clock() if self._start_time is not None else None
        self._release_token()
        self._set_state(outcome)

        try:
            if outcome == CountdownState.COMPLETED:
                logger.debug("countdown %#x complete", id(self))
                self._invoke_callback()
                self.completed.emit()
            else:
                logger.debug("countdown %#x cancelled", id(self))
                self.cancelled.emit()
        finally:
            if self._channel is not None:
                self._channel.close()

    def _invoke_callback(self) -> None:
        # exceptions must not escape a Qt slot under PyQt6
        try:
            self._on_complete()
        except Exception:
            logger.exception("countdown %#x on_complete callback failed", id(self))

    def _release_token(self) -> None:
        token, self._cancel_token = self._cancel_token, None
        if token is not None:
            token.cancelled.disconnect(self._on_token_cancelled)

    def _set_state(self, new_state: CountdownState) -> None:
        self._state = new_state
        self.state_changed.emit(new_state)
