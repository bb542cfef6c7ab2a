"""Stopwatch with pause/resume, lap splits and cancellation binding.

States
------
IDLE       Never started (or reset).
RUNNING    Accumulating elapsed time.
PAUSED     Running, but the clock is frozen at the pause start.
STOPPED    Finished; ``elapsed()`` is frozen at the end time.

Transitions
-----------
IDLE | STOPPED → RUNNING     (start)
RUNNING → PAUSED            (pause)
PAUSED → RUNNING            (resume)
RUNNING | PAUSED → STOPPED  (stop, or the bound CancelToken fires)
Any → IDLE                  (reset)

Invalid transitions raise ``TimerStateError`` and leave the stopwatch
as it was.  ``stop()`` on a stopwatch that is not running is a no-op.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable

from PyQt6.QtCore import QObject, pyqtSignal

from .cancel import CancelToken
from .errors import TimerStateError

logger = logging.getLogger(__name__)


class StopwatchState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"


class Stopwatch(QObject):
    """Elapsed-time tracker, net of paused intervals.

    All times are seconds from *clock* (``time.monotonic`` by default).

    Signals
    -------
    state_changed(new_state: StopwatchState)
        Emitted on every transition.
    lap_recorded(lap_seconds: float)
        Emitted after ``lap()`` appends a split.

    A ``CancelToken`` passed to ``start()`` stops the stopwatch when it
    fires.  A cancel from another thread is picked up by the next call
    on the stopwatch, with or without a running event loop.
    """

    state_changed = pyqtSignal(object)
    lap_recorded = pyqtSignal(float)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(parent)
        self._clock = clock

        # ── run state ─────────────────────────────────────────────────
        self._start_time: float | None = None
        self._end_time: float | None = None
        self._running: bool = False
        self._paused: bool = False
        self._pause_start_time: float = 0.0
        self._total_pause: float = 0.0
        self._laps: list[float] = []

        # ── cancellation ──────────────────────────────────────────────
        self._cancel_token: CancelToken | None = None

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> StopwatchState:
        self._observe_cancel()
        if self._start_time is None:
            return StopwatchState.IDLE
        if self._paused:
            return StopwatchState.PAUSED
        if self._running:
            return StopwatchState.RUNNING
        return StopwatchState.STOPPED

    @property
    def running(self) -> bool:
        """True from ``start()`` until ``stop()``, paused or not."""
        self._observe_cancel()
        return self._running

    @property
    def paused(self) -> bool:
        self._observe_cancel()
        return self._paused

    @property
    def laps(self) -> list[float]:
        """Recorded lap times in seconds, oldest first."""
        return list(self._laps)

    @property
    def total_pause(self) -> float:
        """Seconds spent paused in closed pause intervals."""
        return self._total_pause

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self, cancel_token: CancelToken | None = None) -> None:
        """Begin a fresh run.  Pause total, end time and laps are cleared."""
        self._observe_cancel()
        if self._running:
            raise TimerStateError("start", self.state, "stopwatch is already running")

        self._start_time = self._clock()
        self._end_time = None
        self._total_pause = 0.0
        self._laps = []
        self._running = True
        self._set_state(StopwatchState.RUNNING)

        if cancel_token is not None:
            if cancel_token.is_cancelled:
                self.stop()
                return
            self._bind(cancel_token)

    def pause(self) -> None:
        self._observe_cancel()
        if not self._running:
            raise TimerStateError("pause", self.state, "stopwatch is not running")
        if self._paused:
            raise TimerStateError("pause", self.state, "stopwatch is already paused")
        self._pause_start_time = self._clock()
        self._paused = True
        self._set_state(StopwatchState.PAUSED)

    def resume(self) -> None:
        self._observe_cancel()
        if not self._running:
            raise TimerStateError("resume", self.state, "stopwatch is not running")
        if not self._paused:
            raise TimerStateError("resume", self.state, "stopwatch is not paused")
        self._close_pause()
        self._set_state(StopwatchState.RUNNING)

    def lap(self) -> float:
        """Record and return the running time since start."""
        self._observe_cancel()
        if not self._running:
            raise TimerStateError("lap", self.state, "stopwatch is not running")
        split = self._net_elapsed(self._now())
        self._laps.append(split)
        self.lap_recorded.emit(split)
        return split

    def stop(self) -> None:
        """Close any open pause and freeze elapsed time.  No-op when idle."""
        if not self._running:
            return
        if self._paused:
            self._close_pause()
        self._end_time = self._clock()
        self._running = False
        self._unbind()
        self._set_state(StopwatchState.STOPPED)

    def reset(self) -> None:
        """Stop and forget everything, back to IDLE."""
        self._unbind()
        self._start_time = None
        self._end_time = None
        self._running = False
        self._paused = False
        self._total_pause = 0.0
        self._laps = []
        self._set_state(StopwatchState.IDLE)

    def elapsed(self) -> float:
        """Seconds of running time, live while running, frozen after stop."""
        self._observe_cancel()
        if self._start_time is None:
            raise TimerStateError("elapsed", self.state, "stopwatch has not been started")
        if self._running:
            return self._net_elapsed(self._now())
        return self._net_elapsed(self._end_time)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _now(self) -> float:
        # time is frozen while a pause is open
        if self._paused:
            return self._pause_start_time
        return self._clock()

    def _net_elapsed(self, until: float) -> float:
        return until - self._start_time - self._total_pause

    def _close_pause(self) -> None:
        self._total_pause += self._clock() - self._pause_start_time
        self._paused = False

    def _bind(self, token: CancelToken) -> None:
        self._cancel_token = token
        token.cancelled.connect(self._on_cancelled)

    def _unbind(self) -> None:
        token, self._cancel_token = self._cancel_token, None
        if token is not None:
            token.cancelled.disconnect(self._on_cancelled)

    def _on_cancelled(self) -> None:
        self._observe_cancel()

    def _observe_cancel(self) -> None:
        # a late queued signal finds the token already released
        if self._cancel_token is not None and self._cancel_token.is_cancelled:
            logger.debug("stopwatch %#x stopped by cancel token", id(self))
            self.stop()

    def _set_state(self, new_state: StopwatchState) -> None:
        logger.debug("stopwatch %#x -> %s", id(self), new_state.value)
        self.state_changed.emit(new_state)
