"""Timer package."""

from .cancel import CancelToken
from .countdown import Countdown, CountdownState, TICK_INTERVAL_MS, PROGRESS_BUFFER
from .errors import InvalidDurationError, TimerError, TimerStateError
from .format import format_duration
from .progress import ProgressChannel
from .stopwatch import Stopwatch, StopwatchState

__all__ = [
    "CancelToken",
    "Countdown",
    "CountdownState",
    "TICK_INTERVAL_MS",
    "PROGRESS_BUFFER",
    "InvalidDurationError",
    "TimerError",
    "TimerStateError",
    "format_duration",
    "ProgressChannel",
    "Stopwatch",
    "StopwatchState",
]
