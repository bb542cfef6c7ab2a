"""chronokit - stopwatch and cancellable countdown primitives on Qt."""

from .timer import (
    CancelToken,
    Countdown,
    CountdownState,
    InvalidDurationError,
    ProgressChannel,
    Stopwatch,
    StopwatchState,
    TimerError,
    TimerStateError,
    format_duration,
)

__version__ = "0.1.0"

__all__ = [
    "CancelToken",
    "Countdown",
    "CountdownState",
    "InvalidDurationError",
    "ProgressChannel",
    "Stopwatch",
    "StopwatchState",
    "TimerError",
    "TimerStateError",
    "format_duration",
]
