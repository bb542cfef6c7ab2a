"""Exceptions raised by the timing primitives."""

from __future__ import annotations

from enum import Enum


class TimerError(Exception):
    """Base class for every chronokit timer error."""


class TimerStateError(TimerError):
    """Raised when an operation is not valid in the current state.

    The instance is left untouched; ``operation`` names the rejected
    call and ``state`` the state it was rejected in.
    """

    def __init__(self, operation: str, state: Enum, message: str) -> None:
        self.operation = operation
        self.state = state
        super().__init__(message)


class InvalidDurationError(TimerError, ValueError):
    """Raised when a countdown is started with a non-positive duration."""

    def __init__(self, duration: float) -> None:
        self.duration = duration
        super().__init__(f"duration must be a finite number greater than zero, got {duration!r}")
