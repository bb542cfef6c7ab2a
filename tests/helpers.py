"""Shared test helpers for chronokit."""

import time

from PyQt6.QtCore import QCoreApplication


class SignalCollector:
    """Records every emission of the signals it is connected to."""

    def __init__(self):
        self.items: list = []

    def __call__(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __len__(self):
        return len(self.items)


class FakeClock:
    """Stand-in for ``time.monotonic`` that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CallCounter:
    """Callback that records how many times (and when) it ran."""

    def __init__(self):
        self.calls: list[float] = []

    def __call__(self):
        self.calls.append(time.monotonic())

    @property
    def count(self) -> int:
        return len(self.calls)


def wait_until(predicate, timeout: float = 2.0) -> bool:
    """Spin the Qt event loop until *predicate* holds or *timeout* passes."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        QCoreApplication.processEvents()
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


def spin(seconds: float) -> None:
    """Run the Qt event loop for *seconds*."""
    wait_until(lambda: False, timeout=seconds)
