"""Bounded, lossy channel for countdown progress updates.

The producer (the countdown tick) must never block, so ``offer`` drops
the value when the buffer is full.  Consumers may live on another
thread and block in ``get`` or iterate until the channel is closed.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from typing import Iterator

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 1


class ProgressChannel:
    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._buffer: deque[float] = deque()
        self._cond = threading.Condition()
        self._closed = False
        self._dropped = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def dropped(self) -> int:
        """Number of updates discarded because the buffer was full."""
        return self._dropped

    def __len__(self) -> int:
        with self._cond:
            return len(self._buffer)

    def offer(self, value: float) -> bool:
        """Deliver *value* without blocking.  Returns False if dropped."""
        with self._cond:
            if self._closed:
                return False
            if len(self._buffer) >= self._capacity:
                self._dropped += 1
                logger.debug("progress channel full, dropping %.3f", value)
                return False
            self._buffer.append(value)
            self._cond.notify()
            return True

    def get(self, timeout: float | None = None) -> float | None:
        """Next value, or None once closed and drained (or on timeout)."""
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while not self._buffer:
                if self._closed:
                    return None
                if deadline is None:
                    self._cond.wait()
                else:
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        return None
                    self._cond.wait(remaining)
            return self._buffer.popleft()

    def drain(self) -> list[float]:
        with self._cond:
            values = list(self._buffer)
            self._buffer.clear()
            return values

    def close(self) -> None:
        with self._cond:
            if self._closed:
                return
            self._closed = True
            self._cond.notify_all()

    def __iter__(self) -> Iterator[float]:
        while True:
            value = self.get()
            if value is None:
                return
            yield value
