"""Utility functions."""

import time
from threading import Lock
from typing import Callable, Optional


def now_ms() -> int:
    """Wall-clock time in milliseconds."""
    return int(time.time() * 1000)


class IdGenerator:
    """
    Strictly increasing ids derived from the creation timestamp.

    Two ids requested in the same millisecond still differ: the later one
    is bumped past the previous value.
    """

    def __init__(self, clock: Callable[[], int] = now_ms, last: int = 0):
        self._clock = clock
        self._last = last
        self._lock = Lock()

    def seed(self, value: Optional[int]) -> None:
        """Make sure future ids are greater than an existing one."""
        if value is None:
            return
        with self._lock:
            self._last = max(self._last, int(value))

    def next_id(self) -> int:
        with self._lock:
            self._last = max(self._clock(), self._last + 1)
            return self._last
