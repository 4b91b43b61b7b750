"""Cooldown gate for translation requests."""

import time
from threading import Lock
from typing import Callable


class CooldownGate:
    """
    Process-local cooldown between successful translation requests.

    try_acquire() reserves the gate for one request; the caller then either
    arm()s it after a success, which closes the gate for `cooldown` seconds,
    or release()s it after a failure, which reopens it immediately. The
    check-and-reserve step is atomic, so two near-simultaneous callers can
    never both get through.

    Expiry is evaluated against the clock on every check; there is no timer
    thread. State is in memory only and is cleared by a restart.
    """

    def __init__(self, cooldown: float = 5.0, clock: Callable[[], float] = time.monotonic):
        self.cooldown = cooldown
        self._clock = clock
        self._lock = Lock()
        self._cooling_until = 0.0
        self._in_flight = False

    def _remaining(self) -> float:
        return max(0.0, self._cooling_until - self._clock())

    def remaining(self) -> float:
        """Seconds left until the gate reopens (0 when open)."""
        with self._lock:
            return self._remaining()

    @property
    def is_cooling(self) -> bool:
        return self.remaining() > 0

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def try_acquire(self) -> bool:
        """Reserve the gate for one request. False while cooling or busy."""
        with self._lock:
            if self._in_flight or self._remaining() > 0:
                return False
            self._in_flight = True
            return True

    def arm(self) -> None:
        """Record a successful request and start the cooldown window."""
        with self._lock:
            self._in_flight = False
            self._cooling_until = self._clock() + self.cooldown

    def release(self) -> None:
        """Give the reservation back without a cooldown (failed request)."""
        with self._lock:
            self._in_flight = False

    def reset(self) -> None:
        with self._lock:
            self._in_flight = False
            self._cooling_until = 0.0
