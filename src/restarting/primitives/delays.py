"""Forward-only, thread-safe cursor over a sequence of restart delays."""

from __future__ import annotations

import threading
from datetime import timedelta
from typing import Iterable, Iterator, TypeAlias


Delay: TypeAlias = float | int | timedelta


def delay_seconds(delay: Delay) -> float:
    """Convert a delay (seconds or timedelta) to float seconds."""
    if isinstance(delay, timedelta):
        return delay.total_seconds()
    return float(delay)


class DelayCursor:
    """
    Shared cursor over an ordered, possibly infinite, iterable of delays.

    Each `advance()` consumes exactly one element under a lock, so several
    supervision chains (even on different threads) can draw from one cursor
    without skipping or repeating a value. Once exhausted it stays exhausted.
    """

    def __init__(self, delays: Iterable[Delay]):
        self._iterator: Iterator[Delay] = iter(delays)
        self._position = 0
        self._exhausted = False
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        state = "exhausted" if self._exhausted else "open"
        return f"<DelayCursor position={self._position} {state}>"

    @property
    def position(self) -> int:
        """Number of delays consumed so far."""
        with self._lock:
            return self._position

    @property
    def exhausted(self) -> bool:
        with self._lock:
            return self._exhausted

    def advance(self) -> Delay | None:
        """Return the next delay, or None if the sequence has no more elements."""
        with self._lock:
            if self._exhausted:
                return None
            try:
                delay = next(self._iterator)
            except StopIteration:
                self._exhausted = True
                return None
            self._position += 1
            return delay
