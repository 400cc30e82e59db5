"""
Clock and nonce source for venue adapters.

Adapters never read the wall clock directly; they receive a Clock so tests
can supply deterministic values.

The nonce is a monotonically non-decreasing counter in seconds. Adapters
scale it as the venue requires (Quadency multiplies it by 1000 both for
signing and as a timestamp fallback).
"""

import threading
import time
from abc import ABC, abstractmethod


class Clock(ABC):
    """Source of request nonces and the current time."""

    @abstractmethod
    def nonce(self) -> int:
        """
        Return the next nonce.

        Must never return a value lower than a previously returned one,
        including across threads.
        """
        pass

    @abstractmethod
    def milliseconds(self) -> int:
        """Return the current UTC time in milliseconds since epoch."""
        pass


class SystemClock(Clock):
    """
    Clock backed by time.time().

    Example:
        >>> clock = SystemClock()
        >>> first = clock.nonce()
        >>> clock.nonce() >= first
        True
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last_nonce = 0

    def nonce(self) -> int:
        with self._lock:
            # Wall clock may step backwards (NTP); never go below the last value
            self._last_nonce = max(self._last_nonce, int(time.time()))
            return self._last_nonce

    def milliseconds(self) -> int:
        return int(time.time() * 1000)

    def __repr__(self) -> str:
        return "SystemClock()"
