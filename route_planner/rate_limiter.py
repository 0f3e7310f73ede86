"""
route_planner/rate_limiter.py
Admission control for planning calls.

The planner only needs `try_acquire()`; anything with that method can be
injected (tests use always-allow / always-deny fakes).
"""
import threading
import time
from typing import Callable, Optional, Protocol


class RateLimiter(Protocol):
    def try_acquire(self) -> bool: ...


class TokenBucketRateLimiter:
    """
    Token bucket refilled continuously at `permits_per_second`.

    A fresh bucket holds `initial_permits` (one by default), so a new limiter
    never grants more than `permits_per_second` calls in its first second.
    While idle it accumulates up to `capacity` permits (default: one second's
    worth, never less than one).  Safe to share between threads.
    """

    def __init__(
        self,
        permits_per_second: float,
        capacity: Optional[float] = None,
        initial_permits: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if permits_per_second <= 0:
            raise ValueError("permits_per_second must be greater than 0")
        self._rate = float(permits_per_second)
        self._capacity = float(capacity) if capacity is not None else max(1.0, self._rate)
        if self._capacity < 1:
            raise ValueError("capacity must allow at least one permit")
        self._clock = clock
        self._tokens = min(self._capacity, max(0.0, float(initial_permits)))
        self._last = clock()
        self._lock = threading.Lock()

    @property
    def rate(self) -> float:
        return self._rate

    def try_acquire(self) -> bool:
        with self._lock:
            now = self._clock()
            elapsed = max(0.0, now - self._last)
            self._last = now
            self._tokens = min(self._capacity, self._tokens + elapsed * self._rate)
            if self._tokens >= 1.0:
                self._tokens -= 1.0
                return True
            return False
