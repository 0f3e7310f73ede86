"""
tests/test_rate_limiter.py
Token bucket behaviour, driven by a fake clock.
Run with: pytest tests/ -v
"""
import sys
import threading
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from route_planner.rate_limiter import TokenBucketRateLimiter


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def _drain(limiter: TokenBucketRateLimiter, attempts: int) -> int:
    return sum(1 for _ in range(attempts) if limiter.try_acquire())


class TestTokenBucket:

    def test_fresh_limiter_grants_first_call_only(self, clock):
        limiter = TokenBucketRateLimiter(10, clock=clock)
        assert _drain(limiter, 11) == 1

    def test_more_than_rate_within_a_second_is_limited(self, clock):
        limiter = TokenBucketRateLimiter(10, clock=clock)
        granted = []
        for _ in range(11):
            granted.append(limiter.try_acquire())
            clock.advance(0.09)
        assert False in granted

    def test_paced_calls_all_granted(self, clock):
        limiter = TokenBucketRateLimiter(4, clock=clock)
        for _ in range(12):
            assert limiter.try_acquire()
            clock.advance(0.25)

    def test_refills_continuously(self, clock):
        limiter = TokenBucketRateLimiter(10, clock=clock)
        _drain(limiter, 10)
        assert not limiter.try_acquire()
        clock.advance(0.5)
        assert _drain(limiter, 10) == 5

    def test_partial_token_not_granted(self, clock):
        limiter = TokenBucketRateLimiter(4, clock=clock)
        _drain(limiter, 5)
        clock.advance(0.125)
        assert not limiter.try_acquire()
        clock.advance(0.125)
        assert limiter.try_acquire()

    def test_idle_accumulation_capped_at_capacity(self, clock):
        limiter = TokenBucketRateLimiter(10, clock=clock)
        clock.advance(60)
        assert _drain(limiter, 100) == 10

    def test_custom_capacity(self, clock):
        limiter = TokenBucketRateLimiter(10, capacity=3, clock=clock)
        clock.advance(10)
        assert _drain(limiter, 10) == 3

    def test_initial_permits(self, clock):
        limiter = TokenBucketRateLimiter(10, initial_permits=10, clock=clock)
        assert _drain(limiter, 11) == 10

    def test_initial_permits_clamped_to_capacity(self, clock):
        limiter = TokenBucketRateLimiter(10, capacity=2, initial_permits=50, clock=clock)
        assert _drain(limiter, 5) == 2

    def test_fractional_rate_still_allows_one(self, clock):
        limiter = TokenBucketRateLimiter(0.5, clock=clock)
        assert limiter.try_acquire()
        assert not limiter.try_acquire()
        clock.advance(2.0)
        assert limiter.try_acquire()

    def test_clock_going_backwards_is_ignored(self, clock):
        limiter = TokenBucketRateLimiter(1, clock=clock)
        assert limiter.try_acquire()
        clock.advance(-5)
        assert not limiter.try_acquire()

    @pytest.mark.parametrize("rate", [0, -1])
    def test_rejects_non_positive_rate(self, rate):
        with pytest.raises(ValueError):
            TokenBucketRateLimiter(rate)

    def test_rejects_capacity_below_one(self):
        with pytest.raises(ValueError):
            TokenBucketRateLimiter(5, capacity=0.5)

    def test_concurrent_callers_never_overdraw(self, clock):
        limiter = TokenBucketRateLimiter(25, clock=clock)
        clock.advance(10)
        granted = []
        lock = threading.Lock()

        def worker():
            for _ in range(20):
                ok = limiter.try_acquire()
                with lock:
                    granted.append(ok)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(granted) == 25
        assert len(granted) == 160
