"""
Token bucket rate limiting for the HTTP surface.

Each client address gets its own bucket holding ``limit`` tokens that refill
evenly over ``window_seconds``.
"""

from __future__ import annotations

import math
import threading
import time
from typing import Callable


class InvalidLimitError(ValueError):
    """Limit must be positive."""


class InvalidWindowError(ValueError):
    """Window must be positive."""


class TokenBucketLimiter:
    """
    Token bucket rate limiter.

    Allows bursts up to the bucket capacity, then enforces the steady-state
    refill rate.

    Args:
        limit: Bucket capacity, i.e. requests allowed per window
        window_seconds: Time for an empty bucket to refill completely
        clock: Monotonic time source (injectable for tests)
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if limit <= 0:
            raise InvalidLimitError
        if window_seconds <= 0:
            raise InvalidWindowError

        self._limit = limit
        self._clock = clock
        self._tokens = float(limit)
        self._last_refill = clock()
        self._refill_rate = limit / float(window_seconds)  # tokens per second

    def try_acquire(self) -> bool:
        """
        Try to take a token without waiting.

        Returns:
            True if a token was taken, False if the bucket is empty
        """
        self._refill_tokens()
        if self._tokens >= 1.0:
            self._tokens -= 1.0
            return True
        return False

    def _refill_tokens(self) -> None:
        now = self._clock()
        elapsed = now - self._last_refill
        if elapsed > 0:
            self._tokens = min(self._limit, self._tokens + elapsed * self._refill_rate)
            self._last_refill = now

    @property
    def remaining(self) -> int:
        """Whole tokens currently available."""
        self._refill_tokens()
        return int(self._tokens)

    def retry_after(self) -> int:
        """Seconds until the next token is available."""
        self._refill_tokens()
        missing = max(0.0, 1.0 - self._tokens)
        return math.ceil(missing / self._refill_rate)

    def reset_after(self) -> int:
        """Seconds until the bucket is full again."""
        self._refill_tokens()
        return math.ceil((self._limit - self._tokens) / self._refill_rate)

    @property
    def is_full(self) -> bool:
        self._refill_tokens()
        return self._tokens >= self._limit

    @property
    def limit(self) -> int:
        return self._limit

    def __repr__(self) -> str:
        return f"TokenBucketLimiter(limit={self._limit}, tokens={self._tokens:.2f})"


class ClientRateLimiter:
    """One token bucket per client key, created on first use.

    Buckets that have refilled completely are swept at most once per window;
    a fresh bucket behaves exactly like a full one.
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._limit = limit
        self._window_seconds = window_seconds
        self._clock = clock
        self._buckets: dict[str, TokenBucketLimiter] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def __len__(self) -> int:
        return len(self._buckets)

    def _sweep(self) -> None:
        now = self._clock()
        if now - self._last_sweep < self._window_seconds:
            return
        self._last_sweep = now
        for key in [key for key, bucket in self._buckets.items() if bucket.is_full]:
            del self._buckets[key]

    def check(self, key: str) -> tuple[bool, TokenBucketLimiter]:
        """Take a token for ``key``; returns (allowed, bucket)."""
        with self._lock:
            self._sweep()
            bucket = self._buckets.get(key)
            if bucket is None:
                bucket = TokenBucketLimiter(self._limit, self._window_seconds, self._clock)
                self._buckets[key] = bucket
            return bucket.try_acquire(), bucket


class RateLimitExceededError(Exception):
    """Raised when a client has used up its request budget."""

    def __init__(self, retry_after: int, message: str = "Rate limit exceeded") -> None:
        super().__init__(message)
        self.message = message
        self.retry_after = retry_after
