"""Sliding-window rate limiting for host conversions."""

from __future__ import annotations

import threading
import time
from collections import deque
from typing import Callable, Deque


class RateLimiter:
    """Allows at most ``max_requests`` calls within any ``window_seconds`` span."""

    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: float = 60.0,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests <= 0:
            raise ValueError("max_requests must be positive")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._requests: Deque[float] = deque()
        self._lock = threading.Lock()

    def is_allowed(self) -> bool:
        """Record a request and report whether it fits in the current window."""
        with self._lock:
            now = self._clock()
            self._expire(now)
            if len(self._requests) >= self.max_requests:
                return False
            self._requests.append(now)
            return True

    def remaining(self) -> int:
        with self._lock:
            self._expire(self._clock())
            return max(0, self.max_requests - len(self._requests))

    def retry_after(self) -> float:
        """Seconds until the oldest request leaves the window (0 when a slot is free)."""
        with self._lock:
            now = self._clock()
            self._expire(now)
            if len(self._requests) < self.max_requests:
                return 0.0
            return max(0.0, self._requests[0] + self.window_seconds - now)

    def reset(self) -> None:
        with self._lock:
            self._requests.clear()

    def _expire(self, now: float) -> None:
        cutoff = now - self.window_seconds
        while self._requests and self._requests[0] <= cutoff:
            self._requests.popleft()


__all__ = ["RateLimiter"]
