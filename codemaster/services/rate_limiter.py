"""Simple in-memory rate limiting utilities."""

from __future__ import annotations

import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Iterable, Tuple

from codemaster.core.exceptions import RateLimitExceededError


@dataclass
class _Bucket:
    timestamps: Deque[float]


class InMemoryRateLimiter:
    """Sliding-window rate limiter suitable for single-node deployments."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._buckets: Dict[str, _Bucket] = {}

    def _prune(self, key: str, window_seconds: int, now: float) -> _Bucket:
        bucket = self._buckets.setdefault(key, _Bucket(timestamps=deque()))
        cutoff = now - window_seconds
        while bucket.timestamps and bucket.timestamps[0] < cutoff:
            bucket.timestamps.popleft()
        return bucket

    def allow(self, key: str, limit: int, window_seconds: int) -> bool:
        now = time.time()
        with self._lock:
            bucket = self._prune(key, window_seconds, now)
            if len(bucket.timestamps) >= limit:
                return False
            bucket.timestamps.append(now)
            return True

    def enforce(self, key: str, windows: Iterable[Tuple[int, int, str]]) -> None:
        """
        Check (limit, window_seconds, message) windows in order.

        Raises:
            RateLimitExceededError: with the first exhausted window's message
        """
        for limit, window_seconds, message in windows:
            if not self.allow(f"{key}:{window_seconds}", limit, window_seconds):
                raise RateLimitExceededError(message)

    def reset(self) -> None:
        with self._lock:
            self._buckets.clear()


rate_limiter = InMemoryRateLimiter()
