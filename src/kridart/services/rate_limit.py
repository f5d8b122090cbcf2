"""Fixed-window attempt limiter for the authentication endpoints.

Counting is delegated to the ``limits`` package (the engine behind slowapi)
with in-memory storage, which expires idle windows on its own.
"""

from __future__ import annotations

import logging
import math
import time
from threading import Lock

from limits import RateLimitItemPerSecond, strategies
from limits.storage import MemoryStorage, Storage

logger = logging.getLogger(__name__)

__all__ = ["FixedWindowRateLimiter"]


class FixedWindowRateLimiter:
    """Count attempts per client key inside a fixed window.

    A key's window opens on its first attempt and lasts ``window_seconds``.
    Every attempt counts, including rejected ones, so a client that keeps
    retrying stays blocked until the window closes.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: int,
        *,
        storage: Storage | None = None,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be at least 1")
        self._item = RateLimitItemPerSecond(max_requests, window_seconds)
        self._storage = storage if storage is not None else MemoryStorage()
        self._strategy = strategies.FixedWindowRateLimiter(self._storage)
        # Serializes increment-and-compare for a key across request threads.
        self._lock = Lock()

    @property
    def max_requests(self) -> int:
        return self._item.amount

    @property
    def window_seconds(self) -> int:
        return self._item.get_expiry()

    def allow(self, key: str) -> bool:
        """Record an attempt for ``key`` and return whether it is within the cap."""
        with self._lock:
            allowed = self._strategy.hit(self._item, key)
        if not allowed:
            logger.info("Rate limit reached for %s", key)
        return allowed

    def retry_after(self, key: str) -> int:
        """Return whole seconds until ``key``'s current window resets."""
        stats = self._strategy.get_window_stats(self._item, key)
        if stats.remaining >= self._item.amount:
            return 0
        remaining = stats.reset_time - time.time()
        if remaining <= 0:
            return 0
        return max(1, math.ceil(remaining))

    def reset(self) -> None:
        """Forget every window."""
        with self._lock:
            self._storage.reset()
