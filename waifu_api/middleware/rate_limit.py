"""
Per-client rate limiting.

The limiter tracks request timestamps for each client (identified by IP
address) over a rolling window and rejects requests beyond the configured
quota with a 429.  It is attached to routes as the first dependency of their
chain, so unknown paths and the liveness endpoints are never counted.
"""
from __future__ import annotations

import logging
import threading
import time
from collections import defaultdict, deque
from typing import Callable, Deque, Dict

from fastapi import Request

from ..errors import TooManyRequestsError

logger = logging.getLogger(__name__)


class RateLimiter:
    def __init__(
        self,
        max_requests: int = 2,
        window_seconds: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        # Track timestamps of admitted requests per client
        self.history: Dict[str, Deque[float]] = defaultdict(deque)
        self.lock = threading.Lock()
        self.last_sweep = clock()

    def hit(self, key: str) -> bool:
        """Count one request for ``key``; return False when over quota."""
        with self.lock:
            now = self.clock()
            cutoff = now - self.window_seconds
            if self.last_sweep <= cutoff:
                self._sweep(cutoff)
                self.last_sweep = now
            timestamps = self.history[key]
            # Drop stale timestamps
            while timestamps and timestamps[0] <= cutoff:
                timestamps.popleft()
            if len(timestamps) >= self.max_requests:
                return False
            timestamps.append(now)
            return True

    def _sweep(self, cutoff: float) -> None:
        # Forget clients with nothing left in the window; caller holds the lock
        stale = [k for k, ts in self.history.items() if not ts or ts[-1] <= cutoff]
        for k in stale:
            del self.history[k]

    def reset(self) -> None:
        with self.lock:
            self.history.clear()

    def __call__(self, request: Request) -> None:
        client = getattr(request, "client", None)
        key = client.host if client else "anonymous"
        if not self.hit(key):
            logger.info("Rate limit exceeded for %s on %s", key, request.url.path)
            raise TooManyRequestsError()


def rate_limit(request: Request) -> None:
    """Route dependency delegating to the limiter installed on the app."""
    request.app.state.rate_limiter(request)
