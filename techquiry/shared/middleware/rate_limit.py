# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import math
import time
from collections import deque
from collections.abc import Callable
from functools import wraps
from threading import Lock

from flask import jsonify, request

from techquiry.shared.config import load_config
from techquiry.shared.logging import logger


class InMemoryRateLimiter:
    """Sliding window limiter: at most ``limit`` hits per key within ``window_seconds``."""

    def __init__(self, limit: int, window_seconds: float) -> None:
        self.limit = max(1, int(limit))
        self.window = max(0.1, float(window_seconds))
        self._hits: dict[str, deque[float]] = {}
        self._lock = Lock()
        self._last_sweep = float("-inf")

    def __len__(self) -> int:
        with self._lock:
            return len(self._hits)

    def allow(self, key: str, now: float | None = None) -> bool:
        return self.retry_after(key, now) == 0.0

    def retry_after(self, key: str, now: float | None = None) -> float:
        """Record a hit and return 0.0, or return the seconds until a hit is allowed."""

        now = time.monotonic() if now is None else now
        with self._lock:
            if now - self._last_sweep > self.window:
                self._sweep(now)
            hits = self._hits.setdefault(key, deque())
            while hits and now - hits[0] > self.window:
                hits.popleft()
            if len(hits) >= self.limit:
                return max(hits[0] + self.window - now, 0.001)
            hits.append(now)
            return 0.0

    def _sweep(self, now: float) -> None:
        # a key whose newest hit left the window has nothing left to count
        stale = [key for key, hits in self._hits.items() if not hits or now - hits[-1] > self.window]
        for key in stale:
            del self._hits[key]
        self._last_sweep = now


def _client_address() -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    return forwarded.split(",")[0].strip() or request.remote_addr or "unknown"


def rate_limit(limit: int | None = None, window_seconds: float | None = None):
    """Per endpoint and client address; a no-op when ``ENABLE_RATE_LIMIT`` is off."""

    security = load_config().security
    limiter = InMemoryRateLimiter(
        limit or security.rate_limit_requests,
        window_seconds or security.rate_limit_window,
    )

    def decorator(view: Callable):
        if not security.enable_rate_limit:
            return view

        @wraps(view)
        def limited(*args, **kwargs):
            key = f"{request.endpoint}:{_client_address()}"
            wait = limiter.retry_after(key)
            if wait:
                logger.warning(f"rate_limit: {key} over {limiter.limit}/{limiter.window:g}s")
                response = jsonify({"error": "rate_limited"})
                response.headers["Retry-After"] = str(math.ceil(wait))
                return response, 429
            return view(*args, **kwargs)

        return limited

    return decorator


__all__ = ["InMemoryRateLimiter", "rate_limit"]
