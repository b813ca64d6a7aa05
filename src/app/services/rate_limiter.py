"""
Request rate limiter

Fixed-window counters per identifier (usually client IP + route class), kept
in process memory. Each process enforces its own quota; there is no shared
store between workers.

A window starts on the first request and lasts window_ms, rounded up to
whole seconds. Every request in the window increments the counter, including
denied ones, so hammering a limited route does not shorten the wait. Windows
whose reset time has passed are dropped by the storage's background expiry
sweep.
"""

import logging
import math
import threading
from datetime import UTC, datetime
from typing import Dict, Optional

from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage, Storage
from limits.strategies import FixedWindowRateLimiter
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class RateLimitConfig(BaseModel):
    max_requests: int = Field(gt=0)
    window_ms: int = Field(gt=0)
    message: str = "Too many requests. Please try again later."

    @property
    def window_seconds(self) -> int:
        """Window length in whole seconds, rounded up"""
        return math.ceil(self.window_ms / 1000)


class RateLimitResult(BaseModel):
    allowed: bool
    limit: int
    remaining: int
    reset_at: datetime


DEFAULT_PRESETS: Dict[str, RateLimitConfig] = {
    # Strict limit for auth endpoints
    "auth": RateLimitConfig(
        max_requests=5,
        window_ms=60_000,
        message="Too many authentication attempts. Please try again in a minute.",
    ),
    "api": RateLimitConfig(
        max_requests=30,
        window_ms=60_000,
        message="Too many requests. Please slow down.",
    ),
    "general": RateLimitConfig(
        max_requests=100,
        window_ms=60_000,
        message="Too many requests. Please try again later.",
    ),
}


def load_presets(overrides: Optional[dict] = None) -> Dict[str, RateLimitConfig]:
    """Merge config overrides (name -> {max_requests, window_ms, message}) into the defaults"""
    presets = dict(DEFAULT_PRESETS)
    for name, values in (overrides or {}).items():
        base = presets.get(name)
        merged = {**base.model_dump(), **values} if base else values
        presets[name] = RateLimitConfig(**merged)
    return presets


class RateLimiter:
    """
    Created once per application and shared by all request handlers.

    The hit and the window read happen under one lock so the reported
    remaining count belongs to the same request that was counted.
    """

    def __init__(self, storage: Optional[Storage] = None):
        self._storage = storage or MemoryStorage()
        self._strategy = FixedWindowRateLimiter(self._storage)
        self._lock = threading.Lock()

    def check(self, identifier: str, config: RateLimitConfig) -> RateLimitResult:
        item = RateLimitItemPerSecond(config.max_requests, config.window_seconds)

        with self._lock:
            allowed = self._strategy.hit(item, identifier)
            stats = self._strategy.get_window_stats(item, identifier)

        if not allowed:
            logger.warning(
                "[AUDIT] RATE_LIMIT_EXCEEDED identifier=%s limit=%d",
                identifier,
                config.max_requests,
            )

        return RateLimitResult(
            allowed=allowed,
            limit=config.max_requests,
            remaining=max(0, stats.remaining),
            reset_at=datetime.fromtimestamp(stats.reset_time, UTC),
        )

    def reset(self) -> None:
        """Forget every window"""
        with self._lock:
            self._storage.reset()
