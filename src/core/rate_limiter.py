"""In-memory sliding-window rate limiter for likes and message posts."""

from __future__ import annotations

import asyncio
import logging
import time
from collections import defaultdict
from dataclasses import dataclass, field
from threading import Lock

logger = logging.getLogger(__name__)


@dataclass
class RateLimitConfig:
    """Configuration for rate limiting."""

    max_requests: int = 60
    window_seconds: int = 60
    cleanup_interval_seconds: int = 300

    @classmethod
    def from_settings(cls) -> RateLimitConfig:
        """Create config from application settings."""
        from src.core.config import get_settings

        settings = get_settings()
        return cls(
            max_requests=settings.rate_limit_requests,
            window_seconds=settings.rate_limit_window_seconds,
        )


@dataclass
class RequestRecord:
    """Request timestamps for one key."""

    timestamps: list[float] = field(default_factory=list)

    def prune_old(self, window_seconds: int) -> None:
        cutoff = time.time() - window_seconds
        self.timestamps = [ts for ts in self.timestamps if ts > cutoff]

    def seconds_until_available(self, window_seconds: int, max_requests: int) -> int:
        if len(self.timestamps) < max_requests:
            return 0
        oldest_in_window = sorted(self.timestamps)[-max_requests]
        return max(0, int(oldest_in_window + window_seconds - time.time()) + 1)


class InMemoryRateLimiter:
    """Thread-safe in-memory rate limiter with periodic cleanup."""

    def __init__(self, config: RateLimitConfig | None = None) -> None:
        self.config = config or RateLimitConfig()
        self._storage: dict[str, RequestRecord] = defaultdict(RequestRecord)
        self._lock = Lock()
        self._cleanup_task: asyncio.Task | None = None

    async def start_cleanup_task(self) -> None:
        """Start background cleanup task."""
        if self._cleanup_task is None:
            self._cleanup_task = asyncio.create_task(self._cleanup_loop())
            logger.info("Rate limiter cleanup task started")

    async def stop_cleanup_task(self) -> None:
        """Stop background cleanup task."""
        if self._cleanup_task:
            self._cleanup_task.cancel()
            try:
                await self._cleanup_task
            except asyncio.CancelledError:
                pass
            self._cleanup_task = None
            logger.info("Rate limiter cleanup task stopped")

    async def _cleanup_loop(self) -> None:
        while True:
            await asyncio.sleep(self.config.cleanup_interval_seconds)
            count = self.cleanup()
            if count > 0:
                logger.debug("Rate limiter cleaned up %d expired entries", count)

    def check_and_increment(self, key: str) -> tuple[bool, int, int]:
        """Check the limit for a key and count the request if allowed.

        Args:
            key: Caller identifier, e.g. "user:<uuid>".

        Returns:
            Tuple of (allowed, remaining_requests, retry_after_seconds).
        """
        max_requests = self.config.max_requests
        window = self.config.window_seconds

        with self._lock:
            record = self._storage[key]
            record.prune_old(window)

            if len(record.timestamps) >= max_requests:
                return (False, 0, record.seconds_until_available(window, max_requests))

            record.timestamps.append(time.time())
            return (True, max_requests - len(record.timestamps), 0)

    def cleanup(self) -> int:
        """Remove keys with no requests inside the window."""
        removed = 0
        with self._lock:
            for key in list(self._storage):
                record = self._storage[key]
                record.prune_old(self.config.window_seconds)
                if not record.timestamps:
                    del self._storage[key]
                    removed += 1
        return removed
