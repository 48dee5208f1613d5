"""In-memory fixed-window rate limiter for mutation endpoints."""

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Union

from loguru import logger

from content_trust.config.settings import settings
from content_trust.schemas import RateLimitConfig, RateLimitResult

Clock = Callable[[], float]


def monotonic_ms() -> float:
    """Milliseconds from a clock that never goes backwards."""
    return time.monotonic() * 1000.0


@dataclass
class RateLimitEntry:
    """Requests observed for one key in its current window."""

    count: int
    window_start: float
    window_ms: int

    def expired_by(self, now: float, buffer_ms: float) -> bool:
        """True once the window ended more than buffer_ms before now."""
        return now - self.window_start > self.window_ms + buffer_ms


class FixedWindowRateLimiter:
    """
    Fixed-window request counter keyed by an arbitrary string.

    Each key gets a window that opens on its first request and lasts
    window_ms. Up to `limit` requests are admitted per window; the window is
    hard reset once it has fully elapsed, so a burst straddling a boundary
    can see up to 2 x limit admissions in a short span.

    State is process-local: with N processes the effective limit is
    N x limit.

    A background sweep evicts entries whose window ended more than
    expiry_buffer_ms ago, bounding memory to recently active keys. An open
    window is never evicted, so a spent budget survives the sweep. The
    sweep is owned by the limiter: start() launches it, shutdown() stops it,
    and tests can call sweep() directly.

    Usage:
        with FixedWindowRateLimiter() as limiter:
            result = limiter.check("claim_submit:user-123", config)

    Attributes:
        cleanup_interval_ms: Period of the background sweep
        expiry_buffer_ms: Time past a window's end before it is evicted
        lock: Guards the entry map for check and sweep alike
    """

    def __init__(
        self,
        cleanup_interval_ms: Optional[int] = None,
        expiry_buffer_ms: Optional[int] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize an empty limiter. The sweep is not started.

        Args:
            cleanup_interval_ms: Sweep period (defaults to settings)
            expiry_buffer_ms: Grace period after a window ends (defaults to settings)
            clock: Callable returning the current time in milliseconds
                   (defaults to a monotonic clock)
        """
        self.cleanup_interval_ms = (
            cleanup_interval_ms
            if cleanup_interval_ms is not None
            else settings.rate_limit_cleanup_interval_ms
        )
        self.expiry_buffer_ms = (
            expiry_buffer_ms
            if expiry_buffer_ms is not None
            else settings.rate_limit_expiry_buffer_ms
        )
        if self.cleanup_interval_ms <= 0:
            raise ValueError("cleanup_interval_ms must be positive")
        if self.expiry_buffer_ms < 0:
            raise ValueError("expiry_buffer_ms must be non-negative")

        self.clock: Clock = clock or monotonic_ms
        self.lock = threading.Lock()
        self._entries: Dict[str, RateLimitEntry] = {}
        self._stop = threading.Event()
        self._sweeper: Optional[threading.Thread] = None
        self.logger = logger.bind(component="FixedWindowRateLimiter")

        self.logger.debug(
            f"FixedWindowRateLimiter initialized: cleanup every "
            f"{self.cleanup_interval_ms}ms, expiry buffer {self.expiry_buffer_ms}ms"
        )

    def check(
        self,
        key: str,
        config: Union[RateLimitConfig, dict],
    ) -> RateLimitResult:
        """
        Count a request against `key` and decide whether it is admitted.

        Read, compare and increment happen under one lock so two concurrent
        requests can never both take the last slot.

        Args:
            key: Identifier of the limited action, e.g. "vote:user-123"
            config: Limit and window length

        Returns:
            RateLimitResult; rejection is allowed=False with a retry_after
            hint in whole seconds
        """
        if not isinstance(config, RateLimitConfig):
            config = RateLimitConfig.model_validate(config)

        with self.lock:
            now = self.clock()
            entry = self._entries.get(key)

            if entry is None or now - entry.window_start >= config.window_ms:
                self._entries[key] = RateLimitEntry(
                    count=1, window_start=now, window_ms=config.window_ms
                )
                return RateLimitResult(
                    allowed=True,
                    remaining=config.limit - 1,
                    retry_after=0,
                )

            if entry.count >= config.limit:
                elapsed = now - entry.window_start
                retry_after = math.ceil((config.window_ms - elapsed) / 1000)
                # No format kwargs: keys are caller-supplied and may contain braces
                self.logger.info(
                    f"Rate limit exceeded for {key} "
                    f"({config.limit}/{config.window_ms}ms), retry in {retry_after}s"
                )
                return RateLimitResult(
                    allowed=False,
                    remaining=0,
                    retry_after=retry_after,
                )

            entry.count += 1
            return RateLimitResult(
                allowed=True,
                remaining=config.limit - entry.count,
                retry_after=0,
            )

    def sweep(self) -> int:
        """
        Evict entries whose window ended more than expiry_buffer_ms ago.

        Returns:
            Number of entries removed
        """
        with self.lock:
            now = self.clock()
            stale = [
                key
                for key, entry in self._entries.items()
                if entry.expired_by(now, self.expiry_buffer_ms)
            ]
            for key in stale:
                del self._entries[key]
            remaining = len(self._entries)

        if stale:
            self.logger.debug(f"Swept {len(stale)} stale entries, {remaining} tracked")
        return len(stale)

    def reset(self, key: Optional[str] = None) -> None:
        """Forget one key, or every key when none is given."""
        with self.lock:
            if key is None:
                self._entries.clear()
            else:
                self._entries.pop(key, None)

    def __len__(self) -> int:
        with self.lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        with self.lock:
            return key in self._entries

    @property
    def running(self) -> bool:
        """Whether the background sweep is active."""
        return self._sweeper is not None and self._sweeper.is_alive()

    def start(self) -> None:
        """Launch the background sweep. No-op if already running."""
        if self.running:
            return
        self._stop.clear()
        self._sweeper = threading.Thread(
            target=self._run_sweeper,
            name="rate-limit-sweeper",
            daemon=True,
        )
        self._sweeper.start()
        self.logger.info(f"Sweep started (every {self.cleanup_interval_ms}ms)")

    def shutdown(self, timeout: Optional[float] = None) -> None:
        """Stop the background sweep and wait for it. No-op if not running."""
        sweeper = self._sweeper
        if sweeper is None:
            return
        self._stop.set()
        sweeper.join(timeout)
        self._sweeper = None
        self.logger.info("Sweep stopped")

    def _run_sweeper(self) -> None:
        interval_s = self.cleanup_interval_ms / 1000.0
        while not self._stop.wait(interval_s):
            try:
                self.sweep()
            except Exception as e:
                # Keep the sweeper alive; a failed pass is retried next period
                self.logger.error(f"Sweep failed: {e}")

    def __enter__(self) -> "FixedWindowRateLimiter":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()


__all__ = ["FixedWindowRateLimiter", "RateLimitEntry", "monotonic_ms"]
