"""Sliding-window rate limiting keyed by arbitrary strings."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol

_CLEANUP_INTERVAL = timedelta(minutes=5)


class _Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """A clock that reads the current UTC time."""

    def now(self) -> datetime:
        """Return the current time."""
        return datetime.now(timezone.utc)


@dataclass
class _Bucket:
    limit: int
    window: timedelta
    requests: list[datetime] = field(default_factory=list)


class RateLimiter:
    """Allows at most ``limit`` requests per key within a sliding window.

    A background thread periodically drops expired requests and forgets
    keys that have none left; call :meth:`stop` to end it.
    """

    def __init__(
        self,
        clock: Optional[_Clock] = None,
        cleanup_interval: timedelta = _CLEANUP_INTERVAL,
    ) -> None:
        self._clock = clock if clock is not None else SystemClock()
        self._lock = threading.Lock()
        self._buckets: dict[str, _Bucket] = {}
        self._stopped = threading.Event()
        self._interval = cleanup_interval.total_seconds()
        self._thread = threading.Thread(
            target=self._run_cleanup, name="ratelimit-cleanup", daemon=True
        )
        self._thread.start()

    def __enter__(self) -> "RateLimiter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def __len__(self) -> int:
        with self._lock:
            return len(self._buckets)

    def _run_cleanup(self) -> None:
        while not self._stopped.wait(self._interval):
            self.cleanup()

    def cleanup(self) -> None:
        """Drop expired requests and forget keys with none left."""
        with self._lock:
            now = self._clock.now()
            for key, bucket in list(self._buckets.items()):
                cutoff = now - bucket.window
                bucket.requests = [t for t in bucket.requests if t > cutoff]
                if not bucket.requests:
                    del self._buckets[key]

    def stop(self) -> None:
        """Stop the background cleanup thread."""
        self._stopped.set()
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join()

    def is_allowed(self, key: str, limit: int, window: timedelta) -> bool:
        """Record a request for key and report whether it is within the limit."""
        with self._lock:
            now = self._clock.now()
            cutoff = now - window
            bucket = self._buckets.setdefault(key, _Bucket(limit=limit, window=window))
            bucket.requests = [t for t in bucket.requests if t > cutoff]
            if len(bucket.requests) >= limit:
                return False
            bucket.requests.append(now)
            return True

    def get_current_count(self, key: str, limit: int, window: timedelta) -> int:
        """Return how many requests for key fall within the window."""
        with self._lock:
            bucket = self._buckets.get(key)
            if bucket is None:
                return 0
            cutoff = self._clock.now() - window
            return sum(1 for t in bucket.requests if t > cutoff)