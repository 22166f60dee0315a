"""In-memory expiring cache used for duplicate-receipt detection."""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from receipt_points import config

# Pass as ttl to keep an entry until the process exits.
NO_EXPIRATION = -1.0


@dataclass
class CacheEntry:
    """
    Cached value with its expiry deadline on the cache clock.

    Attributes:
        value: Stored object (the receipt a fingerprint was derived from)
        expires_at: Clock reading after which the entry is gone; None never expires
    """

    value: Any
    expires_at: float | None

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class ExpiringCache:
    """
    Thread-safe key/value store with a time-to-live per entry.

    get() never returns an expired entry. Expired entries are dropped lazily on
    access, by a sweep that writes trigger once per cleanup interval, or in bulk
    by delete_expired().
    """

    def __init__(
        self,
        default_ttl: float | None = None,
        clock: Callable[[], float] = time.monotonic,
        cleanup_interval: float | None = None,
    ):
        """
        Args:
            default_ttl: Seconds an entry lives when set() gets no ttl
                (default: RECEIPT_CACHE_TTL_SECONDS, else 300)
            clock: Monotonic time source in seconds; injectable for tests
            cleanup_interval: Minimum seconds between sweeps run from set()/add()
                (default: default_ttl, or 300 when entries never expire)
        """
        if default_ttl is None:
            default_ttl = config.cache_ttl_seconds()
        if default_ttl <= 0 and default_ttl != NO_EXPIRATION:
            raise ValueError(f"default_ttl must be positive or NO_EXPIRATION, got {default_ttl}")
        if cleanup_interval is None:
            cleanup_interval = default_ttl if default_ttl > 0 else config.DEFAULT_CACHE_TTL_SECONDS
        if cleanup_interval <= 0:
            raise ValueError(f"cleanup_interval must be positive, got {cleanup_interval}")
        self.default_ttl = default_ttl
        self.cleanup_interval = cleanup_interval
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._next_sweep = clock() + cleanup_interval

    def get(self, key: str) -> Any | None:
        """Return the live value for key, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                return None
            return entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store value under key, replacing any previous entry. ttl=None uses default_ttl."""
        with self._lock:
            now = self._clock()
            self._maybe_sweep(now)
            self._entries[key] = self._entry(value, ttl, now)

    def add(self, key: str, value: Any, ttl: float | None = None) -> bool:
        """
        Store value only if key has no live entry, as one locked step.
        Returns True if stored, False if a live entry was already there.
        """
        with self._lock:
            now = self._clock()
            self._maybe_sweep(now)
            entry = self._entries.get(key)
            if entry is not None and not entry.is_expired(now):
                return False
            self._entries[key] = self._entry(value, ttl, now)
            return True

    def delete_expired(self) -> int:
        """Drop every expired entry. Returns how many were removed."""
        with self._lock:
            return self._sweep(self._clock())

    def __len__(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(1 for e in self._entries.values() if not e.is_expired(now))

    def _entry(self, value: Any, ttl: float | None, now: float) -> CacheEntry:
        if ttl is None:
            ttl = self.default_ttl
        expires_at = None if ttl == NO_EXPIRATION else now + ttl
        return CacheEntry(value=value, expires_at=expires_at)

    # Callers hold self._lock.
    def _maybe_sweep(self, now: float) -> None:
        if now >= self._next_sweep:
            self._sweep(now)

    def _sweep(self, now: float) -> int:
        expired = [k for k, e in self._entries.items() if e.is_expired(now)]
        for k in expired:
            del self._entries[k]
        self._next_sweep = now + self.cleanup_interval
        return len(expired)
