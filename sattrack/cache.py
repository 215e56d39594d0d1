"""
In-memory cache for upstream position responses.

Keeps the raw N2YO response body for a short window so repeated polls
from one or more frontends don't burn through the upstream quota.

- Entries are keyed by the composite request key (see make_cache_key)
- An entry is reused only while it is younger than ttl_seconds
- Stale entries are treated as absent and overwritten on the next fetch
- Bounded: when full, the oldest 10% (by fetch time) are evicted
- Single-flight: concurrent misses on one key trigger one upstream call

Flask's development server is threaded, so all access goes through
locks. The per-key lock only serializes fetches for the same key;
different keys fetch in parallel.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from sattrack.config import config

logger = logging.getLogger(__name__)


def make_cache_key(sat_id, lat, lng, alt, seconds) -> str:
    """Composite key from the raw request parameters."""
    return f'{sat_id}:{lat}:{lng}:{alt}:{seconds}'


@dataclass(frozen=True)
class CacheEntry:
    """Raw upstream body and the time it was fetched."""
    fetched_at: float
    body: bytes


class ResponseCache:
    """
    Thread-safe TTL cache for raw upstream response bodies.

    The clock is injectable so expiry can be tested without sleeping.
    """

    def __init__(
        self,
        ttl_seconds: int = None,
        max_entries: int = None,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else config.cache.ttl_seconds
        self.max_entries = max_entries if max_entries is not None else config.cache.max_entries
        self._clock = clock

        self._entries: Dict[str, CacheEntry] = {}
        self._key_locks: Dict[str, threading.Lock] = {}
        self._lock = threading.RLock()

        # Statistics
        self._hits = 0
        self._misses = 0
        self._fetches = 0

    def get(self, key: str) -> Optional[CacheEntry]:
        """
        Get a fresh entry by key.

        Returns None if not cached or older than the TTL. Stale entries
        are left in place; the next set() overwrites them.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self._clock() - entry.fetched_at < self.ttl_seconds:
                self._hits += 1
                return entry
            self._misses += 1
            return None

    def set(self, key: str, body: bytes) -> CacheEntry:
        """Store a body under key, stamped with the current time."""
        entry = CacheEntry(fetched_at=self._clock(), body=body)

        with self._lock:
            self._entries[key] = entry

            # Evict if over capacity
            if len(self._entries) > self.max_entries:
                self._evict_oldest()

        return entry

    def get_or_fetch(self, key: str, fetch: Callable[[], bytes]) -> bytes:
        """
        Return the cached body for key, calling fetch() on a miss.

        Only one caller per key runs fetch() at a time; the others wait
        and then pick up the freshly stored entry. Exceptions from fetch()
        propagate and nothing is stored.
        """
        entry = self.get(key)
        if entry is not None:
            logger.debug(f'Cache hit for {key}')
            return entry.body

        key_lock = self._lock_for(key)
        with key_lock:
            # Another thread may have filled it while we waited
            with self._lock:
                entry = self._entries.get(key)
                fresh = entry is not None and self._clock() - entry.fetched_at < self.ttl_seconds
            if fresh:
                logger.debug(f'Cache filled by concurrent fetch for {key}')
                return entry.body

            logger.debug(f'Cache miss for {key}, fetching upstream')
            try:
                body = fetch()
            except Exception:
                # Nothing stored for this key, so its lock would never be evicted
                with self._lock:
                    if self._key_locks.get(key) is key_lock and key not in self._entries:
                        del self._key_locks[key]
                raise
            with self._lock:
                self._fetches += 1
            return self.set(key, body).body

    def _lock_for(self, key: str) -> threading.Lock:
        with self._lock:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._key_locks[key] = lock
            return lock

    def _evict_oldest(self) -> None:
        """Remove oldest entries when over capacity."""
        entries = sorted(
            self._entries.items(),
            key=lambda x: x[1].fetched_at
        )
        # Remove oldest 10%
        to_remove = max(1, len(entries) // 10)
        for key, _ in entries[:to_remove]:
            del self._entries[key]
            self._key_locks.pop(key, None)
        logger.debug(f'Evicted {to_remove} cache entries')

    def clear(self) -> None:
        """Clear entire cache."""
        with self._lock:
            self._entries.clear()
            self._key_locks.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def stats(self) -> dict:
        """Get cache statistics."""
        with self._lock:
            total = self._hits + self._misses
            return {
                'entries': len(self._entries),
                'hits': self._hits,
                'misses': self._misses,
                'upstream_fetches': self._fetches,
                'key_locks': len(self._key_locks),
                'hit_rate': self._hits / total if total > 0 else 0,
                'ttl_seconds': self.ttl_seconds,
            }
