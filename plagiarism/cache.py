"""
In-memory cache for plagiarism check responses
Provides TTL-based expiration with lazy eviction on lookup and an explicit sweep
"""

import copy
import hashlib
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

DEFAULT_TTL_SECONDS = 10 * 60


@dataclass(frozen=True)
class CacheEntry:
    payload: Dict[str, Any]
    created_at: float


class CacheStore:
    """In-memory response cache keyed by check type and input fingerprint"""

    def __init__(self, ttl_seconds: int = DEFAULT_TTL_SECONDS,
                 clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

        # Statistics
        self.hits = 0
        self.misses = 0

    @staticmethod
    def make_key(check_type: str, text: str) -> str:
        """
        Generate cache key for a check

        Args:
            check_type: "url" or "text"
            text: Normalized (trimmed) input

        Returns:
            "<type>:<md5 hex digest of the input>"
        """
        digest = hashlib.md5(text.encode('utf-8')).hexdigest()
        return f"{check_type}:{digest}"

    def _is_fresh(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.created_at < self.ttl_seconds

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        """
        Get cached payload if available and not expired

        Returns:
            A copy of the stored payload, or None on a miss. A stale entry
            is removed as a side effect.
        """
        entry = self._entries.get(key)
        if entry is None:
            self.misses += 1
            return None

        if not self._is_fresh(entry, self._clock()):
            self._entries.pop(key, None)
            self.misses += 1
            return None

        self.hits += 1
        return copy.deepcopy(entry.payload)

    def put(self, key: str, payload: Dict[str, Any]) -> None:
        """Store a payload, replacing any previous entry for the key"""
        self._entries[key] = CacheEntry(payload=copy.deepcopy(payload), created_at=self._clock())

    def sweep(self) -> int:
        """
        Remove every entry older than the TTL

        Returns:
            Number of entries removed
        """
        now = self._clock()
        expired = [key for key, entry in self._entries.items()
                   if now - entry.created_at > self.ttl_seconds]

        for key in expired:
            self._entries.pop(key, None)

        return len(expired)

    def clear(self) -> None:
        """Clear all cached entries"""
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    @property
    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get_stats(self) -> Dict[str, Any]:
        """Cache statistics for introspection endpoints"""
        lookups = self.hits + self.misses
        return {
            'size': self.size,
            'ttl_seconds': self.ttl_seconds,
            'hits': self.hits,
            'misses': self.misses,
            'hit_rate': self.hits / lookups if lookups > 0 else 0.0,
        }
