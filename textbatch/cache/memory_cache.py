"""
Translation Cache

In-memory LRU cache mapping an exact combined source text to the
translation the provider produced for it.
"""

import time
import threading
from typing import Optional
from collections import OrderedDict
from dataclasses import dataclass

from config.logging_config import get_logger
from .base import CacheInterface, CacheStats

logger = get_logger(__name__)


@dataclass
class CacheEntry:
    """Single cached translation"""
    translation: str
    created_at: float
    expires_at: Optional[float] = None

    @property
    def is_expired(self) -> bool:
        if self.expires_at is None:
            return False
        return time.time() > self.expires_at


class TranslationCache(CacheInterface):
    """
    LRU translation cache with optional TTL.

    Keys are compared byte-for-byte: no normalisation is applied, so two
    groups share an entry only when their combined texts are identical.
    """

    def __init__(self, max_size: int = 5000, ttl_seconds: Optional[int] = None):
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.RLock()
        self._stats = CacheStats(max_size=max_size)

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._stats.misses += 1
                return None

            if entry.is_expired:
                del self._entries[key]
                self._stats.misses += 1
                return None

            self._entries.move_to_end(key)
            self._stats.hits += 1
            return entry.translation

    def set(self, key: str, value: str) -> None:
        with self._lock:
            now = time.time()
            expires_at = now + self.ttl_seconds if self.ttl_seconds else None
            if key in self._entries:
                self._entries.move_to_end(key)
            self._entries[key] = CacheEntry(
                translation=value,
                created_at=now,
                expires_at=expires_at,
            )

            while len(self._entries) > self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted cache entry ({len(evicted)} chars)")

    def __contains__(self, key: str) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and not entry.is_expired

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            return count

    def stats(self) -> CacheStats:
        with self._lock:
            self._stats.size = len(self._entries)
            return self._stats
