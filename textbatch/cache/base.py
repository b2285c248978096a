"""
Base Store Interfaces

Abstract interfaces for the translation cache and the persistent
key-value store used for speed history.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Dict
from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class CacheStats:
    """Cache statistics"""
    hits: int = 0
    misses: int = 0
    size: int = 0
    max_size: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> Dict:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": f"{self.hit_rate:.1%}",
            "size": self.size,
            "max_size": self.max_size,
        }


class CacheInterface(ABC):
    """Content-addressed translation cache: exact source text -> translation"""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Get translation for an exact source text, None when absent"""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store translation for an exact source text"""
        pass

    @abstractmethod
    def clear(self) -> int:
        """Clear all entries, return count cleared"""
        pass

    @abstractmethod
    def stats(self) -> CacheStats:
        """Get cache statistics"""
        pass


class KeyValueStore(ABC):
    """
    Persistent key-value store holding JSON-serialisable blobs.

    Implementations raise PersistenceError when the backing medium fails.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the stored value, None when absent"""
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store value under key, replacing any previous value"""
        pass
