"""
Cache Module - translation cache and persistent key-value stores

Exports:
- CacheInterface, CacheStats (translation cache interface)
- TranslationCache (in-memory LRU translation cache)
- KeyValueStore (persistent blob store interface)
- MemoryKeyValueStore, JsonFileStore (store backends)
"""

from .base import CacheInterface, CacheStats, KeyValueStore
from .memory_cache import TranslationCache
from .kv_store import MemoryKeyValueStore, JsonFileStore

__all__ = [
    'CacheInterface',
    'CacheStats',
    'TranslationCache',
    'KeyValueStore',
    'MemoryKeyValueStore',
    'JsonFileStore',
]
