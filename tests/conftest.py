"""
Pytest configuration and shared fixtures for textbatch tests.
"""
import sys
import asyncio
import pytest
from pathlib import Path
from typing import List

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import Settings
from config.constants import DEFAULT_BATCH_SEPARATOR
from textbatch.batching.batcher import BatchTranslationManager
from textbatch.cache.kv_store import MemoryKeyValueStore
from textbatch.cache.memory_cache import TranslationCache
from textbatch.performance.speed_stats import TranslationStatsManager
from textbatch.performance.translate_queue import TranslationQueue
from textbatch.providers.base import BaseTranslationProvider
from textbatch.rendering import FragmentRenderer


SEP = DEFAULT_BATCH_SEPARATOR


# ============================================================================
# Test doubles
# ============================================================================

class FakeClock:
    """Manually advanced epoch-milliseconds clock."""

    def __init__(self, start: int = 1_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class FakeProvider(BaseTranslationProvider):
    """
    Provider that prefixes every separator-delimited segment with "T:".

    Texts listed in `hang_on` never return on their own; texts listed in
    `fail_on` raise RuntimeError. Every call is recorded in `calls`.
    """

    name = "fake"

    def __init__(self, separator: str = SEP, delay: float = 0.0):
        self.separator = separator
        self.delay = delay
        self.calls: List[str] = []
        self.hang_on = set()
        self.fail_on = set()
        self.identity = False
        self.cancelled = 0
        self.closed = False
        self.started = asyncio.Event()

    async def translate(self, context: str, text: str) -> str:
        self.calls.append(text)
        self.started.set()
        if text in self.hang_on:
            try:
                await asyncio.sleep(3600)
            except asyncio.CancelledError:
                self.cancelled += 1
                raise
        if self.delay:
            await asyncio.sleep(self.delay)
        if text in self.fail_on:
            raise RuntimeError("provider rejected the request")
        if self.identity:
            return text
        return self.separator.join(f"T:{part}" for part in text.split(self.separator))

    async def close(self) -> None:
        self.closed = True


class RecordingRenderer(FragmentRenderer):
    """Remembers every apply() call in order."""

    def __init__(self):
        self.applied = []

    def apply(self, fragment, translated_text):
        self.applied.append((fragment.origin, translated_text))

    @property
    def by_origin(self):
        return dict(self.applied)


# ============================================================================
# Fixtures: Configuration
# ============================================================================

@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Small, fast settings; mutable per test."""
    return Settings(
        max_concurrent_translations=2,
        batch_max_size=100,
        provider_timeout_sec=1.0,
        target_lang="zh",
        stats_file=tmp_path / "speed_history.json",
        status_poll_interval_sec=0.01,
        cache_ttl_seconds=None,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ============================================================================
# Fixtures: Components
# ============================================================================

@pytest.fixture
def memory_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def stats(memory_store, clock) -> TranslationStatsManager:
    manager = TranslationStatsManager(memory_store, clock=clock)
    manager.initialize()
    return manager


@pytest.fixture
def queue(test_settings, stats) -> TranslationQueue:
    return TranslationQueue(test_settings, stats)


@pytest.fixture
def cache() -> TranslationCache:
    return TranslationCache(max_size=100)


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def provider_factory():
    """FakeProvider class, for tests that need several providers."""
    return FakeProvider


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def batcher(queue, cache, provider, renderer, test_settings) -> BatchTranslationManager:
    return BatchTranslationManager(
        queue=queue,
        cache=cache,
        provider=provider,
        renderer=renderer,
        settings=test_settings,
        context="Test document",
    )


# ============================================================================
# Session-level Setup
# ============================================================================

def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers."""
    for item in items:
        # Auto-add 'unit' marker to test files in tests/unit/
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        # Auto-add 'integration' marker to test files in tests/integration/
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
