#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Translation Session - wires cache, stats, queue and batcher for one document

A session is created when translation starts for a document and torn down
when the document goes away; nothing here is process-global.
"""

from dataclasses import asdict
from typing import Any, Optional

from config.logging_config import get_logger
from .batching.batcher import BatchTranslationManager
from .batching.models import TextFragment
from .cache.base import CacheInterface, KeyValueStore
from .cache.kv_store import JsonFileStore
from .cache.memory_cache import TranslationCache
from .language import LanguageDetector
from .performance.speed_stats import TranslationStatsManager
from .performance.status_monitor import StatusMonitor
from .performance.translate_queue import ExtendedQueueStatus, TranslationQueue
from .providers.base import BaseTranslationProvider
from .rendering import BufferRenderer, FragmentRenderer

logger = get_logger(__name__)


class TranslationSession:
    """
    One document's translation pipeline

    Usage:
        session = TranslationSession(settings, provider, context="Title")
        for origin, text in nodes:
            session.add_fragment(text, origin)
        session.flush()
        await session.wait_idle()
        print(session.status().progress_percentage)
    """

    def __init__(
        self,
        settings: Any,
        provider: BaseTranslationProvider,
        renderer: Optional[FragmentRenderer] = None,
        cache: Optional[CacheInterface] = None,
        store: Optional[KeyValueStore] = None,
        language_detector: Optional[LanguageDetector] = None,
        context: str = "",
    ):
        self.settings = settings
        self.provider = provider
        self.renderer = renderer if renderer is not None else BufferRenderer(settings)
        if cache is None:
            cache = TranslationCache(
                max_size=settings.cache_max_size,
                ttl_seconds=settings.cache_ttl_seconds,
            )
        self.cache = cache
        self.store = store if store is not None else JsonFileStore(settings.stats_file)

        self.stats = TranslationStatsManager(
            self.store,
            restore_unfinished_tasks=settings.stats_restore_unfinished_tasks,
        )
        self.stats.initialize()

        self.queue = TranslationQueue(settings, self.stats)
        self.batcher = BatchTranslationManager(
            queue=self.queue,
            cache=self.cache,
            provider=provider,
            renderer=self.renderer,
            settings=settings,
            language_detector=language_detector,
            context=context,
        )
        self.monitor = StatusMonitor(self.queue, settings.status_poll_interval_sec)

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def add_fragment(self, text: str, origin: Any = None) -> Optional[TextFragment]:
        return self.batcher.add_fragment(text, origin)

    def flush(self):
        return self.batcher.flush_all()

    def can_accept_more(self) -> bool:
        return self.queue.can_accept_more()

    async def wait_idle(self) -> None:
        await self.batcher.wait_idle()
        await self.queue.join()

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def status(self) -> ExtendedQueueStatus:
        return self.queue.extended_status()

    def get_statistics(self) -> dict:
        return {
            'queue': self.queue.get_statistics(),
            'batcher': self.batcher.get_statistics(),
            'cache': self.cache.stats().to_dict(),
            'speed': asdict(self.stats.get_stats()),
        }

    def reset_stats(self) -> None:
        self.queue.reset_stats()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def teardown(self) -> None:
        """
        Stop translating this document

        Queued provider calls are discarded and groups dropped; calls
        already in flight finish on their own.
        """
        discarded = self.queue.clear_pending()
        self.batcher.clear()
        logger.info(f"Session torn down ({discarded} queued calls discarded)")

    async def close(self) -> None:
        await self.monitor.stop()
        await self.provider.close()
