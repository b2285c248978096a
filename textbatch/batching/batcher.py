#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Batch Translation Manager

Collects text fragments into size-bounded groups, sends each group through
cache -> queue -> provider exactly once, and maps the results back onto the
individual fragments.

Usage:
    manager = BatchTranslationManager(
        queue=queue,
        cache=TranslationCache(),
        provider=provider,
        renderer=renderer,
        settings=settings,
        context="Document title",
    )

    for origin, text in document_nodes:
        manager.add_fragment(text, origin)

    manager.flush_all()          # returns once every group is dispatched
    await manager.wait_idle()    # optional: wait for the results
"""

import asyncio
from collections import defaultdict
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Set

from config.logging_config import get_logger
from ..cache.base import CacheInterface
from ..errors import ErrorCategory, ProviderError, ProviderTimeout, QueueClearedError
from ..language import LanguageDetector, normalize_language_code
from ..performance.translate_queue import TranslationQueue
from ..providers.base import BaseTranslationProvider
from .models import Group, GroupStatus, TextFragment
from .result_splitter import map_segments, split_translated_text

if TYPE_CHECKING:
    from ..rendering import FragmentRenderer

logger = get_logger(__name__)


class BatchTranslationManager:
    """
    Owns the lifecycle of every Group.

    Placement scans open groups from newest to oldest and picks the first
    one the fragment fits into, so older groups stop growing and get
    flushed sooner. A group always accepts its first fragment whatever its
    length.

    Terminal outcomes of a dispatched group, none of which is retried:
    - cache hit or new translation: segments applied to fragments
    - provider returned the input unchanged, failed, timed out, or the
      queued call was discarded: every fragment resolved with its
      original text
    """

    def __init__(
        self,
        queue: TranslationQueue,
        cache: CacheInterface,
        provider: BaseTranslationProvider,
        renderer: "FragmentRenderer",
        settings: Any,
        language_detector: Optional[LanguageDetector] = None,
        context: str = "",
    ):
        """
        Args:
            queue: Bounded-concurrency queue for provider calls
            cache: Combined-text -> translation cache
            provider: Translation provider
            renderer: Applies translated text to fragment origins
            settings: Exposes batch_max_size, batch_separator,
                      provider_timeout_sec and target_lang
            language_detector: Detects fragments already in the target language
            context: Document context passed to the provider
        """
        self.queue = queue
        self.cache = cache
        self.provider = provider
        self.renderer = renderer
        self.settings = settings
        self.language_detector = language_detector or LanguageDetector()
        self.context = context

        self._groups: Dict[str, Group] = {}
        self._inflight: Set[asyncio.Task] = set()
        self._is_processing = False

        # Statistics
        self._cache_hits = 0
        self._cache_misses = 0
        self._groups_completed = 0
        self._fragments_applied = 0
        self._error_counts: Dict[str, int] = defaultdict(int)

    @property
    def separator(self) -> str:
        return self.settings.batch_separator

    @property
    def max_size(self) -> int:
        return self.settings.batch_max_size

    # ------------------------------------------------------------------
    # Collection
    # ------------------------------------------------------------------

    def is_fragment_resolved(self, text: str) -> bool:
        """True when text already reads in the target language"""
        target = normalize_language_code(self.settings.target_lang)
        return self.language_detector.detect(text) == target

    def add_fragment(self, text: str, origin: Any = None) -> Optional[TextFragment]:
        """
        Add a fragment to the open groups

        Returns:
            The new fragment, or None when the text was skipped
        """
        if not text or not text.strip() or self.is_fragment_resolved(text):
            return None

        fragment = TextFragment(text=text.strip(), origin=origin)

        target_group = None
        for group in reversed(list(self._groups.values())):
            if group.is_open and group.length_with(fragment) <= self.max_size:
                target_group = group
                break

        if target_group is None:
            target_group = Group(separator=self.separator)
            self._groups[target_group.group_id] = target_group

        target_group.add(fragment)
        return fragment

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def flush_all(self) -> List[asyncio.Task]:
        """
        Dispatch every open group

        Each group is translated by its own task; this returns as soon as
        the tasks are created. Groups already dispatched are skipped, so
        repeated calls are harmless.

        Returns:
            Tasks spawned by this call
        """
        if self._is_processing or not self._groups:
            return []

        self._is_processing = True
        spawned = []
        try:
            for group in list(self._groups.values()):
                if group.translated_text is None and group.mark_dispatched():
                    task = asyncio.create_task(self.translate_group(group))
                    self._inflight.add(task)
                    task.add_done_callback(self._inflight.discard)
                    spawned.append(task)
        finally:
            self._is_processing = False

        if spawned:
            logger.debug(f"Dispatched {len(spawned)} groups")
        return spawned

    async def translate_group(self, group: Group) -> None:
        """Translate one group through cache, queue and provider"""
        if group.translated_text is not None:
            return

        combined_text = group.combined_text

        cached = self.cache.get(combined_text)
        if cached:
            self._cache_hits += 1
            group.translated_text = cached
            self._apply_translation_to_group(group, cached)
            return

        self._cache_misses += 1
        try:
            result = await self.queue.submit(
                lambda: self._call_provider(group),
                group.size,
            )
        except (ProviderError, QueueClearedError) as e:
            self._error_counts[e.category.value] += 1
            logger.warning(f"Group {group.group_id} left untranslated: {e}")
            self._resolve_with_original(group)
            return

        if result and result != combined_text:
            self.cache.set(combined_text, result)
            group.translated_text = result
            self._apply_translation_to_group(group, result)
        else:
            logger.debug(f"Group {group.group_id} needs no translation")
            self._resolve_with_original(group)

    async def _call_provider(self, group: Group) -> str:
        """Provider call raced against the timeout; the call is cancelled if it loses"""
        timeout = self.settings.provider_timeout_sec
        try:
            if self.provider.supports_segments:
                segments = await asyncio.wait_for(
                    self.provider.translate_segments(self.context, group.texts()),
                    timeout=timeout,
                )
                return self.separator.join(segments)

            return await asyncio.wait_for(
                self.provider.translate(self.context, group.combined_text),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            raise ProviderTimeout(timeout) from e
        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError(f"{type(e).__name__}: {e}") from e

    # ------------------------------------------------------------------
    # Result mapping
    # ------------------------------------------------------------------

    def _apply_translation_to_group(self, group: Group, translated_text: str) -> None:
        segments = split_translated_text(
            group.combined_text,
            translated_text,
            self.separator,
            len(group.fragments),
        )
        if len(segments) != len(group.fragments):
            self._error_counts[ErrorCategory.SEGMENT_MISMATCH.value] += 1

        for fragment, segment in map_segments(group.fragments, segments):
            self._apply_translation_to_fragment(fragment, segment)
            fragment.resolved = True

        self._finish(group)

    def _apply_translation_to_fragment(self, fragment: TextFragment, translated_text: str) -> None:
        if not translated_text or translated_text == fragment.text:
            return
        try:
            self.renderer.apply(fragment, translated_text)
            self._fragments_applied += 1
        except Exception:
            self._error_counts[ErrorCategory.RENDER_ERROR.value] += 1
            logger.exception(f"Renderer failed for fragment {fragment.fragment_id}")

    def _resolve_with_original(self, group: Group) -> None:
        group.translated_text = group.combined_text
        for fragment in group.fragments:
            fragment.resolved = True
        self._finish(group)

    def _finish(self, group: Group) -> None:
        if group.mark_done():
            self._groups_completed += 1
        self._groups.pop(group.group_id, None)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """
        Drop every group and reset processing state

        Provider calls already dispatched are not recalled; their groups
        finish against a group set that no longer contains them.
        """
        self._groups.clear()
        self._is_processing = False

    async def wait_idle(self) -> None:
        """Wait for every dispatched group to reach DONE"""
        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def groups(self) -> List[Group]:
        return list(self._groups.values())

    def get_statistics(self) -> dict:
        by_status = defaultdict(int)
        fragment_count = 0
        for group in self._groups.values():
            by_status[group.status.value] += 1
            fragment_count += len(group.fragments)

        return {
            'open_groups': by_status[GroupStatus.OPEN.value],
            'dispatched_groups': by_status[GroupStatus.DISPATCHED.value],
            'completed_groups': self._groups_completed,
            'live_fragments': fragment_count,
            'fragments_applied': self._fragments_applied,
            'cache_hits': self._cache_hits,
            'cache_misses': self._cache_misses,
            'error_counts': dict(self._error_counts),
        }
