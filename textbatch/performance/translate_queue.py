"""
Translation Queue Module

Bounded-concurrency admission for provider calls: work starts at once while
fewer than ``max_concurrent_translations`` calls are in flight, otherwise it
waits in a FIFO list and is promoted as soon as a slot frees up.
"""

import asyncio
import uuid
from collections import deque
from dataclasses import dataclass, asdict
from typing import Any, Awaitable, Callable, Deque, Dict, Optional, Set

from config.constants import QUEUE_BACKPRESSURE_FACTOR
from config.logging_config import get_logger
from ..errors import QueueClearedError
from .speed_stats import TranslationStatsManager

logger = get_logger(__name__)

Work = Callable[[], Awaitable[Any]]


@dataclass
class QueueStatus:
    """Snapshot of admission state"""
    active: int
    pending: int
    ceiling: int
    full: bool
    total_tasks_in_process: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ExtendedQueueStatus(QueueStatus):
    """Admission state plus character progress and ETA"""
    total_characters: int = 0
    completed_characters: int = 0
    remaining_characters: int = 0
    progress_percentage: float = 0.0
    estimated_remaining_time_seconds: int = 0
    average_speed: int = 0


@dataclass
class QueuedTask:
    """
    A unit of work waiting for, or holding, a concurrency slot

    Attributes:
        task_id: Identifier shared with the stats tracker
        work: Zero-argument coroutine function
        size: Character count, used only for stats
        future: Resolved with the work's result or exception
    """
    task_id: str
    work: Work
    size: int
    future: asyncio.Future


class TranslationQueue:
    """
    FIFO queue with a live concurrency ceiling

    The ceiling is read from ``settings.max_concurrent_translations`` on
    every admission decision, so changing it on the settings object takes
    effect for the next admission. Promotion of queued work happens inside
    the completion handler of the finishing task; no slot stays idle while
    work is pending. The queue never retries: an exception raised by the
    work reaches the caller of submit().

    Example:
        queue = TranslationQueue(settings, stats)

        result = await queue.submit(lambda: provider.translate(ctx, text), len(text))

        if not queue.can_accept_more():
            ...  # stop producing work for a while
    """

    def __init__(
        self,
        settings: Any,
        stats: Optional[TranslationStatsManager] = None,
    ):
        """
        Args:
            settings: Object exposing max_concurrent_translations
            stats: Optional speed tracker notified of every admitted task
        """
        self.settings = settings
        self.stats = stats

        self._active = 0
        self._pending: Deque[QueuedTask] = deque()
        self._running: Set[asyncio.Task] = set()

        # Character accounting for progress/ETA
        self._total_characters = 0
        self._completed_characters = 0

    @property
    def max_concurrent(self) -> int:
        return self.settings.max_concurrent_translations

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def enqueue(self, work: Work, size: int = 0, task_id: Optional[str] = None) -> asyncio.Future:
        """
        Admit or queue work without waiting for it

        Must be called from a running event loop.

        Returns:
            Future resolved with the work's result or exception
        """
        loop = asyncio.get_running_loop()
        entry = QueuedTask(
            task_id=task_id or f"task-{uuid.uuid4().hex}",
            work=work,
            size=size,
            future=loop.create_future(),
        )
        self._total_characters += size

        if not self._pending and self._active < self.max_concurrent:
            self._admit(entry)
        else:
            self._pending.append(entry)
            logger.debug(
                f"Queued {entry.task_id} ({size} chars), "
                f"{len(self._pending)} pending"
            )
            # Ceiling may have been raised since the last completion
            self._process_queue()
        return entry.future

    async def submit(self, work: Work, size: int = 0, task_id: Optional[str] = None) -> Any:
        """Run work under the concurrency ceiling and return its result"""
        return await self.enqueue(work, size, task_id)

    def _admit(self, entry: QueuedTask) -> None:
        self._active += 1
        if self.stats:
            self.stats.start(entry.task_id, entry.size)

        task = asyncio.create_task(self._run(entry))
        self._running.add(task)
        task.add_done_callback(self._running.discard)

    async def _run(self, entry: QueuedTask) -> None:
        try:
            result = await entry.work()
        except Exception as e:
            if self.stats:
                self.stats.complete(entry.task_id)
            if not entry.future.done():
                entry.future.set_exception(e)
        except asyncio.CancelledError:
            if self.stats:
                self.stats.complete(entry.task_id)
            if not entry.future.done():
                entry.future.cancel()
            raise
        else:
            if self.stats:
                self.stats.complete(entry.task_id)
            self._completed_characters += entry.size
            if not entry.future.done():
                entry.future.set_result(result)
        finally:
            self._active -= 1
            self._process_queue()

    def _process_queue(self) -> None:
        """Promote queued work while there is a free slot"""
        while self._pending and self._active < self.max_concurrent:
            entry = self._pending.popleft()
            if entry.future.done():
                # Caller gave up waiting before the work started
                continue
            self._admit(entry)

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------

    def clear_pending(self) -> int:
        """
        Discard all queued work that has not started

        Active work is left to finish. Callers waiting on discarded work
        receive QueueClearedError.

        Returns:
            Number of discarded entries
        """
        discarded = 0
        while self._pending:
            entry = self._pending.popleft()
            if not entry.future.done():
                entry.future.set_exception(
                    QueueClearedError(f"{entry.task_id} discarded before it started")
                )
                # Mark retrieved so an unawaited future does not log noise
                entry.future.exception()
            discarded += 1

        if discarded:
            logger.info(f"Cleared {discarded} pending translation tasks")
        return discarded

    def can_accept_more(self) -> bool:
        """False once the pending list reaches 3x the ceiling (back-pressure)"""
        return len(self._pending) < self.max_concurrent * QUEUE_BACKPRESSURE_FACTOR

    def reset_stats(self) -> None:
        """Zero character counters and reset the speed tracker"""
        self._total_characters = 0
        self._completed_characters = 0
        if self.stats:
            self.stats.reset()

    async def join(self) -> None:
        """Wait until no work is active or pending"""
        while self._running or self._pending:
            if self._running:
                await asyncio.gather(*list(self._running), return_exceptions=True)
            else:
                await asyncio.sleep(0)

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    @property
    def active_count(self) -> int:
        return self._active

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def status(self) -> QueueStatus:
        ceiling = self.max_concurrent
        return QueueStatus(
            active=self._active,
            pending=len(self._pending),
            ceiling=ceiling,
            full=self._active >= ceiling,
            total_tasks_in_process=self._active + len(self._pending),
        )

    def extended_status(self) -> ExtendedQueueStatus:
        base = self.status()
        remaining = self._total_characters - self._completed_characters

        if self.stats:
            progress = self.stats.overall_progress(
                self._completed_characters, self._total_characters
            )
            eta = self.stats.remaining_time(remaining)
            speed = self.stats.average_speed()
        else:
            progress = TranslationStatsManager.overall_progress(
                self._completed_characters, self._total_characters
            )
            eta = 0
            speed = 0

        return ExtendedQueueStatus(
            **asdict(base),
            total_characters=self._total_characters,
            completed_characters=self._completed_characters,
            remaining_characters=remaining,
            progress_percentage=progress,
            estimated_remaining_time_seconds=eta,
            average_speed=speed,
        )

    def get_statistics(self) -> Dict[str, Any]:
        return self.extended_status().to_dict()
