"""
Status Monitor

Samples the queue's extended status at a fixed interval and hands each
snapshot to registered callbacks (progress bars, UI bridges, loggers).
"""

import asyncio
import inspect
from typing import Any, Callable, List, Optional

from config.logging_config import get_logger
from .translate_queue import ExtendedQueueStatus, TranslationQueue

logger = get_logger(__name__)

StatusCallback = Callable[[ExtendedQueueStatus], Any]


class StatusMonitor:
    """
    Periodic poller for ExtendedQueueStatus

    Usage:
        monitor = StatusMonitor(queue, interval_sec=0.5)
        monitor.add_callback(lambda status: print(status.progress_percentage))
        monitor.start()
        ...
        await monitor.stop()
    """

    def __init__(self, queue: TranslationQueue, interval_sec: float = 0.5):
        self.queue = queue
        self.interval_sec = interval_sec
        self._callbacks: List[StatusCallback] = []
        self._stop_event: Optional[asyncio.Event] = None
        self._task: Optional[asyncio.Task] = None
        self.last_status: Optional[ExtendedQueueStatus] = None

    def add_callback(self, callback: StatusCallback) -> None:
        self._callbacks.append(callback)

    def remove_callback(self, callback: StatusCallback) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def sample(self) -> ExtendedQueueStatus:
        """Take one snapshot and notify callbacks"""
        status = self.queue.extended_status()
        self.last_status = status

        for callback in list(self._callbacks):
            try:
                result = callback(status)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.warning(f"Status callback failed: {e}")
        return status

    async def _loop(self) -> None:
        while not self._stop_event.is_set():
            await self.sample()
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self.interval_sec)
            except asyncio.TimeoutError:
                pass

    def start(self) -> None:
        """Start polling on the running event loop"""
        if self.is_running:
            return
        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._loop())

    async def stop(self) -> None:
        """Stop polling and take a final snapshot"""
        if not self.is_running:
            return
        self._stop_event.set()
        await self._task
        self._task = None
        await self.sample()
