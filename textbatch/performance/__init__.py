"""
Scheduling and Throughput Module

- Bounded-concurrency FIFO translation queue with back-pressure
- Speed statistics with persisted history, ETA and progress
- Periodic status monitor
"""

from .speed_stats import (
    TranslationStatsManager,
    TranslationSpeedStats,
    TranslationTaskInfo,
    SpeedHistory,
)
from .translate_queue import TranslationQueue, QueueStatus, ExtendedQueueStatus, QueuedTask
from .status_monitor import StatusMonitor

__all__ = [
    # Speed statistics
    'TranslationStatsManager',
    'TranslationSpeedStats',
    'TranslationTaskInfo',
    'SpeedHistory',
    # Queue
    'TranslationQueue',
    'QueueStatus',
    'ExtendedQueueStatus',
    'QueuedTask',
    # Monitoring
    'StatusMonitor',
]
