"""
textbatch - batched, rate-limited fragment translation

Collects small text fragments, merges them into size-bounded groups and
sends the groups to a translation provider through a bounded-concurrency
FIFO queue, while tracking throughput for a persisted ETA.
"""

from .errors import (
    TextBatchError,
    ProviderError,
    ProviderTimeout,
    SegmentMismatch,
    PersistenceError,
    QueueClearedError,
    ErrorCategory,
)
from .batching import BatchTranslationManager, TextFragment, Group, GroupStatus
from .performance import TranslationQueue, TranslationStatsManager, StatusMonitor
from .session import TranslationSession

__all__ = [
    'TextBatchError',
    'ProviderError',
    'ProviderTimeout',
    'SegmentMismatch',
    'PersistenceError',
    'QueueClearedError',
    'ErrorCategory',
    'BatchTranslationManager',
    'TextFragment',
    'Group',
    'GroupStatus',
    'TranslationQueue',
    'TranslationStatsManager',
    'StatusMonitor',
    'TranslationSession',
]

__version__ = '1.0.0'
