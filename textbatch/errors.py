#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Error taxonomy for textbatch.

None of these errors is fatal to callers of the batching pipeline: each one
is recovered where it is raised or one level up, and degrades the affected
text to "left untranslated".
"""

from enum import Enum


class ErrorCategory(Enum):
    """Error categories used for counters and log records."""
    PROVIDER_ERROR = "provider_error"        # provider call rejected
    PROVIDER_TIMEOUT = "provider_timeout"    # timeout race lost
    SEGMENT_MISMATCH = "segment_mismatch"    # split counts disagree
    PERSISTENCE_ERROR = "persistence_error"  # load/save of speed history
    QUEUE_CLEARED = "queue_cleared"          # pending work discarded
    RENDER_ERROR = "render_error"            # renderer raised


class TextBatchError(Exception):
    """Base exception for all textbatch errors."""

    category: ErrorCategory = None


class ProviderError(TextBatchError):
    """Raised when the translation provider rejects a call."""

    category = ErrorCategory.PROVIDER_ERROR


class ProviderTimeout(ProviderError):
    """Raised when a provider call does not finish within the timeout."""

    category = ErrorCategory.PROVIDER_TIMEOUT

    def __init__(self, timeout_sec: float):
        super().__init__(f"Provider call timed out after {timeout_sec}s")
        self.timeout_sec = timeout_sec


class SegmentMismatch(TextBatchError):
    """Raised when translated segments do not line up with the fragments."""

    category = ErrorCategory.SEGMENT_MISMATCH

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Expected {expected} segments, got {actual}")
        self.expected = expected
        self.actual = actual


class PersistenceError(TextBatchError):
    """Raised when the key-value store cannot be read or written."""

    category = ErrorCategory.PERSISTENCE_ERROR


class QueueClearedError(TextBatchError):
    """Raised to callers whose queued work was discarded before it started."""

    category = ErrorCategory.QUEUE_CLEARED


class ConfigurationError(TextBatchError):
    """Raised when a component is wired with unusable settings."""
