"""
Fragment batching

Exports:
- TextFragment, Group, GroupStatus (data model)
- BatchTranslationManager (grouping, dispatch, result mapping)
- split_translated_text, map_segments (result splitter)
"""

from .models import TextFragment, Group, GroupStatus
from .result_splitter import split_translated_text, split_strict, map_segments
from .batcher import BatchTranslationManager

__all__ = [
    'TextFragment',
    'Group',
    'GroupStatus',
    'split_translated_text',
    'split_strict',
    'map_segments',
    'BatchTranslationManager',
]
