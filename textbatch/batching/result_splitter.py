"""
Result Splitter

Maps a provider result for a whole group back onto the group's fragments.
"""

from typing import List, Tuple

from config.logging_config import get_logger
from ..errors import SegmentMismatch
from .models import TextFragment

logger = get_logger(__name__)


def split_strict(translated_text: str, separator: str, expected: int) -> List[str]:
    """
    Split translated text into exactly `expected` segments

    Raises:
        SegmentMismatch: the provider merged, dropped or added separators
    """
    segments = translated_text.split(separator)
    if len(segments) != expected:
        raise SegmentMismatch(expected, len(segments))
    return segments


def split_translated_text(
    original_text: str,
    translated_text: str,
    separator: str,
    fragment_count: int,
) -> List[str]:
    """
    Split a group translation into per-fragment segments

    When the segment count does not match the fragment count the whole
    translated text comes back as a single segment, which only the first
    fragment will receive.
    """
    try:
        return split_strict(translated_text, separator, fragment_count)
    except SegmentMismatch as e:
        original_count = len(original_text.split(separator))
        logger.warning(
            f"Segment mismatch ({e}; original had {original_count}), "
            f"applying whole translation to the first fragment"
        )
        return [translated_text]


def map_segments(
    fragments: List[TextFragment],
    segments: List[str],
) -> List[Tuple[TextFragment, str]]:
    """Pair fragment i with segment i; fragments without a segment are left out"""
    return [
        (fragment, segments[index])
        for index, fragment in enumerate(fragments)
        if index < len(segments)
    ]
