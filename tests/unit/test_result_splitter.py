"""
Unit tests for textbatch/batching/result_splitter.py
"""
import pytest

from textbatch.batching.models import TextFragment
from textbatch.batching.result_splitter import (
    map_segments,
    split_strict,
    split_translated_text,
)
from textbatch.errors import SegmentMismatch

SEP = "\n\n=====\n\n"


class TestSplitStrict:
    """Test exact segment splitting."""

    def test_matching_count(self):
        """Test segments come back in order when counts match."""
        assert split_strict("a" + SEP + "b", SEP, 2) == ["a", "b"]

    def test_mismatch_raises(self):
        """Test a merged separator raises SegmentMismatch."""
        with pytest.raises(SegmentMismatch) as exc_info:
            split_strict("a b", SEP, 2)
        assert exc_info.value.expected == 2
        assert exc_info.value.actual == 1


class TestSplitTranslatedText:
    """Test the lenient splitter used by the batcher."""

    def test_round_trip(self):
        """Test three fragments map to three segments."""
        segments = split_translated_text(
            "one" + SEP + "two" + SEP + "three",
            "uno" + SEP + "dos" + SEP + "tres",
            SEP,
            3,
        )
        assert segments == ["uno", "dos", "tres"]

    def test_fewer_segments_fall_back_to_whole_text(self):
        """Test a dropped separator yields the whole translation."""
        translated = "uno" + SEP + "dos tres"
        segments = split_translated_text("one" + SEP + "two" + SEP + "three", translated, SEP, 3)
        assert segments == [translated]

    def test_extra_segments_fall_back_to_whole_text(self):
        """Test an added separator yields the whole translation."""
        translated = "u" + SEP + "n" + SEP + "o"
        assert split_translated_text("one", translated, SEP, 1) == [translated]

    def test_single_fragment(self):
        """Test a one-fragment group needs no separator."""
        assert split_translated_text("one", "uno", SEP, 1) == ["uno"]


class TestMapSegments:
    """Test pairing fragments with segments."""

    def test_pairs_by_index(self):
        """Test fragment i receives segment i."""
        fragments = [TextFragment("one", 0), TextFragment("two", 1)]
        pairs = map_segments(fragments, ["uno", "dos"])
        assert [(f.origin, s) for f, s in pairs] == [(0, "uno"), (1, "dos")]

    def test_missing_segments_leave_fragments_out(self):
        """Test fragments past the last segment get nothing."""
        fragments = [TextFragment("one", 0), TextFragment("two", 1), TextFragment("three", 2)]
        pairs = map_segments(fragments, ["whole"])
        assert [(f.origin, s) for f, s in pairs] == [(0, "whole")]
