"""
Unit tests for textbatch/batching/models.py - TextFragment and Group
"""
import pytest

from textbatch.batching.models import Group, GroupStatus, TextFragment

SEP = " | "


class TestTextFragment:
    """Test TextFragment dataclass."""

    def test_fragment_defaults(self):
        """Test a new fragment is unresolved with a generated id."""
        fragment = TextFragment("Hello", origin="node-1")
        assert fragment.fragment_id.startswith("item-")
        assert fragment.resolved is False
        assert fragment.origin == "node-1"
        assert len(fragment) == 5

    def test_fragment_ids_unique(self):
        """Test ids are not reused."""
        assert TextFragment("a").fragment_id != TextFragment("a").fragment_id


class TestGroup:
    """Test Group dataclass."""

    def test_group_defaults(self):
        """Test a new group is open and empty."""
        group = Group(separator=SEP)
        assert group.group_id.startswith("group-")
        assert group.is_open
        assert group.size == 0
        assert group.translated_text is None

    def test_add_joins_with_separator(self):
        """Test combined_text joins fragments in insertion order."""
        group = Group(separator=SEP)
        group.add(TextFragment("one"))
        group.add(TextFragment("two"))
        assert group.combined_text == "one | two"
        assert group.texts() == ["one", "two"]

    def test_length_with(self):
        """Test projected length includes the separator only when needed."""
        group = Group(separator=SEP)
        assert group.length_with(TextFragment("abc")) == 3
        group.add(TextFragment("abc"))
        assert group.length_with(TextFragment("de")) == 3 + len(SEP) + 2

    def test_status_transitions_once(self):
        """Test OPEN -> DISPATCHED -> DONE happens exactly once."""
        group = Group(separator=SEP)
        assert group.mark_dispatched() is True
        assert group.mark_dispatched() is False
        assert group.status == GroupStatus.DISPATCHED
        assert group.mark_done() is True
        assert group.mark_done() is False
        assert group.status == GroupStatus.DONE

    def test_add_after_dispatch_raises(self):
        """Test a dispatched group rejects new fragments."""
        group = Group(separator=SEP)
        group.add(TextFragment("one"))
        group.mark_dispatched()
        with pytest.raises(ValueError):
            group.add(TextFragment("two"))
