"""
Core data structures for fragment batching.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


def new_fragment_id() -> str:
    return f"item-{uuid.uuid4()}"


def new_group_id() -> str:
    return f"group-{uuid.uuid4()}"


class GroupStatus(Enum):
    """Group lifecycle: OPEN -> DISPATCHED -> DONE, each step exactly once"""
    OPEN = "open"
    DISPATCHED = "dispatched"
    DONE = "done"


@dataclass
class TextFragment:
    """
    A unit of source text tied to one rendering location

    Attributes:
        fragment_id: Unique identifier
        text: Source text (stripped)
        origin: Opaque reference owned by the renderer, never mutated here
        resolved: True once the fragment needs no further translation work
    """
    text: str
    origin: Any = None
    fragment_id: str = field(default_factory=new_fragment_id)
    resolved: bool = False

    def __len__(self) -> int:
        return len(self.text)


@dataclass
class Group:
    """
    A batch of fragments translated through a single provider request

    combined_text is the fragments' texts joined with the separator, in
    insertion order; that order is what maps result segments back.
    """
    separator: str
    fragments: List[TextFragment] = field(default_factory=list)
    combined_text: str = ""
    translated_text: Optional[str] = None
    status: GroupStatus = GroupStatus.OPEN
    group_id: str = field(default_factory=new_group_id)

    @property
    def is_open(self) -> bool:
        return self.status == GroupStatus.OPEN

    @property
    def size(self) -> int:
        return len(self.combined_text)

    def length_with(self, fragment: TextFragment) -> int:
        """Combined length this group would have after appending fragment"""
        if not self.combined_text:
            return len(fragment.text)
        return len(self.combined_text) + len(self.separator) + len(fragment.text)

    def add(self, fragment: TextFragment) -> None:
        if not self.is_open:
            raise ValueError(f"Group {self.group_id} is {self.status.value}, cannot add fragments")
        self.combined_text = (
            self.combined_text + self.separator + fragment.text
            if self.combined_text else fragment.text
        )
        self.fragments.append(fragment)

    def mark_dispatched(self) -> bool:
        """OPEN -> DISPATCHED; False if the group already left OPEN"""
        if self.status != GroupStatus.OPEN:
            return False
        self.status = GroupStatus.DISPATCHED
        return True

    def mark_done(self) -> bool:
        """DISPATCHED -> DONE; False if the group is already DONE"""
        if self.status == GroupStatus.DONE:
            return False
        self.status = GroupStatus.DONE
        return True

    def texts(self) -> List[str]:
        return [fragment.text for fragment in self.fragments]
