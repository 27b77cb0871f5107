"""Directory entry data model.

Entries are produced transiently by an adapter's listing call and dropped
as soon as the pairing step that needed them is done.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple


class EntryKind(Enum):
    """What a directory entry is, determined without following symlinks."""
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"      # FIFOs, sockets, device nodes

    @property
    def has_content(self) -> bool:
        """Whether entries of this kind are compared beyond name and kind."""
        return self in (EntryKind.FILE, EntryKind.DIRECTORY)


class ComparisonOutcome(Enum):
    """Result of comparing one pair of files or directories.

    Failures are not an outcome: they are raised as DiffError.
    """
    EQUAL = "equal"
    DIFFERENT = "different"

    @property
    def is_different(self) -> bool:
        return self is ComparisonOutcome.DIFFERENT


@dataclass(frozen=True)
class Entry:
    """One child of a listed directory."""

    name: str
    kind: EntryKind
    size: int = 0

    def matches(self, other: 'Entry') -> bool:
        """Check structural equivalence with the paired entry.

        Names and kinds must agree. For files the sizes must too, which
        settles most content differences without reading anything.

        Args:
            other: Entry at the same sorted position on the other side

        Returns:
            True if the pair still needs (or needs no) deeper comparison
        """
        if self.name != other.name or self.kind is not other.kind:
            return False
        if self.kind is EntryKind.FILE and self.size != other.size:
            return False
        return True


EntrySet = Tuple[Entry, ...]


def sort_entries(entries: Iterable[Entry]) -> EntrySet:
    """Sort entries by name so pairing is independent of listing order."""
    return tuple(sorted(entries, key=lambda entry: entry.name))
