"""Core abstractions for async tree comparison.

This module defines the entry data model and the adapter interface that
comparators use for all I/O.
"""

from .entry import (
    ComparisonOutcome,
    Entry,
    EntryKind,
    EntrySet,
    sort_entries,
)
from .adapter import AsyncEntryAdapter

__all__ = [
    # Data model
    'ComparisonOutcome',
    'Entry',
    'EntryKind',
    'EntrySet',
    'sort_entries',
    # Adapter
    'AsyncEntryAdapter',
]
