"""Asynchronous implementation of DazzleDiff.

This package contains native async/await implementations of the file and
tree comparators. All filesystem access is non-blocking.
"""

# Core abstractions
from .core import (
    AsyncEntryAdapter,
    ComparisonOutcome,
    Entry,
    EntryKind,
    EntrySet,
)

# Adapters
from .adapters import AsyncFileSystemAdapter

# Error handling
from .error_handling import ErrorTranslatingAdapter, with_error_translation
from .error_policies import ErrorPolicy, TranslateErrorsPolicy

# Comparators
from .comparators import FileComparator, TreeComparator

# High-level API
from .api import (
    FileDiffRequest,
    dir_diff,
    file_diff,
)

__all__ = [
    # Core abstractions
    'AsyncEntryAdapter',
    'ComparisonOutcome',
    'Entry',
    'EntryKind',
    'EntrySet',
    # Adapters
    'AsyncFileSystemAdapter',
    # Error handling
    'ErrorTranslatingAdapter',
    'with_error_translation',
    'ErrorPolicy',
    'TranslateErrorsPolicy',
    # Comparators
    'FileComparator',
    'TreeComparator',
    # High-level API
    'FileDiffRequest',
    'dir_diff',
    'file_diff',
]
