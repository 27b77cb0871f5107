"""DazzleDiff - Async Directory Tree Comparison.

DazzleDiff answers a single question for file-watching services: do these
two directory trees (or these two files) differ? Comparisons run on asyncio
with non-blocking I/O and stop at the first difference.

    from dazzlediff import dir_diff, file_diff, FileDiffRequest

    changed = await dir_diff('src', 'snapshot')
    changed = await file_diff(FileDiffRequest('a.txt', 'b.txt'))

Failures are raised as DiffError subclasses, never reported as a difference.
"""

import logging

__version__ = "0.1.0"

from .aio import FileDiffRequest, dir_diff, file_diff
from .config import DiffConfig, ExcludeConfig, PerformanceConfig
from .errors import (
    DiffError,
    IOReadError,
    PathIsDirectoryError,
    PathNotDirectoryError,
    PathNotFoundError,
    PermissionDeniedError,
    TaskFailureError,
)
from . import aio

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "aio",
    # API
    "dir_diff",
    "file_diff",
    "FileDiffRequest",
    # Configuration
    "DiffConfig",
    "ExcludeConfig",
    "PerformanceConfig",
    # Errors
    "DiffError",
    "PathNotFoundError",
    "PermissionDeniedError",
    "PathNotDirectoryError",
    "PathIsDirectoryError",
    "IOReadError",
    "TaskFailureError",
]
