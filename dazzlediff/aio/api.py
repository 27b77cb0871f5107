"""High-level async API for DazzleDiff.

Two operations answer "did anything change?" for a watcher or poll loop:

    >>> changed = await dir_diff('site/src', 'site/.last-build')
    >>> changed = await file_diff(FileDiffRequest('a.conf', 'a.conf.bak'))

Both return True when the inputs differ and raise a DiffError subclass when
the comparison cannot be completed. Neither keeps state between calls, so
any number of them may run concurrently.
"""

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

from ..config import DiffConfig
from ..errors import PathNotDirectoryError
from .adapters import AsyncFileSystemAdapter
from .comparators import FileComparator, TreeComparator
from .core import EntryKind
from .error_handling import with_error_translation

_log = logging.getLogger(__name__)

_log_debug = _log.debug

PathArg = Union[str, os.PathLike]


@dataclass(frozen=True)
class FileDiffRequest:
    """Two files to compare.

    Attributes:
        file: File to compare
        file_comp: File to compare it with
    """
    file: PathArg
    file_comp: PathArg


def _resolve_config(config: Optional[DiffConfig]) -> DiffConfig:
    config = config or DiffConfig()
    errors = config.validate()
    if errors:
        raise ValueError(f"Invalid diff configuration: {'; '.join(errors)}")
    return config


def _make_adapter(adapter: Optional[Any], config: DiffConfig) -> Any:
    if adapter is None:
        adapter = AsyncFileSystemAdapter(max_concurrent=config.performance.max_concurrent)
    return with_error_translation(adapter)


async def dir_diff(
    path: PathArg,
    path_comp: PathArg,
    *,
    excluding: Optional[Iterable[str]] = None,
    recursive_excluding: bool = False,
    config: Optional[DiffConfig] = None,
    adapter: Optional[Any] = None
) -> bool:
    """Compare two directory trees.

    Trees are equal when they hold the same names with the same kinds at
    the same nesting and every paired file has identical content.
    Symlinks are compared by name only and never followed below the roots.

    Args:
        path: Directory to compare
        path_comp: Directory to compare it with
        excluding: Entry names or glob patterns to leave out of the comparison
            (overrides ``config.exclude`` when given)
        recursive_excluding: Apply ``excluding`` at every depth instead of
            only to the roots' immediate children
        config: Comparison configuration
        adapter: Custom entry adapter (creates AsyncFileSystemAdapter if None)

    Returns:
        True if the trees differ, False if they are identical

    Raises:
        PathNotFoundError: A path does not exist
        PermissionDeniedError: A directory or file could not be read
        PathNotDirectoryError: A root is not a directory
        IOReadError: Another read failure
        TaskFailureError: A comparison task failed unexpectedly
        ValueError: The configuration is invalid

    Example:
        >>> if await dir_diff('templates', snapshot_dir, excluding=['.git']):
        ...     await rebuild()
    """
    config = _resolve_config((config or DiffConfig()).with_exclusions(excluding, recursive_excluding))
    path, path_comp = os.fspath(path), os.fspath(path_comp)
    adapter = _make_adapter(adapter, config)

    kinds = await asyncio.gather(
        adapter.get_kind(path, follow_symlinks=True),
        adapter.get_kind(path_comp, follow_symlinks=True),
    )
    for root, kind in zip((path, path_comp), kinds):
        if kind is not EntryKind.DIRECTORY:
            raise PathNotDirectoryError(f"Not a directory: '{root}'", path=root)

    comparator = TreeComparator(
        adapter,
        FileComparator(adapter, chunk_size=config.performance.chunk_size),
        exclude=config.exclude,
        max_tasks=config.performance.max_concurrent,
    )
    outcome = await comparator.compare(path, path_comp)
    _log_debug("dir_diff(%s, %s) -> %s", path, path_comp, outcome.value)
    return outcome.is_different


async def file_diff(
    request: FileDiffRequest,
    *,
    config: Optional[DiffConfig] = None,
    adapter: Optional[Any] = None
) -> bool:
    """Compare two files byte for byte.

    Args:
        request: The two files to compare
        config: Comparison configuration (only performance settings apply)
        adapter: Custom entry adapter (creates AsyncFileSystemAdapter if None)

    Returns:
        True if the files differ, False if they are identical

    Raises:
        PathNotFoundError: A file does not exist
        PathIsDirectoryError: A path is a directory
        PermissionDeniedError: A file could not be opened
        IOReadError: A path is not a regular file, or reading failed
        ValueError: The configuration is invalid

    Example:
        >>> await file_diff(FileDiffRequest('dir_one/a.txt', 'dir_two/a.txt'))
        False
    """
    config = _resolve_config(config)
    path, path_comp = os.fspath(request.file), os.fspath(request.file_comp)
    adapter = _make_adapter(adapter, config)

    comparator = FileComparator(adapter, chunk_size=config.performance.chunk_size)
    outcome = await comparator.compare(path, path_comp)
    _log_debug("file_diff(%s, %s) -> %s", path, path_comp, outcome.value)
    return outcome.is_different
