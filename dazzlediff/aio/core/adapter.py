"""Async entry adapter abstraction.

Defines how comparators reach the data they compare. The comparators never
touch the filesystem directly; everything goes through an adapter so the
I/O can be bounded, instrumented or wrapped for error translation.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import BinaryIO, Set, Tuple

from .entry import EntryKind, EntrySet


class AsyncEntryAdapter(ABC):
    """Abstract base class for async entry adapters.

    Adapters provide directory listings, single-path stat and chunked
    reads. All of them are coroutines so each call is a suspension point.
    """

    def __init__(self, max_concurrent: int = 100):
        """Initialize adapter with concurrency control.

        Args:
            max_concurrent: Maximum concurrent I/O operations
        """
        self.max_concurrent = max_concurrent
        self.semaphore = asyncio.Semaphore(max_concurrent)
        self._capabilities = self._define_capabilities()

    @abstractmethod
    async def list_entries(self, path: str) -> EntrySet:
        """List the immediate children of a directory.

        Args:
            path: Directory to list

        Returns:
            Entries sorted by name
        """
        pass

    @abstractmethod
    async def stat_entry(self, path: str, follow_symlinks: bool = False) -> Tuple[EntryKind, int]:
        """Get kind and size of a single path.

        Args:
            path: Path to inspect
            follow_symlinks: Resolve a symlink at ``path`` itself (used for roots)

        Returns:
            Tuple of (EntryKind, size)
        """
        pass

    @abstractmethod
    async def open_file(self, path: str) -> BinaryIO:
        """Open a file for binary reading.

        Args:
            path: File to open

        Returns:
            Binary file object; the caller must pass it to close_file
        """
        pass

    @abstractmethod
    async def read_chunk(self, handle: BinaryIO, size: int) -> bytes:
        """Read up to ``size`` bytes from an open file.

        Args:
            handle: Object returned by open_file
            size: Maximum number of bytes to read

        Returns:
            The bytes read; may be fewer than ``size`` before end of file,
            empty only at end of file
        """
        pass

    async def close_file(self, handle: BinaryIO) -> None:
        """Close a handle returned by open_file."""
        handle.close()

    async def get_kind(self, path: str, follow_symlinks: bool = False) -> EntryKind:
        """Get the kind of a single path."""
        kind, _ = await self.stat_entry(path, follow_symlinks=follow_symlinks)
        return kind

    def supports_capability(self, capability: str) -> bool:
        """Check if adapter supports a specific capability.

        Args:
            capability: Capability name

        Returns:
            True if capability is supported
        """
        return capability in self._capabilities

    def _define_capabilities(self) -> Set[str]:
        """Define adapter capabilities.

        Override in subclasses to declare supported features.
        """
        return {
            'list_entries',
            'stat_entry',
            'chunked_read',
        }

    async def get_stats(self) -> dict:
        """Get adapter statistics.

        Returns:
            Dictionary of statistics (I/O count, permits, etc.)
        """
        return {
            'max_concurrent': self.max_concurrent,
            'available_permits': self.semaphore._value if hasattr(self.semaphore, '_value') else None,
        }

    async def close(self):
        """Clean up adapter resources.

        Override if adapter needs cleanup.
        """
        pass

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
