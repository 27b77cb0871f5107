"""Byte-level comparison of two files.

Sizes are checked first; content is only read when the sizes agree, and
reading stops at the first chunk that differs.
"""

import asyncio
import logging
from typing import Any, BinaryIO, List, Tuple

from ...config import DEFAULT_CHUNK_SIZE
from ...errors import IOReadError, PathIsDirectoryError
from ..core import ComparisonOutcome, EntryKind

_log = logging.getLogger(__name__)

_log_debug = _log.debug


def _close_when_opened(task: asyncio.Task) -> None:
    """Done-callback closing a handle whose opener was abandoned."""
    if not task.cancelled() and task.exception() is None:
        task.result().close()


class FileComparator:
    """Compare two files for identical length and content.

    Example:
        comparator = FileComparator(adapter, chunk_size=64 * 1024)
        outcome = await comparator.compare('a.txt', 'b.txt')
    """

    def __init__(self, adapter: Any, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """Initialize file comparator.

        Args:
            adapter: Entry adapter (normally wrapped in ErrorTranslatingAdapter)
            chunk_size: Bytes read from each file per step
        """
        self.adapter = adapter
        self.chunk_size = chunk_size

    async def compare(self, path: str, path_comp: str) -> ComparisonOutcome:
        """Compare two files given only their paths.

        Symlinks at either path are followed. Both paths are stat'ed
        concurrently; differing sizes settle the result without opening
        either file.

        Args:
            path: First file
            path_comp: Second file

        Returns:
            ComparisonOutcome.EQUAL or ComparisonOutcome.DIFFERENT

        Raises:
            PathNotFoundError: Either path does not exist
            PathIsDirectoryError: Either path is a directory
            IOReadError: Either path is not a regular file, or reading failed
        """
        (kind, size), (kind_comp, size_comp) = await asyncio.gather(
            self.adapter.stat_entry(path, follow_symlinks=True),
            self.adapter.stat_entry(path_comp, follow_symlinks=True),
        )
        self._check_kind(path, kind)
        self._check_kind(path_comp, kind_comp)

        if size != size_comp:
            _log_debug("Size mismatch (%d != %d): %s vs %s", size, size_comp, path, path_comp)
            return ComparisonOutcome.DIFFERENT

        return await self.compare_contents(path, path_comp)

    async def compare_contents(self, path: str, path_comp: str) -> ComparisonOutcome:
        """Compare file contents chunk by chunk.

        Callers that already know the sizes are equal (the tree comparator
        gets them from the listing) go straight here.

        Args:
            path: First file
            path_comp: Second file

        Returns:
            ComparisonOutcome.EQUAL or ComparisonOutcome.DIFFERENT
        """
        handle, handle_comp = await self._open_pair(path, path_comp)
        try:
            # Adapters may return short reads, so each side keeps the bytes
            # not yet matched against the other side
            pending, pending_comp = b'', b''
            eof = eof_comp = False
            offset = 0
            while True:
                reads = []
                if not pending and not eof:
                    reads.append(self.adapter.read_chunk(handle, self.chunk_size))
                if not pending_comp and not eof_comp:
                    reads.append(self.adapter.read_chunk(handle_comp, self.chunk_size))
                chunks = list(await asyncio.gather(*reads))

                if not pending and not eof:
                    pending = chunks.pop(0)
                    eof = not pending
                if not pending_comp and not eof_comp:
                    pending_comp = chunks.pop(0)
                    eof_comp = not pending_comp

                common = min(len(pending), len(pending_comp))
                if pending[:common] != pending_comp[:common]:
                    _log_debug("Content mismatch in chunk at offset %d: %s vs %s",
                               offset, path, path_comp)
                    return ComparisonOutcome.DIFFERENT
                pending, pending_comp = pending[common:], pending_comp[common:]
                offset += common

                if (eof and pending_comp) or (eof_comp and pending):
                    _log_debug("Length mismatch at offset %d: %s vs %s", offset, path, path_comp)
                    return ComparisonOutcome.DIFFERENT
                if eof and eof_comp:
                    return ComparisonOutcome.EQUAL
        finally:
            await asyncio.gather(
                self.adapter.close_file(handle),
                self.adapter.close_file(handle_comp),
                return_exceptions=True,
            )

    async def _open_pair(self, path: str, path_comp: str) -> Tuple[BinaryIO, BinaryIO]:
        """Open both files concurrently.

        If either open fails, or this task is cancelled while the opens are
        in flight, every handle that did get opened is closed.
        """
        tasks = [
            asyncio.ensure_future(self.adapter.open_file(path)),
            asyncio.ensure_future(self.adapter.open_file(path_comp)),
        ]
        try:
            await asyncio.wait(tasks)
        except asyncio.CancelledError:
            # The opens finish in their worker threads regardless
            for task in tasks:
                task.add_done_callback(_close_when_opened)
            raise

        errors: List[BaseException] = [task.exception() for task in tasks if task.exception() is not None]
        if errors:
            for task in tasks:
                if task.exception() is None:
                    await self.adapter.close_file(task.result())
            raise errors[0]

        return tasks[0].result(), tasks[1].result()

    @staticmethod
    def _check_kind(path: str, kind: EntryKind) -> None:
        if kind is EntryKind.DIRECTORY:
            raise PathIsDirectoryError(f"Is a directory: '{path}'", path=path)
        if kind is not EntryKind.FILE:
            raise IOReadError(f"Not a regular file: '{path}'", path=path)
