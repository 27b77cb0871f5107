"""Test fixtures for DazzleDiff consumers.

These helpers build directory trees from plain dicts and observe the I/O a
comparison performs, so watcher code can be tested against real files
without reaching into comparator internals.
"""

import os
from pathlib import Path
from typing import Any, BinaryIO, Dict, Set, Tuple, Union

from ..aio.core import AsyncEntryAdapter, EntryKind, EntrySet

TreeSpec = Dict[str, Any]


def build_tree(root: Union[str, Path], spec: TreeSpec) -> Path:
    """Create a directory tree described by a nested dict.

    Values decide what each name becomes:
    - ``dict``: a subdirectory with that content
    - ``str``: a UTF-8 text file
    - ``bytes``: a binary file
    - ``('symlink', target)``: a symlink pointing at ``target``

    Example:
        build_tree(tmp_path / 'dir_one', {
            'vlang': {'purpose': {'purpose.txt': 'hello'}},
            'README.md': 'Hello world',
        })

    Args:
        root: Directory to create (parents are created as needed)
        spec: Tree description

    Returns:
        The root as a Path
    """
    root = Path(root)
    root.mkdir(parents=True, exist_ok=True)
    for name, value in spec.items():
        target = root / name
        if isinstance(value, dict):
            build_tree(target, value)
        elif isinstance(value, bytes):
            target.write_bytes(value)
        elif isinstance(value, str):
            target.write_text(value, encoding='utf-8')
        elif isinstance(value, tuple) and len(value) == 2 and value[0] == 'symlink':
            os.symlink(value[1], target)
        else:
            raise ValueError(f"Unsupported tree spec for {name!r}: {value!r}")
    return root


class ReadCountingAdapter(AsyncEntryAdapter):
    """Adapter that records the I/O performed through another adapter.

    Wrap it around an AsyncFileSystemAdapter to assert how much a comparison
    actually read, which directories it listed, and that it closed every
    handle it opened.

    Example:
        counting = ReadCountingAdapter(AsyncFileSystemAdapter())
        await file_diff(request, adapter=counting)
        assert counting.bytes_read == 0
    """

    def __init__(self, base_adapter: AsyncEntryAdapter):
        """Initialize with the adapter that performs the real I/O.

        Args:
            base_adapter: Adapter to delegate to
        """
        self.base_adapter = base_adapter
        super().__init__(base_adapter.max_concurrent)
        self.bytes_read = 0
        self.reads = 0
        self.listed: Set[str] = set()
        self.opened: Set[str] = set()
        self.open_handles: Set[int] = set()

    async def list_entries(self, path: str) -> EntrySet:
        self.listed.add(path)
        return await self.base_adapter.list_entries(path)

    async def stat_entry(self, path: str, follow_symlinks: bool = False) -> Tuple[EntryKind, int]:
        return await self.base_adapter.stat_entry(path, follow_symlinks=follow_symlinks)

    async def open_file(self, path: str) -> BinaryIO:
        handle = await self.base_adapter.open_file(path)
        self.opened.add(path)
        self.open_handles.add(id(handle))
        return handle

    async def read_chunk(self, handle: BinaryIO, size: int) -> bytes:
        data = await self.base_adapter.read_chunk(handle, size)
        self.reads += 1
        self.bytes_read += len(data)
        return data

    async def close_file(self, handle: BinaryIO) -> None:
        self.open_handles.discard(id(handle))
        await self.base_adapter.close_file(handle)

    async def get_stats(self) -> dict:
        stats = await self.base_adapter.get_stats()
        stats.update({
            'reads': self.reads,
            'bytes_counted': self.bytes_read,
            'open_handles': len(self.open_handles),
        })
        return stats
