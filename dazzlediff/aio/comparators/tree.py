"""Concurrent comparison of two directory trees.

The trees are walked with an explicit work queue instead of recursion:
each unit of work compares one pair of directories or one pair of files and
may hand back further units. Units run as asyncio tasks; the first
difference or error cancels everything still outstanding.
"""

import asyncio
import logging
import os
from collections import deque
from typing import Any, Deque, List, NamedTuple, Optional, Set, Tuple

from ...config import ExcludeConfig
from ...errors import DiffError, TaskFailureError
from ..core import ComparisonOutcome, EntryKind, EntrySet
from .file import FileComparator

_log = logging.getLogger(__name__)

_log_debug = _log.debug


class WorkItem(NamedTuple):
    """A pair of paths waiting to be compared."""
    kind: EntryKind      # DIRECTORY or FILE
    path: str
    path_comp: str
    depth: int


class StepResult(NamedTuple):
    """What one unit of work found."""
    outcome: ComparisonOutcome
    children: Tuple[WorkItem, ...] = ()


_DIFFERENT = StepResult(ComparisonOutcome.DIFFERENT)
_EQUAL = StepResult(ComparisonOutcome.EQUAL)


class TreeComparator:
    """Compare two directory trees for identical structure and content.

    Structure means same names, same kinds and same nesting. Paired files
    are handed to a FileComparator; symlinks and special files are equal
    when their names and kinds are.

    Example:
        comparator = TreeComparator(adapter, FileComparator(adapter))
        outcome = await comparator.compare('build/a', 'build/b')
    """

    def __init__(
        self,
        adapter: Any,
        file_comparator: FileComparator,
        exclude: Optional[ExcludeConfig] = None,
        max_tasks: int = 100
    ):
        """Initialize tree comparator.

        Args:
            adapter: Entry adapter (normally wrapped in ErrorTranslatingAdapter)
            file_comparator: Comparator for paired regular files
            exclude: Names to leave out of both listings
            max_tasks: Maximum units of work scheduled at once; the rest wait
                in the queue
        """
        self.adapter = adapter
        self.file_comparator = file_comparator
        self.exclude = exclude or ExcludeConfig()
        self.max_tasks = max_tasks

        # Statistics
        self.tasks_started = 0
        self.tasks_cancelled = 0

    async def compare(self, path: str, path_comp: str) -> ComparisonOutcome:
        """Compare two directory trees.

        Args:
            path: First root directory
            path_comp: Second root directory

        Returns:
            ComparisonOutcome.EQUAL or ComparisonOutcome.DIFFERENT

        Raises:
            DiffError: Listing or reading failed anywhere in either tree
        """
        _log_debug("Comparing trees %s and %s", path, path_comp)

        backlog: Deque[WorkItem] = deque([WorkItem(EntryKind.DIRECTORY, path, path_comp, 0)])
        pending: Set[asyncio.Task] = set()
        done: Set[asyncio.Task] = set()
        try:
            while backlog or pending:
                while backlog and len(pending) < self.max_tasks:
                    pending.add(self._start(backlog.popleft()))

                done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                for result in self._collect(done):
                    if result.outcome.is_different:
                        _log_debug("Trees %s and %s differ", path, path_comp)
                        return ComparisonOutcome.DIFFERENT
                    backlog.extend(result.children)
        finally:
            self._discard_results(done)
            await self._cancel_all(pending)

        _log_debug("Trees %s and %s are equal", path, path_comp)
        return ComparisonOutcome.EQUAL

    def _start(self, item: WorkItem) -> asyncio.Task:
        self.tasks_started += 1
        if item.kind is EntryKind.DIRECTORY:
            return asyncio.ensure_future(self._compare_directories(item))
        return asyncio.ensure_future(self._compare_files(item))

    @classmethod
    def _collect(cls, done: Set[asyncio.Task]) -> List[StepResult]:
        """Results of a finished batch; an error anywhere in it wins over a difference."""
        return [cls._result_of(task) for task in done]

    @staticmethod
    def _result_of(task: asyncio.Task) -> StepResult:
        """Get a finished task's result, wrapping unexpected failures."""
        try:
            return task.result()
        except DiffError:
            raise
        except Exception as e:
            raise TaskFailureError(f"Comparison task failed: {type(e).__name__}: {e}") from e

    @staticmethod
    def _discard_results(tasks: Set[asyncio.Task]) -> None:
        """Mark finished tasks' errors as retrieved once the outcome is settled."""
        for task in tasks:
            if not task.cancelled():
                task.exception()

    async def _cancel_all(self, tasks: Set[asyncio.Task]) -> None:
        """Cancel outstanding work and wait for it to unwind.

        Results of the cancelled tasks, including errors, are discarded.
        """
        if not tasks:
            return
        for task in tasks:
            task.cancel()
        self.tasks_cancelled += len(tasks)
        _log_debug("Cancelling %d outstanding comparison tasks", len(tasks))
        await asyncio.gather(*tasks, return_exceptions=True)

    async def _compare_directories(self, item: WorkItem) -> StepResult:
        """Pair the entries of two directories.

        Returns DIFFERENT as soon as the listings disagree; otherwise the
        paired subdirectories and files as further work.
        """
        entries, entries_comp = await asyncio.gather(
            self.adapter.list_entries(item.path),
            self.adapter.list_entries(item.path_comp),
        )
        entries = self._filter(entries, item.depth)
        entries_comp = self._filter(entries_comp, item.depth)

        if len(entries) != len(entries_comp):
            _log_debug("Entry count mismatch (%d != %d): %s vs %s",
                       len(entries), len(entries_comp), item.path, item.path_comp)
            return _DIFFERENT

        children: List[WorkItem] = []
        for entry, entry_comp in zip(entries, entries_comp):
            if not entry.matches(entry_comp):
                _log_debug("Entry mismatch %r vs %r under %s", entry, entry_comp, item.path)
                return _DIFFERENT
            if entry.kind.has_content:
                children.append(WorkItem(
                    entry.kind,
                    os.path.join(item.path, entry.name),
                    os.path.join(item.path_comp, entry.name),
                    item.depth + 1,
                ))

        return StepResult(ComparisonOutcome.EQUAL, tuple(children))

    async def _compare_files(self, item: WorkItem) -> StepResult:
        # Sizes already matched in the listing
        outcome = await self.file_comparator.compare_contents(item.path, item.path_comp)
        return _DIFFERENT if outcome.is_different else _EQUAL

    def _filter(self, entries: EntrySet, depth: int) -> EntrySet:
        if not self.exclude.names:
            return entries
        return tuple(e for e in entries if not self.exclude.should_exclude(e.name, depth))

    def get_stats(self) -> dict:
        """Get comparator statistics.

        Returns:
            Dictionary with task counts
        """
        return {
            'tasks_started': self.tasks_started,
            'tasks_cancelled': self.tasks_cancelled,
            'max_tasks': self.max_tasks,
        }
