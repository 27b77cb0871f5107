"""Configuration system for DazzleDiff.

This module defines how callers tune a comparison: which entry names to
leave out, how much I/O may be in flight, and how large each read chunk is.
"""

from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from typing import Iterable, List, Optional, Tuple


DEFAULT_CHUNK_SIZE = 64 * 1024
DEFAULT_MAX_CONCURRENT = 100


@dataclass
class ExcludeConfig:
    """Configuration for leaving entries out of a directory comparison.

    Excluded names are removed from both listings before entries are paired,
    so an excluded entry present on only one side does not count as a
    difference.
    """

    names: Tuple[str, ...] = ()  # Exact names or fnmatch glob patterns
    recursive: bool = False      # Apply at every depth vs. only under the roots

    def __post_init__(self):
        # Accept a single name or any iterable, but store a tuple
        if isinstance(self.names, str):
            self.names = (self.names,)
        self.names = tuple(self.names)

    def should_exclude(self, name: str, depth: int) -> bool:
        """Check if an entry should be left out of the comparison.

        Args:
            name: Entry name (not a path)
            depth: Depth of the directory being listed (roots are depth 0)

        Returns:
            True if the entry must be dropped from both sides
        """
        if not self.names:
            return False
        if depth > 0 and not self.recursive:
            return False
        return any(fnmatchcase(name, pattern) for pattern in self.names)


@dataclass
class PerformanceConfig:
    """Configuration for resource usage during a comparison."""

    max_concurrent: int = DEFAULT_MAX_CONCURRENT  # Simultaneous I/O operations
    chunk_size: int = DEFAULT_CHUNK_SIZE          # Bytes per file read


@dataclass
class DiffConfig:
    """Complete configuration for a comparison.

    Passed to ``dir_diff``/``file_diff``; the defaults suit most callers.
    """

    performance: PerformanceConfig = field(default_factory=PerformanceConfig)
    exclude: ExcludeConfig = field(default_factory=ExcludeConfig)

    @classmethod
    def excluding(cls, names: Iterable[str], recursive: bool = False) -> 'DiffConfig':
        """Create config that leaves the given names out of the comparison.

        Args:
            names: Entry names or glob patterns to exclude
            recursive: Exclude at every depth instead of only under the roots

        Returns:
            DiffConfig with the exclusions applied
        """
        return cls(exclude=ExcludeConfig(names=names, recursive=recursive))

    @classmethod
    def for_watcher(cls, max_concurrent: int = 16) -> 'DiffConfig':
        """Create config for a poll loop that runs many comparisons side by side.

        Lower concurrency keeps each comparison from starving the others
        of file descriptors.

        Args:
            max_concurrent: I/O operations allowed per comparison

        Returns:
            DiffConfig tuned for repeated polling
        """
        return cls(performance=PerformanceConfig(max_concurrent=max_concurrent))

    def with_exclusions(self, names: Optional[Iterable[str]], recursive: bool) -> 'DiffConfig':
        """Return a copy with ``names`` replacing the current exclusions."""
        if names is None:
            return self
        return DiffConfig(
            performance=self.performance,
            exclude=ExcludeConfig(names=names, recursive=recursive),
        )

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.performance.max_concurrent <= 0:
            errors.append("max_concurrent must be positive")

        if self.performance.chunk_size <= 0:
            errors.append("chunk_size must be positive")

        for pattern in self.exclude.names:
            if not isinstance(pattern, str) or not pattern:
                errors.append(f"invalid exclude pattern: {pattern!r}")
            elif '/' in pattern:
                errors.append(f"exclude patterns match entry names, not paths: {pattern!r}")

        return errors
