"""Testing utilities for DazzleDiff consumers."""

from .fixtures import ReadCountingAdapter, build_tree

__all__ = ['ReadCountingAdapter', 'build_tree']
