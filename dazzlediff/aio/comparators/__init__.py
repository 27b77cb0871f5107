"""Comparators for file pairs and directory-tree pairs."""

from .file import FileComparator
from .tree import TreeComparator, StepResult, WorkItem

__all__ = [
    'FileComparator',
    'TreeComparator',
    'StepResult',
    'WorkItem',
]
