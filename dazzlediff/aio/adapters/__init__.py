"""Async adapters for the data sources being compared."""

from .filesystem import AsyncFileSystemAdapter, kind_from_mode

__all__ = [
    'AsyncFileSystemAdapter',
    'kind_from_mode',
]
