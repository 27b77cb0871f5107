"""
Error translating adapter for DazzleDiff.

This module provides the ErrorTranslatingAdapter that wraps an entry adapter
and delegates error handling to a pluggable policy, so comparators only ever
see typed DiffErrors.
"""

import asyncio
import functools
import os
from typing import Any, Optional

from .error_policies import ErrorPolicy, TranslateErrorsPolicy


def _path_from_args(args) -> Optional[str]:
    """Find the path an adapter call was working on.

    The first positional argument is either a path or an open handle.
    """
    if not args:
        return None
    target = args[0]
    if isinstance(target, (str, bytes, os.PathLike)):
        return os.fsdecode(target)
    name = getattr(target, 'name', None)
    if isinstance(name, str):
        return name
    return None


class ErrorTranslatingAdapter:
    """
    Adapter that wraps another adapter and handles errors through policies.

    This adapter uses the dynamic proxy pattern to automatically wrap
    all methods of the underlying adapter, catching exceptions and
    delegating handling to a configurable error policy.

    Cancellation is never intercepted: CancelledError is a BaseException
    and passes straight through.
    """

    def __init__(self, base_adapter: Any, policy: Optional[ErrorPolicy] = None):
        """
        Initialize the error translating adapter.

        Args:
            base_adapter: The adapter to wrap (e.g., AsyncFileSystemAdapter)
            policy: Error handling policy (defaults to TranslateErrorsPolicy)
        """
        self._base_adapter = base_adapter
        self._policy = policy or TranslateErrorsPolicy()

    async def __aenter__(self):
        """Enter async context manager."""
        if hasattr(self._base_adapter, '__aenter__'):
            await self._base_adapter.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context manager."""
        if hasattr(self._base_adapter, '__aexit__'):
            return await self._base_adapter.__aexit__(exc_type, exc_val, exc_tb)
        return None

    def __getattr__(self, name: str) -> Any:
        """
        Dynamic proxy that wraps all methods with error handling.

        Args:
            name: The attribute name being accessed

        Returns:
            The attribute from the base adapter, wrapped if it's a method
        """
        attr = getattr(self._base_adapter, name)

        # Properties and plain attributes are returned as-is
        if not callable(attr):
            return attr

        @functools.wraps(attr)
        def wrapper(*args, **kwargs):
            path = _path_from_args(args)
            try:
                result = attr(*args, **kwargs)
            except Exception as e:
                return self._policy.handle_sync(e, name, path, *args, **kwargs)

            if asyncio.iscoroutine(result):
                return self._handle_coroutine(result, name, path, *args, **kwargs)
            return result

        return wrapper

    async def _handle_coroutine(self, coro, method_name: str, path: Optional[str], *args, **kwargs) -> Any:
        """
        Handle errors in async methods.

        Args:
            coro: The coroutine to execute
            method_name: Name of the method being called
            path: Path the call was working on
            *args: Original method arguments
            **kwargs: Original method keyword arguments

        Returns:
            The result from the coroutine
        """
        try:
            return await coro
        except Exception as e:
            return await self._policy.handle(e, method_name, path, *args, **kwargs)

    def __repr__(self) -> str:
        """String representation."""
        return f"ErrorTranslatingAdapter({self._base_adapter!r}, policy={self._policy.__class__.__name__})"


def with_error_translation(adapter: Any) -> ErrorTranslatingAdapter:
    """
    Wrap an adapter unless it already translates errors.

    Args:
        adapter: The adapter to wrap

    Returns:
        An ErrorTranslatingAdapter around ``adapter``
    """
    if isinstance(adapter, ErrorTranslatingAdapter):
        return adapter
    return ErrorTranslatingAdapter(adapter)
