"""
Error handling policies for DazzleDiff.

A policy decides what happens when an adapter call fails. Comparisons must
never report a failure as "different" or "equal", so every policy here ends
by raising; they differ only in what they raise.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from ..errors import DiffError, TaskFailureError, translate_os_error

_log = logging.getLogger(__name__)

_log_debug = _log.debug


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    Subclasses implement different strategies for reporting errors
    that occur during filesystem operations.
    """

    @abstractmethod
    async def handle(self, error: Exception, method_name: str, path: Optional[str], *args, **kwargs) -> Any:
        """
        Handle an error that occurred during an adapter operation.

        Args:
            error: The exception that was raised
            method_name: Name of the method that failed (e.g., 'list_entries')
            path: The path being processed when the error occurred
            *args: Additional positional arguments from the failed method
            **kwargs: Additional keyword arguments from the failed method

        Returns:
            Never returns normally for the policies shipped here.
        """
        pass

    def handle_sync(self, error: Exception, method_name: str, path: Optional[str], *args, **kwargs) -> Any:
        """
        Handle an error raised by a synchronous adapter method.

        The default simply re-raises.
        """
        raise error


class TranslateErrorsPolicy(ErrorPolicy):
    """
    Policy that converts OS-level failures into typed DiffErrors.

    This is the default behavior:
    - OSError becomes the matching DiffError subclass, chained to the original
    - DiffError passes through unchanged
    - anything else becomes TaskFailureError
    """

    async def handle(self, error: Exception, method_name: str, path: Optional[str], *args, **kwargs) -> Any:
        """Raise the translated error."""
        self._raise_translated(error, method_name, path)

    def handle_sync(self, error: Exception, method_name: str, path: Optional[str], *args, **kwargs) -> Any:
        """Raise the translated error (sync version)."""
        self._raise_translated(error, method_name, path)

    def _raise_translated(self, error: Exception, method_name: str, path: Optional[str]) -> None:
        if isinstance(error, DiffError):
            raise error
        if isinstance(error, OSError):
            translated = translate_os_error(error, path)
            _log_debug("%s failed for '%s': %s", method_name, path, translated)
            raise translated from error
        raise TaskFailureError(
            f"{method_name} failed for '{path}': {type(error).__name__}: {error}",
            path=path,
        ) from error
