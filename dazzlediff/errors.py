"""Error taxonomy for DazzleDiff.

Every failure a comparison can hit is raised as a ``DiffError`` subclass so
callers can tell "the trees differ" apart from "the comparison could not be
completed". The originating ``OSError`` is always chained as ``__cause__``.
"""

import errno as errno_module
from typing import Optional


class DiffError(Exception):
    """Base class for all comparison failures.

    Attributes:
        path: Path that was being listed, stat'ed or read when the error occurred
        errno: errno of the underlying OSError, if any
    """

    def __init__(self, message: str, path: Optional[str] = None, errno: Optional[int] = None):
        super().__init__(message)
        self.path = path
        self.errno = errno


class PathNotFoundError(DiffError):
    """A path to compare does not exist."""


class PermissionDeniedError(DiffError):
    """A path to compare could not be listed or opened."""


class PathNotDirectoryError(DiffError):
    """A directory comparison was given something that is not a directory."""


class PathIsDirectoryError(DiffError):
    """A file comparison was given a directory."""


class IOReadError(DiffError):
    """Reading a file or listing a directory failed for another OS reason."""


class TaskFailureError(DiffError):
    """A concurrent comparison task could not complete."""


_ERRNO_MAP = {
    errno_module.ENOENT: PathNotFoundError,
    errno_module.EACCES: PermissionDeniedError,
    errno_module.EPERM: PermissionDeniedError,
    errno_module.ENOTDIR: PathNotDirectoryError,
    errno_module.EISDIR: PathIsDirectoryError,
}


def translate_os_error(error: OSError, path: Optional[str] = None) -> DiffError:
    """Map an OSError to the matching DiffError subclass.

    Does not raise; callers are expected to ``raise translated from error``.

    Args:
        error: The OS-level failure
        path: Path being processed (falls back to ``error.filename``)

    Returns:
        DiffError instance of the most specific matching type
    """
    if path is None and error.filename is not None:
        path = str(error.filename)

    error_class = _ERRNO_MAP.get(error.errno)
    if error_class is None:
        # Subclasses raised without an errno (e.g. mocks) still map by type
        if isinstance(error, FileNotFoundError):
            error_class = PathNotFoundError
        elif isinstance(error, PermissionError):
            error_class = PermissionDeniedError
        elif isinstance(error, NotADirectoryError):
            error_class = PathNotDirectoryError
        elif isinstance(error, IsADirectoryError):
            error_class = PathIsDirectoryError
        else:
            error_class = IOReadError

    reason = error.strerror or str(error) or type(error).__name__
    message = f"{reason}: '{path}'" if path else reason
    return error_class(message, path=path, errno=error.errno)
