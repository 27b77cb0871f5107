"""
Tests for error translation policies and adapter.
"""

import errno
import pytest
from pathlib import Path
from unittest.mock import Mock, AsyncMock

from dazzlediff import (
    DiffError,
    IOReadError,
    PathIsDirectoryError,
    PathNotDirectoryError,
    PathNotFoundError,
    PermissionDeniedError,
    TaskFailureError,
)
from dazzlediff.aio import (
    AsyncFileSystemAdapter,
    ErrorTranslatingAdapter,
    TranslateErrorsPolicy,
    with_error_translation,
)
from dazzlediff.errors import translate_os_error


class TestTranslateOsError:
    """Test mapping of OSError to the DiffError taxonomy."""

    @pytest.mark.parametrize("code, expected", [
        (errno.ENOENT, PathNotFoundError),
        (errno.EACCES, PermissionDeniedError),
        (errno.EPERM, PermissionDeniedError),
        (errno.ENOTDIR, PathNotDirectoryError),
        (errno.EISDIR, PathIsDirectoryError),
        (errno.EIO, IOReadError),
    ])
    def test_errno_mapping(self, code, expected):
        error = OSError(code, "boom", "/some/path")
        translated = translate_os_error(error)

        assert type(translated) is expected
        assert translated.errno == code
        assert translated.path == "/some/path"

    def test_exception_type_used_without_errno(self):
        """Errors raised without an errno still map by class."""
        assert isinstance(translate_os_error(FileNotFoundError("gone")), PathNotFoundError)
        assert isinstance(translate_os_error(PermissionError("Access denied")), PermissionDeniedError)
        assert isinstance(translate_os_error(IsADirectoryError("dir")), PathIsDirectoryError)
        assert isinstance(translate_os_error(OSError("other")), IOReadError)

    def test_explicit_path_wins(self):
        error = OSError(errno.ENOENT, "No such file or directory", "/from/error")
        translated = translate_os_error(error, "/from/caller")

        assert translated.path == "/from/caller"
        assert "/from/caller" in str(translated)

    def test_all_errors_are_diff_errors(self):
        for error_class in (PathNotFoundError, PermissionDeniedError, PathNotDirectoryError,
                            PathIsDirectoryError, IOReadError, TaskFailureError):
            assert issubclass(error_class, DiffError)


class TestTranslateErrorsPolicy:
    """Test the default policy."""

    @pytest.mark.asyncio
    async def test_os_error_is_translated_and_chained(self):
        policy = TranslateErrorsPolicy()
        original = OSError(errno.ENOENT, "No such file or directory", "/missing")

        with pytest.raises(PathNotFoundError) as exc_info:
            await policy.handle(original, "list_entries", "/missing")

        assert exc_info.value.__cause__ is original

    @pytest.mark.asyncio
    async def test_diff_error_passes_through(self):
        policy = TranslateErrorsPolicy()
        error = PathNotDirectoryError("Not a directory: '/x'", path="/x")

        with pytest.raises(PathNotDirectoryError) as exc_info:
            await policy.handle(error, "list_entries", "/x")

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_task_failure(self):
        policy = TranslateErrorsPolicy()

        with pytest.raises(TaskFailureError) as exc_info:
            await policy.handle(RuntimeError("too many open files in test"), "open_file", "/f")

        assert "RuntimeError" in str(exc_info.value)
        assert exc_info.value.path == "/f"

    def test_sync_handling(self):
        policy = TranslateErrorsPolicy()

        with pytest.raises(PermissionDeniedError):
            policy.handle_sync(PermissionError("Access denied"), "supports_capability", None)


class TestErrorTranslatingAdapter:
    """Test the ErrorTranslatingAdapter wrapper."""

    @pytest.mark.asyncio
    async def test_successful_operation(self):
        """Successful operations should pass through unchanged."""
        base_adapter = Mock()
        base_adapter.list_entries = AsyncMock(return_value=("a", "b"))

        adapter = ErrorTranslatingAdapter(base_adapter)
        result = await adapter.list_entries("/tree")

        assert result == ("a", "b")
        base_adapter.list_entries.assert_called_once_with("/tree")

    @pytest.mark.asyncio
    async def test_permission_error_translated(self):
        base_adapter = Mock()
        base_adapter.list_entries = AsyncMock(side_effect=PermissionError("Access denied"))

        adapter = ErrorTranslatingAdapter(base_adapter)

        with pytest.raises(PermissionDeniedError) as exc_info:
            await adapter.list_entries("/restricted")

        assert exc_info.value.path == "/restricted"

    @pytest.mark.asyncio
    async def test_handle_argument_supplies_path(self):
        """Read failures report the file behind the handle."""
        base_adapter = Mock()
        base_adapter.read_chunk = AsyncMock(side_effect=OSError(errno.EIO, "Input/output error"))

        adapter = ErrorTranslatingAdapter(base_adapter)
        handle = Mock()
        handle.name = "/data/blob.bin"

        with pytest.raises(IOReadError) as exc_info:
            await adapter.read_chunk(handle, 4096)

        assert exc_info.value.path == "/data/blob.bin"
        assert exc_info.value.errno == errno.EIO

    def test_non_async_method_passthrough(self):
        base_adapter = Mock()
        base_adapter.supports_capability = Mock(return_value=True)

        adapter = ErrorTranslatingAdapter(base_adapter)

        assert adapter.supports_capability("lstat") is True
        base_adapter.supports_capability.assert_called_once_with("lstat")

    def test_attribute_access(self):
        """Non-callable attributes should be accessible."""
        adapter = ErrorTranslatingAdapter(AsyncFileSystemAdapter(max_concurrent=7))
        assert adapter.max_concurrent == 7

    def test_repr_names_wrapped_adapter_and_policy(self):
        adapter = ErrorTranslatingAdapter(AsyncFileSystemAdapter())

        assert "AsyncFileSystemAdapter" in repr(adapter)
        assert "TranslateErrorsPolicy" in repr(adapter)

    def test_with_error_translation_does_not_double_wrap(self):
        adapter = with_error_translation(AsyncFileSystemAdapter())
        assert with_error_translation(adapter) is adapter

    @pytest.mark.asyncio
    async def test_real_adapter_missing_directory(self, tmp_path: Path):
        adapter = with_error_translation(AsyncFileSystemAdapter())
        missing = str(tmp_path / "nope")

        with pytest.raises(PathNotFoundError) as exc_info:
            await adapter.list_entries(missing)

        assert exc_info.value.path == missing
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
