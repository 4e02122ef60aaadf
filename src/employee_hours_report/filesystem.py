"""
FileSystem abstraction for Employee Hours Report.

PURPOSE: Injectable file system interface for testability.
AI CONTEXT: Allows asserting on written artifacts without temp directories.

DESIGN:
- Protocol defines the interface
- RealFileSystem uses actual os/pathlib operations
- MockFileSystem in tests/conftest.py stores data in memory for tests

USAGE:
    # Production
    fs = RealFileSystem()
    service = ReportService(filesystem=fs)

    # Tests (MockFileSystem from conftest.py)
    service = ReportService(filesystem=mock_fs)  # pytest fixture
"""

from __future__ import annotations

import os
from typing import Protocol

__all__ = ["FileSystem", "RealFileSystem"]


class FileSystem(Protocol):
    """
    Protocol for file system operations.

    Defines the interface for writing report artifacts. Implementations
    include RealFileSystem for production and MockFileSystem for testing.
    Writes always overwrite existing content.
    """

    def exists(self, path: str) -> bool:
        """
        Check if path exists (file or directory).

        Args:
            path: Path to check.

        Returns:
            True if the path exists, False otherwise. Never raises.
        """
        ...

    def makedirs(self, path: str, exist_ok: bool = False) -> None:
        """
        Create directory and all parent directories.

        Args:
            path: Path of directory to create.
            exist_ok: If True, don't raise if directory exists.

        Raises:
            OSError: If directory exists and exist_ok is False.
        """
        ...

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """
        Write text to file, overwriting existing content.

        Args:
            path: Path to file to write.
            content: String content.
            encoding: Text encoding (default utf-8).

        Raises:
            OSError: If the file cannot be written.
        """
        ...

    def write_bytes(self, path: str, content: bytes) -> None:
        """
        Write binary content to file, overwriting existing content.

        Args:
            path: Path to file to write.
            content: Raw bytes, e.g. PNG image data.

        Raises:
            OSError: If the file cannot be written.
        """
        ...


class RealFileSystem:
    """
    Real file system implementation using os and built-in open().

    Business context: Used in production to write output.png and
    output.html. Each method delegates directly to the corresponding os
    or built-in function; file handles are closed by their context
    managers even when a write fails.
    """

    def exists(self, path: str) -> bool:
        """Delegate to os.path.exists()."""
        return os.path.exists(path)

    def makedirs(self, path: str, exist_ok: bool = False) -> None:
        """Delegate to os.makedirs()."""
        os.makedirs(path, exist_ok=exist_ok)

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """
        Write text to a file on disk.

        Args:
            path: Path to file to write.
            content: String content.
            encoding: Text encoding (default utf-8).

        Example:
            >>> RealFileSystem().write_text('output.html', '<html></html>')
        """
        with open(path, "w", encoding=encoding) as f:
            f.write(content)

    def write_bytes(self, path: str, content: bytes) -> None:
        """
        Write bytes to a file on disk.

        Args:
            path: Path to file to write.
            content: Raw bytes.

        Example:
            >>> RealFileSystem().write_bytes('output.png', png)
        """
        with open(path, "wb") as f:
            f.write(content)
