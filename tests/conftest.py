"""
Pytest configuration and shared fixtures for Employee Hours Report tests.

This module contains:
- MockFileSystem: In-memory filesystem for testing without actual I/O
- Feed helpers: Raw records, JSON payloads and httpx mock transports
- Shared fixtures available to all test modules
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from typing import Any

import httpx
import pytest

from employee_hours_report.client import TimeEntryClient
from employee_hours_report.config import Config

FEED_URL = "https://feed.test/api/gettimeentries?code=test-key"


class MockFileSystem:
    """
    In-memory file system for testing.

    Simulates a file system using dictionaries:
    - _files: dict mapping path -> content (str or bytes)
    - _dirs: set of directory paths
    - _read_only: paths whose writes raise PermissionError

    FEATURES:
    - No actual I/O operations
    - Easy to inspect written artifacts
    - Supports write-failure simulation
    """

    def __init__(self) -> None:
        """Initialize an empty mock file system containing only '.'."""
        self._files: dict[str, str | bytes] = {}
        self._dirs: set[str] = {"."}
        self._read_only: set[str] = set()

    def exists(self, path: str) -> bool:
        """True if path is a mock file or directory."""
        return path in self._files or path in self._dirs

    def makedirs(self, path: str, exist_ok: bool = False) -> None:
        """
        Create a mock directory.

        Args:
            path: Directory path.
            exist_ok: If False, raise when the directory already exists.

        Raises:
            FileExistsError: If directory exists and exist_ok is False.
        """
        if path in self._dirs and not exist_ok:
            raise FileExistsError(path)
        self._dirs.add(path)

    def _check_writable(self, path: str) -> None:
        if path in self._read_only:
            raise PermissionError(f"Read-only: {path}")

    def write_text(self, path: str, content: str, _encoding: str = "utf-8") -> None:
        """Store text content, overwriting any previous content."""
        self._check_writable(path)
        self._files[path] = content

    def write_bytes(self, path: str, content: bytes) -> None:
        """Store binary content, overwriting any previous content."""
        self._check_writable(path)
        self._files[path] = content

    def get_file(self, path: str) -> str | bytes | None:
        """Return stored content or None."""
        return self._files.get(path)

    def set_read_only(self, path: str) -> None:
        """Make subsequent writes to path fail with PermissionError."""
        self._read_only.add(path)

    def list_files(self) -> list[str]:
        """Sorted list of stored file paths."""
        return sorted(self._files)

    def list_dirs(self) -> list[str]:
        """Sorted list of known directories."""
        return sorted(self._dirs)


def record(
    employee_name: str | None = None,
    name: str | None = None,
    start: str = "2024-01-01T00:00:00Z",
    end: str = "2024-01-01T01:00:00Z",
) -> dict[str, Any]:
    """
    Build one raw feed record.

    Only identifier fields that are not None are included, so tests can
    model records where a field is absent entirely.

    Example:
        >>> record(name="Alice", end="2024-01-01T02:00:00Z")["name"]
        'Alice'
    """
    data: dict[str, Any] = {"StarTimeUtc": start, "EndTimeUtc": end}
    if employee_name is not None:
        data["EmployeeName"] = employee_name
    if name is not None:
        data["name"] = name
    return data


def json_transport(
    body: str | list[dict[str, Any]] | None,
    status_code: int = 200,
    calls: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """
    Create an httpx transport that answers every request with a fixed body.

    Args:
        body: Raw text, or a list of records serialized to JSON.
        status_code: HTTP status to answer with.
        calls: Optional list collecting received requests.
    """
    text = body if isinstance(body, str) else json.dumps(body)

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        return httpx.Response(status_code, text=text)

    return httpx.MockTransport(handler)


def failing_transport(message: str = "connection refused") -> httpx.MockTransport:
    """Create an httpx transport whose requests fail at the transport level."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError(message, request=request)

    return httpx.MockTransport(handler)


@pytest.fixture
def mock_fs() -> MockFileSystem:
    """
    Provide a fresh in-memory filesystem.

    Returns:
        MockFileSystem with only the current directory present.
    """
    return MockFileSystem()


@pytest.fixture
def scenario_records() -> list[dict[str, Any]]:
    """
    Two records: Alice via the fallback field (2h), Bob via the primary field (1h).

    Business context:
    Mirrors the feed's habit of naming the employee in either field.
    """
    return [
        record(name="Alice", end="2024-01-01T02:00:00Z"),
        record(employee_name="Bob", end="2024-01-01T01:00:00Z"),
    ]


@pytest.fixture
def client_factory() -> Callable[..., TimeEntryClient]:
    """
    Factory for TimeEntryClient instances backed by a mock transport.

    Example:
        def test_fetch(client_factory):
            client = client_factory([record(name="Ann")])
    """

    def _make(
        body: str | list[dict[str, Any]] | None,
        status_code: int = 200,
        calls: list[httpx.Request] | None = None,
    ) -> TimeEntryClient:
        return TimeEntryClient(
            api_url=FEED_URL,
            transport=json_transport(body, status_code=status_code, calls=calls),
        )

    return _make


@pytest.fixture(autouse=True)
def reset_config() -> Iterator[None]:
    """Ensure Config test overrides never leak between tests."""
    yield
    Config.reset_test_overrides()


def has_matplotlib() -> bool:
    """True if matplotlib can be imported; chart tests skip otherwise."""
    try:
        import matplotlib  # noqa: F401

        return True
    except ImportError:
        return False
