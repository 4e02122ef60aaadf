"""
Time entries client for Employee Hours Report.

PURPOSE: Fetch the raw feed over HTTP and deserialize it into TimeEntry models.
AI CONTEXT: The only network I/O in the package. One GET, no retries.

ERROR HANDLING STRATEGY:
- Transport failure or non-2xx status: FetchError
- Invalid JSON or non-array payload: EntryParseError
- JSON null payload: treated as an empty feed

USAGE:
    client = TimeEntryClient()
    text = await client.fetch_text()
    entries = parse_entries(text)

    # Tests
    client = TimeEntryClient(api_url="https://feed.test", transport=httpx.MockTransport(handler))
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from .config import Config
from .errors import EntryParseError, FetchError
from .models import TimeEntry

__all__ = ["TimeEntryClient", "parse_entries", "preview"]

logger = logging.getLogger(__name__)


def preview(text: str, limit: int | None = None) -> str:
    """
    Shorten a raw payload for the progress log.

    Args:
        text: Raw response body.
        limit: Characters to keep. Default: Config.PREVIEW_LENGTH.

    Returns:
        The first `limit` characters followed by '...'.

    Example:
        >>> preview('[{"name": "Alice"}]', limit=5)
        '[{"na...'
    """
    limit = Config.PREVIEW_LENGTH if limit is None else limit
    return f"{text[:limit]}..."


def parse_entries(text: str) -> list[TimeEntry]:
    """
    Deserialize a feed payload into time entries.

    Business context: The feed is a JSON array of objects. A literal
    null body is treated like an empty array so an idle day renders an
    empty report instead of failing the run.

    Args:
        text: Raw JSON response body.

    Returns:
        Parsed entries in feed order.

    Raises:
        EntryParseError: If the body is not valid JSON, not an array, or
            any element is malformed.

    Example:
        >>> parse_entries("null")
        []
    """
    try:
        payload: Any = json.loads(text)
    except json.JSONDecodeError as e:
        raise EntryParseError(f"Response is not valid JSON: {e}") from e

    if payload is None:
        return []
    if not isinstance(payload, list):
        raise EntryParseError(f"Expected a JSON array, got {type(payload).__name__}")
    return [TimeEntry.from_dict(item) for item in payload]


class TimeEntryClient:
    """
    Async HTTP client for the time entries endpoint.

    A fresh httpx.AsyncClient is opened per fetch and closed when the
    request completes, so no connection outlives a run.
    """

    def __init__(
        self,
        api_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            api_url: Endpoint URL including access key.
                Default: Config.get_api_url()
            transport: Optional httpx transport. Used for testability
                (httpx.MockTransport).
            timeout: Request timeout in seconds. None blocks until the
                transport completes or fails.
        """
        self.api_url = api_url or Config.get_api_url()
        self._transport = transport
        self.timeout = timeout

    async def fetch_text(self) -> str:
        """
        GET the feed and return the raw response body.

        Returns:
            Response text.

        Raises:
            FetchError: On transport errors or non-2xx status codes.

        Example:
            >>> text = asyncio.run(TimeEntryClient().fetch_text())
        """
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.get(self.api_url)
                response.raise_for_status()
                return response.text
        except httpx.HTTPStatusError as e:
            raise FetchError(
                f"Time entries request failed with status {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise FetchError(f"Time entries request failed: {e}") from e

    async def fetch_entries(self) -> list[TimeEntry]:
        """Fetch and parse the feed in one step."""
        return parse_entries(await self.fetch_text())
