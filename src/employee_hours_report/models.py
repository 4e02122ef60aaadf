"""
Data models for Employee Hours Report.

PURPOSE: Type-safe dataclasses for raw time entries and per-employee totals.
AI CONTEXT: Field-name tolerance is resolved here, once, at ingestion.

MODEL HIERARCHY:
- TimeEntry: One raw time-tracking record from the upstream feed
- EmployeeTotal: Hours summed over all entries of one employee

UPSTREAM FIELD NAMES:
The feed spells its fields exactly as below; note "StarTimeUtc".
- EmployeeName: Primary employee identifier
- name: Fallback identifier, used only when EmployeeName is null/empty
- StarTimeUtc, EndTimeUtc: ISO 8601 timestamps in UTC

USAGE:
    entry = TimeEntry.from_dict({"EmployeeName": "Ann", "StarTimeUtc": ..., "EndTimeUtc": ...})
    entry.worked_seconds
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from .errors import EntryParseError

__all__ = [
    "PRIMARY_NAME_FIELD",
    "FALLBACK_NAME_FIELD",
    "START_FIELD",
    "END_FIELD",
    "TimeEntry",
    "EmployeeTotal",
    "parse_utc_timestamp",
    "resolve_employee_name",
]

PRIMARY_NAME_FIELD = "EmployeeName"
FALLBACK_NAME_FIELD = "name"
START_FIELD = "StarTimeUtc"
END_FIELD = "EndTimeUtc"

# .NET serializers emit up to 7 fractional digits; datetime accepts 6.
_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def parse_utc_timestamp(value: Any) -> datetime:
    """
    Parse an ISO 8601 timestamp into an aware UTC datetime.

    Accepts the 'Z' suffix, explicit offsets (converted to UTC) and naive
    values (taken as UTC, which is what the upstream feed means by them).

    Args:
        value: Timestamp string from the feed.

    Returns:
        Timezone-aware datetime in UTC.

    Raises:
        EntryParseError: If value is not a string or not ISO 8601.

    Example:
        >>> parse_utc_timestamp("2024-01-01T02:00:00Z").hour
        2
    """
    if not isinstance(value, str) or not value:
        raise EntryParseError(f"Expected ISO 8601 timestamp, got {value!r}")
    text = _FRACTION_RE.sub(r"\1", value.strip().replace("Z", "+00:00"))
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise EntryParseError(f"Invalid timestamp {value!r}: {e}") from e
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def resolve_employee_name(data: dict[str, Any]) -> str | None:
    """
    Resolve the canonical employee identifier of a raw record.

    The primary field wins when it is non-empty; the fallback field is
    consulted if and only if the primary one is null or empty.

    Args:
        data: Raw record dict from the feed.

    Returns:
        Employee identifier, or None when both fields are null/empty.

    Example:
        >>> resolve_employee_name({"EmployeeName": "", "name": "Bob"})
        'Bob'
    """
    for field_name in (PRIMARY_NAME_FIELD, FALLBACK_NAME_FIELD):
        value = data.get(field_name)
        if value is None:
            continue
        text = value if isinstance(value, str) else str(value)
        if text:
            return text
    return None


@dataclass(frozen=True)
class TimeEntry:
    """
    One raw time-tracking record.

    worked_seconds is end minus start and is not validated: inverted
    timestamps yield a negative duration that flows into the totals.
    """

    employee_name: str | None
    start_time_utc: datetime
    end_time_utc: datetime

    @property
    def worked_seconds(self) -> float:
        """Seconds between start and end (negative if inverted)."""
        return (self.end_time_utc - self.start_time_utc).total_seconds()

    @property
    def has_employee(self) -> bool:
        """True if the record carries a usable employee identifier."""
        return bool(self.employee_name)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TimeEntry:
        """
        Create a TimeEntry from a raw feed record.

        Resolves the employee identifier (EmployeeName, else name) and
        parses both timestamps. Unknown keys are ignored.

        Business context: The feed is inconsistent about which field holds
        the employee name. Resolving it here means aggregation and
        rendering only ever see one canonical attribute.

        Args:
            data: One JSON object from the feed.

        Returns:
            Parsed TimeEntry.

        Raises:
            EntryParseError: If data is not an object or a timestamp is
                missing or malformed.

        Example:
            >>> e = TimeEntry.from_dict({
            ...     "name": "Alice",
            ...     "StarTimeUtc": "2024-01-01T00:00:00Z",
            ...     "EndTimeUtc": "2024-01-01T02:00:00Z",
            ... })
            >>> (e.employee_name, e.worked_seconds)
            ('Alice', 7200.0)
        """
        if not isinstance(data, dict):
            raise EntryParseError(f"Expected a JSON object, got {type(data).__name__}")
        return cls(
            employee_name=resolve_employee_name(data),
            start_time_utc=parse_utc_timestamp(data.get(START_FIELD)),
            end_time_utc=parse_utc_timestamp(data.get(END_FIELD)),
        )


@dataclass(frozen=True)
class EmployeeTotal:
    """Total hours worked by one employee."""

    name: str
    total_hours: float

    @property
    def hours_display(self) -> str:
        """Hours with two decimal places, e.g. '12.50'."""
        return f"{self.total_hours:.2f}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {"name": self.name, "total_hours": self.total_hours}
