"""
Exception types for Employee Hours Report.

Every failure in a run derives from ReportError, except file-writing
failures which surface as the OSError the filesystem raised. The report
service treats all of them as terminal for the run.
"""

from __future__ import annotations

__all__ = [
    "ReportError",
    "FetchError",
    "EntryParseError",
    "NoDataError",
]


class ReportError(Exception):
    """Base class for report run failures."""


class FetchError(ReportError):
    """The time entries endpoint could not be read."""


class EntryParseError(ReportError):
    """The payload is not a JSON array of well-formed time entries."""


class NoDataError(ReportError):
    """A chart was requested for an empty set of totals."""
