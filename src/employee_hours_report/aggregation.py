"""
Hours aggregation for Employee Hours Report.

PURPOSE: Group time entries by employee and sum worked hours.
AI CONTEXT: Pure data processing - no visualization, no I/O.

ALGORITHM:
1. Drop entries without a resolved employee identifier
2. Group by identifier (exact, case-sensitive match), first-seen order
3. Sum worked seconds per group, convert to hours
4. Optionally drop groups with total <= 0 (chart mode)
5. Sort by total hours descending; ties keep first-seen order

USAGE:
    aggregator = HoursAggregator(positive_only=True)
    totals = aggregator.aggregate(entries)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from .config import Config
from .models import EmployeeTotal, TimeEntry

__all__ = ["HoursAggregator", "sum_hours"]

logger = logging.getLogger(__name__)


def sum_hours(totals: Sequence[EmployeeTotal]) -> float:
    """
    Grand total of hours across all employees.

    Args:
        totals: Aggregated per-employee totals.

    Returns:
        Sum of total_hours; 0.0 for an empty sequence.
    """
    return sum(t.total_hours for t in totals)


class HoursAggregator:
    """
    Calculator for per-employee hour totals.

    DESIGN:
    - Stateless: Each call operates on provided entries
    - Pure: No side effects, only data transformation
    - Configurable: positive_only differs between output modes

    The result order is deterministic: sorted() is stable and groups are
    built in a dict, which preserves first-seen insertion order.
    """

    def __init__(self, positive_only: bool = False) -> None:
        """
        Initialize the aggregator.

        Args:
            positive_only: If True, groups whose total is zero or negative
                are dropped from the result. The chart mode needs this
                because a pie cannot draw such slices; the table mode
                lists every employee.

        Example:
            >>> HoursAggregator(positive_only=True).positive_only
            True
        """
        self.positive_only = positive_only

    @classmethod
    def for_mode(cls, mode: str) -> HoursAggregator:
        """
        Create an aggregator configured for an output mode.

        Args:
            mode: "chart" or "table".

        Returns:
            HoursAggregator with the mode's positive-hours filter.

        Raises:
            ValueError: If mode is unknown.
        """
        return cls(positive_only=Config.positive_only(mode))

    def group_seconds(self, entries: Iterable[TimeEntry] | None) -> dict[str, float]:
        """
        Sum worked seconds per employee identifier.

        Entries with a null or empty identifier are skipped.

        Args:
            entries: Parsed time entries, or None.

        Returns:
            Dict of identifier -> seconds, in first-seen order.
        """
        seconds: dict[str, float] = {}
        if entries is None:
            return seconds
        for entry in entries:
            key = entry.employee_name
            if not key:
                continue
            seconds[key] = seconds.get(key, 0.0) + entry.worked_seconds
        return seconds

    def aggregate(self, entries: Iterable[TimeEntry] | None) -> list[EmployeeTotal]:
        """
        Produce ordered per-employee hour totals.

        Business context: Totals drive both the pie chart (share of
        hours) and the work summary table (hours and low-hours flag).
        Descending order puts the busiest employees first in both.

        Args:
            entries: Parsed time entries. None or empty yields [].

        Returns:
            List of EmployeeTotal sorted by total_hours descending, ties in
            first-seen input order. Never raises for empty input.

        Example:
            >>> totals = HoursAggregator().aggregate(entries)
            >>> [(t.name, t.total_hours) for t in totals]
            [('Alice', 2.0), ('Bob', 1.0)]
        """
        totals = [
            EmployeeTotal(name=name, total_hours=secs / Config.SECONDS_PER_HOUR)
            for name, secs in self.group_seconds(entries).items()
        ]
        if self.positive_only:
            dropped = sum(1 for t in totals if t.total_hours <= 0)
            if dropped:
                logger.debug(f"Dropped {dropped} employees with non-positive hours")
            totals = [t for t in totals if t.total_hours > 0]
        return sorted(totals, key=lambda t: t.total_hours, reverse=True)
