"""
Employee Hours Report.

PURPOSE: Turn a feed of time-tracking entries into per-employee hour totals.
AI CONTEXT: Linear pipeline - fetch, parse, aggregate, render one artifact.

PACKAGE STRUCTURE:
- client.py: HTTP retrieval and JSON parsing of time entries
- models.py: Data models (TimeEntry, EmployeeTotal)
- aggregation.py: Grouping and summing hours per employee
- presenters.py: Pie chart (PNG) and HTML table renderers
- report_service.py: One full run per output mode
- config.py: Configuration constants
- web/: FastAPI preview of the same report

QUICK START:
    # Render output.png
    python -m employee_hours_report chart

    # Render output.html
    python -m employee_hours_report table
"""

from employee_hours_report.__version__ import (
    __author__,
    __copyright__,
    __description__,
    __license__,
    __title__,
    __url__,
    __version__,
    __version_date__,
)

__all__ = [
    "__version__",
    "__version_date__",
    "__title__",
    "__description__",
    "__url__",
    "__author__",
    "__license__",
    "__copyright__",
]
