"""Version information for employee-hours-report."""

__version__ = "1.0.0"
__version_date__ = "2026-10-19"

__title__ = "employee_hours_report"
__description__ = "Aggregate time-tracking entries per employee into a pie chart or HTML table"
__url__ = "https://github.com/mgrandau/employee-hours-report"

__author__ = "Mark Grandau"

__license__ = "MIT"
__copyright__ = "Copyright 2025 Mark Grandau"

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
