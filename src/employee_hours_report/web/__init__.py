"""
Web preview module for Employee Hours Report.

PURPOSE: FastAPI app that renders the report on request instead of to files.
AI CONTEXT: Optional module - same aggregation and presenters as the CLI.

FEATURES:
- HTML work summary table at /
- Pie chart PNG at /chart.png
- JSON totals at /api/totals

USAGE:
    # Via CLI
    employee-hours-report serve

    # Programmatically
    from employee_hours_report.web import create_app
    app = create_app()
"""

from .app import create_app, run_dashboard

__all__ = ["create_app", "run_dashboard"]
