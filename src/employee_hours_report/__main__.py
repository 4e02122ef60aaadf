"""
Package entry point for python -m execution.

USAGE:
    python -m employee_hours_report          # Render pie chart
    python -m employee_hours_report chart    # Render pie chart
    python -m employee_hours_report table    # Render HTML table
    python -m employee_hours_report serve    # Launch web preview
"""

from employee_hours_report.cli import main

if __name__ == "__main__":
    main()
