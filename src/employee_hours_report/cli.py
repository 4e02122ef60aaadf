"""
CLI entry point for Employee Hours Report.

PURPOSE: Command-line interface for rendering reports and the web preview.
AI CONTEXT: Main entry points for package execution.

USAGE:
    # Render pie chart (default)
    python -m employee_hours_report

    # Or via CLI command (after install)
    employee-hours-report

    # Run with subcommands
    employee-hours-report chart    # Write output.png
    employee-hours-report table    # Write output.html
    employee-hours-report serve    # Launch web preview
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .report_service import ReportService, ServiceResult

# Constants
PROG_NAME = "employee-hours-report"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


@lru_cache(maxsize=1)
def _get_logger() -> logging.Logger:
    """Get module logger (cached for thread safety)."""
    logging.basicConfig(level=logging.INFO)
    return logging.getLogger(__name__)


def _log(message: str, *, emoji: str = "") -> None:
    """Log message with optional emoji prefix for CLI output.

    Args:
        message: The message to log.
        emoji: Optional emoji prefix for visual CLI feedback.
    """
    prefix = f"{emoji} " if emoji else ""
    _get_logger().info(f"{prefix}{message}")


def _build_service(api_url: str | None, output_dir: str | None) -> ReportService:
    """Assemble a ReportService from CLI options."""
    from .client import TimeEntryClient
    from .report_service import ReportService

    return ReportService(client=TimeEntryClient(api_url=api_url), output_dir=output_dir)


def run_report(
    mode: str,
    api_url: str | None = None,
    output_dir: str | None = None,
    *,
    service: ReportService | None = None,
) -> ServiceResult:
    """
    Run one report and write its artifact.

    Business context: Chart and table are the two deliverables of the
    tool; both fetch the live feed, so each run reflects the current
    state of time tracking.

    Args:
        mode: "chart" for output.png, "table" for output.html.
        api_url: Override for the feed URL. Default: Config.get_api_url().
        output_dir: Directory for the artifact. Default: current directory.
        service: Optional pre-built service (testability).

    Returns:
        ServiceResult of the run. Failures are logged by the service and
        never raised.

    Example:
        >>> # From command line:
        >>> # employee-hours-report table --output-dir reports
        >>> run_report("table", output_dir="reports")
    """
    _get_logger()
    svc = service or _build_service(api_url, output_dir)
    _log(f"Rendering {mode} report", emoji="📊")
    return asyncio.run(svc.run(mode))


def run_dashboard(
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    api_url: str | None = None,
) -> None:
    """
    Launch the web preview of the report.

    Starts a FastAPI server that renders the table and chart on request
    from the live feed, without writing any files.

    Args:
        host: Network interface to bind to. Default '127.0.0.1'.
        port: TCP port for the HTTP server. Default 8000.
        api_url: Override for the feed URL.

    Returns:
        None. Blocks until server shutdown (Ctrl+C).

    Raises:
        OSError: If port is already in use.
    """
    from .web import run_dashboard as start_web

    _log(f"Starting report preview at http://{host}:{port}", emoji="🚀")
    _log("Press Ctrl+C to stop")
    start_web(host=host, port=port, api_url=api_url)


def main() -> int:
    """
    Main CLI entry point with subcommand routing.

    Subcommands:
    - chart: Write output.png (default)
    - table: Write output.html
    - serve [--host HOST] [--port PORT]: Launch web preview

    Returns:
        Exit code 0. Report failures are logged, not signalled through
        the exit code.

    Raises:
        SystemExit: On --help or argument parsing errors.

    Example:
        >>> # From command line:
        >>> # employee-hours-report table
        >>> sys.exit(main())
    """
    from .__version__ import __version__

    parser = argparse.ArgumentParser(
        prog=PROG_NAME,
        description="Employee Hours Report - aggregate tracked time per employee",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Time entries endpoint (default: built-in URL or TIME_ENTRIES_API_URL)",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for output files (default: current directory)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("chart", help="Render pie chart to output.png")
    subparsers.add_parser("table", help="Render HTML table to output.html")

    serve_parser = subparsers.add_parser("serve", help="Launch web preview")
    serve_parser.add_argument(
        "--host",
        default=DEFAULT_HOST,
        help=f"Bind address (default: {DEFAULT_HOST})",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=DEFAULT_PORT,
        help=f"Port number (default: {DEFAULT_PORT})",
    )

    args = parser.parse_args()

    if args.command == "serve":
        run_dashboard(host=args.host, port=args.port, api_url=args.url)
    elif args.command == "table":
        run_report("table", api_url=args.url, output_dir=args.output_dir)
    else:
        # Default: chart
        run_report("chart", api_url=args.url, output_dir=args.output_dir)

    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
