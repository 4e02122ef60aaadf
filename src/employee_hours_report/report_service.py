"""
Report Service - one complete report run per output mode.

PURPOSE: Orchestrate fetch, parse, aggregate, render and write.
AI CONTEXT: Shared service layer used by both cli.py and the web preview.

ARCHITECTURE:
    CLI commands ──┐
                   ├──► ReportService ──► TimeEntryClient ──► HoursAggregator
    Web routes ────┘                  └─► ChartPresenter / TablePresenter ──► FileSystem

ERROR HANDLING STRATEGY:
- Every failure in a run is terminal for that run, with no retries
- run_chart/run_table catch everything at the top level and log it
- Table runs additionally log the full traceback
- Callers get a ServiceResult; nothing propagates to the exit code

USAGE:
    service = ReportService()
    result = asyncio.run(service.run_chart())
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .aggregation import HoursAggregator
from .client import TimeEntryClient, parse_entries, preview
from .config import Config
from .filesystem import RealFileSystem
from .presenters import ChartPresenter, TablePresenter

if TYPE_CHECKING:
    from .filesystem import FileSystem
    from .models import EmployeeTotal

__all__ = [
    "ReportService",
    "ServiceResult",
]

logger = logging.getLogger(__name__)


@dataclass
class ServiceResult:
    """
    Result from a report run.

    Attributes:
        success: Whether the run completed without error.
        message: Human-readable result message.
        data: Optional dict with run-specific data (path, employees, written).
        error: Optional error message if success is False.
    """

    success: bool
    message: str
    data: dict[str, Any] | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict, omitting empty data/error."""
        result: dict[str, Any] = {
            "success": self.success,
            "message": self.message,
        }
        if self.data:
            result["data"] = self.data
        if self.error:
            result["error"] = self.error
        return result


class ReportService:
    """
    Core report service.

    OPERATIONS:
    - build_totals: Fetch and aggregate for an output mode
    - run_chart: Write output.png (chart mode aggregation)
    - run_table: Write output.html (table mode aggregation)
    - run: Dispatch to run_chart/run_table by mode name

    Example:
        >>> service = ReportService(output_dir="reports")
        >>> result = asyncio.run(service.run_table())
        >>> result.data["path"]
        'reports/output.html'
    """

    def __init__(
        self,
        client: TimeEntryClient | None = None,
        filesystem: FileSystem | None = None,
        output_dir: str | None = None,
        chart_presenter: ChartPresenter | None = None,
        table_presenter: TablePresenter | None = None,
    ) -> None:
        """
        Initialize the service with injectable collaborators.

        Args:
            client: Feed client. Default: TimeEntryClient() using Config URL.
            filesystem: FileSystem implementation. Default: RealFileSystem.
            output_dir: Directory for artifacts. Default: current directory.
            chart_presenter: Default: ChartPresenter with unseeded colors.
            table_presenter: Default: TablePresenter().
        """
        self.client = client or TimeEntryClient()
        self._fs: FileSystem = filesystem or RealFileSystem()
        self.output_dir = output_dir or "."
        self.chart_presenter = chart_presenter or ChartPresenter()
        self.table_presenter = table_presenter or TablePresenter()

    def output_path(self, file_name: str) -> str:
        """Path of an artifact inside output_dir."""
        return os.path.join(self.output_dir, file_name)

    def _ensure_output_dir(self) -> None:
        if not self._fs.exists(self.output_dir):
            self._fs.makedirs(self.output_dir, exist_ok=True)

    async def build_totals(self, mode: str) -> list[EmployeeTotal]:
        """
        Fetch the feed and aggregate it for an output mode.

        Logs progress the way a console run reports it: fetch start, a
        preview of the raw payload, and the entry count.

        Args:
            mode: "chart" or "table"; selects the positive-hours filter.

        Returns:
            Ordered per-employee totals.

        Raises:
            FetchError: If the feed cannot be read.
            EntryParseError: If the payload is malformed.
            ValueError: If mode is unknown.
        """
        aggregator = HoursAggregator.for_mode(mode)

        logger.info("Fetching data from API...")
        text = await self.client.fetch_text()
        logger.info(f"Raw JSON preview: {preview(text)}")

        entries = parse_entries(text)
        logger.info(f"Found {len(entries)} entries")

        return aggregator.aggregate(entries)

    async def _render_chart(self) -> ServiceResult:
        totals = await self.build_totals(Config.MODE_CHART)
        logger.info(f"Generating pie chart for {len(totals)} employees...")

        if not totals:
            logger.info("No valid data to generate chart")
            return ServiceResult(
                success=True,
                message="No valid data to generate chart",
                data={"employees": 0, "written": False},
            )

        logger.info("Chart data:")
        for emp in totals:
            logger.info(f"{emp.name}: {emp.hours_display} hours")

        png = self.chart_presenter.render_pie_chart(totals)
        self._ensure_output_dir()
        path = self.output_path(Config.OUTPUT_PNG)
        self._fs.write_bytes(path, png)
        logger.info(f"✅ Pie chart saved as {path}")
        return ServiceResult(
            success=True,
            message=f"Pie chart saved as {path}",
            data={"path": path, "employees": len(totals), "written": True},
        )

    async def _render_table(self) -> ServiceResult:
        totals = await self.build_totals(Config.MODE_TABLE)
        logger.info(f"Processed {len(totals)} employees")

        logger.info("Generating HTML table...")
        document = self.table_presenter.render_table_html(totals)
        self._ensure_output_dir()
        path = self.output_path(Config.OUTPUT_HTML)
        self._fs.write_text(path, document)
        logger.info(f"✅ HTML file saved as {path}")
        return ServiceResult(
            success=True,
            message=f"HTML file saved as {path}",
            data={"path": path, "employees": len(totals), "written": True},
        )

    async def run_chart(self) -> ServiceResult:
        """
        Run the chart pipeline and write output.png.

        Business context: The pie chart gives a one-glance view of how
        tracked time is split across the team.

        Returns:
            ServiceResult. On an empty feed: success with
            data["written"] False and no file. On any failure: success
            False with the error message; the failure is logged, not
            raised.

        Example:
            >>> result = asyncio.run(ReportService().run_chart())
            >>> result.success
            True
        """
        try:
            return await self._render_chart()
        except Exception as e:
            logger.error(f"❌ Error: {e}")
            return ServiceResult(success=False, message="Chart generation failed", error=str(e))

    async def run_table(self) -> ServiceResult:
        """
        Run the table pipeline and write output.html.

        An empty feed still writes a document with only the header row.
        Failures are logged with their full traceback and returned as a
        failed ServiceResult.

        Returns:
            ServiceResult describing the run.
        """
        try:
            return await self._render_table()
        except Exception as e:
            logger.exception(f"❌ Error: {e}")
            return ServiceResult(success=False, message="Table generation failed", error=str(e))

    async def run(self, mode: str) -> ServiceResult:
        """
        Run the pipeline for an output mode by name.

        Args:
            mode: "chart" or "table".

        Returns:
            ServiceResult from the selected pipeline.

        Raises:
            ValueError: If mode is unknown.
        """
        if mode == Config.MODE_CHART:
            return await self.run_chart()
        if mode == Config.MODE_TABLE:
            return await self.run_table()
        raise ValueError(f"Unknown output mode: {mode!r}")
