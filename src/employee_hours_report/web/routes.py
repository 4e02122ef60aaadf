"""
FastAPI routes for the Employee Hours Report preview.

PURPOSE: Thin route handlers that delegate to ReportService and presenters.
AI CONTEXT: Routes should be simple - aggregation and rendering live elsewhere.

ROUTE STRUCTURE:
- / : Work summary table (full HTML document)
- /chart.png : Time distribution pie chart
- /api/totals : JSON totals for programmatic access
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from ..client import TimeEntryClient
from ..config import Config
from ..errors import ReportError
from ..models import EmployeeTotal
from ..report_service import ReportService

__all__ = [
    "router",
    "get_report_service",
]

logger = logging.getLogger(__name__)

router = APIRouter()


def get_report_service(request: Request) -> ReportService:
    """
    Create a ReportService for one request.

    A fresh service per request means every page view reads the live
    feed. The fetch gets Config.WEB_FETCH_TIMEOUT so a stalled upstream
    cannot hang the browser indefinitely.

    Args:
        request: Incoming request; app.state.api_url holds the URL override.

    Returns:
        ReportService wired to the configured feed.
    """
    api_url = getattr(request.app.state, "api_url", None)
    client = TimeEntryClient(api_url=api_url, timeout=Config.WEB_FETCH_TIMEOUT)
    return ReportService(client=client)


async def _load_totals(service: ReportService, mode: str) -> list[EmployeeTotal]:
    """Aggregate for a mode, mapping upstream failures to 502."""
    try:
        return await service.build_totals(mode)
    except ReportError as e:
        logger.error(f"❌ Error: {e}")
        raise HTTPException(status_code=502, detail=str(e)) from e


@router.get("/", response_class=HTMLResponse)
async def table_page(
    service: Annotated[ReportService, Depends(get_report_service)],
) -> HTMLResponse:
    """
    Render the work summary table.

    Uses table-mode aggregation (non-positive totals are kept).

    Returns:
        HTMLResponse with the same document output.html would contain.
    """
    totals = await _load_totals(service, Config.MODE_TABLE)
    html = service.table_presenter.render_table_html(totals)
    return HTMLResponse(content=html, media_type="text/html; charset=utf-8")


@router.get("/chart.png")
async def chart_image(
    service: Annotated[ReportService, Depends(get_report_service)],
) -> Response:
    """
    Render the time distribution pie chart.

    Returns:
        PNG response, or 404 'No data' when no employee has positive hours.
    """
    totals = await _load_totals(service, Config.MODE_CHART)
    if not totals:
        return PlainTextResponse("No data", status_code=404)
    png = service.chart_presenter.render_pie_chart(totals)
    return Response(content=png, media_type="image/png")


@router.get("/api/totals")
async def api_totals(
    service: Annotated[ReportService, Depends(get_report_service)],
    mode: Annotated[str, Query(pattern="^(chart|table)$")] = Config.MODE_TABLE,
) -> list[dict[str, Any]]:
    """
    Return aggregated totals as JSON.

    Args:
        mode: "table" (default, all employees) or "chart" (positive only).

    Returns:
        List of {"name", "total_hours"} in report order.
    """
    totals = await _load_totals(service, mode)
    return [t.to_dict() for t in totals]
