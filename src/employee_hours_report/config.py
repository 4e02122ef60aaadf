"""
Configuration for Employee Hours Report.

PURPOSE: Centralized configuration constants and runtime settings.
AI CONTEXT: All configurable values live here - modify this file to change behavior.

CONFIGURATION CATEGORIES:
- Data Source: Time entries endpoint (access key embedded in URL)
- Output: Artifact file names
- Chart Geometry: Canvas, pie box, legend layout (pixels, top-left origin)
- Table: Low-hours threshold
- Aggregation: Positive-hours filter per output mode

ENVIRONMENT VARIABLES:
- TIME_ENTRIES_API_URL: Override the time entries endpoint (default: Config.API_URL)

USAGE:
    from employee_hours_report.config import Config
    url = Config.get_api_url()
    threshold = Config.LOW_HOURS_THRESHOLD
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class Config:
    """
    Immutable configuration container for Employee Hours Report.

    DESIGN: Frozen dataclass ensures configuration immutability at runtime.
    All values are class-level constants - no instance creation needed.

    COORDINATE SYSTEM:
    Chart geometry is expressed in raster pixels with the origin at the
    top-left corner of the canvas, y growing downwards.
    """

    # =========================================================================
    # DATA SOURCE
    # =========================================================================
    API_URL: ClassVar[str] = (
        "https://rc-vault-fap-live-1.azurewebsites.net/api/gettimeentries"
        "?code=vO17RnE8vuzXzPJo5eaLLjXjmRW07law99QTD90zat9FfOQJKKUcgQ=="
    )
    API_URL_ENV: ClassVar[str] = "TIME_ENTRIES_API_URL"

    PREVIEW_LENGTH: ClassVar[int] = 100
    """Characters of the raw payload echoed to the progress log."""

    # =========================================================================
    # OUTPUT ARTIFACTS
    # =========================================================================
    OUTPUT_PNG: ClassVar[str] = "output.png"
    OUTPUT_HTML: ClassVar[str] = "output.html"

    # =========================================================================
    # CHART GEOMETRY
    # =========================================================================
    CHART_WIDTH: ClassVar[int] = 800
    CHART_HEIGHT: ClassVar[int] = 600
    CHART_DPI: ClassVar[int] = 100
    CHART_BACKGROUND: ClassVar[str] = "whitesmoke"

    PIE_BOX: ClassVar[tuple[int, int, int, int]] = (50, 50, 500, 500)
    """Pie bounding square as (x, y, width, height)."""

    LEGEND_X: ClassVar[int] = 580
    LEGEND_Y: ClassVar[int] = 50
    LEGEND_ROW_HEIGHT: ClassVar[int] = 20
    LEGEND_SWATCH: ClassVar[int] = 15
    LEGEND_FONT_SIZE: ClassVar[int] = 8

    TITLE: ClassVar[str] = "Employee Time Distribution"
    TITLE_Y: ClassVar[int] = 10
    TITLE_FONT_SIZE: ClassVar[int] = 14
    TITLE_COLOR: ClassVar[str] = "darkblue"

    COLOR_CHANNEL_RANGE: ClassVar[tuple[int, int]] = (100, 199)
    """Inclusive bounds for each RGB channel - mid-range, legible on light gray."""

    # =========================================================================
    # TABLE
    # =========================================================================
    TABLE_HEADING: ClassVar[str] = "Employee Work Summary"
    LOW_HOURS_THRESHOLD: ClassVar[float] = 100.0
    LOW_HOURS_CLASS: ClassVar[str] = "low-hours"

    # =========================================================================
    # AGGREGATION
    # =========================================================================
    MODE_CHART: ClassVar[str] = "chart"
    MODE_TABLE: ClassVar[str] = "table"

    POSITIVE_ONLY_BY_MODE: ClassVar[dict[str, bool]] = {
        "chart": True,
        "table": False,
    }
    """
    Whether groups with total_hours <= 0 are dropped, per output mode.
    A pie cannot draw zero or negative slices; the table lists everyone.
    """

    SECONDS_PER_HOUR: ClassVar[float] = 3600.0

    # =========================================================================
    # WEB PREVIEW
    # =========================================================================
    WEB_FETCH_TIMEOUT: ClassVar[float] = 30.0
    """Seconds a preview request waits for the feed before answering 502."""

    # =========================================================================
    # ENVIRONMENT-BASED SETTINGS (runtime configurable)
    # =========================================================================
    _api_url_override: ClassVar[str | None] = None

    @classmethod
    def positive_only(cls, mode: str) -> bool:
        """
        Look up the positive-hours filter for an output mode.

        Args:
            mode: "chart" or "table".

        Returns:
            True if groups with non-positive totals are dropped.

        Raises:
            ValueError: If mode is not a known output mode.

        Example:
            >>> Config.positive_only("chart")
            True
        """
        try:
            return cls.POSITIVE_ONLY_BY_MODE[mode]
        except KeyError:
            raise ValueError(f"Unknown output mode: {mode!r}") from None

    @classmethod
    def get_api_url(cls) -> str:
        """
        Get the time entries endpoint URL.

        Uses a priority system: test overrides take precedence, then the
        TIME_ENTRIES_API_URL environment variable, then the built-in URL
        with its embedded access key.

        Business context: The upstream feed is a single fixed endpoint.
        The override exists so a staging feed or a local fixture server
        can be used without editing code.

        Returns:
            Fully qualified URL including the access key query parameter.

        Raises:
            None: Environment lookup never raises.

        Example:
            >>> Config.get_api_url().startswith("https://")
            True
        """
        if cls._api_url_override is not None:
            return cls._api_url_override
        return os.environ.get(cls.API_URL_ENV) or cls.API_URL

    @classmethod
    def set_test_overrides(cls, api_url: str | None = None) -> None:
        """
        Set test overrides for environment-based settings.

        Must call reset_test_overrides() in test teardown to avoid
        affecting other tests.

        Args:
            api_url: Endpoint URL to use instead of env var / default.
        """
        cls._api_url_override = api_url

    @classmethod
    def reset_test_overrides(cls) -> None:
        """Clear all test overrides, restoring env var / default lookup."""
        cls._api_url_override = None
