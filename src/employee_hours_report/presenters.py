"""
Presenters for Employee Hours Report.

PURPOSE: Turn aggregated per-employee totals into output artifacts.
AI CONTEXT: Pure rendering - return bytes/str, the report service does file I/O.

PRESENTERS:
1. ChartPresenter: 800x600 PNG pie chart with legend and title (matplotlib)
2. TablePresenter: Static HTML work summary table

DESIGN PRINCIPLES:
1. Geometry and colors are computed separately from drawing (testable)
2. Colors come from an injected random.Random - seed it for reproducible charts
3. One color per employee, shared by its slice and its legend swatch
4. All user-controlled text is HTML-escaped before embedding in markup

USAGE:
    png = ChartPresenter(rng=random.Random(7)).render_pie_chart(totals)
    html = TablePresenter().render_table_html(totals)
"""

from __future__ import annotations

import html
import io
import random
from collections.abc import Sequence
from dataclasses import dataclass

from .aggregation import sum_hours
from .config import Config
from .errors import NoDataError
from .models import EmployeeTotal

__all__ = [
    "PieSlice",
    "EmployeeRowViewModel",
    "random_color",
    "compute_slices",
    "ChartPresenter",
    "TablePresenter",
]

TABLE_CSS = (
    "table { border-collapse: collapse; width: 60%; font-family: Arial; }"
    "th, td { border: 1px solid #999; padding: 8px; text-align: left; }"
    ".low-hours { background-color:rgb(98, 98, 144); }"
)


def random_color(rng: random.Random) -> str:
    """
    Draw a mid-range RGB color.

    Each channel is drawn independently from Config.COLOR_CHANNEL_RANGE
    (inclusive), avoiding near-black and near-white tones so slices stay
    legible on the light gray background.

    Args:
        rng: Random generator to draw from.

    Returns:
        Hex color string like '#7fa3c4'.

    Example:
        >>> random_color(random.Random(0)).startswith('#')
        True
    """
    low, high = Config.COLOR_CHANNEL_RANGE
    r, g, b = (rng.randint(low, high) for _ in range(3))
    return f"#{r:02x}{g:02x}{b:02x}"


@dataclass(frozen=True)
class PieSlice:
    """Geometry and color of one employee's pie slice (degrees)."""

    name: str
    total_hours: float
    start_angle: float
    sweep_angle: float
    color: str

    @property
    def end_angle(self) -> float:
        """Angle where the slice ends."""
        return self.start_angle + self.sweep_angle

    @property
    def legend_label(self) -> str:
        """Legend text, e.g. 'Alice (2.00h)'."""
        return f"{self.name} ({self.total_hours:.2f}h)"


def compute_slices(
    totals: Sequence[EmployeeTotal],
    rng: random.Random,
) -> list[PieSlice]:
    """
    Lay out pie slices proportional to each employee's share of hours.

    Slices are placed consecutively from 0 degrees, each starting where
    the previous one ended. Sweep angle = hours / grand total * 360, so
    the sweeps of a non-empty layout add up to 360.

    Business context: The pie shows how the team's tracked time is
    distributed; the largest contributor comes first because totals are
    already sorted descending.

    Args:
        totals: Aggregated totals with positive hours (chart mode).
        rng: Random generator used to pick one color per employee.

    Returns:
        One PieSlice per employee, in input order. Empty input yields [].

    Example:
        >>> slices = compute_slices(totals, random.Random(1))
        >>> round(sum(s.sweep_angle for s in slices), 6)
        360.0
    """
    grand_total = sum_hours(totals)
    slices: list[PieSlice] = []
    start = 0.0
    for emp in totals:
        sweep = emp.total_hours / grand_total * 360.0
        slices.append(
            PieSlice(
                name=emp.name,
                total_hours=emp.total_hours,
                start_angle=start,
                sweep_angle=sweep,
                color=random_color(rng),
            )
        )
        start += sweep
    return slices


class ChartPresenter:
    """
    Presenter for the employee time distribution pie chart.

    Draws on a fixed 800x600 canvas using a top-left pixel coordinate
    system (the y axis is inverted), so the layout constants in Config
    read the same way as on any raster surface. Angles grow clockwise on
    screen as a consequence.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        """
        Initialize chart presenter.

        Args:
            rng: Random generator for slice colors. Default: an unseeded
                random.Random, so colors differ between runs.

        Example:
            >>> presenter = ChartPresenter(rng=random.Random(42))
        """
        self.rng = rng if rng is not None else random.Random()

    def render_pie_chart(self, totals: Sequence[EmployeeTotal]) -> bytes:
        """
        Render totals as a pie chart PNG.

        Creates a matplotlib figure sized to exactly Config.CHART_WIDTH x
        Config.CHART_HEIGHT pixels, with the pie inside Config.PIE_BOX, a
        legend column at Config.LEGEND_X and a bold title on top. Uses a
        non-interactive backend for headless rendering.

        Returns:
            PNG image as bytes.

        Raises:
            NoDataError: If totals is empty. No figure is created.
            ImportError: If matplotlib is not installed.

        Example:
            >>> png = ChartPresenter().render_pie_chart(totals)
            >>> png[:4]
            b'\\x89PNG'
        """
        if not totals:
            raise NoDataError("No valid data to generate chart")

        import matplotlib

        matplotlib.use("Agg")  # Non-interactive backend
        import matplotlib.pyplot as plt
        from matplotlib.patches import Rectangle, Wedge

        slices = compute_slices(totals, self.rng)

        width, height, dpi = Config.CHART_WIDTH, Config.CHART_HEIGHT, Config.CHART_DPI
        fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        try:
            fig.patch.set_facecolor(Config.CHART_BACKGROUND)
            ax = fig.add_axes((0, 0, 1, 1))
            ax.set_xlim(0, width)
            ax.set_ylim(height, 0)  # top-left origin
            ax.axis("off")

            box_x, box_y, box_w, box_h = Config.PIE_BOX
            center = (box_x + box_w / 2, box_y + box_h / 2)
            radius = min(box_w, box_h) / 2
            for s in slices:
                ax.add_patch(
                    Wedge(
                        center,
                        radius,
                        s.start_angle,
                        s.end_angle,
                        facecolor=s.color,
                        edgecolor="none",
                        antialiased=True,
                    )
                )

            legend_y = Config.LEGEND_Y
            swatch = Config.LEGEND_SWATCH
            for s in slices:
                ax.add_patch(
                    Rectangle(
                        (Config.LEGEND_X, legend_y),
                        swatch,
                        swatch,
                        facecolor=s.color,
                        edgecolor="none",
                    )
                )
                ax.text(
                    Config.LEGEND_X + swatch + 5,
                    legend_y,
                    s.legend_label,
                    ha="left",
                    va="top",
                    fontsize=Config.LEGEND_FONT_SIZE,
                    color="black",
                    parse_math=False,
                )
                legend_y += Config.LEGEND_ROW_HEIGHT

            ax.text(
                width / 2,
                Config.TITLE_Y,
                Config.TITLE,
                ha="center",
                va="top",
                fontsize=Config.TITLE_FONT_SIZE,
                fontweight="bold",
                color=Config.TITLE_COLOR,
            )

            buf = io.BytesIO()
            fig.savefig(buf, format="png", dpi=dpi, facecolor=fig.get_facecolor())
            buf.seek(0)
            return buf.read()
        finally:
            plt.close(fig)


@dataclass
class EmployeeRowViewModel:
    """View model for one row of the work summary table."""

    name: str
    total_hours: float

    @property
    def name_display(self) -> str:
        """Employee name, HTML-escaped."""
        return html.escape(self.name)

    @property
    def hours_display(self) -> str:
        """Hours with two decimal places."""
        return f"{self.total_hours:.2f}"

    @property
    def is_low_hours(self) -> bool:
        """True below Config.LOW_HOURS_THRESHOLD."""
        return self.total_hours < Config.LOW_HOURS_THRESHOLD

    @property
    def row_class_attr(self) -> str:
        """
        Class attribute for the table row.

        Returns:
            ' class="low-hours"' for low-hours employees, '' otherwise.
        """
        if self.is_low_hours:
            return f' class="{Config.LOW_HOURS_CLASS}"'
        return ""

    def to_html(self) -> str:
        """Render as a <tr> element."""
        return (
            f"<tr{self.row_class_attr}>"
            f"<td>{self.name_display}</td>"
            f"<td>{self.hours_display}</td>"
            "</tr>"
        )


class TablePresenter:
    """Presenter for the employee work summary HTML document."""

    def get_rows(self, totals: Sequence[EmployeeTotal]) -> list[EmployeeRowViewModel]:
        """Build row view models, preserving order."""
        return [EmployeeRowViewModel(name=t.name, total_hours=t.total_hours) for t in totals]

    def render_table_html(self, totals: Sequence[EmployeeTotal]) -> str:
        """
        Render totals as a static HTML document.

        Creates a complete document with an inline stylesheet, a heading
        and a two-column table (Employee Name, Total Hours). Rows for
        employees below Config.LOW_HOURS_THRESHOLD carry the low-hours
        class so they stand out.

        Business context: The summary table is what managers open to spot
        employees with unusually few tracked hours.

        Args:
            totals: Aggregated totals, possibly empty.

        Returns:
            HTML string. Empty totals give a valid document with only the
            header row.

        Raises:
            None: Template string construction never raises.

        Example:
            >>> html_doc = TablePresenter().render_table_html([])
            >>> '<th>Employee Name</th>' in html_doc
            True
        """
        rows = "".join(row.to_html() for row in self.get_rows(totals))
        heading = html.escape(Config.TABLE_HEADING)
        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <title>{heading}</title>
    <style>{TABLE_CSS}</style>
</head>
<body>
    <h2>{heading}</h2>
    <table>
        <tr><th>Employee Name</th><th>Total Hours</th></tr>
        {rows}
    </table>
</body>
</html>
"""
