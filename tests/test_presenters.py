"""Tests for presenters module."""

from __future__ import annotations

import math
import random
import re
import struct

import pytest
from conftest import has_matplotlib

from employee_hours_report.config import Config
from employee_hours_report.errors import NoDataError
from employee_hours_report.models import EmployeeTotal
from employee_hours_report.presenters import (
    ChartPresenter,
    EmployeeRowViewModel,
    PieSlice,
    TablePresenter,
    compute_slices,
    random_color,
)

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def totals() -> list[EmployeeTotal]:
    """Three employees with uneven hours, already sorted descending."""
    return [
        EmployeeTotal("Alice", 120.0),
        EmployeeTotal("Bob", 60.0),
        EmployeeTotal("Carol", 20.0),
    ]


def _channels(color: str) -> tuple[int, int, int]:
    return int(color[1:3], 16), int(color[3:5], 16), int(color[5:7], 16)


class TestRandomColor:
    """Tests for mid-range color generation."""

    def test_hex_format(self) -> None:
        """Verifies colors are '#rrggbb' strings."""
        assert re.fullmatch(r"#[0-9a-f]{6}", random_color(random.Random(3)))

    def test_channels_within_range(self) -> None:
        """Verifies every channel stays within Config.COLOR_CHANNEL_RANGE.

        Business context:
        Mid-range tones keep slices legible on the light gray canvas.

        Arrangement:
        Seeded generator, many draws.

        Assertion Strategy:
        Every channel of every draw within inclusive bounds.
        """
        low, high = Config.COLOR_CHANNEL_RANGE
        rng = random.Random(11)
        for _ in range(500):
            assert all(low <= c <= high for c in _channels(random_color(rng)))

    def test_seeded_generator_is_reproducible(self) -> None:
        """Verifies the same seed yields the same color sequence."""
        assert random_color(random.Random(5)) == random_color(random.Random(5))


class TestComputeSlices:
    """Tests for pie geometry."""

    def test_sweep_angles_sum_to_360(self, totals: list[EmployeeTotal]) -> None:
        """Verifies the full circle is covered for non-empty input."""
        slices = compute_slices(totals, random.Random(1))
        assert math.isclose(sum(s.sweep_angle for s in slices), 360.0)

    def test_sweep_proportional_to_hours(self, totals: list[EmployeeTotal]) -> None:
        """Verifies each sweep equals its share of total hours times 360."""
        slices = compute_slices(totals, random.Random(1))
        assert [round(s.sweep_angle, 6) for s in slices] == [216.0, 108.0, 36.0]

    def test_slices_are_consecutive_from_zero(self, totals: list[EmployeeTotal]) -> None:
        """Verifies each slice starts where the previous one ended.

        Assertion Strategy:
        First start is 0; start[i+1] == end[i]; last end is 360.
        """
        slices = compute_slices(totals, random.Random(1))
        assert slices[0].start_angle == 0.0
        for prev, nxt in zip(slices, slices[1:]):
            assert math.isclose(nxt.start_angle, prev.end_angle)
        assert math.isclose(slices[-1].end_angle, 360.0)

    def test_single_employee_full_circle(self) -> None:
        """Verifies one employee gets the whole pie."""
        slices = compute_slices([EmployeeTotal("Solo", 3.0)], random.Random(1))
        assert slices[0].sweep_angle == 360.0

    def test_order_and_labels_follow_totals(self, totals: list[EmployeeTotal]) -> None:
        """Verifies slice order and legend text match the totals."""
        slices = compute_slices(totals, random.Random(1))
        assert [s.name for s in slices] == ["Alice", "Bob", "Carol"]
        assert slices[0].legend_label == "Alice (120.00h)"

    def test_one_color_per_employee_from_rng(self, totals: list[EmployeeTotal]) -> None:
        """Verifies colors are drawn once per employee from the given generator.

        Business context:
        The legend swatch reuses the slice color, so exactly one draw per
        employee is made and the sequence is reproducible from the seed.
        """
        expected_rng = random.Random(99)
        expected = [random_color(expected_rng) for _ in totals]
        slices = compute_slices(totals, random.Random(99))
        assert [s.color for s in slices] == expected

    def test_empty(self) -> None:
        """Verifies no slices for no totals."""
        assert compute_slices([], random.Random(1)) == []

    def test_pie_slice_end_angle(self) -> None:
        """Verifies end_angle is start plus sweep."""
        s = PieSlice("A", 1.0, 90.0, 45.0, "#646464")
        assert s.end_angle == 135.0


class TestChartPresenter:
    """Tests for ChartPresenter rendering."""

    def test_empty_totals_raise_no_data(self) -> None:
        """Verifies empty input raises NoDataError before any drawing."""
        with pytest.raises(NoDataError):
            ChartPresenter(rng=random.Random(1)).render_pie_chart([])

    def test_default_rng_created(self) -> None:
        """Verifies an unseeded generator is used when none is passed."""
        assert isinstance(ChartPresenter().rng, random.Random)

    @pytest.mark.skipif(not has_matplotlib(), reason="matplotlib not installed")
    def test_render_returns_png(self, totals: list[EmployeeTotal]) -> None:
        """Verifies render_pie_chart returns PNG bytes.

        Assertion Strategy:
        Validates bytes type and PNG magic header.
        """
        png = ChartPresenter(rng=random.Random(7)).render_pie_chart(totals)
        assert isinstance(png, bytes)
        assert png[:8] == PNG_MAGIC

    @pytest.mark.skipif(not has_matplotlib(), reason="matplotlib not installed")
    def test_render_is_800_by_600(self, totals: list[EmployeeTotal]) -> None:
        """Verifies the image has the fixed canvas size.

        Arrangement:
        Render a chart.

        Action:
        Read width and height from the PNG IHDR chunk.

        Assertion Strategy:
        Validates exactly Config.CHART_WIDTH x Config.CHART_HEIGHT.
        """
        png = ChartPresenter(rng=random.Random(7)).render_pie_chart(totals)
        width, height = struct.unpack(">II", png[16:24])
        assert (width, height) == (Config.CHART_WIDTH, Config.CHART_HEIGHT)

    @pytest.mark.skipif(not has_matplotlib(), reason="matplotlib not installed")
    def test_figure_closed_after_render(self, totals: list[EmployeeTotal]) -> None:
        """Verifies no matplotlib figures leak after rendering."""
        import matplotlib.pyplot as plt

        plt.close("all")
        ChartPresenter(rng=random.Random(7)).render_pie_chart(totals)
        assert plt.get_fignums() == []

    @pytest.mark.skipif(not has_matplotlib(), reason="matplotlib not installed")
    def test_names_with_markup_characters(self) -> None:
        """Verifies names containing '$' or '<' render without mathtext errors."""
        png = ChartPresenter(rng=random.Random(7)).render_pie_chart(
            [EmployeeTotal("Pay $5 <b>", 1.0)]
        )
        assert png[:8] == PNG_MAGIC


class TestEmployeeRowViewModel:
    """Tests for table row view model."""

    def test_low_hours_below_threshold(self) -> None:
        """Verifies rows under 100 hours carry the low-hours class."""
        row = EmployeeRowViewModel("Ann", 99.99)
        assert row.is_low_hours
        assert row.row_class_attr == ' class="low-hours"'

    def test_threshold_is_exclusive(self) -> None:
        """Verifies exactly 100 hours is not flagged."""
        row = EmployeeRowViewModel("Ann", 100.0)
        assert not row.is_low_hours
        assert row.row_class_attr == ""

    def test_name_escaped(self) -> None:
        """Verifies markup characters in names are escaped."""
        row = EmployeeRowViewModel("<script>alert('x')</script> & co", 1.0)
        assert row.name_display == "&lt;script&gt;alert(&#x27;x&#x27;)&lt;/script&gt; &amp; co"

    def test_to_html(self) -> None:
        """Verifies the rendered row markup."""
        assert EmployeeRowViewModel("Ann", 150.0).to_html() == (
            "<tr><td>Ann</td><td>150.00</td></tr>"
        )


class TestTablePresenter:
    """Tests for TablePresenter HTML output."""

    def test_document_shell(self, totals: list[EmployeeTotal]) -> None:
        """Verifies stylesheet, heading and header row are present."""
        doc = TablePresenter().render_table_html(totals)
        assert doc.startswith("<!DOCTYPE html>")
        assert "<style>" in doc
        assert ".low-hours" in doc
        assert "<h2>Employee Work Summary</h2>" in doc
        assert "<tr><th>Employee Name</th><th>Total Hours</th></tr>" in doc
        assert doc.rstrip().endswith("</html>")

    def test_one_row_per_employee_in_order(self, totals: list[EmployeeTotal]) -> None:
        """Verifies data rows follow the totals order with two decimals."""
        doc = TablePresenter().render_table_html(totals)
        cells = re.findall(r"<td>(.*?)</td><td>(.*?)</td>", doc)
        assert cells == [("Alice", "120.00"), ("Bob", "60.00"), ("Carol", "20.00")]

    def test_low_hours_flag_exact(self, totals: list[EmployeeTotal]) -> None:
        """Verifies only rows under 100 hours carry the low-hours class.

        Business context:
        Highlighted rows point managers to employees with few tracked hours.

        Assertion Strategy:
        Parse every data row and compare flag against hours.
        """
        doc = TablePresenter().render_table_html(totals)
        rows = re.findall(r"<tr( class=\"low-hours\")?><td>[^<]*</td><td>([^<]*)</td></tr>", doc)
        assert len(rows) == 3
        for flag, hours in rows:
            assert bool(flag) == (float(hours) < 100)

    def test_empty_totals_header_only(self) -> None:
        """Verifies empty input still yields a valid, header-only table."""
        doc = TablePresenter().render_table_html([])
        assert "<th>Employee Name</th>" in doc
        assert "<td>" not in doc
        assert "</table>" in doc

    def test_names_escaped_in_document(self) -> None:
        """Verifies injected markup cannot break the document."""
        doc = TablePresenter().render_table_html([EmployeeTotal("</table><b>x", 5.0)])
        assert "</table><b>x" not in doc
        assert "&lt;/table&gt;&lt;b&gt;x" in doc

    def test_negative_hours_rendered(self) -> None:
        """Verifies negative totals are shown and flagged as low."""
        doc = TablePresenter().render_table_html([EmployeeTotal("Inverted", -1.0)])
        assert '<tr class="low-hours"><td>Inverted</td><td>-1.00</td></tr>' in doc
