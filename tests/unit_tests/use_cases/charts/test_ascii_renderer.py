"""Unit tests for the ASCII chart renderer."""

import unittest
from datetime import date

from card_counter.entities.burndown import BurndownSeries, TimeSeriesPoint
from card_counter.settings.chart_settings import ChartSettings
from card_counter.use_cases.charts.ascii_renderer import AsciiChartRenderer


def series_of(*values):
    return BurndownSeries(
        points=[
            TimeSeriesPoint(date=date(2020, 5, day), remaining=remaining, completed=completed)
            for day, (remaining, completed) in enumerate(values, start=1)
        ]
    )


class TestAsciiChartRenderer(unittest.TestCase):
    """Test suite for AsciiChartRenderer."""

    def setUp(self):
        self.renderer = AsciiChartRenderer(ChartSettings())

    def test_layout(self):
        """Title, 15 grid rows, an axis, dates and a legend."""
        # Act
        lines = self.renderer.render(series_of((10, 0), (0, 10))).splitlines()

        # Assert
        self.assertEqual(lines[0], "Burndown Chart")
        self.assertEqual(len(lines), 1 + 15 + 1 + 1 + 1)
        self.assertEqual(lines[16], "   +" + "-" * 60)
        self.assertIn("* Remaining", lines[-1])
        self.assertIn("o Completed", lines[-1])

    def test_marks_and_labels(self):
        """Values land on the expected rows with top, middle and bottom labels."""
        # Act
        lines = self.renderer.render(series_of((10, 0), (0, 10))).splitlines()

        # Assert
        self.assertTrue(lines[1].startswith("10 |*"))
        self.assertTrue(lines[1].endswith("o"))
        self.assertTrue(lines[8].startswith(" 5 |"))
        self.assertTrue(lines[15].startswith(" 0 |o"))
        self.assertTrue(lines[15].endswith("*"))

    def test_dates_do_not_overlap(self):
        """First and last dates are labelled and labels stay apart."""
        # Arrange
        series = series_of(*[(30 - day, day) for day in range(30)])

        # Act
        date_line = self.renderer.render(series).splitlines()[17].strip()

        # Assert
        self.assertTrue(date_line.startswith("01-05-20"))
        self.assertTrue(date_line.endswith("30-05-20"))
        for label in date_line.split():
            self.assertEqual(len(label), 8)

    def test_overlap_mark(self):
        """Remaining and completed on the same cell are drawn with @."""
        # Act
        text = self.renderer.render(series_of((3, 3)))

        # Assert
        self.assertIn("@", text)

    def test_empty_series(self):
        """An empty series renders the frame only."""
        # Act
        text = self.renderer.render(BurndownSeries())

        # Assert
        self.assertIn("+" + "-" * 60, text)
        grid = text.splitlines()[1:16]
        self.assertFalse(any("*" in row or "o" in row for row in grid))
