from __future__ import annotations

from typing import List

from card_counter.entities.burndown import BurndownSeries
from card_counter.entities.constants import CSV_DATE_FORMAT
from card_counter.settings.chart_settings import ChartSettings
from card_counter.use_cases.charts.scaling import ChartScale
from card_counter.use_cases.charts.scaling import format_number
from card_counter.use_cases.charts.scaling import spread_indices
from card_counter.use_cases.interfaces.chart_renderer_interface import ChartRendererInterface

REMAINING_MARK = "*"
COMPLETED_MARK = "o"
OVERLAP_MARK = "@"
EMPTY_CELL = " "


class AsciiChartRenderer(ChartRendererInterface):
    """Plots the series on a fixed character grid for terminals.

    Remaining effort is drawn with ``*``, completed effort with ``o`` and
    cells holding both with ``@``.
    """

    def __init__(self, settings: ChartSettings):
        self.settings = settings
        self.columns = settings.ascii_columns
        self.rows = settings.ascii_rows

    def render(self, series: BurndownSeries) -> str:
        scale = ChartScale.fit(series, width=self.columns - 1, height=self.rows - 1)
        grid = self._plot(series, scale)

        labels = {
            0: format_number(scale.max_value),
            (self.rows - 1) // 2: format_number(scale.max_value / 2),
            self.rows - 1: "0",
        }
        label_width = max(len(label) for label in labels.values())

        lines = [self.settings.title]
        for row_index, row in enumerate(grid):
            label = labels.get(row_index, "")
            lines.append(f"{label:>{label_width}} |{''.join(row)}".rstrip())
        lines.append(f"{'':>{label_width}} +{'-' * self.columns}")
        date_line = self._date_axis(series)
        if date_line:
            lines.append(f"{'':>{label_width}}  {date_line}".rstrip())
        lines.append(
            f"{REMAINING_MARK} {self.settings.remaining_label}   "
            f"{COMPLETED_MARK} {self.settings.completed_label}   "
            f"{OVERLAP_MARK} both"
        )
        return "\n".join(lines) + "\n"

    def _plot(self, series: BurndownSeries, scale: ChartScale) -> List[List[str]]:
        grid = [[EMPTY_CELL] * self.columns for _ in range(self.rows)]

        def mark(column: int, row: int, symbol: str) -> None:
            current = grid[row][column]
            if current in (EMPTY_CELL, symbol):
                grid[row][column] = symbol
            else:
                grid[row][column] = OVERLAP_MARK

        for index, point in enumerate(series.points):
            column = round(scale.x(index))
            mark(column, round(scale.y(point.remaining)), REMAINING_MARK)
            mark(column, round(scale.y(point.completed)), COMPLETED_MARK)
        return grid

    def _date_axis(self, series: BurndownSeries) -> str:
        """Lay out first, last and evenly spaced dates without overlapping them."""
        if series.is_empty:
            return ""

        texts = [day.strftime(CSV_DATE_FORMAT) for day in series.dates]
        label_length = len(texts[0])
        scale = ChartScale.fit(series, width=self.columns - 1, height=1)
        axis = [EMPTY_CELL] * self.columns

        def start_of(index: int) -> int:
            centre = round(scale.x(index))
            return min(max(centre - label_length // 2, 0), self.columns - label_length)

        taken: List[range] = []

        def place(index: int) -> None:
            start = start_of(index)
            span = range(start - 1, start + label_length + 1)
            if any(start < used.stop and used.start < start + label_length for used in taken):
                return
            axis[start:start + label_length] = texts[index]
            taken.append(span)

        place(0)
        if len(texts) > 1:
            place(len(texts) - 1)
        limit = max(self.columns // (label_length + 2), 2)
        for index in spread_indices(len(texts), limit):
            place(index)
        return "".join(axis)
