from __future__ import annotations

import csv
import io
from datetime import datetime
from typing import List

from card_counter.entities.burndown import BurndownSeries
from card_counter.entities.burndown import TimeSeriesPoint
from card_counter.entities.constants import CSV_DATE_FORMAT
from card_counter.settings.chart_settings import ChartSettings
from card_counter.use_cases.interfaces.chart_renderer_interface import ChartRendererInterface


def csv_number(value: float) -> str:
    """Exact text of ``value``; integral values are written without a fraction."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


class CsvChartRenderer(ChartRendererInterface):
    """Renders ``Date,Remaining,Completed`` rows, one per point."""

    def __init__(self, settings: ChartSettings):
        self.settings = settings

    def render(self, series: BurndownSeries) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(["Date", self.settings.remaining_label, self.settings.completed_label])
        for point in series.points:
            writer.writerow(
                [
                    point.date.strftime(CSV_DATE_FORMAT),
                    csv_number(point.remaining),
                    csv_number(point.completed),
                ]
            )
        return buffer.getvalue()


def read_csv(text: str) -> List[TimeSeriesPoint]:
    """Parse rendered CSV back into points; the header row is skipped whatever its labels."""
    reader = csv.reader(io.StringIO(text))
    next(reader, None)
    points = []
    for row in reader:
        if not row:
            continue
        day, remaining, completed = row
        points.append(
            TimeSeriesPoint(
                date=datetime.strptime(day, CSV_DATE_FORMAT).date(),
                remaining=float(remaining),
                completed=float(completed),
            )
        )
    return points
