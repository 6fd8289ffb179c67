from __future__ import annotations

from typing import List
from xml.sax.saxutils import escape

from card_counter.entities.burndown import BurndownSeries
from card_counter.entities.constants import ISO_DATE_FORMAT
from card_counter.settings.chart_settings import ChartSettings
from card_counter.use_cases.charts.scaling import ChartScale
from card_counter.use_cases.charts.scaling import format_number
from card_counter.use_cases.charts.scaling import spread_indices
from card_counter.use_cases.interfaces.chart_renderer_interface import ChartRendererInterface

REMAINING_COLOR = "#d9534f"
COMPLETED_COLOR = "#5cb85c"
AXIS_COLOR = "#333333"
GRID_COLOR = "#cccccc"
TEXT_COLOR = "#555555"
FONT = 'font-family="Helvetica, Arial, sans-serif"'


class SvgChartRenderer(ChartRendererInterface):
    """Renders a standalone SVG document with one polyline per effort curve."""

    def __init__(self, settings: ChartSettings):
        self.settings = settings

    def render(self, series: BurndownSeries) -> str:
        settings = self.settings
        scale = ChartScale.fit(series, settings.width, settings.height, settings.padding)
        pad = settings.padding
        total_width = settings.width + 2 * pad
        total_height = settings.height + 2 * pad
        bottom = pad + settings.height
        right = pad + settings.width

        parts = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{total_width}" height="{total_height}" '
            f'viewBox="0 0 {total_width} {total_height}">',
            f'<rect x="0" y="0" width="{total_width}" height="{total_height}" fill="#ffffff"/>',
            f'<text x="{total_width / 2:.1f}" y="{max(pad / 2, 16):.1f}" font-size="16" font-weight="600" '
            f'{FONT} fill="{AXIS_COLOR}" text-anchor="middle">{escape(settings.title)}</text>',
        ]
        parts.extend(self._grid(scale, pad, right))
        parts.append(
            f'<line x1="{pad}" y1="{bottom}" x2="{right}" y2="{bottom}" stroke="{AXIS_COLOR}" stroke-width="1"/>'
        )
        parts.append(
            f'<line x1="{pad}" y1="{pad}" x2="{pad}" y2="{bottom}" stroke="{AXIS_COLOR}" stroke-width="1"/>'
        )

        if not series.is_empty:
            remaining = [scale.y(point.remaining) for point in series.points]
            completed = [scale.y(point.completed) for point in series.points]
            parts.append(self._polyline(scale, remaining, REMAINING_COLOR))
            parts.append(self._polyline(scale, completed, COMPLETED_COLOR))
            parts.extend(self._date_labels(series, scale, bottom))

        parts.extend(self._legend(right, pad))
        parts.append("</svg>")
        return "\n".join(parts) + "\n"

    def _grid(self, scale: ChartScale, pad: float, right: float) -> List[str]:
        lines = []
        for value in scale.y_ticks(self.settings.grid_lines):
            y = scale.y(value)
            if value > 0:
                lines.append(
                    f'<line x1="{pad}" y1="{y:.1f}" x2="{right}" y2="{y:.1f}" '
                    f'stroke="{GRID_COLOR}" stroke-width="1" stroke-dasharray="4 4"/>'
                )
            lines.append(
                f'<text x="{pad - 8}" y="{y + 4:.1f}" font-size="11" {FONT} fill="{TEXT_COLOR}" '
                f'text-anchor="end">{format_number(round(value, 2))}</text>'
            )
        return lines

    @staticmethod
    def _polyline(scale: ChartScale, ys: List[float], color: str) -> str:
        points = " ".join(f"{scale.x(index):.1f},{y:.1f}" for index, y in enumerate(ys))
        return f'<polyline points="{points}" fill="none" stroke="{color}" stroke-width="2"/>'

    def _date_labels(self, series: BurndownSeries, scale: ChartScale, bottom: float) -> List[str]:
        labels = []
        for index in spread_indices(len(series), self.settings.max_x_labels):
            text = series.points[index].date.strftime(ISO_DATE_FORMAT)
            labels.append(
                f'<text x="{scale.x(index):.1f}" y="{bottom + 20}" font-size="10" {FONT} '
                f'fill="{TEXT_COLOR}" text-anchor="middle">{text}</text>'
            )
        return labels

    def _legend(self, right: float, pad: float) -> List[str]:
        entries = [
            (self.settings.remaining_label, REMAINING_COLOR),
            (self.settings.completed_label, COMPLETED_COLOR),
        ]
        legend = []
        y = max(pad / 2, 16) + 18
        for offset, (label, color) in enumerate(entries):
            cx = right - 180 + offset * 100
            legend.append(f'<circle cx="{cx}" cy="{y - 4:.1f}" r="5" fill="{color}"/>')
            legend.append(
                f'<text x="{cx + 10}" y="{y:.1f}" font-size="12" {FONT} '
                f'fill="{TEXT_COLOR}">{escape(label)}</text>'
            )
        return legend
