from __future__ import annotations

from typing import Dict
from typing import Optional
from typing import Type

from card_counter.entities.burndown import BurndownSeries
from card_counter.entities.constants import OutputMode
from card_counter.settings.chart_settings import ChartSettings
from card_counter.use_cases.charts.ascii_renderer import AsciiChartRenderer
from card_counter.use_cases.charts.csv_renderer import CsvChartRenderer
from card_counter.use_cases.charts.csv_renderer import read_csv
from card_counter.use_cases.charts.scaling import ChartScale
from card_counter.use_cases.charts.svg_renderer import SvgChartRenderer
from card_counter.use_cases.interfaces.chart_renderer_interface import ChartRendererInterface

RENDERERS: Dict[OutputMode, Type[ChartRendererInterface]] = {
    OutputMode.CSV: CsvChartRenderer,
    OutputMode.ASCII: AsciiChartRenderer,
    OutputMode.SVG: SvgChartRenderer,
}


def get_renderer(mode: OutputMode, settings: Optional[ChartSettings] = None) -> ChartRendererInterface:
    return RENDERERS[OutputMode(mode)](settings or ChartSettings())


def render(series: BurndownSeries, mode: OutputMode, settings: Optional[ChartSettings] = None) -> str:
    """Render ``series`` in the requested output mode."""
    return get_renderer(mode, settings).render(series)


__all__ = [
    "AsciiChartRenderer",
    "ChartScale",
    "CsvChartRenderer",
    "RENDERERS",
    "SvgChartRenderer",
    "get_renderer",
    "read_csv",
    "render",
]
