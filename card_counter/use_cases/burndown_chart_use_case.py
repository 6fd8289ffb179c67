from __future__ import annotations

from datetime import date
from datetime import datetime
from typing import Optional
from typing import Union

from card_counter import LOGGER
from card_counter.entities.constants import CONTENT_TYPES
from card_counter.entities.constants import ISO_DATE_FORMAT
from card_counter.entities.constants import OutputMode
from card_counter.entities.report import BurndownChart
from card_counter.settings.chart_settings import ChartSettings
from card_counter.use_cases.burndown_series_builder import BurndownSeriesBuilder
from card_counter.use_cases.charts import render
from card_counter.utils.exceptions import DateRangeError


def parse_date(value: Union[str, date], name: str = "date") -> date:
    """Accept a ``date`` or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value.strip(), ISO_DATE_FORMAT).date()
    except (AttributeError, ValueError) as e:
        raise DateRangeError(
            f"Invalid {name} {value!r}, expected YYYY-MM-DD",
            **{name: str(value)},
        ) from e


class BurndownChartUseCase:
    """Builds a burndown series and renders it."""

    def __init__(
        self,
        series_builder: BurndownSeriesBuilder,
        chart_settings: Optional[ChartSettings] = None,
        default_filter: Optional[str] = None,
    ):
        self.series_builder = series_builder
        self.chart_settings = chart_settings or ChartSettings()
        self.default_filter = default_filter

    async def execute(
        self,
        board_id: str,
        start: Union[str, date],
        end: Union[str, date],
        name_filter: Optional[str] = None,
        output: OutputMode = OutputMode.CSV,
        compare: bool = False,
    ) -> BurndownChart:
        start_date = parse_date(start, "start")
        end_date = parse_date(end, "end")
        output = OutputMode(output)

        series = await self.series_builder.build(
            board_id,
            start_date,
            end_date,
            name_filter=name_filter if name_filter is not None else self.default_filter,
            compare=compare,
        )
        LOGGER.info(f"Rendering {len(series)} day burndown of {board_id} as {output.value}")
        return BurndownChart(
            series=series,
            output=output,
            content=render(series, output, self.chart_settings),
            media_type=CONTENT_TYPES[output],
        )
