from __future__ import annotations

import datetime as dt
from typing import List
from typing import Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import model_validator

from card_counter.entities.snapshot import ListDelta


class TimeSeriesPoint(BaseModel):
    date: dt.date
    remaining: float
    completed: float

    model_config = ConfigDict(frozen=True)


class BurndownSeries(BaseModel):
    """Day-by-day burndown points, ascending by date without duplicates."""

    board_id: Optional[str] = None
    points: List[TimeSeriesPoint] = Field(default_factory=list)
    comparison: Optional[List[ListDelta]] = None

    @model_validator(mode="after")
    def _check_order(self) -> BurndownSeries:
        for previous, current in zip(self.points, self.points[1:]):
            if current.date <= previous.date:
                raise ValueError(
                    f"Burndown points must be strictly ascending by date: "
                    f"{previous.date} is followed by {current.date}"
                )
        return self

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def dates(self) -> List[dt.date]:
        return [point.date for point in self.points]

    @property
    def max_value(self) -> float:
        if not self.points:
            return 0.0
        return max(max(point.remaining, point.completed) for point in self.points)
