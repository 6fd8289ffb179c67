"""Coordinate model shared by the chart renderers."""

from __future__ import annotations

import math
from typing import List

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from card_counter.entities.burndown import BurndownSeries


def nice_ceiling(value: float) -> float:
    """Round ``value`` up to 1, 2, 2.5, 5 or 10 times a power of ten, never below 1."""
    if value <= 1:
        return 1.0
    magnitude = 10 ** math.floor(math.log10(value))
    for step in (1, 2, 2.5, 5, 10):
        candidate = step * magnitude
        if candidate >= value:
            return float(candidate)
    return float(10 * magnitude)


def format_number(value: float) -> str:
    """Print integral values without a fractional part, others with at most two decimals."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def spread_indices(count: int, limit: int) -> List[int]:
    """Pick at most ``limit`` evenly spaced indices of ``range(count)``, always first and last."""
    if count <= 0:
        return []
    if count <= limit:
        return list(range(count))
    if limit <= 1:
        return [0]
    step = (count - 1) / (limit - 1)
    return sorted({round(i * step) for i in range(limit)})


class ChartScale(BaseModel):
    """Maps series indices and values to drawing coordinates.

    ``x`` runs left to right across ``width`` starting at ``padding``; ``y``
    runs top to bottom, so the largest value sits at ``padding`` and zero at
    ``padding + height``.
    """

    width: float = Field(gt=0)
    height: float = Field(gt=0)
    padding: float = Field(default=0, ge=0)
    point_count: int = Field(default=0, ge=0)
    max_value: float = Field(default=1.0, gt=0)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def fit(cls, series: BurndownSeries, width: float, height: float, padding: float = 0) -> ChartScale:
        return cls(
            width=width,
            height=height,
            padding=padding,
            point_count=len(series),
            max_value=nice_ceiling(series.max_value),
        )

    def x(self, index: int) -> float:
        if self.point_count <= 1:
            return self.padding
        return self.padding + index / (self.point_count - 1) * self.width

    def y(self, value: float) -> float:
        return self.padding + (1 - value / self.max_value) * self.height

    def y_ticks(self, count: int) -> List[float]:
        """``count + 1`` evenly spaced values from zero to ``max_value``."""
        count = max(count, 1)
        return [self.max_value * i / count for i in range(count + 1)]
