from __future__ import annotations

from abc import ABC
from abc import abstractmethod

from card_counter.entities.burndown import BurndownSeries


class ChartRendererInterface(ABC):
    @abstractmethod
    def render(self, series: BurndownSeries) -> str:
        """Render a burndown series; an empty series yields a header/frame-only document."""
        pass
