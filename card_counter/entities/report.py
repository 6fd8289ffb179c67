from __future__ import annotations

from datetime import datetime
from typing import List
from typing import Optional

from pydantic import BaseModel
from pydantic import Field

from card_counter.entities.burndown import BurndownSeries
from card_counter.entities.card import BoardReference
from card_counter.entities.constants import OutputMode
from card_counter.entities.snapshot import BoardSummary
from card_counter.entities.snapshot import ListDelta


class BoardScoreReport(BaseModel):
    """Outcome of scoring a board once."""

    board: BoardReference
    timestamp: datetime
    summary: BoardSummary
    deltas: Optional[List[ListDelta]] = None
    baseline_timestamp: Optional[datetime] = None
    saved: bool = False


class BurndownChart(BaseModel):
    """A rendered burndown series."""

    series: BurndownSeries
    output: OutputMode
    content: str
    media_type: str = Field(description="Content type of the rendered document")
