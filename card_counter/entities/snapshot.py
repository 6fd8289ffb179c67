from __future__ import annotations

from datetime import date
from datetime import datetime
from datetime import timezone
from typing import List
from typing import Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator

from card_counter.entities.constants import TOTAL_ROW_NAME


class ListSummary(BaseModel):
    """Aggregated effort of one kanban list."""

    name: str
    card_count: int = Field(default=0, ge=0)
    score: float = Field(default=0.0)
    estimated: float = Field(default=0.0)
    unscored_count: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)

    def combined_with(self, other: ListSummary) -> ListSummary:
        """Return a summary adding ``other``'s counters to this one, keeping this name."""
        return ListSummary(
            name=self.name,
            card_count=self.card_count + other.card_count,
            score=self.score + other.score,
            estimated=self.estimated + other.estimated,
            unscored_count=self.unscored_count + other.unscored_count,
        )


class BoardSummary(BaseModel):
    """Per-list summaries of a board plus the board-level total row."""

    lists: List[ListSummary] = Field(default_factory=list)
    total: ListSummary = Field(default_factory=lambda: ListSummary(name=TOTAL_ROW_NAME))

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_lists(cls, lists: List[ListSummary]) -> BoardSummary:
        total = ListSummary(name=TOTAL_ROW_NAME)
        for summary in lists:
            total = total.combined_with(summary)
        return cls(lists=list(lists), total=total)


class BoardSnapshot(BaseModel):
    """The aggregated state of a board at one point in time.

    Snapshots are never mutated; a newer snapshot supersedes an older one.
    """

    board_id: str
    timestamp: datetime
    lists: List[ListSummary] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @field_validator("timestamp")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @property
    def day(self) -> date:
        return self.timestamp.date()

    @property
    def unix_timestamp(self) -> int:
        return int(self.timestamp.timestamp())

    @classmethod
    def from_unix(cls, board_id: str, time_stamp: int, lists: List[ListSummary]) -> BoardSnapshot:
        return cls(
            board_id=board_id,
            timestamp=datetime.fromtimestamp(int(time_stamp), tz=timezone.utc),
            lists=lists,
        )

    @property
    def summary(self) -> BoardSummary:
        return BoardSummary.from_lists(self.lists)


class ListDelta(BaseModel):
    """Change of a list between a baseline snapshot and a newer one.

    The counters are ``None`` when the list did not exist in the baseline.
    """

    name: str
    card_count: Optional[int] = None
    score: Optional[float] = None
    estimated: Optional[float] = None
    unscored_count: Optional[int] = None

    model_config = ConfigDict(frozen=True)

    @property
    def baseline_found(self) -> bool:
        return self.card_count is not None
