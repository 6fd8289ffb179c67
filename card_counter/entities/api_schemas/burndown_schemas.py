"""API schema models for the burndown endpoints."""

from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional

from pydantic import BaseModel, Field

from card_counter.entities.constants import ISO_DATE_FORMAT, OutputMode
from card_counter.entities.snapshot import ListDelta

PLACEHOLDER_DATE = "YYYY-MM-DD"
PLACEHOLDER_BOARD = "<board-id>"


class BurndownCommandRequest(BaseModel):
    """Chat-style burndown request.

    Args:
        text: Command text such as ``burndown from 2020-01-01 to 2020-01-14 for 3em95wSl``
        output: Format of the rendered chart
    """
    text: str = Field("", description="burndown from YYYY-MM-DD to YYYY-MM-DD for <board-id>")
    output: OutputMode = Field(OutputMode.SVG, description="Format of the rendered chart")


class BurndownCommand(BaseModel):
    """The parts of a burndown command; any of them may be missing."""

    start: Optional[str] = None
    end: Optional[str] = None
    board_id: Optional[str] = None

    @classmethod
    def parse(cls, text: str) -> "BurndownCommand":
        """Pick the words following ``from``, ``to`` and ``for`` out of ``text``."""
        values = {}
        keywords = {"from": "start", "to": "end", "for": "board_id"}
        tokens = text.split()
        for keyword, value in zip(tokens, tokens[1:]):
            field = keywords.get(keyword.lower())
            if field is not None:
                values[field] = value
        return cls(**values)

    @classmethod
    def for_two_weeks_ago(cls, board_id: Optional[str], today: Optional[date] = None) -> "BurndownCommand":
        """The two weeks ending tomorrow, for ``board_id``."""
        end = (today or date.today()) + timedelta(days=1)
        start = end - timedelta(weeks=2)
        return cls(
            start=start.strftime(ISO_DATE_FORMAT),
            end=end.strftime(ISO_DATE_FORMAT),
            board_id=board_id,
        )

    @property
    def is_complete(self) -> bool:
        return None not in (self.start, self.end, self.board_id)

    def helper_string(self) -> Optional[str]:
        """Usage hint echoing the given parts, or None when nothing is missing."""
        if self.is_complete:
            return None
        return (
            f"/card-counter burndown from {self.start or PLACEHOLDER_DATE} "
            f"to {self.end or PLACEHOLDER_DATE} for {self.board_id or PLACEHOLDER_BOARD}"
        )


class BurndownComparisonResponse(BaseModel):
    """Rendered burndown together with the per-list changes over the range.

    Args:
        board_id: The charted board
        output: Format of ``content``
        media_type: Content type of ``content``
        content: The rendered chart
        comparison: Change of every list between the snapshot before the range and the last day
    """
    board_id: str = Field(description="The charted board")
    output: OutputMode = Field(description="Format of the rendered chart")
    media_type: str = Field(description="Content type of the rendered chart")
    content: str = Field(description="The rendered chart")
    comparison: List[ListDelta] = Field(
        default_factory=list,
        description="Per-list change since the snapshot preceding the range; empty without one",
    )
