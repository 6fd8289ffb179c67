"""API schema models for the board endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from card_counter.entities.card import BoardReference
from card_counter.entities.snapshot import ListDelta, ListSummary


class BoardListResponse(BaseModel):
    """Response model for the board list endpoint.

    Args:
        boards: Boards visible to the configured account
    """
    boards: List[BoardReference] = Field(description="Boards visible to the configured account")


class BoardScoreResponse(BaseModel):
    """Response model for the board score endpoint.

    Args:
        board: The scored board
        timestamp: When the board was read
        lists: Summary of every list surviving the filter
        total: Board-level total row
        deltas: Change of every list since the stored baseline, when requested
        baseline_timestamp: Time of the baseline snapshot the deltas refer to
        saved: Whether the snapshot was persisted
    """
    board: BoardReference = Field(description="The scored board")
    timestamp: datetime = Field(description="When the board was read")
    lists: List[ListSummary] = Field(description="Summary of every list surviving the filter")
    total: ListSummary = Field(description="Board-level total row")
    deltas: Optional[List[ListDelta]] = Field(None, description="Per-list change since the baseline")
    baseline_timestamp: Optional[datetime] = Field(None, description="Time of the baseline snapshot")
    saved: bool = Field(False, description="Whether the snapshot was persisted")
