"""API schema models package."""

__all__ = [
    "BoardListResponse",
    "BoardScoreResponse",
    "BurndownComparisonResponse",
    "BurndownCommand",
    "BurndownCommandRequest",
]

from card_counter.entities.api_schemas.burndown_schemas import (
    BurndownCommand,
    BurndownComparisonResponse,
    BurndownCommandRequest,
)
from card_counter.entities.api_schemas.score_schemas import (
    BoardListResponse,
    BoardScoreResponse,
)
