from __future__ import annotations

from abc import ABC
from abc import abstractmethod
from typing import List

from card_counter.entities.card import Board
from card_counter.entities.card import BoardReference


class KanbanSourceInterface(ABC):
    """Capability interface of a kanban system the cards are read from."""

    @abstractmethod
    async def fetch_board(self, board_id: str) -> Board:
        """Fetch a board with its ordered lists, each holding its ordered cards.

        Raises:
            BoardNotFound: If the source has no such board.
            SourceUnavailable: If the source cannot be reached or refuses the request.
        """
        pass

    @abstractmethod
    async def list_boards(self) -> List[BoardReference]:
        """List the boards visible to the configured account."""
        pass
