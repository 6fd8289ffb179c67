from __future__ import annotations

from abc import ABC
from abc import abstractmethod
from datetime import date
from typing import List
from typing import Optional

from card_counter.entities.snapshot import BoardSnapshot


class SnapshotRepositoryInterface(ABC):
    """Persists and retrieves dated board snapshots.

    Absent data is reported as an empty result, never as an error. Storage
    failures are raised as ``RepositoryUnavailable``.
    """

    @abstractmethod
    async def save(self, snapshot: BoardSnapshot) -> None:
        """Store a snapshot under ``(board_id, timestamp)``; the last write for a key wins."""
        pass

    @abstractmethod
    async def load_range(
        self,
        board_id: str,
        start_date: date,
        end_date: date,
    ) -> List[BoardSnapshot]:
        """Return the snapshots stamped within both calendar days inclusive, oldest first."""
        pass

    @abstractmethod
    async def load_latest_before(self, board_id: str, day: date) -> Optional[BoardSnapshot]:
        """Return the newest snapshot stamped before ``day`` begins."""
        pass

    @abstractmethod
    async def load_latest(self, board_id: str) -> Optional[BoardSnapshot]:
        """Return the newest snapshot of a board."""
        pass
