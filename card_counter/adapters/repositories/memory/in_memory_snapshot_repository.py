from __future__ import annotations

from datetime import date
from datetime import datetime
from datetime import time
from datetime import timedelta
from datetime import timezone
from typing import Dict
from typing import Iterable
from typing import List
from typing import Optional

from card_counter.entities.snapshot import BoardSnapshot
from card_counter.use_cases.interfaces.snapshot_repository_interface import (
    SnapshotRepositoryInterface,
)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def snapshots_in_range(
    snapshots: Iterable[BoardSnapshot],
    start_date: date,
    end_date: date,
) -> List[BoardSnapshot]:
    """Snapshots stamped from the start of ``start_date`` up to the end of ``end_date``, oldest first."""
    lower = start_of_day(start_date)
    upper = start_of_day(end_date + timedelta(days=1))
    return sorted(
        (snapshot for snapshot in snapshots if lower <= snapshot.timestamp < upper),
        key=lambda snapshot: snapshot.timestamp,
    )


def latest_before(snapshots: Iterable[BoardSnapshot], day: date) -> Optional[BoardSnapshot]:
    boundary = start_of_day(day)
    earlier = [snapshot for snapshot in snapshots if snapshot.timestamp < boundary]
    return max(earlier, key=lambda snapshot: snapshot.timestamp, default=None)


class InMemorySnapshotRepository(SnapshotRepositoryInterface):
    """Keeps snapshots in a dictionary for the lifetime of the process."""

    def __init__(self):
        self._snapshots: Dict[str, Dict[int, BoardSnapshot]] = {}

    async def save(self, snapshot: BoardSnapshot) -> None:
        self._snapshots.setdefault(snapshot.board_id, {})[snapshot.unix_timestamp] = snapshot

    async def load_range(self, board_id: str, start_date: date, end_date: date) -> List[BoardSnapshot]:
        return snapshots_in_range(self._board(board_id), start_date, end_date)

    async def load_latest_before(self, board_id: str, day: date) -> Optional[BoardSnapshot]:
        return latest_before(self._board(board_id), day)

    async def load_latest(self, board_id: str) -> Optional[BoardSnapshot]:
        return max(self._board(board_id), key=lambda snapshot: snapshot.timestamp, default=None)

    def _board(self, board_id: str) -> List[BoardSnapshot]:
        return list(self._snapshots.get(board_id, {}).values())
