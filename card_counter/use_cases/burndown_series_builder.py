"""Reconstruction of a burndown series from stored board snapshots."""

from __future__ import annotations

import asyncio
from datetime import date
from datetime import timedelta
from typing import Dict
from typing import Iterator
from typing import List
from typing import Optional
from typing import Sequence
from typing import Tuple

from card_counter import LOGGER
from card_counter.entities.burndown import BurndownSeries
from card_counter.entities.burndown import TimeSeriesPoint
from card_counter.entities.constants import DEFAULT_DONE_LIST_MARKER
from card_counter.entities.snapshot import BoardSnapshot
from card_counter.entities.snapshot import ListSummary
from card_counter.use_cases.board_aggregator import BoardAggregator
from card_counter.use_cases.board_aggregator import filter_lists
from card_counter.use_cases.interfaces.snapshot_repository_interface import (
    SnapshotRepositoryInterface,
)
from card_counter.utils.exceptions import DateRangeError
from card_counter.utils.exceptions import RepositoryUnavailable


def iter_days(start_date: date, end_date: date) -> Iterator[date]:
    day = start_date
    while day <= end_date:
        yield day
        day += timedelta(days=1)


def split_score(
    lists: Sequence[ListSummary],
    name_filter: Optional[str] = None,
    done_marker: str = DEFAULT_DONE_LIST_MARKER,
) -> Tuple[float, float]:
    """Return ``(remaining, completed)`` effort of a snapshot's lists.

    Completed effort is the score of the lists whose name contains
    ``done_marker``; remaining is the rest of the board's total score.
    """
    surviving = filter_lists(lists, name_filter)
    total = sum(summary.score for summary in surviving)
    completed = sum(summary.score for summary in surviving if done_marker in summary.name)
    return total - completed, completed


class BurndownSeriesBuilder:
    """Builds day-by-day burndown series from a snapshot repository.

    Days without a snapshot repeat the last known state of the board. Days
    before the first known state are left out of the series.
    """

    def __init__(
        self,
        snapshot_repository: SnapshotRepositoryInterface,
        done_marker: str = DEFAULT_DONE_LIST_MARKER,
        timeout: Optional[float] = None,
    ):
        """Initialize the builder.

        Args:
            snapshot_repository: Store the snapshots are read from
            done_marker: List name fragment marking completed work
            timeout: Seconds the snapshot loads may take, no limit when None
        """
        self.snapshot_repository = snapshot_repository
        self.done_marker = done_marker
        self.timeout = timeout

    async def build(
        self,
        board_id: str,
        start_date: date,
        end_date: date,
        name_filter: Optional[str] = None,
        compare: bool = False,
    ) -> BurndownSeries:
        """Build the burndown series of a board over ``[start_date, end_date]``.

        Args:
            board_id: Board whose snapshots are read
            start_date: First calendar day of the series
            end_date: Last calendar day of the series, inclusive
            name_filter: Lists whose name contains this text are ignored
            compare: Also diff the final day against the snapshot preceding the range

        Returns:
            The series, with ``comparison`` filled in when ``compare`` is set

        Raises:
            DateRangeError: If ``end_date`` is before ``start_date``
            RepositoryUnavailable: If the snapshots cannot be loaded in time
        """
        if end_date < start_date:
            raise DateRangeError(
                f"End date {end_date.isoformat()} is before start date {start_date.isoformat()}",
                start=start_date.isoformat(),
                end=end_date.isoformat(),
            )

        LOGGER.debug(f"Building burndown for {board_id} from {start_date} to {end_date}")
        snapshots, seed = await self._load(board_id, start_date, end_date)

        points: List[TimeSeriesPoint] = []
        final_snapshot: Optional[BoardSnapshot] = None
        for day, snapshot in self._select_daily(snapshots, seed, start_date, end_date):
            remaining, completed = split_score(snapshot.lists, name_filter, self.done_marker)
            points.append(TimeSeriesPoint(date=day, remaining=remaining, completed=completed))
            final_snapshot = snapshot

        comparison = None
        if compare:
            comparison = []
            if final_snapshot is not None and seed is not None:
                comparison = BoardAggregator.calculate_deltas(
                    final_snapshot.lists, seed.lists, name_filter
                )
            else:
                LOGGER.info(f"No snapshot of {board_id} precedes {start_date}, nothing to compare")

        return BurndownSeries(board_id=board_id, points=points, comparison=comparison)

    async def _load(
        self,
        board_id: str,
        start_date: date,
        end_date: date,
    ) -> Tuple[List[BoardSnapshot], Optional[BoardSnapshot]]:
        loads = asyncio.gather(
            self.snapshot_repository.load_range(board_id, start_date, end_date),
            self.snapshot_repository.load_latest_before(board_id, start_date),
        )
        try:
            snapshots, seed = await asyncio.wait_for(loads, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise RepositoryUnavailable(
                f"Loading snapshots of board {board_id} took longer than {self.timeout} seconds",
                board_id=board_id,
            ) from e
        return list(snapshots), seed

    @staticmethod
    def _select_daily(
        snapshots: Sequence[BoardSnapshot],
        seed: Optional[BoardSnapshot],
        start_date: date,
        end_date: date,
    ) -> Iterator[Tuple[date, BoardSnapshot]]:
        # Ascending input, so the last snapshot of a day overwrites earlier ones
        latest_per_day: Dict[date, BoardSnapshot] = {}
        for snapshot in sorted(snapshots, key=lambda item: item.timestamp):
            latest_per_day[snapshot.day] = snapshot

        current = seed
        for day in iter_days(start_date, end_date):
            current = latest_per_day.get(day, current)
            if current is None:
                continue
            yield day, current
