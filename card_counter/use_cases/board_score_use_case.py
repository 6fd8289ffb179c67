"""Scoring a live board, with optional persistence and comparison."""

from __future__ import annotations

import asyncio
from datetime import datetime
from datetime import timezone
from typing import List
from typing import Optional

from card_counter import LOGGER
from card_counter.entities.card import Board
from card_counter.entities.card import BoardReference
from card_counter.entities.report import BoardScoreReport
from card_counter.entities.snapshot import BoardSnapshot
from card_counter.entities.snapshot import ListDelta
from card_counter.entities.snapshot import ListSummary
from card_counter.use_cases.board_aggregator import BoardAggregator
from card_counter.use_cases.charts.scaling import format_number
from card_counter.use_cases.interfaces.kanban_source_interface import KanbanSourceInterface
from card_counter.use_cases.interfaces.snapshot_repository_interface import (
    SnapshotRepositoryInterface,
)
from card_counter.utils.exceptions import SourceUnavailable


class BoardScoreUseCase:
    """Fetches a board, summarizes it and records the snapshot."""

    def __init__(
        self,
        kanban_source: KanbanSourceInterface,
        snapshot_repository: SnapshotRepositoryInterface,
        aggregator: Optional[BoardAggregator] = None,
        timeout: Optional[float] = None,
    ):
        self.kanban_source = kanban_source
        self.snapshot_repository = snapshot_repository
        self.aggregator = aggregator or BoardAggregator()
        self.timeout = timeout

    async def list_boards(self) -> List[BoardReference]:
        try:
            return await asyncio.wait_for(self.kanban_source.list_boards(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise SourceUnavailable(f"Listing boards took longer than {self.timeout} seconds") from e

    async def fetch_board(self, board_id: str) -> Board:
        try:
            return await asyncio.wait_for(self.kanban_source.fetch_board(board_id), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise SourceUnavailable(
                f"Fetching board {board_id} took longer than {self.timeout} seconds",
                board_id=board_id,
            ) from e

    async def execute(
        self,
        board_id: str,
        name_filter: Optional[str] = None,
        save: bool = True,
        compare: bool = False,
    ) -> BoardScoreReport:
        """Score a board.

        The stored snapshot always holds every list of the board; the filter
        only narrows what is reported. Comparison runs against the newest
        snapshot stored before this one.

        Args:
            board_id: Board to score
            name_filter: Lists whose name contains this text are left out of the report
            save: Persist the snapshot
            compare: Report per-list changes since the newest stored snapshot

        Returns:
            The report of the board
        """
        board = await self.fetch_board(board_id)
        timestamp = datetime.now(timezone.utc).replace(microsecond=0)
        complete = self.aggregator.aggregate(board.lists)
        snapshot = BoardSnapshot(board_id=board.id, timestamp=timestamp, lists=complete.lists)
        summary = self.aggregator.aggregate(board.lists, name_filter) if name_filter else complete

        deltas = None
        baseline = None
        if compare:
            baseline = await self.snapshot_repository.load_latest(board.id)
            if baseline is None:
                LOGGER.info(f"No stored snapshot of {board.id} to compare with")
                deltas = []
            else:
                deltas = self.aggregator.calculate_deltas(snapshot.lists, baseline.lists, name_filter)

        if save:
            await self.snapshot_repository.save(snapshot)
            LOGGER.info(f"Stored snapshot of board {board.id} at {timestamp.isoformat()}")

        return BoardScoreReport(
            board=board.reference,
            timestamp=timestamp,
            summary=summary,
            deltas=deltas,
            baseline_timestamp=baseline.timestamp if baseline is not None else None,
            saved=save,
        )


def _with_delta(value: float, delta: Optional[float]) -> str:
    if delta is None:
        return format_number(value)
    sign = "+" if delta >= 0 else "-"
    return f"{format_number(value)} ({sign}{format_number(abs(delta))})"


def format_score_table(report: BoardScoreReport) -> str:
    """Plain text table of a report, one row per list plus the TOTAL row."""
    header = ["List", "Cards", "Score", "Estimated", "Unscored"]
    deltas = {delta.name: delta for delta in report.deltas or []}

    def row(summary: ListSummary, delta: Optional[ListDelta]) -> List[str]:
        delta = delta or ListDelta(name=summary.name)
        return [
            summary.name,
            _with_delta(summary.card_count, delta.card_count),
            _with_delta(summary.score, delta.score),
            _with_delta(summary.estimated, delta.estimated),
            _with_delta(summary.unscored_count, delta.unscored_count),
        ]

    rows = [row(summary, deltas.get(summary.name)) for summary in report.summary.lists]
    rows.append(row(report.summary.total, None))

    widths = [max(len(line[column]) for line in [header] + rows) for column in range(len(header))]
    lines = [f"{report.board.name} ({report.board.id})"]
    for line in [header] + rows:
        lines.append("  ".join(cell.ljust(width) for cell, width in zip(line, widths)).rstrip())
    if report.baseline_timestamp is not None:
        lines.append(f"Changes since {report.baseline_timestamp.isoformat()}")
    return "\n".join(lines) + "\n"
