from __future__ import annotations

from card_counter.use_cases.interfaces.chart_renderer_interface import ChartRendererInterface
from card_counter.use_cases.interfaces.kanban_source_interface import KanbanSourceInterface
from card_counter.use_cases.interfaces.snapshot_repository_interface import (
    SnapshotRepositoryInterface,
)

__all__ = [
    "ChartRendererInterface",
    "KanbanSourceInterface",
    "SnapshotRepositoryInterface",
]
