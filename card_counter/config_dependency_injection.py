"""Dependency injection configuration for card counter."""

from __future__ import annotations

from typing import Optional

from lagom import Container, Singleton

from card_counter import LOGGER
from card_counter.adapters.kanban.jira_kanban_source import JiraKanbanSource
from card_counter.adapters.kanban.trello_kanban_source import TrelloKanbanSource
from card_counter.adapters.repositories.file_storage.json_snapshot_repository import (
    JsonFileSnapshotRepository,
)
from card_counter.adapters.repositories.memory.in_memory_snapshot_repository import (
    InMemorySnapshotRepository,
)
from card_counter.adapters.repositories.sql.sql_snapshot_repository import SqlSnapshotRepository
from card_counter.entities.constants import KanbanType, StorageType
from card_counter.frameworks.api.api_endpoint import APIEndpoint, APIEndpointConfig
from card_counter.frameworks.api.endpoints import BoardsEndpoint, BurndownEndpoint, HealthCheckEndpoint
from card_counter.frameworks.api.registry import SubServiceEndpoints
from card_counter.settings import (
    CardCounterSettings,
    ChartSettings,
    JiraConnectionSettings,
    StorageSettings,
    TrelloSettings,
)
from card_counter.use_cases.board_aggregator import BoardAggregator
from card_counter.use_cases.board_score_use_case import BoardScoreUseCase
from card_counter.use_cases.burndown_chart_use_case import BurndownChartUseCase
from card_counter.use_cases.burndown_series_builder import BurndownSeriesBuilder
from card_counter.use_cases.interfaces.kanban_source_interface import KanbanSourceInterface
from card_counter.use_cases.interfaces.snapshot_repository_interface import (
    SnapshotRepositoryInterface,
)

_container: Optional[Container] = None


def create_kanban_source(c: Container) -> KanbanSourceInterface:
    kanban = c[CardCounterSettings].kanban
    LOGGER.info(f"Using the {kanban.value} kanban source")
    if kanban == KanbanType.JIRA:
        return JiraKanbanSource(c[JiraConnectionSettings])
    return TrelloKanbanSource(c[TrelloSettings], request_timeout=c[CardCounterSettings].fetch_timeout)


def create_snapshot_repository(c: Container) -> SnapshotRepositoryInterface:
    storage = c[CardCounterSettings].storage
    LOGGER.info(f"Using the {storage.value} snapshot store")
    if storage == StorageType.SQL:
        return SqlSnapshotRepository(c[StorageSettings])
    if storage == StorageType.MEMORY:
        return InMemorySnapshotRepository()
    return JsonFileSnapshotRepository(c[StorageSettings])


def configure_container(settings: Optional[CardCounterSettings] = None) -> Container:
    """Configure the dependency injection container.

    Args:
        settings: Application settings, read from the environment when omitted

    Returns:
        Configured Lagom container
    """
    container = Container()

    container[CardCounterSettings] = Singleton(lambda: settings or CardCounterSettings())
    container[TrelloSettings] = Singleton(lambda: TrelloSettings())
    container[JiraConnectionSettings] = Singleton(lambda: JiraConnectionSettings())
    container[StorageSettings] = Singleton(lambda: StorageSettings())
    container[ChartSettings] = Singleton(lambda: ChartSettings())
    container[APIEndpointConfig] = Singleton(lambda: APIEndpointConfig())

    # A) Bind INTERFACE -> ADAPTER
    container[KanbanSourceInterface] = Singleton(create_kanban_source)
    container[SnapshotRepositoryInterface] = Singleton(create_snapshot_repository)

    # B) Bind USE CASES
    container[BoardAggregator] = Singleton(lambda: BoardAggregator())

    container[BoardScoreUseCase] = Singleton(
        lambda c: BoardScoreUseCase(
            kanban_source=c[KanbanSourceInterface],
            snapshot_repository=c[SnapshotRepositoryInterface],
            aggregator=c[BoardAggregator],
            timeout=c[CardCounterSettings].fetch_timeout,
        )
    )

    container[BurndownSeriesBuilder] = Singleton(
        lambda c: BurndownSeriesBuilder(
            snapshot_repository=c[SnapshotRepositoryInterface],
            done_marker=c[CardCounterSettings].done_list_marker,
            timeout=c[CardCounterSettings].fetch_timeout,
        )
    )

    container[BurndownChartUseCase] = Singleton(
        lambda c: BurndownChartUseCase(
            series_builder=c[BurndownSeriesBuilder],
            chart_settings=c[ChartSettings],
            default_filter=c[CardCounterSettings].burndown_filter,
        )
    )

    # C) Register API endpoints
    container[HealthCheckEndpoint] = Singleton(lambda: HealthCheckEndpoint())
    container[BoardsEndpoint] = Singleton(lambda c: BoardsEndpoint(c[BoardScoreUseCase]))
    container[BurndownEndpoint] = Singleton(
        lambda c: BurndownEndpoint(c[BurndownChartUseCase], c[CardCounterSettings])
    )

    def create_registry(c: Container) -> SubServiceEndpoints:
        registry = SubServiceEndpoints()
        registry.register(c[HealthCheckEndpoint])
        registry.register(c[BoardsEndpoint])
        registry.register(c[BurndownEndpoint])
        return registry

    container[SubServiceEndpoints] = Singleton(create_registry)
    container[APIEndpoint] = Singleton(
        lambda c: APIEndpoint(c[APIEndpointConfig], c[SubServiceEndpoints])
    )

    return container


def get_container() -> Container:
    """Get the global container instance."""
    global _container
    if _container is None:
        _container = configure_container()
    return _container
