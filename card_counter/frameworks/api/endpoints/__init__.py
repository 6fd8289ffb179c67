"""API endpoints package."""

__all__ = [
    "BoardsEndpoint",
    "BurndownEndpoint",
    "HealthCheckEndpoint",
]

from card_counter.frameworks.api.endpoints.boards import BoardsEndpoint
from card_counter.frameworks.api.endpoints.burndown import BurndownEndpoint
from card_counter.frameworks.api.endpoints.health_check import HealthCheckEndpoint
