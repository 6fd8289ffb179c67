from __future__ import annotations

from card_counter.settings.card_counter_settings import CardCounterSettings
from card_counter.settings.chart_settings import ChartSettings
from card_counter.settings.kanban_settings import JiraConnectionSettings
from card_counter.settings.kanban_settings import TrelloSettings
from card_counter.settings.storage_settings import StorageSettings

__all__ = [
    "CardCounterSettings",
    "ChartSettings",
    "JiraConnectionSettings",
    "StorageSettings",
    "TrelloSettings",
]
