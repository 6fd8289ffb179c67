from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from card_counter import CARD_COUNTER_HOME
from card_counter.entities.constants import DEFAULT_DONE_LIST_MARKER
from card_counter.entities.constants import KanbanType
from card_counter.entities.constants import StorageType
from card_counter.utils.pydantic_advanced_settings import CustomizedSettings


class CardCounterSettings(CustomizedSettings):
    kanban: KanbanType = Field(
        default=KanbanType.TRELLO,
        description="Kanban source the boards are fetched from",
    )
    storage: StorageType = Field(
        default=StorageType.LOCAL,
        description="Where board snapshots are persisted",
    )
    default_board_id: Optional[str] = Field(
        default=None,
        description="Board used when a request does not name one",
    )
    done_list_marker: str = Field(
        default=DEFAULT_DONE_LIST_MARKER,
        description="Lists whose name contains this text count as completed work",
    )
    burndown_filter: Optional[str] = Field(
        default=None,
        description="Default list filter applied to burndown charts",
    )
    fetch_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Seconds a whole fetch may take before it is aborted",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="card_counter_",
        extra="ignore",
        json_file=str(CARD_COUNTER_HOME / "config.json"),
        json_file_encoding="utf-8",
    )
