from __future__ import annotations

import json
import os
from datetime import date
from typing import Any
from typing import Dict
from typing import List
from typing import Optional

from card_counter import LOGGER
from card_counter.adapters.repositories.memory.in_memory_snapshot_repository import latest_before
from card_counter.adapters.repositories.memory.in_memory_snapshot_repository import (
    snapshots_in_range,
)
from card_counter.entities.snapshot import BoardSnapshot
from card_counter.entities.snapshot import ListSummary
from card_counter.settings.storage_settings import StorageSettings
from card_counter.use_cases.interfaces.snapshot_repository_interface import (
    SnapshotRepositoryInterface,
)
from card_counter.utils.exceptions import RepositoryUnavailable


def deck_from_summary(summary: ListSummary) -> Dict[str, Any]:
    return {
        "list_name": summary.name,
        "size": summary.card_count,
        "score": summary.score,
        "unscored": summary.unscored_count,
        "estimated": summary.estimated,
    }


def summary_from_deck(deck: Dict[str, Any]) -> ListSummary:
    return ListSummary(
        name=deck["list_name"],
        card_count=deck.get("size", 0),
        score=deck.get("score", 0),
        estimated=deck.get("estimated", deck.get("score", 0)),
        unscored_count=deck.get("unscored", 0),
    )


class JsonFileSnapshotRepository(SnapshotRepositoryInterface):
    """Snapshot store kept in one JSON document on the local disk.

    The document maps board ids to unix timestamps to the list summaries
    taken at that time:

        {"<board_id>": {"1589932800": [{"list_name": "Done", "size": 2, ...}]}}

    A missing or empty file is an empty store.
    """

    def __init__(self, settings: StorageSettings):
        self.file_path = os.path.expanduser(settings.file_path)

    def load_database(self) -> Dict[str, Dict[str, List[Dict[str, Any]]]]:
        """Read the whole document from disk."""
        if not os.path.exists(self.file_path):
            return {}
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                content = f.read()
            return json.loads(content) if content.strip() else {}
        except (OSError, ValueError) as e:
            LOGGER.error(f"Could not read snapshot database {self.file_path}: {e}", exc_info=True)
            raise RepositoryUnavailable(
                f"Could not read snapshot database {self.file_path}",
                path=self.file_path,
            ) from e

    def save_database(self, data: Dict[str, Dict[str, List[Dict[str, Any]]]]) -> None:
        """Write the whole document to disk."""
        try:
            directory = os.path.dirname(self.file_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.file_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=4)
        except OSError as e:
            LOGGER.error(f"Could not write snapshot database {self.file_path}: {e}", exc_info=True)
            raise RepositoryUnavailable(
                f"Could not write snapshot database {self.file_path}",
                path=self.file_path,
            ) from e

    async def save(self, snapshot: BoardSnapshot) -> None:
        data = self.load_database()
        board = data.setdefault(snapshot.board_id, {})
        board[str(snapshot.unix_timestamp)] = [deck_from_summary(summary) for summary in snapshot.lists]
        self.save_database(data)
        LOGGER.debug(f"Saved snapshot of {snapshot.board_id} at {snapshot.unix_timestamp}")

    async def load_range(self, board_id: str, start_date: date, end_date: date) -> List[BoardSnapshot]:
        return snapshots_in_range(self._board(board_id), start_date, end_date)

    async def load_latest_before(self, board_id: str, day: date) -> Optional[BoardSnapshot]:
        return latest_before(self._board(board_id), day)

    async def load_latest(self, board_id: str) -> Optional[BoardSnapshot]:
        return max(self._board(board_id), key=lambda snapshot: snapshot.timestamp, default=None)

    def _board(self, board_id: str) -> List[BoardSnapshot]:
        data = self.load_database()
        try:
            entries = data.get(board_id, {})
            return [
                BoardSnapshot.from_unix(
                    board_id,
                    int(time_stamp),
                    [summary_from_deck(deck) for deck in decks],
                )
                for time_stamp, decks in entries.items()
            ]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            LOGGER.error(f"Snapshot database {self.file_path} is malformed: {e}", exc_info=True)
            raise RepositoryUnavailable(
                f"Snapshot database {self.file_path} holds malformed entries for board {board_id}",
                path=self.file_path,
            ) from e
