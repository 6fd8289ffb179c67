from __future__ import annotations

import asyncio
import threading
from typing import Any
from typing import Dict
from typing import List
from typing import Optional

from jira import JIRA
from jira import JIRAError
from requests import RequestException

from card_counter import LOGGER
from card_counter.entities.card import Board
from card_counter.entities.card import BoardReference
from card_counter.entities.card import Card
from card_counter.entities.card import KanbanList
from card_counter.settings.kanban_settings import JiraConnectionSettings
from card_counter.use_cases.board_aggregator import group_cards
from card_counter.use_cases.interfaces.kanban_source_interface import KanbanSourceInterface
from card_counter.utils.exceptions import BoardNotFound
from card_counter.utils.exceptions import SourceUnavailable


class JiraKanbanSource(KanbanSourceInterface):
    """Reads boards through the Jira agile REST API.

    The columns of a board's configuration become its lists; an issue belongs
    to the column that holds its status.
    """

    def __init__(self, settings: JiraConnectionSettings):
        self.settings = settings
        self._jira: Optional[JIRA] = None
        self._jira_lock = threading.Lock()

    @property
    def jira(self) -> JIRA:
        with self._jira_lock:
            if self._jira is None:
                self._jira = JIRA(
                    server=str(self.settings.domain).rstrip("/"),
                    basic_auth=(self.settings.username, self.settings.token),
                    get_server_info=False,
                )
            return self._jira

    def _get_agile(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """GET an agile REST resource relative to ``rest/agile/1.0``.

        Used for ``board/{id}``, ``board/{id}/configuration`` and ``board/{id}/issue``,
        which the client has no public wrapper for; every call to the
        client's internal ``_get_json`` goes through here.
        """
        LOGGER.debug(f"GET agile/{path} {params or ''}")
        try:
            return self.jira._get_json(path, params=params, base=self.jira.AGILE_BASE_URL)
        except JIRAError as e:
            if e.status_code == 404:
                raise BoardNotFound(f"Jira has no resource {path}", path=path) from e
            LOGGER.error(f"Jira request {path} failed: {e.text}", exc_info=True)
            raise SourceUnavailable(
                f"Jira answered {e.status_code} for {path}",
                status_code=e.status_code,
            ) from e
        except RequestException as e:
            LOGGER.error(f"Could not reach Jira: {e}", exc_info=True)
            raise SourceUnavailable(f"Could not reach Jira: {e}") from e

    def get_board_name(self, board_id: str) -> str:
        return self._get_agile(f"board/{board_id}")["name"]

    def get_columns(self, board_id: str) -> List[Dict[str, Any]]:
        configuration = self._get_agile(f"board/{board_id}/configuration")
        return configuration.get("columnConfig", {}).get("columns", [])

    def get_issues(self, board_id: str) -> List[Dict[str, Any]]:
        issues: List[Dict[str, Any]] = []
        start_at = 0
        while True:
            page = self._get_agile(
                f"board/{board_id}/issue",
                params={
                    "startAt": start_at,
                    "maxResults": self.settings.page_size,
                    "fields": "summary,status",
                },
            )
            batch = page.get("issues", [])
            issues.extend(batch)
            start_at += len(batch)
            if not batch or start_at >= page.get("total", 0):
                return issues

    @staticmethod
    def columns_to_lists(columns: List[Dict[str, Any]]) -> List[KanbanList]:
        return [KanbanList(id=column["name"], name=column["name"]) for column in columns]

    @staticmethod
    def issues_to_cards(columns: List[Dict[str, Any]], issues: List[Dict[str, Any]]) -> List[Card]:
        column_of_status = {
            status["id"]: column["name"]
            for column in columns
            for status in column.get("statuses", [])
        }
        cards = []
        for issue in issues:
            status_id = issue["fields"]["status"]["id"]
            column = column_of_status.get(status_id)
            if column is None:
                LOGGER.debug(f"Issue {issue['key']} has status {status_id} outside the board columns")
                continue
            cards.append(Card(id=issue["key"], title=issue["fields"]["summary"], list_id=column))
        return cards

    async def fetch_board(self, board_id: str) -> Board:
        name, columns, issues = await asyncio.gather(
            asyncio.to_thread(self.get_board_name, board_id),
            asyncio.to_thread(self.get_columns, board_id),
            asyncio.to_thread(self.get_issues, board_id),
        )
        lists = self.columns_to_lists(columns)
        cards = self.issues_to_cards(columns, issues)
        LOGGER.info(f"Fetched {len(cards)} issues in {len(lists)} columns of Jira board {board_id}")
        return Board(id=str(board_id), name=name, lists=group_cards(lists, cards))

    async def list_boards(self) -> List[BoardReference]:
        try:
            boards = await asyncio.to_thread(self.jira.boards, maxResults=False)
        except JIRAError as e:
            LOGGER.error(f"Could not list Jira boards: {e.text}", exc_info=True)
            raise SourceUnavailable(f"Jira answered {e.status_code} when listing boards") from e
        except RequestException as e:
            raise SourceUnavailable(f"Could not reach Jira: {e}") from e
        return [BoardReference(id=str(board.id), name=board.name) for board in boards]
