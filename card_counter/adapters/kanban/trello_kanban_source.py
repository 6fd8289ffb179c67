from __future__ import annotations

import asyncio
from typing import Any
from typing import Dict
from typing import List
from typing import Optional

import requests

from card_counter import LOGGER
from card_counter.entities.card import Board
from card_counter.entities.card import BoardReference
from card_counter.entities.card import Card
from card_counter.entities.card import KanbanList
from card_counter.settings.kanban_settings import TrelloSettings
from card_counter.use_cases.board_aggregator import group_cards
from card_counter.use_cases.interfaces.kanban_source_interface import KanbanSourceInterface
from card_counter.utils.exceptions import BoardNotFound
from card_counter.utils.exceptions import SourceUnavailable


class TrelloKanbanSource(KanbanSourceInterface):
    """Reads boards from the Trello REST API with key/token authentication."""

    def __init__(self, settings: TrelloSettings, request_timeout: float = 30.0):
        self.settings = settings
        self.request_timeout = request_timeout
        self.session = requests.Session()

    def _get(self, route: str, params: Optional[Dict[str, str]] = None) -> Any:
        if not self.settings.key or not self.settings.token:
            raise SourceUnavailable(
                "Trello credentials are missing, set TRELLO_API_KEY and TRELLO_API_TOKEN"
            )
        url = f"{self.settings.base_url}/{route}"
        query = {"key": self.settings.key, "token": self.settings.token}
        query.update(params or {})
        LOGGER.debug(f"GET {url}")
        try:
            response = self.session.get(url, params=query, timeout=self.request_timeout)
        except requests.RequestException as e:
            LOGGER.error(f"Request to Trello failed: {e}", exc_info=True)
            raise SourceUnavailable(f"Could not reach Trello: {e}") from e

        if response.status_code == 401:
            raise SourceUnavailable(
                "Trello rejected the API key or token. "
                f"Generate a new token at {self.settings.token_url}",
                token_url=self.settings.token_url,
            )
        if response.status_code in (400, 404) and route.startswith("boards/"):
            raise BoardNotFound(f"Trello has no board {route.split('/')[1]}", route=route)
        if not response.ok:
            LOGGER.error(f"Trello answered {response.status_code} for {url}: {response.text}")
            raise SourceUnavailable(
                f"Trello answered {response.status_code} for {route}",
                status_code=response.status_code,
            )
        return response.json()

    def get_board_name(self, board_id: str) -> str:
        return self._get(f"boards/{board_id}", {"fields": "name"})["name"]

    def get_lists(self, board_id: str) -> List[KanbanList]:
        return [
            KanbanList(id=item["id"], name=item["name"])
            for item in self._get(f"boards/{board_id}/lists", {"fields": "name"})
        ]

    def get_cards(self, board_id: str) -> List[Card]:
        return [
            Card(id=item["id"], title=item["name"], list_id=item["idList"])
            for item in self._get(f"boards/{board_id}/cards", {"fields": "name,idList"})
        ]

    async def fetch_board(self, board_id: str) -> Board:
        name, lists, cards = await asyncio.gather(
            asyncio.to_thread(self.get_board_name, board_id),
            asyncio.to_thread(self.get_lists, board_id),
            asyncio.to_thread(self.get_cards, board_id),
        )
        LOGGER.info(f"Fetched {len(cards)} cards in {len(lists)} lists of Trello board {board_id}")
        return Board(id=board_id, name=name, lists=group_cards(lists, cards))

    async def list_boards(self) -> List[BoardReference]:
        boards = await asyncio.to_thread(
            self._get, "members/me/boards", {"fields": "name", "filter": "open"}
        )
        return [BoardReference(id=item["id"], name=item["name"]) for item in boards]
