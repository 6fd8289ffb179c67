"""Unit tests for JiraKanbanSource."""

import time
from unittest import IsolatedAsyncioTestCase
from unittest.mock import MagicMock, patch

from jira import JIRAError

from card_counter.adapters.kanban.jira_kanban_source import JiraKanbanSource
from card_counter.settings.kanban_settings import JiraConnectionSettings
from card_counter.utils.exceptions import BoardNotFound, SourceUnavailable

CONFIGURATION = {
    "id": 7,
    "name": "Team board",
    "columnConfig": {
        "columns": [
            {"name": "To Do", "statuses": [{"id": "1"}]},
            {"name": "In Progress", "statuses": [{"id": "3"}, {"id": "4"}]},
            {"name": "Done", "statuses": [{"id": "10001"}]},
        ]
    },
}


def issue(key, summary, status_id):
    return {"key": key, "fields": {"summary": summary, "status": {"id": status_id}}}


ISSUE_PAGES = [
    {"startAt": 0, "maxResults": 2, "total": 3, "issues": [issue("T-1", "Login (3)", "1"), issue("T-2", "Logout (2)", "4")]},
    {"startAt": 2, "maxResults": 2, "total": 3, "issues": [issue("T-3", "Signup (5)[8]", "10001")]},
]


class TestJiraKanbanSource(IsolatedAsyncioTestCase):
    """Test suite for JiraKanbanSource."""

    def setUp(self):
        self.settings = JiraConnectionSettings(
            username="bot@example.com",
            token="secret",
            domain="https://example.atlassian.net",
            page_size=2,
        )
        self.source = JiraKanbanSource(self.settings)
        self.jira = MagicMock()
        self.source._jira = self.jira
        pages = iter(ISSUE_PAGES)

        def fake_get_json(path, params=None, base=None):
            if path == "board/7":
                return {"id": 7, "name": "Team board"}
            if path == "board/7/configuration":
                return CONFIGURATION
            if path == "board/7/issue":
                return next(pages)
            raise JIRAError(status_code=404, text="not found")

        self.jira._get_json.side_effect = fake_get_json

    async def test_fetch_board(self):
        """Columns become lists and issues join the column of their status."""
        # Act
        board = await self.source.fetch_board("7")

        # Assert
        self.assertEqual(board.name, "Team board")
        self.assertEqual([kanban_list.name for kanban_list in board.lists], ["To Do", "In Progress", "Done"])
        self.assertEqual([card.id for card in board.lists[0].cards], ["T-1"])
        self.assertEqual([card.id for card in board.lists[1].cards], ["T-2"])
        self.assertEqual([card.title for card in board.lists[2].cards], ["Signup (5)[8]"])

    async def test_issues_are_paged(self):
        """Issue pages are requested until the total is reached."""
        # Act
        issues = self.source.get_issues("7")

        # Assert
        self.assertEqual(len(issues), 3)
        starts = [
            call.kwargs["params"]["startAt"]
            for call in self.jira._get_json.call_args_list
            if call.args[0] == "board/7/issue"
        ]
        self.assertEqual(starts, [0, 2])

    def test_status_outside_columns_is_dropped(self):
        """Issues whose status is not on the board are left out."""
        # Act
        cards = JiraKanbanSource.issues_to_cards(
            CONFIGURATION["columnConfig"]["columns"], [issue("T-9", "Hidden (1)", "999")]
        )

        # Assert
        self.assertEqual(cards, [])

    async def test_missing_board(self):
        """A 404 raises BoardNotFound."""
        with self.assertRaises(BoardNotFound):
            await self.source.fetch_board("404")

    async def test_server_error(self):
        """Other Jira errors raise SourceUnavailable."""
        # Arrange
        self.jira._get_json.side_effect = JIRAError(status_code=500, text="boom")

        # Act / Assert
        with self.assertRaises(SourceUnavailable):
            await self.source.fetch_board("7")

    async def test_list_boards(self):
        """Boards are read through the client."""
        # Arrange
        first, second = MagicMock(id=7), MagicMock(id=8)
        first.name, second.name = "Team board", "Ops"
        self.jira.boards.return_value = [first, second]

        # Act
        boards = await self.source.list_boards()

        # Assert
        self.assertEqual([(b.id, b.name) for b in boards], [("7", "Team board"), ("8", "Ops")])

    async def test_concurrent_fetch_builds_one_client(self):
        """The parallel board, configuration and issue requests share one client."""
        # Arrange
        source = JiraKanbanSource(self.settings)

        def slow_client(**kwargs):
            time.sleep(0.05)
            return self.jira

        # Act
        with patch("card_counter.adapters.kanban.jira_kanban_source.JIRA", side_effect=slow_client) as jira_class:
            board = await source.fetch_board("7")

        # Assert
        self.assertEqual(jira_class.call_count, 1)
        self.assertEqual(board.name, "Team board")

    def test_client_is_created_lazily(self):
        """The JIRA client is built on first use with the configured credentials."""
        # Arrange
        source = JiraKanbanSource(self.settings)

        # Act
        with patch("card_counter.adapters.kanban.jira_kanban_source.JIRA") as jira_class:
            client = source.jira

        # Assert
        jira_class.assert_called_once_with(
            server="https://example.atlassian.net",
            basic_auth=("bot@example.com", "secret"),
            get_server_info=False,
        )
        self.assertIs(client, jira_class.return_value)
