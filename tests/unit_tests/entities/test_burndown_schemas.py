"""Unit tests for the burndown command schema."""

import unittest
from datetime import date

from card_counter.entities.api_schemas.burndown_schemas import BurndownCommand


class TestBurndownCommand(unittest.TestCase):
    """Test suite for BurndownCommand."""

    def test_parse_complete_command(self):
        """The words after from, to and for are picked whatever their order and case."""
        # Act
        command = BurndownCommand.parse("burndown FOR 3em95wSl from 2020-01-01 To 2020-01-14")

        # Assert
        self.assertEqual(command.start, "2020-01-01")
        self.assertEqual(command.end, "2020-01-14")
        self.assertEqual(command.board_id, "3em95wSl")
        self.assertTrue(command.is_complete)
        self.assertIsNone(command.helper_string())

    def test_helper_string_echoes_given_parts(self):
        """Missing parts are shown as placeholders next to the given ones."""
        # Act
        command = BurndownCommand.parse("burndown for 3em95wSl")

        # Assert
        self.assertFalse(command.is_complete)
        self.assertEqual(
            command.helper_string(),
            "/card-counter burndown from YYYY-MM-DD to YYYY-MM-DD for 3em95wSl",
        )

    def test_trailing_keyword_is_ignored(self):
        """A keyword without a following word leaves its part missing."""
        # Act
        command = BurndownCommand.parse("burndown from 2020-01-01 to")

        # Assert
        self.assertEqual(command.start, "2020-01-01")
        self.assertIsNone(command.end)

    def test_for_two_weeks_ago(self):
        """The default range is the two weeks ending tomorrow."""
        # Act
        command = BurndownCommand.for_two_weeks_ago("board-1", today=date(2020, 5, 14))

        # Assert
        self.assertEqual(command.start, "2020-05-01")
        self.assertEqual(command.end, "2020-05-15")
        self.assertEqual(command.board_id, "board-1")

    def test_for_two_weeks_ago_without_board(self):
        """Without a default board the command stays incomplete."""
        # Act
        command = BurndownCommand.for_two_weeks_ago(None, today=date(2020, 5, 14))

        # Assert
        self.assertEqual(
            command.helper_string(),
            "/card-counter burndown from 2020-05-01 to 2020-05-15 for <board-id>",
        )
