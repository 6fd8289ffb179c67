"""Unit tests for the settings classes."""

import json
import os
import tempfile
import unittest
import warnings
from pathlib import Path
from unittest.mock import patch

from pydantic_settings import SettingsConfigDict

from card_counter.entities.constants import KanbanType, StorageType
from card_counter.settings import CardCounterSettings, ChartSettings, StorageSettings, TrelloSettings


class TestSettings(unittest.TestCase):
    """Test suite for the environment driven settings."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.config_file = Path(self.temp_dir.name) / "config.json"

        class TempCardCounterSettings(CardCounterSettings):
            model_config = SettingsConfigDict(
                env_file=None,
                env_prefix="card_counter_",
                extra="ignore",
                json_file=str(self.config_file),
            )

        self.settings_class = TempCardCounterSettings

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_defaults(self):
        """Without configuration the local store and Trello are used."""
        # Act
        with patch.dict(os.environ, {}, clear=True):
            settings = self.settings_class()

        # Assert
        self.assertEqual(settings.kanban, KanbanType.TRELLO)
        self.assertEqual(settings.storage, StorageType.LOCAL)
        self.assertEqual(settings.done_list_marker, "Done")
        self.assertIsNone(settings.default_board_id)

    def test_environment(self):
        """Variables carrying the card_counter_ prefix are read."""
        # Arrange
        environment = {
            "CARD_COUNTER_KANBAN": "jira",
            "CARD_COUNTER_STORAGE": "sql",
            "CARD_COUNTER_DEFAULT_BOARD_ID": "board-1",
        }

        # Act
        with patch.dict(os.environ, environment, clear=True):
            settings = self.settings_class()

        # Assert
        self.assertEqual(settings.kanban, KanbanType.JIRA)
        self.assertEqual(settings.storage, StorageType.SQL)
        self.assertEqual(settings.default_board_id, "board-1")

    def test_json_config_file(self):
        """The JSON config file is read and wins over the environment."""
        # Arrange
        self.config_file.write_text(json.dumps({"default_board_id": "from-file", "burndown_filter": "NoBurn"}))

        # Act
        with patch.dict(os.environ, {"CARD_COUNTER_DEFAULT_BOARD_ID": "from-env"}, clear=True):
            settings = self.settings_class()

        # Assert
        self.assertEqual(settings.default_board_id, "from-file")
        self.assertEqual(settings.burndown_filter, "NoBurn")

    def test_json_file_key_is_honoured_without_warning(self):
        """Building the settings does not warn that the json_file key is ignored."""
        # Act
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            with patch.dict(os.environ, {}, clear=True):
                self.settings_class()
                CardCounterSettings(_env_file=None)

        # Assert
        messages = [str(warning.message) for warning in caught]
        self.assertFalse([message for message in messages if "json_file" in message], messages)

    def test_missing_json_file(self):
        """A missing config file contributes nothing."""
        # Arrange
        self.assertFalse(self.config_file.exists())

        # Act
        with patch.dict(os.environ, {"CARD_COUNTER_BURNDOWN_FILTER": "Parked"}, clear=True):
            settings = self.settings_class()

        # Assert
        self.assertEqual(settings.burndown_filter, "Parked")

    def test_other_prefixes(self):
        """Trello, storage and chart settings have their own prefixes."""
        # Arrange
        environment = {
            "TRELLO_API_KEY": "my-key",
            "CARD_COUNTER_STORAGE_DATABASE_URL": "sqlite:///snapshots.db",
            "CARD_COUNTER_CHART_TITLE": "Sprint 12",
        }

        # Act
        with patch.dict(os.environ, environment, clear=True):
            trello = TrelloSettings(_env_file=None)
            storage = StorageSettings(_env_file=None)
            chart = ChartSettings(_env_file=None)

        # Assert
        self.assertEqual(trello.key, "my-key")
        self.assertIn("key=my-key", trello.token_url)
        self.assertEqual(storage.database_url, "sqlite:///snapshots.db")
        self.assertEqual(chart.title, "Sprint 12")
