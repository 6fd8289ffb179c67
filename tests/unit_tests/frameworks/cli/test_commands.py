"""Unit tests for the command line interface."""

import csv
import io
import unittest
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, Mock, patch

from card_counter.entities.burndown import BurndownSeries, TimeSeriesPoint
from card_counter.entities.card import BoardReference
from card_counter.entities.constants import OutputMode
from card_counter.entities.report import BoardScoreReport, BurndownChart
from card_counter.entities.snapshot import BoardSummary, ListDelta, ListSummary
from card_counter.frameworks.api.api_endpoint import APIEndpoint, APIEndpointConfig
from card_counter.frameworks.cli import build_parser, main
from card_counter.settings.card_counter_settings import CardCounterSettings
from card_counter.use_cases.board_score_use_case import BoardScoreUseCase
from card_counter.use_cases.burndown_chart_use_case import BurndownChartUseCase
from card_counter.utils.exceptions import BoardNotFound

BOARD = BoardReference(id="board-1", name="Sprint Board")


class TestBuildParser(unittest.TestCase):
    """Test suite for build_parser."""

    def test_burndown_arguments(self):
        """Burndown takes a range, a filter and an output mode."""
        # Act
        args = build_parser().parse_args(
            ["burndown", "-b", "board-1", "-s", "2020-05-01", "-e", "2020-05-14", "-o", "ascii", "-f", "NoBurn"]
        )

        # Assert
        self.assertEqual(args.command, "burndown")
        self.assertEqual(args.start, "2020-05-01")
        self.assertEqual(args.output, "ascii")
        self.assertEqual(args.filter, "NoBurn")
        self.assertFalse(args.compare)

    def test_burndown_requires_range(self):
        """Start and end are required."""
        with patch("sys.stderr", new_callable=io.StringIO):
            with self.assertRaises(SystemExit):
                build_parser().parse_args(["burndown", "-b", "board-1"])


class TestMain(unittest.TestCase):
    """Test suite for main."""

    def setUp(self):
        self.board_score_use_case = Mock(spec=BoardScoreUseCase)
        self.burndown_chart_use_case = Mock(spec=BurndownChartUseCase)
        self.container = {
            BoardScoreUseCase: self.board_score_use_case,
            BurndownChartUseCase: self.burndown_chart_use_case,
            CardCounterSettings: CardCounterSettings(default_board_id="default-board"),
        }

    def run_main(self, argv):
        with patch("sys.stdout", new_callable=io.StringIO) as stdout, patch(
            "sys.stderr", new_callable=io.StringIO
        ) as stderr:
            code = main(argv, container=self.container)
        return code, stdout.getvalue(), stderr.getvalue()

    def test_score(self):
        """Score prints the table and saves unless told otherwise."""
        # Arrange
        self.board_score_use_case.execute = AsyncMock(
            return_value=BoardScoreReport(
                board=BOARD,
                timestamp=datetime(2020, 5, 1, 12, tzinfo=timezone.utc),
                summary=BoardSummary.from_lists([ListSummary(name="Done", card_count=1, score=3, estimated=3)]),
                saved=True,
            )
        )

        # Act
        code, stdout, _ = self.run_main(["score", "--no-save"])

        # Assert
        self.assertEqual(code, 0)
        self.assertIn("Sprint Board (board-1)", stdout)
        self.assertIn("TOTAL", stdout)
        self.board_score_use_case.execute.assert_awaited_once_with(
            "default-board", name_filter=None, save=False, compare=False
        )

    def test_burndown_with_comparison(self):
        """The chart alone goes to stdout and the per-list changes go to stderr."""
        # Arrange
        content = "Date,Remaining,Completed\n01-05-20,5,0\n02-05-20,3,2\n"
        series = BurndownSeries(
            points=[
                TimeSeriesPoint(date=date(2020, 5, 1), remaining=5, completed=0),
                TimeSeriesPoint(date=date(2020, 5, 2), remaining=3, completed=2),
            ],
            comparison=[
                ListDelta(name="Todo", card_count=0, score=-2, estimated=-1.5, unscored_count=1),
                ListDelta(name="Done"),
            ],
        )
        self.burndown_chart_use_case.execute = AsyncMock(
            return_value=BurndownChart(series=series, output=OutputMode.CSV, content=content, media_type="text/csv")
        )

        # Act
        code, stdout, stderr = self.run_main(
            ["burndown", "-b", "board-1", "-s", "2020-05-01", "-e", "2020-05-02", "--compare"]
        )

        # Assert
        self.assertEqual(code, 0)
        self.assertEqual(stdout, content)
        rows = list(csv.reader(io.StringIO(stdout)))
        self.assertEqual(rows, [["Date", "Remaining", "Completed"], ["01-05-20", "5", "0"], ["02-05-20", "3", "2"]])
        self.assertIn("Todo: cards +0, score -2, estimated -1.5, unscored +1\n", stderr)
        self.assertIn("Done: new list\n", stderr)

    def test_svg_burndown_with_comparison_stays_a_document(self):
        """Nothing follows the closing svg tag on stdout."""
        # Arrange
        content = "<svg xmlns=\"http://www.w3.org/2000/svg\">\n</svg>\n"
        self.burndown_chart_use_case.execute = AsyncMock(
            return_value=BurndownChart(
                series=BurndownSeries(comparison=[]), output=OutputMode.SVG, content=content, media_type="image/svg+xml"
            )
        )

        # Act
        code, stdout, stderr = self.run_main(
            ["burndown", "-b", "board-1", "-s", "2020-05-01", "-e", "2020-05-02", "-o", "svg", "-c"]
        )

        # Assert
        self.assertEqual(code, 0)
        self.assertTrue(stdout.rstrip().endswith("</svg>"))
        self.assertIn("No per-list changes to compare", stderr)

    def test_boards(self):
        """Boards are printed as id and name separated by a tab."""
        # Arrange
        self.board_score_use_case.list_boards = AsyncMock(return_value=[BOARD])

        # Act
        code, stdout, _ = self.run_main(["boards"])

        # Assert
        self.assertEqual(code, 0)
        self.assertEqual(stdout, "board-1\tSprint Board\n")

    def test_errors_exit_with_one(self):
        """Card counter errors are printed to stderr with exit code 1."""
        # Arrange
        self.board_score_use_case.execute = AsyncMock(side_effect=BoardNotFound("Trello has no board nope"))

        # Act
        code, stdout, stderr = self.run_main(["score", "-b", "nope"])

        # Assert
        self.assertEqual(code, 1)
        self.assertEqual(stdout, "")
        self.assertIn("Error: Trello has no board nope", stderr)

    def test_missing_board(self):
        """Without a board id or a default board the command fails."""
        # Arrange
        self.container[CardCounterSettings] = CardCounterSettings(default_board_id=None)

        # Act
        code, _, stderr = self.run_main(["score"])

        # Assert
        self.assertEqual(code, 1)
        self.assertIn("--board-id", stderr)

    def test_serve(self):
        """Serve applies the host and port overrides and runs the API."""
        # Arrange
        config = APIEndpointConfig()
        api_endpoint = Mock(spec=APIEndpoint)
        self.container[APIEndpointConfig] = config
        self.container[APIEndpoint] = api_endpoint

        # Act
        code, _, _ = self.run_main(["serve", "--port", "9000"])

        # Assert
        self.assertEqual(code, 0)
        self.assertEqual(config.port, 9000)
        api_endpoint.run.assert_called_once_with()
