"""Unit tests for the card title score parser."""

import unittest
import warnings

from card_counter.entities.constants import ScoreStatus
from card_counter.entities.score import ScorePair
from card_counter.use_cases.score_parser import parse
from card_counter.utils.exceptions import ParseWarning


class TestParse(unittest.TestCase):
    """Test suite for parse."""

    def test_estimate_only(self):
        """A parenthesised number is both the estimate and the actual effort."""
        # Act
        pair = parse("Write docs (2)")

        # Assert
        self.assertEqual(pair, ScorePair(estimated=2, actual=2, status=ScoreStatus.SCORED))

    def test_estimate_and_correction(self):
        """A bracketed number corrects the actual effort and keeps the estimate."""
        # Act
        pair = parse("(2)[4] Write docs")

        # Assert
        self.assertEqual(pair.estimated, 2)
        self.assertEqual(pair.actual, 4)
        self.assertTrue(pair.is_scored)

    def test_markers_anywhere_in_title(self):
        """Markers are found regardless of their position."""
        # Act
        pair = parse("Write [3] the (1) docs")

        # Assert
        self.assertEqual((pair.estimated, pair.actual), (1, 3))

    def test_no_marker(self):
        """A title without markers is unscored with zero effort."""
        # Act
        pair = parse("Write docs")

        # Assert
        self.assertEqual((pair.estimated, pair.actual), (0, 0))
        self.assertEqual(pair.status, ScoreStatus.UNSCORED)
        self.assertFalse(pair.is_scored)

    def test_zero_effort_is_scored(self):
        """A legitimate (0) is scored, unlike a missing marker."""
        # Act
        pair = parse("Typo fix (0)")

        # Assert
        self.assertEqual(pair.actual, 0)
        self.assertEqual(pair.status, ScoreStatus.SCORED)

    def test_decimal_numbers(self):
        """Fractional efforts are accepted."""
        # Act
        pair = parse("Spike (0.5)[1.5]")

        # Assert
        self.assertEqual((pair.estimated, pair.actual), (0.5, 1.5))

    def test_malformed_numbers_are_not_markers(self):
        """Empty, negative or non-numeric parentheses do not count."""
        for title in ["Card ()", "Card (z)", "Card (10z)", "Card (-1)"]:
            with self.subTest(title=title):
                # Act
                pair = parse(title)

                # Assert
                self.assertEqual(pair.status, ScoreStatus.UNSCORED)
                self.assertEqual(pair.actual, 0)

    def test_first_marker_wins(self):
        """Only the first well-formed number of each kind is used."""
        # Act
        pair = parse("(3) and (5) [8] [13]")

        # Assert
        self.assertEqual((pair.estimated, pair.actual), (3, 8))

    def test_correction_without_estimate_warns(self):
        """A bracket-only title is malformed, counted as unscored and warned about."""
        # Act
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            pair = parse("Write docs [4]")

        # Assert
        self.assertEqual(pair.status, ScoreStatus.MALFORMED)
        self.assertEqual((pair.estimated, pair.actual), (0, 0))
        self.assertFalse(pair.is_scored)
        self.assertTrue(any(issubclass(w.category, ParseWarning) for w in caught))


if __name__ == "__main__":
    unittest.main()
