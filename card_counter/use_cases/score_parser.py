"""Extraction of story point markers from card titles.

A title carries its estimate in parentheses, ``Write docs (3)``, and may carry
a corrected figure in square brackets once the work is done,
``Write docs (3)[5]``. Markers may appear anywhere in the title.
"""

from __future__ import annotations

import re
import warnings
from typing import Optional

from card_counter import LOGGER
from card_counter.entities.constants import ScoreStatus
from card_counter.entities.score import ScorePair
from card_counter.utils.exceptions import ParseWarning

_NUMBER = r"(\d+(?:\.\d+)?)"
ESTIMATE_PATTERN = re.compile(r"\(" + _NUMBER + r"\)")
CORRECTION_PATTERN = re.compile(r"\[" + _NUMBER + r"\]")

UNSCORED = ScorePair(estimated=0.0, actual=0.0, status=ScoreStatus.UNSCORED)
MALFORMED = ScorePair(estimated=0.0, actual=0.0, status=ScoreStatus.MALFORMED)


def _first_number(pattern: re.Pattern, title: str) -> Optional[float]:
    match = pattern.search(title)
    if match is None:
        return None
    return float(match.group(1))


def parse(title: str) -> ScorePair:
    """Return the effort pair carried by ``title``.

    Args:
        title: Free-form card title.

    Returns:
        The scored pair, or a zero pair flagged ``unscored`` when the title has
        no marker and ``malformed`` when it only has a ``[n]`` correction.
    """
    estimated = _first_number(ESTIMATE_PATTERN, title)
    correction = _first_number(CORRECTION_PATTERN, title)

    if estimated is None and correction is None:
        return UNSCORED

    if estimated is None:
        LOGGER.warning(f"Card '{title}' has a correction but no estimate, counting it as unscored")
        warnings.warn(
            f"Card title {title!r} has a [n] correction without a (n) estimate",
            ParseWarning,
            stacklevel=2,
        )
        return MALFORMED

    actual = estimated if correction is None else correction
    return ScorePair(estimated=estimated, actual=actual, status=ScoreStatus.SCORED)

