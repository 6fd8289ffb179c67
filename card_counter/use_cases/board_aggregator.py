"""Per-list and per-board effort summaries."""

from __future__ import annotations

import warnings
from typing import Callable
from typing import Dict
from typing import Iterable
from typing import List
from typing import Optional
from typing import Sequence
from typing import TypeVar

from card_counter import LOGGER
from card_counter.entities.card import Card
from card_counter.entities.card import KanbanList
from card_counter.entities.score import ScorePair
from card_counter.entities.snapshot import BoardSummary
from card_counter.entities.snapshot import ListDelta
from card_counter.entities.snapshot import ListSummary
from card_counter.use_cases.score_parser import parse
from card_counter.utils.exceptions import FilterNoMatch

Named = TypeVar("Named", KanbanList, ListSummary)


def filter_lists(items: Iterable[Named], name_filter: Optional[str] = None) -> List[Named]:
    """Drop every item whose name contains ``name_filter`` (case-sensitive).

    An empty or missing filter keeps everything. Order is preserved.
    """
    if not name_filter:
        return list(items)
    return [item for item in items if name_filter not in item.name]


def group_cards(lists: Sequence[KanbanList], cards: Iterable[Card]) -> List[KanbanList]:
    """Attach loose cards to their lists by ``list_id``.

    Cards already attached to a list are kept first; cards naming a list that
    is not on the board are dropped.
    """
    grouped: Dict[str, List[Card]] = {kanban_list.id: list(kanban_list.cards) for kanban_list in lists}
    for card in cards:
        if card.list_id not in grouped:
            LOGGER.debug(f"Dropping card {card.id} of unknown list {card.list_id}")
            continue
        grouped[card.list_id].append(card)

    return [
        KanbanList(id=kanban_list.id, name=kanban_list.name, cards=grouped[kanban_list.id])
        for kanban_list in lists
    ]


class BoardAggregator:
    """Turns kanban lists into :class:`ListSummary` rows.

    The aggregator is pure: it never fetches or persists anything.
    """

    def __init__(self, score_parser: Callable[[str], ScorePair] = parse):
        self.score_parser = score_parser

    def summarize_list(self, kanban_list: KanbanList) -> ListSummary:
        score = 0.0
        estimated = 0.0
        unscored_count = 0
        for card in kanban_list.cards:
            pair = self.score_parser(card.title)
            score += pair.actual
            estimated += pair.estimated
            if not pair.is_scored:
                unscored_count += 1

        return ListSummary(
            name=kanban_list.name,
            card_count=len(kanban_list.cards),
            score=score,
            estimated=estimated,
            unscored_count=unscored_count,
        )

    def aggregate(
        self,
        lists: Sequence[KanbanList],
        name_filter: Optional[str] = None,
    ) -> BoardSummary:
        """Summarize the lists surviving ``name_filter``, in source order, with a TOTAL row.

        Args:
            lists: Board lists with their cards.
            name_filter: Lists whose name contains this substring are left out.

        Returns:
            The board summary; empty, not an error, when the filter removes every list.
        """
        surviving = filter_lists(lists, name_filter)
        if lists and not surviving:
            LOGGER.warning(f"Filter '{name_filter}' removed all {len(lists)} lists")
            warnings.warn(
                f"Filter {name_filter!r} matches every list of the board",
                FilterNoMatch,
                stacklevel=2,
            )

        return BoardSummary.from_lists([self.summarize_list(kanban_list) for kanban_list in surviving])

    @staticmethod
    def calculate_deltas(
        current: Sequence[ListSummary],
        baseline: Sequence[ListSummary],
        name_filter: Optional[str] = None,
    ) -> List[ListDelta]:
        """Difference, new minus old, of every current list against the baseline list of the same name."""
        previous = {summary.name: summary for summary in filter_lists(baseline, name_filter)}
        deltas = []
        for summary in filter_lists(current, name_filter):
            old = previous.get(summary.name)
            if old is None:
                deltas.append(ListDelta(name=summary.name))
                continue
            deltas.append(
                ListDelta(
                    name=summary.name,
                    card_count=summary.card_count - old.card_count,
                    score=summary.score - old.score,
                    estimated=summary.estimated - old.estimated,
                    unscored_count=summary.unscored_count - old.unscored_count,
                )
            )
        return deltas
