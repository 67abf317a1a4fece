"""Best-five-card hand rankers.

Two interchangeable strategies share one interface and must agree on
every input (``tests/test_evaluator_agreement.py``):

* :class:`ExhaustiveHandRanker` scores each of the C(7,5) = 21 five-card
  subsets independently and keeps the strongest.
* :class:`SmartHandRanker` analyses all seven cards once and walks the
  hand classes from strongest to weakest, stopping at the first match.

Both return ``(HandStrength, best_five)``.  Malformed input (wrong card
counts, duplicates, jokers, unknown tokens) yields
``(INVALID_STRENGTH, None)`` instead of raising.

Omaha hands are resolved on top of either strategy: every 2-card subset
of the hole cards is combined with every 3-card subset of the board.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import Counter, defaultdict
from itertools import combinations
from typing import Iterable, Sequence

from joker.core.cards import DefaultOrganizer, Card, GameType
from joker.core.strength import INVALID_STRENGTH, HandRank, HandStrength

BOARD_SIZE = 5
_ACE = 14
_ROYAL_VALUES = (14, 13, 12, 11, 10)
_STRAIGHT_MASK = 0b11111

RankResult = tuple[HandStrength, list[Card] | None]


def _rank_bits(values: Iterable[int]) -> int:
    """Rank-presence bitmask; the Ace sets bit 14 and bit 1 (wheel)."""
    bits = 0
    for value in values:
        bits |= 1 << value
        if value == _ACE:
            bits |= 1 << 1
    return bits


def _sorted_cards(cards: Iterable[Card]) -> list[Card]:
    return sorted(cards, key=DefaultOrganizer.sort_key)


def _is_valid_input(hole: Sequence[Card], community: Sequence[Card], game: GameType) -> bool:
    if hole is None or community is None:
        return False
    if len(hole) != game.hole_cards or len(community) != BOARD_SIZE:
        return False
    cards = list(hole) + list(community)
    if any(card is None or not card.is_standard for card in cards):
        return False
    return len(set(cards)) == len(cards)


class HandRanker(ABC):
    """Strategy interface: pick the best five cards and score them."""

    name: str = ""

    def rank_hand(
        self,
        hole: Sequence[Card],
        community: Sequence[Card],
        game_type: GameType | str = GameType.TEXAS,
    ) -> RankResult:
        """Rank a player's best hand.

        Args:
            hole:      Player's hole cards (2, or 4 for Omaha).
            community: Exactly five board cards.
            game_type: Variant; Omaha must use two hole and three board cards.

        Returns:
            ``(strength, best_five)``; ``(INVALID_STRENGTH, None)`` for
            malformed input.
        """
        game = GameType.parse(game_type)
        if not _is_valid_input(hole, community, game):
            return INVALID_STRENGTH, None
        if game is GameType.OMAHA:
            return self._best_omaha(hole, community)
        return self.best_hand(list(hole) + list(community))

    def _best_omaha(self, hole: Sequence[Card], community: Sequence[Card]) -> RankResult:
        best_strength: HandStrength | None = None
        best_five: list[Card] | None = None
        for pocket in combinations(hole, 2):
            for board in combinations(community, 3):
                strength, five = self.best_hand(list(pocket) + list(board))
                if best_strength is None or strength > best_strength:
                    best_strength, best_five = strength, five
        return best_strength or INVALID_STRENGTH, best_five

    @abstractmethod
    def best_hand(self, cards: Sequence[Card]) -> tuple[HandStrength, list[Card]]:
        """Strongest five-card hand among *cards* (at least five valid cards)."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


# ── Exhaustive strategy ───────────────────────────────────────────


class ExhaustiveHandRanker(HandRanker):
    """Brute force over every five-card subset."""

    name = "default"

    def best_hand(self, cards: Sequence[Card]) -> tuple[HandStrength, list[Card]]:
        best_strength: HandStrength | None = None
        best_five: tuple[Card, ...] = ()
        for five in combinations(_sorted_cards(cards), BOARD_SIZE):
            strength = self.score_five(five)
            if best_strength is None or strength > best_strength:
                best_strength, best_five = strength, five
        return best_strength or INVALID_STRENGTH, list(best_five)

    @staticmethod
    def _straight_high(bits: int) -> int:
        # lowest start offset first; the wheel starts at bit 1
        for low in range(1, _ACE - 3):
            mask = _STRAIGHT_MASK << low
            if bits & mask == mask:
                return low + 4
        return 0

    @classmethod
    def score_five(cls, five: Sequence[Card]) -> HandStrength:
        """Score exactly five cards."""
        values = [card.value for card in five]
        ordered = sorted(values, reverse=True)
        value_counts = Counter(values)
        suit_counts = Counter(card.suit for card in five)

        flush = any(count == 5 for count in suit_counts.values())
        high = cls._straight_high(_rank_bits(values))

        if flush and high:
            if high == _ACE:
                return HandStrength(HandRank.ROYAL_FLUSH, _ROYAL_VALUES)
            return HandStrength(HandRank.STRAIGHT_FLUSH, (high,))

        # (rank, count) groups: biggest group first, higher rank breaks ties
        groups = sorted(value_counts.items(), key=lambda item: (item[1], item[0]), reverse=True)
        counts = [count for _, count in groups]

        if counts[0] == 4:
            return HandStrength(HandRank.FOUR_OF_A_KIND, (groups[0][0], groups[1][0]))
        if counts[0] == 3 and counts[1] == 2:
            return HandStrength(HandRank.FULL_HOUSE, (groups[0][0], groups[1][0]))
        if flush:
            return HandStrength(HandRank.FLUSH, tuple(ordered))
        if high:
            return HandStrength(HandRank.STRAIGHT, (high,))
        if counts[0] == 3:
            trips = groups[0][0]
            return HandStrength(HandRank.THREE_OF_A_KIND, (trips, *[v for v in ordered if v != trips]))
        if counts[0] == 2 and counts[1] == 2:
            return HandStrength(HandRank.TWO_PAIR, (groups[0][0], groups[1][0], groups[2][0]))
        if counts[0] == 2:
            pair = groups[0][0]
            return HandStrength(HandRank.ONE_PAIR, (pair, *[v for v in ordered if v != pair]))
        return HandStrength(HandRank.HIGH_CARD, tuple(ordered))


# ── Single-pass strategy ──────────────────────────────────────────


def _highest_straight(bits: int) -> int:
    """High card of the best straight in *bits*, ``0`` if none (wheel → 5)."""
    for high in range(_ACE, 4, -1):
        mask = _STRAIGHT_MASK << (high - 4)
        if bits & mask == mask:
            return high
    return 0


def _straight_values(high: int) -> list[int]:
    return [_ACE if value == 1 else value for value in range(high, high - 5, -1)]


class SmartHandRanker(HandRanker):
    """One frequency/bitmask pass, classes tested strongest first."""

    name = "smart"

    def best_hand(self, cards: Sequence[Card]) -> tuple[HandStrength, list[Card]]:
        ordered = _sorted_cards(cards)
        by_value: dict[int, list[Card]] = defaultdict(list)
        by_suit: dict[str, list[Card]] = defaultdict(list)
        for card in ordered:
            by_value[card.value].append(card)
            by_suit[card.suit].append(card)

        flush_cards = next((suited for suited in by_suit.values() if len(suited) >= 5), None)

        # Straight flush: the straight must live inside the flush suit's own ranks.
        if flush_cards is not None:
            suited_high = _highest_straight(_rank_bits(card.value for card in flush_cards))
            if suited_high:
                suited_by_value = {card.value: card for card in flush_cards}
                five = [suited_by_value[value] for value in _straight_values(suited_high)]
                if suited_high == _ACE:
                    return HandStrength(HandRank.ROYAL_FLUSH, _ROYAL_VALUES), _sorted_cards(five)
                return HandStrength(HandRank.STRAIGHT_FLUSH, (suited_high,)), _sorted_cards(five)

        quads = [value for value, group in by_value.items() if len(group) == 4]
        if quads:
            quad = max(quads)
            kicker = next(card for card in ordered if card.value != quad)
            return (
                HandStrength(HandRank.FOUR_OF_A_KIND, (quad, kicker.value)),
                by_value[quad] + [kicker],
            )

        trips = sorted((value for value, group in by_value.items() if len(group) == 3), reverse=True)
        if trips:
            fillers = [value for value, group in by_value.items() if len(group) >= 2 and value != trips[0]]
            if fillers:
                pair = max(fillers)
                return (
                    HandStrength(HandRank.FULL_HOUSE, (trips[0], pair)),
                    by_value[trips[0]] + by_value[pair][:2],
                )

        if flush_cards is not None:
            five = flush_cards[:5]
            return HandStrength(HandRank.FLUSH, tuple(card.value for card in five)), five

        high = _highest_straight(_rank_bits(by_value))
        if high:
            five = [by_value[value][0] for value in _straight_values(high)]
            return HandStrength(HandRank.STRAIGHT, (high,)), _sorted_cards(five)

        if trips:
            kickers = [card for card in ordered if card.value != trips[0]][:2]
            return (
                HandStrength(HandRank.THREE_OF_A_KIND, (trips[0], *[card.value for card in kickers])),
                by_value[trips[0]] + kickers,
            )

        pairs = sorted((value for value, group in by_value.items() if len(group) == 2), reverse=True)
        if len(pairs) >= 2:
            high_pair, low_pair = pairs[0], pairs[1]
            kicker = next(card for card in ordered if card.value not in (high_pair, low_pair))
            return (
                HandStrength(HandRank.TWO_PAIR, (high_pair, low_pair, kicker.value)),
                by_value[high_pair] + by_value[low_pair] + [kicker],
            )
        if pairs:
            kickers = [card for card in ordered if card.value != pairs[0]][:3]
            return (
                HandStrength(HandRank.ONE_PAIR, (pairs[0], *[card.value for card in kickers])),
                by_value[pairs[0]] + kickers,
            )

        five = ordered[:5]
        return HandStrength(HandRank.HIGH_CARD, tuple(card.value for card in five)), five


# ── Registry ──────────────────────────────────────────────────────

_RANKERS: dict[str, type[HandRanker]] = {
    "default": ExhaustiveHandRanker,
    "exhaustive": ExhaustiveHandRanker,
    "smart": SmartHandRanker,
    "optimized": SmartHandRanker,
}


def get_ranker(ranker: str | HandRanker) -> HandRanker:
    """Resolve a strategy instance from a name (``default``/``exhaustive``, ``smart``/``optimized``)."""
    if isinstance(ranker, HandRanker):
        return ranker
    key = str(ranker).strip().lower()
    try:
        return _RANKERS[key]()
    except KeyError:
        raise ValueError(
            f"unknown hand ranker {ranker!r}. Must be one of: {', '.join(sorted(_RANKERS))}"
        ) from None
