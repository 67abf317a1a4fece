"""Hand-strength value objects.

A :class:`HandStrength` is the output of every ranker: a rank class plus
a tie-break vector whose meaning depends on the class::

    Royal Flush      (14, 13, 12, 11, 10)
    Straight Flush   (high,)
    Four of a Kind   (quad, kicker)
    Full House       (trips, pair)
    Flush            five ranks, descending
    Straight         (high,)            wheel A-2-3-4-5 reports 5
    Three of a Kind  (trips, k1, k2)
    Two Pair         (high pair, low pair, kicker)
    One Pair         (pair, k1, k2, k3)
    High Card        five ranks, descending

Strengths are totally ordered: rank class first, then the vector element
by element.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from functools import total_ordering


class HandRank(IntEnum):
    """Poker hand classes; higher is stronger."""

    INVALID_HAND = 0
    HIGH_CARD = 1
    ONE_PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9
    ROYAL_FLUSH = 10

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS: dict[HandRank, str] = {
    HandRank.INVALID_HAND: "Invalid Hand",
    HandRank.HIGH_CARD: "High Card",
    HandRank.ONE_PAIR: "One Pair",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.STRAIGHT: "Straight",
    HandRank.FLUSH: "Flush",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.ROYAL_FLUSH: "Royal Flush",
}


@total_ordering
@dataclass(frozen=True, slots=True, eq=False)
class HandStrength:
    """Rank class plus tie-break vector.

    Attributes:
        rank:   Hand class.
        values: Tie-break ranks, most significant first.
    """

    rank: HandRank
    values: tuple[int, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return self.rank is not HandRank.INVALID_HAND

    def compare(self, other: HandStrength) -> int:
        """``1`` if stronger than *other*, ``-1`` if weaker, ``0`` if equal."""
        if self.rank != other.rank:
            return 1 if self.rank > other.rank else -1
        for mine, theirs in zip(self.values, other.values):
            if mine != theirs:
                return 1 if mine > theirs else -1
        return 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HandStrength):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: HandStrength) -> bool:
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash((int(self.rank), self.values))

    def __str__(self) -> str:
        if not self.values:
            return self.rank.label
        return f"{self.rank.label} {list(self.values)}"


INVALID_STRENGTH = HandStrength(HandRank.INVALID_HAND)
