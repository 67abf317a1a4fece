"""Tests for joker.core.evaluator: hand classes and tie-break vectors."""

from __future__ import annotations

import pytest

from joker.core.cards import JOKER, Card, GameType
from joker.core.evaluator import ExhaustiveHandRanker, HandRanker, SmartHandRanker, get_ranker
from joker.core.strength import HandRank, HandStrength
from joker.utils.card_utils import parse_cards

RANKERS = [ExhaustiveHandRanker(), SmartHandRanker()]


def _rank(ranker: HandRanker, hole: str, board: str, game: str = "texas"):
    return ranker.rank_hand(parse_cards(hole.split()), parse_cards(board.split()), game)


# ── Hand classes ──────────────────────────────────────────────────

CASES = [
    ("As Ks", "Qs Js Ts 2d 3c", HandRank.ROYAL_FLUSH, (14, 13, 12, 11, 10)),
    ("9h 8h", "7h 6h 5h Kd 2c", HandRank.STRAIGHT_FLUSH, (9,)),
    ("2s 3s", "4s 5s 6s 7s 8s", HandRank.STRAIGHT_FLUSH, (8,)),
    ("As 2s", "3s 4s 5s Kd Qc", HandRank.STRAIGHT_FLUSH, (5,)),
    ("2d 3d", "4d 5d 6d Ac Kh", HandRank.STRAIGHT_FLUSH, (6,)),
    ("Ah Ad", "Ac As Kd 2c 3h", HandRank.FOUR_OF_A_KIND, (14, 13)),
    ("Kh Kd", "Kc Ah Ad 2c 3s", HandRank.FULL_HOUSE, (13, 14)),
    ("Kh Kd", "Kc Ah Ad As 2c", HandRank.FULL_HOUSE, (14, 13)),
    ("Ah 9h", "7h 4h 2h Kd Qs", HandRank.FLUSH, (14, 9, 7, 4, 2)),
    ("9h 8d", "7h 6h 5h 2h Kc", HandRank.FLUSH, (9, 7, 6, 5, 2)),
    ("9c 8d", "7h 6s 5c Kd 2h", HandRank.STRAIGHT, (9,)),
    ("Ac 2d", "3h 4s 5c Kd 9h", HandRank.STRAIGHT, (5,)),
    ("Ac Kd", "Qh Js Tc 2d 3h", HandRank.STRAIGHT, (14,)),
    ("Ah Ad", "Ac Kd Qh 7s 2c", HandRank.THREE_OF_A_KIND, (14, 13, 12)),
    ("Ah Ad", "Kc Kd Qh 7s 2c", HandRank.TWO_PAIR, (14, 13, 12)),
    ("Ah 7d", "Kc Kd Qh Qs 2c", HandRank.TWO_PAIR, (13, 12, 14)),
    ("Ah Ad", "Kc Kd Jh Js 2c", HandRank.TWO_PAIR, (14, 13, 11)),
    ("Ah Ad", "Kc Qd Jh 7s 2c", HandRank.ONE_PAIR, (14, 13, 12, 11)),
    ("Ah Kd", "Qc 9d 7h 4s 2c", HandRank.HIGH_CARD, (14, 13, 12, 9, 7)),
]


@pytest.mark.parametrize("ranker", RANKERS, ids=lambda r: type(r).__name__)
@pytest.mark.parametrize(("hole", "board", "rank", "values"), CASES)
def test_hand_classes(ranker: HandRanker, hole: str, board: str, rank: HandRank, values: tuple[int, ...]) -> None:
    strength, best = _rank(ranker, hole, board)
    assert strength.rank is rank
    assert strength.values[: len(values)] == values
    assert best is not None and len(best) == 5


# ── Invalid input ─────────────────────────────────────────────────


@pytest.mark.parametrize("ranker", RANKERS, ids=lambda r: type(r).__name__)
class TestInvalidInput:
    def test_wrong_hole_count(self, ranker: HandRanker) -> None:
        strength, best = _rank(ranker, "As", "Qs Js Ts 2d 3c")
        assert strength.rank is HandRank.INVALID_HAND
        assert best is None

    def test_incomplete_board(self, ranker: HandRanker) -> None:
        strength, best = _rank(ranker, "As Ks", "Qs Js Ts")
        assert strength.rank is HandRank.INVALID_HAND
        assert best is None

    def test_duplicate_card(self, ranker: HandRanker) -> None:
        strength, _ = _rank(ranker, "As Ks", "As Js Ts 2d 3c")
        assert strength.rank is HandRank.INVALID_HAND

    def test_joker(self, ranker: HandRanker) -> None:
        hole = [Card(JOKER, "Red"), Card("A", "♠")]
        strength, best = ranker.rank_hand(hole, parse_cards("Qs Js Ts 2d 3c".split()))
        assert strength.rank is HandRank.INVALID_HAND
        assert best is None

    def test_none_input(self, ranker: HandRanker) -> None:
        strength, best = ranker.rank_hand(None, None)  # type: ignore[arg-type]
        assert strength.rank is HandRank.INVALID_HAND
        assert best is None


# ── Best five ─────────────────────────────────────────────────────


@pytest.mark.parametrize("ranker", RANKERS, ids=lambda r: type(r).__name__)
class TestBestFive:
    def test_royal_cards(self, ranker: HandRanker) -> None:
        _, best = _rank(ranker, "As Ks", "Qs Js Ts 2d 3c")
        assert {str(card) for card in best} == {"A♠", "K♠", "Q♠", "J♠", "10♠"}

    def test_quads_with_best_kicker(self, ranker: HandRanker) -> None:
        _, best = _rank(ranker, "Ah Ad", "Ac As Kd 2c 3h")
        assert sorted(card.value for card in best) == [13, 14, 14, 14, 14]

    def test_straight_uses_one_card_per_rank(self, ranker: HandRanker) -> None:
        _, best = _rank(ranker, "9c 9d", "8h 7s 6c 5d 2h")
        assert sorted(card.value for card in best) == [5, 6, 7, 8, 9]


# ── Omaha ─────────────────────────────────────────────────────────


@pytest.mark.parametrize("ranker", RANKERS, ids=lambda r: type(r).__name__)
class TestOmaha:
    def test_two_hole_three_board(self, ranker: HandRanker) -> None:
        strength, best = _rank(ranker, "As Ks 2d 3c", "Qs Js Ts 9h 8h", "omaha")
        assert strength.rank is HandRank.ROYAL_FLUSH
        assert best is not None and len(best) == 5

    def test_cannot_use_four_hole_cards(self, ranker: HandRanker) -> None:
        # Hold'em rules would make a royal flush with one board heart.
        strength, _ = _rank(ranker, "Ah Kh Qh Jh", "Th 2c 3d 4s 9s", "omaha")
        assert strength.rank is HandRank.HIGH_CARD
        assert strength.values == (14, 13, 10, 9, 4)

    def test_board_flush_needs_two_suited_hole_cards(self, ranker: HandRanker) -> None:
        strength, _ = _rank(ranker, "Ah Kd Qc Js", "2h 5h 8h 9h Th", "omaha")
        assert strength.rank is not HandRank.FLUSH

    def test_texas_hole_count_rejected(self, ranker: HandRanker) -> None:
        strength, _ = _rank(ranker, "As Ks", "Qs Js Ts 9h 8h", GameType.OMAHA)
        assert strength.rank is HandRank.INVALID_HAND


# ── Ordering / registry ───────────────────────────────────────────


class TestOrdering:
    def test_class_order(self) -> None:
        ordered = [
            HandRank.HIGH_CARD,
            HandRank.ONE_PAIR,
            HandRank.TWO_PAIR,
            HandRank.THREE_OF_A_KIND,
            HandRank.STRAIGHT,
            HandRank.FLUSH,
            HandRank.FULL_HOUSE,
            HandRank.FOUR_OF_A_KIND,
            HandRank.STRAIGHT_FLUSH,
            HandRank.ROYAL_FLUSH,
        ]
        assert ordered == sorted(ordered)
        assert HandRank.INVALID_HAND < HandRank.HIGH_CARD

    def test_strength_compare(self) -> None:
        high = HandStrength(HandRank.ONE_PAIR, (14, 13, 12, 11))
        low = HandStrength(HandRank.ONE_PAIR, (14, 13, 12, 10))
        assert high.compare(low) == 1
        assert low.compare(high) == -1
        assert high > low
        assert high == HandStrength(HandRank.ONE_PAIR, (14, 13, 12, 11))

    def test_class_beats_values(self) -> None:
        assert HandStrength(HandRank.TWO_PAIR, (3, 2, 4)) > HandStrength(HandRank.ONE_PAIR, (14, 13, 12, 11))

    def test_str(self) -> None:
        assert str(HandStrength(HandRank.TWO_PAIR, (14, 13, 12))) == "Two Pair [14, 13, 12]"
        assert str(HandStrength(HandRank.INVALID_HAND)) == "Invalid Hand"


class TestRegistry:
    def test_names(self) -> None:
        assert isinstance(get_ranker("default"), ExhaustiveHandRanker)
        assert isinstance(get_ranker("Smart"), SmartHandRanker)
        assert isinstance(get_ranker("optimized"), SmartHandRanker)

    def test_instance_passthrough(self) -> None:
        ranker = SmartHandRanker()
        assert get_ranker(ranker) is ranker

    def test_unknown_name(self) -> None:
        with pytest.raises(ValueError, match="unknown hand ranker"):
            get_ranker("magic")
