"""Tests for joker.utils.card_utils: token parsing helpers."""

from __future__ import annotations

import pytest

from joker.core.cards import Card
from joker.utils.card_utils import (
    normalize_card,
    parse_card,
    parse_cards,
    street_from_board,
)


# ── normalize_card ────────────────────────────────────────────────


class TestNormalizeCard:
    def test_ascii(self) -> None:
        assert normalize_card("As") == "A♠"
        assert normalize_card("2c") == "2♣"
        assert normalize_card("Kd") == "K♦"

    def test_ten_aliases(self) -> None:
        assert normalize_card("Th") == "10♥"
        assert normalize_card("10h") == "10♥"
        assert normalize_card("tS") == "10♠"

    def test_symbols(self) -> None:
        assert normalize_card("a♠") == "A♠"
        assert normalize_card("10♥") == "10♥"

    def test_whitespace(self) -> None:
        assert normalize_card("  Qd  ") == "Q♦"

    def test_invalid_returns_none(self) -> None:
        assert normalize_card("XY") is None
        assert normalize_card("") is None
        assert normalize_card("A") is None
        assert normalize_card("1s") is None
        assert normalize_card(42) is None  # type: ignore[arg-type]


# ── parse_card(s) ─────────────────────────────────────────────────


class TestParseCard:
    def test_parse(self) -> None:
        assert parse_card("Td") == Card("10", "♦")

    def test_card_passthrough(self) -> None:
        card = Card("A", "♣")
        assert parse_card(card) is card

    def test_invalid_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid card string"):
            parse_card("Zz")

    def test_parse_cards(self) -> None:
        assert [str(card) for card in parse_cards(["As", "10♥", "qd"])] == ["A♠", "10♥", "Q♦"]


# ── street_from_board ─────────────────────────────────────────────


class TestStreetFromBoard:
    @pytest.mark.parametrize(
        ("count", "street"),
        [(0, "preflop"), (3, "flop"), (4, "turn"), (5, "river")],
    )
    def test_streets(self, count: int, street: str) -> None:
        assert street_from_board(["As"] * count) == street
