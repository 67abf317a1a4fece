"""Tests for joker.core.cards: card model, organizer, hands and decks."""

from __future__ import annotations

import random

import pytest

from joker.core.cards import (
    JOKER,
    Card,
    Deck,
    DefaultOrganizer,
    GameType,
    Hand,
    rank_value,
)


# ── Card ──────────────────────────────────────────────────────────


class TestCard:
    def test_value_and_str(self) -> None:
        card = Card("10", "♥")
        assert card.value == 10
        assert str(card) == "10♥"
        assert Card("A", "♠").value == 14
        assert Card("2", "♣").value == 2

    def test_joker_flags(self) -> None:
        joker = Card(JOKER, "Red")
        assert joker.is_joker is True
        assert joker.is_standard is False
        assert joker.value == 0

    def test_unknown_rank_is_not_standard(self) -> None:
        assert rank_value("X") == 0
        assert Card("X", "♠").is_standard is False
        assert Card("A", "?").is_standard is False

    def test_cards_are_hashable_values(self) -> None:
        assert Card("K", "♦") == Card("K", "♦")
        assert len({Card("K", "♦"), Card("K", "♦"), Card("K", "♣")}) == 2


# ── GameType ──────────────────────────────────────────────────────


class TestGameType:
    def test_parse_is_case_insensitive(self) -> None:
        assert GameType.parse("Omaha") is GameType.OMAHA
        assert GameType.parse(" texas ") is GameType.TEXAS
        assert GameType.parse(GameType.SHORT) is GameType.SHORT

    def test_hole_cards(self) -> None:
        assert GameType.TEXAS.hole_cards == 2
        assert GameType.SHORT.hole_cards == 2
        assert GameType.OMAHA.hole_cards == 4

    def test_invalid_game_type(self) -> None:
        with pytest.raises(ValueError, match="invalid game type"):
            GameType.parse("stud")


# ── Hand / organizer ──────────────────────────────────────────────


class TestHand:
    def test_default_order_jokers_then_rank_then_suit(self) -> None:
        hand = Hand([Card("2", "♣"), Card("A", "♥"), Card(JOKER, "Red"), Card("A", "♠")])
        hand.sort()
        assert [str(card) for card in hand] == ["JokerRed", "A♠", "A♥", "2♣"]

    def test_key_is_order_independent(self) -> None:
        first = Hand([Card("K", "♠"), Card("Q", "♦")])
        second = Hand([Card("Q", "♦"), Card("K", "♠")])
        assert first.key() == second.key() == "K♠ Q♦"
        # key() does not reorder the hand itself
        assert str(second.cards[0]) == "Q♦"

    def test_add_and_remove(self) -> None:
        hand = Hand()
        hand.add_card(Card("5", "♥"))
        hand.add_card(None)
        assert hand.count() == 1
        assert hand.remove_card(3) is None
        assert hand.remove_card(-1) is None
        assert hand.remove_card(0) == Card("5", "♥")
        assert len(hand) == 0

    def test_clear(self) -> None:
        hand = Hand([Card("5", "♥"), Card("6", "♥")])
        hand.clear()
        assert hand.count() == 0

    def test_custom_organizer(self) -> None:
        class Ascending:
            def sort(self, cards: list[Card]) -> None:
                cards.sort(key=lambda card: card.value)

        hand = Hand([Card("A", "♠"), Card("3", "♦")])
        hand.set_organizer(Ascending())
        hand.sort()
        assert [str(card) for card in hand] == ["3♦", "A♠"]

    def test_sort_key_shape(self) -> None:
        assert DefaultOrganizer.sort_key(Card("A", "♠")) < DefaultOrganizer.sort_key(Card("K", "♠"))


# ── Deck ──────────────────────────────────────────────────────────


class TestDeck:
    def test_standard_deck(self) -> None:
        deck = Deck.standard()
        assert deck.count() == 52
        assert len(set(deck.cards)) == 52
        assert str(deck.cards[0]) == "A♠"

    def test_masks_accept_strings_and_cards(self) -> None:
        deck = Deck.standard("A♠", Card("K", "♥"), "10♦")
        assert deck.count() == 49
        assert Card("A", "♠") not in deck.cards
        assert Card("10", "♦") not in deck.cards

    def test_with_jokers(self) -> None:
        deck = Deck.with_jokers()
        assert deck.count() == 54
        assert sum(1 for card in deck if card.is_joker) == 2

    def test_with_jokers_masks_standard_cards(self) -> None:
        assert Deck.with_jokers("A♠", "K♠").count() == 52

    def test_short_deck(self) -> None:
        deck = Deck.for_game(GameType.SHORT)
        assert deck.count() == 36
        assert min(card.value for card in deck) == 6

    def test_omaha_uses_full_deck(self) -> None:
        assert Deck.for_game("omaha", "A♠").count() == 51

    def test_times(self) -> None:
        deck = Deck.standard()
        assert deck.times(2).count() == 104
        assert deck.times(0).count() == 0
        assert deck.count() == 52

    def test_shuffle_is_permutation(self) -> None:
        deck = Deck.standard()
        before = list(deck.cards)
        deck.shuffle(random.Random(7))
        assert deck.cards != before
        assert sorted(deck.cards, key=str) == sorted(before, key=str)

    def test_shuffle_reproducible_with_seed(self) -> None:
        first, second = Deck.standard(), Deck.standard()
        first.shuffle(random.Random(42))
        second.shuffle(random.Random(42))
        assert first.cards == second.cards

    def test_combination_count(self) -> None:
        assert Deck.standard().combination_count(5) == 2_598_960
        assert Deck.with_jokers().combination_count(5) == 3_162_510

    def test_draw_with_limit_hands(self) -> None:
        hands = Deck.standard().draw_with_limit_hands(2, 100, rng=random.Random(1))
        assert len(hands) == 100
        assert len(set(hands)) == 100
