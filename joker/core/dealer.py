"""Dealing strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod

from joker.core.cards import Deck, Hand
from joker.core.errors import DealError


class DealStrategy(ABC):
    """Moves cards from the top of a deck into hands."""

    @abstractmethod
    def deal(self, deck: Deck, num_cards: int, hands: int) -> list[Hand]:
        """Deal *num_cards* to each of *hands* hands, consuming *deck*."""


class StandardDealer(DealStrategy):
    """Round-robin dealing: one card per hand per pass, from the top."""

    def deal(self, deck: Deck, num_cards: int, hands: int = 1) -> list[Hand]:
        if num_cards <= 0:
            raise DealError("num_cards must be positive")
        if hands <= 0:
            raise DealError("hands must be positive")
        if deck.count() == 0:
            raise DealError("cannot deal from empty deck")
        needed = num_cards * hands
        if needed > deck.count():
            raise DealError("not enough cards in deck")

        dealt = [Hand() for _ in range(hands)]
        for position, card in enumerate(deck.cards[:needed]):
            dealt[position % hands].add_card(card)
        deck.cards = deck.cards[needed:]
        return dealt
