"""Hand progression for a single Hold'em table.

A :class:`Game` owns one deck per hand: hole cards are dealt on
:meth:`Game.start_hand`, and every community street burns one card
before dealing.  Burned cards go to a private side channel that is only
readable as a tuple; they are never part of any player's or the board's
cards, so they cannot reach a ranker.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from joker.core.cards import Card, Deck, GameType
from joker.core.dealer import DealStrategy, StandardDealer
from joker.core.errors import CapacityError, DealError, DeckExhaustedError

_log = logging.getLogger("joker.core.game")

MAX_COMMUNITY_CARDS = 5


@dataclass(slots=True)
class Player:
    """Seat state.

    Attributes:
        player_id: Seat index.
        cards:     Hole cards for the current hand.
        chips:     Chip stack (not used by the equity engine).
    """

    player_id: int
    cards: list[Card] = field(default_factory=list)
    chips: int = 0


class Game:
    """Deal hole cards and community streets for one variant."""

    def __init__(
        self,
        game_type: GameType | str = GameType.TEXAS,
        num_players: int = 2,
        dealer: DealStrategy | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if num_players < 2:
            raise ValueError("Number of players must be at least 2")
        self.game_type = GameType.parse(game_type)
        self.dealer: DealStrategy = dealer or StandardDealer()
        self.deck = Deck.for_game(self.game_type)
        self.players = [Player(player_id=idx) for idx in range(num_players)]
        self.community: list[Card] = []
        self._burned: list[Card] = []
        self._rng = rng

    @property
    def burned_cards(self) -> tuple[Card, ...]:
        return tuple(self._burned)

    def hole_cards(self) -> list[list[Card]]:
        return [list(player.cards) for player in self.players]

    def start_hand(self) -> None:
        """Fresh shuffled deck, empty board, and hole cards for every seat."""
        self.deck = Deck.for_game(self.game_type)
        self.deck.shuffle(self._rng)
        self.community = []
        self._burned = []

        hands = self.dealer.deal(self.deck, self.game_type.hole_cards, len(self.players))
        for player, hand in zip(self.players, hands):
            player.cards = list(hand.cards)
        _log.debug("dealt %d %s hands, %d cards left", len(hands), self.game_type.value, self.deck.count())

    def burn_card(self) -> Card:
        if self.deck.count() == 0:
            raise DeckExhaustedError("no cards left to burn")
        card = self.deck.cards.pop(0)
        self._burned.append(card)
        return card

    def deal_community_cards(self, num_cards: int) -> list[Card]:
        """Burn one card, then deal *num_cards* to the board.

        The deck is checked before burning, so a failed deal leaves it untouched.
        """
        if len(self.community) + num_cards > MAX_COMMUNITY_CARDS:
            raise CapacityError(
                f"cannot deal {num_cards} cards: would exceed maximum of "
                f"{MAX_COMMUNITY_CARDS} community cards (current: {len(self.community)})"
            )
        if num_cards <= 0:
            raise DealError("num_cards must be positive")
        if 0 < self.deck.count() <= num_cards:
            raise DealError("not enough cards in deck")
        self.burn_card()
        hands = self.dealer.deal(self.deck, num_cards, 1)
        self.community.extend(hands[0].cards)
        return list(hands[0].cards)

    def deal_flop(self) -> list[Card]:
        return self.deal_community_cards(3)

    def deal_turn_or_river(self) -> list[Card]:
        return self.deal_community_cards(1)
