"""Equity estimation from card strings.

Wraps :class:`joker.core.equity.EquityCalculator` with a token-based
interface: hole cards and board are given as strings (``"As"``,
``"10♥"``) and the result is an :class:`EquityEstimate` with the
per-player win rates and the all-player tie rate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from joker.core.cards import Card
from joker.core.equity import EquityCalculator, ShowdownResult
from joker.utils.card_utils import parse_cards, street_from_board
from joker.utils.config import EquityRuntimeConfig

_log = logging.getLogger("joker.tools.equity_tool")

CardTokens = Sequence[str | Card]


@dataclass(slots=True)
class EquityEstimate:
    """Result of an equity run.

    Attributes:
        win_rates:   Probability of each player winning (or splitting).
        tie_rate:    Probability of every player tying.
        simulations: Runouts actually evaluated.
        street:      Street implied by the board (``preflop`` … ``river``).
    """

    win_rates: list[float] = field(default_factory=list)
    tie_rate: float = 0.0
    simulations: int = 0
    street: str = "preflop"

    @property
    def favourite(self) -> int | None:
        """Index of the player with the highest win rate, ``None`` if empty."""
        if not self.win_rates:
            return None
        return max(range(len(self.win_rates)), key=self.win_rates.__getitem__)


class EquityTool:
    """Facade over :class:`EquityCalculator` for string input."""

    def __init__(self, config: EquityRuntimeConfig | None = None) -> None:
        self.config = config or EquityRuntimeConfig()

    def _calculator(
        self,
        players: Sequence[CardTokens],
        board_cards: CardTokens,
        simulations: int | None = None,
        **kwargs,
    ) -> EquityCalculator:
        hands = [parse_cards(hand) for hand in players]
        board = parse_cards(board_cards)
        return EquityCalculator(hands, simulations, community_cards=board, config=self.config, **kwargs)

    def estimate(
        self,
        players: Sequence[CardTokens],
        board_cards: CardTokens = (),
        simulations: int | None = None,
        **kwargs,
    ) -> EquityEstimate:
        """Run the calculator and package the rates.

        Args:
            players:     Hole-card tokens per player.
            board_cards: Known community cards.
            simulations: Requested trial count; config default when ``None``.
            **kwargs:    Forwarded to :class:`EquityCalculator`
                         (``game_type``, ``ranker``, ``workers``, ``rng``).

        Raises:
            ValueError: A token is not a card, or the hands are invalid.
        """
        calculator = self._calculator(players, board_cards, simulations, **kwargs)
        probabilities = calculator.calculate_win_probabilities()
        if not probabilities:
            return EquityEstimate(street=street_from_board(calculator.community_cards))

        estimate = EquityEstimate(
            win_rates=probabilities[:-1],
            tie_rate=probabilities[-1],
            simulations=calculator.last_trials,
            street=street_from_board(calculator.community_cards),
        )
        _log.debug("equity %s on %s: %s", estimate.win_rates, estimate.street, estimate.tie_rate)
        return estimate

    def showdown(self, players: Sequence[CardTokens], board_cards: CardTokens, **kwargs) -> ShowdownResult:
        """Rank every player on a complete five-card board."""
        return self._calculator(players, board_cards, **kwargs).evaluate_showdown()
