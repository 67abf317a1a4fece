"""Monte-Carlo equity engine.

Given every player's hole cards and the known part of the board, the
calculator masks those cards out of the deck, draws distinct runouts for
the unknown board cards, ranks every player on every runout and credits
the winners.  The result holds one probability per player plus a final
slot for a tie among *all* players; the slots sum to 1.

Accounting per runout:

* one winner          → +1 to that player;
* some players tie    → ``1 / len(winners)`` to each of them;
* every player ties   → +1 to the tie slot.

The trial count is capped to the size of the remaining outcome space,
``C(remaining deck, unknown board cards)``, so turn and river spots are
enumerated exactly instead of being oversampled; a complete board is a
single literal showdown.

Performance:
    Runouts are materialised before dispatch and split into contiguous
    chunks, one per worker thread.  Each worker ranks its chunk into a
    private tally and merges it under a lock held only for the merge.
    Small jobs (``parallel_threshold``) run sequentially.
"""

from __future__ import annotations

import logging
import math
import random
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, Sequence

from joker.core.cards import Card, Deck, GameType
from joker.core.comparator import find_winners
from joker.core.errors import CapacityError, DeckExhaustedError
from joker.core.evaluator import HandRanker, get_ranker
from joker.core.sampler import Runout, combination_count
from joker.core.strength import HandStrength
from joker.utils.config import EquityRuntimeConfig

_log = logging.getLogger("joker.core.equity")

MAX_COMMUNITY_CARDS = 5


@dataclass(slots=True)
class ShowdownResult:
    """Evaluation of a complete board.

    Attributes:
        hand_strengths: Strength of each player's best hand.
        best_hands:     The five cards making up each best hand.
        winners:        Indices of the winning player(s).
    """

    hand_strengths: list[HandStrength]
    best_hands: list[list[Card] | None]
    winners: list[int]


@dataclass(slots=True)
class _Tally:
    credits: list[float]
    ties: float = 0.0
    trials: int = 0

    @classmethod
    def empty(cls, players: int) -> _Tally:
        return cls(credits=[0.0] * players)

    def merge(self, other: _Tally) -> None:
        for idx, credit in enumerate(other.credits):
            self.credits[idx] += credit
        self.ties += other.ties
        self.trials += other.trials


@dataclass(slots=True)
class _Chunk:
    runouts: Sequence[Runout]


class EquityCalculator:
    """Win/tie probabilities for a set of hands on a partial board.

    Args:
        players:         Hole cards per player (2 each, 4 for Omaha).
        simulations:     Requested trial count; defaults to the config value.
        ranker:          Ranker instance or name (``smart``/``default``).
        community_cards: Known board, 0 to 5 cards.  Extra cards beyond
                         five are dropped with a warning.
        game_type:       Variant; defaults to the config value.
        workers:         Worker threads; defaults to the config value.
        rng:             Random source; by default a fresh (or
                         config-seeded) one per calculation.
        config:          Runtime configuration.
    """

    def __init__(
        self,
        players: Iterable[Sequence[Card]],
        simulations: int | None = None,
        ranker: HandRanker | str | None = None,
        community_cards: Iterable[Card] = (),
        *,
        game_type: GameType | str | None = None,
        workers: int | None = None,
        rng: random.Random | None = None,
        config: EquityRuntimeConfig | None = None,
    ) -> None:
        self.config = config or EquityRuntimeConfig()
        self.simulations = int(self.config.simulations if simulations is None else simulations)
        if self.simulations <= 0:
            raise ValueError(f"simulations must be positive, got {self.simulations}")

        self.ranker = get_ranker(ranker if ranker is not None else self.config.evaluator)
        self.game_type = GameType.parse(game_type if game_type is not None else self.config.game_type)
        self.workers = max(1, int(self.config.workers if workers is None else workers))
        self._rng = rng
        self.last_trials = 0

        self.players: list[tuple[Card, ...]] = [tuple(hand) for hand in players]
        board = list(community_cards)
        if len(board) > MAX_COMMUNITY_CARDS:
            _log.warning("Truncating %d community cards to %d", len(board), MAX_COMMUNITY_CARDS)
            board = board[:MAX_COMMUNITY_CARDS]
        self.community_cards: list[Card] = board
        self._validate()

    # ── Input checks ──────────────────────────────────────────────

    def _used_cards(self) -> list[Card]:
        used = [card for hand in self.players for card in hand]
        used.extend(self.community_cards)
        return used

    def _validate(self) -> None:
        expected = self.game_type.hole_cards
        for idx, hand in enumerate(self.players):
            if len(hand) != expected:
                raise ValueError(
                    f"player {idx} has {len(hand)} hole cards, {self.game_type.value} requires {expected}"
                )
        used = self._used_cards()
        for card in used:
            if not card.is_standard:
                raise ValueError(f"card {card} cannot take part in a showdown")
        if len(set(used)) != len(used):
            raise ValueError("the same card is assigned more than once")

    def append_community_cards(self, *cards: Card) -> None:
        """Add newly revealed board cards (turn, river …).

        Raises:
            CapacityError: The board would exceed five cards, or a card is
                already in play.
        """
        if len(self.community_cards) + len(cards) > MAX_COMMUNITY_CARDS:
            raise CapacityError(
                f"cannot add {len(cards)} cards: would exceed maximum of {MAX_COMMUNITY_CARDS} "
                f"community cards (current: {len(self.community_cards)})"
            )
        in_play = set(self._used_cards())
        for card in cards:
            if card in in_play:
                raise CapacityError(f"card {card} is already in play")
            in_play.add(card)
        self.community_cards.extend(cards)

    # ── Simulation ────────────────────────────────────────────────

    def required_simulations(self, remaining_cards: int) -> int:
        """Trial count after capping to the remaining outcome space."""
        unknown = MAX_COMMUNITY_CARDS - len(self.community_cards)
        if unknown == 0:
            return 1
        return min(self.simulations, combination_count(remaining_cards, unknown))

    def _draw_runouts(self) -> tuple[Runout, ...]:
        deck = Deck.for_game(self.game_type, *self._used_cards())
        unknown = MAX_COMMUNITY_CARDS - len(self.community_cards)
        if unknown == 0:
            return ((),)

        trials = self.required_simulations(deck.count())
        rng = self._rng or self.config.make_rng()
        runouts = tuple(deck.draw_with_limit_hands(unknown, trials, rng=rng))
        if not runouts:
            raise DeckExhaustedError(
                f"not enough cards left to complete the board ({deck.count()} left, {unknown} needed)"
            )
        return runouts

    def _run_chunk(self, runouts: Sequence[Runout]) -> _Tally:
        tally = _Tally.empty(len(self.players))
        player_count = len(self.players)
        for drawn in runouts:
            board = self.community_cards + list(drawn)
            strengths = [self.ranker.rank_hand(hole, board, self.game_type)[0] for hole in self.players]
            winners = find_winners(strengths)
            if len(winners) == 1:
                tally.credits[winners[0]] += 1.0
            elif len(winners) < player_count:
                share = 1.0 / len(winners)
                for winner in winners:
                    tally.credits[winner] += share
            else:
                tally.ties += 1.0
            tally.trials += 1
        return tally

    def _run_parallel(self, runouts: Sequence[Runout], totals: _Tally) -> None:
        chunk_size = math.ceil(len(runouts) / self.workers)
        chunks = [_Chunk(runouts[start:start + chunk_size]) for start in range(0, len(runouts), chunk_size)]
        lock = threading.Lock()

        def work(chunk: _Chunk) -> None:
            local = self._run_chunk(chunk.runouts)
            with lock:
                totals.merge(local)

        with ThreadPoolExecutor(max_workers=len(chunks), thread_name_prefix="joker-equity") as pool:
            futures = [pool.submit(work, chunk) for chunk in chunks]
            for future in futures:
                future.result()

    def calculate_win_probabilities(self) -> list[float]:
        """Per-player win probabilities plus the all-player tie probability.

        Returns:
            ``len(players) + 1`` floats in ``[0, 1]`` summing to 1; the last
            slot is the probability that every player ties.  Empty when
            there are no players.
        """
        if not self.players:
            return []

        runouts = self._draw_runouts()
        totals = _Tally.empty(len(self.players))
        parallel = self.config.use_parallel(len(runouts), self.workers)
        _log.debug(
            "running %d trials (%d unknown board cards) %s",
            len(runouts),
            MAX_COMMUNITY_CARDS - len(self.community_cards),
            f"on {self.workers} workers" if parallel else "sequentially",
        )
        if parallel:
            self._run_parallel(runouts, totals)
        else:
            totals.merge(self._run_chunk(runouts))

        self.last_trials = totals.trials
        trials = float(totals.trials)
        probabilities = [credit / trials for credit in totals.credits]
        probabilities.append(totals.ties / trials)
        return probabilities

    # ── Showdown ──────────────────────────────────────────────────

    def evaluate_showdown(self) -> ShowdownResult:
        """Rank every player on the complete board and pick the winners.

        Raises:
            CapacityError: The board does not hold exactly five cards.
        """
        if len(self.community_cards) != MAX_COMMUNITY_CARDS:
            raise CapacityError(
                f"showdown requires exactly {MAX_COMMUNITY_CARDS} community cards, "
                f"got {len(self.community_cards)}"
            )

        strengths: list[HandStrength] = []
        best_hands: list[list[Card] | None] = []
        for hole in self.players:
            strength, best = self.ranker.rank_hand(hole, self.community_cards, self.game_type)
            strengths.append(strength)
            best_hands.append(best)
        return ShowdownResult(hand_strengths=strengths, best_hands=best_hands, winners=find_winners(strengths))
