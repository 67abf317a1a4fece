"""Card token parsing and display helpers.

Accepts the usual spellings of a card and maps them onto
:class:`joker.core.cards.Card`:

* ASCII shorthand: ``"As"``, ``"td"``, ``"10h"``
* Suit symbols:    ``"A♠"``, ``"10♥"``, ``"q♦"``

This module is the **single source of truth** for card-string helpers
used by ``joker.tools`` and the tests.
"""

from __future__ import annotations

from typing import Iterable

from joker.core.cards import RANKS, Card

SUIT_ALIASES: dict[str, str] = {
    "S": "♠", "H": "♥", "D": "♦", "C": "♣",
    "♠": "♠", "♥": "♥", "♦": "♦", "♣": "♣",
}
"""Accepted suit spellings mapped to the canonical symbol."""


# ── Normalisation (canonical ``A♠`` format) ───────────────────────


def normalize_card(token: str) -> str | None:
    """Normalise a card token to canonical ``<rank><suit symbol>`` format.

    Accepts ``"Th"`` → ``"10♥"``, ``"aS"`` → ``"A♠"``, ``" 10♦ "`` → ``"10♦"``.
    Returns ``None`` if *token* is not a valid card.
    """
    if not isinstance(token, str):
        return None
    cleaned = token.strip().upper()
    if len(cleaned) < 2:
        return None
    rank, suit = cleaned[:-1], SUIT_ALIASES.get(cleaned[-1])
    if rank == "T":
        rank = "10"
    if rank not in RANKS or suit is None:
        return None
    return f"{rank}{suit}"


def parse_card(token: str | Card) -> Card:
    """Parse a single token into a :class:`Card`.

    Raises ``ValueError`` if *token* is not a valid card.
    """
    if isinstance(token, Card):
        return token
    normalized = normalize_card(token)
    if normalized is None:
        raise ValueError(f"Invalid card string: {token!r}")
    return Card(normalized[:-1], normalized[-1])


def parse_cards(tokens: Iterable[str | Card]) -> list[Card]:
    """Parse every token; raises ``ValueError`` on the first invalid one."""
    return [parse_card(token) for token in tokens]


def street_from_board(board_cards: Iterable[object]) -> str:
    """Infer the current street from the number of community cards."""
    count = len(list(board_cards))
    if count >= 5:
        return "river"
    if count == 4:
        return "turn"
    if count >= 3:
        return "flop"
    return "preflop"

