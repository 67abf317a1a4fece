"""Card, Hand and Deck model.

Cards are immutable ``(rank, suit)`` value objects.  Rank tokens are
``2``–``10``, ``J``, ``Q``, ``K``, ``A`` plus the special ``Joker`` rank;
suits are ``♠ ♥ ♦ ♣`` plus the two joker suits ``Red`` and ``White``.
Jokers only exist for deck construction and never rank in a 5-card hand.

The ordering tables below are the single source of truth for rank values
and suit order.  They are read through :func:`rank_value` and
:func:`suit_index` and never mutated.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Iterator, Protocol

if TYPE_CHECKING:
    from joker.core.sampler import Runout


RANKS: tuple[str, ...] = ("2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A")
"""Standard rank tokens, weakest first."""

SUITS: tuple[str, ...] = ("♠", "♥", "♦", "♣")
"""Standard suits in tie-break order (spades first)."""

JOKER = "Joker"
JOKER_SUITS: tuple[str, ...] = ("Red", "White")

SHORT_DECK_RANKS: tuple[str, ...] = RANKS[4:]
"""Ranks kept by the short deck (6 through Ace)."""

_RANK_VALUES: dict[str, int] = {rank: value for value, rank in enumerate(RANKS, start=2)}
_SUIT_ORDER: dict[str, int] = {suit: idx for idx, suit in enumerate(SUITS + JOKER_SUITS)}

# Deck construction order: suits outer, values inner, Ace first.
_DECK_RANK_ORDER: tuple[str, ...] = ("A",) + RANKS[:-1]


def rank_value(rank: str) -> int:
    """Numeric value of *rank* (``2``–``14``, Ace high); ``0`` for jokers and unknown tokens."""
    return _RANK_VALUES.get(rank, 0)


def suit_index(suit: str) -> int:
    """Position of *suit* in the tie-break order; unknown suits sort last."""
    return _SUIT_ORDER.get(suit, len(_SUIT_ORDER))


class GameType(str, Enum):
    """Hold'em variants supported by the deck builder and the rankers."""

    TEXAS = "texas"
    SHORT = "short"
    OMAHA = "omaha"

    @property
    def hole_cards(self) -> int:
        return 4 if self is GameType.OMAHA else 2

    @classmethod
    def parse(cls, value: str | GameType) -> GameType:
        if isinstance(value, GameType):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"invalid game type {value!r}. Must be one of: texas, omaha, short"
            ) from None


@dataclass(frozen=True, slots=True)
class Card:
    """A single playing card.

    Attributes:
        rank: Rank token (``"A"``, ``"10"``, ``"Joker"`` …).
        suit: Suit symbol or joker colour.
    """

    rank: str
    suit: str

    @property
    def value(self) -> int:
        return rank_value(self.rank)

    @property
    def is_joker(self) -> bool:
        return self.rank == JOKER

    @property
    def is_standard(self) -> bool:
        """``True`` for the 52 cards that take part in hand ranking."""
        return self.rank in _RANK_VALUES and self.suit in SUITS

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"


# ── Ordering policy ───────────────────────────────────────────────


class CardOrganizer(Protocol):
    """Ordering policy used by :class:`Hand` for display and dedup keys."""

    def sort(self, cards: list[Card]) -> None: ...


class DefaultOrganizer:
    """Jokers first, then descending rank, then suit order ``♠ ♥ ♦ ♣``."""

    @staticmethod
    def sort_key(card: Card) -> tuple[int, int, int]:
        return (0 if card.is_joker else 1, -card.value, suit_index(card.suit))

    def sort(self, cards: list[Card]) -> None:
        cards.sort(key=self.sort_key)


DEFAULT_ORGANIZER = DefaultOrganizer()


class Hand:
    """Ordered card collection with a pluggable ordering policy."""

    def __init__(self, cards: Iterable[Card] | None = None, organizer: CardOrganizer | None = None) -> None:
        self.cards: list[Card] = [card for card in (cards or ()) if card is not None]
        self.organizer: CardOrganizer = organizer or DEFAULT_ORGANIZER

    def set_organizer(self, organizer: CardOrganizer) -> None:
        self.organizer = organizer

    def add_card(self, card: Card | None) -> None:
        if card is not None:
            self.cards.append(card)

    def remove_card(self, index: int) -> Card | None:
        """Remove and return the card at *index*; ``None`` when out of range."""
        if index < 0 or index >= len(self.cards):
            return None
        return self.cards.pop(index)

    def count(self) -> int:
        return len(self.cards)

    def clear(self) -> None:
        self.cards = []

    def sort(self) -> None:
        self.organizer.sort(self.cards)

    def key(self) -> str:
        """Canonical, order-independent identity of the hand's cards."""
        ordered = list(self.cards)
        self.organizer.sort(ordered)
        return " ".join(str(card) for card in ordered)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        return self.key()

    def __repr__(self) -> str:
        return f"Hand({self.key()!r})"


# ── Deck ──────────────────────────────────────────────────────────


def _mask_set(masks: Iterable[str | Card]) -> set[str]:
    return {str(mask) for mask in masks}


class Deck:
    """Mutable, ordered sequence of remaining cards.

    Dealing and burning consume from the top (index ``0``).
    """

    def __init__(self, cards: Iterable[Card] | None = None) -> None:
        self.cards: list[Card] = list(cards or ())

    @classmethod
    def standard(cls, *masks: str | Card, ranks: Iterable[str] | None = None) -> Deck:
        """52-card deck without the cards named in *masks* (``"A♠"``, ``"10♥"`` or :class:`Card`)."""
        excluded = _mask_set(masks)
        allowed = set(ranks) if ranks is not None else None
        cards = [
            Card(rank, suit)
            for suit in SUITS
            for rank in _DECK_RANK_ORDER
            if f"{rank}{suit}" not in excluded and (allowed is None or rank in allowed)
        ]
        return cls(cards)

    @classmethod
    def with_jokers(cls, *masks: str | Card) -> Deck:
        """54-card deck: the standard deck plus the Red and White jokers."""
        deck = cls.standard(*masks)
        deck.cards.extend(Card(JOKER, suit) for suit in JOKER_SUITS)
        return deck

    @classmethod
    def for_game(cls, game_type: GameType | str, *masks: str | Card) -> Deck:
        """Deck used by *game_type*; the short deck drops ranks 2 to 5."""
        game = GameType.parse(game_type)
        if game is GameType.SHORT:
            return cls.standard(*masks, ranks=SHORT_DECK_RANKS)
        return cls.standard(*masks)

    def count(self) -> int:
        return len(self.cards)

    def shuffle(self, rng: random.Random | None = None) -> None:
        """Uniform in-place shuffle; a fresh entropy-seeded source is used when *rng* is omitted."""
        (rng or random.Random()).shuffle(self.cards)

    def times(self, copies: int) -> Deck:
        """New deck holding *copies* consecutive copies of this one (empty for ``copies <= 0``)."""
        if copies <= 0:
            return Deck()
        return Deck(self.cards * copies)

    def combination_count(self, k: int) -> int:
        from joker.core.sampler import combination_count

        return combination_count(len(self.cards), k)

    def draw_with_limit_hands(self, k: int, limit: int, rng: random.Random | None = None) -> list[Runout]:
        """Up to *limit* distinct unordered *k*-card hands drawn from this deck."""
        from joker.core.sampler import draw_distinct

        return draw_distinct(self.cards, k, limit, rng=rng)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __repr__(self) -> str:
        return f"Deck(count={len(self.cards)})"
