"""Combinatorial sizing and duplicate-free runout sampling.

``draw_distinct`` is rejection sampling: reshuffle, take the top *k*
cards, keep the hand if its canonical key is new.  It stays cheap while
*k* is small relative to the deck and the requested limit is far from
the size of the space.  When the caller asks for the whole space the
distinct hands are enumerated directly, which yields exactly the same
set without the unbounded tail of retries.

The size of the space is the number of *distinct* hands.  For a plain
deck that is ``C(n, k)``; a multi-pack deck (``Deck.times``) holds
physical copies that compare equal, so several physical combinations
collapse onto one hand and the space shrinks accordingly.

Maintainer notes
-----------------
* Rejection sampling does not guarantee uniform coverage of the space;
  do not replace it with rank/unrank enumeration without re-checking the
  statistical tests in ``tests/test_equity.py``.
"""

from __future__ import annotations

import logging
import random
from collections import Counter
from itertools import combinations, combinations_with_replacement
from typing import Sequence

from joker.core.cards import DEFAULT_ORGANIZER, Card

_log = logging.getLogger("joker.core.sampler")

Runout = tuple[Card, ...]
"""One drawn hand, in canonical (organizer) order."""


def combination_count(n: int, k: int) -> int:
    """C(n, k) via the multiplicative formula; ``0`` when ``k <= 0`` or ``k > n``."""
    if k <= 0 or k > n:
        return 0
    k = min(k, n - k)
    result = 1
    for i in range(1, k + 1):
        result = result * (n - k + i) // i
    return result


def distinct_hand_count(cards: Sequence[Card], k: int) -> int:
    """Number of distinct unordered *k*-card hands drawable from *cards*.

    Equals ``C(len(cards), k)`` when every card is unique.  With physical
    copies, a card may appear in a hand at most as often as it is in
    *cards*.
    """
    if k <= 0 or k > len(cards):
        return 0
    copies = Counter(cards)
    if len(copies) == len(cards):
        return combination_count(len(cards), k)

    # ways[size]: distinct hands of `size` cards over the cards seen so far
    ways = [1] + [0] * k
    for available in copies.values():
        grown = [0] * (k + 1)
        for size, count in enumerate(ways):
            if not count:
                continue
            for extra in range(min(available, k - size) + 1):
                grown[size + extra] += count
        ways = grown
    return ways[k]


def canonical(cards: Sequence[Card]) -> Runout:
    ordered = list(cards)
    DEFAULT_ORGANIZER.sort(ordered)
    return tuple(ordered)


def _joined(hand: Runout) -> str:
    return " ".join(str(card) for card in hand)


def hand_key(cards: Sequence[Card]) -> str:
    """Order-independent key used to detect duplicate hands."""
    return _joined(canonical(cards))


def _enumerate_all(cards: Sequence[Card], k: int) -> list[Runout]:
    copies = Counter(cards)
    unique = canonical(list(copies))
    # combinations of canonically ordered input stay canonical
    if len(unique) == len(cards):
        return list(combinations(unique, k))
    return [
        combo
        for combo in combinations_with_replacement(unique, k)
        if all(combo.count(card) <= copies[card] for card in set(combo))
    ]


def draw_distinct(
    cards: Sequence[Card],
    k: int,
    limit: int,
    rng: random.Random | None = None,
) -> list[Runout]:
    """Draw up to *limit* distinct unordered *k*-card hands from *cards*.

    Args:
        cards: Remaining deck.  It is copied, never mutated.
        k:     Cards per hand.
        limit: Maximum number of hands to return.
        rng:   Random source; a fresh entropy-seeded one when omitted.

    Returns:
        Between ``0`` and ``min(limit, distinct_hand_count(cards, k))``
        hands, each a tuple in canonical order.  Empty when ``k <= 0``, ``limit <= 0`` or
        ``k > len(cards)``.
    """
    n = len(cards)
    if k <= 0 or limit <= 0 or k > n:
        return []

    total = distinct_hand_count(cards, k)
    if limit >= total:
        _log.debug("enumerating all %d distinct hands of %d from %d cards", total, k, n)
        return _enumerate_all(cards, k)

    rng = rng or random.Random()
    working = list(cards)
    seen: set[str] = set()
    hands: list[Runout] = []
    while len(hands) < limit:
        rng.shuffle(working)
        hand = canonical(working[:k])
        key = _joined(hand)
        if key in seen:
            continue
        seen.add(key)
        hands.append(hand)
    return hands
