"""Winner selection over hand strengths."""

from __future__ import annotations

from typing import Sequence

from joker.core.strength import HandStrength


def compare(a: HandStrength, b: HandStrength) -> int:
    """Three-way comparison: rank class, then tie-break vector."""
    return a.compare(b)


def find_winners(strengths: Sequence[HandStrength]) -> list[int]:
    """Indices of every hand sharing the best strength (empty input → ``[]``)."""
    if not strengths:
        return []

    winners = [0]
    best = strengths[0]
    for idx in range(1, len(strengths)):
        result = compare(strengths[idx], best)
        if result > 0:
            winners = [idx]
            best = strengths[idx]
        elif result == 0:
            winners.append(idx)
    return winners
