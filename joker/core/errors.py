"""Exception types raised by the equity engine.

Invalid *evaluator* input is not an exception: rankers return
``HandRank.INVALID_HAND`` with no best hand.  The classes below cover the
remaining explicit failures (capacity violations and exhausted decks).
"""

from __future__ import annotations


class JokerError(Exception):
    """Base class for all engine errors."""


class CapacityError(JokerError, ValueError):
    """A card container would exceed its declared capacity.

    Raised when more than five community cards are requested, or when a
    card already in play is added again.
    """


class DeckExhaustedError(JokerError):
    """No cards are left to burn or deal."""


class DealError(JokerError):
    """A dealer could not satisfy a deal request."""
