from .cards import Card, Deck, GameType, Hand
from .comparator import compare, find_winners
from .equity import EquityCalculator, ShowdownResult
from .errors import CapacityError, DealError, DeckExhaustedError, JokerError
from .evaluator import ExhaustiveHandRanker, HandRanker, SmartHandRanker, get_ranker
from .game import Game, Player
from .strength import HandRank, HandStrength

__all__ = [
    "Card",
    "Deck",
    "GameType",
    "Hand",
    "compare",
    "find_winners",
    "EquityCalculator",
    "ShowdownResult",
    "JokerError",
    "CapacityError",
    "DealError",
    "DeckExhaustedError",
    "HandRanker",
    "ExhaustiveHandRanker",
    "SmartHandRanker",
    "get_ranker",
    "Game",
    "Player",
    "HandRank",
    "HandStrength",
]
