"""pokersolver - poker hand classification.

Classifies card pools into their best hand under one of several game
variants, picks winners, and splits Pai Gow Poker hands the house way.
"""

__version__ = "0.1.0"

from pokersolver.rules import Card, Game, Hand, HandType, DuplicateCardsError
from pokersolver.engine import PaiGowPokerHelper
from pokersolver.utils.seeding import set_seed

__all__ = [
    "__version__",
    "Card",
    "Game",
    "Hand",
    "HandType",
    "DuplicateCardsError",
    "PaiGowPokerHelper",
    "set_seed",
]
