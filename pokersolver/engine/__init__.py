"""Game engines built on the hand rules.

This module provides:
- PaiGowPokerHelper: Pai Gow Poker house-way split and settlement
- best_sub_selection: best five card straight or flush with the leftover pair
"""

from .paigow import (
    PaiGowPokerHelper,
    best_sub_selection,
    FULL_GAME,
    ALT_GAME,
    HI_GAME,
    LO_GAME,
)

__all__ = [
    "PaiGowPokerHelper",
    "best_sub_selection",
    "FULL_GAME",
    "ALT_GAME",
    "HI_GAME",
    "LO_GAME",
]
