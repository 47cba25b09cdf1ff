"""Poker hand rules.

This module provides:
- Card and value/rank definitions (ranks.py)
- Hand type tags (hand_types.py)
- Game variant configuration (games.py)
- Straight detection helpers (straights.py)
- Hand classification and comparison (hands.py)
"""

from .ranks import (
    VALUES,
    SUITS,
    JOKER,
    ACE_RANK,
    LOW_ACE_RANK,
    WILD_RANK,
    Card,
    CardLike,
    rank_of,
    parse_cards,
    sort_cards,
    combine_hole_and_community,
    create_standard_deck,
)

from .hand_types import HandType, HAND_NAMES

from .games import (
    WildMode,
    GameRules,
    GAME_RULES,
    Game,
    available_games,
)

from .straights import gap_scan, wheel_scan, plan_wild_ranks, is_consecutive

from .hands import (
    Hand,
    DuplicateCardsError,
    EVALUATORS,
    compare_hands,
    is_wild,
    strip_wilds,
)

__all__ = [
    # Ranks
    "VALUES",
    "SUITS",
    "JOKER",
    "ACE_RANK",
    "LOW_ACE_RANK",
    "WILD_RANK",
    "Card",
    "CardLike",
    "rank_of",
    "parse_cards",
    "sort_cards",
    "combine_hole_and_community",
    "create_standard_deck",
    # Hand types
    "HandType",
    "HAND_NAMES",
    # Games
    "WildMode",
    "GameRules",
    "GAME_RULES",
    "Game",
    "available_games",
    # Straights
    "gap_scan",
    "wheel_scan",
    "plan_wild_ranks",
    "is_consecutive",
    # Hands
    "Hand",
    "DuplicateCardsError",
    "EVALUATORS",
    "compare_hands",
    "is_wild",
    "strip_wilds",
]
