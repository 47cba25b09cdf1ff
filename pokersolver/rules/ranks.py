"""Card value and rank definitions and utilities.

Rank order (high to low): A > K > Q > J > T > 9 > 8 > 7 > 6 > 5 > 4 > 3 > 2 > 1

"1" is the ace played low. It never appears in a dealt card pool; it only
exists so that an ace can occupy the bottom of an A-2-3-4-5 straight.

This module provides:
- Value/rank tables and the joker marker
- Card representation (immutable, with an optional wildcard binding)
- Parsing, sorting and deck utilities
"""

from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional, Union

# Index in this tuple is the card's rank.
VALUES = ("1", "2", "3", "4", "5", "6", "7", "8", "9", "T", "J", "Q", "K", "A")

LOW_ACE_RANK = 0
ACE_RANK = len(VALUES) - 1
KING_RANK = ACE_RANK - 1

# Rank carried by a wild card that has not been bound to a value yet.
WILD_RANK = -1

# The joker is denoted by a value of "O" and any suit.
JOKER = "O"

SUITS = ("c", "d", "h", "s")


def rank_of(value: str) -> int:
    """Rank of a card value, or WILD_RANK for the joker and unknown values."""
    try:
        return VALUES.index(value)
    except ValueError:
        return WILD_RANK


@dataclass(frozen=True)
class Card:
    """A playing card.

    Cards compare and hash by value and suit only, so a wild card bound to a
    rank is still equal to the same card unbound.

    Attributes:
        value: One of VALUES, or JOKER
        suit: Lowercase suit letter
        rank: Index of the value in VALUES (WILD_RANK for unbound wilds)
        wild_value: The value this card plays as
    """

    value: str
    suit: str
    rank: Optional[int] = field(default=None, compare=False)
    wild_value: Optional[str] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if self.rank is None:
            object.__setattr__(self, "rank", rank_of(self.value))
        if self.wild_value is None:
            object.__setattr__(self, "wild_value", self.value)

    def __str__(self) -> str:
        return f"{self.value}{self.suit}"

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse a card from a two-character code like 'As', 'Td' or 'Or'.

        Args:
            s: Value character followed by a suit character

        Returns:
            Card object

        Raises:
            ValueError: If the code cannot be parsed
        """
        if len(s) != 2:
            raise ValueError(f"Invalid card code: {s!r}")

        value = s[0].upper()
        suit = s[1].lower()

        # The low ace "1" is internal to straight detection and never dealt.
        if value != JOKER and value not in VALUES[LOW_ACE_RANK + 1 :]:
            raise ValueError(f"Invalid card value: {s[0]}")
        if value != JOKER and suit not in SUITS:
            raise ValueError(f"Invalid suit character: {s[1]}")

        return cls(value=value, suit=suit)

    @property
    def display_value(self) -> str:
        """Value as shown in hand descriptions."""
        return self.wild_value.replace("T", "10")

    @property
    def is_joker(self) -> bool:
        return self.value == JOKER

    def natural(self) -> "Card":
        """The same card with any wildcard binding removed."""
        return Card(value=self.value, suit=self.suit)

    def bind(self, rank: int) -> "Card":
        """Copy of this card playing as the value of the given rank."""
        wild_value = VALUES[rank] if rank >= 0 else self.value
        return replace(self, rank=rank, wild_value=wild_value)


CardLike = Union[str, Card]


def parse_cards(cards: Iterable[CardLike]) -> List[Card]:
    """Turn card codes (or cards) into a list of Card objects."""
    return [Card.from_string(c) if isinstance(c, str) else c for c in cards]


def sort_cards(cards: Iterable[Card]) -> List[Card]:
    """Sort cards by rank, highest first.

    The sort is stable, cards of equal rank keep their relative order.
    """
    return sorted(cards, key=lambda c: c.rank, reverse=True)


def combine_hole_and_community(
    hole_cards: Iterable[CardLike], community_cards: Iterable[CardLike]
) -> List[Card]:
    """Build one fresh card pool from hole and community cards.

    Any wildcard binding carried by the inputs is dropped.
    """
    return [c.natural() for c in parse_cards(hole_cards)] + [
        c.natural() for c in parse_cards(community_cards)
    ]


def create_standard_deck() -> List[Card]:
    """Create a standard 52-card deck.

    Returns:
        List of 52 Card objects (13 values x 4 suits)
    """
    deck = []
    for value in VALUES[1:]:
        for suit in SUITS:
            deck.append(Card(value=value, suit=suit))
    return deck
