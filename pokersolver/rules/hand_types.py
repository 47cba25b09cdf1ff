"""Hand type tags.

A game variant lists the tags it recognises in priority order; the strength
of a tag is its position in that list, not its enum value.
"""

from enum import IntEnum, auto


class HandType(IntEnum):
    """Hand shapes that a card pool can be classified into."""

    STRAIGHT_FLUSH = auto()
    ROYAL_FLUSH = auto()
    NATURAL_ROYAL_FLUSH = auto()  # Royal flush without wild cards
    WILD_ROYAL_FLUSH = auto()  # Royal flush completed by a wild card
    FIVE_OF_A_KIND = auto()
    FOUR_OF_A_KIND_PAIR_PLUS = auto()  # 7-card only
    FOUR_OF_A_KIND = auto()
    FOUR_WILDS = auto()
    THREE_OF_A_KIND_TWO_PAIR = auto()  # 7-card only
    TWO_THREE_OF_A_KIND = auto()  # 7-card only
    FULL_HOUSE = auto()
    FLUSH = auto()
    STRAIGHT = auto()
    THREE_OF_A_KIND = auto()
    THREE_PAIR = auto()  # 7-card only
    TWO_PAIR = auto()
    ONE_PAIR = auto()
    HIGH_CARD = auto()


HAND_NAMES = {
    HandType.STRAIGHT_FLUSH: "Straight Flush",
    HandType.ROYAL_FLUSH: "Straight Flush",
    HandType.NATURAL_ROYAL_FLUSH: "Straight Flush",
    HandType.WILD_ROYAL_FLUSH: "Straight Flush",
    HandType.FIVE_OF_A_KIND: "Five of a Kind",
    HandType.FOUR_OF_A_KIND_PAIR_PLUS: "Four of a Kind with Pair or Better",
    HandType.FOUR_OF_A_KIND: "Four of a Kind",
    HandType.FOUR_WILDS: "Four Wild Cards",
    HandType.THREE_OF_A_KIND_TWO_PAIR: "Three of a Kind with Two Pair",
    HandType.TWO_THREE_OF_A_KIND: "Two Three Of a Kind",
    HandType.FULL_HOUSE: "Full House",
    HandType.FLUSH: "Flush",
    HandType.STRAIGHT: "Straight",
    HandType.THREE_OF_A_KIND: "Three of a Kind",
    HandType.THREE_PAIR: "Three Pair",
    HandType.TWO_PAIR: "Two Pair",
    HandType.ONE_PAIR: "Pair",
    HandType.HIGH_CARD: "High Card",
}
