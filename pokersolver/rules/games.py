"""Game variant rules.

Each variant is an immutable GameRules entry in GAME_RULES. A Game is built
from a variant name and copies the entry's fields; unknown names fall back to
"standard" without raising.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType
from typing import List, Optional, Tuple

from .hand_types import HandType


class WildMode(IntEnum):
    """How wild cards may substitute for missing ranks."""

    RESTRICTED = 0  # Counts only toward aces (and straights/flushes), else plays as an ace
    ANY = 1  # Substitutes for any rank


@dataclass(frozen=True)
class GameRules:
    """Rule configuration of one game variant.

    Attributes:
        cards_in_hand: Number of cards that make up a hand
        hand_types: Recognised hand types, strongest first
        wild_value: Card value that is wild (None for no wild value)
        wild_mode: How wild cards substitute
        wheel_mode: Whether A-2-3-4-5 is checked directly (ace counted high)
        sf_qualify: Minimum run length for straights and flushes
        lowest_qualified: Card codes of the weakest hand that can win, or None
        no_kickers: Whether only the defining cards of a hand are kept
    """

    cards_in_hand: int
    hand_types: Tuple[HandType, ...]
    wild_value: Optional[str]
    wild_mode: WildMode
    wheel_mode: bool
    sf_qualify: int
    lowest_qualified: Optional[Tuple[str, ...]]
    no_kickers: bool


_STANDARD_TYPES = (
    HandType.STRAIGHT_FLUSH,
    HandType.FOUR_OF_A_KIND,
    HandType.FULL_HOUSE,
    HandType.FLUSH,
    HandType.STRAIGHT,
    HandType.THREE_OF_A_KIND,
    HandType.TWO_PAIR,
    HandType.ONE_PAIR,
    HandType.HIGH_CARD,
)

_FOUR_CARD_TYPES = (
    HandType.FOUR_OF_A_KIND,
    HandType.STRAIGHT_FLUSH,
    HandType.THREE_OF_A_KIND,
    HandType.FLUSH,
    HandType.STRAIGHT,
    HandType.TWO_PAIR,
    HandType.ONE_PAIR,
    HandType.HIGH_CARD,
)

_RUN_TYPES = (HandType.STRAIGHT_FLUSH, HandType.FLUSH, HandType.STRAIGHT)


def _pai_gow(cards_in_hand: int, hand_types: Tuple[HandType, ...], sf_qualify: int = 5) -> GameRules:
    return GameRules(
        cards_in_hand=cards_in_hand,
        hand_types=hand_types,
        wild_value="O",
        wild_mode=WildMode.RESTRICTED,
        wheel_mode=True,
        sf_qualify=sf_qualify,
        lowest_qualified=None,
        no_kickers=False,
    )


GAME_RULES = MappingProxyType(
    {
        "standard": GameRules(
            cards_in_hand=5,
            hand_types=_STANDARD_TYPES,
            wild_value=None,
            wild_mode=WildMode.ANY,
            wheel_mode=False,
            sf_qualify=5,
            lowest_qualified=None,
            no_kickers=False,
        ),
        "jacksbetter": GameRules(
            cards_in_hand=5,
            hand_types=_STANDARD_TYPES,
            wild_value=None,
            wild_mode=WildMode.ANY,
            wheel_mode=False,
            sf_qualify=5,
            lowest_qualified=("Jc", "Jd", "4h", "3s", "2c"),
            no_kickers=True,
        ),
        "joker": GameRules(
            cards_in_hand=5,
            hand_types=(
                HandType.NATURAL_ROYAL_FLUSH,
                HandType.FIVE_OF_A_KIND,
                HandType.WILD_ROYAL_FLUSH,
                HandType.STRAIGHT_FLUSH,
                HandType.FOUR_OF_A_KIND,
                HandType.FULL_HOUSE,
                HandType.FLUSH,
                HandType.STRAIGHT,
                HandType.THREE_OF_A_KIND,
                HandType.TWO_PAIR,
                HandType.HIGH_CARD,
            ),
            wild_value="O",
            wild_mode=WildMode.ANY,
            wheel_mode=False,
            sf_qualify=5,
            lowest_qualified=("4c", "3d", "3h", "2s", "2c"),
            no_kickers=True,
        ),
        "deuceswild": GameRules(
            cards_in_hand=5,
            hand_types=(
                HandType.NATURAL_ROYAL_FLUSH,
                HandType.FOUR_WILDS,
                HandType.WILD_ROYAL_FLUSH,
                HandType.FIVE_OF_A_KIND,
                HandType.STRAIGHT_FLUSH,
                HandType.FOUR_OF_A_KIND,
                HandType.FULL_HOUSE,
                HandType.FLUSH,
                HandType.STRAIGHT,
                HandType.THREE_OF_A_KIND,
                HandType.HIGH_CARD,
            ),
            wild_value="2",
            wild_mode=WildMode.ANY,
            wheel_mode=False,
            sf_qualify=5,
            lowest_qualified=("5c", "4d", "3h", "3s", "3c"),
            no_kickers=True,
        ),
        "threecard": GameRules(
            cards_in_hand=3,
            hand_types=(
                HandType.STRAIGHT_FLUSH,
                HandType.THREE_OF_A_KIND,
                HandType.STRAIGHT,
                HandType.FLUSH,
                HandType.ONE_PAIR,
                HandType.HIGH_CARD,
            ),
            wild_value=None,
            wild_mode=WildMode.ANY,
            wheel_mode=False,
            sf_qualify=3,
            lowest_qualified=("Qh", "3s", "2c"),
            no_kickers=False,
        ),
        "fourcard": GameRules(
            cards_in_hand=4,
            hand_types=_FOUR_CARD_TYPES,
            wild_value=None,
            wild_mode=WildMode.ANY,
            wheel_mode=False,
            sf_qualify=4,
            lowest_qualified=None,
            no_kickers=True,
        ),
        "fourcardbonus": GameRules(
            cards_in_hand=4,
            hand_types=_FOUR_CARD_TYPES,
            wild_value=None,
            wild_mode=WildMode.ANY,
            wheel_mode=False,
            sf_qualify=4,
            lowest_qualified=("Ac", "Ad", "3h", "2s"),
            no_kickers=True,
        ),
        "paigowpokerfull": _pai_gow(
            7,
            (
                HandType.FIVE_OF_A_KIND,
                HandType.FOUR_OF_A_KIND_PAIR_PLUS,
                HandType.STRAIGHT_FLUSH,
                HandType.FLUSH,
                HandType.STRAIGHT,
                HandType.FOUR_OF_A_KIND,
                HandType.TWO_THREE_OF_A_KIND,
                HandType.THREE_OF_A_KIND_TWO_PAIR,
                HandType.FULL_HOUSE,
                HandType.THREE_OF_A_KIND,
                HandType.THREE_PAIR,
                HandType.TWO_PAIR,
                HandType.ONE_PAIR,
                HandType.HIGH_CARD,
            ),
        ),
        "paigowpokeralt": _pai_gow(
            7,
            (
                HandType.FOUR_OF_A_KIND,
                HandType.FULL_HOUSE,
                HandType.THREE_OF_A_KIND,
                HandType.THREE_PAIR,
                HandType.TWO_PAIR,
                HandType.ONE_PAIR,
                HandType.HIGH_CARD,
            ),
        ),
        "paigowpokersf6": _pai_gow(7, _RUN_TYPES, sf_qualify=6),
        "paigowpokersf7": _pai_gow(7, _RUN_TYPES, sf_qualify=7),
        "paigowpokerhi": _pai_gow(
            5,
            (
                HandType.FIVE_OF_A_KIND,
                HandType.STRAIGHT_FLUSH,
                HandType.FOUR_OF_A_KIND,
                HandType.FULL_HOUSE,
                HandType.FLUSH,
                HandType.STRAIGHT,
                HandType.THREE_OF_A_KIND,
                HandType.TWO_PAIR,
                HandType.ONE_PAIR,
                HandType.HIGH_CARD,
            ),
        ),
        "paigowpokerlo": _pai_gow(2, (HandType.ONE_PAIR, HandType.HIGH_CARD)),
    }
)

DEFAULT_GAME = "standard"


def available_games() -> List[str]:
    """Names of all supported game variants."""
    return list(GAME_RULES)


@dataclass(frozen=True)
class Game:
    """An immutable game configuration selected by variant name.

    Example:
        >>> Game("deuceswild").wild_value
        '2'
        >>> Game("no-such-game").descr
        'standard'
    """

    descr: str = DEFAULT_GAME
    cards_in_hand: int = field(init=False)
    hand_types: Tuple[HandType, ...] = field(init=False, repr=False)
    wild_value: Optional[str] = field(init=False)
    wild_mode: WildMode = field(init=False)
    wheel_mode: bool = field(init=False)
    sf_qualify: int = field(init=False)
    lowest_qualified: Optional[Tuple[str, ...]] = field(init=False, repr=False)
    no_kickers: bool = field(init=False)

    def __post_init__(self):
        descr = self.descr if self.descr in GAME_RULES else DEFAULT_GAME
        rules = GAME_RULES[descr]
        object.__setattr__(self, "descr", descr)
        for name in GameRules.__dataclass_fields__:
            object.__setattr__(self, name, getattr(rules, name))

    @property
    def wild_any(self) -> bool:
        return self.wild_mode == WildMode.ANY

    def rank_of_type(self, hand_type: HandType) -> int:
        """Strength of a hand type in this game (0 when not recognised)."""
        if hand_type not in self.hand_types:
            return 0
        return len(self.hand_types) - self.hand_types.index(hand_type)
