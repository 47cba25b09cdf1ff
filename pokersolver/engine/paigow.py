"""Pai Gow Poker house way and settlement.

This module provides:
- PaiGowPokerHelper: splits a 7-card hand into a 5-card hi hand and a 2-card
  lo hand the way the house must, detects fouls and settles player vs banker
- best_sub_selection: best five card straight or flush inside a longer run,
  keeping the strongest leftover cards for the lo hand

House way, by the hand type of the 7-card pool:
- Five of a kind: keep it together when the spare pair is kings
- Four of a kind: low quads stay together, high quads are split
- Straights and flushes: reconsidered as pairs and sets first
- Full house, trips and pairs: fixed rank thresholds decide the split
- High card: best card in hi, next two in lo

Settlement:
- A fouled hand (lo beats hi) loses to a valid hand
- Player wins by winning both hi and lo, pushes by winning one
- Ties go to the banker
"""

import logging
from typing import List, Optional, Sequence, Tuple, Union

from pokersolver.rules import (
    Card,
    CardLike,
    Game,
    Hand,
    HandType,
    rank_of,
    sort_cards,
)

logger = logging.getLogger(__name__)

FULL_GAME = "paigowpokerfull"
ALT_GAME = "paigowpokeralt"
HI_GAME = "paigowpokerhi"
LO_GAME = "paigowpokerlo"
SF7_GAME = "paigowpokersf7"
SF6_GAME = "paigowpokersf6"

POOL_SIZE = 7

SEVEN = rank_of("7")
TEN = rank_of("T")
JACK = rank_of("J")
KING = rank_of("K")

_RUN_TYPES = (HandType.STRAIGHT_FLUSH, HandType.FLUSH, HandType.STRAIGHT)

Split = Tuple[List[Card], List[Card]]


def _pairs_in_hi(cards: Sequence[Card]) -> Split:
    return list(cards[0:4]) + [cards[6]], list(cards[4:6])


def _split_pairs(cards: Sequence[Card]) -> Split:
    return list(cards[0:2]) + list(cards[4:7]), list(cards[2:4])


def _set_in_hi(cards: Sequence[Card]) -> Split:
    return list(cards[0:3]) + list(cards[5:7]), list(cards[3:5])


def _two_pair_split(cards: Sequence[Card], sub_game: Optional[Game] = None) -> Split:
    """Two pair rule; with sub_game, low pairs without an ace look for a run."""
    if cards[0].rank < SEVEN:
        if sub_game is None or cards[4].wild_value == "A":
            return _pairs_in_hi(cards)
        return best_sub_selection(cards, sub_game)
    if cards[0].rank < JACK:
        if cards[4].wild_value == "A":
            return _pairs_in_hi(cards)
        return _split_pairs(cards)
    if cards[0].wild_value != "A" and cards[2].rank < SEVEN and cards[4].wild_value == "A":
        return _pairs_in_hi(cards)
    return _split_pairs(cards)


def best_sub_selection(cards: Sequence[Card], game: Game) -> Split:
    """Best five card straight or flush, with the leftover lo cards.

    Straight flush, flush and straight are each tried as runs of seven, six
    and five cards. Among the possible ones the run leaving the strongest
    lo cards (highest first card, then second) is kept. With five cards or
    fewer the first possible run is taken and lo is empty.

    Args:
        cards: Cards to choose from
        game: Game used for the five card runs

    Returns:
        (hi cards, lo cards); both empty when no run exists
    """
    games = (Game(SF7_GAME), Game(SF6_GAME), game)
    best_hand = None
    best_lo: List[Card] = []

    for hand_type in _RUN_TYPES:
        for run_game in games:
            hand = Hand(hand_type, cards, run_game)
            if not hand.is_possible:
                continue

            lo: Optional[List[Card]] = None
            if hand.run_length == 7:
                lo = hand.cards[0:2]
            elif hand.run_length == 6:
                lo = hand.cards[0:1] + (hand.cards[6:7] if len(cards) > 6 else [])
            elif len(cards) > 5:
                lo = hand.cards[5:7]

            if lo is None:
                if best_hand is None:
                    best_hand = hand
                    break
                continue

            lo = sort_cards(lo)
            if (
                not best_lo
                or best_lo[0].rank < lo[0].rank
                or (len(best_lo) > 1 and len(lo) > 1 and best_lo[0].rank == lo[0].rank and best_lo[1].rank < lo[1].rank)
            ):
                best_lo = lo
                best_hand = hand
        else:
            continue
        break

    if best_hand is None:
        return [], []
    if best_hand.run_length == 7:
        return best_hand.cards[2:7], best_lo
    if best_hand.run_length == 6:
        return best_hand.cards[1:6], best_lo
    return best_hand.cards[0:5], best_lo


class PaiGowPokerHelper:
    """A Pai Gow Poker hand and its hi/lo split.

    Attributes:
        base_hand: The 7-card hand solved under the full Pai Gow game
        hi_hand: The 5-card hand (None until split or set)
        lo_hand: The 2-card hand (None until split or set)
        game: Game of the base hand
        hi_game: Game used for hi hands
        lo_game: Game used for lo hands
    """

    def __init__(self, hand: Union[Hand, Sequence[CardLike]]):
        self.hi_game = Game(HI_GAME)
        self.lo_game = Game(LO_GAME)
        if isinstance(hand, Hand):
            self.base_hand = hand
        else:
            self.base_hand = Hand.solve(hand, Game(FULL_GAME))
        self.game = self.base_hand.game
        self.hi_hand: Optional[Hand] = None
        self.lo_hand: Optional[Hand] = None

    def __repr__(self) -> str:
        return f"PaiGowPokerHelper(hi={self.hi_hand}, lo={self.lo_hand})"

    def split_house_way(self) -> None:
        """Split the base hand into hi and lo following the house way.

        Raises:
            ValueError: If the base hand does not hold exactly 7 cards
        """
        if len(self.base_hand.card_pool) != POOL_SIZE:
            raise ValueError(
                f"House way needs {POOL_SIZE} cards, got {len(self.base_hand.card_pool)}"
            )

        hand_type = self.base_hand.hand_type
        hi_cards, lo_cards = self._house_way(hand_type, self.base_hand.cards)
        self.hi_hand = Hand.solve(hi_cards, self.hi_game)
        self.lo_hand = Hand.solve(lo_cards, self.lo_game)
        logger.debug(
            "House way for %s: hi %s (%s), lo %s (%s)",
            self.base_hand.descr,
            self.hi_hand,
            self.hi_hand.descr,
            self.lo_hand,
            self.lo_hand.descr,
        )

    def _house_way(self, hand_type: HandType, b: List[Card]) -> Split:
        if hand_type == HandType.FIVE_OF_A_KIND:
            if b[5].value == "K" and b[6].value == "K":
                return b[0:5], b[5:7]
            return b[2:7], b[0:2]

        if hand_type == HandType.FOUR_OF_A_KIND_PAIR_PLUS:
            if b[0].wild_value == "A" and b[4].value != "K":
                return _split_pairs(b)
            return _pairs_in_hi(b)

        if hand_type in _RUN_TYPES:
            return self._run_house_way()

        if hand_type == HandType.FOUR_OF_A_KIND:
            if b[0].rank < SEVEN:
                return _pairs_in_hi(b)
            if b[0].rank < JACK and b[4].wild_value == "A":
                return _pairs_in_hi(b)
            return _split_pairs(b)

        if hand_type == HandType.TWO_THREE_OF_A_KIND:
            return b[3:6] + [b[2], b[6]], b[0:2]

        if hand_type == HandType.THREE_OF_A_KIND_TWO_PAIR:
            return _set_in_hi(b)

        if hand_type == HandType.FULL_HOUSE:
            if b[3].wild_value == "2" and b[5].wild_value == "A" and b[6].wild_value == "K":
                return b[0:5], b[5:7]
            return _set_in_hi(b)

        if hand_type == HandType.THREE_OF_A_KIND:
            if b[0].wild_value == "A":
                return _split_pairs(b)
            return _set_in_hi(b)

        if hand_type == HandType.THREE_PAIR:
            return b[2:7], b[0:2]

        if hand_type == HandType.TWO_PAIR:
            return _two_pair_split(b)

        if hand_type == HandType.ONE_PAIR:
            return _split_pairs(b)

        return [b[0]] + b[3:7], b[1:3]

    def _run_house_way(self) -> Split:
        """Straights and flushes: play the pairs and sets when they split better."""
        alt = Hand.solve(self.base_hand.cards, Game(ALT_GAME))
        a = alt.cards
        logger.debug("Run reconsidered as %s", alt.descr)

        if alt.hand_type in (HandType.FOUR_OF_A_KIND, HandType.THREE_OF_A_KIND):
            return best_sub_selection(a, self.game)

        if alt.hand_type == HandType.FULL_HOUSE:
            return _set_in_hi(a)

        if alt.hand_type == HandType.THREE_PAIR:
            return a[2:7], a[0:2]

        if alt.hand_type == HandType.TWO_PAIR:
            return _two_pair_split(a, self.game)

        if alt.hand_type == HandType.ONE_PAIR:
            if TEN <= a[0].rank <= KING and a[2].wild_value == "A":
                hi, lo = best_sub_selection(a[0:2] + a[3:7], self.game)
                if hi:
                    return hi, lo + [a[2]]
                return _split_pairs(a)
            hi, _ = best_sub_selection(a[2:7], self.game)
            if hi:
                return hi, a[0:2]
            return best_sub_selection(a, self.game)

        return best_sub_selection(a, self.game)

    def qualifies_valid(self) -> bool:
        """False when the lo hand beats the hi hand (a foul).

        Raises:
            ValueError: If the hand has not been split or set yet
        """
        if self.hi_hand is None or self.lo_hand is None:
            raise ValueError("Hand has not been split into hi and lo yet")
        winners = Hand.winners([self.hi_hand, self.lo_hand])
        return not (len(winners) == 1 and winners[0] is self.lo_hand)

    @staticmethod
    def winners(player: "PaiGowPokerHelper", banker: "PaiGowPokerHelper") -> int:
        """Settle a player against the banker.

        Returns:
            1 if the player wins, 0 for a push, -1 if the banker wins
        """
        if not player.qualifies_valid():
            return -1 if banker.qualifies_valid() else 0
        if not banker.qualifies_valid():
            return 1

        hi_winners = Hand.winners([player.hi_hand, banker.hi_hand])
        lo_winners = Hand.winners([player.lo_hand, banker.lo_hand])
        won_hi = len(hi_winners) == 1 and hi_winners[0] is player.hi_hand
        won_lo = len(lo_winners) == 1 and lo_winners[0] is player.lo_hand

        if won_hi and won_lo:
            return 1
        if won_hi or won_lo:
            return 0
        return -1

    @classmethod
    def set_hands(
        cls,
        hi_hand: Union[Hand, Sequence[CardLike]],
        lo_hand: Union[Hand, Sequence[CardLike]],
    ) -> "PaiGowPokerHelper":
        """Build a helper from an existing hi/lo split without re-splitting."""
        if not isinstance(hi_hand, Hand):
            hi_hand = Hand.solve(hi_hand, Game(HI_GAME))
        if not isinstance(lo_hand, Hand):
            lo_hand = Hand.solve(lo_hand, Game(LO_GAME))

        result = cls(hi_hand.card_pool + lo_hand.card_pool)
        result.hi_hand = hi_hand
        result.lo_hand = lo_hand
        return result

    @classmethod
    def solve(cls, cards: Sequence[CardLike]) -> "PaiGowPokerHelper":
        """Solve 7 cards and split them the house way.

        Example:
            >>> helper = PaiGowPokerHelper.solve(["5c", "5d", "5h", "5s", "Kd", "9c", "3h"])
            >>> helper.hi_hand.descr
            "Four of a Kind, 5's"
        """
        result = cls(cards)
        result.split_house_way()
        return result
