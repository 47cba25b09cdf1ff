"""Hand classification, comparison and winner selection.

Every HandType has one evaluator. An evaluator receives a fresh _Attempt built
from the card pool and returns the best hand of its shape, or None when the
pool cannot form it. Hand.solve walks a game's hand types from strongest to
weakest and keeps the first possible hand.

Wild cards are bound to ranks on the attempt's own slots, never on the Card
objects, so nothing carries over from one attempt to the next.

Comparison rules:
- Higher hand rank (position in the game's hand type list) wins
- Equal rank: the first five card positions decide, by card rank
"""

import logging
from dataclasses import replace
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional, Tuple, Union

from .games import Game
from .hand_types import HAND_NAMES, HandType
from .ranks import (
    ACE_RANK,
    KING_RANK,
    LOW_ACE_RANK,
    WILD_RANK,
    Card,
    CardLike,
    parse_cards,
    sort_cards,
)
from .straights import gap_scan, is_consecutive, plan_wild_ranks, wheel_scan

logger = logging.getLogger(__name__)

GameLike = Union[Game, str, None]

ROYAL_FLUSH_DESCR = "Royal Flush"
WILD_ROYAL_FLUSH_DESCR = "Wild Royal Flush"


class DuplicateCardsError(Exception):
    """Raised when a standard game pool holds the same card twice."""

    pass


def is_wild(card: Card, game: Game) -> bool:
    """Whether a card is wild in the given game. Jokers are always wild."""
    return card.is_joker or card.value == game.wild_value


def strip_wilds(cards: Iterable[Card], game: Game) -> Tuple[List[Card], List[Card]]:
    """Split cards into (wilds, non_wilds), keeping their order."""
    wilds = []
    non_wilds = []
    for card in cards:
        if is_wild(card, game):
            wilds.append(card)
        else:
            non_wilds.append(card)
    return wilds, non_wilds


def _resolve_game(game: GameLike) -> Game:
    if isinstance(game, Game):
        return game
    return Game(game or "standard")


# =============================================================================
# Per-attempt working state
# =============================================================================


class _Slot:
    """A pool card as seen by one classification attempt.

    ``source`` is set on the low-ace copy of an ace and points at the slot of
    the real ace.
    """

    __slots__ = ("card", "rank", "is_wild", "source")

    def __init__(self, card: Card, rank: int, is_wild: bool, source: Optional["_Slot"] = None):
        self.card = card
        self.rank = rank
        self.is_wild = is_wild
        self.source = source

    def to_card(self) -> Card:
        if self.is_wild:
            return self.card.bind(self.rank)
        if self.rank != self.card.rank:
            return replace(self.card, rank=self.rank)
        return self.card

    @property
    def display(self) -> str:
        return self.to_card().display_value


def _by_rank(slot: _Slot) -> int:
    return slot.rank


class _Attempt:
    """Working state of one evaluator run over a card pool.

    Attributes:
        game: Game being played
        pool: Slots for all pool cards, highest first, unbound wilds last
        wilds: The wild slots
        suits: Non-wild slots by suit, in order of first appearance
        groups: Non-wild slots by rank, from the highest rank present down to
            rank 0, with empty lists for missing ranks
    """

    def __init__(self, cards: List[Card], game: Game):
        self.game = game
        self.pool = []
        for card in cards:
            wild = is_wild(card, game)
            self.pool.append(_Slot(card, WILD_RANK if wild else card.rank, wild))
        self.pool.sort(key=_by_rank, reverse=True)
        self.wilds = [s for s in self.pool if s.is_wild]
        naturals = [s for s in self.pool if not s.is_wild]

        self.suits: Dict[str, List[_Slot]] = {}
        for slot in naturals:
            self.suits.setdefault(slot.card.suit, []).append(slot)

        self.top_rank = naturals[0].rank if naturals else WILD_RANK
        self.groups = [[s for s in naturals if s.rank == r] for r in range(self.top_rank, -1, -1)]

    def rank_at(self, i: int) -> int:
        return self.top_rank - i

    def unbound_wilds(self) -> List[_Slot]:
        return [w for w in self.wilds if w.rank == WILD_RANK]

    def wilds_count_for(self, i: int) -> bool:
        """Whether unbound wilds may stand in for the rank of group i."""
        return self.game.wild_any or self.rank_at(i) == ACE_RANK

    def count_by_rank(self, i: int) -> int:
        count = len(self.groups[i])
        if self.wilds_count_for(i):
            count += len(self.unbound_wilds())
        return count

    def find_group(self, size: int) -> Optional[int]:
        """Index of the first group, walking down, holding exactly size cards."""
        for i in range(len(self.groups)):
            if self.count_by_rank(i) == size:
                return i
        return None

    def take_group(self, i: int, size: int) -> List[_Slot]:
        """Cards of group i, topped up with wilds bound to its rank."""
        selected = list(self.groups[i])
        rank = selected[0].rank if selected else ACE_RANK
        for wild in self.unbound_wilds():
            if len(selected) >= size:
                break
            wild.rank = rank
            selected.append(wild)
        return selected

    def add_group(self, selected: List[_Slot], i: int) -> List[_Slot]:
        """Append group i and bind every wild that counts for it."""
        group = self.groups[i]
        selected = selected + group
        if self.wilds_count_for(i):
            if group:
                rank = group[0].rank
            elif selected and selected[0].rank == ACE_RANK and self.game.wild_any:
                rank = KING_RANK
            else:
                rank = ACE_RANK
            for wild in self.unbound_wilds():
                wild.rank = rank
                selected.append(wild)
        return selected

    def next_highest(self, selected: List[_Slot]) -> List[_Slot]:
        """Unused pool slots, highest first.

        The real ace behind a low-ace copy counts as used. With restricted
        wilds any unbound wild among the picks plays as an ace.
        """
        used = set(selected)
        used.update(s.source for s in selected if s.source is not None)
        picks = [s for s in self.pool if s not in used]
        if not self.game.wild_any:
            for slot in picks:
                if slot.rank == WILD_RANK:
                    slot.rank = ACE_RANK
            picks.sort(key=_by_rank, reverse=True)
        return picks

    def kickers(self, selected: List[_Slot], count: int) -> List[_Slot]:
        return self.next_highest(selected)[: max(count, 0)]

    def flush_cards(self, suit: str, set_ranks: bool) -> List[_Slot]:
        """Suited slots plus every wild, highest first.

        With set_ranks each wild takes the highest rank missing from the top
        of the suit.
        """
        cards = sorted(self.suits.get(suit, []), key=_by_rank, reverse=True)
        for wild in self.wilds:
            if set_ranks:
                j = 0
                while j < len(cards) and cards[j].rank == ACE_RANK - j:
                    j += 1
                wild.rank = ACE_RANK - j
            cards.append(wild)
            cards.sort(key=_by_rank, reverse=True)
        return cards

    def straight_candidates(self) -> List[_Slot]:
        """Non-wild slots plus a low-ace copy of every ace, highest first."""
        naturals = [s for s in self.pool if not s.is_wild]
        low_aces = [_Slot(s.card, LOW_ACE_RANK, False, source=s) for s in naturals if s.rank == ACE_RANK]
        return sorted(naturals + low_aces, key=_by_rank, reverse=True)


class _Shape(NamedTuple):
    cards: List[_Slot]
    descr: str
    run_length: int = 0


# =============================================================================
# Evaluators
# =============================================================================


def _n_of_a_kind(attempt: _Attempt, hand_type: HandType, size: int) -> Optional[_Shape]:
    i = attempt.find_group(size)
    if i is None:
        return None
    cards = attempt.take_group(i, size)
    cards = cards + attempt.kickers(cards, attempt.game.cards_in_hand - size)
    if attempt.game.no_kickers and hand_type != HandType.FIVE_OF_A_KIND:
        cards = cards[:size]
    return _Shape(cards, f"{HAND_NAMES[hand_type]}, {cards[0].display}'s")


def _five_of_a_kind(attempt: _Attempt) -> Optional[_Shape]:
    return _n_of_a_kind(attempt, HandType.FIVE_OF_A_KIND, 5)


def _four_of_a_kind(attempt: _Attempt) -> Optional[_Shape]:
    return _n_of_a_kind(attempt, HandType.FOUR_OF_A_KIND, 4)


def _three_of_a_kind(attempt: _Attempt) -> Optional[_Shape]:
    return _n_of_a_kind(attempt, HandType.THREE_OF_A_KIND, 3)


def _one_pair(attempt: _Attempt) -> Optional[_Shape]:
    return _n_of_a_kind(attempt, HandType.ONE_PAIR, 2)


def _set_with_pair(attempt: _Attempt, size: int) -> Optional[List[_Slot]]:
    """A set of exactly size cards plus the first other group of two or more."""
    first = attempt.find_group(size)
    if first is None:
        return None
    cards = attempt.take_group(first, size)
    for i in range(len(attempt.groups)):
        if i != first and attempt.count_by_rank(i) >= 2:
            cards = attempt.add_group(cards, i)
            return cards + attempt.kickers(cards, attempt.game.cards_in_hand - size - 2)
    return None


def _four_of_a_kind_pair_plus(attempt: _Attempt) -> Optional[_Shape]:
    cards = _set_with_pair(attempt, 4)
    if cards is None or len(cards) < 6:
        return None
    name = HAND_NAMES[HandType.FOUR_OF_A_KIND_PAIR_PLUS]
    return _Shape(cards, f"{name}, {cards[0].display}'s over {cards[4].display}'s")


def _full_house(attempt: _Attempt) -> Optional[_Shape]:
    cards = _set_with_pair(attempt, 3)
    if cards is None or len(cards) < 5:
        return None
    name = HAND_NAMES[HandType.FULL_HOUSE]
    return _Shape(cards, f"{name}, {cards[0].display}'s over {cards[3].display}'s")


def _four_wilds(attempt: _Attempt) -> Optional[_Shape]:
    if len(attempt.wilds) != 4:
        return None
    cards = list(attempt.wilds)
    cards = cards + attempt.kickers(cards, attempt.game.cards_in_hand - 4)
    if attempt.game.no_kickers:
        cards = cards[:4]
    return _Shape(cards, HAND_NAMES[HandType.FOUR_WILDS])


def _three_of_a_kind_two_pair(attempt: _Attempt) -> Optional[_Shape]:
    first = attempt.find_group(3)
    if first is None:
        return None
    cards = attempt.take_group(first, 3)
    pairs = 0
    for i in range(len(attempt.groups)):
        if i == first or attempt.count_by_rank(i) != 2:
            continue
        cards = attempt.add_group(cards, i)
        pairs += 1
        if pairs == 2:
            break
    if len(cards) < 7:
        return None
    cards = cards + attempt.kickers(cards, attempt.game.cards_in_hand - 7)
    name = HAND_NAMES[HandType.THREE_OF_A_KIND_TWO_PAIR]
    return _Shape(
        cards,
        f"{name}, {cards[0].display}'s over {cards[3].display}'s & {cards[5].display}'s",
    )


def _collect_groups(attempt: _Attempt, size: int, wanted: int) -> Optional[List[_Slot]]:
    """The first `wanted` groups holding exactly `size` cards, plus kickers."""
    cards: List[_Slot] = []
    found = 0
    for i in range(len(attempt.groups)):
        if attempt.count_by_rank(i) != size:
            continue
        cards = attempt.add_group(cards, i)
        found += 1
        if found == wanted:
            return cards + attempt.kickers(cards, attempt.game.cards_in_hand - size * wanted)
    return None


def _two_three_of_a_kind(attempt: _Attempt) -> Optional[_Shape]:
    cards = _collect_groups(attempt, 3, 2)
    if cards is None or len(cards) < 6:
        return None
    name = HAND_NAMES[HandType.TWO_THREE_OF_A_KIND]
    return _Shape(cards, f"{name}, {cards[0].display}'s & {cards[3].display}'s")


def _three_pair(attempt: _Attempt) -> Optional[_Shape]:
    cards = _collect_groups(attempt, 2, 3)
    if cards is None or len(cards) < 6:
        return None
    name = HAND_NAMES[HandType.THREE_PAIR]
    return _Shape(
        cards,
        f"{name}, {cards[0].display}'s & {cards[2].display}'s & {cards[4].display}'s",
    )


def _two_pair(attempt: _Attempt) -> Optional[_Shape]:
    cards = _collect_groups(attempt, 2, 2)
    if cards is None or len(cards) < 4:
        return None
    if attempt.game.no_kickers:
        cards = cards[:4]
    name = HAND_NAMES[HandType.TWO_PAIR]
    return _Shape(cards, f"{name}, {cards[0].display}'s & {cards[2].display}'s")


def _flush(attempt: _Attempt) -> Optional[_Shape]:
    game = attempt.game
    for suit in attempt.suits:
        cards = attempt.flush_cards(suit, set_ranks=True)
        if len(cards) >= game.sf_qualify:
            break
        for wild in attempt.wilds:
            wild.rank = WILD_RANK
    else:
        return None

    run_length = len(cards)
    descr = f"{HAND_NAMES[HandType.FLUSH]}, {cards[0].display}{suit} High"
    if len(cards) < game.cards_in_hand:
        cards = cards + attempt.kickers(cards, game.cards_in_hand - len(cards))
    return _Shape(cards, descr, run_length)


def _wheel(attempt: _Attempt) -> Optional[_Shape]:
    """Ace-low straight, with the ace moved to the top."""
    game = attempt.game
    wilds = attempt.unbound_wilds()
    slots = wheel_scan(attempt.straight_candidates(), game.sf_qualify)
    missing = [rank for rank, card in slots if card is None]
    if len(missing) > len(wilds):
        return None

    cards = []
    spare = iter(wilds)
    for rank, card in slots:
        if card is None:
            card = next(spare)
        card.rank = ACE_RANK if rank == LOW_ACE_RANK else rank
        cards.append(card)
    cards.sort(key=_by_rank, reverse=True)

    for wild in spare:
        if len(cards) >= game.cards_in_hand:
            break
        wild.rank = ACE_RANK
        cards.append(wild)

    cards = cards + attempt.kickers(cards, game.cards_in_hand - len(cards))
    return _Shape(cards, f"{HAND_NAMES[HandType.STRAIGHT]}, Wheel", game.sf_qualify)


def _straight(attempt: _Attempt) -> Optional[_Shape]:
    game = attempt.game
    if game.wheel_mode:
        shape = _wheel(attempt)
        if shape is not None:
            return shape

    wilds = attempt.unbound_wilds()
    cards = gap_scan(attempt.straight_candidates(), game.sf_qualify, len(wilds))
    for wild, rank in zip(wilds, plan_wild_ranks([c.rank for c in cards], len(wilds))):
        wild.rank = rank
        cards.append(wild)
    cards.sort(key=_by_rank, reverse=True)

    if len(cards) < game.sf_qualify or not is_consecutive([c.rank for c in cards]):
        return None

    descr = f"{HAND_NAMES[HandType.STRAIGHT]}, {cards[0].display} High"
    cards = cards[: game.cards_in_hand]
    run_length = len(cards)
    cards = cards + attempt.kickers(cards, game.cards_in_hand - len(cards))
    return _Shape(cards, descr, run_length)


def _straight_flush(attempt: _Attempt) -> Optional[_Shape]:
    game = attempt.game
    for suit in attempt.suits:
        suited = attempt.flush_cards(suit, set_ranks=False)
        if len(suited) >= game.sf_qualify:
            break
    else:
        return None

    straight = _straight(_Attempt([s.card for s in suited], game))
    if straight is None:
        return None

    cards = straight.cards
    if game.descr != "standard":
        cards = cards + [s for other, slots in attempt.suits.items() if other != suit for s in slots]
    if len(cards) < game.sf_qualify:
        return None

    if cards[0].rank == ACE_RANK:
        descr = ROYAL_FLUSH_DESCR
    else:
        descr = f"{HAND_NAMES[HandType.STRAIGHT_FLUSH]}, {cards[0].display}{suit} High"
    return _Shape(cards, descr, straight.run_length)


def _royal_flush(attempt: _Attempt) -> Optional[_Shape]:
    shape = _straight_flush(attempt)
    if shape is None or shape.descr != ROYAL_FLUSH_DESCR:
        return None
    return shape


def _has_wild_on_top(attempt: _Attempt, shape: _Shape) -> bool:
    return any(s.is_wild for s in shape.cards[: attempt.game.sf_qualify])


def _natural_royal_flush(attempt: _Attempt) -> Optional[_Shape]:
    shape = _royal_flush(attempt)
    if shape is None or _has_wild_on_top(attempt, shape):
        return None
    return shape


def _wild_royal_flush(attempt: _Attempt) -> Optional[_Shape]:
    shape = _royal_flush(attempt)
    if shape is None or not _has_wild_on_top(attempt, shape):
        return None
    return shape._replace(descr=WILD_ROYAL_FLUSH_DESCR)


def _high_card(attempt: _Attempt) -> Optional[_Shape]:
    cards = attempt.pool[: attempt.game.cards_in_hand]
    if not cards:
        return None
    for slot in cards:
        if slot.is_wild:
            slot.rank = ACE_RANK
    if attempt.game.no_kickers:
        cards = cards[:1]
    cards = sorted(cards, key=_by_rank, reverse=True)
    return _Shape(cards, f"{cards[0].display} High")


EVALUATORS: Dict[HandType, Callable[[_Attempt], Optional[_Shape]]] = {
    HandType.STRAIGHT_FLUSH: _straight_flush,
    HandType.ROYAL_FLUSH: _royal_flush,
    HandType.NATURAL_ROYAL_FLUSH: _natural_royal_flush,
    HandType.WILD_ROYAL_FLUSH: _wild_royal_flush,
    HandType.FIVE_OF_A_KIND: _five_of_a_kind,
    HandType.FOUR_OF_A_KIND_PAIR_PLUS: _four_of_a_kind_pair_plus,
    HandType.FOUR_OF_A_KIND: _four_of_a_kind,
    HandType.FOUR_WILDS: _four_wilds,
    HandType.THREE_OF_A_KIND_TWO_PAIR: _three_of_a_kind_two_pair,
    HandType.TWO_THREE_OF_A_KIND: _two_three_of_a_kind,
    HandType.FULL_HOUSE: _full_house,
    HandType.FLUSH: _flush,
    HandType.STRAIGHT: _straight,
    HandType.THREE_OF_A_KIND: _three_of_a_kind,
    HandType.THREE_PAIR: _three_pair,
    HandType.TWO_PAIR: _two_pair,
    HandType.ONE_PAIR: _one_pair,
    HandType.HIGH_CARD: _high_card,
}


# =============================================================================
# Hand
# =============================================================================


class Hand:
    """A card pool classified as one hand type under a game.

    Attributes:
        hand_type: The shape that was evaluated
        name: Display name of the shape
        game: Game the hand was evaluated under
        card_pool: All input cards, highest first, unbound wilds last
        cards: The selected cards, strongest first (at most cards_in_hand)
        rank: Strength of the hand type in the game (0 if not recognised)
        is_possible: Whether the pool can form the shape
        descr: Human-readable description, e.g. "Pair, 3's"
        run_length: Length of the straight or flush run (0 for other shapes)
        always_qualifies: False when the hand may be disqualified

    Raises:
        DuplicateCardsError: If a standard game pool repeats a card
    """

    def __init__(
        self,
        hand_type: HandType,
        cards: Iterable[CardLike],
        game: GameLike = None,
        can_disqualify: bool = False,
    ):
        self.hand_type = hand_type
        self.name = HAND_NAMES[hand_type]
        self.game = _resolve_game(game)
        self.always_qualifies = not (can_disqualify and self.game.lowest_qualified)

        pool = [c.natural() for c in parse_cards(cards)]
        if self.game.descr == "standard" and len(set(pool)) != len(pool):
            raise DuplicateCardsError(f"Duplicate cards: {', '.join(str(c) for c in pool)}")

        wilds, non_wilds = strip_wilds(pool, self.game)
        self.card_pool = sort_cards(non_wilds) + [w.bind(WILD_RANK) for w in wilds]
        self.rank = self.game.rank_of_type(hand_type)

        shape = EVALUATORS[hand_type](_Attempt(pool, self.game))
        self.is_possible = shape is not None
        if shape is None:
            self.cards = []
            self.descr = ""
            self.run_length = 0
        else:
            self.cards = [s.to_card() for s in shape.cards][: self.game.cards_in_hand]
            self.descr = shape.descr
            self.run_length = shape.run_length

    def __str__(self) -> str:
        return ", ".join(str(c) for c in self.cards)

    def __repr__(self) -> str:
        return f"Hand({self.hand_type.name}, {self.descr!r}, game={self.game.descr!r})"

    def to_array(self) -> List[str]:
        """Card codes of the selected cards."""
        return [str(c) for c in self.cards]

    def compare(self, other: "Hand") -> int:
        """Positive if this hand is stronger, negative if weaker, 0 if equal."""
        return compare_hands(self, other)

    def lose_to(self, other: "Hand") -> bool:
        return compare_hands(self, other) < 0

    def qualifies_high(self) -> bool:
        """Whether the hand meets the game's lowest qualifying hand."""
        if not self.game.lowest_qualified or self.always_qualifies:
            return True
        lowest = Hand.solve(self.game.lowest_qualified, self.game)
        return compare_hands(self, lowest) >= 0

    @classmethod
    def solve(
        cls,
        cards: Iterable[CardLike],
        game: GameLike = "standard",
        can_disqualify: bool = False,
    ) -> "Hand":
        """Classify a card pool as its best hand under a game.

        Hand types are tried in the game's priority order and the first
        possible one is returned. When none is possible the weakest attempt
        is returned with is_possible False.

        Args:
            cards: Card codes or Card objects
            game: Game, variant name, or None for "standard"
            can_disqualify: Whether the hand may fail the qualifying check

        Returns:
            The best Hand

        Example:
            >>> Hand.solve(["Kh", "Tc", "5d", "As", "3c", "3s", "2h"]).descr
            "Pair, 3's"
        """
        game = _resolve_game(game)
        cards = list(cards)
        result = None
        for hand_type in game.hand_types:
            result = cls(hand_type, cards, game, can_disqualify)
            if result.is_possible:
                break
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Solved %s as %s under %s", [str(c) for c in cards], result.descr, game.descr)
        return result

    @staticmethod
    def winners(hands: Iterable["Hand"]) -> List["Hand"]:
        """The qualifying hands that lose to no other hand (ties give several)."""
        hands = [h for h in hands if h.qualifies_high()]
        if not hands:
            return []
        highest = max(h.rank for h in hands)
        hands = [h for h in hands if h.rank == highest]
        return [h for h in hands if not any(h.lose_to(other) for other in hands)]


def compare_hands(a: Hand, b: Hand) -> int:
    """Compare two hands by rank, then by the first five card positions.

    Returns:
        1 if a is stronger, -1 if b is stronger, 0 if equal
    """
    if a.rank != b.rank:
        return 1 if a.rank > b.rank else -1
    for card_a, card_b in zip(a.cards[:5], b.cards[:5]):
        if card_a.rank > card_b.rank:
            return 1
        if card_a.rank < card_b.rank:
            return -1
    return 0
