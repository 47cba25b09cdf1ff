"""Straight detection helpers.

This module provides:
- gap_scan: windowed search for the longest run that wild cards can complete
- wheel_scan: slot-by-slot check of the ace-low straight
- plan_wild_ranks: ranks that wild cards take to complete a run
- is_consecutive: run check on a list of ranks

The functions work on any objects with a ``rank`` attribute, sorted from the
highest rank down. An ace that may play low must be supplied twice, once at
ACE_RANK and once at LOW_ACE_RANK.
"""

from typing import List, Optional, Sequence, Tuple, TypeVar

from .ranks import ACE_RANK, LOW_ACE_RANK

T = TypeVar("T")


def gap_scan(cards: Sequence[T], run_length: int, wild_count: int) -> List[T]:
    """Find the longest run of distinct ranks inside a window of run_length.

    Each anchor from one above the ace down to one above the low ace opens the
    window [anchor - run_length, anchor - 1]. Cards are collected while the
    span from the top of the window down to the current card (gaps included)
    fits. The longest run wins; on equal length the higher anchor is kept.
    Scanning stops as soon as the wild cards can cover what is missing.

    Args:
        cards: Cards sorted by descending rank
        run_length: Minimum straight length
        wild_count: Number of wild cards available

    Returns:
        The cards of the best run, highest first (may be empty)
    """
    best: List[T] = []
    for anchor in range(ACE_RANK + 1, LOW_ACE_RANK, -1):
        run: List[T] = []
        gaps = 0
        for card in cards:
            if card.rank > anchor:
                continue
            top = run[-1].rank if run else anchor
            diff = top - card.rank
            if gaps + diff + len(run) > run_length:
                break
            if diff > 0:
                run.append(card)
                gaps += diff - 1
        if len(run) > len(best):
            best = run
        if run_length - len(best) <= wild_count:
            break
    return best


def wheel_scan(cards: Sequence[T], run_length: int) -> List[Tuple[int, Optional[T]]]:
    """Match cards against the ranks of the ace-low straight.

    Ranks run_length - 1 down to LOW_ACE_RANK are checked in turn (5-4-3-2-A
    for a five card run). A rank with no card is returned with None.

    Returns:
        (rank, card or None) pairs, highest rank first
    """
    slots = []
    for rank in range(run_length - 1, LOW_ACE_RANK - 1, -1):
        found = None
        for card in cards:
            if card.rank > rank:
                continue
            if card.rank == rank:
                found = card
            break
        slots.append((rank, found))
    return slots


def plan_wild_ranks(ranks: Sequence[int], wild_count: int) -> List[int]:
    """Ranks for wild cards completing a run.

    Each wild fills the highest gap inside the run. Once there is no gap it
    extends the top, or the bottom when the top is already an ace. An empty
    run starts at the ace.

    Args:
        ranks: Ranks of the run, highest first
        wild_count: Number of wild cards to place

    Returns:
        One rank per placed wild, in placement order (shorter than wild_count
        when the run cannot grow any further)
    """
    run = sorted(ranks, reverse=True)
    placed = []
    for _ in range(wild_count):
        rank = None
        for high, low in zip(run, run[1:]):
            if high - low > 1:
                rank = high - 1
                break
        if rank is None:
            if not run:
                rank = ACE_RANK
            elif run[0] < ACE_RANK:
                rank = run[0] + 1
            elif run[-1] > LOW_ACE_RANK:
                rank = run[-1] - 1
            else:
                break
        placed.append(rank)
        run = sorted(run + [rank], reverse=True)
    return placed


def is_consecutive(ranks: Sequence[int]) -> bool:
    """Check that ranks form one unbroken run without repeats."""
    run = sorted(ranks, reverse=True)
    return all(high - low == 1 for high, low in zip(run, run[1:]))
