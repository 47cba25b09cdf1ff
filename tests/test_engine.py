"""Tests for the Pai Gow Poker engine.

Test coverage:
- House way split for every 7-card hand type
- Straights and flushes reconsidered as pairs and sets
- best_sub_selection over seven, six and five card runs
- Foul detection
- Player vs banker settlement (win, push, banker wins ties)
- Input validation and split invariants on random deals
"""

import pytest

from pokersolver.engine import FULL_GAME, PaiGowPokerHelper, best_sub_selection
from pokersolver.rules import Card, Game, HandType, create_standard_deck


def _split(cards):
    helper = PaiGowPokerHelper.solve(cards)
    return helper, helper.hi_hand.to_array(), helper.lo_hand.to_array()


class TestHouseWaySets:
    """Tests for quads, sets and five of a kind."""

    def test_five_aces_with_kings(self):
        """Five aces stay together when the spare pair is kings."""
        helper, hi, lo = _split(["Ah", "Ad", "Ac", "As", "Or", "Kd", "Kc"])
        assert helper.base_hand.hand_type == HandType.FIVE_OF_A_KIND
        assert helper.hi_hand.descr == "Five of a Kind, A's"
        assert lo == ["Kd", "Kc"]

    def test_low_quads_stay_together(self):
        helper, hi, lo = _split(["5c", "5d", "5h", "5s", "Kd", "9c", "3h"])
        assert helper.hi_hand.descr == "Four of a Kind, 5's"
        assert hi == ["5c", "5d", "5h", "5s", "3h"]
        assert lo == ["Kd", "9c"]
        assert helper.lo_hand.descr == "K High"

    def test_mid_quads_with_ace_stay_together(self):
        helper, hi, lo = _split(["9c", "9d", "9h", "9s", "Ad", "6c", "3h"])
        assert hi == ["9c", "9d", "9h", "9s", "3h"]
        assert lo == ["Ad", "6c"]

    def test_high_quads_are_split(self):
        helper, hi, lo = _split(["Qc", "Qd", "Qh", "Qs", "8d", "6c", "3h"])
        assert hi == ["Qc", "Qd", "8d", "6c", "3h"]
        assert lo == ["Qh", "Qs"]
        assert helper.qualifies_valid()

    def test_quad_aces_with_pair(self):
        helper, hi, lo = _split(["Ac", "Ad", "Ah", "As", "Qd", "Qc", "7h"])
        assert helper.base_hand.descr == "Four of a Kind with Pair or Better, A's over Q's"
        assert hi == ["Ac", "Ad", "Qd", "Qc", "7h"]
        assert lo == ["Ah", "As"]

    def test_two_sets(self):
        """The higher set is split into a pair for the lo hand."""
        helper, hi, lo = _split(["Kc", "Kd", "Kh", "9s", "9d", "9c", "5h"])
        assert helper.base_hand.descr == "Two Three Of a Kind, K's & 9's"
        assert hi == ["9s", "9d", "9c", "Kh", "5h"]
        assert lo == ["Kc", "Kd"]
        assert helper.hi_hand.descr == "Three of a Kind, 9's"

    def test_set_with_two_pair(self):
        helper, hi, lo = _split(["Kc", "Kd", "Kh", "9s", "9d", "5c", "5h"])
        assert helper.base_hand.hand_type == HandType.THREE_OF_A_KIND_TWO_PAIR
        assert helper.hi_hand.descr == "Full House, K's over 5's"
        assert lo == ["9s", "9d"]

    def test_five_aces_without_kings(self):
        """Without a pair of kings two aces go to lo."""
        helper, hi, lo = _split(["Ah", "Ad", "Ac", "As", "Or", "Qd", "Qc"])
        assert helper.base_hand.hand_type == HandType.FIVE_OF_A_KIND
        assert hi == ["Ac", "As", "Or", "Qd", "Qc"]
        assert lo == ["Ah", "Ad"]
        assert helper.hi_hand.descr == "Full House, A's over Q's"

    def test_quads_with_pair_below_aces(self):
        helper, hi, lo = _split(["9c", "9d", "9h", "9s", "Qd", "Qc", "7h"])
        assert helper.base_hand.hand_type == HandType.FOUR_OF_A_KIND_PAIR_PLUS
        assert hi == ["9c", "9d", "9h", "9s", "7h"]
        assert lo == ["Qd", "Qc"]

    def test_full_house(self):
        """The pair goes to lo."""
        helper, hi, lo = _split(["Kc", "Kd", "Kh", "9s", "9d", "6c", "3h"])
        assert helper.base_hand.hand_type == HandType.FULL_HOUSE
        assert hi == ["Kc", "Kd", "Kh", "6c", "3h"]
        assert lo == ["9s", "9d"]

    def test_full_house_of_twos_with_ace_king(self):
        """A full house over deuces stays together when ace-king is left."""
        helper, hi, lo = _split(["Qc", "Qd", "Qh", "2s", "2d", "Ah", "Kc"])
        assert helper.base_hand.hand_type == HandType.FULL_HOUSE
        assert hi == ["Qc", "Qd", "Qh", "2s", "2d"]
        assert lo == ["Ah", "Kc"]
        assert helper.hi_hand.descr == "Full House, Q's over 2's"

    def test_three_of_a_kind(self):
        helper, hi, lo = _split(["8c", "8d", "8h", "Kd", "Tc", "5s", "3h"])
        assert helper.base_hand.hand_type == HandType.THREE_OF_A_KIND
        assert hi == ["8c", "8d", "8h", "5s", "3h"]
        assert lo == ["Kd", "Tc"]

    def test_three_aces_are_split(self):
        """Trip aces put a pair in hi and an ace in lo."""
        helper, hi, lo = _split(["Ac", "Ad", "Ah", "Kd", "Tc", "5s", "3h"])
        assert helper.base_hand.hand_type == HandType.THREE_OF_A_KIND
        assert hi == ["Ac", "Ad", "Tc", "5s", "3h"]
        assert lo == ["Ah", "Kd"]
        assert helper.qualifies_valid()


class TestHouseWayPairs:
    """Tests for pairs and high card."""

    def test_three_pair_plays_top_pair_low(self):
        helper, hi, lo = _split(["Kc", "Kd", "9h", "9s", "5d", "5c", "2h"])
        assert helper.hi_hand.descr == "Two Pair, 9's & 5's"
        assert helper.lo_hand.descr == "Pair, K's"
        assert helper.qualifies_valid()

    def test_low_two_pair_stays_together(self):
        _, hi, lo = _split(["6c", "6d", "4h", "4s", "Kd", "9c", "2h"])
        assert hi == ["6c", "6d", "4h", "4s", "2h"]
        assert lo == ["Kd", "9c"]

    def test_mid_two_pair_is_split(self):
        _, hi, lo = _split(["Tc", "Td", "4h", "4s", "Kd", "9c", "2h"])
        assert hi == ["Tc", "Td", "Kd", "9c", "2h"]
        assert lo == ["4h", "4s"]

    def test_mid_two_pair_with_ace_stays_together(self):
        _, hi, lo = _split(["9c", "9d", "4h", "4s", "Ad", "Kc", "2h"])
        assert hi == ["9c", "9d", "4h", "4s", "2h"]
        assert lo == ["Ad", "Kc"]

    def test_high_two_pair_is_split(self):
        helper, hi, lo = _split(["Qc", "Qd", "8h", "8s", "Kd", "5c", "2h"])
        assert helper.base_hand.hand_type == HandType.TWO_PAIR
        assert hi == ["Qc", "Qd", "Kd", "5c", "2h"]
        assert lo == ["8h", "8s"]

    def test_high_and_small_pair_with_ace_stay_together(self):
        """A small second pair stays with the high pair when an ace plays lo."""
        _, hi, lo = _split(["Qc", "Qd", "4h", "4s", "Ad", "9c", "2h"])
        assert hi == ["Qc", "Qd", "4h", "4s", "2h"]
        assert lo == ["Ad", "9c"]

    def test_one_pair(self):
        _, hi, lo = _split(["8c", "8d", "Ah", "Js", "6d", "4c", "2h"])
        assert hi == ["8c", "8d", "6d", "4c", "2h"]
        assert lo == ["Ah", "Js"]

    def test_high_card(self):
        """Best card goes in hi, the next two in lo."""
        helper, hi, lo = _split(["Ah", "Qd", "9c", "7s", "5d", "4c", "2h"])
        assert hi == ["Ah", "7s", "5d", "4c", "2h"]
        assert lo == ["Qd", "9c"]
        assert helper.hi_hand.descr == "A High"
        assert helper.lo_hand.descr == "Q High"


class TestHouseWayRuns:
    """Tests for straights and flushes."""

    def test_straight_keeps_run_in_hi(self):
        helper, hi, lo = _split(["9c", "8d", "7h", "6s", "5d", "5c", "Kh"])
        assert helper.base_hand.hand_type == HandType.STRAIGHT
        assert helper.hi_hand.descr == "Straight, 9 High"
        assert hi == ["9c", "8d", "7h", "6s", "5d"]
        assert lo == ["Kh", "5c"]

    def test_flush_with_two_pair_plays_the_pairs(self):
        helper, hi, lo = _split(["Kh", "Kd", "9h", "7h", "7c", "4h", "2h"])
        assert helper.base_hand.hand_type == HandType.FLUSH
        assert helper.hi_hand.descr == "Pair, K's"
        assert helper.lo_hand.descr == "Pair, 7's"
        assert helper.qualifies_valid()

    def test_flush_with_quad_aces(self):
        """The joker makes both a flush and four aces; the flush plays hi."""
        helper, hi, lo = _split(["Ah", "Ad", "Ac", "Or", "Kh", "9h", "4h"])
        assert helper.base_hand.hand_type == HandType.FLUSH
        assert hi == ["Ah", "Kh", "Or", "9h", "4h"]
        assert lo == ["Ad", "Ac"]
        assert helper.hi_hand.descr == "Flush, Ah High"

    def test_flush_with_full_house(self):
        """A flush that is also a full house plays the set hi and the pair lo."""
        helper, hi, lo = _split(["Ah", "Ad", "Or", "Kh", "Kc", "9h", "4h"])
        assert helper.base_hand.hand_type == HandType.FLUSH
        assert hi == ["Ah", "Ad", "Or", "9h", "4h"]
        assert lo == ["Kh", "Kc"]
        assert helper.hi_hand.descr == "Three of a Kind, A's"

    def test_straight_with_three_of_a_kind(self):
        helper, hi, lo = _split(["9c", "8d", "7h", "6s", "5d", "5c", "5h"])
        assert helper.base_hand.hand_type == HandType.STRAIGHT
        assert hi == ["9c", "8d", "7h", "6s", "5d"]
        assert lo == ["5c", "5h"]

    def test_straight_with_three_pair(self):
        """The joker pairs the ace; the top pair goes to lo."""
        helper, hi, lo = _split(["Ah", "Or", "Kh", "Kd", "Qc", "Qd", "Jc"])
        assert helper.base_hand.hand_type == HandType.STRAIGHT
        assert hi == ["Kh", "Kd", "Qc", "Qd", "Jc"]
        assert lo == ["Ah", "Or"]
        assert helper.lo_hand.descr == "Pair, A's"

    def test_straight_with_small_pair(self):
        """A pair outside the straight plays lo."""
        _, hi, lo = _split(["9c", "8d", "7h", "6s", "5d", "2c", "2h"])
        assert hi == ["9c", "8d", "7h", "6s", "5d"]
        assert lo == ["2c", "2h"]

    def test_straight_with_high_pair_and_ace(self):
        """The ace joins the spare pair card in lo when the run survives without it."""
        _, hi, lo = _split(["Kc", "Kd", "Qh", "Js", "Td", "9c", "Ah"])
        assert hi == ["Kc", "Qh", "Js", "Td", "9c"]
        assert lo == ["Ah", "Kd"]

    def test_straight_needing_the_ace_splits_the_pair(self):
        _, hi, lo = _split(["Ah", "Kd", "Qc", "Jh", "Tc", "Ts", "4d"])
        assert hi == ["Tc", "Ts", "Qc", "Jh", "4d"]
        assert lo == ["Ah", "Kd"]

    def test_best_sub_selection_seven_card_run(self):
        """A seven card straight leaves its two top cards for lo."""
        cards = [Card.from_string(c) for c in ["9c", "8d", "7h", "6s", "5d", "4c", "3h"]]
        hi, lo = best_sub_selection(cards, Game(FULL_GAME))
        assert [str(c) for c in hi] == ["7h", "6s", "5d", "4c", "3h"]
        assert [str(c) for c in lo] == ["9c", "8d"]

    def test_best_sub_selection_no_run(self):
        cards = [Card.from_string(c) for c in ["Kh", "9d", "8c", "7s", "6h"]]
        assert best_sub_selection(cards, Game(FULL_GAME)) == ([], [])


class TestSettlement:
    """Tests for fouls and player vs banker results."""

    @pytest.fixture
    def banker(self):
        return PaiGowPokerHelper.set_hands(["Qc", "Qh", "8h", "6s", "4c"], ["Jh", "Td"])

    @pytest.fixture
    def fouled(self):
        return PaiGowPokerHelper.set_hands(["Kc", "9d", "7h", "5s", "3c"], ["Ah", "Ad"])

    def test_foul_detected(self, fouled):
        assert fouled.hi_hand.descr == "K High"
        assert fouled.lo_hand.descr == "Pair, A's"
        assert not fouled.qualifies_valid()

    def test_player_wins_both(self, banker):
        player = PaiGowPokerHelper.set_hands(["Kc", "Kd", "7h", "5s", "3c"], ["Ah", "Qd"])
        assert PaiGowPokerHelper.winners(player, banker) == 1

    def test_push_on_split_result(self, banker):
        player = PaiGowPokerHelper.set_hands(["Kc", "Kd", "7h", "5s", "3c"], ["9h", "8d"])
        assert PaiGowPokerHelper.winners(player, banker) == 0

    def test_banker_wins_copies(self, banker):
        """Ties on both hands go to the banker."""
        player = PaiGowPokerHelper.set_hands(["Qd", "Qs", "8c", "6h", "4d"], ["Js", "Tc"])
        assert PaiGowPokerHelper.winners(player, banker) == -1

    def test_fouled_player_loses(self, banker, fouled):
        assert PaiGowPokerHelper.winners(fouled, banker) == -1

    def test_fouled_banker_loses(self, banker, fouled):
        assert PaiGowPokerHelper.winners(banker, fouled) == 1

    def test_both_fouled_push(self, fouled):
        assert PaiGowPokerHelper.winners(fouled, fouled) == 0


class TestValidation:
    """Tests for input checks and split invariants."""

    def test_split_needs_seven_cards(self):
        with pytest.raises(ValueError):
            PaiGowPokerHelper.solve(["Ah", "Kd", "9c", "7s", "2h"])

    def test_unsplit_helper_has_no_hands(self):
        helper = PaiGowPokerHelper(["Ah", "Kd", "9c", "7s", "5d", "4c", "2h"])
        assert helper.base_hand.game.descr == FULL_GAME
        assert helper.hi_hand is None
        assert helper.lo_hand is None

    def test_unsplit_helper_cannot_be_checked(self):
        helper = PaiGowPokerHelper(["Ah", "Kd", "9c", "7s", "5d", "4c", "2h"])
        with pytest.raises(ValueError):
            helper.qualifies_valid()
        with pytest.raises(ValueError):
            PaiGowPokerHelper.winners(helper, helper)

    def test_random_deals_split_all_cards(self, rng):
        """Every random deal splits into 5 hi and 2 lo cards from the pool."""
        deck = create_standard_deck()
        for _ in range(100):
            pool = [deck[i] for i in rng.choice(len(deck), size=7, replace=False)]
            helper = PaiGowPokerHelper.solve(pool)
            assert len(helper.hi_hand.card_pool) == 5
            assert len(helper.lo_hand.card_pool) == 2

            split = [str(c) for c in helper.hi_hand.card_pool + helper.lo_hand.card_pool]
            assert sorted(split) == sorted(str(c) for c in pool)

    def test_split_is_deterministic(self):
        cards = ["Kh", "Kd", "9h", "7h", "7c", "4h", "2h"]
        first = PaiGowPokerHelper.solve(cards)
        second = PaiGowPokerHelper.solve(cards)
        assert first.hi_hand.to_array() == second.hi_hand.to_array()
        assert first.lo_hand.to_array() == second.lo_hand.to_array()
