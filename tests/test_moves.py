"""Tests for the move codec."""
from __future__ import annotations

import pytest

from sorelgame.cards import Card, Rank, Suit
from sorelgame.config import MOVE_END, MOVE_START
from sorelgame.exceptions import EncodingError
from sorelgame.moves import (
    MOVE_BANDS,
    NUM_MOVE_ACTIONS,
    Move,
    MoveCategory,
    action_to_move,
    all_moves,
    move_category,
    move_to_action,
)
from sorelgame.rules import candidate_moves
from tests.conftest import card, create_test_state, random_rollout


HIDDEN = Card(Rank.HIDDEN, Suit.HIDDEN)
EMPTY_TABLEAU = Card(Rank.NONE, Suit.NONE)


class TestBandLayout:
    def test_bands_cover_the_move_range_exactly(self):
        assert NUM_MOVE_ACTIONS == MOVE_END - MOVE_START + 1 == 313
        expected_base = 0
        for band in MOVE_BANDS:
            assert band.base == expected_base
            expected_base += band.size
        assert expected_base == NUM_MOVE_ACTIONS

    @pytest.mark.parametrize(
        "action, category",
        [
            (53, MoveCategory.TO_EMPTY_FOUNDATION),
            (53 + 52, MoveCategory.ONTO_FOUNDATION),
            (53 + 100, MoveCategory.ACE_ONTO_KING_FOUNDATION),
            (53 + 104, MoveCategory.ONTO_SAME_SUIT),
            (53 + 152, MoveCategory.KING_ONTO_ACE_SAME_SUIT),
            (53 + 156, MoveCategory.ONTO_PARTNER_SUIT),
            (53 + 204, MoveCategory.KING_ONTO_ACE_PARTNER_SUIT),
            (53 + 208, MoveCategory.TO_EMPTY_TABLEAU),
            (53 + 260, MoveCategory.HIDDEN_ONTO_TABLEAU),
            (365, MoveCategory.HIDDEN_TO_EMPTY_TABLEAU),
        ],
    )
    def test_band_starts(self, action, category):
        assert move_category(action) == category

    def test_move_category_outside_move_range(self):
        assert move_category(0) is None
        assert move_category(366) is None


class TestCodecBijection:
    def test_every_id_decodes_and_re_encodes(self):
        """
        Given: Every id in the move range
        When: Decoded to a move and encoded again
        Then: The original id comes back
        """
        for action in range(MOVE_START, MOVE_END + 1):
            assert move_to_action(action_to_move(action)) == action

    def test_decoded_moves_are_distinct(self):
        moves = all_moves()
        assert len(moves) == len(set(moves)) == NUM_MOVE_ACTIONS

    def test_enumerated_moves_round_trip(self):
        """
        Given: Candidate moves gathered along random games
        When: Each is encoded and decoded
        Then: The same move comes back
        """
        seen = 0
        for seed in range(3):
            for state in random_rollout(seed, depth_limit=80):
                if state.is_terminal() or state.is_chance_node():
                    continue
                for move in candidate_moves(state):
                    assert action_to_move(move_to_action(move)) == move
                    seen += 1
        assert seen > 0


class TestSpecificMoves:
    def test_ace_to_empty_foundation(self):
        move = Move(Card(Rank.NONE, Suit.SPADES), card("AS"))
        assert move_to_action(move) == 53

    def test_king_onto_ace_same_suit(self):
        move = Move(card("AH"), card("KH"))
        action = move_to_action(move)
        assert move_category(action) == MoveCategory.KING_ONTO_ACE_SAME_SUIT
        assert action_to_move(action) == move

    def test_king_onto_ace_partner_suit(self):
        move = Move(card("AD"), card("KH"))
        action = move_to_action(move)
        assert move_category(action) == MoveCategory.KING_ONTO_ACE_PARTNER_SUIT
        assert action_to_move(action) == move

    def test_ace_onto_king_foundation(self):
        move = Move(card("KC"), card("AC"))
        action = move_to_action(move)
        assert move_category(action) == MoveCategory.ACE_ONTO_KING_FOUNDATION
        assert action_to_move(action) == move

    def test_partner_suit_move_keeps_target_suit(self):
        move = action_to_move(move_to_action(Move(card("8C"), card("7S"))))
        assert move.target == card("8C")
        assert move.source == card("7S")

    def test_hidden_source_moves(self):
        assert move_to_action(Move(EMPTY_TABLEAU, HIDDEN)) == MOVE_END
        onto = Move(card("9D"), HIDDEN)
        assert action_to_move(move_to_action(onto)) == onto

    def test_no_move_onto_a_card_of_the_same_run(self):
        """
        Given: A spade run that wraps past the ace, so the top king sits above the queen
        When: Candidate moves are built
        Then: The queen is never offered onto the king of its own pile
        """
        state = create_test_state(tableaus=["KC QS JS TS 9S 8S 7S 6S 5S 4S 3S 2S AS KS"])
        assert card("QS") in state.sources()
        assert Move(card("KS"), card("QS")) not in candidate_moves(state)


class TestCodecErrors:
    def test_move_matching_no_category(self):
        with pytest.raises(EncodingError):
            move_to_action(Move(card("9D"), card("3S")))

    def test_wrong_suit_onto_empty_foundation(self):
        with pytest.raises(EncodingError):
            move_to_action(Move(Card(Rank.NONE, Suit.HEARTS), card("AS")))

    def test_id_outside_move_range(self):
        with pytest.raises(EncodingError):
            action_to_move(366)
        with pytest.raises(EncodingError):
            action_to_move(12)
