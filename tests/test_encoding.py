"""Tests for the flat observation tensor."""
from __future__ import annotations

import numpy as np

from sorelgame.cards import Rank, Suit
from sorelgame.config import OBSERVATION_TENSOR_SIZE
from sorelgame.rl.encoding import DEFAULT_ENCODER_CONFIG, encode_observation, observation_segments
from tests.conftest import card, create_test_state


def _regions(vector):
    segments = observation_segments()
    return {
        "foundations": vector[segments["foundations"]].reshape(4, 14),
        "tableaus": vector[segments["tableaus"]].reshape(7, 53),
        "waste": vector[segments["waste"]].reshape(23, 53),
        "foundation_rank": vector[segments["foundation_rank"]],
    }


class TestLayout:
    def test_size_and_dtype(self, initial_state):
        vector = encode_observation(initial_state)
        assert vector.shape == (OBSERVATION_TENSOR_SIZE,)
        assert vector.dtype == np.float32
        assert DEFAULT_ENCODER_CONFIG.size == 1647

    def test_initial_state(self, initial_state):
        """
        Given: The fully hidden opening deal
        When: It is encoded
        Then: Every foundation is empty, every waste slot is hidden and the rank is unknown
        """
        regions = _regions(encode_observation(initial_state))
        assert (regions["foundations"][:, 0] == 1.0).all()
        assert regions["foundations"][:, 1:].sum() == 0
        assert regions["tableaus"].sum() == 0
        assert (regions["waste"][:, 0] == 1.0).all()
        assert regions["foundation_rank"][0] == 0.0


class TestContents:
    def test_cards_land_in_their_slots(self):
        state = create_test_state(
            tableaus=["9S 8S 7C", "", "KH"],
            foundations={Suit.CLUBS: "5C 6C"},
            foundation_rank=Rank.FIVE,
            foundation_card="5C",
            waste="4D ??",
        )
        regions = _regions(encode_observation(state))

        assert regions["foundations"][2, Rank.SIX] == 1.0
        assert regions["foundations"][0, 0] == 1.0
        assert set(np.flatnonzero(regions["tableaus"][0])) == {card("9S").index, card("8S").index, card("7C").index}
        assert regions["tableaus"][1, 0] == 1.0
        assert regions["tableaus"][2, card("KH").index] == 1.0
        assert regions["waste"][0, card("4D").index] == 1.0
        assert regions["waste"][1, 0] == 1.0
        assert regions["waste"][2:].sum() == 0
        assert regions["foundation_rank"][0] == np.float32(5 / 13)

    def test_hidden_only_tableau_is_an_empty_row(self):
        """
        Given: A tableau of face-down cards next to an empty tableau
        When: The board is encoded
        Then: The hidden tableau is all zeros while the empty one sets its empty slot
        """
        state = create_test_state(tableaus=["?? ??", ""], waste="4D")
        regions = _regions(encode_observation(state))

        assert regions["tableaus"][0].sum() == 0
        assert regions["tableaus"][1, 0] == 1.0
