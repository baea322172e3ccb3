"""Tests for the card model: identity, indices and the adjacency relation."""
from __future__ import annotations

import pytest

from sorelgame.cards import (
    HIDDEN_CARD_INDEX,
    Card,
    Location,
    Rank,
    Suit,
    is_legal_child,
    legal_children,
    ordinary_cards,
    partner_suit,
    same_color_suits,
)
from sorelgame.exceptions import InvariantViolation
from tests.conftest import card, cards


class TestCardIdentity:
    """Equality, hashing and ordering ignore the hidden flag and location tag."""

    def test_location_does_not_affect_equality(self):
        """
        Given: The same card tagged with two locations
        When: Compared and hashed
        Then: They are equal and hash alike
        """
        in_tableau = Card(Rank.SEVEN, Suit.HEARTS, location=Location.TABLEAU)
        in_waste = Card(Rank.SEVEN, Suit.HEARTS, location=Location.WASTE)

        assert in_tableau == in_waste
        assert hash(in_tableau) == hash(in_waste)
        assert len({in_tableau, in_waste}) == 1

    def test_ordering_is_suit_then_rank(self):
        assert card("KS") < card("AH")
        assert card("2H") < card("3H")
        assert sorted(cards("5D AS KC")) == cards("AS KC 5D")

    def test_malformed_cards_rejected(self):
        with pytest.raises(InvariantViolation):
            Card(Rank.HIDDEN, Suit.SPADES)
        with pytest.raises(InvariantViolation):
            Card(Rank.FIVE, Suit.NONE)


class TestCardIndex:
    """Integer card indices and their special values."""

    def test_index_round_trip_for_every_ordinary_card(self):
        for expected, item in enumerate(ordinary_cards(), start=1):
            assert item.index == expected
            assert Card.from_index(expected) == item

    def test_special_indices(self):
        assert Card.hidden_card().index == HIDDEN_CARD_INDEX
        assert Card.empty_tableau().index == -1
        assert [Card.empty_foundation(suit).index for suit in (Suit.SPADES, Suit.HEARTS, Suit.CLUBS, Suit.DIAMONDS)] == [
            -5,
            -4,
            -3,
            -2,
        ]
        assert Card.from_index(-3).is_empty_foundation
        assert Card.from_index(-3).suit == Suit.CLUBS

    def test_out_of_range_index_rejected(self):
        with pytest.raises(InvariantViolation):
            Card.from_index(53)


class TestSuits:
    def test_partner_suits(self):
        assert partner_suit(Suit.SPADES) == Suit.CLUBS
        assert partner_suit(Suit.CLUBS) == Suit.SPADES
        assert partner_suit(Suit.HEARTS) == Suit.DIAMONDS
        assert partner_suit(Suit.DIAMONDS) == Suit.HEARTS

    def test_same_color_suits(self):
        assert same_color_suits(Suit.HEARTS) == [Suit.HEARTS, Suit.DIAMONDS]
        assert len(same_color_suits(Suit.NONE)) == 4
        with pytest.raises(InvariantViolation):
            same_color_suits(Suit.HIDDEN)


class TestLegalChildren:
    """The tableau and foundation adjacency relations."""

    def test_tableau_child_is_one_lower_same_colour(self):
        """
        Given: An eight of spades in a tableau
        When: Its legal children are listed
        Then: Only the sevens of spades and clubs qualify
        """
        parent = card("8S").at(Location.TABLEAU)
        assert set(legal_children(parent)) == {card("7S"), card("7C")}
        assert not is_legal_child(parent, card("7H"))

    def test_tableau_ace_turns_the_corner(self):
        parent = card("AD").at(Location.TABLEAU)
        assert set(legal_children(parent)) == {card("KH"), card("KD")}

    def test_empty_tableau_accepts_every_card(self):
        assert len(legal_children(Card.empty_tableau())) == 52

    def test_foundation_children_need_known_rank(self):
        """
        Given: An empty hearts foundation
        When: Children are requested with and without a foundation rank
        Then: Without a rank nothing fits; with rank 5 only the five of hearts fits
        """
        empty = Card.empty_foundation(Suit.HEARTS)
        assert legal_children(empty) == []
        assert legal_children(empty, Rank.FIVE) == [card("5H")]
        with pytest.raises(InvariantViolation):
            legal_children(empty, Rank.NONE)

    def test_foundation_builds_up_and_wraps(self):
        assert legal_children(card("7C").at(Location.FOUNDATION), Rank.ACE) == [card("8C")]
        assert legal_children(card("KC").at(Location.FOUNDATION), Rank.FIVE) == [card("AC")]

    def test_hidden_and_untagged_cards_have_no_children(self):
        assert legal_children(Card.hidden_card(Location.TABLEAU)) == []
        assert legal_children(card("8S")) == []
