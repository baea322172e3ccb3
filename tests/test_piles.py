"""Tests for the pile contract of each pile kind."""
from __future__ import annotations

import pytest

from sorelgame.cards import Card, Location, PileID, Suit
from sorelgame.exceptions import InvariantViolation
from sorelgame.piles import Pile
from tests.conftest import card, cards


class TestTableauPile:
    def test_empty_tableau_offers_sentinel_target(self):
        pile = Pile.tableau(PileID.TABLEAU_1)
        assert pile.targets() == [Card.empty_tableau()]
        assert pile.sources() == []

    def test_hidden_top_card_is_no_target(self):
        pile = Pile.tableau(PileID.TABLEAU_2, [Card.hidden_card()])
        assert pile.targets() == []
        assert pile.sources() == []

    def test_sources_follow_the_valid_run(self):
        """
        Given: A tableau 4H 9S 8C 7S (bottom to top)
        When: Sources are listed
        Then: The run 7S, 8C, 9S is offered top first and 4H is excluded
        """
        pile = Pile.tableau(PileID.TABLEAU_3, cards("4H 9S 8C 7S"))
        assert pile.sources() == cards("7S 8C 9S")
        assert pile.targets() == [card("7S")]

    def test_sources_stop_at_hidden_cards(self):
        pile = Pile.tableau(PileID.TABLEAU_3, [Card.hidden_card()] + cards("9S 8S"))
        assert pile.sources() == cards("8S 9S")

    def test_split_moves_the_run_above_the_card(self):
        pile = Pile.tableau(PileID.TABLEAU_4, cards("4H 9S 8C 7S"))
        run = pile.split(card("8C"))
        assert run == cards("8C 7S")
        assert pile.cards == cards("4H 9S")

    def test_split_of_missing_card_is_empty(self):
        pile = Pile.tableau(PileID.TABLEAU_4, cards("4H"))
        assert pile.split(card("5H")) == []
        assert pile.cards == cards("4H")

    def test_reveal_overwrites_first_hidden_slot(self):
        pile = Pile.tableau(PileID.TABLEAU_2, [Card.hidden_card(), Card.hidden_card()])
        pile.reveal(card("QD"))
        assert pile.cards[0] == card("QD")
        assert not pile.cards[0].hidden
        assert pile.cards[0].location == Location.TABLEAU
        assert pile.cards[1].hidden

    def test_reveal_without_hidden_card_fails(self):
        pile = Pile.tableau(PileID.TABLEAU_2, cards("QD"))
        with pytest.raises(InvariantViolation):
            pile.reveal(card("2C"))

    def test_extend_tags_cards_with_pile_kind(self):
        pile = Pile.tableau(PileID.TABLEAU_5)
        pile.extend([card("5C")])
        assert pile.last_card.location == Location.TABLEAU


class TestFoundationPile:
    def test_empty_foundation_offers_suit_sentinel(self):
        pile = Pile.foundation(Suit.DIAMONDS)
        assert pile.targets() == [Card.empty_foundation(Suit.DIAMONDS)]
        assert pile.sources() == []

    def test_only_top_card_is_target_and_source(self):
        pile = Pile.foundation(Suit.HEARTS, cards("AH 2H 3H"))
        assert pile.targets() == [card("3H")]
        assert pile.sources() == [card("3H")]

    def test_split_only_takes_the_top_card(self):
        pile = Pile.foundation(Suit.HEARTS, cards("AH 2H 3H"))
        assert pile.split(card("2H")) == []
        assert pile.split(card("3H")) == [card("3H")]
        assert pile.cards == cards("AH 2H")

    def test_foundations_cannot_reveal(self):
        with pytest.raises(InvariantViolation):
            Pile.foundation(Suit.HEARTS).reveal(card("AH"))

    def test_foundation_needs_a_real_suit(self):
        with pytest.raises(InvariantViolation):
            Pile.foundation(Suit.NONE)


class TestWastePile:
    def test_waste_has_no_targets(self):
        assert Pile.waste(cards("5C")).targets() == []

    def test_sources_are_leading_visible_cards(self):
        pile = Pile.waste(cards("5C 6H") + [Card.hidden_card()] + cards("7D"))
        assert pile.sources() == cards("5C 6H")

    def test_split_takes_a_single_card(self):
        pile = Pile.waste(cards("5C 6H 7D"))
        assert pile.split(card("6H")) == [card("6H")]
        assert pile.cards == cards("5C 7D")

    def test_pop_from_empty_pile_fails(self):
        with pytest.raises(InvariantViolation):
            Pile.waste().pop()

    def test_first_and_last_card_require_cards(self):
        pile = Pile.waste()
        with pytest.raises(InvariantViolation):
            _ = pile.last_card
        with pytest.raises(InvariantViolation):
            _ = pile.first_card
