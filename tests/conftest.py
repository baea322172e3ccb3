"""Pytest configuration and shared fixtures for sorelgame tests."""
from __future__ import annotations

import random
from typing import Dict, Iterable, List, Optional, Sequence

import pytest

from sorelgame.cards import SUITS, TABLEAU_IDS, Card, Location, Rank, Suit
from sorelgame.engine import apply_action, chance_outcomes, new_game
from sorelgame.models import GameParameters, GameState
from sorelgame.piles import Pile

_RANK_CODES = {"A": Rank.ACE, "T": Rank.TEN, "J": Rank.JACK, "Q": Rank.QUEEN, "K": Rank.KING}
_SUIT_CODES = {"S": Suit.SPADES, "H": Suit.HEARTS, "C": Suit.CLUBS, "D": Suit.DIAMONDS}


def card(code: str) -> Card:
    """Parse a two-character card code such as ``"7S"`` or ``"TH"``; ``"??"`` is a hidden card."""
    if code == "??":
        return Card.hidden_card()
    rank_code, suit_code = code[0], code[1]
    rank = _RANK_CODES.get(rank_code) or Rank(int(rank_code))
    return Card(rank, _SUIT_CODES[suit_code])


def cards(codes: str) -> List[Card]:
    return [card(code) for code in codes.split()]


def create_test_state(
    tableaus: Optional[Sequence[str]] = None,
    waste: str = "",
    foundations: Optional[Dict[Suit, str]] = None,
    foundation_rank: Rank = Rank.ACE,
    foundation_card: Optional[str] = None,
    is_reversible: bool = False,
    depth_limit: int = 150,
) -> GameState:
    """Create a customized decision-node state for testing.

    Args:
        tableaus: Up to seven space-separated card lists, bottom card first
        waste: Space-separated waste cards (``??`` for hidden)
        foundations: Per-suit space-separated foundation cards, bottom card first
        foundation_rank: Starting rank of the foundations
        foundation_card: Code of the card that seeded the foundations
        is_reversible: Value of the reversible flag
        depth_limit: Depth limit of the game parameters

    Returns:
        GameState with the location index built from the piles
    """
    tableau_codes = list(tableaus or [])
    tableau_codes += [""] * (len(TABLEAU_IDS) - len(tableau_codes))
    foundation_codes = foundations or {}

    def _parse(codes: str) -> List[Card]:
        return cards(codes) if codes.strip() else []

    state = GameState(
        waste=Pile.waste(_parse(waste)),
        foundations=[Pile.foundation(suit, _parse(foundation_codes.get(suit, ""))) for suit in SUITS],
        tableaus=[Pile.tableau(pile_id, _parse(codes)) for pile_id, codes in zip(TABLEAU_IDS, tableau_codes)],
        params=GameParameters(depth_limit=depth_limit),
        foundation_rank=foundation_rank,
        foundation_card=card(foundation_card) if foundation_card else None,
        is_reversible=is_reversible,
    )
    for pile in state.piles():
        for item in pile.cards:
            state.record_location(item, pile)
    return state


def reveal_all(state: GameState, order: Iterable[int]) -> GameState:
    """Apply reveal actions in ``order`` until the state stops being a chance node."""
    for action in order:
        if not state.is_chance_node():
            break
        state, _, _ = apply_action(state, action)
    return state


def random_rollout(seed: int, depth_limit: int = 150) -> List[GameState]:
    """Play uniformly random chance outcomes and decisions; return every visited state."""
    from sorelgame.engine import enumerate_legal_actions

    rng = random.Random(seed)
    state = new_game(depth_limit=depth_limit)
    visited = [state]
    while not state.is_terminal():
        if state.is_chance_node():
            action = rng.choice([outcome for outcome, _ in chance_outcomes(state)])
        else:
            action = rng.choice(enumerate_legal_actions(state))
        state, _, _ = apply_action(state, action)
        visited.append(state)
    return visited


@pytest.fixture
def initial_state() -> GameState:
    """A freshly dealt, fully hidden game."""
    return new_game()


@pytest.fixture
def decision_state() -> GameState:
    """The first decision node reached by revealing cards in index order."""
    return reveal_all(new_game(), range(1, 53))


@pytest.fixture
def foundation_state() -> GameState:
    """Foundations built from aces with cards ready to move onto them."""
    return create_test_state(
        tableaus=["KD QD", "2S", "TH", "5C 4C", "AH"],
        foundations={Suit.SPADES: "AS", Suit.HEARTS: "", Suit.DIAMONDS: ""},
        foundation_rank=Rank.ACE,
        foundation_card="AS",
    )


@pytest.fixture
def run_state() -> GameState:
    """Tableaus holding multi-card runs and one empty tableau."""
    return create_test_state(
        tableaus=["9S 8S 7C", "8C", "KH", "", "QD JD", "5H", "6D"],
        foundations={Suit.CLUBS: "3C"},
        foundation_rank=Rank.THREE,
        foundation_card="3C",
        is_reversible=True,
    )
