"""Move rules - candidate moves, reversibility and move scoring.

These helpers read a ``GameState`` but never mutate it. They are shared by the
enumerator (which needs candidates and reversibility for the cycle guard) and
the executor (which validates and scores the move it applies).
"""
from __future__ import annotations

import hashlib
from typing import Dict, List, Optional

from .cards import Card, Location, Rank, is_legal_child, legal_children
from .config import REVEAL_BONUS, WASTE_MOVE_BONUS
from .models import GameState
from .moves import Move
from .piles import Pile

FOUNDATION_POINTS: Dict[Rank, float] = {
    Rank.ACE: 100.0,
    Rank.TWO: 90.0,
    Rank.THREE: 80.0,
    Rank.FOUR: 70.0,
    Rank.FIVE: 60.0,
    Rank.SIX: 50.0,
    Rank.SEVEN: 40.0,
    Rank.EIGHT: 30.0,
    Rank.NINE: 20.0,
    Rank.TEN: 10.0,
    Rank.JACK: 10.0,
    Rank.QUEEN: 10.0,
    Rank.KING: 10.0,
}


def observation_hash(observation: str) -> int:
    digest = hashlib.blake2b(observation.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big")


def candidate_moves(state: GameState) -> List[Move]:
    """Return every structurally legal move, before the cycle guard is applied.

    All empty tableaus are interchangeable, so only the first one is offered as
    a target. Foundation moves never split a tableau run, and moving the bottom
    card of a tableau onto an empty tableau is pointless and skipped. The card
    that seeded the foundations stays put.
    """
    foundation_rank: Optional[Rank] = state.foundation_rank if state.is_known_foundation else None
    sources = set(state.sources())
    moves: List[Move] = []
    found_empty_tableau = False

    for target in state.targets():
        if target.is_empty_tableau:
            if found_empty_tableau:
                continue
            found_empty_tableau = True
        for child in legal_children(target, foundation_rank):
            if child not in sources:
                continue
            if state.foundation_card is not None and child == state.foundation_card:
                continue
            source_pile = state.get_pile(child)
            if not target.is_sentinel and source_pile is state.get_pile(target):
                continue
            if target.location == Location.FOUNDATION:
                if source_pile.kind == Location.TABLEAU and source_pile.last_card != child:
                    continue
            elif target.is_empty_tableau:
                if source_pile.kind == Location.FOUNDATION:
                    continue
                if source_pile.kind == Location.TABLEAU and source_pile.first_card == child:
                    continue
            moves.append(Move(target, source_pile.cards[source_pile.position_of(child)]))
    return moves


def _card_below(pile: Pile, card: Card) -> Optional[Card]:
    position = pile.position_of(card)
    if position <= 0:
        return None
    return pile.cards[position - 1]


def is_reversible(state: GameState, move: Move) -> bool:
    """Whether ``move`` could be undone by a symmetric legal move.

    Waste moves never are; foundation moves always are. A tableau card is
    reversible when it can land on the target and it either sits at the bottom
    of its pile or is itself a legal child of the card directly beneath it.
    """
    source_pile = state.get_pile(move.source)
    if source_pile.kind == Location.WASTE:
        return False
    if source_pile.kind == Location.FOUNDATION:
        return True
    if source_pile.kind != Location.TABLEAU:
        return False

    target = state.locate(move.target)
    if not is_legal_child(target, move.source):
        return False
    below = _card_below(source_pile, move.source)
    if below is None:
        return True
    return is_legal_child(below, move.source)


def move_reward(source_kind: Location, target_kind: Location, source: Card, source_pile: Pile) -> float:
    """Score a move once it has been applied; ``source_pile`` is what remains behind."""
    reward = 0.0
    if target_kind == Location.FOUNDATION:
        reward += FOUNDATION_POINTS[source.rank]
    elif source_kind == Location.FOUNDATION:
        reward -= FOUNDATION_POINTS[source.rank]
    if source_kind == Location.TABLEAU and not source_pile.is_empty and source_pile.last_card.hidden:
        reward += REVEAL_BONUS
    if source_kind == Location.WASTE:
        reward += WASTE_MOVE_BONUS
    return reward


__all__ = [
    "FOUNDATION_POINTS",
    "observation_hash",
    "candidate_moves",
    "is_reversible",
    "move_reward",
]
