"""Action enumeration module - generates all legal actions for a given game state.

This module contains the ActionEnumerator class which encapsulates the branching
logic for generating legal action ids from the node kind: chance outcomes at
chance nodes, guarded candidate moves plus ``DEAL`` at decision nodes.
"""
from __future__ import annotations

from typing import List, Tuple

from .action_execution import revisits_observation
from .config import DEAL_ACTION, END_ACTION, NUM_CARDS, REVEAL_END, REVEAL_START
from .models import GameState
from .moves import Move, move_to_action
from .rules import candidate_moves


def chance_outcomes(state: GameState) -> List[Tuple[int, float]]:
    """Return ``(reveal id, probability)`` pairs for every card not yet revealed.

    Outcomes are uniform over the unrevealed cards. A state that is not a chance
    node has no outcomes.
    """
    if state.is_terminal() or not state.is_chance_node():
        return []
    revealed = set(state.revealed_cards)
    probability = 1.0 / (NUM_CARDS - len(revealed))
    return [
        (action, probability)
        for action in range(REVEAL_START, REVEAL_END + 1)
        if action not in revealed
    ]


class ActionEnumerator:
    """Encapsulates the branching logic for generating legal actions.

    Attributes:
        state: The current game state (never mutated)
    """

    def __init__(self, state: GameState) -> None:
        self.state = state

    def enumerate(self) -> List[int]:
        """Generate all legal action ids for the current game state.

        Returns:
            Sorted list of legal action ids; empty only when the state is terminal
        """
        if self.state.is_terminal():
            return []
        if self.state.is_chance_node():
            return [action for action, _ in chance_outcomes(self.state)]

        legal = [move_to_action(move) for move in candidate_moves(self.state) if self._passes_cycle_guard(move)]
        if not self.state.waste.is_empty:
            legal.append(DEAL_ACTION)
        if not legal:
            return [END_ACTION]
        return sorted(legal)

    def _passes_cycle_guard(self, move: Move) -> bool:
        """Reject reversible moves that lead back to an already visited observation."""
        return not revisits_observation(self.state, move)


__all__ = ["ActionEnumerator", "chance_outcomes"]
