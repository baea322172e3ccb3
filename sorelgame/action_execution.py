"""Action execution module - applies actions to game state.

This module contains the ActionExecutor class which takes a game state and an
action id, validates it against the current node kind, mutates the state in
place and reports what happened as an event dictionary for logging/display.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from .cards import Card
from .config import NUM_TABLEAUS
from .exceptions import PreconditionError
from .models import ActType, GameState, action_type
from .moves import Move, action_to_move, move_to_action
from .pretty import move_to_string, state_to_string
from .rules import candidate_moves, is_reversible, move_reward, observation_hash

logger = logging.getLogger(__name__)


def _check_term(state: GameState) -> bool:
    """Force the terminal flag once the depth limit is reached.

    Args:
        state: Current game state

    Returns:
        True if the game has finished, False otherwise
    """
    if not state.is_finished and state.current_depth >= state.params.depth_limit:
        logger.debug("depth limit %d reached, episode finished", state.params.depth_limit)
        state.is_finished = True
    return state.is_finished


class ActionExecutor:
    """Applies a single action to the game state while tracking events.

    The state is mutated in place. Callers that need the previous state keep a
    copy (see ``engine.apply_action``).

    Attributes:
        state: The game state to mutate
        action: The action id being applied
        check_revisit: Reject moves that recreate a remembered observation
    """

    def __init__(self, state: GameState, action: int, check_revisit: bool = True) -> None:
        self.state = state
        self.action = int(action)
        self.check_revisit = check_revisit

    def execute(self) -> Dict[str, Any]:
        """Apply the action and return an event describing it.

        Raises:
            PreconditionError: If the state is terminal or the action does not
                fit the current node kind
            EncodingError: If the action id is outside every action band
        """
        if self.state.is_finished:
            raise PreconditionError(f"cannot apply action {self.action} to a terminal state")

        typ = action_type(self.action)
        if typ == ActType.END:
            event = self._execute_end()
        elif typ == ActType.REVEAL:
            event = self._execute_reveal()
        elif typ == ActType.MOVE:
            event = self._execute_move()
        else:
            event = self._execute_deal()

        self.state.history.append(self.action)
        self.state.current_depth += 1
        event["terminal"] = _check_term(self.state)
        return event

    # ------------------------------------------------------------------

    def _require_decision_node(self) -> None:
        if self.state.is_chance_node():
            raise PreconditionError(f"action {self.action} is a player action but the state is a chance node")

    def _execute_end(self) -> Dict[str, Any]:
        self.state.is_finished = True
        self.state.current_rewards = 0.0
        return {"type": "end"}

    def _execute_reveal(self) -> Dict[str, Any]:
        """Resolve the next hidden card in deal order."""
        state = self.state
        if not state.is_chance_node():
            raise PreconditionError(f"reveal {self.action} requested at a decision node")
        if self.action in state.revealed_cards:
            raise PreconditionError(f"card {self.action} has already been revealed")

        card = Card.from_index(self.action)
        event: Dict[str, Any] = {"type": "reveal", "card": repr(card)}
        for tableau in state.tableaus:
            if tableau.has_hidden():
                tableau.reveal(card)
                state.record_location(card, tableau)
                event["pile"] = tableau.pile_id.name
                break
        else:
            # Every tableau slot is known: this card fixes the foundation rank.
            foundation = state.foundation_for(card.suit)
            foundation.extend([card])
            state.record_location(card, foundation)
            state.foundation_rank = card.rank
            state.foundation_card = card
            event["pile"] = foundation.pile_id.name
            event["foundation_rank"] = card.rank.name
            logger.debug("foundation rank established as %s by %r", card.rank.name, card)

        state.revealed_cards.append(self.action)
        state.current_rewards = 0.0
        return event

    def _execute_move(self) -> Dict[str, Any]:
        state = self.state
        self._require_decision_node()
        move = action_to_move(self.action)
        if move not in candidate_moves(state):
            raise PreconditionError(f"move {move_to_string(move)} is not available in this state")
        if self.check_revisit and revisits_observation(state, move):
            raise PreconditionError(f"move {move_to_string(move)} would revisit an earlier position")

        reversible = is_reversible(state, move)
        state.is_reversible = reversible
        if reversible:
            state.previous_states.add(observation_hash(state_to_string(state)))
        elif state.previous_states:
            logger.debug("irreversible move %s clears %d remembered states", move_to_string(move), len(state.previous_states))
            state.previous_states.clear()

        target_pile = state.get_pile(move.target)
        source_pile = state.get_pile(move.source)
        source_kind = source_pile.kind

        run = source_pile.split(move.source)
        target_pile.extend(run)
        for card in run:
            state.record_location(card, target_pile)

        reward = move_reward(source_kind, target_pile.kind, move.source, source_pile)
        state.current_rewards = reward
        state.current_returns += reward
        return {
            "type": "move",
            "move": move_to_string(move),
            "source_pile": source_pile.pile_id.name,
            "target_pile": target_pile.pile_id.name,
            "cards": len(run),
            "reward": reward,
            "reversible": reversible,
        }

    def _execute_deal(self) -> Dict[str, Any]:
        """Deal hidden waste cards onto the tableaus, one per tableau in pile order."""
        state = self.state
        self._require_decision_node()
        if state.waste.is_empty:
            raise PreconditionError("deal is not a valid action when the waste is empty")

        count = min(NUM_TABLEAUS, len(state.waste))
        for tableau in state.tableaus[:count]:
            card = state.waste.pop()
            tableau.extend([card])
            state.record_location(card, tableau)

        state.is_reversible = False
        state.previous_states.clear()
        state.current_rewards = 0.0
        logger.debug("dealt %d card(s) from the waste, %d left", count, len(state.waste))
        return {"type": "deal", "count": count, "partial": count < NUM_TABLEAUS}


def revisits_observation(state: GameState, move: Move) -> bool:
    """Return True when a reversible move would recreate a remembered observation.

    Only applies while the state is reversible. A move whose child is a chance
    node never counts as a revisit.
    """
    if not state.is_reversible or not is_reversible(state, move):
        return False
    child = state.copy()
    ActionExecutor(child, move_to_action(move), check_revisit=False).execute()
    if child.is_chance_node():
        return False
    return observation_hash(state_to_string(child)) in state.previous_states


__all__ = ["ActionExecutor", "revisits_observation"]
