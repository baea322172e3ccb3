from __future__ import annotations

from typing import Any, Dict, List, Tuple

from .action_enumeration import ActionEnumerator, chance_outcomes
from .action_execution import ActionExecutor
from .game_initialization import new_game
from .models import GameState, check_player
from .pretty import action_to_string as _render_action
from .pretty import state_to_string


def current_player(gs: GameState) -> int:
    return gs.current_player()


def enumerate_legal_actions(gs: GameState) -> List[int]:
    return ActionEnumerator(gs).enumerate()


legal_actions = enumerate_legal_actions


def do_apply_action(gs: GameState, action: int) -> Dict[str, Any]:
    """Apply ``action`` to ``gs`` in place and return the resulting event."""
    return ActionExecutor(gs, action).execute()


def apply_action(gs: GameState, action: int) -> Tuple[GameState, bool, Dict[str, Any]]:
    """Apply ``action`` to a copy of ``gs``.

    Returns:
        ``(next_state, done, event)``; ``gs`` itself is left untouched
    """
    state = gs.copy()
    event = do_apply_action(state, action)
    return state, state.is_terminal(), event


def child(gs: GameState, action: int) -> GameState:
    return apply_action(gs, action)[0]


def returns(gs: GameState) -> List[float]:
    return gs.returns()


def rewards(gs: GameState) -> List[float]:
    return gs.rewards()


def to_string(gs: GameState) -> str:
    return state_to_string(gs)


def observation_string(gs: GameState, player: int) -> str:
    check_player(player)
    return state_to_string(gs)


def information_state_string(gs: GameState, player: int) -> str:
    check_player(player)
    return " ".join(str(action) for action in gs.history)


def action_to_string(gs: GameState, player: int, action: int) -> str:
    check_player(player)
    return _render_action(action, gs.params.is_colored)


def observation_tensor(gs: GameState, player: int):
    check_player(player)
    from .rl.encoding import encode_observation

    return encode_observation(gs)


__all__ = [
    "new_game",
    "current_player",
    "enumerate_legal_actions",
    "legal_actions",
    "chance_outcomes",
    "do_apply_action",
    "apply_action",
    "child",
    "returns",
    "rewards",
    "to_string",
    "observation_string",
    "information_state_string",
    "action_to_string",
    "observation_tensor",
]
