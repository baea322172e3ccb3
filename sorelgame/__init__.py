from __future__ import annotations

from . import config
from .cards import Card, Location, PileID, Rank, Suit
from .engine import (
    action_to_string,
    apply_action,
    chance_outcomes,
    child,
    current_player,
    do_apply_action,
    enumerate_legal_actions,
    information_state_string,
    legal_actions,
    new_game,
    observation_string,
    observation_tensor,
    returns,
    rewards,
    to_string,
)
from .exceptions import (
    ConfigurationError,
    EncodingError,
    InvalidActionError,
    InvalidPlayerError,
    InvariantViolation,
    PreconditionError,
    SorelGameError,
)
from .game import AgnesSorelGame
from .models import Action, ActType, GameParameters, GameState
from .moves import Move, action_to_move, move_to_action
from .piles import Pile

__all__ = [
    "config",
    "Card",
    "Location",
    "PileID",
    "Rank",
    "Suit",
    "Pile",
    "Move",
    "move_to_action",
    "action_to_move",
    "Action",
    "ActType",
    "GameParameters",
    "GameState",
    "AgnesSorelGame",
    "new_game",
    "current_player",
    "enumerate_legal_actions",
    "legal_actions",
    "chance_outcomes",
    "apply_action",
    "do_apply_action",
    "child",
    "returns",
    "rewards",
    "to_string",
    "observation_string",
    "information_state_string",
    "action_to_string",
    "observation_tensor",
    "SorelGameError",
    "InvariantViolation",
    "EncodingError",
    "InvalidActionError",
    "PreconditionError",
    "InvalidPlayerError",
    "ConfigurationError",
]
