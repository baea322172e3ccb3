"""Game descriptor - static facts about Agnes Sorel and a factory for states."""
from __future__ import annotations

from typing import Any, List, Mapping, Optional, Union

from .config import (
    MAX_CHANCE_OUTCOMES,
    MAX_UTILITY,
    MIN_UTILITY,
    NUM_DISTINCT_ACTIONS,
    OBSERVATION_TENSOR_SIZE,
)
from .game_initialization import new_game
from .models import GameParameters, GameState


class AgnesSorelGame:
    """Describes the game and creates initial states.

    Attributes:
        params: Resolved game parameters shared by every state this game creates
    """

    short_name = "agnes_sorel"
    long_name = "Agnes Sorel"

    def __init__(self, params: Optional[Union[GameParameters, Mapping[str, Any]]] = None) -> None:
        if isinstance(params, GameParameters):
            self.params = params
        else:
            self.params = GameParameters.from_mapping(params)

    def new_initial_state(self) -> GameState:
        return new_game(self.params)

    def num_distinct_actions(self) -> int:
        return NUM_DISTINCT_ACTIONS

    def max_chance_outcomes(self) -> int:
        return MAX_CHANCE_OUTCOMES

    def max_game_length(self) -> int:
        return self.params.depth_limit

    def max_chance_nodes_in_history(self) -> int:
        return self.params.depth_limit

    def num_players(self) -> int:
        return self.params.players

    def min_utility(self) -> float:
        return MIN_UTILITY

    def max_utility(self) -> float:
        return MAX_UTILITY

    def observation_tensor_shape(self) -> List[int]:
        return [OBSERVATION_TENSOR_SIZE]

    def observation_tensor_size(self) -> int:
        return OBSERVATION_TENSOR_SIZE

    def __repr__(self) -> str:
        return f"AgnesSorelGame({self.params!r})"


__all__ = ["AgnesSorelGame"]
