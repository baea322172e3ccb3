"""Game initialization module - builds the opening position.

The opening position is fully hidden: tableau ``i`` (1-based) holds ``i``
face-down cards, the waste holds the remaining face-down cards and the
foundations are empty. Identities are resolved later by reveal actions.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from .cards import Card, Location
from .config import INITIAL_WASTE_SIZE
from .models import GameParameters, GameState, empty_board


def deal_hidden_layout(state: GameState) -> None:
    """Fill an empty board with the hidden opening layout."""
    for count, tableau in enumerate(state.tableaus, start=1):
        tableau.extend(Card.hidden_card(Location.TABLEAU) for _ in range(count))
    state.waste.extend(Card.hidden_card(Location.WASTE) for _ in range(INITIAL_WASTE_SIZE))


def new_game(params: Optional[Union[GameParameters, Mapping[str, Any]]] = None, **overrides: Any) -> GameState:
    """Create the initial state of a new game.

    Args:
        params: A ``GameParameters`` instance or a plain mapping of parameters
        **overrides: Individual parameter values taking precedence over ``params``

    Returns:
        A chance-node state awaiting the first reveal

    Raises:
        ConfigurationError: If the parameters are invalid
    """
    if isinstance(params, GameParameters) and not overrides:
        resolved = params
    else:
        merged = {}
        if isinstance(params, GameParameters):
            merged.update(players=params.players, is_colored=params.is_colored, depth_limit=params.depth_limit)
        elif params:
            merged.update(params)
        merged.update(overrides)
        resolved = GameParameters.from_mapping(merged)

    state = empty_board(resolved)
    deal_hidden_layout(state)
    return state


__all__ = ["deal_hidden_layout", "new_game"]
