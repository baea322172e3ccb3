"""Observation space builder for RL environments.

This module provides a builder class for constructing observation spaces
from named components instead of hard-coded dimensions.
"""
from __future__ import annotations

from typing import Dict

try:  # pragma: no cover - dependency guard
    import numpy as np
    from gymnasium import spaces
except ImportError as exc:  # pragma: no cover
    raise RuntimeError("sorelgame.rl.observation_builder requires numpy and gymnasium to be installed") from exc

from ..config import NUM_DISTINCT_ACTIONS, OBSERVATION_TENSOR_SIZE


class ObservationSpaceBuilder:
    """Builder for constructing RL observation spaces.

    Example:
        space = (ObservationSpaceBuilder()
            .add_vector("board", dim=1647)
            .add_mask("legal_action_mask", dim=367)
            .build())
    """

    def __init__(self):
        self._spaces: Dict[str, spaces.Space] = {}

    def add_vector(
        self,
        name: str,
        dim: int,
        low: float = 0,
        high: float = 1,
    ) -> "ObservationSpaceBuilder":
        """Add a fixed-size float vector.

        Args:
            name: Name of the observation
            dim: Dimension of the vector
            low: Minimum value for elements
            high: Maximum value for elements

        Returns:
            Self for method chaining
        """
        self._spaces[name] = spaces.Box(low=low, high=high, shape=(dim,), dtype=np.float32)
        return self

    def add_mask(self, name: str, dim: int) -> "ObservationSpaceBuilder":
        """Add a boolean mask (e.g. over the action vocabulary)."""
        self._spaces[name] = spaces.MultiBinary(dim)
        return self

    def build(self) -> spaces.Dict:
        """Build the final observation space.

        Raises:
            ValueError: If no observations have been added
        """
        if not self._spaces:
            raise ValueError("Cannot build empty observation space")
        return spaces.Dict(self._spaces)


def build_sorel_observation_space(
    board_dim: int = OBSERVATION_TENSOR_SIZE,
    num_actions: int = NUM_DISTINCT_ACTIONS,
) -> spaces.Dict:
    """Observation space used by ``SorelEnv``: the encoded board plus the legal action mask."""
    return (
        ObservationSpaceBuilder()
        .add_vector("board", dim=board_dim)
        .add_mask("legal_action_mask", dim=num_actions)
        .build()
    )


__all__ = [
    "ObservationSpaceBuilder",
    "build_sorel_observation_space",
]
