from __future__ import annotations

"""
Reinforcement-learning utilities for sorelgame.

Modules exposed:
    env                  - Gymnasium environment wrapper around the engine.
    encoding             - Observation tensor encoding.
    action_mask          - Action vocabulary and legal action masking helpers.
    observation_builder  - Builder for constructing observation spaces.
"""

from .action_mask import ACTION_VOCAB, ActionVocabulary, action_id, legal_action_mask, mask_for_state
from .encoding import EncoderConfig, encode_observation, observation_segments
from .env import SorelEnv, SorelEnvState
from .observation_builder import ObservationSpaceBuilder, build_sorel_observation_space

__all__ = [
    "ACTION_VOCAB",
    "ActionVocabulary",
    "EncoderConfig",
    "SorelEnv",
    "SorelEnvState",
    "action_id",
    "encode_observation",
    "legal_action_mask",
    "mask_for_state",
    "observation_segments",
    "ObservationSpaceBuilder",
    "build_sorel_observation_space",
]
