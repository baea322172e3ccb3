from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

try:  # pragma: no cover - dependency guard
    import numpy as np
except ImportError as exc:  # pragma: no cover
    raise RuntimeError("sorelgame.rl.env requires numpy to be installed") from exc

try:  # pragma: no cover - optional dependency
    import gymnasium as gym
    from gymnasium import spaces
except ImportError as exc:  # pragma: no cover
    raise RuntimeError("sorelgame.rl.env requires gymnasium to be installed") from exc

from ..engine import apply_action, chance_outcomes, enumerate_legal_actions, new_game
from ..exceptions import InvalidActionError
from ..models import Action, GameParameters, GameState
from ..pretty import state_to_string
from .action_mask import ACTION_VOCAB, ActionVocabulary, action_id, legal_action_mask
from .encoding import EncoderConfig, encode_observation
from .observation_builder import build_sorel_observation_space

logger = logging.getLogger(__name__)


@dataclass
class SorelEnvState:
    """Serializable snapshot of the environment."""

    state: GameState
    seed: int
    rng_state: Any
    step_count: int = 0


class SorelEnv(gym.Env):
    """Gymnasium wrapper exposing only the player's decisions.

    Chance nodes (card reveals) are resolved inside the environment by sampling
    uniformly from the unrevealed cards with a seeded RNG, so every observation
    handed to the agent is a decision node or the end of the episode.
    """

    metadata = {"render_modes": ["ansi"]}

    def __init__(
        self,
        *,
        params: Optional[GameParameters] = None,
        encoder_config: Optional[EncoderConfig] = None,
        action_vocab: Optional[ActionVocabulary] = None,
        max_episode_steps: Optional[int] = None,
        truncation_penalty: float = 0.0,
        seed: Optional[int] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.params = params or GameParameters()
        self.encoder_config = encoder_config or EncoderConfig()
        self.action_vocab = action_vocab or ACTION_VOCAB
        self.max_episode_steps = max_episode_steps
        self.truncation_penalty = truncation_penalty
        self.render_mode = render_mode
        self._rng = random.Random(seed)
        self._seed = seed if seed is not None else self._rng.randrange(1, 1 << 30)
        self._state: Optional[GameState] = None
        self._done = False
        self._step_count = 0

        self.action_space = spaces.Discrete(len(self.action_vocab))
        self.observation_space = build_sorel_observation_space(
            board_dim=self.encoder_config.size,
            num_actions=len(self.action_vocab),
        )

    @property
    def state(self) -> GameState:
        if self._state is None:
            raise RuntimeError("Environment has not been reset yet.")
        return self._state

    def _resolve_chance(self) -> List[int]:
        """Sample reveals until the state is a decision node or terminal."""
        revealed: List[int] = []
        while not self.state.is_terminal() and self.state.is_chance_node():
            outcomes = chance_outcomes(self.state)
            action = self._rng.choice([outcome for outcome, _ in outcomes])
            self._state, _, _ = apply_action(self.state, action)
            revealed.append(action)
        return revealed

    def _observation(self, mask: np.ndarray) -> Dict[str, np.ndarray]:
        return {
            "board": encode_observation(self.state, config=self.encoder_config),
            "legal_action_mask": mask.astype(np.int8),
        }

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        if options is not None:
            seed = options.get("seed", seed)
        if seed is not None:
            self._rng = random.Random(seed)
            self._seed = seed

        self._state = new_game(self.params)
        self._done = False
        self._step_count = 0
        revealed = self._resolve_chance()
        actions = self.legal_actions()
        mask = legal_action_mask(actions, self.action_vocab)
        info = {
            "legal_actions": actions,
            "legal_action_mask": mask,
            "revealed": revealed,
            "seed": self._seed,
            "events": {},
            "reset": True,
        }
        return self._observation(mask), info

    def legal_actions(self) -> List[int]:
        return list(enumerate_legal_actions(self.state))

    @property
    def legal_action_mask(self) -> np.ndarray:
        return legal_action_mask(self.legal_actions(), self.action_vocab)

    def action_masks(self) -> np.ndarray:
        """Return action mask for masked policy sampling."""
        return self.legal_action_mask

    def _resolve_action(self, action: Union[int, Action]) -> int:
        if isinstance(action, Action):
            return action_id(action)
        if isinstance(action, (int, np.integer)):
            return int(action)
        raise TypeError(f"Unsupported action type: {type(action)!r}")

    def step(
        self,
        action: Union[int, Action],
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        if self._done:
            raise RuntimeError("Cannot call step() once the episode has finished. Call reset().")

        resolved = self._resolve_action(action)
        if resolved not in self.legal_actions():
            raise InvalidActionError(f"Illegal action attempted: {resolved!r}")
        next_state, done, events = apply_action(self.state, resolved)
        self._state = next_state
        self._step_count += 1
        reward = next_state.rewards()[0]
        revealed = self._resolve_chance()
        done = self.state.is_terminal()

        truncated = (
            not done
            and self.max_episode_steps is not None
            and self._step_count >= self.max_episode_steps
        )
        if truncated:
            logger.warning(
                "episode truncated after %d steps (seed=%s, return=%.1f)",
                self._step_count,
                self._seed,
                self.state.returns()[0],
            )
            reward += self.truncation_penalty
        self._done = done or truncated

        next_actions = self.legal_actions() if not self._done else []
        mask = (
            legal_action_mask(next_actions, self.action_vocab)
            if not self._done
            else np.zeros(len(self.action_vocab), dtype=np.bool_)
        )
        info = {
            "legal_actions": next_actions,
            "legal_action_mask": mask,
            "events": events,
            "revealed": revealed,
            "return": self.state.returns()[0],
            "step_count": self._step_count,
            "seed": self._seed,
            "truncated": truncated,
        }
        return self._observation(mask), float(reward), done, truncated, info

    def get_env_state(self) -> SorelEnvState:
        return SorelEnvState(
            state=self.state.copy(),
            seed=self._seed,
            rng_state=self._rng.getstate(),
            step_count=self._step_count,
        )

    def restore(self, env_state: SorelEnvState) -> None:
        self._state = env_state.state.copy()
        self._seed = env_state.seed
        self._rng.setstate(env_state.rng_state)
        self._step_count = env_state.step_count
        self._done = self._state.is_terminal()

    def render(self) -> Optional[str]:
        if self.render_mode == "ansi":
            return state_to_string(self.state)
        return None

    def close(self) -> None:
        pass


__all__ = ["SorelEnv", "SorelEnvState"]
