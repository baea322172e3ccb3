from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple, Union

try:  # pragma: no cover - dependency guard
    import numpy as np
except ImportError as exc:  # pragma: no cover - provide actionable message
    raise RuntimeError("sorelgame.rl.action_mask requires numpy to be installed") from exc

from ..cards import Card
from ..config import DEAL_ACTION, END_ACTION, MOVE_END, MOVE_START, NUM_DISTINCT_ACTIONS, REVEAL_END, REVEAL_START
from ..models import Action, ActType
from ..moves import action_to_move, move_to_action


def _normalize_key(action: Action) -> Tuple[int, int, int, int]:
    if action.typ == ActType.REVEAL and action.card is not None:
        return (int(action.typ), action.card.index, 0, 0)
    if action.typ == ActType.MOVE and action.move is not None:
        target, source = action.move
        return (int(action.typ), 0, target.index, source.index)
    return (int(action.typ), 0, 0, 0)


@dataclass
class ActionVocabulary:
    """Deterministic mapping between engine action ids and structured actions.

    Index ``i`` in the vocabulary is engine action id ``i``.
    """

    def __post_init__(self) -> None:
        self._index: Dict[Tuple[int, int, int, int], int] = {}
        self._actions: List[Action] = []
        self._build()

    def _add(self, action: Action) -> None:
        key = _normalize_key(action)
        if key in self._index:
            raise KeyError(f"Action {action} registered twice")
        self._index[key] = len(self._actions)
        self._actions.append(action)

    def _build(self) -> None:
        self._add(Action(ActType.END))
        for action_id in range(REVEAL_START, REVEAL_END + 1):
            self._add(Action(ActType.REVEAL, card=Card.from_index(action_id)))
        for action_id in range(MOVE_START, MOVE_END + 1):
            self._add(Action(ActType.MOVE, move=action_to_move(action_id)))
        self._add(Action(ActType.DEAL))

    def __len__(self) -> int:
        return len(self._actions)

    def action_for_index(self, index: int) -> Action:
        return self._actions[index]

    def index_for(self, action: Union[Action, int]) -> int:
        if isinstance(action, Action):
            key = _normalize_key(action)
            if key not in self._index:
                raise KeyError(f"Action {action} outside the action vocabulary")
            return self._index[key]
        index = int(action)
        if not 0 <= index < len(self._actions):
            raise KeyError(f"Action id {index} outside the action vocabulary (size {len(self._actions)})")
        return index


ACTION_VOCAB = ActionVocabulary()

if len(ACTION_VOCAB) != NUM_DISTINCT_ACTIONS:  # pragma: no cover - layout guard
    raise RuntimeError(f"action vocabulary holds {len(ACTION_VOCAB)} actions, expected {NUM_DISTINCT_ACTIONS}")


def action_id(action: Action) -> int:
    """Engine id of a structured action."""
    if action.typ == ActType.END:
        return END_ACTION
    if action.typ == ActType.DEAL:
        return DEAL_ACTION
    if action.typ == ActType.REVEAL and action.card is not None:
        return action.card.index
    if action.typ == ActType.MOVE and action.move is not None:
        return move_to_action(action.move)
    raise KeyError(f"Action {action} is missing its payload")


def legal_action_mask(actions: Iterable[Union[Action, int]], vocab: ActionVocabulary = ACTION_VOCAB) -> np.ndarray:
    mask = np.zeros(len(vocab), dtype=np.bool_)
    for action in actions:
        idx = vocab.index_for(action)
        mask[idx] = True
    return mask


def mask_for_state(state, vocab: ActionVocabulary = ACTION_VOCAB) -> np.ndarray:
    from ..engine import enumerate_legal_actions

    return legal_action_mask(enumerate_legal_actions(state), vocab=vocab)


__all__ = ["ActionVocabulary", "ACTION_VOCAB", "action_id", "legal_action_mask", "mask_for_state"]
