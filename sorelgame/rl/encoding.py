from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

try:  # pragma: no cover - dependency guard
    import numpy as np
except ImportError as exc:  # pragma: no cover
    raise RuntimeError("sorelgame.rl.encoding requires numpy to be installed") from exc

from ..cards import Rank
from ..config import (
    FOUNDATION_TENSOR_LENGTH,
    INITIAL_WASTE_SIZE,
    NUM_RANKS,
    NUM_TABLEAUS,
    OBSERVATION_TENSOR_SIZE,
    TABLEAU_TENSOR_LENGTH,
    WASTE_TENSOR_LENGTH,
)
from ..exceptions import InvariantViolation
from ..models import GameState


@dataclass(frozen=True)
class EncoderConfig:
    num_foundations: int = 4
    foundation_length: int = FOUNDATION_TENSOR_LENGTH
    num_tableaus: int = NUM_TABLEAUS
    tableau_length: int = TABLEAU_TENSOR_LENGTH
    waste_slots: int = INITIAL_WASTE_SIZE
    waste_length: int = WASTE_TENSOR_LENGTH

    @property
    def size(self) -> int:
        return (
            self.num_foundations * self.foundation_length
            + self.num_tableaus * self.tableau_length
            + self.waste_slots * self.waste_length
            + 1
        )


DEFAULT_ENCODER_CONFIG = EncoderConfig()

if DEFAULT_ENCODER_CONFIG.size != OBSERVATION_TENSOR_SIZE:  # pragma: no cover - layout guard
    raise InvariantViolation(
        f"observation layout covers {DEFAULT_ENCODER_CONFIG.size} values, expected {OBSERVATION_TENSOR_SIZE}"
    )


def observation_segments(config: EncoderConfig = DEFAULT_ENCODER_CONFIG) -> Dict[str, slice]:
    """Name the contiguous regions of the flat observation vector."""
    foundations_end = config.num_foundations * config.foundation_length
    tableaus_end = foundations_end + config.num_tableaus * config.tableau_length
    waste_end = tableaus_end + config.waste_slots * config.waste_length
    return {
        "foundations": slice(0, foundations_end),
        "tableaus": slice(foundations_end, tableaus_end),
        "waste": slice(tableaus_end, waste_end),
        "foundation_rank": slice(waste_end, waste_end + 1),
    }


def encode_observation(state: GameState, config: EncoderConfig = DEFAULT_ENCODER_CONFIG) -> np.ndarray:
    """Encode the board as a flat float32 vector.

    Foundations are one-hot over the rank of their top card (slot 0 marks an
    empty foundation). Tableaus are multi-hot over the card indices they hold
    (slot 0 marks an empty tableau). Hidden tableau cards are not encoded, so
    a tableau holding only hidden cards is an all-zero row: distinct from an
    empty tableau but carrying no count of its face-down cards. Each waste
    position is one-hot over the card index (slot 0 marks a hidden card), and
    positions past the end of the waste stay zero. The last value is the
    foundation rank scaled to [0, 1].
    """
    segments = observation_segments(config)

    foundations = np.zeros((config.num_foundations, config.foundation_length), dtype=np.float32)
    for row, foundation in enumerate(state.foundations):
        if foundation.is_empty:
            foundations[row, 0] = 1.0
        else:
            foundations[row, int(foundation.last_card.rank)] = 1.0

    tableaus = np.zeros((config.num_tableaus, config.tableau_length), dtype=np.float32)
    for row, tableau in enumerate(state.tableaus):
        if tableau.is_empty:
            tableaus[row, 0] = 1.0
            continue
        for card in tableau.cards:
            if not card.hidden:
                tableaus[row, card.index] = 1.0

    waste = np.zeros((config.waste_slots, config.waste_length), dtype=np.float32)
    for row, card in enumerate(state.waste.cards[: config.waste_slots]):
        waste[row, 0 if card.hidden else card.index] = 1.0

    rank = 0.0 if state.foundation_rank in (Rank.NONE, Rank.HIDDEN) else int(state.foundation_rank) / NUM_RANKS

    vector = np.zeros(config.size, dtype=np.float32)
    vector[segments["foundations"]] = foundations.reshape(-1)
    vector[segments["tableaus"]] = tableaus.reshape(-1)
    vector[segments["waste"]] = waste.reshape(-1)
    vector[segments["foundation_rank"]] = rank
    return vector


__all__ = ["EncoderConfig", "DEFAULT_ENCODER_CONFIG", "observation_segments", "encode_observation"]
