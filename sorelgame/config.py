from __future__ import annotations

# Default game parameters.
DEFAULT_PLAYERS = 1
DEFAULT_DEPTH_LIMIT = 150
DEFAULT_IS_COLORED = False   # Toggle ANSI colours in rendered strings.

# Initial deal.
NUM_TABLEAUS = 7
INITIAL_WASTE_SIZE = 23
NUM_RANKS = 13
NUM_CARDS = 52

# Capacity hints per pile kind (never enforced).
MAX_SIZE_WASTE = 23
MAX_SIZE_FOUNDATION = 13
MAX_SIZE_TABLEAU = 26

# Action id bands.
END_ACTION = 0
REVEAL_START = 1
REVEAL_END = 52
MOVE_START = 53
MOVE_END = 365
DEAL_ACTION = 366
NUM_DISTINCT_ACTIONS = 367
MAX_CHANCE_OUTCOMES = REVEAL_END + 1

# Player ids used by the host driver.
PLAYER_ID = 0
CHANCE_PLAYER_ID = -1
TERMINAL_PLAYER_ID = -4

# Reward constants
WASTE_MOVE_BONUS = 20.0
REVEAL_BONUS = 20.0
MIN_UTILITY = 0.0
MAX_UTILITY = 2680.0         # 23 * 20 from the waste + 4 * 580 - 100 for the foundations.

# Observation tensor layout
FOUNDATION_TENSOR_LENGTH = 14    # empty + 13 ranks
TABLEAU_TENSOR_LENGTH = 53       # empty + 52 ordinary cards
WASTE_TENSOR_LENGTH = 53         # hidden + 52 ordinary cards
OBSERVATION_TENSOR_SIZE = (
    4 * FOUNDATION_TENSOR_LENGTH
    + NUM_TABLEAUS * TABLEAU_TENSOR_LENGTH
    + INITIAL_WASTE_SIZE * WASTE_TENSOR_LENGTH
    + 1
)
