from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Iterator, List, Mapping, NamedTuple, Optional, Set

from .cards import SUIT_TO_PILE, TABLEAU_IDS, Card, Location, PileID, Rank, Suit
from .config import (
    CHANCE_PLAYER_ID,
    DEAL_ACTION,
    DEFAULT_DEPTH_LIMIT,
    DEFAULT_IS_COLORED,
    DEFAULT_PLAYERS,
    END_ACTION,
    MOVE_END,
    MOVE_START,
    PLAYER_ID,
    REVEAL_END,
    REVEAL_START,
    TERMINAL_PLAYER_ID,
)
from .exceptions import ConfigurationError, EncodingError, InvalidPlayerError, InvariantViolation
from .moves import Move
from .piles import Pile

_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off"}


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class GameParameters:
    players: int = DEFAULT_PLAYERS
    is_colored: bool = DEFAULT_IS_COLORED
    depth_limit: int = DEFAULT_DEPTH_LIMIT

    def __post_init__(self) -> None:
        if self.players != 1:
            raise ConfigurationError(f"agnes sorel is a one player game, got players={self.players}")
        if self.depth_limit < 1:
            raise ConfigurationError(f"depth_limit must be positive, got {self.depth_limit}")

    @classmethod
    def from_mapping(cls, params: Optional[Mapping[str, Any]] = None) -> "GameParameters":
        params = dict(params or {})
        unknown = set(params) - {"players", "is_colored", "depth_limit"}
        if unknown:
            raise ConfigurationError(f"unknown game parameters: {', '.join(sorted(unknown))}")
        return cls(
            players=int(params.get("players", DEFAULT_PLAYERS)),
            is_colored=_parse_bool("is_colored", params.get("is_colored", DEFAULT_IS_COLORED)),
            depth_limit=int(params.get("depth_limit", DEFAULT_DEPTH_LIMIT)),
        )


class ActType(IntEnum):
    END = 0
    REVEAL = 1
    MOVE = 2
    DEAL = 3


class Action(NamedTuple):
    typ: ActType
    card: Optional[Card] = None
    move: Optional[Move] = None


def action_type(action: int) -> ActType:
    """Classify an action id into its band."""
    if action == END_ACTION:
        return ActType.END
    if REVEAL_START <= action <= REVEAL_END:
        return ActType.REVEAL
    if MOVE_START <= action <= MOVE_END:
        return ActType.MOVE
    if action == DEAL_ACTION:
        return ActType.DEAL
    raise EncodingError(f"action {action} is outside every action band")


def check_player(player: int) -> None:
    if player != PLAYER_ID:
        raise InvalidPlayerError(f"player must be {PLAYER_ID}, got {player}")


@dataclass
class GameState:
    waste: Pile
    foundations: List[Pile]
    tableaus: List[Pile]
    params: GameParameters = field(default_factory=GameParameters)
    card_index: Dict[Card, PileID] = field(default_factory=dict)
    revealed_cards: List[int] = field(default_factory=list)
    foundation_rank: Rank = Rank.NONE
    foundation_card: Optional[Card] = None
    is_reversible: bool = False
    previous_states: Set[int] = field(default_factory=set)
    current_returns: float = 0.0
    current_rewards: float = 0.0
    current_depth: int = 0
    is_finished: bool = False
    history: List[int] = field(default_factory=list)

    def copy(self) -> "GameState":
        return copy.deepcopy(self)

    # Classification -----------------------------------------------------

    @property
    def is_known_foundation(self) -> bool:
        return self.foundation_rank != Rank.NONE

    def is_terminal(self) -> bool:
        return self.is_finished

    def is_chance_node(self) -> bool:
        if any(tableau.has_hidden() for tableau in self.tableaus):
            return True
        return not self.is_known_foundation

    def current_player(self) -> int:
        if self.is_terminal():
            return TERMINAL_PLAYER_ID
        if self.is_chance_node():
            return CHANCE_PLAYER_ID
        return PLAYER_ID

    def returns(self) -> List[float]:
        return [self.current_returns]

    def rewards(self) -> List[float]:
        return [self.current_rewards]

    # Pile lookup --------------------------------------------------------

    def piles(self) -> Iterator[Pile]:
        yield self.waste
        yield from self.foundations
        yield from self.tableaus

    def pile_by_id(self, pile_id: PileID) -> Pile:
        if pile_id == PileID.WASTE:
            return self.waste
        if PileID.SPADES <= pile_id <= PileID.DIAMONDS:
            return self.foundations[pile_id - PileID.SPADES]
        if PileID.TABLEAU_1 <= pile_id <= PileID.TABLEAU_7:
            return self.tableaus[pile_id - PileID.TABLEAU_1]
        raise InvariantViolation(f"no pile has id {pile_id!r}")

    def foundation_for(self, suit: Suit) -> Pile:
        return self.pile_by_id(SUIT_TO_PILE[suit])

    def get_pile(self, card: Card) -> Pile:
        """Return the pile a card currently sits in (sentinels resolve to their empty pile)."""
        if card.rank == Rank.HIDDEN or card.suit == Suit.HIDDEN:
            raise InvariantViolation("hidden cards have no known pile")
        if card.is_empty_tableau:
            for tableau in self.tableaus:
                if tableau.is_empty:
                    return tableau
            raise InvariantViolation("no empty tableau holds the empty tableau card")
        if card.is_empty_foundation:
            return self.foundation_for(card.suit)
        try:
            pile_id = self.card_index[card]
        except KeyError:
            raise InvariantViolation(f"{card!r} is not in the location index") from None
        return self.pile_by_id(pile_id)

    def locate(self, card: Card) -> Card:
        """Return ``card`` tagged with the kind of pile it currently sits in."""
        return card.at(self.get_pile(card).kind)

    def record_location(self, card: Card, pile: Pile) -> None:
        if card.hidden:
            return
        self.card_index[card] = pile.pile_id

    def validate_index(self) -> None:
        """Check that every visible card sits in exactly the pile the index names."""
        seen: Dict[Card, PileID] = {}
        for pile in self.piles():
            for card in pile.cards:
                if card.hidden:
                    continue
                if card.is_sentinel:
                    raise InvariantViolation(f"sentinel {card!r} stored in {pile.pile_id.name}")
                if card in seen:
                    raise InvariantViolation(f"{card!r} appears in both {seen[card].name} and {pile.pile_id.name}")
                if card.location != pile.kind:
                    raise InvariantViolation(f"{card!r} is tagged {card.location.name} inside {pile.pile_id.name}")
                seen[card] = pile.pile_id
        if seen != self.card_index:
            raise InvariantViolation("location index disagrees with pile contents")

    # Targets and sources ------------------------------------------------

    def targets(self, location: Optional[Location] = None) -> List[Card]:
        targets: List[Card] = []
        if location in (None, Location.TABLEAU):
            for tableau in self.tableaus:
                targets.extend(tableau.targets())
        if location in (None, Location.FOUNDATION):
            for foundation in self.foundations:
                targets.extend(foundation.targets())
        return targets

    def sources(self, location: Optional[Location] = None) -> List[Card]:
        sources: List[Card] = []
        if location in (None, Location.TABLEAU):
            for tableau in self.tableaus:
                sources.extend(tableau.sources())
        if location in (None, Location.FOUNDATION):
            for foundation in self.foundations:
                sources.extend(foundation.sources())
        if location in (None, Location.WASTE):
            sources.extend(self.waste.sources())
        return sources


def empty_board(params: Optional[GameParameters] = None) -> GameState:
    """Build a state with every pile empty."""
    return GameState(
        waste=Pile.waste(),
        foundations=[Pile.foundation(suit) for suit in SUIT_TO_PILE],
        tableaus=[Pile.tableau(pile_id) for pile_id in TABLEAU_IDS],
        params=params or GameParameters(),
    )


__all__ = [
    "GameParameters",
    "ActType",
    "Action",
    "action_type",
    "check_player",
    "GameState",
    "empty_board",
]
