"""Pile model - the waste, the four foundations and the seven tableaus.

The set of pile kinds is closed, so a single ``Pile`` dataclass carries a
``kind`` tag and every kind-specific operation is looked up in
``PILE_BEHAVIOURS`` rather than spread across subclasses.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional

from .cards import SUIT_TO_PILE, Card, Location, PileID, Suit, is_legal_child, is_ordinary_suit
from .config import MAX_SIZE_FOUNDATION, MAX_SIZE_TABLEAU, MAX_SIZE_WASTE
from .exceptions import InvariantViolation


_CAPACITY = {
    Location.WASTE: MAX_SIZE_WASTE,
    Location.FOUNDATION: MAX_SIZE_FOUNDATION,
    Location.TABLEAU: MAX_SIZE_TABLEAU,
}


@dataclass
class Pile:
    kind: Location
    pile_id: PileID
    suit: Suit = Suit.NONE
    cards: List[Card] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.kind not in PILE_BEHAVIOURS:
            raise InvariantViolation(f"{self.kind.name} is not a pile kind")

    # Constructors -------------------------------------------------------

    @classmethod
    def waste(cls, cards: Optional[Iterable[Card]] = None) -> "Pile":
        pile = cls(Location.WASTE, PileID.WASTE)
        pile.extend(cards or [])
        return pile

    @classmethod
    def foundation(cls, suit: Suit, cards: Optional[Iterable[Card]] = None) -> "Pile":
        if not is_ordinary_suit(suit):
            raise InvariantViolation(f"foundations are built on a real suit, got {suit.name}")
        pile = cls(Location.FOUNDATION, SUIT_TO_PILE[suit], suit)
        pile.extend(cards or [])
        return pile

    @classmethod
    def tableau(cls, pile_id: PileID, cards: Optional[Iterable[Card]] = None) -> "Pile":
        if not PileID.TABLEAU_1 <= pile_id <= PileID.TABLEAU_7:
            raise InvariantViolation(f"{pile_id.name} is not a tableau id")
        pile = cls(Location.TABLEAU, pile_id)
        pile.extend(cards or [])
        return pile

    # Accessors ----------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return not self.cards

    @property
    def capacity(self) -> int:
        return _CAPACITY[self.kind]

    @property
    def first_card(self) -> Card:
        if not self.cards:
            raise InvariantViolation(f"{self.pile_id.name} is empty and has no first card")
        return self.cards[0]

    @property
    def last_card(self) -> Card:
        if not self.cards:
            raise InvariantViolation(f"{self.pile_id.name} is empty and has no last card")
        return self.cards[-1]

    def has_hidden(self) -> bool:
        return any(card.hidden for card in self.cards)

    def position_of(self, card: Card) -> int:
        """Return the position of ``card`` counted from the bottom, or -1."""
        for idx, candidate in enumerate(self.cards):
            if not candidate.hidden and candidate == card:
                return idx
        return -1

    def __len__(self) -> int:
        return len(self.cards)

    # Behaviour ----------------------------------------------------------

    def targets(self) -> List[Card]:
        return PILE_BEHAVIOURS[self.kind].targets(self)

    def sources(self) -> List[Card]:
        return PILE_BEHAVIOURS[self.kind].sources(self)

    def split(self, card: Card) -> List[Card]:
        return PILE_BEHAVIOURS[self.kind].split(self, card)

    def reveal(self, card: Card) -> None:
        PILE_BEHAVIOURS[self.kind].reveal(self, card)

    def extend(self, cards: Iterable[Card]) -> None:
        for card in cards:
            self.cards.append(card.at(self.kind))

    def pop(self) -> Card:
        """Remove and return the top card."""
        if not self.cards:
            raise InvariantViolation(f"cannot take a card from empty pile {self.pile_id.name}")
        return self.cards.pop()


class PileBehaviour(NamedTuple):
    targets: Callable[[Pile], List[Card]]
    sources: Callable[[Pile], List[Card]]
    split: Callable[[Pile, Card], List[Card]]
    reveal: Callable[[Pile, Card], None]


# Targets --------------------------------------------------------------------


def _no_targets(pile: Pile) -> List[Card]:
    return []


def _foundation_targets(pile: Pile) -> List[Card]:
    if pile.cards:
        return [pile.cards[-1]]
    return [Card.empty_foundation(pile.suit)]


def _tableau_targets(pile: Pile) -> List[Card]:
    if not pile.cards:
        return [Card.empty_tableau()]
    top = pile.cards[-1]
    if top.hidden:
        return []
    return [top]


# Sources --------------------------------------------------------------------


def _foundation_sources(pile: Pile) -> List[Card]:
    if pile.cards:
        return [pile.cards[-1]]
    return []


def _tableau_sources(pile: Pile) -> List[Card]:
    sources: List[Card] = []
    above: Optional[Card] = None
    for card in reversed(pile.cards):
        if card.hidden:
            break
        if above is not None and not is_legal_child(card, above):
            break
        sources.append(card)
        above = card
    return sources


def _waste_sources(pile: Pile) -> List[Card]:
    sources: List[Card] = []
    for card in pile.cards:
        if card.hidden:
            break
        sources.append(card)
    return sources


# Split ----------------------------------------------------------------------


def _foundation_split(pile: Pile, card: Card) -> List[Card]:
    if pile.cards and pile.cards[-1] == card:
        return [pile.cards.pop()]
    return []


def _tableau_split(pile: Pile, card: Card) -> List[Card]:
    start = pile.position_of(card)
    if start < 0:
        return []
    run = pile.cards[start:]
    del pile.cards[start:]
    return run


def _waste_split(pile: Pile, card: Card) -> List[Card]:
    start = pile.position_of(card)
    if start < 0:
        return []
    return [pile.cards.pop(start)]


# Reveal ---------------------------------------------------------------------


def _reveal_first_hidden(pile: Pile, card: Card) -> None:
    if not card.is_ordinary:
        raise InvariantViolation(f"only ordinary cards can be revealed, got {card!r}")
    for idx, slot in enumerate(pile.cards):
        if slot.hidden:
            pile.cards[idx] = slot.revealed_as(card)
            return
    raise InvariantViolation(f"{pile.pile_id.name} has no hidden card to reveal")


def _foundation_reveal(pile: Pile, card: Card) -> None:
    raise InvariantViolation("foundations never hold hidden cards and cannot reveal")


PILE_BEHAVIOURS: Dict[Location, PileBehaviour] = {
    Location.WASTE: PileBehaviour(_no_targets, _waste_sources, _waste_split, _reveal_first_hidden),
    Location.FOUNDATION: PileBehaviour(_foundation_targets, _foundation_sources, _foundation_split, _foundation_reveal),
    Location.TABLEAU: PileBehaviour(_tableau_targets, _tableau_sources, _tableau_split, _reveal_first_hidden),
}


__all__ = ["Pile", "PileBehaviour", "PILE_BEHAVIOURS"]
