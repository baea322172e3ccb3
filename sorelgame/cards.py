"""Card model - ranks, suits, locations and the adjacency between cards.

A card is a small immutable value. Identity is the (rank, suit) pair: the
hidden flag and the location tag travel with the value but never take part in
equality, hashing or ordering.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import List, Optional, Tuple

from .config import NUM_RANKS
from .exceptions import InvariantViolation


class Suit(IntEnum):
    NONE = 0
    SPADES = 1
    HEARTS = 2
    CLUBS = 3
    DIAMONDS = 4
    HIDDEN = 5


class Rank(IntEnum):
    NONE = 0
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    HIDDEN = 14


class Location(Enum):
    DECK = "deck"
    WASTE = "waste"
    FOUNDATION = "foundation"
    TABLEAU = "tableau"
    MISSING = "missing"


class PileID(IntEnum):
    WASTE = 0
    SPADES = 1
    HEARTS = 2
    CLUBS = 3
    DIAMONDS = 4
    TABLEAU_1 = 5
    TABLEAU_2 = 6
    TABLEAU_3 = 7
    TABLEAU_4 = 8
    TABLEAU_5 = 9
    TABLEAU_6 = 10
    TABLEAU_7 = 11
    MISSING = 12


SUITS: Tuple[Suit, ...] = (Suit.SPADES, Suit.HEARTS, Suit.CLUBS, Suit.DIAMONDS)
RANKS: Tuple[Rank, ...] = tuple(Rank(value) for value in range(Rank.ACE, Rank.KING + 1))
TABLEAU_IDS: Tuple[PileID, ...] = tuple(PileID(value) for value in range(PileID.TABLEAU_1, PileID.TABLEAU_7 + 1))
SUIT_TO_PILE = {
    Suit.SPADES: PileID.SPADES,
    Suit.HEARTS: PileID.HEARTS,
    Suit.CLUBS: PileID.CLUBS,
    Suit.DIAMONDS: PileID.DIAMONDS,
}

# Indices for special cards.
HIDDEN_CARD_INDEX = 99
EMPTY_TABLEAU_INDEX = -1
EMPTY_FOUNDATION_INDEX = {
    Suit.SPADES: -5,
    Suit.HEARTS: -4,
    Suit.CLUBS: -3,
    Suit.DIAMONDS: -2,
}


def is_ordinary_rank(rank: Rank) -> bool:
    return Rank.ACE <= rank <= Rank.KING


def is_ordinary_suit(suit: Suit) -> bool:
    return Suit.SPADES <= suit <= Suit.DIAMONDS


def same_color_suits(suit: Suit) -> List[Suit]:
    """Return the suits sharing a colour with ``suit``.

    ``Suit.NONE`` (the empty tableau) answers every suit. Hidden suits have no
    colour and are rejected.
    """
    if suit in (Suit.SPADES, Suit.CLUBS):
        return [Suit.SPADES, Suit.CLUBS]
    if suit in (Suit.HEARTS, Suit.DIAMONDS):
        return [Suit.HEARTS, Suit.DIAMONDS]
    if suit == Suit.NONE:
        return list(SUITS)
    raise InvariantViolation(f"suit {suit.name} is not one of spades, hearts, clubs, diamonds")


def partner_suit(suit: Suit) -> Suit:
    """Return the other suit of the same colour (spades <-> clubs, hearts <-> diamonds)."""
    if not is_ordinary_suit(suit):
        raise InvariantViolation(f"suit {suit.name} has no partner suit")
    return Suit((suit + 1) % 4 + 1)


@dataclass(frozen=True, eq=False)
class Card:
    rank: Rank = Rank.HIDDEN
    suit: Suit = Suit.HIDDEN
    hidden: bool = False
    location: Location = Location.MISSING

    def __post_init__(self) -> None:
        rank_hidden = self.rank == Rank.HIDDEN
        suit_hidden = self.suit == Suit.HIDDEN
        if rank_hidden != suit_hidden:
            raise InvariantViolation(f"malformed card: rank {self.rank.name} with suit {self.suit.name}")
        if is_ordinary_rank(self.rank) and not is_ordinary_suit(self.suit):
            raise InvariantViolation(f"malformed card: rank {self.rank.name} with suit {self.suit.name}")

    # Identity -----------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.rank == other.rank and self.suit == other.suit

    def __hash__(self) -> int:
        return hash((int(self.rank), int(self.suit)))

    def __lt__(self, other: "Card") -> bool:
        return (self.suit, self.rank) < (other.suit, other.rank)

    def __repr__(self) -> str:
        flag = ", hidden" if self.hidden else ""
        return f"Card({self.rank.name}, {self.suit.name}{flag}, {self.location.name})"

    # Constructors -------------------------------------------------------

    @classmethod
    def hidden_card(cls, location: Location = Location.MISSING) -> "Card":
        return cls(Rank.HIDDEN, Suit.HIDDEN, hidden=True, location=location)

    @classmethod
    def empty_tableau(cls) -> "Card":
        return cls(Rank.NONE, Suit.NONE, location=Location.TABLEAU)

    @classmethod
    def empty_foundation(cls, suit: Suit) -> "Card":
        if not is_ordinary_suit(suit):
            raise InvariantViolation(f"empty foundation card needs a real suit, got {suit.name}")
        return cls(Rank.NONE, suit, location=Location.FOUNDATION)

    @classmethod
    def from_index(cls, index: int, location: Location = Location.MISSING) -> "Card":
        """Rebuild a card from its integer index (1..52 for ordinary cards)."""
        if index == HIDDEN_CARD_INDEX:
            return cls.hidden_card(location)
        if index == EMPTY_TABLEAU_INDEX:
            return cls(Rank.NONE, Suit.NONE, location=location)
        for suit, special in EMPTY_FOUNDATION_INDEX.items():
            if index == special:
                return cls(Rank.NONE, suit, location=location)
        if not 1 <= index <= 4 * NUM_RANKS:
            raise InvariantViolation(f"card index {index} does not name a card")
        rank = Rank(1 + (index - 1) % NUM_RANKS)
        suit = Suit(1 + (index - 1) // NUM_RANKS)
        return cls(rank, suit, location=location)

    # Properties ---------------------------------------------------------

    @property
    def index(self) -> int:
        if self.hidden or self.rank == Rank.HIDDEN:
            return HIDDEN_CARD_INDEX
        if self.rank == Rank.NONE:
            if self.suit == Suit.NONE:
                return EMPTY_TABLEAU_INDEX
            return EMPTY_FOUNDATION_INDEX[self.suit]
        return (self.suit - 1) * NUM_RANKS + int(self.rank)

    @property
    def is_ordinary(self) -> bool:
        return not self.hidden and is_ordinary_rank(self.rank)

    @property
    def is_empty_tableau(self) -> bool:
        return self.rank == Rank.NONE and self.suit == Suit.NONE

    @property
    def is_empty_foundation(self) -> bool:
        return self.rank == Rank.NONE and is_ordinary_suit(self.suit)

    @property
    def is_sentinel(self) -> bool:
        return self.rank == Rank.NONE

    def at(self, location: Location) -> "Card":
        """Return the same card tagged with another location."""
        return replace(self, location=location)

    def revealed_as(self, other: "Card") -> "Card":
        """Return this slot overwritten with the rank and suit of ``other``."""
        return replace(self, rank=other.rank, suit=other.suit, hidden=False)


def ordinary_cards() -> List[Card]:
    """All 52 ordinary cards in index order."""
    return [Card(rank, suit) for suit in SUITS for rank in RANKS]


def _tableau_children(card: Card) -> List[Card]:
    if card.is_empty_tableau:
        child_ranks = list(RANKS)
        child_suits = list(SUITS)
    elif card.rank == Rank.NONE:
        return []
    elif Rank.TWO <= card.rank <= Rank.KING:
        child_ranks = [Rank(card.rank - 1)]
        child_suits = same_color_suits(card.suit)
    elif card.rank == Rank.ACE:
        # Turn the corner: aces accept kings.
        child_ranks = [Rank.KING]
        child_suits = same_color_suits(card.suit)
    else:
        return []
    return [Card(rank, suit) for suit in child_suits for rank in child_ranks]


def _foundation_children(card: Card, foundation_rank: Rank) -> List[Card]:
    if foundation_rank in (Rank.NONE, Rank.HIDDEN):
        raise InvariantViolation(
            f"foundation rank must be a concrete rank to extend a foundation, got {foundation_rank.name}"
        )
    if card.is_empty_foundation:
        return [Card(foundation_rank, card.suit)]
    if Rank.ACE <= card.rank <= Rank.QUEEN:
        return [Card(Rank(card.rank + 1), card.suit)]
    if card.rank == Rank.KING:
        return [Card(Rank.ACE, card.suit)]
    return []


def legal_children(card: Card, foundation_rank: Optional[Rank] = None) -> List[Card]:
    """Return the cards that may legally be placed on top of ``card``.

    Without ``foundation_rank`` this is the tableau relation: foundation cards
    accept nothing. With ``foundation_rank`` foundation cards accept the next
    card of their suit, and tableau cards fall back to the tableau relation.
    """
    if card.hidden:
        return []
    if card.location == Location.TABLEAU:
        return _tableau_children(card)
    if card.location == Location.FOUNDATION and foundation_rank is not None:
        return _foundation_children(card, foundation_rank)
    return []


def is_legal_child(parent: Card, child: Card, foundation_rank: Optional[Rank] = None) -> bool:
    return child in legal_children(parent, foundation_rank)


__all__ = [
    "Suit",
    "Rank",
    "Location",
    "PileID",
    "Card",
    "SUITS",
    "RANKS",
    "TABLEAU_IDS",
    "SUIT_TO_PILE",
    "HIDDEN_CARD_INDEX",
    "same_color_suits",
    "partner_suit",
    "is_ordinary_rank",
    "is_ordinary_suit",
    "ordinary_cards",
    "legal_children",
    "is_legal_child",
]
