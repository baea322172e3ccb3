"""Move codec - a bijection between (target, source) moves and action ids.

Move ids are split into contiguous bands, one per ``MoveCategory``. Inside a
band a move is identified by a single *key card*: the source card for every
category except the hidden-waste categories, where the source is unknown and
the target card is used instead. The key card is packed as
``(suit - 1) * stride + (rank - first_rank)``.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Tuple

from .cards import (
    Card,
    Rank,
    Suit,
    is_ordinary_rank,
    is_ordinary_suit,
    partner_suit,
)
from .config import MOVE_END, MOVE_START
from .exceptions import EncodingError


class Move(NamedTuple):
    """Relocate the run starting at ``source`` onto ``target``'s pile."""

    target: Card
    source: Card


class MoveCategory(Enum):
    TO_EMPTY_FOUNDATION = "to_empty_foundation"
    ONTO_FOUNDATION = "onto_foundation"
    ACE_ONTO_KING_FOUNDATION = "ace_onto_king_foundation"
    ONTO_SAME_SUIT = "onto_same_suit"
    KING_ONTO_ACE_SAME_SUIT = "king_onto_ace_same_suit"
    ONTO_PARTNER_SUIT = "onto_partner_suit"
    KING_ONTO_ACE_PARTNER_SUIT = "king_onto_ace_partner_suit"
    TO_EMPTY_TABLEAU = "to_empty_tableau"
    HIDDEN_ONTO_TABLEAU = "hidden_onto_tableau"
    HIDDEN_TO_EMPTY_TABLEAU = "hidden_to_empty_tableau"


class MoveBand(NamedTuple):
    category: MoveCategory
    base: int           # first id of the band, relative to MOVE_START
    stride: int         # ids per suit
    first_rank: Rank    # lowest key rank in the band
    size: int

    def contains(self, relative: int) -> bool:
        return self.base <= relative < self.base + self.size


class MoveFields(NamedTuple):
    category: MoveCategory
    key_rank: Rank = Rank.NONE
    key_suit: Suit = Suit.NONE


# (category, ids per suit, first key rank, number of suits)
_BAND_LAYOUT: Tuple[Tuple[MoveCategory, int, Rank, int], ...] = (
    (MoveCategory.TO_EMPTY_FOUNDATION, 13, Rank.ACE, 4),
    (MoveCategory.ONTO_FOUNDATION, 12, Rank.TWO, 4),
    (MoveCategory.ACE_ONTO_KING_FOUNDATION, 1, Rank.ACE, 4),
    (MoveCategory.ONTO_SAME_SUIT, 12, Rank.ACE, 4),
    (MoveCategory.KING_ONTO_ACE_SAME_SUIT, 1, Rank.KING, 4),
    (MoveCategory.ONTO_PARTNER_SUIT, 12, Rank.ACE, 4),
    (MoveCategory.KING_ONTO_ACE_PARTNER_SUIT, 1, Rank.KING, 4),
    (MoveCategory.TO_EMPTY_TABLEAU, 13, Rank.ACE, 4),
    (MoveCategory.HIDDEN_ONTO_TABLEAU, 13, Rank.ACE, 4),
    (MoveCategory.HIDDEN_TO_EMPTY_TABLEAU, 1, Rank.NONE, 1),
)


def _build_bands() -> Tuple[MoveBand, ...]:
    bands: List[MoveBand] = []
    base = 0
    for category, stride, first_rank, suits in _BAND_LAYOUT:
        size = stride * suits
        bands.append(MoveBand(category, base, stride, first_rank, size))
        base += size
    if MOVE_START + base - 1 != MOVE_END:
        raise EncodingError(f"move bands cover {base} ids but the move range holds {MOVE_END - MOVE_START + 1}")
    return tuple(bands)


MOVE_BANDS: Tuple[MoveBand, ...] = _build_bands()
BAND_BY_CATEGORY: Dict[MoveCategory, MoveBand] = {band.category: band for band in MOVE_BANDS}
NUM_MOVE_ACTIONS = sum(band.size for band in MOVE_BANDS)


def _is_ordinary(card: Card) -> bool:
    return is_ordinary_rank(card.rank) and is_ordinary_suit(card.suit)


def _is_unknown(card: Card) -> bool:
    return card.rank == Rank.HIDDEN and card.suit == Suit.HIDDEN


def classify_move(move: Move) -> MoveFields:
    """Map a structured move onto its category and key card."""
    target, source = move
    if _is_unknown(source):
        if target.is_empty_tableau:
            return MoveFields(MoveCategory.HIDDEN_TO_EMPTY_TABLEAU)
        if _is_ordinary(target):
            return MoveFields(MoveCategory.HIDDEN_ONTO_TABLEAU, target.rank, target.suit)
        raise EncodingError(f"hidden source cannot move onto {target!r}")
    if not _is_ordinary(source):
        raise EncodingError(f"move source {source!r} is neither an ordinary nor a hidden card")

    if target.is_empty_tableau:
        return MoveFields(MoveCategory.TO_EMPTY_TABLEAU, source.rank, source.suit)
    if target.is_empty_foundation:
        if target.suit != source.suit:
            raise EncodingError(f"{source!r} cannot start the {target.suit.name} foundation")
        return MoveFields(MoveCategory.TO_EMPTY_FOUNDATION, source.rank, source.suit)
    if not _is_ordinary(target):
        raise EncodingError(f"move target {target!r} is not a card a move can land on")

    key = (source.rank, source.suit)
    if target.suit == partner_suit(source.suit):
        if source.rank == Rank.KING and target.rank == Rank.ACE:
            return MoveFields(MoveCategory.KING_ONTO_ACE_PARTNER_SUIT, *key)
        if target.rank - source.rank == 1:
            return MoveFields(MoveCategory.ONTO_PARTNER_SUIT, *key)
    elif target.suit == source.suit:
        if source.rank == Rank.KING and target.rank == Rank.ACE:
            return MoveFields(MoveCategory.KING_ONTO_ACE_SAME_SUIT, *key)
        if target.rank - source.rank == 1:
            return MoveFields(MoveCategory.ONTO_SAME_SUIT, *key)
        if source.rank == Rank.ACE and target.rank == Rank.KING:
            return MoveFields(MoveCategory.ACE_ONTO_KING_FOUNDATION, *key)
        if source.rank - target.rank == 1:
            return MoveFields(MoveCategory.ONTO_FOUNDATION, *key)
    raise EncodingError(f"move {target!r} <- {source!r} matches no move category")


def fields_to_move(fields: MoveFields) -> Move:
    """Rebuild the structured move described by ``fields``."""
    category, rank, suit = fields
    if category == MoveCategory.HIDDEN_TO_EMPTY_TABLEAU:
        return Move(Card(Rank.NONE, Suit.NONE), Card(Rank.HIDDEN, Suit.HIDDEN))
    if category == MoveCategory.HIDDEN_ONTO_TABLEAU:
        return Move(Card(rank, suit), Card(Rank.HIDDEN, Suit.HIDDEN))

    source = Card(rank, suit)
    if category == MoveCategory.TO_EMPTY_FOUNDATION:
        target = Card(Rank.NONE, suit)
    elif category == MoveCategory.ONTO_FOUNDATION:
        target = Card(Rank(rank - 1), suit)
    elif category == MoveCategory.ACE_ONTO_KING_FOUNDATION:
        target = Card(Rank.KING, suit)
    elif category == MoveCategory.ONTO_SAME_SUIT:
        target = Card(Rank(rank + 1), suit)
    elif category == MoveCategory.KING_ONTO_ACE_SAME_SUIT:
        target = Card(Rank.ACE, suit)
    elif category == MoveCategory.ONTO_PARTNER_SUIT:
        target = Card(Rank(rank + 1), partner_suit(suit))
    elif category == MoveCategory.KING_ONTO_ACE_PARTNER_SUIT:
        target = Card(Rank.ACE, partner_suit(suit))
    elif category == MoveCategory.TO_EMPTY_TABLEAU:
        target = Card(Rank.NONE, Suit.NONE)
    else:
        raise EncodingError(f"unknown move category {category!r}")
    return Move(target, source)


def fields_to_action(fields: MoveFields) -> int:
    band = BAND_BY_CATEGORY[fields.category]
    if band.size == 1:
        return MOVE_START + band.base
    offset = (fields.key_suit - 1) * band.stride + (fields.key_rank - band.first_rank)
    if not 0 <= offset < band.size:
        raise EncodingError(f"{fields.key_rank.name} of {fields.key_suit.name} is outside the {band.category.value} band")
    return MOVE_START + band.base + offset


def action_to_fields(action: int) -> MoveFields:
    relative = action - MOVE_START
    for band in MOVE_BANDS:
        if not band.contains(relative):
            continue
        if band.size == 1:
            return MoveFields(band.category)
        offset = relative - band.base
        suit = Suit(offset // band.stride + 1)
        rank = Rank(band.first_rank + offset % band.stride)
        return MoveFields(band.category, rank, suit)
    raise EncodingError(f"action {action} does not correspond to a move")


def move_to_action(move: Move) -> int:
    """Encode a structured move as its action id."""
    return fields_to_action(classify_move(move))


def action_to_move(action: int) -> Move:
    """Decode a move action id back into a structured move."""
    return fields_to_move(action_to_fields(action))


def move_category(action: int) -> Optional[MoveCategory]:
    """Return the category of a move id, or None for ids outside the move range."""
    if not MOVE_START <= action <= MOVE_END:
        return None
    return action_to_fields(action).category


def all_moves() -> List[Move]:
    """Every structured move in id order."""
    return [action_to_move(action) for action in range(MOVE_START, MOVE_END + 1)]


__all__ = [
    "Move",
    "MoveCategory",
    "MoveBand",
    "MoveFields",
    "MOVE_BANDS",
    "NUM_MOVE_ACTIONS",
    "classify_move",
    "fields_to_move",
    "fields_to_action",
    "action_to_fields",
    "move_to_action",
    "action_to_move",
    "move_category",
    "all_moves",
]
