from __future__ import annotations

from typing import Iterable, List

from .cards import Card, Rank, Suit
from .models import ActType, GameState, action_type
from .moves import Move, action_to_move

RESET = "\033[0m"

GLYPH_HIDDEN = "\U0001F0A0"
GLYPH_EMPTY = "\U0001F0BF"
GLYPH_ARROW = "←"

SUIT_GLYPHS = {
    Suit.NONE: "",
    Suit.SPADES: "♠",
    Suit.HEARTS: "♥",
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HIDDEN: "",
}
RANK_LABELS = ["", "A", "2", "3", "4", "5", "6", "7", "8", "9", "T", "J", "Q", "K", ""]


def _c(text: str, code: str, colored: bool) -> str:
    if not colored:
        return text
    return f"\033[{code}m{text}{RESET}"


def _b(text: str, colored: bool = True) -> str:
    return _c(text, '1', colored)


def _red(text: str, colored: bool = True) -> str:
    return _c(text, '31', colored)


def _black(text: str, colored: bool = True) -> str:
    return _c(text, '37', colored)


def _dim(text: str, colored: bool = True) -> str:
    return _c(text, '2', colored)


def card_to_string(card: Card, colored: bool = False) -> str:
    if card.hidden or card.rank == Rank.HIDDEN:
        return f"{GLYPH_HIDDEN} " + (RESET if colored else "")
    if card.is_empty_tableau:
        return GLYPH_EMPTY + (RESET if colored else "")
    label = RANK_LABELS[card.rank] + SUIT_GLYPHS[card.suit]
    if card.suit in (Suit.HEARTS, Suit.DIAMONDS):
        return _red(label, colored)
    return _black(label, colored)


def cards_to_string(cards: Iterable[Card], colored: bool = False) -> str:
    return "".join(f"{card_to_string(card, colored)} " for card in cards)


def move_to_string(move: Move, colored: bool = False) -> str:
    return f"{card_to_string(move.target, colored)} {GLYPH_ARROW} {card_to_string(move.source, colored)}"


def state_to_string(state: GameState) -> str:
    """Render the full board; this string doubles as the observation string."""
    colored = state.params.is_colored
    lines: List[str] = [f"WASTE       : {cards_to_string(state.waste.cards, colored)}"]
    foundations = "".join(
        f"{card_to_string(foundation.targets()[0], colored)} " for foundation in state.foundations
    )
    lines.append(f"FOUNDATIONS : {foundations}")
    lines.append("TABLEAUS    : ")
    for tableau in state.tableaus:
        if not tableau.is_empty:
            lines.append(cards_to_string(tableau.cards, colored))
    lines.append(f"TARGETS : {cards_to_string(state.targets(), colored)}")
    lines.append(f"SOURCES : {cards_to_string(state.sources(), colored)}")
    return "\n".join(lines)


def action_to_string(action: int, colored: bool = False) -> str:
    typ = action_type(action)
    if typ == ActType.END:
        return "End"
    if typ == ActType.REVEAL:
        return f"Reveal{card_to_string(Card.from_index(action), colored)}"
    if typ == ActType.MOVE:
        return move_to_string(action_to_move(action), colored)
    return "Deal/Reveal from waste"


def pretty_event(ev: dict, colored: bool = False) -> str:
    if not ev or 'type' not in ev:
        return _dim(' (no event)', colored)
    event_type = ev['type']
    lines: List[str] = []

    if event_type == 'end':
        lines.append(_b('END', colored))
    elif event_type == 'reveal':
        lines.append(f"REVEAL  {ev.get('card', '?')} -> {ev.get('pile', '?')}")
        if ev.get('foundation_rank'):
            lines.append(_dim(f"   foundation rank: {ev['foundation_rank']}", colored))
    elif event_type == 'move':
        lines.append(f"MOVE    {ev.get('move', '?')}  ({ev.get('source_pile', '?')} -> {ev.get('target_pile', '?')})")
        lines.append(f"   reward: {ev.get('reward', 0.0):+.1f}   reversible: {bool(ev.get('reversible'))}")
    elif event_type == 'deal':
        lines.append(_b(f"DEAL    {ev.get('count', 0)} card(s) from the waste", colored))
    else:
        lines.append(_dim(f" {event_type}: {ev}", colored))

    if ev.get('terminal'):
        lines.append(_dim("   episode finished", colored))
    return '\n'.join(lines)


__all__ = [
    'card_to_string',
    'cards_to_string',
    'move_to_string',
    'state_to_string',
    'action_to_string',
    'pretty_event',
]
