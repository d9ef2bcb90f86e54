"""Legal move generation for UNO."""

from __future__ import annotations

from typing import Iterable, List

from .cards import Card, Color, Kind, has_color, matches


def wild_draw_four_allowed(hand: Iterable[Card], active_color: Color) -> bool:
    """A Wild-Draw-Four is a last resort: no card in hand may show the active color."""
    return not has_color(hand, active_color)


def is_legal(card: Card, hand: Iterable[Card], active: Card, active_color: Color) -> bool:
    if not matches(card, active, active_color):
        return False
    if card.kind is Kind.WILD_DRAW_FOUR:
        return wild_draw_four_allowed(hand, active_color)
    return True


def legal_moves(hand: Iterable[Card], active: Card, active_color: Color) -> List[Card]:
    """Return the cards of ``hand`` that may be played, in hand order."""
    cards = list(hand)
    return [card for card in cards if is_legal(card, cards, active, active_color)]
