"""Deck creation utilities for UNO."""

from __future__ import annotations

from typing import List

from .cards import Card, Color, Kind

DECK_SIZE = 108
WILDS_PER_KIND = 4
COPIES_PER_FACE = 2


def build_deck() -> List[Card]:
    """Return the ordered 108-card deck.

    Per color: one 0, two each of 1-9 and two each of Skip, Reverse and
    Draw-Two. Then four Wild and four Wild-Draw-Four cards.
    """
    cards: List[Card] = []
    for color in Color:
        cards.append(Card(Kind.NUMBER, color, 0))
        for number in range(1, 10):
            cards.extend(Card(Kind.NUMBER, color, number) for _ in range(COPIES_PER_FACE))
        for kind in (Kind.SKIP, Kind.REVERSE, Kind.DRAW_TWO):
            cards.extend(Card(kind, color) for _ in range(COPIES_PER_FACE))
    for _ in range(WILDS_PER_KIND):
        cards.append(Card(Kind.WILD))
        cards.append(Card(Kind.WILD_DRAW_FOUR))
    if len(cards) != DECK_SIZE:
        raise ValueError(f"Deck must contain exactly {DECK_SIZE} cards.")
    return cards
