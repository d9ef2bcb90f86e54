"""Card-selection policies for automated players."""

from __future__ import annotations

from typing import Optional, Sequence

from .cards import Card, Color, Kind
from .mechanics import legal_moves, wild_draw_four_allowed
from .rng import RandomSource

WILD_OPPORTUNISM = 0.3


class SelectionPolicy:
    """Base class for player policies.

    ``choose_card`` receives a copy of the hand and the active card/color and
    returns the card to play, or None to draw. The engine validates the choice;
    an illegal answer is rejected and the player draws instead.
    """

    name: str = "Base"

    def choose_card(
        self,
        hand: Sequence[Card],
        active: Card,
        active_color: Color,
        rng: RandomSource,
    ) -> Optional[Card]:
        legal = legal_moves(hand, active, active_color)
        return legal[0] if legal else None


class HeuristicPolicy(SelectionPolicy):
    """Default automated player.

    In order: with probability ``wild_opportunism`` lay a plain Wild if one is
    held; otherwise the highest-point legal card other than a Wild-Draw-Four
    (ties go to the earliest in hand); otherwise a Wild-Draw-Four when no card
    matches the active color; otherwise draw.
    """

    name = "Heuristic"

    def __init__(self, wild_opportunism: float = WILD_OPPORTUNISM) -> None:
        if not 0.0 <= wild_opportunism <= 1.0:
            raise ValueError("wild_opportunism must be a probability.")
        self.wild_opportunism = wild_opportunism

    def choose_card(
        self,
        hand: Sequence[Card],
        active: Card,
        active_color: Color,
        rng: RandomSource,
    ) -> Optional[Card]:
        wilds = [card for card in hand if card.kind is Kind.WILD]
        if wilds and rng.chance(self.wild_opportunism):
            return wilds[0]

        legal = legal_moves(hand, active, active_color)
        regular = [card for card in legal if card.kind is not Kind.WILD_DRAW_FOUR]
        if regular:
            return max(regular, key=lambda card: card.points)

        if wild_draw_four_allowed(hand, active_color):
            return next((card for card in hand if card.kind is Kind.WILD_DRAW_FOUR), None)
        return None
