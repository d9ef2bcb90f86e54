"""Baseline greedy bot."""

from __future__ import annotations

from typing import Optional, Sequence

from uno_engine.cards import Card, Color
from uno_engine.mechanics import legal_moves
from uno_engine.policy import SelectionPolicy
from uno_engine.rng import RandomSource


class GreedyBot(SelectionPolicy):
    """Always sheds the most valuable legal card, wilds included."""

    name = "Greedy"

    def choose_card(
        self,
        hand: Sequence[Card],
        active: Card,
        active_color: Color,
        rng: RandomSource,
    ) -> Optional[Card]:
        legal = legal_moves(hand, active, active_color)
        if not legal:
            return None
        return max(legal, key=lambda card: card.points)
