"""Random baseline bot."""

from __future__ import annotations

from typing import Optional, Sequence

from uno_engine.cards import Card, Color, matches
from uno_engine.rng import RandomSource
from uno_engine.policy import SelectionPolicy


class RandomBot(SelectionPolicy):
    """Picks uniformly among cards that match the active card.

    It does not check the Wild-Draw-Four restriction, so the engine will
    sometimes reject its choice and make it draw.
    """

    name = "Random"

    def choose_card(
        self,
        hand: Sequence[Card],
        active: Card,
        active_color: Color,
        rng: RandomSource,
    ) -> Optional[Card]:
        candidates = [card for card in hand if matches(card, active, active_color)]
        if not candidates:
            return None
        return rng.uniform_choice(candidates)
