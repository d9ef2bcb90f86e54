"""Card effect resolution.

Each played card maps to an :class:`EffectOutcome`; the orchestrator applies
the outcome (direction, skips, forced draws, active color). Resolution itself
never touches game state, which keeps every card kind testable in isolation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .cards import Card, Color, Kind, color_counts, matches
from .mechanics import wild_draw_four_allowed
from .rng import RandomSource

DRAW_TWO_PENALTY = 2
DRAW_FOUR_PENALTY = 4


class IllegalPlay(RuntimeError):
    """Raised when a card cannot be laid on the active card."""


@dataclass(frozen=True)
class EffectOutcome:
    kind: Kind
    skip_next: bool = False
    reverse: bool = False
    draw_penalty: int = 0
    chosen_color: Optional[Color] = None

    def is_noop(self) -> bool:
        return not (self.skip_next or self.reverse or self.draw_penalty or self.chosen_color)


def choose_color(hand: Sequence[Card], rng: RandomSource) -> Color:
    """Most frequent color in ``hand``; ties and colorless hands pick at random."""
    counts = color_counts(hand)
    if not counts:
        return rng.uniform_choice(list(Color))
    best = max(counts.values())
    tied = [color for color in Color if counts.get(color) == best]
    if len(tied) == 1:
        return tied[0]
    return rng.uniform_choice(tied)


def check_play(card: Card, hand: Sequence[Card], active: Card, active_color: Color) -> None:
    """Raise :class:`IllegalPlay` unless ``card`` may be played from ``hand``."""
    if not matches(card, active, active_color):
        raise IllegalPlay(f"{card} does not match the active {active_color} {active.kind}.")
    if card.kind is Kind.WILD_DRAW_FOUR and not wild_draw_four_allowed(hand, active_color):
        raise IllegalPlay(f"Wild Draw Four not allowed while holding a {active_color} card.")


def resolve_effect(
    card: Card,
    hand: Sequence[Card],
    active_color: Optional[Color],
    rng: RandomSource,
) -> EffectOutcome:
    """Return the state transition for playing ``card``.

    ``hand`` is the player's hand at the moment of play. It decides the
    Wild-Draw-Four check and the color chosen for either wild. ``active_color``
    is None only for the card that seeds the discard stack.
    """
    kind = card.kind
    if kind is Kind.NUMBER:
        return EffectOutcome(kind)
    if kind is Kind.SKIP:
        return EffectOutcome(kind, skip_next=True)
    if kind is Kind.REVERSE:
        return EffectOutcome(kind, reverse=True)
    if kind is Kind.DRAW_TWO:
        return EffectOutcome(kind, skip_next=True, draw_penalty=DRAW_TWO_PENALTY)
    if kind is Kind.WILD:
        return EffectOutcome(kind, chosen_color=choose_color(hand, rng))
    if kind is Kind.WILD_DRAW_FOUR:
        if active_color is not None and not wild_draw_four_allowed(hand, active_color):
            raise IllegalPlay(f"Wild Draw Four not allowed while holding a {active_color} card.")
        return EffectOutcome(
            kind,
            skip_next=True,
            draw_penalty=DRAW_FOUR_PENALTY,
            chosen_color=choose_color(hand, rng),
        )
    raise AssertionError(f"Unhandled card kind: {kind!r}")
