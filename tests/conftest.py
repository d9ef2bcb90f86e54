from typing import Iterable, Optional, Sequence

import pytest

from uno_engine.cards import Card, Color, Kind
from uno_engine.game import GameSession
from uno_engine.rng import RandomSource
from uno_engine.rules_schema import RuleSet
from uno_engine.stacks import DiscardStack, DrawStack
from uno_engine.turn_order import TurnOrder


class ScriptedRandom(RandomSource):
    """Shuffles are no-ops; chances and choices follow a script."""

    def __init__(self, chances: Iterable[bool] = (), choices: Iterable[object] = ()) -> None:
        super().__init__(0)
        self.chances = list(chances)
        self.choices = list(choices)

    def shuffle(self, items) -> None:
        return None

    def chance(self, probability: float) -> bool:
        return self.chances.pop(0) if self.chances else False

    def uniform_choice(self, options: Sequence):
        if self.choices:
            pick = self.choices.pop(0)
            assert pick in options
            return pick
        return options[0]


def red(number: int) -> Card:
    return Card(Kind.NUMBER, Color.RED, number)


def blue(number: int) -> Card:
    return Card(Kind.NUMBER, Color.BLUE, number)


def green(number: int) -> Card:
    return Card(Kind.NUMBER, Color.GREEN, number)


def make_session(n_players: int = 2, *, rng: Optional[RandomSource] = None, **rules) -> GameSession:
    session = GameSession(rules=RuleSet(**rules), rng=rng or ScriptedRandom())
    for idx in range(n_players):
        session.add_player(f"P{idx + 1}")
    return session


def rig_table(
    session: GameSession,
    hands: Sequence[Sequence[Card]],
    active: Card,
    active_color: Optional[Color] = None,
    *,
    draw: Sequence[Card] = (),
    current: int = 0,
) -> None:
    """Replace the dealt table with a known position."""
    state = session.state
    for player, hand in zip(state.players, hands):
        player.clear_hand()
        player.add_cards(hand)
    state.turn_order = TurnOrder(len(state.players))
    state.discard = DiscardStack()
    state.discard.push(active, active_color)
    state.draw_stack = DrawStack(list(draw))
    state.current_player = current


@pytest.fixture
def scripted_rng():
    return ScriptedRandom()
