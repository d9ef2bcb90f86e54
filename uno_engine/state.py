"""Game state management for UNO."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

from .cards import Card, Color
from .player import Player
from .rules_schema import RuleSet
from .stacks import DiscardStack, DrawStack
from .turn_order import Direction, TurnOrder


class InvalidGameState(RuntimeError):
    """Raised when an operation is attempted in the wrong phase or out of turn."""


class GamePhase(Enum):
    INITIALIZED = auto()
    IN_PROGRESS = auto()
    ROUND_OVER = auto()
    GAME_OVER = auto()


@dataclass
class GameState:
    """Everything the orchestrator mutates, kept in one place."""

    rules: RuleSet = field(default_factory=RuleSet)
    players: List[Player] = field(default_factory=list)
    phase: GamePhase = GamePhase.INITIALIZED
    round_number: int = 0
    turn_order: Optional[TurnOrder] = None
    current_player: int = 0
    dealer: Optional[int] = None
    draw_stack: DrawStack = field(default_factory=DrawStack)
    discard: DiscardStack = field(default_factory=DiscardStack)
    cards_played: int = 0
    fallback_cards: int = 0

    def ensure_phase(self, expected: GamePhase) -> None:
        if self.phase is not expected:
            raise InvalidGameState(f"Action not allowed in phase {self.phase.name}. Expected {expected.name}.")

    def ring(self) -> TurnOrder:
        if self.turn_order is None:
            raise InvalidGameState("No round has been started.")
        return self.turn_order

    @property
    def direction(self) -> Direction:
        return self.ring().direction

    @property
    def active_card(self) -> Card:
        return self.discard.top

    @property
    def active_color(self) -> Color:
        return self.discard.active_color

    def seat_of(self, player: Player) -> int:
        for seat, seated in enumerate(self.players):
            if seated is player:
                return seat
        raise InvalidGameState(f"{player.name} is not seated at this table.")

    def next_seat(self, seat: Optional[int] = None) -> int:
        return self.ring().next(self.current_player if seat is None else seat)

    def card_count(self) -> int:
        """Cards across hands, draw stack and discard stack."""
        in_hands = sum(player.hand_size() for player in self.players)
        return in_hands + len(self.draw_stack) + len(self.discard)
