"""Convenience service layer for UI and spectators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .cards import card_label, serialize_card
from .events import EventRecorder, GameEvent
from .game import GameSession
from .policy import SelectionPolicy
from .rules_schema import RuleSet
from .state import GamePhase


@dataclass
class PlayerView:
    id: int
    name: str
    is_dealer: bool
    is_current: bool
    hand_size: int
    score: int
    hand: list[dict]
    hand_labels: list[str]


@dataclass
class GameView:
    phase: str
    round_number: int
    direction: Optional[str]
    current_player: Optional[int]
    dealer: Optional[int]
    active_card: Optional[dict]
    active_label: Optional[str]
    active_color: Optional[str]
    draw_stack_size: int
    discard_stack_size: int
    players: list[PlayerView]
    recent_events: list[dict]


class GameService:
    """Facade around GameSession for UI consumers."""

    def __init__(self, session: Optional[GameSession] = None, *, history: int = 20) -> None:
        self.session = session or GameSession()
        self.recorder = EventRecorder()
        self.session.subscribe(self.recorder)
        self.history = history

    # Session lifecycle -------------------------------------------------

    @classmethod
    def with_players(
        cls,
        names: Sequence[str],
        *,
        rules: Optional[RuleSet] = None,
        policies: Optional[Sequence[Optional[SelectionPolicy]]] = None,
    ) -> "GameService":
        service = cls(GameSession(rules=rules))
        policies = list(policies) if policies is not None else [None] * len(names)
        if len(policies) != len(names):
            raise ValueError("Provide one policy (or None) per player.")
        for name, policy in zip(names, policies):
            service.session.add_player(name, policy)
        return service

    def start(self) -> GameView:
        self.session.start_game()
        return self.get_game_view()

    # Actions -----------------------------------------------------------

    def step(self) -> GameView:
        """Advance one turn, or start the next round when the last one is over."""
        phase = self.session.phase
        if phase is GamePhase.ROUND_OVER:
            self.session.start_next_round()
        elif phase is GamePhase.IN_PROGRESS:
            self.session.handle_turn(self.session.current_player)
        else:
            raise RuntimeError(f"Cannot step a game in phase {phase.name.lower()}.")
        return self.get_game_view()

    def finish_round(self) -> GameView:
        self.session.play_round()
        return self.get_game_view()

    # Views -------------------------------------------------------------

    def get_game_view(self, perspective: Optional[int] = None) -> GameView:
        """Snapshot of the table; only ``perspective``'s hand is revealed (all when None)."""
        session = self.session
        state = session.state
        started = state.turn_order is not None
        ledger = session.ledger

        players = []
        for seat, player in enumerate(state.players):
            visible = perspective is None or perspective == player.id
            cards = list(player.hand) if visible else []
            players.append(
                PlayerView(
                    id=player.id,
                    name=player.name,
                    is_dealer=player.is_dealer,
                    is_current=started and seat == state.current_player,
                    hand_size=player.hand_size(),
                    score=ledger.score(player.id) if ledger else 0,
                    hand=[serialize_card(card) for card in cards],
                    hand_labels=[card_label(card) for card in cards],
                )
            )

        active = state.active_card if started and len(state.discard) else None
        color = state.active_color if active is not None else None
        return GameView(
            phase=state.phase.name.lower(),
            round_number=state.round_number,
            direction=str(state.direction) if started else None,
            current_player=state.current_player if started else None,
            dealer=state.dealer,
            active_card=serialize_card(active) if active else None,
            active_label=card_label(active, color) if active else None,
            active_color=str(color) if color else None,
            draw_stack_size=len(state.draw_stack),
            discard_stack_size=len(state.discard),
            players=players,
            recent_events=[self._event_payload(event) for event in self.recorder.events[-self.history :]],
        )

    # Helpers -----------------------------------------------------------

    @staticmethod
    def _event_payload(event: GameEvent) -> dict:
        return {
            "type": event.event_type.value,
            "sequence": event.sequence_num,
            "round": event.round_number,
            "player": event.player_id,
            "data": dict(event.data),
        }
