"""Event surface for presentation and persistence collaborators."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    ROUND_STARTED = "round_started"
    DEALER_SELECTED = "dealer_selected"
    CARDS_DEALT = "cards_dealt"
    TURN_STARTED = "turn_started"
    CARD_PLAYED = "card_played"
    CARD_DRAWN = "card_drawn"
    EFFECT_APPLIED = "effect_applied"
    PLAY_REJECTED = "play_rejected"
    PILE_REPLENISHED = "pile_replenished"
    FALLBACK_CARD_MINTED = "fallback_card_minted"
    ROUND_WON = "round_won"
    GAME_WON = "game_won"


@dataclass(frozen=True)
class GameEvent:
    event_type: EventType
    sequence_num: int
    round_number: int
    player_id: Optional[int] = None
    data: Dict[str, Any] = field(default_factory=dict)


Listener = Callable[[GameEvent], None]


class EventBus:
    """Fan-out of game events to subscribed callables, in subscription order."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []
        self._sequence_num = 0

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def emit(
        self,
        event_type: EventType,
        round_number: int,
        player_id: Optional[int] = None,
        **data: Any,
    ) -> GameEvent:
        self._sequence_num += 1
        event = GameEvent(
            event_type=event_type,
            sequence_num=self._sequence_num,
            round_number=round_number,
            player_id=player_id,
            data=data,
        )
        for listener in self._listeners:
            listener(event)
        return event


class EventRecorder:
    """Keeps every event in memory; handy for tests and replays."""

    def __init__(self) -> None:
        self.events: List[GameEvent] = []

    def __call__(self, event: GameEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: EventType) -> List[GameEvent]:
        return [event for event in self.events if event.event_type is event_type]


class EventLogger:
    """Renders events as log lines for console presentation."""

    def __init__(self, names: Dict[int, str], log: Optional[logging.Logger] = None) -> None:
        self.names = dict(names)
        self.log = log or logger

    def __call__(self, event: GameEvent) -> None:
        who = self.names.get(event.player_id, "-") if event.player_id is not None else "-"
        if event.event_type is EventType.FALLBACK_CARD_MINTED:
            self.log.warning("round %d: %s %s", event.round_number, event.event_type.value, event.data)
            return
        level = logging.INFO if event.event_type in _HEADLINE_EVENTS else logging.DEBUG
        details = " ".join(f"{key}={value}" for key, value in event.data.items())
        self.log.log(level, "round %d: %s [%s] %s", event.round_number, event.event_type.value, who, details)


_HEADLINE_EVENTS = frozenset(
    {
        EventType.ROUND_STARTED,
        EventType.DEALER_SELECTED,
        EventType.ROUND_WON,
        EventType.GAME_WON,
    }
)
