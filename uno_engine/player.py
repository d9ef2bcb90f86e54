"""Player seat: identity, hand and selection policy."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from .cards import Card, hand_points
from .policy import HeuristicPolicy, SelectionPolicy


class CardNotInHand(RuntimeError):
    """Raised when a player is asked to give up a card they do not hold."""


@dataclass(eq=False)
class Player:
    id: int
    name: str
    policy: SelectionPolicy = field(default_factory=HeuristicPolicy)
    is_dealer: bool = False
    _hand: List[Card] = field(default_factory=list, repr=False)

    @property
    def hand(self) -> Tuple[Card, ...]:
        return tuple(self._hand)

    def add_card(self, card: Card) -> None:
        if not isinstance(card, Card):
            raise TypeError(f"Cannot add {card!r} to a hand.")
        self._hand.append(card)

    def add_cards(self, cards: Iterable[Card]) -> None:
        for card in cards:
            self.add_card(card)

    def remove_card(self, card: Card) -> None:
        try:
            self._hand.remove(card)
        except ValueError as exc:
            raise CardNotInHand(f"{self.name} does not hold {card}.") from exc

    def clear_hand(self) -> List[Card]:
        cards, self._hand = self._hand, []
        return cards

    def hand_size(self) -> int:
        return len(self._hand)

    def hand_value(self) -> int:
        return hand_points(self._hand)

    def has_won_round(self) -> bool:
        return not self._hand
