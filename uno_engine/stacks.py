"""Source, draw and discard stacks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from .cards import Card, Color
from .deck import build_deck
from .rng import RandomSource


class EmptyStackError(RuntimeError):
    """Raised when taking a card from an empty stack."""


@dataclass
class SourceStack:
    """The freshly assembled deck used for dealer selection and dealing."""

    cards: List[Card] = field(default_factory=list)

    @classmethod
    def assemble(cls, rng: RandomSource) -> "SourceStack":
        stack = cls(build_deck())
        rng.shuffle(stack.cards)
        return stack

    def deal_one(self) -> Card:
        if not self.cards:
            raise EmptyStackError("Not enough cards in the source stack.")
        return self.cards.pop(0)

    def give_back(self, cards: Iterable[Card]) -> None:
        self.cards.extend(cards)

    def take_all(self) -> List[Card]:
        remaining, self.cards = self.cards, []
        return remaining

    def __len__(self) -> int:
        return len(self.cards)


@dataclass
class DrawStack:
    _cards: List[Card] = field(default_factory=list)

    def draw(self) -> Card:
        if not self._cards:
            raise EmptyStackError("Draw stack is empty.")
        return self._cards.pop(0)

    def put_back(self, card: Card) -> None:
        self._cards.append(card)

    def refill(self, cards: Iterable[Card], rng: RandomSource) -> None:
        self._cards.extend(cards)
        rng.shuffle(self._cards)

    def shuffle(self, rng: RandomSource) -> None:
        rng.shuffle(self._cards)

    def cards(self) -> Tuple[Card, ...]:
        return tuple(self._cards)

    def is_empty(self) -> bool:
        return not self._cards

    def __len__(self) -> int:
        return len(self._cards)


@dataclass
class DiscardStack:
    """Discard pile; index 0 is the active card."""

    _cards: List[Card] = field(default_factory=list)
    _active_color: Optional[Color] = None

    def push(self, card: Card, color: Optional[Color] = None) -> None:
        """Place ``card`` on top. Wild cards need the color they were played as."""
        active = card.color if card.color is not None else color
        if active is None:
            raise ValueError("A wild card needs a chosen color when it becomes active.")
        self._cards.insert(0, card)
        self._active_color = active

    @property
    def top(self) -> Card:
        if not self._cards:
            raise EmptyStackError("Discard stack is empty.")
        return self._cards[0]

    @property
    def active_color(self) -> Color:
        if self._active_color is None:
            raise EmptyStackError("Discard stack is empty.")
        return self._active_color

    def take_under_top(self) -> List[Card]:
        """Remove and return every card except the active one."""
        if not self._cards:
            return []
        rest = self._cards[1:]
        del self._cards[1:]
        return rest

    def cards(self) -> Tuple[Card, ...]:
        return tuple(self._cards)

    def __len__(self) -> int:
        return len(self._cards)
