"""Card-related data structures and helpers for UNO."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Mapping, Optional


class Color(Enum):
    RED = auto()
    GREEN = auto()
    BLUE = auto()
    YELLOW = auto()

    def __str__(self) -> str:
        return self.name.lower()


class Kind(Enum):
    NUMBER = auto()
    SKIP = auto()
    REVERSE = auto()
    DRAW_TWO = auto()
    WILD = auto()
    WILD_DRAW_FOUR = auto()

    def __str__(self) -> str:
        return self.name.lower()


ACTION_KINDS = frozenset({Kind.SKIP, Kind.REVERSE, Kind.DRAW_TWO})
WILD_KINDS = frozenset({Kind.WILD, Kind.WILD_DRAW_FOUR})

# Point values per the official rules; number cards score their face value.
ACTION_POINTS = 20
WILD_POINTS = 50

KIND_POINTS: dict[Kind, int] = {
    Kind.SKIP: ACTION_POINTS,
    Kind.REVERSE: ACTION_POINTS,
    Kind.DRAW_TWO: ACTION_POINTS,
    Kind.WILD: WILD_POINTS,
    Kind.WILD_DRAW_FOUR: WILD_POINTS,
}


@dataclass(frozen=True)
class Card:
    """Immutable representation of an UNO card.

    Number cards carry ``number`` 0-9, colored action cards carry a color and
    no number, and wild-family cards carry neither. The color a wild card
    takes on when played lives on the discard stack, not on the card.
    """

    kind: Kind
    color: Optional[Color] = None
    number: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind is Kind.NUMBER:
            if self.number is None or not 0 <= self.number <= 9:
                raise ValueError(f"Number cards need a face value 0-9, got {self.number!r}.")
        elif self.number is not None:
            raise ValueError(f"{self.kind} cards do not carry a number.")
        if self.kind in WILD_KINDS and self.color is not None:
            raise ValueError("Wild cards are colorless until played.")
        if self.kind not in WILD_KINDS and self.color is None:
            raise ValueError(f"{self.kind} cards need a color.")

    @property
    def points(self) -> int:
        if self.kind is Kind.NUMBER:
            assert self.number is not None
            return self.number
        return KIND_POINTS[self.kind]

    def is_wild(self) -> bool:
        return self.kind in WILD_KINDS

    def is_action(self) -> bool:
        return self.kind is not Kind.NUMBER


def number_card(color: Color, number: int) -> Card:
    return Card(Kind.NUMBER, color, number)


def matches(card: Card, active: Card, active_color: Color) -> bool:
    """Return True if ``card`` may be laid on ``active`` showing ``active_color``.

    Wild-family cards always match here; the Wild-Draw-Four hand check is the
    effect resolver's job.
    """
    if card.is_wild():
        return True
    if card.color is active_color:
        return True
    if card.kind is Kind.NUMBER:
        return active.kind is Kind.NUMBER and card.number == active.number
    return card.kind is active.kind


def hand_points(cards: Iterable[Card]) -> int:
    return sum(card.points for card in cards)


def has_color(cards: Iterable[Card], color: Color) -> bool:
    return any(card.color is color for card in cards)


def color_counts(cards: Iterable[Card]) -> Counter:
    return Counter(card.color for card in cards if card.color is not None)


def serialize_card(card: Card) -> dict[str, object]:
    return {
        "kind": card.kind.name.lower(),
        "color": card.color.name.lower() if card.color else None,
        "number": card.number,
    }


def deserialize_card(payload: Mapping[str, object]) -> Card:
    kind = Kind[str(payload["kind"]).upper()]
    color_name = payload.get("color")
    color = Color[str(color_name).upper()] if color_name else None
    number = payload.get("number")
    return Card(kind, color, int(number) if number is not None else None)


def card_label(card: Card, color: Optional[Color] = None) -> str:
    """Human-readable label; ``color`` names the color chosen for a played wild."""
    if card.kind is Kind.NUMBER:
        face = str(card.number)
    else:
        face = card.kind.name.replace("_", " ").title()
    shown = card.color or color
    return f"{shown.name.title()} {face}" if shown else face
