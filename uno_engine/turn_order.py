"""Seat rotation for 2-4 players."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    CLOCKWISE = 1
    COUNTER_CLOCKWISE = -1

    def flipped(self) -> "Direction":
        return Direction(-self.value)

    def __str__(self) -> str:
        return self.name.lower().replace("_", "-")


@dataclass
class TurnOrder:
    """Computes the next seat under the current direction."""

    seats: int
    direction: Direction = Direction.CLOCKWISE

    def __post_init__(self) -> None:
        if self.seats < 2:
            raise ValueError("Turn order needs at least two seats.")

    def next(self, seat: int, steps: int = 1) -> int:
        return (seat + steps * self.direction.value) % self.seats

    def reverse(self, seat: int) -> bool:
        """Flip direction as seen from ``seat``.

        Returns True when the reversal leaves the following seat unchanged, in
        which case that seat is passed over. With two seats this makes a
        reversal play exactly like a skip.
        """
        before = self.next(seat)
        self.direction = self.direction.flipped()
        return self.next(seat) == before

    def cycle(self, start: int) -> list[int]:
        """Seats in play order beginning at ``start``."""
        return [self.next(start, step) for step in range(self.seats)]
