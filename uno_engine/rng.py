"""Injectable randomness for shuffles and tie-breaks."""

from __future__ import annotations

from random import Random
from typing import MutableSequence, Optional, Sequence, TypeVar

T = TypeVar("T")


class RandomSource:
    """Every nondeterministic decision in the engine goes through one of these.

    A fixed ``seed`` reproduces a whole game. Tests may subclass and override
    the methods to script outcomes.
    """

    def __init__(self, seed: Optional[int] = None, *, rng: Optional[Random] = None) -> None:
        self._rng = rng if rng is not None else Random(seed)

    def shuffle(self, items: MutableSequence[T]) -> None:
        self._rng.shuffle(items)

    def uniform_choice(self, options: Sequence[T]) -> T:
        if not options:
            raise ValueError("Cannot choose from an empty sequence.")
        return self._rng.choice(options)

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        return self._rng.random() < probability
