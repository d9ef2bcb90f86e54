"""Round scoring and the cumulative score ledger."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

WINNING_SCORE = 500


class ScoringError(ValueError):
    """Raised when the ledger is asked to record impossible results."""


@dataclass(frozen=True)
class RoundResult:
    round_number: int
    winner: int
    points: int
    cumulative: Tuple[Tuple[int, int], ...]
    cards_played: int = 0

    def score_of(self, player_id: int) -> int:
        return dict(self.cumulative)[player_id]


def round_points(remaining_hand_values: Mapping[int, int], winner: int) -> int:
    """Points for ``winner``: the value of every other player's remaining hand."""
    if winner not in remaining_hand_values:
        raise ScoringError(f"Unknown round winner {winner}.")
    if remaining_hand_values[winner] != 0:
        raise ScoringError("The round winner must have an empty hand.")
    return sum(value for player, value in remaining_hand_values.items() if player != winner)


@dataclass
class ScoreLedger:
    """Accumulated points per player; never reset between rounds."""

    player_ids: Sequence[int]
    winning_score: int = WINNING_SCORE
    scores: Dict[int, int] = field(init=False)
    history: List[RoundResult] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.player_ids = tuple(self.player_ids)
        if len(set(self.player_ids)) != len(self.player_ids):
            raise ScoringError("Player ids must be unique.")
        self.scores = {player: 0 for player in self.player_ids}

    def record_round(
        self,
        round_number: int,
        winner: int,
        remaining_hand_values: Mapping[int, int],
        *,
        cards_played: int = 0,
    ) -> RoundResult:
        points = round_points(remaining_hand_values, winner)
        if points < 0:
            raise ScoringError("Round points cannot be negative.")
        self.scores[winner] += points
        result = RoundResult(
            round_number=round_number,
            winner=winner,
            points=points,
            cumulative=tuple((player, self.scores[player]) for player in self.player_ids),
            cards_played=cards_played,
        )
        self.history.append(result)
        return result

    def score(self, player_id: int) -> int:
        return self.scores[player_id]

    def leader(self) -> Optional[int]:
        if not self.scores:
            return None
        return max(self.player_ids, key=lambda player: self.scores[player])

    def has_winner(self) -> bool:
        return any(score >= self.winning_score for score in self.scores.values())

    def winner(self) -> Optional[int]:
        reached = [player for player in self.player_ids if self.scores[player] >= self.winning_score]
        if not reached:
            return None
        return max(reached, key=lambda player: self.scores[player])
