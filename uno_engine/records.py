"""Append-only CSV score records."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Dict, Sequence, Union

from .events import EventType, GameEvent

logger = logging.getLogger(__name__)

FINAL_ROW_LABEL = "final"


class ScoreRecordWriter:
    """Writes one row of cumulative scores per round, then a final winner row.

    Subscribe an instance to a session; it only reacts to ``round_won`` and
    ``game_won`` events.
    """

    def __init__(self, path: Union[str, Path], player_names: Sequence[str], *, game_label: str = "") -> None:
        self.path = Path(path)
        self.player_names = list(player_names)
        self.game_label = game_label
        self.fieldnames = ["game", "round", *self.player_names, "winner", "cards_played"]
        self._last_scores: Dict[str, int] = {name: 0 for name in self.player_names}

    def __call__(self, event: GameEvent) -> None:
        if event.event_type is EventType.ROUND_WON:
            self._last_scores = dict(event.data["scores"])
            self._append(
                round_label=event.round_number,
                winner=self._name(event.player_id),
                cards_played=event.data.get("cards_played", ""),
            )
        elif event.event_type is EventType.GAME_WON:
            self._append(round_label=FINAL_ROW_LABEL, winner=self._name(event.player_id), cards_played="")

    def _name(self, player_id) -> str:
        if player_id is None or not 0 <= player_id < len(self.player_names):
            raise ValueError(f"Unknown player id {player_id!r} in score event.")
        return self.player_names[player_id]

    def _append(self, *, round_label, winner: str, cards_played) -> None:
        row = {"game": self.game_label, "round": round_label, "winner": winner, "cards_played": cards_played}
        row.update({name: self._last_scores.get(name, 0) for name in self.player_names})
        write_header = not self.path.exists() or self.path.stat().st_size == 0
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=self.fieldnames)
            if write_header:
                writer.writeheader()
            writer.writerow(row)
        logger.debug("Appended score row for round %s to %s", round_label, self.path)


def read_score_records(path: Union[str, Path]) -> list[dict[str, str]]:
    with Path(path).open(newline="") as handle:
        return list(csv.DictReader(handle))
