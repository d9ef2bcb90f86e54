"""Validation schema for UNO rules configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator


class RuleSet(BaseModel):
    min_players: int = Field(2, ge=2, description="Players required before the game can start.")
    max_players: int = Field(4, le=4, description="Seats available at the table.")
    hand_size: int = Field(7, ge=1, description="Cards dealt to every player each round.")
    winning_score: int = Field(500, gt=0, description="Cumulative score that ends the game.")
    wild_opportunism: float = Field(
        0.3,
        ge=0.0,
        le=1.0,
        description="Chance that the heuristic player lays a plain Wild ahead of a matching card.",
    )
    dealer_selection: Literal["rotate", "draw"] = Field(
        "rotate",
        description="How later rounds pick the dealer; the first round always draws.",
    )
    seed: Optional[int] = Field(None, description="Seed for the shared random source.")

    @field_validator("max_players")
    @classmethod
    def ensure_table_size(cls, value: int) -> int:
        if value < 2:
            raise ValueError("A table needs at least two seats.")
        return value

    @model_validator(mode="after")
    def check_player_bounds(self) -> "RuleSet":
        if self.min_players > self.max_players:
            raise ValueError("min_players cannot exceed max_players.")
        # 108 cards must cover every hand, a seed card and a draw to replenish from.
        if self.hand_size * self.max_players > 100:
            raise ValueError("hand_size is too large for a full table.")
        return self


def load_rules(path: Union[str, Path]) -> RuleSet:
    """Read a JSON rules file."""
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    return RuleSet.model_validate(payload)
