"""Core engine package for the UNO simulator."""

__all__ = [
    "cards",
    "deck",
    "stacks",
    "turn_order",
    "rng",
    "player",
    "policy",
    "mechanics",
    "effects",
    "scoring",
    "state",
    "game",
    "events",
    "records",
    "rules_schema",
    "service",
]
