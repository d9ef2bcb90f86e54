"""Bot strategies for the UNO simulator."""

from uno_engine.policy import HeuristicPolicy

from .baseline_greedy import GreedyBot
from .random_bot import RandomBot

__all__ = ["HeuristicPolicy", "GreedyBot", "RandomBot"]
