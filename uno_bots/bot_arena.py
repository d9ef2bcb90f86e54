"""Simple bot arena for the UNO simulator."""

from __future__ import annotations

import argparse
import logging
from collections import Counter
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, Sequence

from uno_engine.events import EventLogger
from uno_engine.game import GameSession
from uno_engine.policy import HeuristicPolicy, SelectionPolicy
from uno_engine.records import ScoreRecordWriter
from uno_engine.rules_schema import RuleSet, load_rules

from .baseline_greedy import GreedyBot
from .random_bot import RandomBot

logger = logging.getLogger(__name__)

BOT_REGISTRY: Dict[str, Callable[[RuleSet], SelectionPolicy]] = {
    "heuristic": lambda rules: HeuristicPolicy(rules.wild_opportunism),
    "greedy": lambda rules: GreedyBot(),
    "random": lambda rules: RandomBot(),
}


def build_session(
    bots: Sequence[str],
    *,
    rules: Optional[RuleSet] = None,
    names: Optional[Sequence[str]] = None,
) -> GameSession:
    rules = rules or RuleSet()
    names = list(names) if names is not None else [f"Player{idx + 1}" for idx in range(len(bots))]
    if len(names) != len(bots):
        raise ValueError("Provide one name per bot.")
    session = GameSession(rules=rules)
    for name, bot in zip(names, bots):
        try:
            factory = BOT_REGISTRY[bot]
        except KeyError as exc:
            raise ValueError(f"Unknown bot {bot!r}; choose from {sorted(BOT_REGISTRY)}.") from exc
        session.add_player(name, factory(rules))
    return session


def run_match(
    bots: Sequence[str],
    *,
    n_games: int = 1,
    seed: Optional[int] = None,
    rules: Optional[RuleSet] = None,
    csv_path: Optional[Path] = None,
    max_rounds: Optional[int] = None,
) -> dict:
    rules = rules or RuleSet()
    names = [f"Player{idx + 1}" for idx in range(len(bots))]
    wins: Counter = Counter()
    history = []
    for game_idx in range(n_games):
        game_seed = None if seed is None else seed + game_idx
        session = build_session(bots, rules=rules.model_copy(update={"seed": game_seed}), names=names)
        session.subscribe(EventLogger({player.id: player.name for player in session.players}))
        if csv_path is not None:
            session.subscribe(ScoreRecordWriter(csv_path, names, game_label=str(game_idx + 1)))

        ledger = session.play_game(max_rounds=max_rounds)
        winner = ledger.winner()
        if winner is not None:
            wins[names[winner]] += 1
        history.append(
            {
                "seed": game_seed,
                "rounds": len(ledger.history),
                "scores": {names[player]: score for player, score in ledger.scores.items()},
                "winner": names[winner] if winner is not None else None,
            }
        )
        logger.info("Game %d finished after %d rounds; winner=%s", game_idx + 1, len(ledger.history), history[-1]["winner"])
    return {"players": dict(zip(names, bots)), "wins": dict(wins), "history": history}


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run automated UNO games between bots.")
    parser.add_argument(
        "--bots",
        nargs="+",
        default=["heuristic", "heuristic", "greedy", "random"],
        choices=BOT_REGISTRY.keys(),
        help="One bot per seat (2-4).",
    )
    parser.add_argument("--games", type=int, default=1, help="Number of games to play.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--rules", type=str, default=None, help="Path to a JSON rules file.")
    parser.add_argument("--csv", type=str, default=None, help="Append per-round scores to this CSV file.")
    parser.add_argument("--log-level", type=str, default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    rules = load_rules(args.rules) if args.rules else RuleSet()
    if not rules.min_players <= len(args.bots) <= rules.max_players:
        parser.error(f"--bots needs between {rules.min_players} and {rules.max_players} entries, got {len(args.bots)}.")
    results = run_match(
        args.bots,
        n_games=args.games,
        seed=args.seed,
        rules=rules,
        csv_path=Path(args.csv) if args.csv else None,
    )

    print(f"Games played: {args.games}")
    for name, bot in results["players"].items():
        print(f"  {name} ({bot}): {results['wins'].get(name, 0)} wins")


if __name__ == "__main__":
    main()
