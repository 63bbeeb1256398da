"""
cli.py
──────
Command line front end.

  • one game            →   python -m expectimax2048 play --seed 42 [--depth 3]
  • benchmark           →   python -m expectimax2048 eval --games 20 --workers 4
  • baseline weights    →   python -m expectimax2048 init-weights --out weights.json
"""

import argparse
import json
import logging
import os
import random
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from .evaluator import LinearValueFunction
from .expectimax import ExpectimaxAI, SearchConfig
from .runner import WIN_EXPONENT, analyze_results, play_game, print_statistics, run_games
from .weights import Weights, WeightsError, default_weights, load_weights, save_weights

logger = logging.getLogger(__name__)


def _add_search_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--weights", type=str, default=None, help="weights JSON (default: built-in baseline)")
    p.add_argument("--depth", type=int, default=3, help="base expectimax depth")
    p.add_argument("--sample", type=int, default=6, help="chance-node sample width (<=0: all empty cells)")
    p.add_argument("--tt-capacity", type=int, default=200_000, help="transposition table size (0 disables)")
    p.add_argument("--max-steps", type=int, default=None, help="stop a game after this many moves")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="expectimax2048", description="Bit-board 2048 expectimax player")
    p.add_argument("--log-level", type=str, default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="logging level")
    sub = p.add_subparsers(dest="cmd", required=True)

    p1 = sub.add_parser("play", help="Play one AI game")
    _add_search_args(p1)
    p1.add_argument("--seed", type=int, default=None, help="game seed (default: random)")
    p1.add_argument("--quiet", action="store_true", help="suppress move log")

    p2 = sub.add_parser("eval", help="Play many games and report statistics")
    _add_search_args(p2)
    p2.add_argument("--games", type=int, default=10, help="how many games")
    p2.add_argument("--seed", type=int, default=1000, help="seed of the first game")
    p2.add_argument("--workers", type=int, default=1, help="worker processes")
    p2.add_argument("--win-exponent", type=int, default=WIN_EXPONENT, help="tile exponent counted as a win")
    p2.add_argument("--save-stats", action="store_true", help="save statistics to a JSON file")
    p2.add_argument("--output-dir", type=str, default="stats", help="directory for saved statistics")

    p3 = sub.add_parser("init-weights", help="Write the baseline weights file")
    p3.add_argument("--out", type=str, default="weights.json", help="output path")

    return p


def config_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    return {
        "max_depth": args.depth,
        "sample_k": args.sample,
        "tt_capacity": args.tt_capacity,
    }


def _weights_from_args(args: argparse.Namespace) -> Weights:
    if args.weights is None:
        return default_weights()
    return load_weights(args.weights)


def cmd_play(args: argparse.Namespace) -> int:
    weights = _weights_from_args(args)
    config = SearchConfig.from_dict(config_from_args(args))
    seed = args.seed if args.seed is not None else random.randrange(2**32)
    logger.info(f"Playing seed {seed} with {config}")

    ai = ExpectimaxAI(LinearValueFunction(weights), config)
    result = play_game(ai, seed, max_steps=args.max_steps, render=not args.quiet)
    print(f"\nGame over. Final score: {result['score']}  "
          f"max tile: {result['max_tile']}  turns: {result['turns']}  seed: {seed}")
    return 0


def save_statistics(stats: Dict[str, Any], args: argparse.Namespace, weights: Weights) -> str:
    os.makedirs(args.output_dir, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filepath = os.path.join(args.output_dir, f"stats_{args.games}games_{timestamp}.json")

    json_stats = {k: v for k, v in stats.items() if k != "tile_stats"}
    json_stats["tile_stats"] = {
        str(tile): {"count": count, "percentage": pct}
        for tile, (count, pct) in stats["tile_stats"].items()
    }
    json_stats["config"] = {
        **config_from_args(args),
        "seed": args.seed,
        "weights": args.weights or weights.version,
        "date": timestamp,
    }
    with open(filepath, "w") as f:
        json.dump(json_stats, f, indent=2)
    logger.info(f"Statistics saved to {filepath}")
    return filepath


def cmd_eval(args: argparse.Namespace) -> int:
    weights = _weights_from_args(args)
    config = SearchConfig.from_dict(config_from_args(args))
    print(f"Playing {args.games} games (depth={config.max_depth}, sample={config.sample_k})...")

    results = run_games(weights, args.games, args.seed, config,
                        workers=args.workers, max_steps=args.max_steps, progress=True)
    stats = analyze_results(results, win_exponent=args.win_exponent)
    print_statistics(stats)
    if args.save_stats:
        save_statistics(stats, args, weights)
    return 0


def cmd_init_weights(args: argparse.Namespace) -> int:
    save_weights(default_weights(), args.out)
    print(f"Wrote baseline weights to {args.out}")
    return 0


COMMANDS = {
    "play": cmd_play,
    "eval": cmd_eval,
    "init-weights": cmd_init_weights,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        return COMMANDS[args.cmd](args)
    except WeightsError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
