"""
Play complete games with the expectimax player and summarise the results.

Each game builds its own evaluator, engine and transposition table, so
``run_games(..., workers=N)`` can fan games out over a process pool without
sharing any mutable state.
"""

import logging
import multiprocessing
from typing import Any, Dict, List, Optional, Tuple

from tabulate import tabulate
from tqdm import tqdm

from .bitboard import render_ascii
from .evaluator import LinearValueFunction
from .expectimax import ExpectimaxAI, MovePlayer, SearchConfig
from .rng import MASK64
from .state import GameState
from .weights import Weights

logger = logging.getLogger(__name__)

__all__ = [
    "WIN_EXPONENT",
    "play_game",
    "run_games",
    "analyze_results",
    "print_statistics",
]

WIN_EXPONENT = 11  # 2**11 == 2048


def play_game(
    player: MovePlayer,
    seed: int,
    max_steps: Optional[int] = None,
    render: bool = False,
) -> Dict[str, Any]:
    """Play one game from ``GameState.new_game(seed)`` and return its statistics."""
    state = GameState.new_game(seed)
    turns = 0

    while max_steps is None or turns < max_steps:
        move = player.choose_move(state)
        if move is None:
            break
        if not state.apply(move):
            # a well-behaved player never proposes an illegal move
            logger.warning(f"Player proposed illegal move {move.name} on seed {seed}, stopping")
            break
        turns += 1

        if render:
            print(f"\nMove {move.arrow}  total={state.score}")
            print(render_ascii(state.board))

    max_e = state.max_exponent
    result = {
        "seed": seed,
        "score": state.score,
        "max_exponent": max_e,
        "max_tile": (1 << max_e) if max_e else 0,
        "turns": turns,
        "terminal": state.is_terminal,
    }
    logger.info(f"Game seed={seed} finished. Score: {state.score}, "
                f"Max Tile: {result['max_tile']}, Turns: {turns}")
    return result


def _play_seed(job: Tuple[Dict[str, Any], Dict[str, int], int, Optional[int]]) -> Dict[str, Any]:
    weights, config, seed, max_steps = job
    # plain dicts cross the process boundary; Weights holds read-only mapping proxies
    evaluator = LinearValueFunction(Weights.from_dict(weights))
    ai = ExpectimaxAI(evaluator, SearchConfig.from_dict(config))
    return play_game(ai, seed, max_steps=max_steps)


def run_games(
    weights: Weights,
    games: int,
    seed: int,
    config: Optional[SearchConfig] = None,
    workers: int = 1,
    max_steps: Optional[int] = None,
    progress: bool = False,
) -> List[Dict[str, Any]]:
    """Game ``i`` starts from seed ``seed + i``; results come back in seed order."""
    assert games > 0, "games must be positive"
    config = config if config is not None else SearchConfig()
    jobs = [(weights.to_dict(), config.to_dict(), (seed + i) & MASK64, max_steps) for i in range(games)]

    if workers <= 1:
        return [_play_seed(job) for job in tqdm(jobs, disable=not progress)]

    logger.info(f"Playing {games} games on {workers} worker processes")
    with multiprocessing.Pool(processes=workers) as pool:
        return list(tqdm(pool.imap(_play_seed, jobs), total=games, disable=not progress))


def analyze_results(results: List[Dict[str, Any]], win_exponent: int = WIN_EXPONENT) -> Dict[str, Any]:
    n = len(results)
    assert n > 0, "no results to analyze"
    max_exps = [r["max_exponent"] for r in results]

    # share of games reaching each tile from 4 up to at least the win tile
    tile_stats = {}
    for power in range(2, max(win_exponent, max(max_exps)) + 1):
        count = sum(1 for e in max_exps if e >= power)
        tile_stats[1 << power] = (count, count / n * 100)

    return {
        "num_games": n,
        "avg_score": sum(r["score"] for r in results) / n,
        "avg_turns": sum(r["turns"] for r in results) / n,
        "avg_max_exponent": sum(max_exps) / n,
        "max_max_exponent": max(max_exps),
        "win_rate": sum(1 for e in max_exps if e >= win_exponent) / n,
        "win_exponent": win_exponent,
        "tile_stats": tile_stats,
    }


def print_statistics(stats: Dict[str, Any]) -> None:
    print(f"\nStatistics for {stats['num_games']} games:")
    print(f"Average score: {stats['avg_score']:.1f}")
    print(f"Average turns: {stats['avg_turns']:.1f}")
    print(f"Average max exponent: {stats['avg_max_exponent']:.2f} "
          f"(best {stats['max_max_exponent']})")

    table_data = []
    for tile_value, (count, percentage) in sorted(stats["tile_stats"].items()):
        table_data.append([f"{tile_value}", f"{count}/{stats['num_games']}", f"{percentage:.1f}%"])

    print("\nMax Tile Achievement Rates:")
    print(tabulate(table_data, headers=["Tile", "Count", "Percentage"], tablefmt="grid"))
    print(f"\nWin Rate (≥{1 << stats['win_exponent']} tile): {stats['win_rate'] * 100:.1f}%")
