# Bit-board 2048 engine and expectimax player
from .bitboard import (
    get_cell, set_cell, encode_row, decode_row, reverse_row, transpose,
    max_exponent, empty_count, render_ascii,
)
from .rng import SplitMix64
from .tables import ROW_LEFT, ROW_SCORE, ROW_SMOOTH, ROW_MONO, ROW_MERGE, move_row_left
from .rules import Move, MoveResult, apply_move, legal_moves, is_terminal, empty_cells, spawn, spawn_random
from .state import GameState
from .weights import FEATURE_KEYS, LEGACY_ALIASES, Weights, WeightsError, default_weights, load_weights, save_weights
from .evaluator import BoardEvaluator, LinearValueFunction, board_features
from .transposition import NodeKind, SearchKey, TranspositionTable
from .expectimax import MovePlayer, SearchConfig, ExpectimaxAI, adaptive_depth
from .runner import play_game, run_games, analyze_results

__all__ = [
    "get_cell",
    "set_cell",
    "encode_row",
    "decode_row",
    "reverse_row",
    "transpose",
    "max_exponent",
    "empty_count",
    "render_ascii",

    "SplitMix64",

    "ROW_LEFT",
    "ROW_SCORE",
    "ROW_SMOOTH",
    "ROW_MONO",
    "ROW_MERGE",
    "move_row_left",

    "Move",
    "MoveResult",
    "apply_move",
    "legal_moves",
    "is_terminal",
    "empty_cells",
    "spawn",
    "spawn_random",

    "GameState",

    "FEATURE_KEYS",
    "LEGACY_ALIASES",
    "Weights",
    "WeightsError",
    "default_weights",
    "load_weights",
    "save_weights",

    "BoardEvaluator",
    "LinearValueFunction",
    "board_features",

    "NodeKind",
    "SearchKey",
    "TranspositionTable",

    "MovePlayer",
    "SearchConfig",
    "ExpectimaxAI",
    "adaptive_depth",

    "play_game",
    "run_games",
    "analyze_results",
]
