"""
expectimax.py
─────────────
Depth‑limited expectimax over the bit‑board.

Decision nodes take the best legal move (score gained + value of the
resulting chance node); chance nodes average the 2‑tile (p=0.9) and 4‑tile
(p=0.1) spawns over a deterministic sample of the empty cells. Every
recursive node is memoised in a transposition table that lives for exactly
one ``choose_move`` call.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Protocol

from .bitboard import empty_count
from .evaluator import BoardEvaluator
from .rng import MASK64, SplitMix64
from .rules import Move, apply_move, empty_cells, legal_moves, spawn
from .state import GameState
from .transposition import NodeKind, SearchKey, TranspositionTable

logger = logging.getLogger(__name__)

__all__ = [
    "MAX_SEARCH_DEPTH",
    "MovePlayer",
    "SearchConfig",
    "ExpectimaxAI",
    "adaptive_depth",
]

MAX_SEARCH_DEPTH = 8
SAMPLE_SEED_MIX = 0xD6E8FEB86659FD93
SPAWN_PROBS = ((1, 0.9), (2, 0.1))  # (exponent, probability)


class MovePlayer(Protocol):
    def choose_move(self, state: GameState) -> Optional[Move]:
        """Best move for ``state``, or None when the game is over."""
        ...


@dataclass(frozen=True)
class SearchConfig:
    max_depth: int = 3          # base depth before the adaptive bonus
    sample_k: int = 6           # chance‑node sample width; <= 0 means every empty cell
    tt_capacity: int = 200_000  # 0 disables memoisation

    def __post_init__(self) -> None:
        object.__setattr__(self, "max_depth", max(0, int(self.max_depth)))
        object.__setattr__(self, "sample_k", int(self.sample_k))
        object.__setattr__(self, "tt_capacity", max(0, int(self.tt_capacity)))

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> "SearchConfig":
        defaults = cls()
        return cls(
            max_depth=config.get("max_depth", defaults.max_depth),
            sample_k=config.get("sample_k", defaults.sample_k),
            tt_capacity=config.get("tt_capacity", defaults.tt_capacity),
        )

    def to_dict(self) -> Dict[str, int]:
        return {
            "max_depth": self.max_depth,
            "sample_k": self.sample_k,
            "tt_capacity": self.tt_capacity,
        }


def adaptive_depth(base_depth: int, empties: int) -> int:
    """Search deeper as the board fills up: fewer branches, higher stakes."""
    depth = base_depth
    if empties <= 2:
        depth += 3
    elif empties <= 4:
        depth += 2
    elif empties <= 7:
        depth += 1
    return min(depth, MAX_SEARCH_DEPTH)


class ExpectimaxAI:
    """
    Move chooser. An instance owns its transposition table, so it must not
    be shared between concurrently running searches; build one per worker.
    """

    def __init__(self, evaluator: BoardEvaluator, config: Optional[SearchConfig] = None) -> None:
        self.evaluator = evaluator
        self.config = config if config is not None else SearchConfig()
        self.tt = TranspositionTable(self.config.tt_capacity)

    def choose_move(self, state: GameState) -> Optional[Move]:
        board = state.board
        legal = legal_moves(board)
        if not legal:
            return None

        self.tt.reset()
        depth = adaptive_depth(self.config.max_depth, empty_count(board))

        best_move: Optional[Move] = None
        best_value = -math.inf
        for move in legal:
            res = apply_move(board, move)
            v = res.score_gain + self._expectimax(res.board, depth - 1, NodeKind.CHANCE)
            # strict: on ties the earlier move in Move order wins
            if v > best_value:
                best_value = v
                best_move = move

        logger.debug(f"chose {best_move.name} value={best_value:.3f} "
                     f"depth={depth} tt={len(self.tt)}")
        return best_move

    def _expectimax(self, board: int, depth: int, kind: NodeKind) -> float:
        if depth <= 0:
            return self.evaluator.evaluate(board)

        key = SearchKey(board, depth, kind)
        cached = self.tt.get(key)
        if cached is not None:
            return cached

        if kind is NodeKind.DECISION:
            best = -math.inf
            for move in Move:
                res = apply_move(board, move)
                if res is None:
                    continue
                v = res.score_gain + self._expectimax(res.board, depth - 1, NodeKind.CHANCE)
                if v > best:
                    best = v
            # no legal move: terminal board, scored as a leaf
            value = best if best != -math.inf else self.evaluator.evaluate(board)
        else:
            empties = empty_cells(board)
            if not empties:
                value = self.evaluator.evaluate(board)
            else:
                sample = self.sample_empty_cells(empties, board, depth)
                acc = 0.0
                for idx in sample:
                    for exponent, p in SPAWN_PROBS:
                        child = spawn(board, idx, exponent)
                        acc += p * self._expectimax(child, depth - 1, NodeKind.DECISION)
                value = acc / len(sample)

        self.tt.store(key, value)
        return value

    def sample_empty_cells(self, empties: List[int], board: int, depth: int) -> List[int]:
        """
        Up to ``sample_k`` distinct empty cells via a partial Fisher–Yates
        shuffle seeded from (board, depth): the same node always sees the
        same sample.
        """
        k = self.config.sample_k
        if k <= 0 or len(empties) <= k:
            return empties

        working = list(empties)
        rng = SplitMix64((board + depth * SAMPLE_SEED_MIX) & MASK64)
        for i in range(k):
            j = i + rng.next_int(len(working) - i)
            if i != j:
                working[i], working[j] = working[j], working[i]
        return working[:k]
