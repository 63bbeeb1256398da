from __future__ import annotations

from typing import Optional

from .bitboard import max_exponent, render_ascii
from .rng import MASK64, SplitMix64
from .rules import Move, apply_move, is_terminal, spawn_random

__all__ = ["GameState"]

MAX_SCORE = MASK64


class GameState:
    """
    One game in progress: packed board, cumulative score and the spawn RNG.

    The RNG is part of the state, so copying a ``GameState`` and playing the
    same moves on both copies yields identical boards.
    """

    __slots__ = ("board", "score", "rng")

    def __init__(self, board: int, score: int = 0, rng: Optional[SplitMix64] = None) -> None:
        self.board: int = board
        self.score: int = score
        self.rng: SplitMix64 = rng if rng is not None else SplitMix64(0)

    @classmethod
    def new_game(cls, seed: int) -> "GameState":
        """Empty board with two random spawns drawn from ``SplitMix64(seed)``."""
        rng = SplitMix64(seed)
        board = spawn_random(0, rng)
        board = spawn_random(board, rng)
        return cls(board, 0, rng)

    @property
    def is_terminal(self) -> bool:
        return is_terminal(self.board)

    @property
    def max_exponent(self) -> int:
        return max_exponent(self.board)

    def apply(self, move: Move) -> bool:
        """
        Play ``move`` then spawn a tile. Returns False (and leaves the state
        untouched) when the move does not change the board.
        """
        res = apply_move(self.board, move)
        if res is None:
            return False
        self.score = min(self.score + res.score_gain, MAX_SCORE)
        self.board = spawn_random(res.board, self.rng)
        return True

    def copy(self) -> "GameState":
        return GameState(self.board, self.score, self.rng.copy())

    def render_ascii(self) -> str:
        return render_ascii(self.board)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameState):
            return NotImplemented
        return (self.board, self.score, self.rng) == (other.board, other.score, other.rng)

    def __repr__(self) -> str:
        return f"GameState(board=0x{self.board:016x}, score={self.score}, rng={self.rng!r})"
