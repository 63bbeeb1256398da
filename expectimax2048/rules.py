from enum import IntEnum
from typing import List, NamedTuple, Optional

from .bitboard import decode_row, encode_row, get_cell, reverse_row, set_cell, transpose
from .rng import SplitMix64
from .tables import ROW_LEFT, ROW_SCORE

__all__ = [
    "Move",
    "MoveResult",
    "apply_move",
    "legal_moves",
    "is_terminal",
    "empty_cells",
    "spawn",
    "spawn_random",
]

SPAWN_FOUR_ONE_IN = 10  # exponent 2 with probability 1/10, else exponent 1


class Move(IntEnum):
    """Iteration order is the tie‑break order used by the search."""
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3

    @property
    def arrow(self) -> str:
        return "↑↓←→"[self.value]


class MoveResult(NamedTuple):
    board: int
    score_gain: int


def _move_left(board: int) -> Optional[MoveResult]:
    out = 0
    gain = 0
    for i in range(4):
        row = encode_row(board, i)
        out |= decode_row(ROW_LEFT[row], i)
        gain += ROW_SCORE[row]
    return MoveResult(out, gain) if out != board else None


def _move_right(board: int) -> Optional[MoveResult]:
    out = 0
    gain = 0
    for i in range(4):
        row = reverse_row(encode_row(board, i))
        out |= decode_row(reverse_row(ROW_LEFT[row]), i)
        gain += ROW_SCORE[row]
    return MoveResult(out, gain) if out != board else None


def apply_move(board: int, move: Move) -> Optional[MoveResult]:
    """Slide/merge ``board`` in ``move``'s direction; ``None`` when nothing changes."""
    if move == Move.LEFT:
        return _move_left(board)
    if move == Move.RIGHT:
        return _move_right(board)

    t = transpose(board)
    res = _move_left(t) if move == Move.UP else _move_right(t)
    if res is None:
        return None
    return MoveResult(transpose(res.board), res.score_gain)


def legal_moves(board: int) -> List[Move]:
    return [m for m in Move if apply_move(board, m) is not None]


def is_terminal(board: int) -> bool:
    return all(apply_move(board, m) is None for m in Move)


def empty_cells(board: int) -> List[int]:
    """Ascending indices of empty cells."""
    cells: List[int] = []
    b = board
    for idx in range(16):
        if (b & 0xF) == 0:
            cells.append(idx)
        b >>= 4
    return cells


def spawn(board: int, index: int, exponent: int) -> int:
    assert exponent > 0, "spawned tile must be non-empty"
    assert get_cell(board, index) == 0, "spawn target must be empty"
    return set_cell(board, index, exponent)


def spawn_random(board: int, rng: SplitMix64) -> int:
    """Place a 2 (p=0.9) or 4 (p=0.1) on a uniformly chosen empty cell; full boards are returned as is."""
    empties = empty_cells(board)
    if not empties:
        return board
    pos = empties[rng.next_int(len(empties))]
    exponent = 2 if rng.next_int(SPAWN_FOUR_ONE_IN) == 0 else 1
    return spawn(board, pos, exponent)
