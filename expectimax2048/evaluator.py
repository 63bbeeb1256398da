from typing import NamedTuple, Protocol

from .bitboard import ROW_MASK, empty_count, get_cell, max_exponent, transpose
from .tables import ROW_MERGE, ROW_MONO, ROW_SMOOTH
from .weights import Weights

__all__ = [
    "BoardEvaluator",
    "BoardFeatures",
    "LinearValueFunction",
    "board_features",
]

CORNERS = (0, 3, 12, 15)


class BoardEvaluator(Protocol):
    """Anything that scores a packed board; higher is better."""

    def evaluate(self, board: int) -> float:
        ...


class BoardFeatures(NamedTuple):
    empty: int
    max: int
    smooth: int
    mono: int
    merge_potential: int
    corner_max: int


def board_features(board: int) -> BoardFeatures:
    """Raw feature values; row tables summed over the four rows and four columns."""
    smooth = mono = merges = 0

    t = transpose(board)
    for i in range(4):
        row = (board >> (16 * i)) & ROW_MASK
        col = (t >> (16 * i)) & ROW_MASK
        smooth += ROW_SMOOTH[row] + ROW_SMOOTH[col]
        mono   += ROW_MONO[row] + ROW_MONO[col]
        merges += ROW_MERGE[row] + ROW_MERGE[col]

    max_e = max_exponent(board)
    corner = 0
    for idx in CORNERS:
        if get_cell(board, idx) == max_e:
            corner = max_e
            break

    return BoardFeatures(empty_count(board), max_e, smooth, mono, merges, corner)


class LinearValueFunction:
    """Weighted sum of ``board_features``."""

    def __init__(self, weights: Weights) -> None:
        self.weights = weights
        self.w_empty = weights.weight("f_empty")
        self.w_max = weights.weight("f_max")
        self.w_smooth = weights.weight("f_smooth")
        self.w_mono = weights.weight("f_mono")
        self.w_merge = weights.weight("f_mergePotential")
        self.w_corner = weights.weight("f_cornerMax")

    def evaluate(self, board: int) -> float:
        f = board_features(board)
        return (self.w_empty * f.empty
                + self.w_max * f.max
                + self.w_smooth * f.smooth
                + self.w_mono * f.mono
                + self.w_merge * f.merge_potential
                + self.w_corner * f.corner_max)
