"""
tables.py
═════════
Per‑row lookup tables over all 65536 16‑bit rows, built once at import.

    ROW_LEFT[r]    row after sliding/merging left
    ROW_SCORE[r]   score gained by that slide (sum of merged tile values)
    ROW_SMOOTH[r]  −Σ|a−b| over adjacent non‑empty pairs
    ROW_MONO[r]    −min(increase, decrease) over the three adjacent pairs
    ROW_MERGE[r]   number of adjacent equal non‑empty pairs

The tables are tuples and never mutated, so concurrent readers need no locking.
"""

from typing import Tuple

import numba
import numpy as np

NUM_ROWS = 65536
MAX_EXPONENT = 0xF


@numba.njit(cache=True)
def _build_row_tables():
    row_left   = np.zeros(NUM_ROWS, dtype=np.int64)
    row_score  = np.zeros(NUM_ROWS, dtype=np.int64)
    row_smooth = np.zeros(NUM_ROWS, dtype=np.int64)
    row_mono   = np.zeros(NUM_ROWS, dtype=np.int64)
    row_merge  = np.zeros(NUM_ROWS, dtype=np.int64)

    cells  = np.zeros(4, dtype=np.int64)
    tight  = np.zeros(4, dtype=np.int64)
    merged = np.zeros(4, dtype=np.int64)

    for r in range(NUM_ROWS):
        for i in range(4):
            cells[i] = (r >> (4 * i)) & 0xF

        # compact
        count = 0
        for i in range(4):
            if cells[i] != 0:
                tight[count] = cells[i]
                count += 1

        # merge, each tile at most once per pass
        for i in range(4):
            merged[i] = 0
        score = 0
        write_idx = 0
        read_idx = 0
        while read_idx < count:
            cur = tight[read_idx]
            if read_idx + 1 < count and tight[read_idx + 1] == cur:
                merged[write_idx] = min(cur + 1, MAX_EXPONENT)
                score += 1 << (cur + 1)
                read_idx += 2
            else:
                merged[write_idx] = cur
                read_idx += 1
            write_idx += 1

        out = 0
        for i in range(4):
            out |= (merged[i] & 0xF) << (4 * i)
        row_left[r] = out
        row_score[r] = score

        smooth = 0
        inc = 0
        dec = 0
        merges = 0
        for i in range(3):
            a = cells[i]
            b = cells[i + 1]
            if a != 0 and b != 0:
                smooth -= abs(a - b)
            if a > b:
                dec += a - b
            else:
                inc += b - a
            if a != 0 and a == b:
                merges += 1
        row_smooth[r] = smooth
        row_mono[r] = -min(inc, dec)
        row_merge[r] = merges

    return row_left, row_score, row_smooth, row_mono, row_merge


def _freeze(arr: np.ndarray) -> Tuple[int, ...]:
    return tuple(arr.tolist())


_tables = _build_row_tables()

ROW_LEFT:   Tuple[int, ...] = _freeze(_tables[0])
ROW_SCORE:  Tuple[int, ...] = _freeze(_tables[1])
ROW_SMOOTH: Tuple[int, ...] = _freeze(_tables[2])
ROW_MONO:   Tuple[int, ...] = _freeze(_tables[3])
ROW_MERGE:  Tuple[int, ...] = _freeze(_tables[4])

del _tables


def move_row_left(row16: int) -> Tuple[int, int]:
    """(output_row, score_gain) for sliding ``row16`` left."""
    return ROW_LEFT[row16], ROW_SCORE[row16]
