"""
bitboard.py
═══════════
64‑bit “bit‑board” primitives. Sixteen 4‑bit exponents, cell ``i`` at
bits ``4*i .. 4*i+3``; cell (r, c) is index ``4*r + c``.
"""

from typing import List


ROW_MASK  = 0xFFFF
CELL_MASK = 0xF
FULL_MASK = 0xFFFFFFFFFFFFFFFF


def get_cell(board: int, index: int) -> int:
    assert 0 <= index < 16, "cell index must be in [0, 16)"
    return (board >> (4 * index)) & CELL_MASK


def set_cell(board: int, index: int, exponent: int) -> int:
    assert 0 <= index < 16, "cell index must be in [0, 16)"
    assert 0 <= exponent <= 0xF, "exponent must fit in a nibble"
    shift = 4 * index
    return (board & ~(CELL_MASK << shift) & FULL_MASK) | (exponent << shift)


def encode_row(board: int, row_index: int) -> int:
    """Board → 16‑bit row ``row_index``."""
    assert 0 <= row_index < 4, "row index must be in [0, 4)"
    return (board >> (16 * row_index)) & ROW_MASK


def decode_row(row16: int, row_index: int) -> int:
    """16‑bit row → its bits placed at ``row_index`` of an empty board."""
    assert 0 <= row_index < 4, "row index must be in [0, 4)"
    return (row16 & ROW_MASK) << (16 * row_index)


def unpack_row(row16: int) -> List[int]:
    """16‑bit row → [e0,e1,e2,e3] exponents (0 = empty)."""
    return [(row16 >> (4 * i)) & CELL_MASK for i in range(4)]


def pack_row(vals) -> int:
    """[e0..e3] → 16‑bit row."""
    r = 0
    for i, v in enumerate(vals):
        r |= (v & CELL_MASK) << (4 * i)
    return r


def reverse_row(row16: int) -> int:
    """abcd (LSB→MSB)  ⇒  dcba."""
    return ((row16 & 0xF)      << 12 |
            (row16 & 0xF0)     << 4  |
            (row16 & 0xF00)    >> 4  |
            (row16 & 0xF000)   >> 12)


def transpose(board: int) -> int:
    """Swap rows ↔ columns: transpose each 2×2 block, then swap the off‑diagonal blocks."""
    a1 = board & 0xF0F00F0FF0F00F0F
    a2 = board & 0x0000F0F00000F0F0
    a3 = board & 0x0F0F00000F0F0000
    a  = a1 | (a2 << 12) | (a3 >> 12)
    b1 = a & 0xFF00FF0000FF00FF
    b2 = a & 0x00FF00FF00000000
    b3 = a & 0x00000000FF00FF00
    return b1 | (b2 >> 24) | (b3 << 24)


def max_exponent(board: int) -> int:
    best = 0
    b = board
    for _ in range(16):
        e = b & CELL_MASK
        if e > best:
            best = e
        b >>= 4
    return best


def empty_count(board: int) -> int:
    count = 0
    b = board
    for _ in range(16):
        if (b & CELL_MASK) == 0:
            count += 1
        b >>= 4
    return count


def as_grid(board: int) -> List[List[int]]:
    return [[(1 << e) if e else 0
             for e in (get_cell(board, r * 4 + c) for c in range(4))]
            for r in range(4)]


def render_ascii(board: int, cell_width: int = 6) -> str:
    """Return an ASCII art string visualizing the board."""
    sep = "+" + ("-" * cell_width + "+") * 4
    out_lines: List[str] = [sep]
    for row in as_grid(board):
        row_parts = ["|"]
        for val in row:
            cell = str(val) if val != 0 else "."
            row_parts.append(cell.center(cell_width))
            row_parts.append("|")
        out_lines.append("".join(row_parts))
        out_lines.append(sep)
    return "\n".join(out_lines)
