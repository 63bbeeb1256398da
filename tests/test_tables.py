import unittest

from expectimax2048.bitboard import pack_row, unpack_row
from expectimax2048.tables import (
    ROW_LEFT, ROW_MERGE, ROW_MONO, ROW_SCORE, ROW_SMOOTH, move_row_left,
)


def move_row_left_slow(row16):
    tiles = [t for t in unpack_row(row16) if t]
    merged = []
    score = 0
    i = 0
    while i < len(tiles):
        cur = tiles[i]
        if i + 1 < len(tiles) and tiles[i + 1] == cur:
            merged.append(min(cur + 1, 15))
            score += 1 << (cur + 1)
            i += 2
        else:
            merged.append(cur)
            i += 1
    merged += [0] * (4 - len(merged))
    return pack_row(merged), score


class TestRowMoveTable(unittest.TestCase):

    def test_sizes(self):
        for table in (ROW_LEFT, ROW_SCORE, ROW_SMOOTH, ROW_MONO, ROW_MERGE):
            self.assertEqual(len(table), 65536)

    def test_tables_are_immutable(self):
        with self.assertRaises(TypeError):
            ROW_LEFT[0] = 1

    def test_matches_slow_for_all_rows(self):
        for row in range(65536):
            self.assertEqual(move_row_left(row), move_row_left_slow(row), f"row={row:#06x}")

    def test_no_chain_merge(self):
        # 2 2 2 2 -> 4 4, not 8
        out, score = move_row_left(pack_row([1, 1, 1, 1]))
        self.assertEqual(unpack_row(out), [2, 2, 0, 0])
        self.assertEqual(score, 8)

        # 2 2 4 . -> 4 4 . .
        out, score = move_row_left(pack_row([1, 1, 2, 0]))
        self.assertEqual(unpack_row(out), [2, 2, 0, 0])
        self.assertEqual(score, 4)

    def test_three_equal_merges_leftmost_pair(self):
        out, score = move_row_left(pack_row([3, 3, 3, 0]))
        self.assertEqual(unpack_row(out), [4, 3, 0, 0])
        self.assertEqual(score, 16)

    def test_compaction_across_gaps(self):
        out, score = move_row_left(pack_row([0, 5, 0, 5]))
        self.assertEqual(unpack_row(out), [6, 0, 0, 0])
        self.assertEqual(score, 64)

    def test_top_exponent_is_capped(self):
        out, score = move_row_left(pack_row([15, 15, 0, 0]))
        self.assertEqual(unpack_row(out), [15, 0, 0, 0])
        self.assertEqual(score, 1 << 16)

    def test_static_row(self):
        row = pack_row([1, 2, 3, 4])
        self.assertEqual(move_row_left(row), (row, 0))


class TestRowFeatureTables(unittest.TestCase):

    def test_smoothness_skips_empty_cells(self):
        self.assertEqual(ROW_SMOOTH[pack_row([1, 3, 0, 7])], -2)
        self.assertEqual(ROW_SMOOTH[pack_row([0, 0, 0, 0])], 0)
        self.assertEqual(ROW_SMOOTH[pack_row([4, 4, 4, 4])], 0)

    def test_monotonicity(self):
        self.assertEqual(ROW_MONO[pack_row([1, 2, 3, 4])], 0)
        self.assertEqual(ROW_MONO[pack_row([4, 3, 2, 1])], 0)
        # inc = 2 (1->3) + 1 (2->3), dec = 1 (3->2)
        self.assertEqual(ROW_MONO[pack_row([1, 3, 2, 3])], -1)
        # zeros take part: 5 -> 0 -> 5 gives inc 5, dec 5
        self.assertEqual(ROW_MONO[pack_row([5, 0, 5, 5])], -5)

    def test_merge_potential(self):
        self.assertEqual(ROW_MERGE[pack_row([2, 2, 2, 2])], 3)
        self.assertEqual(ROW_MERGE[pack_row([0, 0, 0, 0])], 0)
        self.assertEqual(ROW_MERGE[pack_row([2, 0, 2, 3])], 0)
        self.assertEqual(ROW_MERGE[pack_row([1, 1, 3, 3])], 2)

    def test_feature_tables_match_slow_sample(self):
        for row in range(0, 65536, 97):
            c = unpack_row(row)
            pairs = list(zip(c, c[1:]))
            smooth = -sum(abs(a - b) for a, b in pairs if a and b)
            inc = sum(b - a for a, b in pairs if b >= a)
            dec = sum(a - b for a, b in pairs if a > b)
            merge = sum(1 for a, b in pairs if a and a == b)
            self.assertEqual(ROW_SMOOTH[row], smooth)
            self.assertEqual(ROW_MONO[row], -min(inc, dec))
            self.assertEqual(ROW_MERGE[row], merge)


if __name__ == "__main__":
    unittest.main()
