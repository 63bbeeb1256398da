import unittest

from expectimax2048.bitboard import set_cell
from expectimax2048.evaluator import LinearValueFunction, board_features
from expectimax2048.weights import FEATURE_KEYS, Weights, default_weights


def weights_with(**params):
    return Weights(version="test", created_at="", params=params)


def board_from_exponents(exps):
    board = 0
    for i, e in enumerate(exps):
        board = set_cell(board, i, e)
    return board


class TestBoardFeatures(unittest.TestCase):

    def test_empty_board(self):
        f = board_features(0)
        self.assertEqual(f.empty, 16)
        self.assertEqual(f.max, 0)
        self.assertEqual(f.smooth, 0)
        self.assertEqual(f.mono, 0)
        self.assertEqual(f.merge_potential, 0)
        # every cell, corners included, holds the maximum 0
        self.assertEqual(f.corner_max, 0)

    def test_corner_max(self):
        in_corner = set_cell(set_cell(0, 15, 5), 6, 3)
        self.assertEqual(board_features(in_corner).corner_max, 5)
        off_corner = set_cell(set_cell(0, 5, 5), 0, 3)
        self.assertEqual(board_features(off_corner).corner_max, 0)

    def test_rows_and_columns_both_count(self):
        # a single pair of equal tiles in row 0 and one in column 3
        board = board_from_exponents([
            2, 2, 0, 4,
            0, 0, 0, 4,
            0, 0, 0, 0,
            0, 0, 0, 0,
        ])
        f = board_features(board)
        self.assertEqual(f.merge_potential, 2)
        self.assertEqual(f.empty, 12)
        self.assertEqual(f.max, 4)
        self.assertEqual(f.corner_max, 4)


class TestLinearValueFunction(unittest.TestCase):

    def test_weighted_sum(self):
        board = board_from_exponents([
            3, 1, 0, 0,
            1, 0, 0, 0,
            0, 0, 0, 0,
            0, 0, 0, 0,
        ])
        f = board_features(board)
        params = {k: float(i + 1) for i, k in enumerate(FEATURE_KEYS)}
        value = LinearValueFunction(weights_with(**params)).evaluate(board)
        expected = (1 * f.empty + 2 * f.max + 3 * f.smooth
                    + 4 * f.mono + 5 * f.merge_potential + 6 * f.corner_max)
        self.assertAlmostEqual(value, expected)

    def test_only_empty_weight(self):
        board = set_cell(0, 7, 4)
        value = LinearValueFunction(weights_with(f_empty=2.0)).evaluate(board)
        self.assertAlmostEqual(value, 30.0)

    def test_legacy_alias_and_missing_keys(self):
        board = set_cell(0, 0, 6)
        legacy = LinearValueFunction(weights_with(max=1.5))
        self.assertAlmostEqual(legacy.evaluate(board), 9.0)
        # the current key wins over its alias
        both = LinearValueFunction(weights_with(f_max=1.0, max=100.0))
        self.assertAlmostEqual(both.evaluate(board), 6.0)
        self.assertEqual(LinearValueFunction(weights_with()).evaluate(board), 0.0)

    def test_default_weights_prefer_corner(self):
        ev = LinearValueFunction(default_weights())
        corner = set_cell(set_cell(0, 0, 6), 1, 5)
        middle = set_cell(set_cell(0, 5, 6), 6, 5)
        self.assertGreater(ev.evaluate(corner), ev.evaluate(middle))


if __name__ == "__main__":
    unittest.main()
