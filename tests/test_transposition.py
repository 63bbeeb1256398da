import unittest

from expectimax2048.transposition import NodeKind, SearchKey, TranspositionTable


class TestTranspositionTable(unittest.TestCase):

    def test_store_and_get(self):
        tt = TranspositionTable(10)
        key = SearchKey(0x1234, 3, NodeKind.CHANCE)
        self.assertIsNone(tt.get(key))
        tt.store(key, 1.5)
        self.assertEqual(tt.get(key), 1.5)
        self.assertIn(key, tt)

    def test_node_kind_is_part_of_key(self):
        tt = TranspositionTable(10)
        tt.store(SearchKey(7, 2, NodeKind.DECISION), 1.0)
        self.assertIsNone(tt.get(SearchKey(7, 2, NodeKind.CHANCE)))
        self.assertIsNone(tt.get(SearchKey(7, 1, NodeKind.DECISION)))

    def test_full_table_is_cleared_before_insert(self):
        tt = TranspositionTable(3)
        keys = [SearchKey(b, 1, NodeKind.DECISION) for b in range(4)]
        for i, key in enumerate(keys[:3]):
            tt.store(key, float(i))
        self.assertEqual(len(tt), 3)
        tt.store(keys[3], 3.0)
        self.assertEqual(len(tt), 1)
        self.assertEqual(tt.get(keys[3]), 3.0)
        for key in keys[:3]:
            self.assertIsNone(tt.get(key))

    def test_zero_capacity_disables_caching(self):
        tt = TranspositionTable(0)
        tt.store(SearchKey(1, 1, NodeKind.CHANCE), 1.0)
        self.assertEqual(len(tt), 0)

    def test_negative_capacity_clamps_to_zero(self):
        self.assertEqual(TranspositionTable(-5).capacity, 0)

    def test_reset(self):
        tt = TranspositionTable(10)
        tt.store(SearchKey(1, 1, NodeKind.CHANCE), 1.0)
        tt.reset()
        self.assertEqual(len(tt), 0)


if __name__ == "__main__":
    unittest.main()
