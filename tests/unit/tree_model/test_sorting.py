"""Tests for sort modes and the sorted-view cache."""

from __future__ import annotations

import unittest

from lazydu.tree_model import SortedViewCache, SortKey, SortMode, Tree, parse_sort_mode, sorted_entries


def _names(tree: Tree, node: int, sorting: SortMode) -> list[str]:
    return [tree.get(entry.index).name for entry in sorted_entries(tree, node, sorting)]


class SortModeTests(unittest.TestCase):
    def test_toggle_switches_key_then_flips_direction(self) -> None:
        mode = SortMode.SIZE_DESCENDING

        self.assertIs(mode.toggle_size(), SortMode.SIZE_ASCENDING)
        self.assertIs(mode.toggle_name(), SortMode.NAME_ASCENDING)
        self.assertIs(mode.toggle_mtime(), SortMode.MTIME_DESCENDING)
        self.assertIs(mode.toggle_count(), SortMode.COUNT_DESCENDING)
        self.assertIs(SortMode.NAME_ASCENDING.toggle_name(), SortMode.NAME_DESCENDING)

    def test_next_key_cycles_with_default_directions(self) -> None:
        seen = []
        mode = SortMode.SIZE_ASCENDING
        for _ in range(4):
            mode = mode.next_key()
            seen.append(mode)

        self.assertEqual(
            seen,
            [
                SortMode.NAME_ASCENDING,
                SortMode.MTIME_DESCENDING,
                SortMode.COUNT_DESCENDING,
                SortMode.SIZE_DESCENDING,
            ],
        )

    def test_reversed_and_labels(self) -> None:
        self.assertIs(SortMode.MTIME_ASCENDING.reversed(), SortMode.MTIME_DESCENDING)
        self.assertIs(SortMode.COUNT_DESCENDING.key, SortKey.COUNT)
        self.assertEqual(SortMode.SIZE_DESCENDING.label, "size ↓")

    def test_parse_sort_mode_accepts_bare_keys_and_full_names(self) -> None:
        self.assertIs(parse_sort_mode("size"), SortMode.SIZE_DESCENDING)
        self.assertIs(parse_sort_mode("NAME"), SortMode.NAME_ASCENDING)
        self.assertIs(parse_sort_mode("mtime_ascending"), SortMode.MTIME_ASCENDING)
        self.assertIsNone(parse_sort_mode("bogus"))
        self.assertIsNone(parse_sort_mode(""))


class SortedEntriesTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tree = Tree()
        self.root = self.tree.insert(self.tree.root_index, "/r", True)
        self.tree.insert(self.root, "b", False, size=10, mtime_ns=3)
        self.tree.insert(self.root, "a", False, size=10, mtime_ns=1)
        self.tree.insert(self.root, "c", False, size=30, mtime_ns=2)
        sub = self.tree.insert(self.root, "d", True)
        self.tree.insert(sub, "x", False, size=1)
        self.tree.insert(sub, "y", False, size=1)

    def test_size_ties_break_by_name_in_both_directions(self) -> None:
        self.assertEqual(_names(self.tree, self.root, SortMode.SIZE_DESCENDING), ["c", "a", "b", "d"])
        self.assertEqual(_names(self.tree, self.root, SortMode.SIZE_ASCENDING), ["d", "a", "b", "c"])

    def test_name_and_mtime_orders(self) -> None:
        self.assertEqual(_names(self.tree, self.root, SortMode.NAME_ASCENDING), ["a", "b", "c", "d"])
        self.assertEqual(_names(self.tree, self.root, SortMode.NAME_DESCENDING), ["d", "c", "b", "a"])
        # Missing mtimes sort as the oldest.
        self.assertEqual(_names(self.tree, self.root, SortMode.MTIME_DESCENDING), ["b", "c", "a", "d"])

    def test_count_order_uses_descendant_counts(self) -> None:
        self.assertEqual(_names(self.tree, self.root, SortMode.COUNT_DESCENDING), ["d", "a", "b", "c"])

    def test_identical_inputs_give_identical_orders(self) -> None:
        first = sorted_entries(self.tree, self.root, SortMode.SIZE_DESCENDING)
        second = sorted_entries(self.tree, self.root, SortMode.SIZE_DESCENDING)

        self.assertEqual(first, second)


class SortedViewCacheTests(unittest.TestCase):
    def test_recomputes_only_when_key_changes(self) -> None:
        tree = Tree()
        root = tree.insert(tree.root_index, "/r", True)
        leaf = tree.insert(root, "a", False, size=1)
        cache = SortedViewCache()

        cache.get(tree, root, SortMode.SIZE_DESCENDING)
        cache.get(tree, root, SortMode.SIZE_DESCENDING)
        self.assertEqual(cache.recompute_count, 1)

        tree.apply_size_delta(leaf, 5)
        cache.get(tree, root, SortMode.SIZE_DESCENDING)
        self.assertEqual(cache.recompute_count, 1)

        tree.insert(root, "b", False, size=2)
        cache.get(tree, root, SortMode.SIZE_DESCENDING)
        self.assertEqual(cache.recompute_count, 2)

        cache.get(tree, root, SortMode.NAME_ASCENDING)
        self.assertEqual(cache.recompute_count, 3)

        cache.invalidate()
        cache.get(tree, root, SortMode.NAME_ASCENDING)
        self.assertEqual(cache.recompute_count, 4)

    def test_returned_list_is_a_copy(self) -> None:
        tree = Tree()
        root = tree.insert(tree.root_index, "/r", True)
        tree.insert(root, "a", False, size=1)
        cache = SortedViewCache()

        view = cache.get(tree, root, SortMode.SIZE_DESCENDING)
        view.clear()

        self.assertEqual(len(cache.get(tree, root, SortMode.SIZE_DESCENDING)), 1)


if __name__ == "__main__":
    unittest.main()
