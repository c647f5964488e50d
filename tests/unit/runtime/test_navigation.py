"""Tests for cursor movement, sorting, and root-history transitions.

Boundaries are defined no-ops: no wraparound, entering a file does nothing,
and leaving the top root keeps the current view.
"""

from __future__ import annotations

import unittest

from lazydu.runtime.navigation import Navigator
from lazydu.runtime.state import AppState, Focus
from lazydu.tree_model import SortedViewCache, SortMode, Tree


class NavigatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tree = Tree()
        tree = self.tree
        self.top = tree.insert(tree.root_index, "/top", True)
        self.big = tree.insert(self.top, "big", True)
        self.inner = tree.insert(self.big, "inner.bin", False, size=500)
        self.inner_small = tree.insert(self.big, "tiny.bin", False, size=5)
        self.mid = tree.insert(self.top, "mid.bin", False, size=200)
        self.small = tree.insert(self.top, "small.bin", False, size=10)
        self.state = AppState(root=self.top, sorting=SortMode.SIZE_DESCENDING)
        self.nav = Navigator(self.state, tree, SortedViewCache(), self.top)
        self.nav.refresh_entries()
        self.state.selected = self.state.entries[0].index

    def _order(self) -> list[int]:
        return [entry.index for entry in self.state.entries]

    def test_initial_view_is_sorted_by_size(self) -> None:
        self.assertEqual(self._order(), [self.big, self.mid, self.small])
        self.assertEqual(self.state.selected, self.big)

    def test_move_selection_does_not_wrap(self) -> None:
        self.assertFalse(self.nav.move_selection(-1))
        self.assertEqual(self.state.selected, self.big)

        self.assertTrue(self.nav.move_selection(5))
        self.assertEqual(self.state.selected, self.small)
        self.assertFalse(self.nav.move_selection(1))

    def test_move_from_no_selection_selects_first(self) -> None:
        self.state.selected = None

        self.assertTrue(self.nav.move_selection(1))
        self.assertEqual(self.state.selected, self.big)

    def test_has_navigated_tracks_cursor_and_root_moves_only(self) -> None:
        self.assertFalse(self.nav.has_navigated)

        self.nav.change_sorting(SortMode.NAME_ASCENDING)
        self.nav.refresh_entries(force=True)
        self.assertFalse(self.nav.has_navigated)

        self.nav.enter()
        self.assertTrue(self.nav.has_navigated)

    def test_page_and_home_end(self) -> None:
        self.state.page_rows = 2
        self.nav.page_selection(1)
        self.assertEqual(self.state.selected, self.small)
        self.nav.select_first()
        self.assertEqual(self.state.selected, self.big)
        self.nav.select_last()
        self.assertEqual(self.state.selected, self.small)

    def test_change_sorting_keeps_selected_identity(self) -> None:
        self.nav.move_selection(1)

        self.assertTrue(self.nav.change_sorting(SortMode.SIZE_ASCENDING))

        self.assertEqual(self._order(), [self.small, self.mid, self.big])
        self.assertEqual(self.state.selected, self.mid)
        self.assertFalse(self.nav.change_sorting(SortMode.SIZE_ASCENDING))

    def test_enter_and_leave_restore_selection(self) -> None:
        self.assertTrue(self.nav.enter())
        self.assertEqual(self.state.root, self.big)
        self.assertEqual(self.state.history, [self.top])
        self.assertEqual(self.state.selected, self.inner)

        self.assertTrue(self.nav.leave())
        self.assertEqual(self.state.root, self.top)
        self.assertEqual(self.state.selected, self.big)
        self.assertEqual(self.state.history, [])

    def test_enter_on_file_and_leave_at_top_are_noops(self) -> None:
        self.nav.move_selection(1)

        self.assertFalse(self.nav.enter())
        self.assertEqual(self.state.root, self.top)
        self.assertFalse(self.nav.leave())
        self.assertEqual(self.state.root, self.top)
        self.assertEqual(self.state.selected, self.mid)

    def test_enter_empty_directory_selects_nothing(self) -> None:
        empty = self.tree.insert(self.top, "empty", True)
        self.nav.refresh_entries()
        self.state.selected = empty

        self.assertTrue(self.nav.enter())
        self.assertEqual(self.state.entries, [])
        self.assertIsNone(self.state.selected)

    def test_leave_skips_deleted_roots(self) -> None:
        self.nav.enter()
        nested = self.tree.insert(self.big, "nested", True)
        self.nav.refresh_entries()
        self.state.selected = nested
        self.nav.enter()
        self.assertEqual(self.state.history, [self.top, self.big])

        self.tree.remove(self.big)
        self.nav.leave()

        self.assertEqual(self.state.root, self.top)
        self.assertEqual(self.state.selected, self.mid)

    def test_refresh_recovers_from_deleted_root(self) -> None:
        self.nav.enter()
        self.tree.remove(self.big)

        self.nav.refresh_entries()

        self.assertEqual(self.state.root, self.top)
        self.assertEqual(self.state.history, [])
        self.assertEqual(self.state.selected, self.mid)

    def test_refresh_replaces_vanished_selection(self) -> None:
        self.tree.remove(self.big)

        self.assertTrue(self.nav.refresh_entries())
        self.assertEqual(self.state.selected, self.mid)

    def test_switch_focus_requires_marks(self) -> None:
        self.assertFalse(self.nav.switch_focus(0))
        self.assertIs(self.state.focus, Focus.MAIN)

        self.assertTrue(self.nav.switch_focus(1))
        self.assertIs(self.state.focus, Focus.MARK_PANE)
        self.assertTrue(self.nav.switch_focus(1))
        self.assertIs(self.state.focus, Focus.MAIN)


class VirtualRootNavigationTests(unittest.TestCase):
    def test_leaving_to_virtual_root_selects_first_entry(self) -> None:
        tree = Tree()
        first = tree.insert(tree.root_index, "/a", True)
        tree.insert(first, "f", False, size=1)
        second = tree.insert(tree.root_index, "/b", True)
        tree.insert(second, "g", False, size=100)
        state = AppState(root=tree.root_index, sorting=SortMode.SIZE_DESCENDING)
        nav = Navigator(state, tree, SortedViewCache(), tree.root_index)
        nav.refresh_entries()
        state.selected = first

        nav.enter()
        nav.leave()

        self.assertEqual(state.root, tree.root_index)
        self.assertEqual(state.selected, second)


if __name__ == "__main__":
    unittest.main()
