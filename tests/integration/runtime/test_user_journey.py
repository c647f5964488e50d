"""End-to-end operator journey over two scanned roots.

Drives the composed ``App`` purely through key tokens, the same way the
interactive loop does, and checks sorting, navigation, marking, focus, and
deletion against an in-memory filesystem.
"""

from __future__ import annotations

import unittest

from lazydu.runtime.state import Focus
from lazydu.tree_model import SortMode
from tests.fakes import MemoryFileSystem, child_named, scanned_app

SHORT_ROOT = "/fixture/sample-01"
LONG_ROOT = "/fixture/sample-02/dir"


def _fixture() -> MemoryFileSystem:
    return MemoryFileSystem(
        {
            f"{SHORT_ROOT}/dir/big.bin": 4000,
            f"{SHORT_ROOT}/dir/small.bin": 500,
            f"{SHORT_ROOT}/notes.txt": 60,
            f"{LONG_ROOT}/a.log": 70,
            f"{LONG_ROOT}/b.log": 30,
        }
    )


class ReadOnlyJourneyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.fs = _fixture()
        self.app = scanned_app(self.fs, [SHORT_ROOT, LONG_ROOT])
        self.tree = self.app.tree
        self.state = self.app.state
        self.virtual_root = self.tree.root_index
        self.short = child_named(self.tree, self.virtual_root, SHORT_ROOT)
        self.long = child_named(self.tree, self.virtual_root, LONG_ROOT)

    def test_simple_user_journey(self) -> None:
        app, state = self.app, self.state

        # After initialization.
        self.assertIs(state.sorting, SortMode.SIZE_DESCENDING)
        self.assertFalse(state.is_scanning)
        self.assertEqual(self.tree.get(self.long).name, LONG_ROOT)
        self.assertEqual(state.selected, self.short)
        self.assertEqual(state.root, self.virtual_root)

        # Sorting.
        app.process_events(["s"])
        self.assertIs(state.sorting, SortMode.SIZE_ASCENDING)
        self.assertEqual(state.entries[0].index, self.long)
        app.process_events(["s"])
        self.assertIs(state.sorting, SortMode.SIZE_DESCENDING)
        self.assertEqual(state.entries[0].index, self.short)

        # Entry navigation.
        app.process_events(["j"])
        self.assertEqual(state.selected, self.long)
        app.process_events(["j"])
        self.assertEqual(state.selected, self.long)
        app.process_events(["k"])
        self.assertEqual(state.selected, self.short)
        app.process_events(["k"])
        self.assertEqual(state.selected, self.short)

        app.process_events(["o"])
        self.assertEqual(state.root, self.short)
        self.assertEqual(state.selected, child_named(self.tree, self.short, "dir"))

        app.process_events(["u"])
        self.assertEqual(state.root, self.virtual_root)
        self.assertEqual(state.selected, self.short)

        app.process_events(["j", "u"])
        self.assertEqual(state.root, self.virtual_root)
        self.assertEqual(state.selected, self.long)

        # Marking with advance, toggling off, and marking without advance.
        app.process_events(["k"])
        first = state.selected
        app.process_events(["d"])
        self.assertEqual(app.marks.indices(), [first])
        self.assertEqual(state.selected, state.entries[1].index)

        app.process_events(["d"])
        self.assertEqual(len(app.marks), 2)
        self.assertEqual(state.selected, state.entries[1].index)

        app.process_events(["d"])
        self.assertEqual(app.marks.indices(), [first])

        app.process_events(["k", " "])
        self.assertEqual(len(app.marks), 0)
        self.assertEqual(state.selected, first)

        # Mark pane focus.
        app.process_events([" ", "j", " "])
        self.assertIs(state.focus, Focus.MAIN)
        self.assertEqual(len(app.marks), 2)
        app.process_events(["TAB"])
        self.assertIs(state.focus, Focus.MARK_PANE)

        # Nothing was deleted along the way.
        self.assertEqual(self.fs.deleted, [])
        self.assertEqual(self.tree.get(self.virtual_root).size, 4660)


class FirstRootSelectionTests(unittest.TestCase):
    def test_first_given_root_is_selected_even_when_smaller(self) -> None:
        fs = MemoryFileSystem({"/w/short/a": 10, "/w/long/dir/b": 100})
        app = scanned_app(fs, ["/w/short", "/w/long/dir"])
        tree, state = app.tree, app.state
        short = child_named(tree, tree.root_index, "/w/short")
        long_dir = child_named(tree, tree.root_index, "/w/long/dir")

        self.assertIs(state.sorting, SortMode.SIZE_DESCENDING)
        self.assertEqual(state.entries[0].index, long_dir)
        self.assertEqual(state.selected, short)

        app.process_events(["s"])
        self.assertIs(state.sorting, SortMode.SIZE_ASCENDING)
        self.assertEqual(state.entries[0].index, short)

        app.process_events(["j"])
        self.assertEqual(state.selected, long_dir)
        app.process_events(["j"])
        self.assertEqual(state.selected, long_dir)

        app.process_events(["o"])
        self.assertEqual(state.root, long_dir)
        self.assertEqual(state.selected, child_named(tree, long_dir, "b"))

        app.process_events(["u"])
        self.assertEqual(state.root, tree.root_index)


class DeletionJourneyTests(unittest.TestCase):
    def test_mark_descend_delete_and_leave(self) -> None:
        fs = _fixture()
        app = scanned_app(fs, [SHORT_ROOT, LONG_ROOT])
        tree, state = app.tree, app.state
        short = child_named(tree, tree.root_index, SHORT_ROOT)
        inner = child_named(tree, short, "dir")

        app.process_events(["o", "d", "j", "d"])
        self.assertEqual(len(app.marks), 2)

        app.process_events(["TAB", "x", "y"])

        self.assertEqual(sorted(fs.deleted), [f"{SHORT_ROOT}/dir", f"{SHORT_ROOT}/notes.txt"])
        self.assertFalse(tree.contains(inner))
        self.assertEqual(tree.get(short).size, 0)
        self.assertEqual(tree.get(tree.root_index).size, 100)
        self.assertEqual(state.entries, [])
        self.assertIsNone(state.selected)
        self.assertIs(state.focus, Focus.MAIN)
        self.assertEqual(len(state.last_deletion), 2)

        app.process_events(["u"])
        self.assertEqual(state.root, tree.root_index)
        self.assertEqual(state.selected, child_named(tree, tree.root_index, LONG_ROOT))

    def test_failed_deletion_reports_and_keeps_mark(self) -> None:
        fs = MemoryFileSystem({"/only/keep.bin": 10}, fail_delete=("/only/keep.bin",))
        app = scanned_app(fs, ["/only"])

        app.process_events([" ", "TAB", "x", "y"])

        self.assertEqual(len(app.marks), 1)
        self.assertIs(app.state.focus, Focus.MARK_PANE)
        self.assertIn("1 failed", app.state.status_message)
        self.assertEqual(app.tree.get(app.state.root).size, 10)


if __name__ == "__main__":
    unittest.main()
