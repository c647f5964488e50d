"""Cursor, sort, and root-history transitions over the main list.

This module intentionally has no UI concerns. Every transition mutates
``AppState`` in place and reports whether anything visible changed; moves at
a boundary, entering a file, and leaving the top root are defined no-ops.
"""

from __future__ import annotations

from ..tree_model import SortedViewCache, SortMode, Tree
from .state import AppState, Focus


class Navigator:
    """Navigation state machine bound to one tree and its sorted-view cache."""

    def __init__(self, state: AppState, tree: Tree, cache: SortedViewCache, initial_root: int) -> None:
        self.state = state
        self.tree = tree
        self.cache = cache
        self.initial_root = initial_root
        # Set by the first cursor move, enter or leave.
        self.has_navigated = False

    def refresh_entries(self, force: bool = False) -> bool:
        """Re-derive ``state.entries`` for the current root and sort mode.

        Returns whether the visible order changed. A root that disappeared is
        replaced by the nearest live root from history.
        """
        state = self.state
        recovered = not self.tree.contains(state.root)
        if recovered:
            self._recover_root()
        if force:
            self.cache.invalidate()
        previous = [entry.index for entry in state.entries]
        state.entries = self.cache.get(self.tree, state.root, state.sorting)
        if recovered or (state.selected is not None and state.selected_position() is None):
            state.selected = state.entries[0].index if state.entries else None
        changed = previous != [entry.index for entry in state.entries]
        if changed:
            state.dirty = True
        return changed

    def _recover_root(self) -> None:
        state = self.state
        while state.history and not self.tree.contains(state.root):
            state.root = state.history.pop()
        if not self.tree.contains(state.root):
            state.root = self.initial_root if self.tree.contains(self.initial_root) else self.tree.root_index
            state.history.clear()
        state.selected = None
        state.entries = []

    def move_selection(self, delta: int) -> bool:
        """Move the cursor by ``delta`` rows without wrapping around."""
        state = self.state
        self.has_navigated = True
        if not state.entries:
            return False
        position = state.selected_position()
        if position is None:
            state.selected = state.entries[0].index
            state.dirty = True
            return True
        target = max(0, min(len(state.entries) - 1, position + delta))
        if target == position:
            return False
        state.selected = state.entries[target].index
        state.dirty = True
        return True

    def page_selection(self, direction: int) -> bool:
        return self.move_selection(direction * max(1, self.state.page_rows))

    def select_first(self) -> bool:
        return self.move_selection(-len(self.state.entries))

    def select_last(self) -> bool:
        return self.move_selection(len(self.state.entries))

    def change_sorting(self, sorting: SortMode) -> bool:
        """Apply ``sorting``; the selected entry stays selected by identity."""
        state = self.state
        if sorting is state.sorting:
            return False
        state.sorting = sorting
        self.refresh_entries()
        state.dirty = True
        return True

    def enter(self) -> bool:
        """Descend into the selected directory, selecting its first entry."""
        state = self.state
        selected = self.tree.get(state.selected)
        if selected is None or not selected.is_dir:
            return False
        self.has_navigated = True
        state.history.append(state.root)
        state.root = selected.index
        state.selected = None
        self.refresh_entries()
        state.selected = state.entries[0].index if state.entries else None
        state.list_start = 0
        state.dirty = True
        return True

    def leave(self) -> bool:
        """Pop the root history; re-select the directory just left when possible."""
        state = self.state
        if not state.history:
            return False
        left = state.root
        self.has_navigated = True
        state.root = state.history.pop()
        while state.history and not self.tree.contains(state.root):
            state.root = state.history.pop()
        if not self.tree.contains(state.root):
            state.root = self.initial_root if self.tree.contains(self.initial_root) else self.tree.root_index
        state.selected = None
        self.refresh_entries()
        indices = [entry.index for entry in state.entries]
        if state.root != self.tree.root_index and left in indices:
            state.selected = left
        else:
            state.selected = indices[0] if indices else None
        state.list_start = 0
        state.dirty = True
        return True

    def switch_focus(self, marked_count: int) -> bool:
        """Toggle between main list and mark pane; an empty pane cannot take focus."""
        state = self.state
        if state.focus is Focus.MAIN:
            if marked_count == 0:
                return False
            state.focus = Focus.MARK_PANE
        else:
            state.focus = Focus.MAIN
        state.dirty = True
        return True


__all__ = [
    "Navigator",
]
