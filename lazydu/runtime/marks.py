"""Mark set for pending deletions plus the cursor of the mark pane."""

from __future__ import annotations

from dataclasses import dataclass

from ..tree_model import Tree


@dataclass(frozen=True)
class MarkedEntry:
    """Display data captured when an entry was marked."""

    index: int
    path: str
    is_dir: bool


class MarkPane:
    """Insertion-ordered set of marked entry indices.

    Stale indices (entries no longer in the tree) are ignored on toggle and
    dropped by ``prune``.
    """

    def __init__(self) -> None:
        self.marked: dict[int, MarkedEntry] = {}
        self.selected: int | None = None

    def __len__(self) -> int:
        return len(self.marked)

    def __contains__(self, index: object) -> bool:
        return index in self.marked

    def contains(self, index: int | None) -> bool:
        return index is not None and index in self.marked

    def indices(self) -> list[int]:
        return list(self.marked)

    def items(self) -> list[MarkedEntry]:
        return list(self.marked.values())

    def toggle_index(self, tree: Tree, index: int | None) -> bool:
        """Mark or unmark ``index``; returns ``False`` for stale indices."""
        if index is None:
            return False
        if index in self.marked:
            self.remove(index)
            return True
        info = tree.get(index)
        if info is None or index == tree.root_index:
            return False
        self.marked[index] = MarkedEntry(index=index, path=tree.path_of(index), is_dir=info.is_dir)
        if self.selected is None:
            self.selected = 0
        return True

    def remove(self, index: int) -> bool:
        if index not in self.marked:
            return False
        del self.marked[index]
        self._clamp_selection()
        return True

    def clear(self) -> None:
        self.marked.clear()
        self.selected = None

    def prune(self, tree: Tree) -> int:
        """Drop marks whose entries no longer exist and return how many went."""
        stale = [index for index in self.marked if not tree.contains(index)]
        for index in stale:
            del self.marked[index]
        if stale:
            self._clamp_selection()
        return len(stale)

    def total_size(self, tree: Tree) -> int:
        return sum(info.size for info in tree.snapshot(self.indices()).values())

    def selected_index(self) -> int | None:
        if self.selected is None or not self.marked:
            return None
        return self.indices()[self.selected]

    def move_selection(self, delta: int) -> bool:
        if not self.marked:
            return False
        current = self.selected if self.selected is not None else 0
        target = max(0, min(len(self.marked) - 1, current + delta))
        if target == self.selected:
            return False
        self.selected = target
        return True

    def toggle_selected(self) -> bool:
        """Unmark the entry under the pane cursor; the cursor keeps its position."""
        index = self.selected_index()
        if index is None:
            return False
        return self.remove(index)

    def _clamp_selection(self) -> None:
        if not self.marked:
            self.selected = None
            return
        current = self.selected if self.selected is not None else 0
        self.selected = max(0, min(len(self.marked) - 1, current))


__all__ = [
    "MarkedEntry",
    "MarkPane",
]
