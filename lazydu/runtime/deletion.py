"""Delete marked entries from disk and keep the tree aggregates consistent."""

from __future__ import annotations

import logging

from ..formatting import format_size
from ..traversal import FileSystemAccess
from ..tree_model import Tree
from .marks import MarkPane
from .state import AppState, DeletionResult

logger = logging.getLogger(__name__)


def _replacement_selection(state: AppState, removed: int, tree: Tree) -> int | None:
    """Pick the next surviving sibling in view order, else the previous one."""
    indices = [entry.index for entry in state.entries]
    if removed not in indices:
        return None
    position = indices.index(removed)
    for candidate in indices[position + 1:]:
        if candidate != removed and tree.contains(candidate):
            return candidate
    for candidate in reversed(indices[:position]):
        if tree.contains(candidate):
            return candidate
    return None


class DeletionExecutor:
    """Apply a deletion batch; each entry succeeds or fails independently."""

    def __init__(self, tree: Tree, fs: FileSystemAccess) -> None:
        self.tree = tree
        self.fs = fs

    def delete_marked(self, state: AppState, marks: MarkPane) -> list[DeletionResult]:
        """Delete every marked entry and record one result per attempt.

        Marks whose entry vanished together with an already deleted ancestor
        are dropped without a result. Failed entries stay marked and in the
        tree.
        """
        results: list[DeletionResult] = []
        for index in marks.indices():
            if not self.tree.contains(index):
                marks.remove(index)
                continue
            path = self.tree.path_of(index)
            try:
                self.fs.delete(path)
            except OSError as exc:
                message = exc.strerror or str(exc)
                logger.warning("failed to delete %s: %s", path, message)
                info = self.tree.get(index)
                size = info.size if info is not None else 0
                results.append(DeletionResult(index=index, path=path, size=size, error=message))
                continue

            if state.selected == index:
                state.selected = _replacement_selection(state, index, self.tree)
            info = self.tree.get(index)
            size = info.size if info is not None else 0
            self.tree.remove(index)
            marks.remove(index)
            logger.info("deleted %s (%d bytes)", path, size)
            results.append(DeletionResult(index=index, path=path, size=size))

        marks.prune(self.tree)
        state.last_deletion = results
        state.dirty = True
        return results


def summarize_deletion(results: list[DeletionResult]) -> str:
    """One-line status text for the last batch."""
    deleted = [result for result in results if result.ok]
    failed = [result for result in results if not result.ok]
    freed = sum(result.size for result in deleted)
    message = f"deleted {len(deleted)}, freed {format_size(freed)}"
    if failed:
        first = failed[0]
        message += f"; {len(failed)} failed ({first.path}: {first.error})"
    return message


__all__ = [
    "DeletionExecutor",
    "DeletionResult",
    "summarize_deletion",
]
