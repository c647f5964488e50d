"""Thread-safe arena of disk-usage entries addressed by stable indices.

Every mutation that touches sizes walks the parent chain inside one critical
section, so a reader never observes a directory whose size differs from the
sum of its children. Indices come from a counter and are never reused.
"""

from __future__ import annotations

import os
import threading

from .types import Entry, EntryInfo, ScanError

VIRTUAL_ROOT_NAME = ""


def _info(entry: Entry) -> EntryInfo:
    return EntryInfo(
        index=entry.index,
        name=entry.name,
        is_dir=entry.is_dir,
        parent=entry.parent,
        size=entry.size,
        mtime_ns=entry.mtime_ns,
        item_count=entry.item_count,
    )


class Tree:
    """Owner of all entries plus the synthetic root at ``root_index``."""

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self._entries: dict[int, Entry] = {}
        self._next_index = 0
        self._errors: list[ScanError] = []
        self.root_index = self._allocate(VIRTUAL_ROOT_NAME, True, None)

    def _allocate(self, name: str, is_dir: bool, parent: int | None, mtime_ns: int | None = None) -> int:
        index = self._next_index
        self._next_index += 1
        self._entries[index] = Entry(
            index=index,
            name=name,
            is_dir=is_dir,
            parent=parent,
            mtime_ns=mtime_ns,
        )
        return index

    def _propagate(self, start: int | None, size_delta: int, count_delta: int) -> None:
        """Add deltas to ``start`` and each of its ancestors; caller holds the lock."""
        current = start
        while current is not None:
            entry = self._entries.get(current)
            if entry is None:
                return
            entry.size += size_delta
            entry.item_count += count_delta
            current = entry.parent

    def insert(
        self,
        parent: int,
        name: str,
        is_dir: bool,
        size: int = 0,
        mtime_ns: int | None = None,
    ) -> int | None:
        """Create a child of ``parent`` and return its index.

        Returns ``None`` when ``parent`` has been removed in the meantime.
        """
        with self.lock:
            if parent not in self._entries:
                return None
            return self._attach(parent, name, is_dir, size, mtime_ns)

    def add_root(self, name: str, is_dir: bool, size: int = 0, mtime_ns: int | None = None) -> int:
        """Attach a top-level root under the synthetic root, which is never removed."""
        with self.lock:
            return self._attach(self.root_index, name, is_dir, size, mtime_ns)

    def _attach(self, parent: int, name: str, is_dir: bool, size: int, mtime_ns: int | None) -> int:
        parent_entry = self._entries[parent]
        index = self._allocate(name, is_dir, parent, mtime_ns)
        parent_entry.children.add(index)
        parent_entry.children_version += 1
        self._entries[index].size = size
        self._propagate(parent, size, 1)
        return index

    def apply_size_delta(self, index: int, delta: int) -> None:
        """Add ``delta`` bytes to ``index`` and all of its ancestors."""
        if delta == 0:
            return
        with self.lock:
            if index not in self._entries:
                return
            self._propagate(index, delta, 0)

    def remove(self, index: int) -> int:
        """Detach the subtree at ``index`` and return how many entries went away."""
        if index == self.root_index:
            raise ValueError("the virtual root cannot be removed")
        with self.lock:
            entry = self._entries.get(index)
            if entry is None:
                return 0
            removed: list[int] = []
            pending = [index]
            while pending:
                current = pending.pop()
                removed.append(current)
                pending.extend(self._entries[current].children)

            parent_entry = self._entries.get(entry.parent) if entry.parent is not None else None
            if parent_entry is not None:
                parent_entry.children.discard(index)
                parent_entry.children_version += 1
                self._propagate(entry.parent, -entry.size, -(entry.item_count + 1))

            for current in removed:
                del self._entries[current]
            removed_set = set(removed)
            self._errors = [error for error in self._errors if error.parent not in removed_set]
            return len(removed)

    def contains(self, index: int | None) -> bool:
        if index is None:
            return False
        with self.lock:
            return index in self._entries

    def get(self, index: int | None) -> EntryInfo | None:
        if index is None:
            return None
        with self.lock:
            entry = self._entries.get(index)
            return _info(entry) if entry is not None else None

    def children_of(self, index: int) -> list[int]:
        with self.lock:
            entry = self._entries.get(index)
            return list(entry.children) if entry is not None else []

    def snapshot_children(self, index: int) -> list[EntryInfo]:
        """Return consistent snapshots of every direct child of ``index``."""
        with self.lock:
            entry = self._entries.get(index)
            if entry is None:
                return []
            return [_info(self._entries[child]) for child in entry.children]

    def snapshot(self, indices: list[int]) -> dict[int, EntryInfo]:
        """Snapshot several entries at once, skipping indices no longer present."""
        with self.lock:
            return {
                index: _info(self._entries[index])
                for index in indices
                if index in self._entries
            }

    def children_version(self, index: int) -> int:
        with self.lock:
            entry = self._entries.get(index)
            return entry.children_version if entry is not None else -1

    def is_ancestor(self, ancestor: int, index: int) -> bool:
        """Return whether ``ancestor`` lies on the parent chain of ``index``."""
        with self.lock:
            current = self._entries.get(index)
            while current is not None and current.parent is not None:
                if current.parent == ancestor:
                    return True
                current = self._entries.get(current.parent)
            return False

    def path_of(self, index: int) -> str:
        """Join names from the given root down to ``index``.

        The virtual root maps to the empty string, roots keep their verbatim
        path string.
        """
        with self.lock:
            parts: list[str] = []
            current = self._entries.get(index)
            while current is not None and current.index != self.root_index:
                parts.append(current.name)
                current = self._entries.get(current.parent) if current.parent is not None else None
        if not parts:
            return VIRTUAL_ROOT_NAME
        return os.path.join(*reversed(parts))

    def record_error(self, parent: int, path: str, message: str) -> None:
        with self.lock:
            if parent not in self._entries:
                return
            self._errors.append(ScanError(parent=parent, path=path, message=message))

    def errors(self) -> list[ScanError]:
        with self.lock:
            return list(self._errors)

    @property
    def error_count(self) -> int:
        with self.lock:
            return len(self._errors)

    def __len__(self) -> int:
        with self.lock:
            return len(self._entries)


__all__ = [
    "Tree",
    "VIRTUAL_ROOT_NAME",
]
