"""Sort modes and the lazily recomputed sorted view of one node's children."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .arena import Tree
from .types import EntryInfo


class SortKey(Enum):
    SIZE = "size"
    NAME = "name"
    MTIME = "mtime"
    COUNT = "count"


class SortMode(Enum):
    """Active ordering for the main list."""

    NAME_ASCENDING = "name-ascending"
    NAME_DESCENDING = "name-descending"
    SIZE_ASCENDING = "size-ascending"
    SIZE_DESCENDING = "size-descending"
    MTIME_ASCENDING = "mtime-ascending"
    MTIME_DESCENDING = "mtime-descending"
    COUNT_ASCENDING = "count-ascending"
    COUNT_DESCENDING = "count-descending"

    @property
    def key(self) -> SortKey:
        return SortKey(self.value.split("-", 1)[0])

    @property
    def descending(self) -> bool:
        return self.value.endswith("-descending")

    @property
    def label(self) -> str:
        arrow = "↓" if self.descending else "↑"
        return f"{self.key.value} {arrow}"

    @classmethod
    def default_for(cls, key: SortKey) -> SortMode:
        """Names start ascending, every numeric key starts largest/newest first."""
        if key is SortKey.NAME:
            return cls.NAME_ASCENDING
        return cls(f"{key.value}-descending")

    def reversed(self) -> SortMode:
        direction = "ascending" if self.descending else "descending"
        return SortMode(f"{self.key.value}-{direction}")

    def toggled_for(self, key: SortKey) -> SortMode:
        """Switch to ``key``, or flip direction when ``key`` is already active."""
        if self.key is key:
            return self.reversed()
        return SortMode.default_for(key)

    def toggle_size(self) -> SortMode:
        return self.toggled_for(SortKey.SIZE)

    def toggle_name(self) -> SortMode:
        return self.toggled_for(SortKey.NAME)

    def toggle_mtime(self) -> SortMode:
        return self.toggled_for(SortKey.MTIME)

    def toggle_count(self) -> SortMode:
        return self.toggled_for(SortKey.COUNT)

    def next_key(self) -> SortMode:
        order = list(SortKey)
        following = order[(order.index(self.key) + 1) % len(order)]
        return SortMode.default_for(following)


def parse_sort_mode(value: str | None) -> SortMode | None:
    """Parse ``size-descending`` style names; bare keys use their default direction."""
    if not value:
        return None
    candidate = value.strip().lower().replace("_", "-")
    try:
        return SortMode(candidate)
    except ValueError:
        pass
    try:
        return SortMode.default_for(SortKey(candidate))
    except ValueError:
        return None


@dataclass(frozen=True)
class ViewEntry:
    """One row of a sorted view: the child index and the key it was ordered by."""

    index: int
    sort_key: tuple


def _primary_value(info: EntryInfo, key: SortKey) -> object:
    if key is SortKey.SIZE:
        return info.size
    if key is SortKey.MTIME:
        return info.mtime_ns if info.mtime_ns is not None else 0
    if key is SortKey.COUNT:
        return info.item_count
    return info.name


def sorted_entries(tree: Tree, node: int, sorting: SortMode) -> list[ViewEntry]:
    """Order the children of ``node``; ties fall back to name then index ascending."""
    children = tree.snapshot_children(node)
    key = sorting.key
    if key is SortKey.NAME:
        ordered = sorted(children, key=lambda info: (info.name, info.index), reverse=sorting.descending)
        return [ViewEntry(index=info.index, sort_key=(info.name,)) for info in ordered]

    # Stable two-pass sort keeps the ascending name tie-break for both directions.
    ordered = sorted(children, key=lambda info: (info.name, info.index))
    ordered.sort(key=lambda info: _primary_value(info, key), reverse=sorting.descending)
    return [
        ViewEntry(index=info.index, sort_key=(_primary_value(info, key), info.name))
        for info in ordered
    ]


class SortedViewCache:
    """Memoize one sorted view keyed by node, mode, and the node's child version."""

    def __init__(self) -> None:
        self._key: tuple[int, SortMode, int] | None = None
        self._entries: list[ViewEntry] = []
        self.recompute_count = 0

    def invalidate(self) -> None:
        self._key = None

    def get(self, tree: Tree, node: int, sorting: SortMode) -> list[ViewEntry]:
        key = (node, sorting, tree.children_version(node))
        if key != self._key:
            self._entries = sorted_entries(tree, node, sorting)
            self._key = key
            self.recompute_count += 1
        return list(self._entries)


__all__ = [
    "SortKey",
    "SortMode",
    "ViewEntry",
    "SortedViewCache",
    "parse_sort_mode",
    "sorted_entries",
]
