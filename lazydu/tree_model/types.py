"""Domain datatypes for the index-addressed disk-usage tree."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Entry:
    """Arena-owned node; only ``Tree`` holds these objects."""

    index: int
    name: str
    is_dir: bool
    parent: int | None
    size: int = 0
    mtime_ns: int | None = None
    item_count: int = 0
    children: set[int] = field(default_factory=set)
    children_version: int = 0


@dataclass(frozen=True)
class EntryInfo:
    """Read-only snapshot of one entry taken under the tree lock."""

    index: int
    name: str
    is_dir: bool
    parent: int | None
    size: int
    mtime_ns: int | None
    item_count: int


@dataclass(frozen=True)
class ScanError:
    """Traversal failure recorded against the parent of ``path``."""

    parent: int
    path: str
    message: str


__all__ = [
    "Entry",
    "EntryInfo",
    "ScanError",
]
