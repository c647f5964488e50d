"""Filesystem capability plus the background scanner that populates the tree."""

from __future__ import annotations

from .engine import ScanProgress, Traversal, default_thread_count
from .fs import DirectoryChild, FileSystemAccess, LocalFileSystem, StatResult

__all__ = [
    "DirectoryChild",
    "FileSystemAccess",
    "LocalFileSystem",
    "StatResult",
    "ScanProgress",
    "Traversal",
    "default_thread_count",
]
