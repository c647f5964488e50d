"""Filesystem access used by traversal and deletion.

The core only talks to ``FileSystemAccess``; ``LocalFileSystem`` is the
``os``-backed implementation used by the CLI.
"""

from __future__ import annotations

import os
import shutil
import stat as stat_module
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class DirectoryChild:
    """One listed child name and whether it should be walked as a directory."""

    name: str
    is_dir: bool


@dataclass(frozen=True)
class StatResult:
    """Size/kind metadata for one path, never following symlinks."""

    size: int
    is_dir: bool
    mtime_ns: int | None = None
    device: int | None = None


class FileSystemAccess(Protocol):
    def list_children(self, path: str) -> list[DirectoryChild]:
        ...

    def stat(self, path: str) -> StatResult:
        ...

    def delete(self, path: str) -> None:
        ...


def _measured_size(stat: os.stat_result, apparent_size: bool) -> int:
    """Return allocated bytes when available, else the apparent length."""
    if apparent_size:
        return int(stat.st_size)
    blocks = getattr(stat, "st_blocks", None)
    if blocks is None:
        return int(stat.st_size)
    return int(blocks) * 512


class LocalFileSystem:
    """``FileSystemAccess`` over the real filesystem."""

    def __init__(self, apparent_size: bool = False) -> None:
        self.apparent_size = apparent_size

    def list_children(self, path: str) -> list[DirectoryChild]:
        children: list[DirectoryChild] = []
        with os.scandir(path) as entries:
            for child in entries:
                try:
                    is_dir = child.is_dir(follow_symlinks=False)
                except OSError:
                    is_dir = False
                children.append(DirectoryChild(name=child.name, is_dir=is_dir))
        return children

    def stat(self, path: str) -> StatResult:
        result = os.lstat(path)
        is_dir = stat_module.S_ISDIR(result.st_mode)
        return StatResult(
            size=0 if is_dir else _measured_size(result, self.apparent_size),
            is_dir=is_dir,
            mtime_ns=int(result.st_mtime_ns),
            device=int(result.st_dev),
        )

    def delete(self, path: str) -> None:
        """Remove ``path`` recursively; symlinks are unlinked, never followed."""
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.remove(path)


__all__ = [
    "DirectoryChild",
    "StatResult",
    "FileSystemAccess",
    "LocalFileSystem",
]
