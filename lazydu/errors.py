"""Exception types raised at lazydu's public seams."""

from __future__ import annotations


class LazyDuError(Exception):
    """Base class for errors lazydu reports to the user."""


class RootPathError(LazyDuError):
    """A root given on the command line cannot be scanned."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Path not found: {path}")
        self.path = path


__all__ = [
    "LazyDuError",
    "RootPathError",
]
