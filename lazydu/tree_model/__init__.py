"""Index-addressed disk-usage tree plus sorted-view helpers.

This package contains non-UI tree primitives:
- arena-owned entries with aggregated sizes and stable indices
- frozen snapshots handed to every other component
- sort modes and the cached sorted view of one node
"""

from __future__ import annotations

from .arena import VIRTUAL_ROOT_NAME, Tree
from .sorting import SortedViewCache, SortKey, SortMode, ViewEntry, parse_sort_mode, sorted_entries
from .types import Entry, EntryInfo, ScanError

__all__ = [
    "Entry",
    "EntryInfo",
    "ScanError",
    "Tree",
    "VIRTUAL_ROOT_NAME",
    "SortKey",
    "SortMode",
    "ViewEntry",
    "SortedViewCache",
    "parse_sort_mode",
    "sorted_entries",
]
