"""Mutable session state shared by navigation, marking, deletion, and rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..tree_model import SortMode, ViewEntry


class Focus(Enum):
    """Which pane receives keyboard input."""

    MAIN = "main"
    MARK_PANE = "mark_pane"


@dataclass(frozen=True)
class DeletionResult:
    """Outcome of one attempted deletion; ``error`` is ``None`` on success."""

    index: int
    path: str
    size: int
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class AppState:
    root: int
    sorting: SortMode
    selected: int | None = None
    entries: list[ViewEntry] = field(default_factory=list)
    history: list[int] = field(default_factory=list)
    focus: Focus = Focus.MAIN
    is_scanning: bool = False
    confirm_delete: bool = False
    show_help: bool = False
    status_message: str = ""
    status_message_until: float = 0.0
    last_deletion: list[DeletionResult] = field(default_factory=list)
    list_start: int = 0
    page_rows: int = 20
    dirty: bool = True

    @property
    def mark_pane_has_focus(self) -> bool:
        return self.focus is Focus.MARK_PANE

    def selected_position(self) -> int | None:
        """Return the position of ``selected`` inside ``entries``."""
        if self.selected is None:
            return None
        for position, entry in enumerate(self.entries):
            if entry.index == self.selected:
                return position
        return None
