"""Main interactive event loop for the terminal UI.

Coordinates scan polling, rendering, and input dispatch. The loop never
blocks on the scanner: it reads keys with a short timeout and uses every
idle tick to pull fresh sizes from the tree.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..input import read_key
from ..render import list_rows, render_frame
from ..ui_theme import UITheme
from .state import AppState
from .terminal import TerminalController

if TYPE_CHECKING:
    from .app import App


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_timeout_ms: int = 120
    spinner_frame_seconds: float = 0.15


def scroll_to_selection(state: AppState, rows: int) -> bool:
    """Keep the selected row inside the visible window; returns whether it moved."""
    previous = state.list_start
    position = state.selected_position()
    if position is not None:
        if position < state.list_start:
            state.list_start = position
        elif position >= state.list_start + rows:
            state.list_start = position - rows + 1
    state.list_start = max(0, min(state.list_start, max(0, len(state.entries) - rows)))
    return state.list_start != previous


def run_main_loop(
    app: App,
    terminal: TerminalController,
    stdin_fd: int,
    theme: UITheme,
    timing: RuntimeLoopTiming | None = None,
) -> None:
    """Run the main interactive TUI loop until a quit action occurs."""
    timing = timing if timing is not None else RuntimeLoopTiming()
    state = app.state
    spinner_frame = 0

    with terminal.raw_mode():
        while True:
            columns, lines = terminal.size()
            rows = list_rows(lines, len(app.marks))
            if rows != state.page_rows:
                state.page_rows = rows
                state.dirty = True
            if scroll_to_selection(state, rows):
                state.dirty = True

            if state.is_scanning:
                next_frame = int(time.monotonic() / timing.spinner_frame_seconds)
                if next_frame != spinner_frame:
                    spinner_frame = next_frame
                    state.dirty = True

            if state.dirty:
                render_frame(app.render_context(columns, lines, theme=theme, spinner_frame=spinner_frame))
                state.dirty = False

            try:
                key = read_key(stdin_fd, timeout_ms=timing.key_timeout_ms)
            except KeyboardInterrupt:
                # Raw mode delivers Ctrl+C as a key; a stray SIGINT is ignored.
                continue
            if key == "":
                app.tick()
                continue
            if app.handle_key(key):
                break
            app.tick()


__all__ = [
    "RuntimeLoopTiming",
    "run_main_loop",
    "scroll_to_selection",
]
