"""Application object that composes the scanner, tree, and interactive state.

``App`` owns every component for one session: the shared ``Tree``, the
background ``Traversal``, the sorted-view cache, navigation, marks, deletion,
and the event dispatcher. ``run_app`` adds the terminal and the event loop.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
import time
from collections.abc import Iterable

from ..render import RenderContext, build_frame_lines
from ..render.ansi import strip_ansi
from ..traversal import FileSystemAccess, LocalFileSystem, Traversal
from ..tree_model import SortedViewCache, SortMode, Tree
from ..ui_theme import DEFAULT_THEME, UITheme
from .deletion import DeletionExecutor
from .dispatch import EventDispatcher
from .loop import RuntimeLoopTiming, run_main_loop
from .marks import MarkPane
from .navigation import Navigator
from .state import AppState
from .terminal import TerminalController

logger = logging.getLogger(__name__)


class App:
    """Composed runtime app for one scan session."""

    def __init__(
        self,
        *,
        tree: Tree,
        traversal: Traversal,
        fs: FileSystemAccess,
        sorting: SortMode,
    ) -> None:
        self.tree = tree
        self.traversal = traversal
        self.fs = fs
        self.cache = SortedViewCache()
        self.state = AppState(
            root=traversal.initial_root,
            sorting=sorting,
            is_scanning=traversal.is_scanning,
        )
        self.navigator = Navigator(self.state, tree, self.cache, traversal.initial_root)
        self.marks = MarkPane()
        self.executor = DeletionExecutor(tree, fs)
        self.dispatcher = EventDispatcher(
            self.state,
            tree,
            self.navigator,
            self.marks,
            self.executor,
        )
        self.navigator.refresh_entries(force=True)
        self.state.selected = self._initial_selection()

    @classmethod
    def create(
        cls,
        roots: list[str],
        *,
        fs: FileSystemAccess | None = None,
        threads: int | None = None,
        sorting: SortMode = SortMode.SIZE_DESCENDING,
        cross_filesystems: bool = True,
        wait_for_scan: bool = False,
    ) -> App:
        """Start scanning ``roots`` and build the session around the live tree.

        ``wait_for_scan`` blocks until the traversal completes, which gives
        tests and non-interactive output a fully aggregated tree.
        """
        fs = fs if fs is not None else LocalFileSystem()
        tree = Tree()
        traversal = Traversal(
            tree,
            fs,
            roots,
            threads=threads,
            cross_filesystems=cross_filesystems,
        ).start()
        if wait_for_scan:
            traversal.wait()
        return cls(tree=tree, traversal=traversal, fs=fs, sorting=sorting)

    def _initial_selection(self) -> int | None:
        """First root in command-line order at the synthetic root, else the first entry."""
        indices = [entry.index for entry in self.state.entries]
        if self.state.root == self.tree.root_index:
            for index in self.traversal.root_indices:
                if index in indices:
                    return index
        return indices[0] if indices else None

    def _awaiting_initial_selection(self) -> bool:
        """True while the operator is still at the untouched starting view."""
        state = self.state
        return (
            state.root == self.navigator.initial_root
            and not state.history
            and not self.navigator.has_navigated
        )

    def tick(self) -> None:
        """Poll the scanner and expire transient UI state; never blocks."""
        state = self.state
        scanning = self.traversal.is_scanning
        if scanning or state.is_scanning:
            # Sizes change without touching children_version while scanning.
            self.cache.invalidate()
            had_selection = state.selected is not None
            self.navigator.refresh_entries()
            if not had_selection and state.entries and not scanning and self._awaiting_initial_selection():
                state.selected = self._initial_selection()
                state.dirty = True
        if scanning != state.is_scanning:
            state.is_scanning = scanning
            state.dirty = True
        if state.status_message and time.monotonic() >= state.status_message_until:
            state.status_message = ""
            state.dirty = True

    def handle_key(self, key: str) -> bool:
        """Dispatch one decoded key; returns ``True`` when the session should end."""
        return self.dispatcher.handle_key(key)

    def process_events(self, keys: Iterable[str]) -> bool:
        """Apply ``keys`` in order, each to completion; stops at a quit key."""
        for key in keys:
            self.tick()
            if self.handle_key(key):
                return True
        self.tick()
        return False

    def render_context(
        self,
        width: int,
        height: int,
        *,
        theme: UITheme = DEFAULT_THEME,
        spinner_frame: int = 0,
    ) -> RenderContext:
        progress = self.traversal.progress
        return RenderContext(
            state=self.state,
            tree=self.tree,
            marks=self.marks,
            width=width,
            height=height,
            theme=theme,
            entries_scanned=progress.entries_scanned,
            elapsed_seconds=progress.elapsed_seconds,
            spinner_frame=spinner_frame,
        )

    def shutdown(self) -> None:
        if self.traversal.is_scanning:
            logger.info("cancelling scan on exit")
        self.traversal.cancel()


def render_report(app: App, width: int, height: int) -> str:
    """Render the initial view as plain text for non-interactive output."""
    lines = build_frame_lines(app.render_context(width, height))
    return "".join(strip_ansi(line).rstrip() + "\n" for line in lines)


def run_app(
    roots: list[str],
    *,
    theme: UITheme = DEFAULT_THEME,
    sorting: SortMode = SortMode.SIZE_DESCENDING,
    threads: int | None = None,
    apparent_size: bool = False,
    cross_filesystems: bool = True,
) -> None:
    """Scan ``roots`` and run the interactive browser until the user quits.

    Without a terminal on stdin the scan runs to completion and the top-level
    view is printed once instead.
    """
    fs = LocalFileSystem(apparent_size=apparent_size)
    interactive = os.isatty(sys.stdin.fileno())
    app = App.create(
        roots,
        fs=fs,
        threads=threads,
        sorting=sorting,
        cross_filesystems=cross_filesystems,
        wait_for_scan=not interactive,
    )
    try:
        if not interactive:
            columns = shutil.get_terminal_size((80, 24)).columns
            sys.stdout.write(render_report(app, columns, len(app.state.entries) + 2))
            return
        stdin_fd = sys.stdin.fileno()
        terminal = TerminalController(stdin_fd, sys.stdout.fileno())
        run_main_loop(app, terminal, stdin_fd, theme, RuntimeLoopTiming())
    finally:
        app.shutdown()


__all__ = [
    "App",
    "render_report",
    "run_app",
]
