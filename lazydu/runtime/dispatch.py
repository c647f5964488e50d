"""Route abstract actions to navigation, marking, and deletion transitions.

The active input mode is an explicit tagged state: a pending deletion prompt
wins, then whichever pane has focus. Each mode owns one action table.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from ..input import Action, InputMode, Keymap
from ..tree_model import SortKey, Tree
from .deletion import DeletionExecutor, summarize_deletion
from .marks import MarkPane
from .navigation import Navigator
from .state import AppState, Focus

logger = logging.getLogger(__name__)

STATUS_MESSAGE_SECONDS = 4.0

_SORT_ACTION_KEYS = {
    Action.SORT_BY_SIZE: SortKey.SIZE,
    Action.SORT_BY_NAME: SortKey.NAME,
    Action.SORT_BY_MTIME: SortKey.MTIME,
    Action.SORT_BY_COUNT: SortKey.COUNT,
}


def set_status(state: AppState, message: str, seconds: float = STATUS_MESSAGE_SECONDS) -> None:
    state.status_message = message
    state.status_message_until = time.monotonic() + seconds
    state.dirty = True


def _step(transition: Callable[[], object]) -> Callable[[], bool]:
    """Wrap a navigation transition as a handler that never quits."""

    def handler() -> bool:
        transition()
        return False

    return handler


class EventDispatcher:
    """Apply one action to completion; ``dispatch`` returns ``True`` to quit."""

    def __init__(
        self,
        state: AppState,
        tree: Tree,
        navigator: Navigator,
        marks: MarkPane,
        executor: DeletionExecutor,
        keymap: Keymap | None = None,
    ) -> None:
        self.state = state
        self.tree = tree
        self.navigator = navigator
        self.marks = marks
        self.executor = executor
        self.keymap = keymap if keymap is not None else Keymap()
        self._tables: dict[InputMode, dict[Action, Callable[[], bool | None]]] = {
            InputMode.MAIN: self._main_table(),
            InputMode.MARK_PANE: self._mark_pane_table(),
            InputMode.CONFIRM: {
                Action.CONFIRM_DELETE: self._confirm_delete,
                Action.CANCEL: self._cancel_delete,
            },
        }

    def input_mode(self) -> InputMode:
        if self.state.confirm_delete:
            return InputMode.CONFIRM
        if self.state.focus is Focus.MARK_PANE:
            return InputMode.MARK_PANE
        return InputMode.MAIN

    def handle_key(self, key: str) -> bool:
        """Translate ``key`` for the active mode and dispatch it."""
        action = self.keymap.action_for(key, self.input_mode())
        if action is None:
            return False
        return self.dispatch(action)

    def dispatch(self, action: Action) -> bool:
        handler = self._tables[self.input_mode()].get(action)
        if handler is None:
            return False
        return bool(handler())

    def _main_table(self) -> dict[Action, Callable[[], bool | None]]:
        nav = self.navigator
        table: dict[Action, Callable[[], bool | None]] = {
            Action.CURSOR_DOWN: _step(lambda: nav.move_selection(1)),
            Action.CURSOR_UP: _step(lambda: nav.move_selection(-1)),
            Action.PAGE_DOWN: _step(lambda: nav.page_selection(1)),
            Action.PAGE_UP: _step(lambda: nav.page_selection(-1)),
            Action.CURSOR_HOME: _step(nav.select_first),
            Action.CURSOR_END: _step(nav.select_last),
            Action.TOGGLE_SORT_KEY: _step(lambda: nav.change_sorting(self.state.sorting.next_key())),
            Action.TOGGLE_SORT_DIRECTION: _step(lambda: nav.change_sorting(self.state.sorting.reversed())),
            Action.ENTER: _step(nav.enter),
            Action.LEAVE: _step(nav.leave),
            Action.SWITCH_FOCUS: self._switch_focus,
            Action.TOGGLE_MARK: lambda: self._toggle_mark(advance=False),
            Action.TOGGLE_MARK_ADVANCE: lambda: self._toggle_mark(advance=True),
            Action.TOGGLE_ALL_MARKS: self._toggle_all_marks,
            Action.TOGGLE_HELP: self._toggle_help,
            Action.CANCEL: self._close_help,
            Action.QUIT: self._quit,
        }
        for action, key in _SORT_ACTION_KEYS.items():
            table[action] = _step(lambda key=key: nav.change_sorting(self.state.sorting.toggled_for(key)))
        return table

    def _mark_pane_table(self) -> dict[Action, Callable[[], bool | None]]:
        state = self.state
        marks = self.marks

        def move(delta: Callable[[], int]) -> Callable[[], bool]:
            def handler() -> bool:
                if marks.move_selection(delta()):
                    state.dirty = True
                return False

            return handler

        return {
            Action.CURSOR_DOWN: move(lambda: 1),
            Action.CURSOR_UP: move(lambda: -1),
            Action.PAGE_DOWN: move(lambda: max(1, state.page_rows)),
            Action.PAGE_UP: move(lambda: -max(1, state.page_rows)),
            Action.CURSOR_HOME: move(lambda: -len(marks)),
            Action.CURSOR_END: move(lambda: len(marks)),
            Action.TOGGLE_MARK: self._unmark_pane_selection,
            Action.REQUEST_DELETE: self._request_delete,
            Action.SWITCH_FOCUS: self._switch_focus,
            Action.CANCEL: self._switch_focus,
            Action.TOGGLE_HELP: self._toggle_help,
            Action.QUIT: self._quit,
        }

    def _switch_focus(self) -> bool:
        self.navigator.switch_focus(len(self.marks))
        return False

    def _toggle_mark(self, advance: bool) -> bool:
        """Toggle the selected entry; ``advance`` moves the cursor down when possible."""
        if not self.marks.toggle_index(self.tree, self.state.selected):
            return False
        self.state.dirty = True
        if advance:
            self.navigator.move_selection(1)
        return False

    def _toggle_all_marks(self) -> bool:
        for entry in self.state.entries:
            self.marks.toggle_index(self.tree, entry.index)
        self.state.dirty = True
        return False

    def _unmark_pane_selection(self) -> bool:
        if self.marks.toggle_selected():
            self.state.dirty = True
        if not self.marks:
            self.state.focus = Focus.MAIN
        return False

    def _request_delete(self) -> bool:
        self.marks.prune(self.tree)
        if not self.marks:
            self.state.focus = Focus.MAIN
            self.state.dirty = True
            return False
        self.state.confirm_delete = True
        self.state.dirty = True
        return False

    def _confirm_delete(self) -> bool:
        state = self.state
        state.confirm_delete = False
        logger.info("deleting %d marked entries", len(self.marks))
        results = self.executor.delete_marked(state, self.marks)
        self.navigator.refresh_entries()
        if not self.marks:
            state.focus = Focus.MAIN
        set_status(state, summarize_deletion(results))
        return False

    def _cancel_delete(self) -> bool:
        self.state.confirm_delete = False
        set_status(self.state, "deletion cancelled")
        return False

    def _toggle_help(self) -> bool:
        self.state.show_help = not self.state.show_help
        self.state.dirty = True
        return False

    def _close_help(self) -> bool:
        if self.state.show_help:
            self.state.show_help = False
            self.state.dirty = True
        return False

    def _quit(self) -> bool:
        return True


__all__ = [
    "EventDispatcher",
    "STATUS_MESSAGE_SECONDS",
    "set_status",
]
