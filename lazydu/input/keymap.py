"""Key-token to abstract ``Action`` mapping, one registry per input mode."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class Action(Enum):
    """Abstract input events understood by the dispatcher."""

    CURSOR_DOWN = "cursor_down"
    CURSOR_UP = "cursor_up"
    PAGE_DOWN = "page_down"
    PAGE_UP = "page_up"
    CURSOR_HOME = "cursor_home"
    CURSOR_END = "cursor_end"
    SORT_BY_SIZE = "sort_by_size"
    SORT_BY_NAME = "sort_by_name"
    SORT_BY_MTIME = "sort_by_mtime"
    SORT_BY_COUNT = "sort_by_count"
    TOGGLE_SORT_KEY = "toggle_sort_key"
    TOGGLE_SORT_DIRECTION = "toggle_sort_direction"
    ENTER = "enter"
    LEAVE = "leave"
    SWITCH_FOCUS = "switch_focus"
    TOGGLE_MARK = "toggle_mark"
    TOGGLE_MARK_ADVANCE = "toggle_mark_advance"
    TOGGLE_ALL_MARKS = "toggle_all_marks"
    REQUEST_DELETE = "request_delete"
    CONFIRM_DELETE = "confirm_delete"
    CANCEL = "cancel"
    TOGGLE_HELP = "toggle_help"
    QUIT = "quit"


class InputMode(Enum):
    MAIN = "main"
    MARK_PANE = "mark_pane"
    CONFIRM = "confirm"


@dataclass(frozen=True)
class KeyBinding:
    """Mapping from one or more key tokens to a single action."""

    combos: tuple[str, ...]
    action: Action


class KeyComboRegistry:
    """Small key lookup table with optional key normalization strategy."""

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        self._normalize = normalize if normalize is not None else self._identity
        self._actions: dict[str, Action] = {}

    @staticmethod
    def _identity(key: str) -> str:
        return key

    def register_binding(self, binding: KeyBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing actions for same combos."""
        for combo in binding.combos:
            self._actions[self._normalize(combo)] = binding.action
        return self

    def register_bindings(self, *bindings: KeyBinding) -> KeyComboRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def lookup(self, key: str) -> Action | None:
        return self._actions.get(self._normalize(key))


_SHARED_BINDINGS = (
    KeyBinding(("j", "DOWN"), Action.CURSOR_DOWN),
    KeyBinding(("k", "UP"), Action.CURSOR_UP),
    KeyBinding(("CTRL_D", "PAGE_DOWN"), Action.PAGE_DOWN),
    KeyBinding(("CTRL_U", "PAGE_UP"), Action.PAGE_UP),
    KeyBinding(("H", "HOME"), Action.CURSOR_HOME),
    KeyBinding(("G", "END"), Action.CURSOR_END),
    KeyBinding(("TAB",), Action.SWITCH_FOCUS),
    KeyBinding(("?",), Action.TOGGLE_HELP),
    KeyBinding(("q", "CTRL_C"), Action.QUIT),
)

_MAIN_BINDINGS = (
    KeyBinding(("o", "l", "ENTER", "RIGHT"), Action.ENTER),
    KeyBinding(("u", "h", "BACKSPACE", "LEFT"), Action.LEAVE),
    KeyBinding(("s",), Action.SORT_BY_SIZE),
    KeyBinding(("n",), Action.SORT_BY_NAME),
    KeyBinding(("m",), Action.SORT_BY_MTIME),
    KeyBinding(("c",), Action.SORT_BY_COUNT),
    KeyBinding(("S",), Action.TOGGLE_SORT_KEY),
    KeyBinding(("r",), Action.TOGGLE_SORT_DIRECTION),
    KeyBinding(("d",), Action.TOGGLE_MARK_ADVANCE),
    KeyBinding((" ",), Action.TOGGLE_MARK),
    KeyBinding(("a",), Action.TOGGLE_ALL_MARKS),
    KeyBinding(("ESC",), Action.CANCEL),
)

_MARK_PANE_BINDINGS = (
    KeyBinding(("d", " "), Action.TOGGLE_MARK),
    KeyBinding(("x", "CTRL_R"), Action.REQUEST_DELETE),
    KeyBinding(("ESC",), Action.CANCEL),
)


class Keymap:
    """Resolve decoded key tokens to actions for the active input mode."""

    def __init__(self) -> None:
        self._registries = {
            InputMode.MAIN: KeyComboRegistry().register_bindings(*_SHARED_BINDINGS, *_MAIN_BINDINGS),
            InputMode.MARK_PANE: KeyComboRegistry().register_bindings(
                *_SHARED_BINDINGS,
                *_MARK_PANE_BINDINGS,
            ),
            InputMode.CONFIRM: KeyComboRegistry(normalize=str.lower).register_bindings(
                KeyBinding(("y",), Action.CONFIRM_DELETE),
            ),
        }

    def action_for(self, key: str, mode: InputMode) -> Action | None:
        action = self._registries[mode].lookup(key)
        if action is None and mode is InputMode.CONFIRM and key:
            # Anything but an explicit yes dismisses the prompt.
            return Action.CANCEL
        return action


__all__ = [
    "Action",
    "InputMode",
    "KeyBinding",
    "KeyComboRegistry",
    "Keymap",
]
