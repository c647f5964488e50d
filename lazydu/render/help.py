"""Help overlay content for the main list, the mark pane, and the prompt."""

from __future__ import annotations

from ..ui_theme import UITheme

HELP_SECTIONS: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    (
        "NAVIGATION",
        (
            ("j/k, Up/Down", "move selection"),
            ("Ctrl+D/Ctrl+U", "page down/up"),
            ("H/G, Home/End", "first/last entry"),
            ("o/l/Enter/Right", "enter directory"),
            ("u/h/Backspace/Left", "go up"),
        ),
    ),
    (
        "SORTING",
        (
            ("s", "size (again: reverse)"),
            ("n", "name (again: reverse)"),
            ("m", "modification time (again: reverse)"),
            ("c", "entry count (again: reverse)"),
            ("S / r", "next sort key / reverse direction"),
        ),
    ),
    (
        "MARKING",
        (
            ("d", "toggle mark and move down"),
            ("Space", "toggle mark"),
            ("a", "toggle marks of all entries"),
            ("Tab", "switch between list and mark pane"),
        ),
    ),
    (
        "MARK PANE",
        (
            ("d/Space", "unmark entry"),
            ("x/Ctrl+R", "delete marked entries (asks first)"),
            ("Esc", "back to list"),
        ),
    ),
    (
        "GENERAL",
        (
            ("?", "toggle this help"),
            ("q/Ctrl+C", "quit"),
        ),
    ),
)


def help_lines(theme: UITheme) -> list[str]:
    """Return styled help rows, one section heading followed by its keys."""
    lines: list[str] = []
    key_width = max(len(key) for _, bindings in HELP_SECTIONS for key, _ in bindings)
    for heading, bindings in HELP_SECTIONS:
        if lines:
            lines.append("")
        lines.append(f"{theme.help_heading}{heading}{theme.reset}")
        for key, description in bindings:
            lines.append(f"  {theme.help_key}{key.ljust(key_width)}{theme.reset}  {description}")
    return lines


__all__ = [
    "HELP_SECTIONS",
    "help_lines",
]
