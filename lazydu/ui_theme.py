"""UI theme definitions and selection helpers.

Themes are ANSI palettes for list rows, the mark pane, and screen chrome.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reverse: str
    reset: str
    header: str
    entry_dir: str
    entry_file: str
    size: str
    bar: str
    marked: str
    pane_title: str
    pane_title_focused: str
    status_scanning: str
    status_error: str
    prompt: str
    help_heading: str
    help_key: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    header="\033[1;38;5;81m",
    entry_dir="\033[1;34m",
    entry_file="\033[38;5;252m",
    size="\033[38;5;109m",
    bar="\033[38;5;44m",
    marked="\033[1;38;5;214m",
    pane_title="\033[2;38;5;250m",
    pane_title_focused="\033[1;38;5;214m",
    status_scanning="\033[38;5;229m",
    status_error="\033[38;5;203m",
    prompt="\033[1;38;5;203m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reverse="\033[7m",
    reset="\033[0m",
    header="\033[1;38;5;45m",
    entry_dir="\033[1;38;5;45m",
    entry_file="\033[38;5;252m",
    size="\033[38;5;73m",
    bar="\033[38;5;39m",
    marked="\033[1;38;5;215m",
    pane_title="\033[2;38;5;110m",
    pane_title_focused="\033[1;38;5;215m",
    status_scanning="\033[38;5;153m",
    status_error="\033[38;5;210m",
    prompt="\033[1;38;5;210m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reverse="\033[7m",
    reset="\033[0m",
    header="",
    entry_dir="",
    entry_file="",
    size="",
    bar="",
    marked="",
    pane_title="",
    pane_title_focused="",
    status_scanning="",
    status_error="",
    prompt="",
    help_heading="",
    help_key="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
