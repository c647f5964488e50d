"""Rendering for the entry list, mark pane, and status line.

``build_frame_lines`` composes styled rows without touching runtime state;
``render_frame`` writes one fully composed ANSI frame to stdout.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

from ..formatting import format_count, format_size, fraction_bar, percentage
from ..runtime.marks import MarkPane
from ..runtime.state import AppState
from ..tree_model import EntryInfo, Tree
from ..ui_theme import DEFAULT_THEME, UITheme
from .ansi import clip_ansi_line, pad_ansi_line
from .help import help_lines

BAR_WIDTH = 10
SIZE_COLUMN_WIDTH = 10
MAX_MARK_PANE_ROWS = 8
MAX_LISTED_ERRORS = 20
SCAN_SPINNER_FRAMES: tuple[str, ...] = ("|", "/", "-", "\\")


@dataclass
class RenderContext:
    state: AppState
    tree: Tree
    marks: MarkPane
    width: int
    height: int
    theme: UITheme = DEFAULT_THEME
    entries_scanned: int = 0
    elapsed_seconds: float = 0.0
    spinner_frame: int = 0


def selected_with_ansi(text: str, theme: UITheme) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text or not theme.reverse:
        return text
    # Keep reverse video active even when the text contains internal resets.
    return theme.reverse + text.replace(theme.reset, theme.reset + theme.reverse) + theme.reset


def build_status_line(left_text: str, width: int, right_text: str = "│ ? Help") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def mark_pane_rows(height: int, marked_count: int) -> int:
    """Rows used by the mark pane including its title, or 0 when nothing is marked."""
    if marked_count <= 0:
        return 0
    return 1 + min(marked_count, MAX_MARK_PANE_ROWS, max(1, height // 3))


def list_rows(height: int, marked_count: int) -> int:
    """Rows available to the entry list below the header and above the status line."""
    return max(1, height - 2 - mark_pane_rows(height, marked_count))


def format_entry_row(
    info: EntryInfo,
    total: int,
    width: int,
    *,
    marked: bool,
    theme: UITheme,
) -> str:
    """Format one list row: mark flag, size, share bar, and name."""
    flag = f"{theme.marked}*{theme.reset}" if marked else " "
    size = f"{theme.size}{format_size(info.size).rjust(SIZE_COLUMN_WIDTH)}{theme.reset}"
    bar = f"{theme.bar}{fraction_bar(info.size, total, BAR_WIDTH)}{theme.reset}"
    share = f"{percentage(info.size, total):5.1f}%"
    if info.is_dir:
        name = f"{theme.entry_dir}{info.name}/{theme.reset}"
    else:
        name = f"{theme.entry_file}{info.name}{theme.reset}"
    return pad_ansi_line(f"{flag}{size} {share} {bar} {name}", width)


def _header_line(context: RenderContext, root: EntryInfo | None) -> str:
    state = context.state
    tree = context.tree
    theme = context.theme
    if state.root == tree.root_index:
        label = f"{len(tree.children_of(tree.root_index))} roots"
    else:
        label = tree.path_of(state.root)
    total = format_size(root.size) if root is not None else "0 B"
    count = format_count(root.item_count) if root is not None else "0"
    return pad_ansi_line(
        f"{theme.header} lazydu {theme.reset} {label}  {total}  {count} entries",
        context.width,
    )


def _status_text(context: RenderContext) -> str:
    state = context.state
    parts = [f"sort: {state.sorting.label}", f"{len(state.entries)} items"]
    if state.is_scanning:
        spinner = SCAN_SPINNER_FRAMES[context.spinner_frame % len(SCAN_SPINNER_FRAMES)]
        parts.append(f"scanning {spinner} {format_count(context.entries_scanned)} entries")
    elif context.elapsed_seconds > 0:
        parts.append(f"scanned {format_count(context.entries_scanned)} in {context.elapsed_seconds:.1f}s")
    error_count = context.tree.error_count
    if error_count:
        parts.append(f"{error_count} errors")
    if len(context.marks):
        parts.append(f"{len(context.marks)} marked ({format_size(context.marks.total_size(context.tree))})")
    if state.status_message:
        parts.append(state.status_message)
    return " | ".join(parts)


def _mark_pane_lines(context: RenderContext, rows: int) -> list[str]:
    theme = context.theme
    marks = context.marks
    state = context.state
    focused = state.mark_pane_has_focus
    title_style = theme.pane_title_focused if focused else theme.pane_title
    hint = "d unmark, x delete, Esc back" if focused else "Tab to focus"
    lines = [pad_ansi_line(f"{title_style}── marked ({len(marks)}) · {hint} ──{theme.reset}", context.width)]
    body_rows = rows - 1
    items = marks.items()
    snapshot = context.tree.snapshot(marks.indices())
    selected = marks.selected if marks.selected is not None else 0
    start = max(0, min(selected - body_rows + 1, len(items) - body_rows)) if selected >= body_rows else 0
    for position in range(start, min(len(items), start + body_rows)):
        item = items[position]
        info = snapshot.get(item.index)
        size = format_size(info.size) if info is not None else "gone"
        suffix = "/" if item.is_dir else ""
        row = pad_ansi_line(f" {size.rjust(SIZE_COLUMN_WIDTH)}  {item.path}{suffix}", context.width)
        if focused and position == marks.selected:
            row = selected_with_ansi(row, theme)
        lines.append(row)
    return lines


def build_frame_lines(context: RenderContext) -> list[str]:
    """Compose every screen row for the current state."""
    state = context.state
    tree = context.tree
    theme = context.theme
    width = max(1, context.width)
    height = max(3, context.height)
    pane_rows = mark_pane_rows(height, len(context.marks))
    rows = list_rows(height, len(context.marks))

    root = tree.get(state.root)
    lines = [_header_line(context, root)]

    if state.show_help:
        help_rows = help_lines(theme)
        errors = tree.errors()
        if errors:
            help_rows.append("")
            help_rows.append(f"{theme.status_error}SCAN ERRORS ({len(errors)}){theme.reset}")
            help_rows.extend(f"  {error.path}: {error.message}" for error in errors[:MAX_LISTED_ERRORS])
        body = [pad_ansi_line(line, width) for line in help_rows[:rows]]
    else:
        visible = state.entries[state.list_start:state.list_start + rows]
        snapshot = tree.snapshot([entry.index for entry in visible])
        total = root.size if root is not None else 0
        body = []
        for entry in visible:
            info = snapshot.get(entry.index)
            if info is None:
                continue
            row = format_entry_row(info, total, width, marked=context.marks.contains(info.index), theme=theme)
            if info.index == state.selected and not state.mark_pane_has_focus:
                row = selected_with_ansi(row, theme)
            body.append(row)
        if not body:
            placeholder = "scanning…" if state.is_scanning else "empty"
            body.append(pad_ansi_line(f"{theme.divider}  ({placeholder}){theme.reset}", width))
    lines.extend(body)
    lines.extend(pad_ansi_line("", width) for _ in range(rows - len(body)))

    if pane_rows:
        lines.extend(_mark_pane_lines(context, pane_rows))

    if state.confirm_delete:
        prompt = (
            f"Delete {len(context.marks)} marked entries "
            f"({format_size(context.marks.total_size(tree))}) permanently? [y/N]"
        )
        lines.append(f"{theme.prompt}{clip_ansi_line(prompt, width - 1)}{theme.reset}")
    else:
        status = build_status_line(_status_text(context), width)
        lines.append(f"{theme.reverse}{status}{theme.reset}")
    return lines


def render_frame(context: RenderContext) -> None:
    """Write one full frame to stdout."""
    out: list[str] = ["\033[H\033[J"]
    lines = build_frame_lines(context)
    for row, line in enumerate(lines):
        out.append(line)
        if "\033" in line:
            out.append("\033[0m")
        if row < len(lines) - 1:
            out.append("\r\n")
    os.write(sys.stdout.fileno(), "".join(out).encode("utf-8", errors="replace"))


__all__ = [
    "RenderContext",
    "build_frame_lines",
    "build_status_line",
    "format_entry_row",
    "list_rows",
    "mark_pane_rows",
    "render_frame",
    "selected_with_ansi",
]
