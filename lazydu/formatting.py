"""Human-readable size, count, and fraction formatting for list rows."""

from __future__ import annotations

import math

SIZE_NAMES = ("B", "KB", "MB", "GB", "TB", "PB")
BAR_FILL = "█"
BAR_EMPTY = "░"


def format_size(size_bytes: int) -> str:
    """Format ``size_bytes`` with 1024-based units, e.g. ``'1.23 MB'``."""
    if size_bytes <= 0:
        return "0 B"
    i = min(len(SIZE_NAMES) - 1, int(math.floor(math.log(size_bytes, 1024))))
    if i == 0:
        return f"{size_bytes} B"
    s = round(size_bytes / math.pow(1024, i), 2)
    # Rounding can push 1023.999 KB up to 1024.00 KB.
    if s >= 1024 and i + 1 < len(SIZE_NAMES):
        i += 1
        s = round(s / 1024, 2)
    return f"{s:.2f} {SIZE_NAMES[i]}"


def format_count(count: int) -> str:
    return f"{count:,}"


def percentage(part: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return max(0.0, min(100.0, part * 100.0 / total))


def fraction_bar(part: int, total: int, width: int) -> str:
    """Return a fixed-width bar filled proportionally to ``part / total``."""
    if width <= 0:
        return ""
    filled = int(round(percentage(part, total) / 100.0 * width))
    return BAR_FILL * filled + BAR_EMPTY * (width - filled)


__all__ = [
    "format_size",
    "format_count",
    "percentage",
    "fraction_bar",
]
