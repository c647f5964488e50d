"""Persistent JSON config helpers.

Stores the default sort mode, UI theme, size-measurement preference, and
scanner thread count. All access is defensive: malformed or missing config
falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from ..tree_model import SortMode, parse_sort_mode

logger = logging.getLogger(__name__)

APP_NAME = "lazydu"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH
DEFAULT_SORT_MODE = SortMode.SIZE_DESCENDING


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored so a read-only config
    directory never breaks the session.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def load_sort_mode() -> SortMode:
    value = load_config().get("sort")
    parsed = parse_sort_mode(value) if isinstance(value, str) else None
    return parsed if parsed is not None else DEFAULT_SORT_MODE


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_apparent_size() -> bool:
    """Only explicit booleans are accepted; anything else means allocated size."""
    value = load_config().get("apparent_size")
    return bool(value) if isinstance(value, bool) else False


def load_threads() -> int | None:
    value = load_config().get("threads")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return None
    return value


def save_defaults(
    *,
    sorting: SortMode,
    theme_name: str | None,
    apparent_size: bool,
    threads: int | None,
) -> None:
    """Persist the effective CLI choices as the new defaults."""
    config = load_config()
    config["sort"] = sorting.value
    if theme_name:
        config["theme"] = theme_name.strip()
    config["apparent_size"] = bool(apparent_size)
    if threads is not None and threads > 0:
        config["threads"] = int(threads)
    else:
        config.pop("threads", None)
    save_config(config)


__all__ = [
    "CONFIG_PATH",
    "DEFAULT_SORT_MODE",
    "load_config",
    "save_config",
    "load_sort_mode",
    "load_theme_name",
    "load_apparent_size",
    "load_threads",
    "save_defaults",
]
