"""Command-line front door for lazydu.

Parses CLI options, validates the roots to scan, and merges persisted
defaults. Then dispatches into the interactive runtime.
"""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Sequence

from .errors import RootPathError
from .runtime import config, run_app
from .tree_model import SortMode, parse_sort_mode
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _sort_mode(value: str) -> SortMode:
    """argparse type accepting ``size``, ``name-descending`` and similar."""
    parsed = parse_sort_mode(value)
    if parsed is None:
        choices = ", ".join(mode.value for mode in SortMode)
        raise argparse.ArgumentTypeError(f"unknown sort mode {value!r} (choose from {choices})")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazydu",
        description="Interactively explore disk usage and delete what is taking up space.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        default=None,
        help="Directories or files to scan. Defaults to the current directory.",
    )
    parser.add_argument(
        "-t",
        "--threads",
        type=_positive_int,
        default=None,
        help="Number of scanner threads (default: CPU count + 4, at most 32).",
    )
    parser.add_argument(
        "--sort",
        type=_sort_mode,
        default=None,
        help="Initial sort mode, e.g. size, name, mtime-ascending (default: size-descending).",
    )
    parser.add_argument(
        "-A",
        "--apparent-size",
        action="store_true",
        default=None,
        help="Show apparent file lengths instead of allocated disk blocks.",
    )
    parser.add_argument(
        "-x",
        "--stay-on-filesystem",
        action="store_true",
        help="Do not descend into directories on other filesystems.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--log-file", default=None, help="Write diagnostic logs to this file.")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Log level used with --log-file (default: WARNING).",
    )
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Persist --sort, --theme, --apparent-size and --threads as new defaults.",
    )
    return parser


def configure_logging(log_file: str | None, level: str) -> None:
    """Attach a file handler when requested; the TUI owns stdout and stderr."""
    root = logging.getLogger()
    if log_file is None:
        root.addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s",
    )


def resolve_roots(paths: Sequence[str] | None) -> list[str]:
    """Return the roots to scan, raising ``RootPathError`` for missing ones."""
    roots = list(paths) if paths else ["."]
    for root in roots:
        if not os.path.lexists(root):
            raise RootPathError(root)
    return roots


def main(argv: Sequence[str] | None = None) -> None:
    """Parse CLI arguments and launch lazydu on the given paths.

    Flags override persisted defaults from the config file; ``--save-defaults``
    writes the effective choices back before the scan starts.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    try:
        roots = resolve_roots(args.paths)
    except RootPathError as exc:
        raise SystemExit(str(exc)) from exc

    sorting = args.sort if args.sort is not None else config.load_sort_mode()
    theme_name = args.theme if args.theme is not None else config.load_theme_name()
    apparent_size = args.apparent_size if args.apparent_size is not None else config.load_apparent_size()
    threads = args.threads if args.threads is not None else config.load_threads()

    if args.save_defaults:
        config.save_defaults(
            sorting=sorting,
            theme_name=theme_name,
            apparent_size=apparent_size,
            threads=threads,
        )

    logger.info("scanning %s with %s threads", ", ".join(roots), threads or "default")
    run_app(
        roots,
        theme=resolve_theme(theme_name, no_color=args.no_color),
        sorting=sorting,
        threads=threads,
        apparent_size=apparent_size,
        cross_filesystems=not args.stay_on_filesystem,
    )


if __name__ == "__main__":
    main()
