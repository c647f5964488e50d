"""Public runtime orchestration entry points.

This package groups the interactive session bootstrap (`run_app`), the
composed `App`, and the event loop used by tests and composition code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .app import App
    from .loop import RuntimeLoopTiming


def run_app(*args, **kwargs):
    """Lazily import session entrypoint to avoid heavy runtime bootstrap on import."""
    from .app import run_app as _run_app

    return _run_app(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


def __getattr__(name: str):
    if name == "App":
        from . import app as _app

        return _app.App
    if name == "RuntimeLoopTiming":
        from . import loop as _loop

        return _loop.RuntimeLoopTiming
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "App",
    "run_app",
    "RuntimeLoopTiming",
    "run_main_loop",
]
