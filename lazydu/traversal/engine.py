"""Background traversal that fills a ``Tree`` while the UI keeps running.

Every directory becomes one task on a thread pool, so sibling subtrees are
walked in parallel. Workers only write through ``Tree.insert``, which
serialises ancestor updates; the event loop polls ``ScanProgress`` and never
waits on it.
"""

from __future__ import annotations

import logging
import os
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor

from ..tree_model import Tree
from .fs import FileSystemAccess

logger = logging.getLogger(__name__)


def default_thread_count() -> int:
    return min(32, (os.cpu_count() or 1) + 4)


class ScanProgress:
    """Thread-safe scanning flag and in-flight task counter for one session."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._in_flight = 0
        self._started = False
        self._finished = threading.Event()
        self._cancelled = threading.Event()
        self._entries_scanned = 0
        self.started_at: float | None = None
        self.finished_at: float | None = None

    def begin(self) -> None:
        """Open the session; the caller owns one in-flight slot until ``task_finished``."""
        with self._lock:
            if self._started:
                raise RuntimeError("scan session already started")
            self._started = True
            self._in_flight = 1
            self.started_at = time.monotonic()

    def task_started(self) -> None:
        with self._lock:
            self._in_flight += 1

    def task_finished(self) -> bool:
        """Release one slot; return ``True`` when this ended the session."""
        with self._lock:
            self._in_flight -= 1
            if self._in_flight > 0:
                return False
            self._in_flight = 0
            self.finished_at = time.monotonic()
        self._finished.set()
        return True

    def entry_scanned(self) -> None:
        with self._lock:
            self._entries_scanned += 1

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def is_scanning(self) -> bool:
        with self._lock:
            return self._started and not self._finished.is_set()

    @property
    def in_flight(self) -> int:
        with self._lock:
            return self._in_flight

    @property
    def entries_scanned(self) -> int:
        with self._lock:
            return self._entries_scanned

    @property
    def elapsed_seconds(self) -> float:
        with self._lock:
            if self.started_at is None:
                return 0.0
            end = self.finished_at if self.finished_at is not None else time.monotonic()
            return max(0.0, end - self.started_at)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the session ends; only for tests and non-interactive use."""
        return self._finished.wait(timeout)


class Traversal:
    """Walk ``roots`` into ``tree`` using a pool of worker threads."""

    def __init__(
        self,
        tree: Tree,
        fs: FileSystemAccess,
        roots: list[str],
        *,
        threads: int | None = None,
        cross_filesystems: bool = True,
    ) -> None:
        if not roots:
            raise ValueError("at least one root path is required")
        self.tree = tree
        self.fs = fs
        self.roots = list(roots)
        self.threads = max(1, threads if threads is not None else default_thread_count())
        self.cross_filesystems = cross_filesystems
        self.root_index = tree.root_index
        self.root_indices: list[int] = []
        self.progress = ScanProgress()
        self._executor: ThreadPoolExecutor | None = None

    @property
    def is_scanning(self) -> bool:
        return self.progress.is_scanning

    @property
    def initial_root(self) -> int:
        """Single given root is shown directly; several share the virtual root."""
        if len(self.root_indices) == 1:
            return self.root_indices[0]
        return self.root_index

    def start(self) -> Traversal:
        """Insert every root and queue directory walks; returns immediately."""
        self.progress.begin()
        self._executor = ThreadPoolExecutor(
            max_workers=self.threads,
            thread_name_prefix="lazydu-scan",
        )
        try:
            for root in self.roots:
                self.root_indices.append(self._insert_root(root))
        finally:
            self._release_slot()
        return self

    def wait(self, timeout: float | None = None) -> bool:
        return self.progress.wait(timeout)

    def cancel(self) -> None:
        """Stop queueing new directories; running tasks finish their current mutation."""
        self.progress.cancel()
        executor = self._executor
        if executor is not None:
            executor.shutdown(wait=False, cancel_futures=True)

    def _insert_root(self, root: str) -> int:
        try:
            info = self.fs.stat(root)
        except OSError as exc:
            index = self.tree.add_root(root, False)
            self._record_failure(self.root_index, root, exc)
            return index
        index = self.tree.add_root(
            root,
            info.is_dir,
            size=info.size,
            mtime_ns=info.mtime_ns,
        )
        self.progress.entry_scanned()
        if info.is_dir:
            self._submit(index, root, info.device)
        return index

    def _insert_child(self, parent: int, name: str, path: str, root_device: int | None) -> None:
        try:
            info = self.fs.stat(path)
        except OSError as exc:
            self._record_failure(parent, path, exc)
            return
        index = self.tree.insert(parent, name, info.is_dir, size=info.size, mtime_ns=info.mtime_ns)
        if index is None:
            # Parent subtree was deleted while this worker was still inside it.
            return
        self.progress.entry_scanned()
        if not info.is_dir:
            return
        if (
            not self.cross_filesystems
            and root_device is not None
            and info.device is not None
            and info.device != root_device
        ):
            logger.debug("not crossing into other filesystem at %s", path)
            return
        self._submit(index, path, root_device)

    def _submit(self, index: int, path: str, root_device: int | None) -> None:
        executor = self._executor
        if executor is None or self.progress.cancelled:
            return
        self.progress.task_started()
        try:
            future = executor.submit(self._walk, index, path, root_device)
        except RuntimeError:
            # Executor already shut down by ``cancel``.
            self._release_slot()
            return
        future.add_done_callback(self._on_task_done)

    def _walk(self, index: int, path: str, root_device: int | None) -> None:
        if self.progress.cancelled:
            return
        try:
            children = self.fs.list_children(path)
        except OSError as exc:
            info = self.tree.get(index)
            if info is None:
                # Deleted while queued; nothing left to attach the error to.
                return
            parent = info.parent if info.parent is not None else self.root_index
            self._record_failure(parent, path, exc)
            return
        for child in children:
            if self.progress.cancelled:
                return
            self._insert_child(index, child.name, os.path.join(path, child.name), root_device)

    def _on_task_done(self, future: Future) -> None:
        if not future.cancelled():
            exc = future.exception()
            if exc is not None:
                logger.error("scan task failed", exc_info=exc)
        self._release_slot()

    def _release_slot(self) -> None:
        if self.progress.task_finished():
            logger.info(
                "scan finished: %d entries in %.2fs",
                self.progress.entries_scanned,
                self.progress.elapsed_seconds,
            )
            executor = self._executor
            if executor is not None:
                executor.shutdown(wait=False)

    def _record_failure(self, parent: int, path: str, exc: OSError) -> None:
        message = exc.strerror or str(exc)
        logger.debug("skipping %s: %s", path, message)
        self.tree.record_error(parent, path, message)


__all__ = [
    "ScanProgress",
    "Traversal",
    "default_thread_count",
]
