"""Entry discovery — walk a directory tree, tolerating unreadable subtrees.

Two interchangeable strategies produce the same set of entries:

* :class:`NativeEnumerator` hands the walk to ``pathlib.Path.walk``
  (Python 3.12+), routing listing failures to an error hook.
* :class:`StackBasedEnumerator` keeps an explicit LIFO stack of
  directories and lists each one with ``os.scandir``.

Use :func:`select_enumerator` to get the best one the interpreter supports.
Neither strategy follows symlinks; a symlink is reported as a file entry.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator

from path_audit.core.diagnostics import (
    DiagnosticObserver,
    LoggingObserver,
    event_from_os_error,
)
from path_audit.model import EntryKind
from path_audit.model.entry import Entry

logger = logging.getLogger(__name__)

# Capability check, evaluated once at import.
HAS_NATIVE_WALK: bool = hasattr(Path, "walk")


def _lstat_size(path: str) -> int | None:
    try:
        return os.lstat(path).st_size
    except OSError:
        return None


class Enumerator(ABC):
    """Lazily yields every entry below a root, excluding the root itself.

    The returned iterators are single-use.  A directory that cannot be
    listed is reported to the observer and its subtree is skipped; the walk
    never aborts because of it.
    """

    name: str = ""

    def __init__(self, observer: DiagnosticObserver | None = None) -> None:
        self.observer = observer if observer is not None else LoggingObserver()

    @abstractmethod
    def iter_entries(self, root: str | os.PathLike[str]) -> Iterator[Entry]:
        """Yield an :class:`Entry` (with kind and size) per descendant."""

    def iter_paths(self, root: str | os.PathLike[str]) -> Iterator[str]:
        """Yield the fully-qualified path string of every descendant."""
        for entry in self.iter_entries(root):
            yield entry.path

    def _skip(self, exc: OSError, path: str | None = None) -> None:
        self.observer.notify(event_from_os_error(exc, path))


class NativeEnumerator(Enumerator):
    """Single-pass walk delegated to ``Path.walk``."""

    name = "native"

    def __init__(self, observer: DiagnosticObserver | None = None) -> None:
        if not HAS_NATIVE_WALK:
            raise RuntimeError("Path.walk is not available on this interpreter")
        super().__init__(observer)

    def iter_entries(self, root: str | os.PathLike[str]) -> Iterator[Entry]:
        top = Path(os.path.abspath(root))
        for dirpath, dirnames, filenames in top.walk(on_error=self._skip):
            for name in dirnames:
                yield Entry(str(dirpath / name), EntryKind.FOLDER)
            for name in filenames:
                path = str(dirpath / name)
                yield Entry(path, EntryKind.FILE, _lstat_size(path))


class StackBasedEnumerator(Enumerator):
    """Depth-first walk over an explicit stack of pending directories."""

    name = "stack"

    def iter_entries(self, root: str | os.PathLike[str]) -> Iterator[Entry]:
        stack: list[str] = [os.path.abspath(root)]
        while stack:
            current = stack.pop()
            try:
                with os.scandir(current) as it:
                    children = list(it)
            except OSError as exc:
                self._skip(exc, current)
                continue

            for child in children:
                try:
                    is_dir = child.is_dir(follow_symlinks=False)
                except OSError:
                    is_dir = False
                if is_dir:
                    yield Entry(child.path, EntryKind.FOLDER)
                    stack.append(child.path)
                else:
                    try:
                        size: int | None = child.stat(follow_symlinks=False).st_size
                    except OSError:
                        size = None
                    yield Entry(child.path, EntryKind.FILE, size)


_STRATEGIES: dict[str, type[Enumerator]] = {
    NativeEnumerator.name: NativeEnumerator,
    StackBasedEnumerator.name: StackBasedEnumerator,
}


def select_enumerator(
    observer: DiagnosticObserver | None = None,
    *,
    strategy: str | None = None,
) -> Enumerator:
    """Return the native enumerator when the host supports it, else the stack one.

    Pass ``strategy="native"`` or ``strategy="stack"`` to force a choice.
    """
    if strategy is None:
        strategy = NativeEnumerator.name if HAS_NATIVE_WALK else StackBasedEnumerator.name
    try:
        cls = _STRATEGIES[strategy]
    except KeyError:
        raise ValueError(f"unknown enumeration strategy: {strategy!r}") from None
    logger.debug("Using %s enumerator", strategy)
    return cls(observer)
