"""Shared/exclusive lock guarding a :class:`~inistore.core.store.ConfigStore`.

The standard library only ships mutual-exclusion locks, so this module builds
a small readers/writer lock on top of :class:`threading.Condition`:

- any number of readers may hold the lock at the same time;
- a writer waits until all readers are gone and then excludes everyone else;
- waiting writers block *new* readers, so lookups cannot starve a writer.

The lock is not reentrant. Code running under it must call lock-free
internal helpers instead of re-entering a public, locking method.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager, nullcontext


class ReadWriteLock:
    """Readers/writer lock with writer preference."""

    __slots__ = ("_cond", "_readers", "_writer", "_waiting_writers")

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers: int = 0
        self._writer: bool = False
        self._waiting_writers: int = 0

    # ------------------------------- Shared ---------------------------------

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() called without a reader")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    # ------------------------------ Exclusive -------------------------------

    def acquire_write(self) -> None:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() called without a writer")
            self._writer = False
            self._cond.notify_all()

    # ------------------------------ Context API -----------------------------

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        """Hold the lock in shared mode for the duration of the block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        """Hold the lock in exclusive mode for the duration of the block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


def maybe_read(lock: ReadWriteLock | None) -> AbstractContextManager[None]:
    """Return a shared-mode context for ``lock``, or a no-op when ``None``."""
    return lock.read_locked() if lock is not None else nullcontext()


def maybe_write(lock: ReadWriteLock | None) -> AbstractContextManager[None]:
    """Return an exclusive-mode context for ``lock``, or a no-op when ``None``."""
    return lock.write_locked() if lock is not None else nullcontext()


__all__ = ["ReadWriteLock", "maybe_read", "maybe_write"]
