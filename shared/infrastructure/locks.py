"""Process-local mutual exclusion keyed by an arbitrary hashable value."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator, List


class LockTimeout(Exception):
    """Raised when a keyed lock cannot be acquired within the timeout."""


class KeyedLock:
    """
    One lock per key, created on demand and dropped when nobody holds or
    waits for it.

    Usage:
        property_locks = KeyedLock()
        with property_locks.hold(property_id, timeout=5):
            ...  # check-then-insert for this property only
    """

    def __init__(self):
        self._lock = threading.Lock()
        # key -> [lock, number of holders and waiters]
        self._entries: Dict[Hashable, List] = {}

    def _checkout(self, key: Hashable) -> threading.Lock:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                entry = [threading.Lock(), 0]
                self._entries[key] = entry
            entry[1] += 1
            return entry[0]

    def _release(self, key: Hashable) -> None:
        with self._lock:
            entry = self._entries[key]
            entry[1] -= 1
            if entry[1] == 0:
                del self._entries[key]

    @contextmanager
    def hold(self, key: Hashable, timeout: float) -> Iterator[None]:
        lock = self._checkout(key)
        try:
            if not lock.acquire(timeout=timeout):
                raise LockTimeout(f"Could not acquire lock for {key!r} within {timeout}s")
            try:
                yield
            finally:
                lock.release()
        finally:
            self._release(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
