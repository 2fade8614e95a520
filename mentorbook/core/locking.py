"""
Per-key locking for read-check-write sequences.

Booking transitions read a record, check who may change it, then write it
back. ``KeyedLock`` serializes those sequences per booking id inside one
process; different bookings never wait on each other.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator


class KeyedLock:
    """Hands out one lock per key and drops it once nobody holds or waits on it."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}
        self._waiters: Dict[str, int] = {}

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())
            self._waiters[key] = self._waiters.get(key, 0) + 1

        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                self._waiters[key] -= 1
                if self._waiters[key] == 0:
                    del self._waiters[key]
                    del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
