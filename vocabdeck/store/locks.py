"""In-process mutual exclusion keyed by an arbitrary string, e.g. an account id."""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator


class KeyedLock:
    """A family of locks, one per key, created on demand and discarded once nobody holds or waits on them.

    Holders of different keys never block each other. This only serializes threads of one process.

    Example:
        .. code-block:: python

            locks = KeyedLock()
            with locks.hold("account-1"):
                ...  # no other thread holds "account-1" here
    """

    def __init__(self):
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
        """Number of keys currently held or waited on."""
        with self._guard:
            return len(self._locks)
