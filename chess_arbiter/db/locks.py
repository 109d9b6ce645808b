"""Per-record mutual exclusion inside one process."""

import threading
from collections.abc import Hashable, Iterator
from contextlib import contextmanager


class RecordLocks:
    """
    One lock per record key. Callers on different keys never wait on each other.

    An entry only lives while someone holds or waits for its key, so the registry does not grow with the number of
    records (or unknown IDs) ever seen.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[Hashable, threading.Lock] = {}
        self._holders: dict[Hashable, int] = {}

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())
            self._holders[key] = self._holders.get(key, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                self._holders[key] -= 1
                if not self._holders[key]:
                    del self._holders[key]
                    del self._locks[key]
