from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator


class KeyedLock:
    """One lock per key, so evaluations of the same worker never interleave.

    Locks are kept for the life of the instance; there is one per worker id,
    so the map never grows past the number of workers.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[Hashable, threading.Lock] = {}

    def _get_lock(self, key: Hashable) -> threading.Lock:
        with self._guard:
            if key not in self._locks:
                self._locks[key] = threading.Lock()
            return self._locks[key]

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        lock = self._get_lock(key)
        with lock:
            yield
