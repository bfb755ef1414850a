"""
Per-key mutexes for read-then-write sequences (pin cap, tag diff).

The database transaction is the authority across processes; these locks keep
requests served by the same process from interleaving inside one sequence.
"""
import threading
import weakref
from contextlib import contextmanager
from typing import Hashable, Iterator


class KeyedLock:
    """Registry handing out one ``threading.Lock`` per key."""

    def __init__(self, name: str):
        self.name = name
        self._guard = threading.Lock()
        self._locks: "weakref.WeakValueDictionary[Hashable, threading.Lock]" = weakref.WeakValueDictionary()

    def _lock_for(self, key: Hashable) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        """Hold the lock for ``key`` for the duration of the block."""
        lock = self._lock_for(key)
        with lock:
            yield


pin_locks = KeyedLock("pin")
diary_locks = KeyedLock("diary")
