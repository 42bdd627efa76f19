"""Read-write locks selected by hashing a string key."""

from __future__ import annotations

import threading

_FNV32_OFFSET = 0x811C9DC5
_FNV32_PRIME = 0x01000193


def _fnv1a32(data: bytes) -> int:
    h = _FNV32_OFFSET
    for byte in data:
        h ^= byte
        h = (h * _FNV32_PRIME) & 0xFFFFFFFF
    return h


class _RWLock:
    """A read-write lock where a waiting writer blocks new readers."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def try_acquire_read(self) -> bool:
        with self._cond:
            if self._writer or self._writers_waiting:
                return False
            self._readers += 1
            return True

    def release_read(self) -> None:
        with self._cond:
            if self._readers == 0:
                raise RuntimeError("ekit: read unlock of a lock not read-locked")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def try_acquire_write(self) -> bool:
        with self._cond:
            if self._writer or self._readers:
                return False
            self._writer = True
            return True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("ekit: unlock of a lock not locked")
            self._writer = False
            self._cond.notify_all()


class SegmentKeysLock:
    """A fixed set of read-write locks; each key uses the one its FNV-1a hash picks."""

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError("ekit: SegmentKeysLock size must be positive")
        self.size = size
        self._locks = [_RWLock() for _ in range(size)]

    def _lock_for(self, key: str) -> _RWLock:
        return self._locks[_fnv1a32(key.encode("utf-8")) % self.size]

    def rlock(self, key: str) -> None:
        """Take the read lock for ``key``."""
        self._lock_for(key).acquire_read()

    def try_rlock(self, key: str) -> bool:
        """Take the read lock for ``key`` if it is free now."""
        return self._lock_for(key).try_acquire_read()

    def runlock(self, key: str) -> None:
        """Release a read lock for ``key``."""
        self._lock_for(key).release_read()

    def lock(self, key: str) -> None:
        """Take the write lock for ``key``."""
        self._lock_for(key).acquire_write()

    def try_lock(self, key: str) -> bool:
        """Take the write lock for ``key`` if it is free now."""
        return self._lock_for(key).try_acquire_write()

    def unlock(self, key: str) -> None:
        """Release the write lock for ``key``."""
        self._lock_for(key).release_write()