"""A condition variable whose wait can time out."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Protocol


class _Locker(Protocol):
    def acquire(self) -> Any: ...

    def release(self) -> None: ...


class Cond:
    """A condition variable tied to ``lock``, waking waiters in FIFO order.

    Unlike :class:`threading.Condition`, a timed-out waiter that was notified
    at the same moment passes the notification on to the next waiter, so no
    signal is lost.
    """

    def __init__(self, lock: _Locker) -> None:
        self.lock = lock
        self._mu = threading.Lock()
        self._waiters: deque[threading.Event] = deque()

    def __enter__(self) -> "Cond":
        self.lock.acquire()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.lock.release()

    def __copy__(self) -> "Cond":
        raise TypeError("ekit.Cond cannot be copied")

    def __deepcopy__(self, memo: Any) -> "Cond":
        raise TypeError("ekit.Cond cannot be copied")

    def wait(self, timeout: float | None = None) -> None:
        """Release the lock, block until notified, then take the lock again.

        The caller must hold the lock. Raises TimeoutError when ``timeout``
        seconds pass without a notification; the lock is held again either way.
        """
        waiter = threading.Event()
        with self._mu:
            self._waiters.append(waiter)
        try:
            self.lock.release()
        except BaseException:
            with self._mu:
                if waiter in self._waiters:
                    self._waiters.remove(waiter)
            raise
        try:
            if waiter.wait(timeout):
                return
            with self._mu:
                if waiter.is_set():
                    # Notified just as the wait expired: hand the signal on.
                    if self._waiters:
                        self._notify_next()
                else:
                    self._waiters.remove(waiter)
            raise TimeoutError("ekit: Cond.wait timed out")
        finally:
            self.lock.acquire()

    def signal(self) -> None:
        """Wake the longest-waiting waiter, if any."""
        with self._mu:
            if self._waiters:
                self._notify_next()

    def broadcast(self) -> None:
        """Wake every waiter."""
        with self._mu:
            while self._waiters:
                self._notify_next()

    def _notify_next(self) -> None:
        self._waiters.popleft().set()