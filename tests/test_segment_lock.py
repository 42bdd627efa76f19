import threading
import time

import pytest

from ekit.segment_lock import SegmentKeysLock


def test_lock_unlock_and_try_lock():
    locks = SegmentKeysLock(8)
    key1, key2 = "key1", "key2"
    locks.lock(key1)
    assert locks.try_lock(key1) is False
    assert locks.try_rlock(key1) is False
    assert locks.try_lock(key2) is True
    locks.unlock(key2)

    locks.unlock(key1)
    assert locks.try_lock(key1) is True
    locks.unlock(key1)


def test_rlock_runlock():
    locks = SegmentKeysLock(8)
    key1, key2 = "key1", "key2"
    locks.rlock(key1)
    assert locks.try_lock(key1) is False
    assert locks.try_rlock(key1) is True
    assert locks.try_rlock(key2) is True
    locks.runlock(key2)

    locks.runlock(key1)
    assert locks.try_lock(key1) is False
    locks.runlock(key1)
    assert locks.try_lock(key1) is True
    locks.unlock(key1)


def test_unlock_of_unlocked_raises():
    locks = SegmentKeysLock(4)
    with pytest.raises(RuntimeError):
        locks.unlock("a")
    with pytest.raises(RuntimeError):
        locks.runlock("a")


def test_size_must_be_positive():
    with pytest.raises(ValueError):
        SegmentKeysLock(0)


def test_single_segment_shares_lock():
    locks = SegmentKeysLock(1)
    locks.lock("a")
    assert locks.try_lock("b") is False
    locks.unlock("a")
    assert locks.try_lock("b") is True
    locks.unlock("b")


def test_lock_blocks_until_released():
    locks = SegmentKeysLock(8)
    locks.lock("key")
    acquired = threading.Event()

    def contender():
        locks.lock("key")
        acquired.set()
        locks.unlock("key")

    thread = threading.Thread(target=contender, daemon=True)
    thread.start()
    time.sleep(0.05)
    assert not acquired.is_set()
    assert locks.try_lock("key") is False
    locks.unlock("key")
    assert acquired.wait(5)
    thread.join(5)
    assert not thread.is_alive()
    assert locks.try_lock("key") is True
    locks.unlock("key")