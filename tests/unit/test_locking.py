"""Unit tests for KeyedLock."""

import threading
import time

import pytest

from mentorbook.core.locking import KeyedLock


@pytest.mark.core
class TestKeyedLock:
    def test_lock_is_dropped_after_use(self):
        locks = KeyedLock()

        with locks.hold("b-1"):
            assert len(locks) == 1

        assert len(locks) == 0

    def test_lock_is_released_on_error(self):
        locks = KeyedLock()

        with pytest.raises(RuntimeError):
            with locks.hold("b-1"):
                raise RuntimeError("boom")

        with locks.hold("b-1"):
            pass
        assert len(locks) == 0

    def test_same_key_is_serialized(self):
        locks = KeyedLock()
        active = []
        overlaps = []

        def worker():
            with locks.hold("b-1"):
                active.append(1)
                if len(active) > 1:
                    overlaps.append(1)
                time.sleep(0.01)
                active.pop()

        threads = [threading.Thread(target=worker) for _ in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert overlaps == []
        assert len(locks) == 0

    def test_different_keys_do_not_block(self):
        locks = KeyedLock()
        entered = threading.Event()

        def worker():
            with locks.hold("b-2"):
                entered.set()

        with locks.hold("b-1"):
            thread = threading.Thread(target=worker)
            thread.start()
            assert entered.wait(timeout=2)
            thread.join()
