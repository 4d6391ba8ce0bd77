"""Tests for RWLock readers-writer lock implementation.

Tests verify:
- Multiple concurrent readers
- Exclusive writer access
- Writer preference (prevents starvation)
- Reentrant read locks
- Upgrade, downgrade and write reentry rejection
- Timeouts
"""

import threading
import time

import pytest

from bracketlex.runtime import RWLock


class TestRWLockBasics:
    """Test basic RWLock functionality."""

    def test_single_reader(self) -> None:
        """Single reader can acquire lock."""
        lock = RWLock()
        with lock.read():
            assert lock.reader_count == 1
        assert lock.reader_count == 0

    def test_single_writer(self) -> None:
        """Single writer can acquire lock."""
        lock = RWLock()
        with lock.write():
            assert lock.writer_active
        assert not lock.writer_active

    def test_readers_share(self) -> None:
        """Multiple readers hold the lock at the same time."""
        lock = RWLock()
        barrier = threading.Barrier(4, timeout=5)
        counts: list[int] = []

        def reader() -> None:
            with lock.read():
                barrier.wait()
                counts.append(lock.reader_count)
                barrier.wait()

        threads = [threading.Thread(target=reader) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert counts == [4, 4, 4, 4]

    def test_write_blocks_readers(self) -> None:
        """A held write lock keeps readers out."""
        lock = RWLock()
        writer_active = threading.Event()
        release = threading.Event()
        order: list[str] = []

        def writer() -> None:
            with lock.write():
                writer_active.set()
                release.wait(5)
                order.append("writer")

        def reader() -> None:
            with lock.read():
                order.append("reader")

        w = threading.Thread(target=writer)
        w.start()
        writer_active.wait(5)
        r = threading.Thread(target=reader)
        r.start()
        time.sleep(0.05)
        assert order == []
        release.set()
        w.join()
        r.join()
        assert order == ["writer", "reader"]


class TestWriterPreference:
    """Waiting writers go before new readers."""

    def test_waiting_writer_blocks_new_readers(self) -> None:
        """A new reader waits behind a queued writer."""
        lock = RWLock()
        first_reader_in = threading.Event()
        release_first = threading.Event()
        order: list[str] = []

        def first_reader() -> None:
            with lock.read():
                first_reader_in.set()
                release_first.wait(5)

        def writer() -> None:
            with lock.write():
                order.append("writer")

        def late_reader() -> None:
            with lock.read():
                order.append("reader")

        threads = [threading.Thread(target=first_reader)]
        threads[0].start()
        first_reader_in.wait(5)
        threads.append(threading.Thread(target=writer))
        threads[1].start()
        time.sleep(0.05)
        threads.append(threading.Thread(target=late_reader))
        threads[2].start()
        time.sleep(0.05)
        release_first.set()
        for thread in threads:
            thread.join()
        assert order == ["writer", "reader"]


class TestReentrancy:
    """Reentry rules."""

    def test_read_reentrant(self) -> None:
        """The same thread may nest read locks."""
        lock = RWLock()
        with lock.read(), lock.read():
            assert lock.reader_count == 1
        assert lock.reader_count == 0

    def test_upgrade_rejected(self) -> None:
        """Read to write raises."""
        lock = RWLock()
        with lock.read(), pytest.raises(RuntimeError, match="upgrade"):
            with lock.write():
                pass

    def test_downgrade_rejected(self) -> None:
        """Write to read raises."""
        lock = RWLock()
        with lock.write(), pytest.raises(RuntimeError, match="holding write lock"):
            with lock.read():
                pass

    def test_write_reentry_rejected(self) -> None:
        """Nested write raises."""
        lock = RWLock()
        with lock.write(), pytest.raises(RuntimeError, match="already holding"):
            with lock.write():
                pass

    def test_lock_usable_after_rejection(self) -> None:
        """A rejected reentry leaves the lock consistent."""
        lock = RWLock()
        with lock.read(), pytest.raises(RuntimeError):
            with lock.write():
                pass
        with lock.write():
            assert lock.writer_active


class TestTimeouts:
    """Bounded acquisition."""

    def test_write_timeout(self) -> None:
        """A writer gives up while another thread reads."""
        lock = RWLock()
        holding = threading.Event()
        release = threading.Event()

        def reader() -> None:
            with lock.read():
                holding.set()
                release.wait(5)

        thread = threading.Thread(target=reader)
        thread.start()
        holding.wait(5)
        try:
            with pytest.raises(TimeoutError, match="write lock"):
                with lock.write(timeout=0.05):
                    pass
        finally:
            release.set()
            thread.join()

    def test_readers_resume_after_writer_timeout(self) -> None:
        """A timed-out writer no longer blocks readers."""
        lock = RWLock()
        holding = threading.Event()
        release = threading.Event()

        def reader() -> None:
            with lock.read():
                holding.set()
                release.wait(5)

        thread = threading.Thread(target=reader)
        thread.start()
        holding.wait(5)
        with pytest.raises(TimeoutError):
            with lock.write(timeout=0.01):
                pass
        try:
            with lock.read(timeout=1.0):
                assert lock.reader_count == 2
        finally:
            release.set()
            thread.join()

    def test_negative_timeout(self) -> None:
        """Negative timeouts are rejected."""
        with pytest.raises(ValueError, match="non-negative"):
            with RWLock().read(timeout=-1):
                pass

    def test_zero_timeout_uncontended(self) -> None:
        """timeout=0 succeeds when the lock is free."""
        lock = RWLock()
        with lock.write(timeout=0):
            assert lock.writer_active
