"""
Unit tests for the dispatch thread pool.
"""

import threading
import time

import pytest

from devperf.executor.thread_pool import (
    ThreadPoolConfig,
    ManagedThreadPoolExecutor,
)


@pytest.fixture
def gate():
    event = threading.Event()
    yield event
    event.set()


@pytest.mark.unit
class TestManagedThreadPoolExecutor:
    """Test cases for ManagedThreadPoolExecutor."""

    def test_defaults(self):
        executor = ManagedThreadPoolExecutor()

        assert executor.config == ThreadPoolConfig()
        assert executor.executor is None
        assert executor.is_shutdown is False

    def test_submit_runs_on_prefixed_threads(self):
        executor = ManagedThreadPoolExecutor(
            ThreadPoolConfig(max_workers=2, thread_name_prefix="TestPrefix")
        )
        executor.start()
        try:
            futures = [executor.submit(lambda x: x * 2, i) for i in range(5)]
            assert [f.result(timeout=5) for f in futures] == [0, 2, 4, 6, 8]
            name = executor.submit(lambda: threading.current_thread().name).result(timeout=5)
            assert name.startswith("TestPrefix")
        finally:
            executor.shutdown()

    def test_start_twice_raises(self):
        executor = ManagedThreadPoolExecutor()
        executor.start()
        try:
            with pytest.raises(RuntimeError, match="already started"):
                executor.start()
        finally:
            executor.shutdown()

    def test_submit_before_start_raises(self):
        with pytest.raises(RuntimeError, match="not started"):
            ManagedThreadPoolExecutor().submit(lambda: None)

    def test_submit_after_shutdown_raises(self):
        executor = ManagedThreadPoolExecutor()
        executor.start()
        executor.shutdown()

        with pytest.raises(RuntimeError, match="shutdown"):
            executor.submit(lambda: None)

    def test_shutdown_is_idempotent(self):
        executor = ManagedThreadPoolExecutor()
        assert executor.shutdown() is True  # never started

        executor.start()
        assert executor.shutdown() is True
        assert executor.shutdown() is True
        assert executor.executor is None

    def test_pending_tracks_unfinished_tasks(self, gate):
        executor = ManagedThreadPoolExecutor(ThreadPoolConfig(max_workers=1))
        executor.start()
        try:
            future = executor.submit(gate.wait, 5)
            assert executor.pending() == 1
            gate.set()
            future.result(timeout=5)
            deadline = time.monotonic() + 5
            while executor.pending() and time.monotonic() < deadline:
                time.sleep(0.01)
            assert executor.pending() == 0
        finally:
            executor.shutdown()

    def test_shutdown_cancels_queued_tasks(self, gate):
        executor = ManagedThreadPoolExecutor(ThreadPoolConfig(max_workers=1))
        executor.start()

        started = threading.Event()

        def hold():
            started.set()
            return gate.wait(5)

        running = executor.submit(hold)
        queued = executor.submit(lambda: "never")
        assert started.wait(5)

        assert executor.shutdown(wait=False) is True
        gate.set()

        assert running.result(timeout=5) is True
        assert queued.cancelled()

    def test_shutdown_stops_waiting_after_timeout(self, gate):
        executor = ManagedThreadPoolExecutor(
            ThreadPoolConfig(max_workers=1, shutdown_timeout=0.2)
        )
        executor.start()
        executor.submit(gate.wait, 10)

        started = time.monotonic()
        completed = executor.shutdown(wait=True)
        elapsed = time.monotonic() - started

        assert completed is False
        assert elapsed < 2.0

    def test_shutdown_waits_for_running_tasks(self):
        executor = ManagedThreadPoolExecutor(ThreadPoolConfig(shutdown_timeout=5.0))
        executor.start()
        future = executor.submit(time.sleep, 0.1)

        assert executor.shutdown(wait=True) is True
        assert future.done()
