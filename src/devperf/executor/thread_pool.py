"""
Thread pool used to hand session events to listeners.

Shutdown is bounded: queued deliveries are cancelled and deliveries already
running get at most ``shutdown_timeout`` seconds to finish.
"""

import logging
import threading
from concurrent import futures
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional, Set

from ..validation import handle_error, ErrorSeverity

logger = logging.getLogger(__name__)


@dataclass
class ThreadPoolConfig:
    """Configuration for the dispatch thread pool."""

    max_workers: int = 4
    thread_name_prefix: str = "PerfDispatch"
    # Seconds shutdown(wait=True) waits for running deliveries.
    shutdown_timeout: float = 5.0


class ManagedThreadPoolExecutor:
    """ThreadPoolExecutor with an explicit start and a bounded shutdown."""

    def __init__(self, config: Optional[ThreadPoolConfig] = None):
        self.config = config or ThreadPoolConfig()
        self.executor: Optional[ThreadPoolExecutor] = None
        self.is_shutdown = False
        self._in_flight: Set[Future] = set()
        self._lock = threading.Lock()

    def start(self) -> None:
        """
        Create the worker pool.

        Raises:
            RuntimeError: If the pool was already started
        """
        if self.executor is not None or self.is_shutdown:
            raise RuntimeError("Thread pool already started")

        self.executor = ThreadPoolExecutor(
            max_workers=self.config.max_workers,
            thread_name_prefix=self.config.thread_name_prefix,
        )
        logger.debug(
            f"Started thread pool '{self.config.thread_name_prefix}' "
            f"with {self.config.max_workers} workers"
        )

    def submit(self, fn: Callable, *args, **kwargs) -> Future:
        """
        Queue ``fn(*args, **kwargs)`` on the pool.

        Raises:
            RuntimeError: If the pool is not started or already shut down
        """
        with self._lock:
            if self.is_shutdown:
                raise RuntimeError("Thread pool is shutdown")
            if self.executor is None:
                raise RuntimeError("Thread pool not started")
            future = self.executor.submit(fn, *args, **kwargs)
            self._in_flight.add(future)
        future.add_done_callback(self._forget)
        return future

    def pending(self) -> int:
        """Number of submitted tasks that have not finished yet."""
        with self._lock:
            return len(self._in_flight)

    def shutdown(self, wait: bool = True) -> bool:
        """
        Stop accepting work and cancel queued tasks.

        With ``wait`` set, running tasks get up to ``shutdown_timeout``
        seconds. A task still running after that keeps its worker thread
        until it returns; this call does not wait for it.

        Returns:
            False if tasks were still running when the timeout expired.
        """
        with self._lock:
            if self.executor is None or self.is_shutdown:
                self.is_shutdown = True
                return True
            self.is_shutdown = True
            executor, self.executor = self.executor, None
            in_flight = list(self._in_flight)

        try:
            executor.shutdown(wait=False, cancel_futures=True)
        except Exception as e:
            handle_error(
                error=e,
                context="shutting down thread pool",
                severity=ErrorSeverity.WARNING,
                reraise=False,
                logger=logger,
            )

        if not wait or not in_flight:
            return True

        _, not_done = futures.wait(in_flight, timeout=self.config.shutdown_timeout)
        if not_done:
            logger.warning(
                f"{len(not_done)} task(s) in '{self.config.thread_name_prefix}' still "
                f"running after {self.config.shutdown_timeout}s, not waiting for them"
            )
            return False
        logger.debug("Thread pool shutdown completed")
        return True

    def _forget(self, future: Future) -> None:
        with self._lock:
            self._in_flight.discard(future)
