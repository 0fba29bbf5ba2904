"""
Fan-out of session events to listeners.

Each session id has one result slot and one error slot; registering again
replaces the previous callback. Delivery happens on a managed thread pool,
so a listener that blocks or raises never stalls the sampling loop.
"""

import logging
import threading
from typing import Dict, Optional

from ..executor import ManagedThreadPoolExecutor, ThreadPoolConfig
from ..models.config import DispatchConfig
from ..models.performance import PerformanceResult
from .listeners import ErrorCallback, PerformanceListener, ResultCallback

logger = logging.getLogger(__name__)


class _Slots:
    __slots__ = ("on_result", "on_error")

    def __init__(self):
        self.on_result: Optional[ResultCallback] = None
        self.on_error: Optional[ErrorCallback] = None


class EventDispatcher:
    """
    Delivers results and errors to the listeners registered per session.

    The dispatch pool is started on first use and stopped by ``shutdown``.
    """

    def __init__(self, config: Optional[DispatchConfig] = None):
        self.config = config or DispatchConfig()
        self._slots: Dict[str, _Slots] = {}
        self._lock = threading.Lock()
        self._pool: Optional[ManagedThreadPoolExecutor] = None
        self._closed = False

    def subscribe(self, session_id: str, on_result: Optional[ResultCallback] = None,
                  on_error: Optional[ErrorCallback] = None) -> None:
        """
        Register callbacks for a session.

        Each callback given replaces the one in its slot; a slot whose
        callback is omitted keeps its current registration.
        """
        with self._lock:
            slots = self._slots.setdefault(session_id, _Slots())
            if on_result is not None:
                slots.on_result = on_result
            if on_error is not None:
                slots.on_error = on_error

    def subscribe_listener(self, session_id: str, listener: PerformanceListener) -> None:
        """Register a listener object for both slots of a session."""
        self.subscribe(session_id, listener.on_result, listener.on_error)

    def unsubscribe(self, session_id: str) -> bool:
        """Drop both slots of a session. Returns True if anything was registered."""
        with self._lock:
            return self._slots.pop(session_id, None) is not None

    def has_listener(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._slots

    def clear(self) -> None:
        with self._lock:
            self._slots.clear()

    def publish_result(self, session_id: str, result: PerformanceResult) -> bool:
        """Hand a result to the session's result listener, if any."""
        with self._lock:
            slots = self._slots.get(session_id)
            callback = slots.on_result if slots else None
        if callback is None:
            return False
        return self._dispatch(session_id, "result", callback, result)

    def publish_error(self, session_id: str, message: str) -> bool:
        """Hand an error message to the session's error listener, if any."""
        with self._lock:
            slots = self._slots.get(session_id)
            callback = slots.on_error if slots else None
        if callback is None:
            return False
        return self._dispatch(session_id, "error", callback, message)

    def shutdown(self, wait: bool = True) -> None:
        """Stop the dispatch pool; later events are dropped."""
        with self._lock:
            self._closed = True
            pool, self._pool = self._pool, None
        if pool is not None:
            pool.shutdown(wait=wait)

    def _ensure_pool(self) -> Optional[ManagedThreadPoolExecutor]:
        with self._lock:
            if self._closed:
                return None
            if self._pool is None:
                self._pool = ManagedThreadPoolExecutor(
                    ThreadPoolConfig(
                        max_workers=self.config.max_workers,
                        thread_name_prefix=self.config.thread_name_prefix,
                        shutdown_timeout=self.config.shutdown_timeout,
                    )
                )
                self._pool.start()
            return self._pool

    def _dispatch(self, session_id: str, kind: str, callback, payload) -> bool:
        pool = self._ensure_pool()
        if pool is None:
            logger.debug(f"Dispatcher shut down, dropping {kind} for session {session_id}")
            return False
        try:
            pool.submit(self._deliver, session_id, kind, callback, payload)
        except RuntimeError as e:
            logger.warning(f"Could not dispatch {kind} for session {session_id}: {e}")
            return False
        return True

    def _is_current(self, session_id: str, kind: str, callback) -> bool:
        with self._lock:
            slots = self._slots.get(session_id)
            return slots is not None and getattr(slots, f"on_{kind}") == callback

    def _deliver(self, session_id: str, kind: str, callback, payload) -> None:
        # Unsubscribed or replaced while queued
        if not self._is_current(session_id, kind, callback):
            logger.debug(f"Dropping queued {kind} for session {session_id}: listener removed")
            return
        try:
            callback(payload)
        except Exception as e:
            logger.warning(f"{kind.capitalize()} listener for session {session_id} failed: {e}")
