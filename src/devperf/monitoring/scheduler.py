"""
Timer loop for continuous monitoring sessions.

Every session gets its own daemon worker thread. The worker runs the first
tick immediately, then waits ``interval_ms`` after each tick finishes before
running the next one (fixed delay). Waiting happens on the session's stop
event, so stopping a session wakes its worker right away.

A tick repeats the one-shot pipeline for the session's targets and publishes
the outcome through the EventDispatcher. A failing tick publishes one error
event and the session keeps running.
"""

import logging
import threading
from typing import Dict, Optional

from ..classification import PerformanceClassifier
from ..models.config import SessionConfig
from ..models.session import MonitoringSession, SessionState
from ..validation import SamplingTickError
from .dispatcher import EventDispatcher
from .registry import SessionRegistry

logger = logging.getLogger(__name__)


class MonitoringScheduler:
    """
    Drives the sampling loop of every registered session.

    Args:
        classifier: Pipeline evaluated on every tick.
        dispatcher: Receives the results and errors of each tick.
        registry: Owner of the sessions; stopping goes through it.
        config: Worker naming and shutdown settings.
    """

    def __init__(self, classifier: PerformanceClassifier, dispatcher: EventDispatcher,
                 registry: SessionRegistry, config: Optional[SessionConfig] = None):
        self.classifier = classifier
        self.dispatcher = dispatcher
        self.registry = registry
        self.config = config or SessionConfig()
        self._workers: Dict[str, threading.Thread] = {}
        self._lock = threading.Lock()

    def start(self, session: MonitoringSession) -> bool:
        """
        Move a session to RUNNING and start its worker.

        Returns:
            False if the session was stopped before it could start.

        Raises:
            RuntimeError: If the session is already running.
        """
        if not session.mark_running():
            if session.state is SessionState.STOPPED:
                logger.debug(f"Session {session.session_id} stopped before its worker started")
                return False
            raise RuntimeError(
                f"Session {session.session_id} cannot be started from state "
                f"{session.state.value}"
            )

        worker = threading.Thread(
            target=self._run,
            args=(session,),
            name=f"{self.config.thread_name_prefix}-{session.session_id[:8]}",
            daemon=True,
        )
        session.worker = worker
        with self._lock:
            self._workers[session.session_id] = worker
        worker.start()
        logger.info(
            f"Started monitoring session {session.session_id} "
            f"every {session.interval_ms} ms for "
            f"{', '.join(c.name for c in session.targets.classes)}"
        )
        return True

    def stop(self, session_id: str) -> bool:
        """Stop one session. Returns False for unknown or already-stopped ids."""
        return self.registry.stop(session_id)

    def stop_all(self) -> int:
        return self.registry.stop_all()

    def active_workers(self) -> int:
        with self._lock:
            return sum(1 for worker in self._workers.values() if worker.is_alive())

    def shutdown(self, timeout: Optional[float] = None) -> None:
        """Stop every session and wait for the workers to exit."""
        self.stop_all()
        if timeout is None:
            timeout = self.config.join_timeout

        with self._lock:
            workers = list(self._workers.values())

        current = threading.current_thread()
        for worker in workers:
            if worker is current:
                continue
            worker.join(timeout)
            if worker.is_alive():
                logger.warning(f"Worker {worker.name} did not exit within {timeout}s")

    def _run(self, session: MonitoringSession) -> None:
        try:
            while session.is_running:
                self._tick(session)
                if session.wait_for_stop(session.interval_seconds):
                    break
        finally:
            with self._lock:
                self._workers.pop(session.session_id, None)
            logger.debug(
                f"Session {session.session_id} worker exited after "
                f"{session.tick_count} tick(s), {session.error_count} failed"
            )

    def _tick(self, session: MonitoringSession) -> None:
        session_id = session.session_id
        try:
            result = self.classifier.evaluate(session.targets)
        except Exception as e:
            error = SamplingTickError(session_id, e)
            session.record_tick(failed=True)
            logger.error(f"Tick of session {session_id} failed: {error.message}")
            if session.is_running:
                self.dispatcher.publish_error(session_id, error.message)
            return

        session.record_tick()
        if session.is_running:
            self.dispatcher.publish_result(session_id, result)
        else:
            logger.debug(f"Dropping result of stopped session {session_id}")
