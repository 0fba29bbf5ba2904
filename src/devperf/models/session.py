"""
Monitoring session models.

A MonitoringSession is the entity behind one continuous-sampling run. It is
created by the SessionRegistry, driven by the MonitoringScheduler and removed
from the registry once stopped.
"""

import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from .performance import PerformanceClass, WeightedClass


class SessionState(Enum):
    """Lifecycle of a session: CREATED -> RUNNING -> STOPPED (terminal)."""

    CREATED = "created"
    RUNNING = "running"
    STOPPED = "stopped"


@dataclass(frozen=True)
class SessionTargets:
    """
    What a session samples.

    Either plain classes or weighted classes; the variant is fixed when the
    targets are built and a session never mixes the two.
    """

    classes: Tuple[PerformanceClass, ...]
    weighted_classes: Optional[Tuple[WeightedClass, ...]] = None

    @classmethod
    def of_classes(cls, classes) -> "SessionTargets":
        return cls(classes=tuple(classes))

    @classmethod
    def of_weighted(cls, weighted_classes) -> "SessionTargets":
        weighted = tuple(weighted_classes)
        return cls(
            classes=tuple(w.performance_class for w in weighted),
            weighted_classes=weighted,
        )

    @property
    def is_weighted(self) -> bool:
        return self.weighted_classes is not None

    @property
    def weights(self) -> Optional[Dict[PerformanceClass, float]]:
        if self.weighted_classes is None:
            return None
        return {w.performance_class: w.weight for w in self.weighted_classes}


class MonitoringSession:
    """
    One live continuous-sampling run.

    State transitions are guarded by a lock so that a stop issued from any
    thread is observed by the session's worker no later than its next wait.
    """

    def __init__(self, session_id: str, targets: SessionTargets, interval_ms: int):
        self.session_id = session_id
        self.targets = targets
        self.interval_ms = interval_ms
        self.created_at = time.time()
        self.tick_count = 0
        self.error_count = 0
        self.worker: Optional[threading.Thread] = None
        self._state = SessionState.CREATED
        self._state_lock = threading.Lock()
        self._stop_event = threading.Event()

    def __repr__(self) -> str:
        variant = "weighted" if self.targets.is_weighted else "unweighted"
        return (
            f"MonitoringSession(id={self.session_id!r}, {variant}, "
            f"interval_ms={self.interval_ms}, state={self.state.value})"
        )

    @property
    def state(self) -> SessionState:
        with self._state_lock:
            return self._state

    @property
    def is_running(self) -> bool:
        return self.state is SessionState.RUNNING

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000.0

    def mark_running(self) -> bool:
        """Move CREATED -> RUNNING. Returns False if the session left CREATED."""
        with self._state_lock:
            if self._state is not SessionState.CREATED:
                return False
            self._state = SessionState.RUNNING
            return True

    def stop(self) -> bool:
        """Move to STOPPED and wake the worker. Returns True on the first call only."""
        with self._state_lock:
            if self._state is SessionState.STOPPED:
                return False
            self._state = SessionState.STOPPED
        self._stop_event.set()
        return True

    def wait_for_stop(self, timeout: float) -> bool:
        """Sleep up to ``timeout`` seconds; True if the session was stopped meanwhile."""
        return self._stop_event.wait(timeout)

    def record_tick(self, failed: bool = False) -> None:
        with self._state_lock:
            self.tick_count += 1
            if failed:
                self.error_count += 1
