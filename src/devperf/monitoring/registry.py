"""
Registry of live monitoring sessions.

The registry owns every session from creation until it is stopped. Stopped
sessions are removed immediately; nothing is archived.
"""

import logging
import threading
import uuid
from typing import Dict, List, Optional

from ..models.session import MonitoringSession, SessionTargets

logger = logging.getLogger(__name__)


class SessionRegistry:
    """
    Thread-safe table of sessions keyed by a unique id.

    Ids are random UUID4 strings, checked for collisions against the live
    table under the same lock that inserts them.
    """

    def __init__(self):
        self._sessions: Dict[str, MonitoringSession] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions

    def create(self, targets: SessionTargets, interval_ms: int) -> MonitoringSession:
        """
        Register a new session in the CREATED state.

        Returns:
            The new session; its id is ``session.session_id``.
        """
        with self._lock:
            session_id = str(uuid.uuid4())
            while session_id in self._sessions:
                session_id = str(uuid.uuid4())
            session = MonitoringSession(session_id, targets, interval_ms)
            self._sessions[session_id] = session

        logger.debug(f"Registered session {session_id}")
        return session

    def get(self, session_id: str) -> Optional[MonitoringSession]:
        with self._lock:
            return self._sessions.get(session_id)

    def active_ids(self) -> List[str]:
        with self._lock:
            return list(self._sessions)

    def stop(self, session_id: str) -> bool:
        """
        Stop and remove one session.

        Returns:
            True if a live session was stopped by this call. Unknown or
            already-stopped ids return False and change nothing.
        """
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        stopped = session.stop()
        if stopped:
            logger.debug(f"Stopped session {session_id}")
        return stopped

    def stop_all(self) -> int:
        """
        Stop and remove every session.

        The table is swapped out under the lock, so sessions registered
        concurrently either land in the drained batch or survive untouched.

        Returns:
            Number of sessions stopped.
        """
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()

        stopped = sum(1 for session in sessions if session.stop())
        if stopped:
            logger.info(f"Stopped {stopped} monitoring session(s)")
        return stopped
