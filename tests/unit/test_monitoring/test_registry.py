"""
Unit tests for the session registry.
"""

import threading

import pytest

from devperf.models import PerformanceClass, SessionState, SessionTargets
from devperf.monitoring import SessionRegistry


def _targets():
    return SessionTargets.of_classes([PerformanceClass.CPU])


@pytest.mark.unit
class TestSessionRegistry:
    """Test cases for SessionRegistry."""

    def test_create_registers_session(self):
        registry = SessionRegistry()
        session = registry.create(_targets(), 100)

        assert session.session_id in registry
        assert registry.get(session.session_id) is session
        assert session.state is SessionState.CREATED
        assert session.interval_ms == 100
        assert len(registry) == 1

    def test_ids_are_unique(self):
        registry = SessionRegistry()
        ids = {registry.create(_targets(), 100).session_id for _ in range(200)}
        assert len(ids) == 200
        assert sorted(registry.active_ids()) == sorted(ids)

    def test_stop_is_idempotent(self):
        registry = SessionRegistry()
        session = registry.create(_targets(), 100)
        session.mark_running()

        assert registry.stop(session.session_id) is True
        assert session.state is SessionState.STOPPED
        assert session.session_id not in registry
        assert registry.stop(session.session_id) is False

    def test_stop_unknown_id(self):
        registry = SessionRegistry()
        other = registry.create(_targets(), 100)

        assert registry.stop("does-not-exist") is False
        assert other.session_id in registry
        assert other.state is SessionState.CREATED

    def test_stop_all_drains_registry(self):
        registry = SessionRegistry()
        sessions = [registry.create(_targets(), 100) for _ in range(5)]

        assert registry.stop_all() == 5
        assert len(registry) == 0
        assert all(s.state is SessionState.STOPPED for s in sessions)
        assert all(registry.stop(s.session_id) is False for s in sessions)
        assert registry.stop_all() == 0

    def test_concurrent_create_and_stop(self):
        registry = SessionRegistry()
        created = []
        lock = threading.Lock()

        def worker():
            for _ in range(50):
                session = registry.create(_targets(), 100)
                with lock:
                    created.append(session.session_id)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(set(created)) == 400
        assert registry.stop_all() == 400
        assert len(registry) == 0
