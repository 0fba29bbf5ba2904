"""
Pytest configuration and shared fixtures for the devperf test suite.

This module provides common fixtures, fake collaborators and configuration
helpers for all test modules.
"""

import sys
import tempfile
import shutil
import threading
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from devperf.models import (  # noqa: E402
    AppConfig,
    CapabilityProfile,
    DeviceFacts,
    HostConfig,
    MonitorConfig,
    SessionConfig,
)
from devperf.models.config import (  # noqa: E402
    NETWORK_STATE_PERMISSION,
    WIFI_STATE_PERMISSION,
)
from devperf.sources import (  # noqa: E402
    CapabilityProvider,
    DeviceFactsProvider,
    MetricSource,
)

GB = 1_000_000_000


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Fake Collaborators
# ============================================================================


class FakeMetricSource(MetricSource):
    """
    Returns canned measurements.

    ``fail_with`` makes ``sample`` raise; ``calls`` records every requested
    class set.
    """

    def __init__(self, measurements: Optional[Mapping] = None,
                 fail_with: Optional[BaseException] = None):
        self.measurements = dict(measurements or {})
        self.fail_with = fail_with
        self.calls: List[frozenset] = []
        self._lock = threading.Lock()

    def sample(self, classes):
        with self._lock:
            self.calls.append(frozenset(classes))
        if self.fail_with is not None:
            raise self.fail_with
        return {c: self.measurements[c] for c in classes if c in self.measurements}


class FakeCapabilityProvider(CapabilityProvider):
    """Returns ``profile``; counts how often it was queried."""

    def __init__(self, profile: CapabilityProfile):
        self.profile = profile
        self.calls = 0

    def current_profile(self) -> CapabilityProfile:
        self.calls += 1
        return self.profile


class FakeDeviceFacts(DeviceFactsProvider):
    def __init__(self, available_ram: int = 3 * GB, core_count: int = 4):
        self.facts = DeviceFacts(available_ram=available_ram, core_count=core_count)
        self.calls = 0

    def current_facts(self) -> DeviceFacts:
        self.calls += 1
        return self.facts


class EventRecorder:
    """Collects listener callbacks and lets tests wait for them."""

    def __init__(self):
        self.results: List[Any] = []
        self.errors: List[str] = []
        self._condition = threading.Condition()

    def on_result(self, result) -> None:
        with self._condition:
            self.results.append(result)
            self._condition.notify_all()

    def on_error(self, message: str) -> None:
        with self._condition:
            self.errors.append(message)
            self._condition.notify_all()

    def wait_for(self, results: int = 0, errors: int = 0, timeout: float = 5.0) -> bool:
        with self._condition:
            return self._condition.wait_for(
                lambda: len(self.results) >= results and len(self.errors) >= errors,
                timeout=timeout,
            )


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def full_profile():
    """Recent platform with every permission granted."""
    return CapabilityProfile(
        platform_version=30,
        granted_permissions=frozenset({NETWORK_STATE_PERMISSION, WIFI_STATE_PERMISSION}),
    )


@pytest.fixture
def minimal_profile():
    """Oldest supported platform without any permission."""
    return CapabilityProfile(platform_version=21, granted_permissions=frozenset())


@pytest.fixture
def device_facts():
    return FakeDeviceFacts()


@pytest.fixture
def event_recorder():
    return EventRecorder()


@pytest.fixture
def fast_app_config():
    """In-memory configuration with short session intervals."""
    return AppConfig(
        monitor=MonitorConfig(
            sessions=SessionConfig(default_interval_ms=50, min_interval_ms=1, join_timeout=2.0)
        ),
        host=HostConfig(),
    )


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def sample_config_data() -> Dict[str, Any]:
    """Sample configuration data for testing."""
    return {
        "monitor": {
            "general": {
                "disabled_for_production": False,
                "log_level": "debug",
            },
            "capability": {
                "min_platform_version": 21,
                "network_min_version": 24,
                "battery_min_version": 22,
            },
            "sessions": {
                "default_interval_ms": 250,
                "min_interval_ms": 5,
            },
            "dispatch": {
                "max_workers": 2,
                "thread_name_prefix": "TestDispatch",
            },
        },
        "host": {
            "platform_version": 28,
            "granted_permissions": [NETWORK_STATE_PERMISSION],
            "storage_path": "/tmp",
        },
    }


@pytest.fixture
def config_files(temp_dir, sample_config_data):
    """Create a temporary configuration file for testing."""
    import toml

    config_file = temp_dir / "config.toml"
    with open(config_file, "w") as f:
        toml.dump(sample_config_data, f)

    return {
        "config": config_file,
        "dir": temp_dir,
    }


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    original_config_path = Path(__file__).parent.parent / "conf" / "config.toml"

    yield  # Run the test

    from devperf.config import clear_config_cache, set_config_path

    clear_config_cache()

    # Always reset to original config path
    set_config_path(original_config_path)
