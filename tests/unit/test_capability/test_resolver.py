"""
Unit tests for capability-aware class filtering.
"""

import pytest

from devperf.capability import CapabilityResolver
from devperf.models import (
    CapabilityConfig,
    CapabilityProfile,
    ClassSupportDecision,
    PerformanceClass,
)
from devperf.models.config import (
    BATTERY_STATS_PERMISSION,
    NETWORK_STATE_PERMISSION,
    WIFI_STATE_PERMISSION,
)

ALL_CLASSES = list(PerformanceClass)


@pytest.mark.unit
class TestDecide:
    """Test cases for per-class decisions."""

    @pytest.mark.parametrize(
        "performance_class",
        [PerformanceClass.CPU, PerformanceClass.MEMORY, PerformanceClass.STORAGE],
    )
    def test_always_supported(self, performance_class, minimal_profile):
        resolver = CapabilityResolver()
        assert resolver.decide(performance_class, minimal_profile) is ClassSupportDecision.SUPPORTED

    def test_network_requires_version_first(self):
        resolver = CapabilityResolver()
        profile = CapabilityProfile(22, frozenset())
        assert (
            resolver.decide(PerformanceClass.NETWORK, profile)
            is ClassSupportDecision.UNSUPPORTED_BY_VERSION
        )

    def test_network_requires_permission(self):
        resolver = CapabilityResolver()
        profile = CapabilityProfile(23, frozenset())
        assert (
            resolver.decide(PerformanceClass.NETWORK, profile)
            is ClassSupportDecision.UNSUPPORTED_BY_PERMISSION
        )

    def test_network_supported(self):
        resolver = CapabilityResolver()
        profile = CapabilityProfile(23, frozenset({NETWORK_STATE_PERMISSION}))
        assert resolver.decide(PerformanceClass.NETWORK, profile) is ClassSupportDecision.SUPPORTED

    def test_battery_needs_only_version(self):
        resolver = CapabilityResolver(CapabilityConfig(battery_min_version=24))
        assert (
            resolver.decide(PerformanceClass.BATTERY, CapabilityProfile(23))
            is ClassSupportDecision.UNSUPPORTED_BY_VERSION
        )
        assert (
            resolver.decide(PerformanceClass.BATTERY, CapabilityProfile(24))
            is ClassSupportDecision.SUPPORTED
        )


@pytest.mark.unit
class TestResolve:
    """Test cases for request partitioning."""

    def test_partition_preserves_request_order(self, minimal_profile):
        resolver = CapabilityResolver()
        resolution = resolver.resolve(
            [PerformanceClass.NETWORK, PerformanceClass.STORAGE,
             PerformanceClass.BATTERY, PerformanceClass.CPU],
            minimal_profile,
        )
        assert resolution.supported == (
            PerformanceClass.STORAGE,
            PerformanceClass.BATTERY,
            PerformanceClass.CPU,
        )
        assert resolution.unsupported == (PerformanceClass.NETWORK,)
        assert resolution.decisions[PerformanceClass.NETWORK] is (
            ClassSupportDecision.UNSUPPORTED_BY_VERSION
        )

    @pytest.mark.parametrize("version", [21, 22, 23, 28, 30])
    def test_partition_covers_request_exactly_once(self, version):
        resolver = CapabilityResolver()
        profile = CapabilityProfile(version, frozenset())
        resolution = resolver.resolve(ALL_CLASSES, profile)

        combined = resolution.supported + resolution.unsupported
        assert sorted(c.name for c in combined) == sorted(c.name for c in ALL_CLASSES)
        assert not set(resolution.supported) & set(resolution.unsupported)

    def test_duplicates_collapse(self, full_profile):
        resolution = CapabilityResolver().resolve(["cpu", "CPU", "memory"], full_profile)
        assert resolution.supported == (PerformanceClass.CPU, PerformanceClass.MEMORY)

    def test_nothing_supported(self, minimal_profile):
        resolution = CapabilityResolver().resolve([PerformanceClass.NETWORK], minimal_profile)
        assert not resolution.has_supported


@pytest.mark.unit
class TestCapabilityReport:
    """Test cases for the initialization report."""

    def test_full_profile(self):
        profile = CapabilityProfile(
            30,
            frozenset({NETWORK_STATE_PERMISSION, WIFI_STATE_PERMISSION, BATTERY_STATS_PERMISSION}),
        )
        report = CapabilityResolver().capability_report(profile)
        assert report.full_functionality is True
        assert report.missing_permissions == ()
        assert report.missing_optional_permissions == ()
        assert report.network_monitoring_supported is True
        assert report.battery_stats_supported is True

    def test_missing_permissions(self):
        profile = CapabilityProfile(22, frozenset({WIFI_STATE_PERMISSION}))
        report = CapabilityResolver().capability_report(profile)
        assert report.full_functionality is False
        assert report.missing_permissions == (NETWORK_STATE_PERMISSION,)
        assert report.missing_optional_permissions == (BATTERY_STATS_PERMISSION,)
        assert report.network_monitoring_supported is False
        assert report.battery_stats_supported is True
        assert report.platform_version == 22
