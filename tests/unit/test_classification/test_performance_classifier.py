"""
Unit tests for the one-shot classification pipeline.
"""

import logging

import pytest

from conftest import FakeCapabilityProvider, FakeDeviceFacts, FakeMetricSource
from devperf.classification import PerformanceClassifier
from devperf.models import (
    CapabilityConfig,
    CapabilityProfile,
    CpuMetrics,
    PerformanceClass,
    PerformanceLevel,
    WeightedClass,
)
from devperf.validation import (
    InvalidWeightError,
    NoSupportedClassesError,
    UnsupportedPlatformVersionError,
)

GB = 1_000_000_000


def make_classifier(measurements=None, fail_with=None, profile=None, facts=None, config=None):
    source = FakeMetricSource(measurements, fail_with=fail_with)
    provider = FakeCapabilityProvider(profile or CapabilityProfile(30, frozenset()))
    facts = facts or FakeDeviceFacts()
    classifier = PerformanceClassifier(source, provider, facts, config=config)
    return classifier, source, provider, facts


@pytest.mark.unit
class TestPrimaryPath:
    """Classification from direct measurements."""

    def test_cpu_measurement_scores_high(self, minimal_profile):
        cpu = CpuMetrics(total_ram=4 * GB, core_count=4, cpu_frequency_mhz=1800)
        classifier, source, _, facts = make_classifier({PerformanceClass.CPU: cpu})

        result = classifier.classify([PerformanceClass.CPU], minimal_profile)

        assert result.level is PerformanceLevel.HIGH
        assert result.score == 80
        assert result.used_fallback is False
        assert result.supported_classes == (PerformanceClass.CPU,)
        assert result.unsupported_classes == ()
        assert result.metrics[PerformanceClass.CPU] is cpu
        assert source.calls == [frozenset({PerformanceClass.CPU})]
        assert facts.calls == 0

    def test_only_supported_classes_are_sampled(self, minimal_profile):
        classifier, source, _, _ = make_classifier(
            {PerformanceClass.CPU: 70, PerformanceClass.NETWORK: 100}
        )

        result = classifier.classify(["NETWORK", "CPU"], minimal_profile)

        assert source.calls == [frozenset({PerformanceClass.CPU})]
        assert result.supported_classes == (PerformanceClass.CPU,)
        assert result.unsupported_classes == (PerformanceClass.NETWORK,)
        assert PerformanceClass.NETWORK not in result.metrics
        assert result.level is PerformanceLevel.HIGH

    def test_weighted_classification(self, full_profile):
        classifier, _, _, _ = make_classifier(
            {PerformanceClass.MEMORY: 90, PerformanceClass.CPU: 60}
        )

        result = classifier.classify_weighted(
            [WeightedClass(PerformanceClass.MEMORY, 2.0), WeightedClass(PerformanceClass.CPU, 1.0)],
            full_profile,
        )

        assert result.score == pytest.approx(80.0)
        assert result.level is PerformanceLevel.HIGH

    def test_provider_queried_on_every_call(self):
        classifier, _, provider, _ = make_classifier({PerformanceClass.CPU: 50})
        classifier.classify(["CPU"])
        classifier.classify(["CPU"])
        assert provider.calls == 2


@pytest.mark.unit
class TestFailures:
    """Fatal errors of a one-shot call."""

    def test_version_below_minimum(self):
        classifier, source, _, _ = make_classifier({PerformanceClass.CPU: 50})

        with pytest.raises(UnsupportedPlatformVersionError) as exc_info:
            classifier.classify(["CPU"], CapabilityProfile(20, frozenset()))

        assert exc_info.value.code == "UNSUPPORTED_VERSION"
        assert source.calls == []

    def test_custom_minimum_version(self):
        classifier, _, _, _ = make_classifier(
            {PerformanceClass.CPU: 50}, config=CapabilityConfig(min_platform_version=26)
        )
        with pytest.raises(UnsupportedPlatformVersionError):
            classifier.classify(["CPU"], CapabilityProfile(25))

    def test_no_supported_classes(self, minimal_profile):
        classifier, source, _, facts = make_classifier({PerformanceClass.NETWORK: 100})

        with pytest.raises(NoSupportedClassesError) as exc_info:
            classifier.classify([PerformanceClass.NETWORK], minimal_profile)

        assert exc_info.value.code == "NO_SUPPORTED_CLASSES"
        assert source.calls == []
        assert facts.calls == 0

    def test_invalid_weight_rejected_before_sampling(self, full_profile):
        classifier, source, provider, _ = make_classifier({PerformanceClass.CPU: 50})

        with pytest.raises(InvalidWeightError):
            classifier.classify_weighted([("CPU", 1.0), ("MEMORY", -2)], full_profile)

        assert source.calls == []


@pytest.mark.unit
class TestFallbackPath:
    """Recovery when direct measurement is unavailable."""

    def test_source_failure_uses_fallback(self, caplog):
        profile = CapabilityProfile(29, frozenset())
        classifier, _, _, facts = make_classifier(
            fail_with=RuntimeError("sensor offline"),
            facts=FakeDeviceFacts(available_ram=3 * GB, core_count=4),
        )

        with caplog.at_level(logging.WARNING):
            result = classifier.classify(["CPU", "MEMORY"], profile)

        assert result.used_fallback is True
        assert result.score == 80
        assert result.level is PerformanceLevel.HIGH
        assert dict(result.metrics) == {}
        assert result.supported_classes == (PerformanceClass.CPU, PerformanceClass.MEMORY)
        assert facts.calls == 1
        assert "sensor offline" in caplog.text

    def test_weighted_fallback_ignores_weights(self):
        profile = CapabilityProfile(29, frozenset())
        classifier, _, _, _ = make_classifier(
            fail_with=OSError("boom"),
            facts=FakeDeviceFacts(available_ram=3 * GB, core_count=4),
        )

        heavy = classifier.classify_weighted([("CPU", 10.0), ("MEMORY", 0.1)], profile)
        light = classifier.classify(["CPU", "MEMORY"], profile)

        assert heavy.score == light.score == 80
        assert heavy.level is light.level

    def test_unscorable_measurements_use_fallback(self, minimal_profile):
        classifier, _, _, facts = make_classifier(
            {PerformanceClass.CPU: "n/a"},
            facts=FakeDeviceFacts(available_ram=512, core_count=1),
        )

        result = classifier.classify(["CPU"], minimal_profile)

        # 10 (memory) + 5 (cores) + 10 (version 21)
        assert result.score == 25
        assert result.level is PerformanceLevel.LOW
        assert result.used_fallback is True
        assert result.metrics[PerformanceClass.CPU] == "n/a"
        assert facts.calls == 1
