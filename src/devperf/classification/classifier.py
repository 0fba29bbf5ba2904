"""
One-shot performance classification pipeline.

A classification runs the following steps for a set of requested classes:

1. Query the capability profile (fresh on every call).
2. Reject platform versions below the configured minimum.
3. Filter the requested classes through the CapabilityResolver.
4. Sample the supported classes from the MetricSource.
5. Score the measurements, falling back to the device-wide heuristic when the
   source fails or nothing is scorable.

The pipeline is synchronous and holds no state between calls, which lets the
monitoring scheduler reuse one classifier for every tick of every session.
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from ..capability import CapabilityResolver
from ..models.config import CapabilityConfig
from ..models.performance import (
    CapabilityProfile,
    PerformanceClass,
    PerformanceResult,
    parse_classes,
    parse_weighted_classes,
)
from ..models.session import SessionTargets
from ..scoring import ScoringEngine
from ..sources.base import CapabilityProvider, DeviceFactsProvider, MetricSource
from ..validation import (
    MetricSourceError,
    NoSupportedClassesError,
    UnsupportedPlatformVersionError,
)

logger = logging.getLogger(__name__)


class PerformanceClassifier:
    """
    Runs capability filtering, sampling and scoring for one evaluation.

    Args:
        metric_source: Source of raw per-class measurements.
        capability_provider: Source of the capability profile.
        device_facts: Source of device-wide facts for fallback scoring.
        resolver: Capability resolver, built from ``config`` when omitted.
        engine: Scoring engine, a fresh one when omitted.
        config: Capability policy, defaults when omitted.
    """

    def __init__(self, metric_source: MetricSource,
                 capability_provider: CapabilityProvider,
                 device_facts: DeviceFactsProvider,
                 resolver: Optional[CapabilityResolver] = None,
                 engine: Optional[ScoringEngine] = None,
                 config: Optional[CapabilityConfig] = None):
        self.metric_source = metric_source
        self.capability_provider = capability_provider
        self.device_facts = device_facts
        self.config = config or (resolver.config if resolver else CapabilityConfig())
        self.resolver = resolver or CapabilityResolver(self.config)
        self.engine = engine or ScoringEngine()

    def classify(self, classes: Iterable[Any],
                 profile: Optional[CapabilityProfile] = None) -> PerformanceResult:
        """Classify unweighted classes; every class counts with weight 1.0."""
        return self.evaluate(SessionTargets.of_classes(parse_classes(classes)), profile)

    def classify_weighted(self, weighted_classes: Iterable[Any],
                          profile: Optional[CapabilityProfile] = None) -> PerformanceResult:
        """
        Classify weighted classes.

        Weights are validated before anything is sampled.

        Raises:
            InvalidWeightError: If a weight is not a positive finite number.
        """
        targets = SessionTargets.of_weighted(parse_weighted_classes(weighted_classes))
        return self.evaluate(targets, profile)

    def evaluate(self, targets: SessionTargets,
                 profile: Optional[CapabilityProfile] = None) -> PerformanceResult:
        """
        Run the full pipeline for already-parsed targets.

        Args:
            targets: Requested classes and, for weighted targets, their weights.
            profile: Capability profile to use instead of querying the provider.

        Returns:
            A new PerformanceResult.

        Raises:
            UnsupportedPlatformVersionError: Platform version below the minimum.
            NoSupportedClassesError: No requested class is supported.
        """
        if profile is None:
            profile = self.capability_provider.current_profile()

        if profile.platform_version < self.config.min_platform_version:
            raise UnsupportedPlatformVersionError(
                profile.platform_version, self.config.min_platform_version
            )

        resolution = self.resolver.resolve(targets.classes, profile)
        if not resolution.has_supported:
            raise NoSupportedClassesError(targets.classes)

        metrics = self._sample(resolution.supported)
        outcome = None
        if metrics is not None:
            outcome = self.engine.score(metrics, targets.weights)

        if outcome is None:
            if metrics is not None:
                logger.warning(
                    "No measurement could be scored, using fallback scoring"
                )
            outcome = self.engine.fallback(
                self.device_facts.current_facts(), profile.platform_version
            )

        return PerformanceResult(
            level=outcome.level,
            metrics=metrics or {},
            supported_classes=resolution.supported,
            unsupported_classes=resolution.unsupported,
            score=outcome.score,
            used_fallback=outcome.used_fallback,
        )

    def _sample(self, supported) -> Optional[Dict[PerformanceClass, Any]]:
        """Sample the supported classes; None when the primary path is unavailable."""
        try:
            raw: Mapping[PerformanceClass, Any] = self.metric_source.sample(
                frozenset(supported)
            )
            return {
                performance_class: raw[performance_class]
                for performance_class in supported
                if raw.get(performance_class) is not None
            }
        except Exception as e:
            error = MetricSourceError(e)
            logger.warning(f"{error.message}, using fallback scoring")
            return None
