"""
Capability-aware filtering of performance classes.

The resolver decides, for a given capability profile, which requested
performance classes can be evaluated and why the others cannot. It is a pure
policy component: it never queries the host and never caches profiles.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from ..models.config import CapabilityConfig
from ..models.performance import (
    CapabilityProfile,
    ClassSupportDecision,
    PerformanceClass,
    parse_classes,
)

logger = logging.getLogger(__name__)

# Classes that need no version or permission check.
ALWAYS_SUPPORTED = frozenset(
    {PerformanceClass.CPU, PerformanceClass.MEMORY, PerformanceClass.STORAGE}
)


@dataclass(frozen=True)
class CapabilityResolution:
    """Outcome of filtering one request against one profile."""

    supported: Tuple[PerformanceClass, ...]
    unsupported: Tuple[PerformanceClass, ...]
    decisions: Dict[PerformanceClass, ClassSupportDecision]

    @property
    def has_supported(self) -> bool:
        return bool(self.supported)


@dataclass(frozen=True)
class CapabilityReport:
    """Summary of what the current profile allows, returned by initialize()."""

    platform_version: int
    full_functionality: bool
    missing_permissions: Tuple[str, ...]
    missing_optional_permissions: Tuple[str, ...]
    network_monitoring_supported: bool
    battery_stats_supported: bool


class CapabilityResolver:
    """
    Decides per class whether it can be evaluated under a capability profile.

    Rules:
    - CPU, MEMORY and STORAGE are always supported.
    - NETWORK needs ``network_min_version`` and the network-state permission.
    - BATTERY needs ``battery_min_version``; no permission is required.
    """

    def __init__(self, config: Optional[CapabilityConfig] = None):
        self.config = config or CapabilityConfig()

    def decide(self, performance_class: PerformanceClass,
               profile: CapabilityProfile) -> ClassSupportDecision:
        """Return the support decision for a single class."""
        if performance_class in ALWAYS_SUPPORTED:
            return ClassSupportDecision.SUPPORTED

        if performance_class is PerformanceClass.NETWORK:
            if profile.platform_version < self.config.network_min_version:
                return ClassSupportDecision.UNSUPPORTED_BY_VERSION
            if not profile.has_permission(self.config.network_permission):
                return ClassSupportDecision.UNSUPPORTED_BY_PERMISSION
            return ClassSupportDecision.SUPPORTED

        if performance_class is PerformanceClass.BATTERY:
            if profile.platform_version < self.config.battery_min_version:
                return ClassSupportDecision.UNSUPPORTED_BY_VERSION
            return ClassSupportDecision.SUPPORTED

        return ClassSupportDecision.SUPPORTED

    def resolve(self, requested: Iterable[PerformanceClass],
                profile: CapabilityProfile) -> CapabilityResolution:
        """
        Split requested classes into supported and unsupported ones.

        Both sequences keep the order in which classes were requested;
        duplicates collapse onto their first occurrence.

        Args:
            requested: Performance classes in request order.
            profile: Capability profile for this evaluation.

        Returns:
            CapabilityResolution with the partition and per-class decisions.
        """
        supported: List[PerformanceClass] = []
        unsupported: List[PerformanceClass] = []
        decisions: Dict[PerformanceClass, ClassSupportDecision] = {}

        for performance_class in parse_classes(requested):
            decision = self.decide(performance_class, profile)
            decisions[performance_class] = decision
            if decision is ClassSupportDecision.SUPPORTED:
                supported.append(performance_class)
            else:
                unsupported.append(performance_class)
                logger.debug(
                    f"{performance_class.name} unsupported at platform version "
                    f"{profile.platform_version}: {decision.value}"
                )

        return CapabilityResolution(
            supported=tuple(supported),
            unsupported=tuple(unsupported),
            decisions=decisions,
        )

    def capability_report(self, profile: CapabilityProfile) -> CapabilityReport:
        """Describe which permissions are missing and which classes are available."""
        missing = tuple(
            p for p in self.config.required_permissions if not profile.has_permission(p)
        )
        missing_optional = tuple(
            p for p in self.config.optional_permissions if not profile.has_permission(p)
        )
        if missing:
            logger.warning(f"Missing required permissions: {', '.join(missing)}")
        if missing_optional:
            logger.info(f"Missing optional permissions: {', '.join(missing_optional)}")

        return CapabilityReport(
            platform_version=profile.platform_version,
            full_functionality=not missing,
            missing_permissions=missing,
            missing_optional_permissions=missing_optional,
            network_monitoring_supported=(
                profile.platform_version >= self.config.network_min_version
            ),
            battery_stats_supported=(
                profile.platform_version >= self.config.battery_min_version
            ),
        )
