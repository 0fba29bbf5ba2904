"""
Abstract collaborators of the classification engine.

This module provides:
- MetricSource: acquisition of raw per-class measurements.
- CapabilityProvider: supplies the capability profile of the current device.
- DeviceFactsProvider: supplies device-wide facts for fallback scoring.
- Two ready-made capability providers, one static and one backed by the
  `[host]` configuration section.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, FrozenSet, Mapping

from ..models.config import HostConfig
from ..models.metrics import DeviceFacts
from ..models.performance import CapabilityProfile, PerformanceClass

logger = logging.getLogger(__name__)


class MetricSource(ABC):
    """
    Abstract base class for metric sources.

    A metric source acquires raw measurements from the hardware or operating
    system. The engine treats any exception raised by ``sample`` as "primary
    path unavailable for this evaluation" and switches to fallback scoring.
    """

    @abstractmethod
    def sample(self, classes: FrozenSet[PerformanceClass]) -> Mapping[PerformanceClass, Any]:
        """
        Take one measurement for each requested class.

        Args:
            classes: The supported classes of the current evaluation.

        Returns:
            A mapping of class to raw measurement. Classes the source cannot
            measure may be omitted or mapped to None.
        """
        pass


class CapabilityProvider(ABC):
    """Supplies the capability profile, queried once per evaluation."""

    @abstractmethod
    def current_profile(self) -> CapabilityProfile:
        pass


class DeviceFactsProvider(ABC):
    """Supplies device-wide facts, queried only when fallback scoring runs."""

    @abstractmethod
    def current_facts(self) -> DeviceFacts:
        pass


class StaticCapabilityProvider(CapabilityProvider):
    """Always returns the same profile."""

    def __init__(self, profile: CapabilityProfile):
        self.profile = profile

    def current_profile(self) -> CapabilityProfile:
        return self.profile


class ConfiguredCapabilityProvider(CapabilityProvider):
    """
    Capability profile declared in the `[host]` configuration section.

    A fresh profile is built on every call, so changes to the host config
    object are picked up on the next evaluation.
    """

    def __init__(self, host_config: HostConfig):
        self.host_config = host_config

    def current_profile(self) -> CapabilityProfile:
        return CapabilityProfile(
            platform_version=self.host_config.platform_version,
            granted_permissions=frozenset(self.host_config.granted_permissions),
        )
