"""
Collaborators consumed by the classification engine.

Abstract interfaces for metric acquisition, capability profiles and device
facts, plus reference implementations for a plain host.
"""

from .base import (
    CapabilityProvider,
    ConfiguredCapabilityProvider,
    DeviceFactsProvider,
    MetricSource,
    StaticCapabilityProvider,
)
from .host import HostDeviceFacts, PsutilMetricSource

__all__ = [
    "CapabilityProvider",
    "ConfiguredCapabilityProvider",
    "DeviceFactsProvider",
    "HostDeviceFacts",
    "MetricSource",
    "PsutilMetricSource",
    "StaticCapabilityProvider",
]
