"""
Capability filtering for the devperf package.

Decides which performance classes can be evaluated under a capability
profile of platform version and granted permissions.
"""

from .resolver import (
    ALWAYS_SUPPORTED,
    CapabilityReport,
    CapabilityResolution,
    CapabilityResolver,
)

__all__ = [
    "ALWAYS_SUPPORTED",
    "CapabilityReport",
    "CapabilityResolution",
    "CapabilityResolver",
]
