"""
Data models and structures for the classification engine.

Configuration Models:
- Capability policy, session scheduling and dispatch settings
- Host capability profile

Performance Models:
- Performance classes, levels and weighted classes
- Capability profiles and per-class support decisions
- Immutable evaluation results

Measurement Models:
- Raw per-class measurement structures returned by metric sources
- Device-wide facts used by fallback scoring

Session Models:
- Monitoring session entity, targets and lifecycle state
"""

# Configuration models
from .config import (
    AppConfig,
    CapabilityConfig,
    DispatchConfig,
    HostConfig,
    MonitorConfig,
    SessionConfig,
)

# Performance models
from .performance import (
    CapabilityProfile,
    ClassSupportDecision,
    PerformanceClass,
    PerformanceLevel,
    PerformanceResult,
    WeightedClass,
    parse_classes,
    parse_weighted_classes,
)

# Measurement models
from .metrics import (
    BatteryMetrics,
    CpuMetrics,
    DeviceFacts,
    MemoryMetrics,
    NetworkMetrics,
    StorageMetrics,
)

# Session models
from .session import MonitoringSession, SessionState, SessionTargets

__all__ = [
    # Configuration
    "AppConfig",
    "CapabilityConfig",
    "DispatchConfig",
    "HostConfig",
    "MonitorConfig",
    "SessionConfig",
    # Performance
    "CapabilityProfile",
    "ClassSupportDecision",
    "PerformanceClass",
    "PerformanceLevel",
    "PerformanceResult",
    "WeightedClass",
    "parse_classes",
    "parse_weighted_classes",
    # Measurements
    "BatteryMetrics",
    "CpuMetrics",
    "DeviceFacts",
    "MemoryMetrics",
    "NetworkMetrics",
    "StorageMetrics",
    # Sessions
    "MonitoringSession",
    "SessionState",
    "SessionTargets",
]
