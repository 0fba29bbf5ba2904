"""
devperf: Device performance classification and continuous monitoring.

This package classifies a device's runtime capability into an ordinal scale
(EXCELLENT / HIGH / AVERAGE / LOW) across performance classes (CPU, MEMORY,
NETWORK, STORAGE, BATTERY), either once or as a background session that
pushes fresh results to subscribers.

The package is organized into specialized modules:
- config: Configuration management and validation
- models: Data structures and type definitions
- validation: Input validation and error handling
- capability: Version and permission based class filtering
- scoring: Sub-scores, weighted combination and fallback heuristic
- sources: Metric, capability and device-fact collaborators
- classification: One-shot classification pipeline
- monitoring: Session registry, scheduler and event dispatch
- executor: Thread pool for listener delivery
- orchestration: The PerformanceMonitor facade
- cli: Command-line interface

Usage:
    From command line:
        devperf classify CPU MEMORY
        devperf watch MEMORY --interval-ms 1000 --count 5

    Programmatically:
        from devperf import PerformanceMonitor
        with PerformanceMonitor() as monitor:
            result = monitor.classify(["CPU", "MEMORY"])
"""

__version__ = "1.0.0"

# Main interfaces
from .config import get_config, clear_config_cache, set_config_path
from .orchestration import InitializationReport, PerformanceMonitor
from .cli import main_cli

# Model classes for external use
from .models import (
    AppConfig,
    CapabilityProfile,
    PerformanceClass,
    PerformanceLevel,
    PerformanceResult,
    WeightedClass,
)

# Core components
from .capability import CapabilityResolver
from .scoring import ScoringEngine
from .classification import PerformanceClassifier
from .monitoring import (
    ChannelTransport,
    EventDispatcher,
    MonitoringScheduler,
    PerformanceListener,
    SessionRegistry,
)
from .sources import CapabilityProvider, DeviceFactsProvider, MetricSource

# Errors
from .validation import (
    InvalidWeightError,
    MetricSourceError,
    NoSupportedClassesError,
    PerformanceError,
    SamplingTickError,
    UnsupportedPlatformVersionError,
    ValidationError,
)

__all__ = [
    # Main interfaces
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "InitializationReport",
    "PerformanceMonitor",
    "main_cli",
    # Models
    "AppConfig",
    "CapabilityProfile",
    "PerformanceClass",
    "PerformanceLevel",
    "PerformanceResult",
    "WeightedClass",
    # Core components
    "CapabilityResolver",
    "ScoringEngine",
    "PerformanceClassifier",
    "ChannelTransport",
    "EventDispatcher",
    "MonitoringScheduler",
    "PerformanceListener",
    "SessionRegistry",
    "CapabilityProvider",
    "DeviceFactsProvider",
    "MetricSource",
    # Errors
    "InvalidWeightError",
    "MetricSourceError",
    "NoSupportedClassesError",
    "PerformanceError",
    "SamplingTickError",
    "UnsupportedPlatformVersionError",
    "ValidationError",
]
