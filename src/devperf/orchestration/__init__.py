"""
Top-level orchestration for the devperf package.
"""

from .performance_monitor import (
    DISABLED_SESSION_PREFIX,
    InitializationReport,
    PerformanceMonitor,
    default_result,
)

__all__ = [
    "DISABLED_SESSION_PREFIX",
    "InitializationReport",
    "PerformanceMonitor",
    "default_result",
]
