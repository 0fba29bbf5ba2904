"""
Raw measurement structures.

A MetricSource returns one of these per performance class. They carry the
measurements as acquired; normalization into sub-scores happens in the
scoring package.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class CpuMetrics:
    """CPU capability measurements."""

    # Total physical memory in bytes, reported alongside CPU data.
    total_ram: int
    # Number of logical processors available to the process.
    core_count: int
    # Current CPU frequency in MHz, 0 when unknown.
    cpu_frequency_mhz: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalRam": self.total_ram,
            "coreCount": self.core_count,
            "cpuFrequency": self.cpu_frequency_mhz,
        }


@dataclass(frozen=True)
class MemoryMetrics:
    """Memory headroom measurements, all in bytes."""

    heap_limit: int
    heap_remaining: int
    available_ram: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "heapLimit": self.heap_limit,
            "heapRemaining": self.heap_remaining,
            "availableRam": self.available_ram,
        }


@dataclass(frozen=True)
class NetworkMetrics:
    """Network quality measurements."""

    # One of EXCELLENT, GOOD, MODERATE, POOR or UNKNOWN.
    bandwidth_strength: str = "UNKNOWN"
    download_speed_kbps: float = 0.0
    signal_strength: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bandwidthStrength": self.bandwidth_strength,
            "downloadSpeed": self.download_speed_kbps,
            "signalStrength": self.signal_strength,
        }


@dataclass(frozen=True)
class StorageMetrics:
    """Free storage in bytes."""

    available_storage: int

    def to_dict(self) -> Dict[str, Any]:
        return {"availableStorage": self.available_storage}


@dataclass(frozen=True)
class BatteryMetrics:
    percentage_remaining: float
    is_charging: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "percentageRemaining": self.percentage_remaining,
            "isCharging": self.is_charging,
        }


@dataclass(frozen=True)
class DeviceFacts:
    """
    Device-wide facts consumed by fallback scoring.

    ``available_ram`` is the memory ceiling in bytes and ``core_count`` the
    number of logical processors.
    """

    available_ram: int
    core_count: int
