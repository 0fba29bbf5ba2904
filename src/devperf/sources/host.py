"""
Host metric collection using psutil.

PsutilMetricSource maps each performance class onto the closest host
measurement psutil offers. HostDeviceFacts supplies the memory ceiling and
logical core count used by fallback scoring.
"""

import logging
from typing import Any, Callable, Dict, FrozenSet, Optional

import psutil

from ..models.metrics import (
    BatteryMetrics,
    CpuMetrics,
    DeviceFacts,
    MemoryMetrics,
    NetworkMetrics,
    StorageMetrics,
)
from ..models.performance import PerformanceClass
from .base import DeviceFactsProvider, MetricSource

logger = logging.getLogger(__name__)


def _logical_cores() -> int:
    cores = psutil.cpu_count(logical=True)
    if not cores:
        logger.warning("Could not determine logical core count, assuming 1")
        return 1
    return cores


class PsutilMetricSource(MetricSource):
    """
    Samples host metrics through psutil.

    - CPU: logical cores and current frequency
    - MEMORY: total and available virtual memory
    - STORAGE: free space of the configured path
    - BATTERY: battery sensor, omitted when the host has no battery
    - NETWORK: link speed of the fastest interface that is up
    """

    def __init__(self, storage_path: str = "/"):
        self.storage_path = storage_path
        self._samplers: Dict[PerformanceClass, Callable[[], Optional[Any]]] = {
            PerformanceClass.CPU: self._sample_cpu,
            PerformanceClass.MEMORY: self._sample_memory,
            PerformanceClass.NETWORK: self._sample_network,
            PerformanceClass.STORAGE: self._sample_storage,
            PerformanceClass.BATTERY: self._sample_battery,
        }

    def sample(self, classes: FrozenSet[PerformanceClass]) -> Dict[PerformanceClass, Any]:
        measurements: Dict[PerformanceClass, Any] = {}
        for performance_class in classes:
            measurement = self._samplers[performance_class]()
            if measurement is not None:
                measurements[performance_class] = measurement
        return measurements

    def _sample_cpu(self) -> CpuMetrics:
        frequency = 0.0
        try:
            freq = psutil.cpu_freq()
            if freq is not None and freq.current:
                frequency = float(freq.current)
        except (NotImplementedError, OSError) as e:
            logger.debug(f"CPU frequency unavailable: {e}")

        return CpuMetrics(
            total_ram=psutil.virtual_memory().total,
            core_count=_logical_cores(),
            cpu_frequency_mhz=frequency,
        )

    def _sample_memory(self) -> MemoryMetrics:
        vm = psutil.virtual_memory()
        return MemoryMetrics(
            heap_limit=vm.total,
            heap_remaining=vm.available,
            available_ram=vm.available,
        )

    def _sample_storage(self) -> StorageMetrics:
        return StorageMetrics(available_storage=psutil.disk_usage(self.storage_path).free)

    def _sample_battery(self) -> Optional[BatteryMetrics]:
        sensors_battery = getattr(psutil, "sensors_battery", None)
        if sensors_battery is None:
            return None
        battery = sensors_battery()
        if battery is None:
            logger.debug("No battery present on this host")
            return None
        return BatteryMetrics(
            percentage_remaining=float(battery.percent),
            is_charging=bool(battery.power_plugged),
        )

    def _sample_network(self) -> NetworkMetrics:
        # psutil reports link speed in Mb/s; 0 means unknown.
        speeds = [
            stats.speed for stats in psutil.net_if_stats().values()
            if stats.isup and stats.speed > 0
        ]
        if not speeds:
            return NetworkMetrics()
        return NetworkMetrics(download_speed_kbps=float(max(speeds) * 1000))


class HostDeviceFacts(DeviceFactsProvider):
    """Total RAM and logical core count of the host."""

    def current_facts(self) -> DeviceFacts:
        return DeviceFacts(
            available_ram=psutil.virtual_memory().total,
            core_count=_logical_cores(),
        )
