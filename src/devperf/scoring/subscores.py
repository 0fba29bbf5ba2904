"""
Per-class sub-score derivation.

Each raw measurement structure is normalized onto a 0-100 scale. A bare real
number is read as an already-normalized sub-score. Anything that cannot be
interpreted yields None and is excluded from the combined score.
"""

import logging
import math
from numbers import Real
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from ..models.metrics import (
    BatteryMetrics,
    CpuMetrics,
    MemoryMetrics,
    NetworkMetrics,
    StorageMetrics,
)
from ..models.performance import PerformanceClass

logger = logging.getLogger(__name__)

GB = 1_000_000_000

Tiers = Sequence[Tuple[float, float]]

CPU_CORE_TIERS: Tiers = ((8, 50), (4, 40), (2, 25), (1, 10))
CPU_FREQUENCY_TIERS_MHZ: Tiers = ((2400, 50), (1800, 40), (1200, 25), (0, 10))
MEMORY_AVAILABLE_TIERS: Tiers = ((4 * GB, 40), (2 * GB, 30), (1 * GB, 20), (0, 10))
NETWORK_BANDWIDTH_SCORES: Dict[str, float] = {
    "EXCELLENT": 100,
    "GOOD": 75,
    "MODERATE": 50,
    "POOR": 25,
}
NETWORK_SPEED_TIERS_KBPS: Tiers = ((10_000, 100), (2_000, 75), (500, 50))
STORAGE_TIERS: Tiers = ((32 * GB, 100), (8 * GB, 75), (2 * GB, 50), (0, 25))
CHARGING_BONUS = 20


def tier_points(value: float, tiers: Tiers, floor: Optional[float] = None) -> Optional[float]:
    """Return the points of the first tier whose threshold ``value`` reaches.

    Tiers are ordered from the highest threshold down. ``floor`` is returned
    when no tier matches.
    """
    for threshold, points in tiers:
        if value >= threshold:
            return points
    return floor


def clamp_score(value: float) -> float:
    return max(0.0, min(100.0, float(value)))


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and not math.isnan(value)


def cpu_subscore(metrics: CpuMetrics) -> Optional[float]:
    if not _is_number(metrics.core_count) or metrics.core_count < 1:
        return None
    core_points = tier_points(metrics.core_count, CPU_CORE_TIERS)
    frequency = metrics.cpu_frequency_mhz
    if not _is_number(frequency) or frequency <= 0:
        # Frequency unknown: the core count carries the whole score.
        return clamp_score(core_points * 2)
    return clamp_score(core_points + tier_points(frequency, CPU_FREQUENCY_TIERS_MHZ))


def memory_subscore(metrics: MemoryMetrics) -> Optional[float]:
    if not all(_is_number(v) for v in
               (metrics.heap_limit, metrics.heap_remaining, metrics.available_ram)):
        return None
    if metrics.heap_limit <= 0 or metrics.available_ram < 0:
        return None
    headroom = max(0.0, min(1.0, metrics.heap_remaining / metrics.heap_limit))
    return clamp_score(
        60 * headroom + tier_points(metrics.available_ram, MEMORY_AVAILABLE_TIERS)
    )


def network_subscore(metrics: NetworkMetrics) -> Optional[float]:
    label = (metrics.bandwidth_strength or "UNKNOWN").upper()
    if label in NETWORK_BANDWIDTH_SCORES:
        return float(NETWORK_BANDWIDTH_SCORES[label])
    speed = metrics.download_speed_kbps
    if not _is_number(speed) or speed <= 0:
        return None
    return float(tier_points(speed, NETWORK_SPEED_TIERS_KBPS, floor=25))


def storage_subscore(metrics: StorageMetrics) -> Optional[float]:
    if not _is_number(metrics.available_storage) or metrics.available_storage < 0:
        return None
    return float(tier_points(metrics.available_storage, STORAGE_TIERS))


def battery_subscore(metrics: BatteryMetrics) -> Optional[float]:
    if not _is_number(metrics.percentage_remaining):
        return None
    score = clamp_score(metrics.percentage_remaining)
    if metrics.is_charging:
        score = clamp_score(score + CHARGING_BONUS)
    return score


_STRUCTURED_SCORERS: Dict[PerformanceClass, Tuple[type, Callable[[Any], Optional[float]]]] = {
    PerformanceClass.CPU: (CpuMetrics, cpu_subscore),
    PerformanceClass.MEMORY: (MemoryMetrics, memory_subscore),
    PerformanceClass.NETWORK: (NetworkMetrics, network_subscore),
    PerformanceClass.STORAGE: (StorageMetrics, storage_subscore),
    PerformanceClass.BATTERY: (BatteryMetrics, battery_subscore),
}


def subscore(performance_class: PerformanceClass, measurement: Any) -> Optional[float]:
    """
    Normalize one raw measurement to a 0-100 sub-score.

    Args:
        performance_class: The class the measurement belongs to.
        measurement: A metrics structure for that class or a bare number.

    Returns:
        The sub-score, or None when the measurement cannot be scored.
    """
    if measurement is None:
        return None
    if _is_number(measurement):
        return clamp_score(measurement)

    expected_type, scorer = _STRUCTURED_SCORERS[performance_class]
    if not isinstance(measurement, expected_type):
        logger.debug(
            f"Unscorable {performance_class.name} measurement of type "
            f"{type(measurement).__name__}"
        )
        return None
    return scorer(measurement)
