"""
Performance scoring engine.

This module turns per-class measurements into a single PerformanceLevel.
It has two paths:

- The primary path combines per-class sub-scores (0-100) into a weighted
  average, ``sum(subscore_i * weight_i) / sum(weight_i)``.
- The fallback path is a device-wide heuristic built from the memory
  ceiling, the core count and the platform version. It ignores class
  weights and runs once per evaluation.

Both paths map their score through the same fixed threshold table. The
engine never raises: unscorable classes are excluded from the average, and
when nothing is scorable the caller is told to fall back.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from ..models.metrics import DeviceFacts
from ..models.performance import PerformanceClass, PerformanceLevel
from .subscores import GB, subscore, tier_points

logger = logging.getLogger(__name__)

# Score -> level table, checked from the top. Scores below the last
# threshold are LOW.
LEVEL_THRESHOLDS: Tuple[Tuple[float, PerformanceLevel], ...] = (
    (85, PerformanceLevel.EXCELLENT),
    (65, PerformanceLevel.HIGH),
    (45, PerformanceLevel.AVERAGE),
)

# Fallback tiers: (threshold, points), highest threshold first.
FALLBACK_MEMORY_TIERS = ((4 * GB, 40), (2 * GB, 30), (1 * GB, 20))
FALLBACK_MEMORY_FLOOR = 10
FALLBACK_CORE_TIERS = ((8, 30), (4, 25), (2, 15))
FALLBACK_CORE_FLOOR = 5
FALLBACK_VERSION_TIERS = ((30, 30), (28, 25), (26, 20), (23, 15))
FALLBACK_VERSION_FLOOR = 10


def level_for_score(score: float) -> PerformanceLevel:
    """Map a 0-100 score to its performance level."""
    for threshold, level in LEVEL_THRESHOLDS:
        if score >= threshold:
            return level
    return PerformanceLevel.LOW


def fallback_score(available_ram: int, core_count: int, platform_version: int) -> int:
    """
    Device-wide heuristic score, at most 100.

    Three additive parts, each capped at its own weight: memory ceiling
    (max 40), core count (max 30) and platform version (max 30).
    """
    memory_points = tier_points(available_ram, FALLBACK_MEMORY_TIERS, FALLBACK_MEMORY_FLOOR)
    core_points = tier_points(core_count, FALLBACK_CORE_TIERS, FALLBACK_CORE_FLOOR)
    version_points = tier_points(
        platform_version, FALLBACK_VERSION_TIERS, FALLBACK_VERSION_FLOOR
    )
    return int(memory_points + core_points + version_points)


@dataclass(frozen=True)
class ScoreOutcome:
    """A level together with the score and path that produced it."""

    level: PerformanceLevel
    score: float
    used_fallback: bool
    scored_classes: Tuple[PerformanceClass, ...] = ()


class ScoringEngine:
    """
    Converts measurements into performance levels.

    The engine is stateless and safe to share between threads.
    """

    def subscores(self, measurements: Mapping[PerformanceClass, Any]) -> Dict[PerformanceClass, float]:
        """Sub-score every scorable measurement; unscorable ones are left out."""
        scores: Dict[PerformanceClass, float] = {}
        for performance_class, measurement in measurements.items():
            try:
                value = subscore(performance_class, measurement)
            except Exception as e:
                logger.debug(f"Failed to score {performance_class.name}: {e}")
                value = None
            if value is not None:
                scores[performance_class] = value
        return scores

    def combine(self, subscores: Mapping[PerformanceClass, float],
                weights: Optional[Mapping[PerformanceClass, float]] = None) -> Optional[float]:
        """
        Weighted average of sub-scores.

        Classes without an explicit weight count with weight 1.0. Returns None
        when there is nothing to combine.
        """
        if not subscores:
            return None
        weights = weights or {}
        total_weight = 0.0
        weighted_sum = 0.0
        for performance_class, value in subscores.items():
            weight = weights.get(performance_class, 1.0)
            weighted_sum += value * weight
            total_weight += weight
        if total_weight <= 0:
            return None
        return weighted_sum / total_weight

    def score(self, measurements: Optional[Mapping[PerformanceClass, Any]],
              weights: Optional[Mapping[PerformanceClass, float]] = None) -> Optional[ScoreOutcome]:
        """
        Primary path.

        Returns:
            ScoreOutcome, or None when no class could be scored and the
            caller has to use the fallback path.
        """
        if not measurements:
            return None
        scores = self.subscores(measurements)
        combined = self.combine(scores, weights)
        if combined is None:
            return None
        return ScoreOutcome(
            level=level_for_score(combined),
            score=combined,
            used_fallback=False,
            scored_classes=tuple(scores),
        )

    def fallback(self, facts: DeviceFacts, platform_version: int) -> ScoreOutcome:
        """Fallback path: device-wide heuristic, weights are not consulted."""
        score = fallback_score(facts.available_ram, facts.core_count, platform_version)
        return ScoreOutcome(
            level=level_for_score(score),
            score=float(score),
            used_fallback=True,
        )
