"""
Scoring for the devperf package.

Turns raw per-class measurements into performance levels, with a
device-wide fallback heuristic for when measurements are unavailable.
"""

from .engine import (
    LEVEL_THRESHOLDS,
    ScoreOutcome,
    ScoringEngine,
    fallback_score,
    level_for_score,
)
from .subscores import subscore

__all__ = [
    "LEVEL_THRESHOLDS",
    "ScoreOutcome",
    "ScoringEngine",
    "fallback_score",
    "level_for_score",
    "subscore",
]
