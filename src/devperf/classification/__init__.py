"""
One-shot performance classification for the devperf package.
"""

from .classifier import PerformanceClassifier

__all__ = [
    "PerformanceClassifier",
]
