"""
Performance classification data models.

This module defines the closed vocabulary of the classifier (performance
classes and levels), the inputs of an evaluation (weighted classes and the
capability profile) and its immutable output, the PerformanceResult.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Tuple

from ..validation import ValidationError, validate_weight


class PerformanceClass(Enum):
    """A named dimension of device capability."""

    CPU = "CPU"
    MEMORY = "MEMORY"
    NETWORK = "NETWORK"
    STORAGE = "STORAGE"
    BATTERY = "BATTERY"

    @classmethod
    def parse(cls, value: Any) -> "PerformanceClass":
        """Accept a PerformanceClass or its case-insensitive name.

        Raises:
            ValidationError: If the value does not name a performance class.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        raise ValidationError(
            f"Unknown performance class: {value!r}. "
            f"Expected one of {[c.name for c in cls]}",
            field_name="performance_class",
            value=value,
        )


_LEVEL_ORDER = ("LOW", "AVERAGE", "HIGH", "EXCELLENT")


@total_ordering
class PerformanceLevel(Enum):
    """Ordinal classification, LOW < AVERAGE < HIGH < EXCELLENT."""

    LOW = "LOW"
    AVERAGE = "AVERAGE"
    HIGH = "HIGH"
    EXCELLENT = "EXCELLENT"

    @property
    def rank(self) -> int:
        return _LEVEL_ORDER.index(self.value)

    def __lt__(self, other):
        if not isinstance(other, PerformanceLevel):
            return NotImplemented
        return self.rank < other.rank


class ClassSupportDecision(Enum):
    """Why a requested class can or cannot be evaluated."""

    SUPPORTED = "supported"
    UNSUPPORTED_BY_VERSION = "unsupported-by-version"
    UNSUPPORTED_BY_PERMISSION = "unsupported-by-permission"


@dataclass(frozen=True)
class WeightedClass:
    """A performance class together with its contribution weight."""

    performance_class: PerformanceClass
    weight: float = 1.0

    def __post_init__(self):
        object.__setattr__(
            self, "performance_class", PerformanceClass.parse(self.performance_class)
        )
        object.__setattr__(
            self,
            "weight",
            validate_weight(self.weight, f"weight of {self.performance_class.name}"),
        )


@dataclass(frozen=True)
class CapabilityProfile:
    """
    Snapshot of the platform version and granted permissions.

    Supplied per evaluation by a CapabilityProvider; never cached across ticks
    because permissions can change at runtime.
    """

    platform_version: int
    granted_permissions: FrozenSet[str] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, "granted_permissions", frozenset(self.granted_permissions))

    def has_permission(self, permission: str) -> bool:
        return permission in self.granted_permissions


@dataclass(frozen=True)
class PerformanceResult:
    """
    The outcome of one evaluation.

    ``supported_classes`` and ``unsupported_classes`` partition the requested
    classes in request order. ``score`` is the combined 0-100 score the level
    was derived from and ``used_fallback`` tells whether it came from the
    device-wide fallback heuristic instead of direct measurements.
    """

    level: PerformanceLevel
    metrics: Mapping[PerformanceClass, Any]
    supported_classes: Tuple[PerformanceClass, ...]
    unsupported_classes: Tuple[PerformanceClass, ...] = ()
    score: float = 0.0
    used_fallback: bool = False
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self):
        object.__setattr__(self, "metrics", MappingProxyType(dict(self.metrics)))
        object.__setattr__(self, "supported_classes", tuple(self.supported_classes))
        object.__setattr__(self, "unsupported_classes", tuple(self.unsupported_classes))

    @property
    def requested_classes(self) -> Tuple[PerformanceClass, ...]:
        return self.supported_classes + self.unsupported_classes

    def to_dict(self) -> Dict[str, Any]:
        """Serialize into the payload shape used by channel transports."""
        return {
            "level": self.level.value,
            "score": self.score,
            "usedFallback": self.used_fallback,
            "metrics": {
                cls.name.lower(): _measurement_to_dict(measurement)
                for cls, measurement in self.metrics.items()
            },
            "timestamp": int(self.timestamp * 1000),
            "supportedClasses": [c.name for c in self.supported_classes],
            "unsupportedClasses": [c.name for c in self.unsupported_classes],
        }


def _measurement_to_dict(measurement: Any) -> Any:
    to_dict = getattr(measurement, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return measurement


def parse_classes(classes: Iterable[Any]) -> Tuple[PerformanceClass, ...]:
    """Parse requested classes, collapsing duplicates onto their first occurrence."""
    if isinstance(classes, (str, PerformanceClass)):
        classes = [classes]
    parsed = []
    for value in classes:
        performance_class = PerformanceClass.parse(value)
        if performance_class not in parsed:
            parsed.append(performance_class)
    return tuple(parsed)


def parse_weighted_classes(weighted_classes: Iterable[Any]) -> Tuple[WeightedClass, ...]:
    """
    Parse weighted classes from WeightedClass objects, (class, weight) pairs
    or ``{"performanceClass": ..., "weight": ...}`` mappings.

    Duplicate classes keep their first occurrence.

    Raises:
        InvalidWeightError: If any weight is not positive.
        ValidationError: If an entry cannot be interpreted.
    """
    parsed: Dict[PerformanceClass, WeightedClass] = {}
    for entry in weighted_classes:
        if isinstance(entry, WeightedClass):
            weighted = entry
        elif isinstance(entry, Mapping):
            raw_class = entry.get("performance_class", entry.get("performanceClass"))
            weighted = WeightedClass(raw_class, entry.get("weight", 1.0))
        elif isinstance(entry, (tuple, list)) and len(entry) == 2:
            weighted = WeightedClass(entry[0], entry[1])
        else:
            raise ValidationError(
                f"Cannot interpret weighted class entry: {entry!r}",
                field_name="weighted_classes",
                value=entry,
            )
        parsed.setdefault(weighted.performance_class, weighted)
    return tuple(parsed.values())
