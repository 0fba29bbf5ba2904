"""
Public entry point of the devperf package.

PerformanceMonitor wires the capability resolver, scoring engine, session
registry, event dispatcher and scheduler together and exposes the one-shot
and session surfaces. It also owns the "disabled for production" policy,
which answers every call with a fixed default result without touching the
engine.
"""

import logging
import platform
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple

import psutil

from .. import __version__
from ..capability import CapabilityResolver
from ..classification import PerformanceClassifier
from ..config import get_config
from ..models.config import AppConfig
from ..models.performance import (
    CapabilityProfile,
    PerformanceClass,
    PerformanceLevel,
    PerformanceResult,
    parse_classes,
    parse_weighted_classes,
)
from ..models.session import SessionTargets
from ..monitoring import (
    EventDispatcher,
    MonitoringScheduler,
    PerformanceListener,
    SessionRegistry,
)
from ..monitoring.listeners import ErrorCallback, ResultCallback
from ..scoring import ScoringEngine
from ..sources import (
    CapabilityProvider,
    ConfiguredCapabilityProvider,
    DeviceFactsProvider,
    HostDeviceFacts,
    MetricSource,
    PsutilMetricSource,
)
from ..validation import (
    UnsupportedPlatformVersionError,
    ValidationError,
    validate_interval_ms,
)

logger = logging.getLogger(__name__)

DISABLED_SESSION_PREFIX = "disabled-monitoring-"


@dataclass(frozen=True)
class InitializationReport:
    """What the current capability profile allows."""

    success: bool
    full_functionality: bool
    missing_permissions: Tuple[str, ...]
    missing_optional_permissions: Tuple[str, ...]
    platform_version: int
    network_monitoring_supported: bool
    battery_stats_supported: bool
    disabled: bool = False

    @classmethod
    def disabled_stub(cls) -> "InitializationReport":
        """The report given while disabled for production."""
        return cls(
            success=True,
            full_functionality=False,
            missing_permissions=(),
            missing_optional_permissions=(),
            platform_version=0,
            network_monitoring_supported=False,
            battery_stats_supported=False,
            disabled=True,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "fullFunctionality": self.full_functionality,
            "missingPermissions": list(self.missing_permissions),
            "missingOptionalPermissions": list(self.missing_optional_permissions),
            "apiLevel": self.platform_version,
            "networkMonitoringSupported": self.network_monitoring_supported,
            "batteryStatsSupported": self.battery_stats_supported,
            "disabled": self.disabled,
        }


def default_result(requested: Iterable[PerformanceClass]) -> PerformanceResult:
    """The fixed answer given while disabled for production."""
    return PerformanceResult(
        level=PerformanceLevel.HIGH,
        metrics={},
        supported_classes=(),
        unsupported_classes=tuple(requested),
    )


class PerformanceMonitor:
    """
    Facade over one-shot classification and continuous monitoring.

    Collaborators default to the host implementations: psutil for metrics and
    device facts, the `[host]` config section for the capability profile.

    Example:
        with PerformanceMonitor() as monitor:
            result = monitor.classify(["CPU", "MEMORY"])
            session_id = monitor.start_session(["MEMORY"], 1000, on_result=print)
            ...
            monitor.stop_session(session_id)
    """

    def __init__(self, app_config: Optional[AppConfig] = None,
                 metric_source: Optional[MetricSource] = None,
                 capability_provider: Optional[CapabilityProvider] = None,
                 device_facts: Optional[DeviceFactsProvider] = None):
        self.app_config = app_config or get_config()
        monitor_config = self.app_config.monitor
        host_config = self.app_config.host

        self.capability_provider = (
            capability_provider or ConfiguredCapabilityProvider(host_config)
        )
        self.resolver = CapabilityResolver(monitor_config.capability)
        self.classifier = PerformanceClassifier(
            metric_source=metric_source or PsutilMetricSource(host_config.storage_path),
            capability_provider=self.capability_provider,
            device_facts=device_facts or HostDeviceFacts(),
            resolver=self.resolver,
            engine=ScoringEngine(),
        )
        self.registry = SessionRegistry()
        self.dispatcher = EventDispatcher(monitor_config.dispatch)
        self.scheduler = MonitoringScheduler(
            self.classifier, self.dispatcher, self.registry, monitor_config.sessions
        )
        self._disabled = monitor_config.disabled_for_production

    # --- Policy ---

    def disable_for_production(self, disabled: bool = True) -> None:
        """Switch the fixed-default-result policy on or off."""
        self._disabled = bool(disabled)
        logger.info(f"Disabled for production: {self._disabled}")

    def is_disabled_for_production(self) -> bool:
        return self._disabled

    # --- Initialization and platform info ---

    def initialize(self, profile: Optional[CapabilityProfile] = None) -> InitializationReport:
        """
        Check the capability profile and report what is available.

        Raises:
            UnsupportedPlatformVersionError: Platform version below the minimum.
        """
        if self._disabled:
            return InitializationReport.disabled_stub()

        if profile is None:
            profile = self.capability_provider.current_profile()

        min_version = self.resolver.config.min_platform_version
        if profile.platform_version < min_version:
            raise UnsupportedPlatformVersionError(profile.platform_version, min_version)

        report = self.resolver.capability_report(profile)
        logger.info(
            f"Initialized at platform version {profile.platform_version}, "
            f"full functionality: {report.full_functionality}"
        )
        return InitializationReport(
            success=True,
            full_functionality=report.full_functionality,
            missing_permissions=report.missing_permissions,
            missing_optional_permissions=report.missing_optional_permissions,
            platform_version=report.platform_version,
            network_monitoring_supported=report.network_monitoring_supported,
            battery_stats_supported=report.battery_stats_supported,
        )

    def platform_info(self) -> Dict[str, Any]:
        """Describe the host and the configured capability profile."""
        if self._disabled:
            return {
                "system": platform.system(),
                "release": platform.release(),
                "supported": False,
                "disabled": True,
            }

        profile = self.capability_provider.current_profile()
        return {
            "supported": True,
            "disabled": False,
            "platformVersion": profile.platform_version,
            "grantedPermissions": sorted(profile.granted_permissions),
            "system": platform.system(),
            "release": platform.release(),
            "machine": platform.machine(),
            "pythonVersion": platform.python_version(),
            "coreCount": psutil.cpu_count(logical=True),
            "totalRam": psutil.virtual_memory().total,
            "devperfVersion": __version__,
        }

    # --- One-shot surface ---

    def classify(self, classes: Iterable[Any],
                 profile: Optional[CapabilityProfile] = None) -> PerformanceResult:
        """
        Classify the device for the given classes.

        Raises:
            UnsupportedPlatformVersionError: Platform version below the minimum.
            NoSupportedClassesError: No requested class is supported.
            ValidationError: A class name is not recognized.
        """
        if self._disabled:
            return default_result(parse_classes(classes))
        return self.classifier.classify(classes, profile)

    def classify_weighted(self, weighted_classes: Iterable[Any],
                          profile: Optional[CapabilityProfile] = None) -> PerformanceResult:
        """
        Classify the device with per-class weights.

        Raises:
            InvalidWeightError: A weight is not a positive finite number.
            UnsupportedPlatformVersionError: Platform version below the minimum.
            NoSupportedClassesError: No requested class is supported.
        """
        if self._disabled:
            weighted = parse_weighted_classes(weighted_classes)
            return default_result(w.performance_class for w in weighted)
        return self.classifier.classify_weighted(weighted_classes, profile)

    # --- Session surface ---

    def start_session(self, classes: Iterable[Any], interval_ms: Optional[int] = None,
                      on_result: Optional[ResultCallback] = None,
                      on_error: Optional[ErrorCallback] = None) -> str:
        """
        Start continuous monitoring of unweighted classes.

        The first tick runs immediately; later ticks follow ``interval_ms``
        after the previous one finished.

        Returns:
            The session id.
        """
        targets = SessionTargets.of_classes(parse_classes(classes))
        return self._start(targets, interval_ms, on_result, on_error)

    def start_weighted_session(self, weighted_classes: Iterable[Any],
                               interval_ms: Optional[int] = None,
                               on_result: Optional[ResultCallback] = None,
                               on_error: Optional[ErrorCallback] = None) -> str:
        """Start continuous monitoring of weighted classes."""
        targets = SessionTargets.of_weighted(parse_weighted_classes(weighted_classes))
        return self._start(targets, interval_ms, on_result, on_error)

    def stop_session(self, session_id: str) -> bool:
        """
        Stop one session and drop its listeners.

        Returns:
            True if a running session was stopped; False for unknown or
            already-stopped ids.
        """
        if self._disabled:
            return True
        stopped = self.scheduler.stop(session_id)
        self.dispatcher.unsubscribe(session_id)
        return stopped

    def stop_all_sessions(self) -> int:
        """Stop every session and drop all listeners. Returns the number stopped."""
        if self._disabled:
            self.dispatcher.clear()
            return 0
        stopped = self.scheduler.stop_all()
        self.dispatcher.clear()
        return stopped

    def active_sessions(self) -> Tuple[str, ...]:
        return tuple(self.registry.active_ids())

    def subscribe(self, session_id: str, on_result: Optional[ResultCallback] = None,
                  on_error: Optional[ErrorCallback] = None) -> None:
        """Register callbacks for a session; ignored while disabled for production."""
        if self._disabled:
            return
        self.dispatcher.subscribe(session_id, on_result, on_error)

    def subscribe_listener(self, session_id: str, listener: PerformanceListener) -> None:
        if self._disabled:
            return
        self.dispatcher.subscribe_listener(session_id, listener)

    def unsubscribe(self, session_id: str) -> bool:
        return self.dispatcher.unsubscribe(session_id)

    # --- Lifecycle ---

    def shutdown(self, timeout: Optional[float] = None) -> None:
        """Stop all sessions, wait for their workers and stop event dispatch."""
        self.scheduler.shutdown(timeout)
        self.dispatcher.clear()
        self.dispatcher.shutdown(wait=True)
        logger.debug("Performance monitor shut down")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()

    def _start(self, targets: SessionTargets, interval_ms: Optional[int],
               on_result: Optional[ResultCallback],
               on_error: Optional[ErrorCallback]) -> str:
        sessions_config = self.app_config.monitor.sessions
        if interval_ms is None:
            interval_ms = sessions_config.default_interval_ms
        interval_ms = validate_interval_ms(
            interval_ms, min_value=sessions_config.min_interval_ms
        )
        if not targets.classes:
            raise ValidationError(
                "At least one performance class is required to start a session",
                field_name="classes",
                value=targets.classes,
            )

        if self._disabled:
            return f"{DISABLED_SESSION_PREFIX}{int(time.time() * 1000)}"

        session = self.registry.create(targets, interval_ms)
        if on_result is not None or on_error is not None:
            self.dispatcher.subscribe(session.session_id, on_result, on_error)
        if not self.scheduler.start(session):
            # Stopped by a concurrent stop_all_sessions
            self.dispatcher.unsubscribe(session.session_id)
        return session.session_id
