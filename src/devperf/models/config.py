"""
Configuration data models.

This module contains the configuration data structures for capability
policy, session scheduling, event dispatch and the host profile, loaded
from `config.toml`.
"""

from dataclasses import dataclass, field
from typing import List

NETWORK_STATE_PERMISSION = "android.permission.ACCESS_NETWORK_STATE"
WIFI_STATE_PERMISSION = "android.permission.ACCESS_WIFI_STATE"
BATTERY_STATS_PERMISSION = "android.permission.BATTERY_STATS"


@dataclass
class CapabilityConfig:
    """
    Version and permission policy for class support, from `[monitor.capability]`.
    """

    # Evaluations below this platform version are rejected outright.
    min_platform_version: int = 21
    # NETWORK needs at least this version and the network permission.
    network_min_version: int = 23
    # BATTERY needs at least this version.
    battery_min_version: int = 21
    network_permission: str = NETWORK_STATE_PERMISSION
    # Reported as missing by initialize(); functionality is reduced without them.
    required_permissions: List[str] = field(
        default_factory=lambda: [NETWORK_STATE_PERMISSION, WIFI_STATE_PERMISSION]
    )
    optional_permissions: List[str] = field(
        default_factory=lambda: [BATTERY_STATS_PERMISSION]
    )


@dataclass
class SessionConfig:
    """
    Continuous monitoring settings, from `[monitor.sessions]`.
    """

    default_interval_ms: int = 5000
    min_interval_ms: int = 10
    thread_name_prefix: str = "PerfSession"
    # Seconds to wait for session workers on shutdown.
    join_timeout: float = 5.0


@dataclass
class DispatchConfig:
    """
    Listener dispatch pool settings, from `[monitor.dispatch]`.
    """

    max_workers: int = 4
    thread_name_prefix: str = "PerfDispatch"
    shutdown_timeout: float = 5.0


@dataclass
class MonitorConfig:
    """
    Configuration for the classifier's global behavior, from `[monitor]`.
    """

    # [monitor.general]
    disabled_for_production: bool = False
    log_level: str = "INFO"

    capability: CapabilityConfig = field(default_factory=CapabilityConfig)
    sessions: SessionConfig = field(default_factory=SessionConfig)
    dispatch: DispatchConfig = field(default_factory=DispatchConfig)


@dataclass
class HostConfig:
    """
    Capability profile of the host, from `[host]`.

    Used by the configured capability provider and the psutil metric source.
    """

    platform_version: int = 30
    granted_permissions: List[str] = field(
        default_factory=lambda: [NETWORK_STATE_PERMISSION, WIFI_STATE_PERMISSION]
    )
    # Filesystem path whose free space is reported as STORAGE.
    storage_path: str = "/"


@dataclass
class AppConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    monitor: MonitorConfig = field(default_factory=MonitorConfig)
    host: HostConfig = field(default_factory=HostConfig)
