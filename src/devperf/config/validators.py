"""
Configuration validation utilities.

Turns the raw `[monitor]` and `[host]` tables into validated configuration
dataclasses. Every key is optional and falls back to the dataclass default.
"""

import logging
from typing import Any, Dict

from ..models.config import (
    CapabilityConfig,
    DispatchConfig,
    HostConfig,
    MonitorConfig,
    SessionConfig,
)
from ..validation import (
    ValidationError,
    validate_enum_choice,
    validate_positive_float,
    validate_positive_integer,
    validate_string_list,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _validate_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a boolean", field_name=field_name, value=value)
    return value


def _validate_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            f"{field_name} must be a non-empty string", field_name=field_name, value=value
        )
    return value


def validate_capability_config(capability_data: Dict[str, Any]) -> CapabilityConfig:
    """
    Validate the `[monitor.capability]` table.

    Raises:
        ValidationError: If validation fails
    """
    defaults = CapabilityConfig()

    min_platform_version = validate_positive_integer(
        capability_data.get("min_platform_version", defaults.min_platform_version),
        min_value=0,
        field_name="monitor.capability.min_platform_version",
    )
    network_min_version = validate_positive_integer(
        capability_data.get("network_min_version", defaults.network_min_version),
        min_value=0,
        field_name="monitor.capability.network_min_version",
    )
    battery_min_version = validate_positive_integer(
        capability_data.get("battery_min_version", defaults.battery_min_version),
        min_value=0,
        field_name="monitor.capability.battery_min_version",
    )
    network_permission = _validate_non_empty_string(
        capability_data.get("network_permission", defaults.network_permission),
        "monitor.capability.network_permission",
    )
    required_permissions = validate_string_list(
        capability_data.get("required_permissions", defaults.required_permissions),
        field_name="monitor.capability.required_permissions",
    )
    optional_permissions = validate_string_list(
        capability_data.get("optional_permissions", defaults.optional_permissions),
        field_name="monitor.capability.optional_permissions",
    )

    return CapabilityConfig(
        min_platform_version=min_platform_version,
        network_min_version=network_min_version,
        battery_min_version=battery_min_version,
        network_permission=network_permission,
        required_permissions=required_permissions,
        optional_permissions=optional_permissions,
    )


def validate_session_config(session_data: Dict[str, Any]) -> SessionConfig:
    """Validate the `[monitor.sessions]` table."""
    defaults = SessionConfig()

    min_interval_ms = validate_positive_integer(
        session_data.get("min_interval_ms", defaults.min_interval_ms),
        min_value=1,
        max_value=3_600_000,
        field_name="monitor.sessions.min_interval_ms",
    )
    default_interval_ms = validate_positive_integer(
        session_data.get("default_interval_ms", defaults.default_interval_ms),
        min_value=min_interval_ms,
        max_value=3_600_000,
        field_name="monitor.sessions.default_interval_ms",
    )
    thread_name_prefix = _validate_non_empty_string(
        session_data.get("thread_name_prefix", defaults.thread_name_prefix),
        "monitor.sessions.thread_name_prefix",
    )
    join_timeout = validate_positive_float(
        session_data.get("join_timeout", defaults.join_timeout),
        min_value=0.0,
        max_value=300.0,
        field_name="monitor.sessions.join_timeout",
    )

    return SessionConfig(
        default_interval_ms=default_interval_ms,
        min_interval_ms=min_interval_ms,
        thread_name_prefix=thread_name_prefix,
        join_timeout=join_timeout,
    )


def validate_dispatch_config(dispatch_data: Dict[str, Any]) -> DispatchConfig:
    """Validate the `[monitor.dispatch]` table."""
    defaults = DispatchConfig()

    max_workers = validate_positive_integer(
        dispatch_data.get("max_workers", defaults.max_workers),
        min_value=1,
        max_value=128,
        field_name="monitor.dispatch.max_workers",
    )
    thread_name_prefix = _validate_non_empty_string(
        dispatch_data.get("thread_name_prefix", defaults.thread_name_prefix),
        "monitor.dispatch.thread_name_prefix",
    )
    shutdown_timeout = validate_positive_float(
        dispatch_data.get("shutdown_timeout", defaults.shutdown_timeout),
        min_value=0.0,
        max_value=300.0,
        field_name="monitor.dispatch.shutdown_timeout",
    )

    return DispatchConfig(
        max_workers=max_workers,
        thread_name_prefix=thread_name_prefix,
        shutdown_timeout=shutdown_timeout,
    )


def validate_monitor_config(monitor_data: Dict[str, Any]) -> MonitorConfig:
    """
    Validate and create a MonitorConfig from raw configuration data.

    Args:
        monitor_data: Raw `[monitor]` table from TOML

    Returns:
        Validated MonitorConfig instance

    Raises:
        ValidationError: If validation fails
    """
    general_settings = monitor_data.get("general", {})

    try:
        disabled_for_production = _validate_bool(
            general_settings.get("disabled_for_production", False),
            "monitor.general.disabled_for_production",
        )
        log_level = validate_enum_choice(
            general_settings.get("log_level", "INFO"),
            valid_choices=LOG_LEVELS,
            field_name="monitor.general.log_level",
            case_sensitive=False,
        )

        return MonitorConfig(
            disabled_for_production=disabled_for_production,
            log_level=log_level,
            capability=validate_capability_config(monitor_data.get("capability", {})),
            sessions=validate_session_config(monitor_data.get("sessions", {})),
            dispatch=validate_dispatch_config(monitor_data.get("dispatch", {})),
        )

    except ValidationError as e:
        logger.error(f"Monitor configuration validation failed: {e}")
        raise


def validate_host_config(host_data: Dict[str, Any]) -> HostConfig:
    """
    Validate the `[host]` table describing the local capability profile.

    Raises:
        ValidationError: If validation fails
    """
    defaults = HostConfig()

    try:
        platform_version = validate_positive_integer(
            host_data.get("platform_version", defaults.platform_version),
            min_value=0,
            field_name="host.platform_version",
        )
        granted_permissions = validate_string_list(
            host_data.get("granted_permissions", defaults.granted_permissions),
            field_name="host.granted_permissions",
        )
        storage_path = _validate_non_empty_string(
            host_data.get("storage_path", defaults.storage_path),
            "host.storage_path",
        )
    except ValidationError as e:
        logger.error(f"Host configuration validation failed: {e}")
        raise

    return HostConfig(
        platform_version=platform_version,
        granted_permissions=granted_permissions,
        storage_path=storage_path,
    )
