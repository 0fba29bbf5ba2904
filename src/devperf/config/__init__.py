"""
Configuration management for the devperf package.

This module provides a clean interface for loading, validating, and accessing
configuration data from TOML files with singleton pattern management.
"""

# Main configuration interface
from .manager import (
    build_config,
    clear_config_cache,
    get_config,
    get_config_path,
    is_config_loaded,
    set_config_path,
)

# For advanced usage - direct access to loaders and validators
from .loader import load_toml_file
from .validators import (
    validate_capability_config,
    validate_dispatch_config,
    validate_host_config,
    validate_monitor_config,
    validate_session_config,
)

__all__ = [
    # Main interface
    "get_config",
    "get_config_path",
    "set_config_path",
    "clear_config_cache",
    "is_config_loaded",
    "build_config",
    # Advanced interface
    "load_toml_file",
    "validate_capability_config",
    "validate_dispatch_config",
    "validate_host_config",
    "validate_monitor_config",
    "validate_session_config",
]
