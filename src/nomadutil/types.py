"""Centralized type definitions for nomadutil.

TypedDict definitions for the loaded configuration, shared by the config
package, the CLI and the core services.
"""

from pathlib import Path
from typing import TypedDict


class NetworkConfig(TypedDict):
    """Network configuration options."""

    timeout_seconds: int
    checkpoint_timeout_seconds: int
    user_agent: str
    release_base_url: str
    checkpoint_url: str


class TargetConfig(TypedDict):
    """Target platform pair artifacts are selected for."""

    os: str
    arch: str


class SecurityConfig(TypedDict):
    """Trusted key material location."""

    key_name: str
    keys_dir: Path


class InstallConfig(TypedDict):
    """Default placement of the binary and the service unit."""

    binary_dir: Path
    service_dir: Path


class GlobalConfig(TypedDict):
    """Global application configuration."""

    config_version: str
    log_level: str
    console_log_level: str
    network: NetworkConfig
    target: TargetConfig
    security: SecurityConfig
    install: InstallConfig
