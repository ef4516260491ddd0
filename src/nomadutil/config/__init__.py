"""Configuration management.

This package provides:
- GlobalConfigManager: INI configuration management (settings.conf)
- Paths: Path constants and utilities
"""

from nomadutil.config.global_config import GlobalConfigManager
from nomadutil.config.paths import Paths, detect_arch
from nomadutil.types import GlobalConfig

__all__ = [
    "GlobalConfig",
    "GlobalConfigManager",
    "Paths",
    "detect_arch",
]
