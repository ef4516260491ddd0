"""Path constants and utilities for nomadutil configuration."""

import os
import platform
from pathlib import Path

from nomadutil.constants import (
    CONFIG_DIR_ENV,
    CONFIG_DIR_NAME,
    DEFAULT_CONFIG_SUBDIR,
    DEFAULT_TARGET_ARCH,
    MACHINE_ARCH_MAP,
)


class Paths:
    """Application paths and directory structure."""

    HOME_DIR = Path.home()
    CONFIG_DIR = HOME_DIR / DEFAULT_CONFIG_SUBDIR / CONFIG_DIR_NAME

    @classmethod
    def config_dir(cls) -> Path:
        """Return the config directory, honouring NOMADUTIL_CONFIG_DIR."""
        override = os.getenv(CONFIG_DIR_ENV)
        if override:
            return Path(override).expanduser()
        return cls.CONFIG_DIR

    @classmethod
    def keys_dir(cls) -> Path:
        """Return the trusted key directory under the config directory."""
        return cls.config_dir() / "keys"

    @staticmethod
    def expand_path(path: str | Path) -> Path:
        """Expand ``~`` and environment variables in a configured path.

        Args:
            path: Raw path from the configuration file

        Returns:
            Expanded path

        """
        return Path(os.path.expandvars(str(path))).expanduser()


def detect_arch() -> str:
    """Map ``platform.machine()`` to a release architecture name."""
    return MACHINE_ARCH_MAP.get(platform.machine().lower(), DEFAULT_TARGET_ARCH)
