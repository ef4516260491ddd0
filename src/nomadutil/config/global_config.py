"""Global configuration manager for INI settings."""

import configparser
import logging
from pathlib import Path

from nomadutil.config.paths import Paths, detect_arch
from nomadutil.constants import (
    CONFIG_FILE_NAME,
    CONFIG_VERSION,
    DEFAULT_BINARY_DIR,
    DEFAULT_CHECKPOINT_TIMEOUT_SECONDS,
    DEFAULT_CHECKPOINT_URL,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_KEY_NAME,
    DEFAULT_LOG_LEVEL,
    DEFAULT_RELEASE_BASE_URL,
    DEFAULT_SERVICE_DIR,
    DEFAULT_TARGET_OS,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    KEY_CONFIG_VERSION,
    KEY_CONSOLE_LOG_LEVEL,
    KEY_LOG_LEVEL,
    SECTION_DEFAULT,
    SECTION_INSTALL,
    SECTION_NETWORK,
    SECTION_SECURITY,
    SECTION_TARGET,
)
from nomadutil.types import (
    GlobalConfig,
    InstallConfig,
    NetworkConfig,
    SecurityConfig,
    TargetConfig,
)

logger = logging.getLogger(__name__)

# Type alias for raw INI config dictionary
RawConfigDict = dict[str, str | dict[str, str]]

_FILE_HEADER = """\
# nomadutil settings
#
# Values left out fall back to built-in defaults.
"""


class GlobalConfigManager:
    """Manages global INI configuration."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize global config manager.

        Args:
            config_dir: Configuration directory path
                (defaults to Paths.config_dir())

        """
        self.config_dir = config_dir or Paths.config_dir()
        self.settings_file = self.config_dir / CONFIG_FILE_NAME

    def get_default_global_config(self) -> RawConfigDict:
        """Get default global configuration values.

        Returns:
            Default configuration dictionary

        """
        return {
            KEY_CONFIG_VERSION: CONFIG_VERSION,
            KEY_LOG_LEVEL: DEFAULT_LOG_LEVEL,
            KEY_CONSOLE_LOG_LEVEL: DEFAULT_CONSOLE_LOG_LEVEL,
            SECTION_NETWORK: {
                "timeout_seconds": str(DEFAULT_TIMEOUT_SECONDS),
                "checkpoint_timeout_seconds": str(
                    DEFAULT_CHECKPOINT_TIMEOUT_SECONDS
                ),
                "user_agent": DEFAULT_USER_AGENT,
                "release_base_url": DEFAULT_RELEASE_BASE_URL,
                "checkpoint_url": DEFAULT_CHECKPOINT_URL,
            },
            SECTION_TARGET: {
                "os": DEFAULT_TARGET_OS,
                "arch": detect_arch(),
            },
            SECTION_SECURITY: {
                "key_name": DEFAULT_KEY_NAME,
                "keys_dir": str(self.config_dir / "keys"),
            },
            SECTION_INSTALL: {
                "binary_dir": DEFAULT_BINARY_DIR,
                "service_dir": DEFAULT_SERVICE_DIR,
            },
        }

    def _create_config_from_defaults(
        self, defaults: RawConfigDict
    ) -> configparser.ConfigParser:
        """Create ConfigParser from defaults dictionary.

        Args:
            defaults: Default configuration values

        Returns:
            ConfigParser populated with defaults

        """
        config = configparser.ConfigParser(
            inline_comment_prefixes=("#", ";"),
            interpolation=None,
        )

        flat_defaults = {
            key: str(value)
            for key, value in defaults.items()
            if not isinstance(value, dict)
        }
        config.read_dict({SECTION_DEFAULT: flat_defaults})

        for key, value in defaults.items():
            if isinstance(value, dict):
                config.add_section(key)
                for subkey, subvalue in value.items():
                    config.set(key, subkey, str(subvalue))

        return config

    def load_global_config(self) -> GlobalConfig:
        """Load global configuration from INI file.

        A missing settings file is created from the defaults.

        Returns:
            Loaded global configuration

        """
        config = self._create_config_from_defaults(
            self.get_default_global_config()
        )

        if self.settings_file.exists():
            config.read(self.settings_file, encoding="utf-8")
        else:
            try:
                self.save_global_config(self._convert_to_global_config(config))
            except OSError as e:
                logger.warning(
                    "Could not write default settings to %s: %s",
                    self.settings_file,
                    e,
                )

        return self._convert_to_global_config(config)

    def save_global_config(self, config: GlobalConfig) -> None:
        """Save global configuration to INI file.

        Args:
            config: Global configuration to save

        """
        self.config_dir.mkdir(parents=True, exist_ok=True)

        sections: dict[str, dict[str, str]] = {
            SECTION_NETWORK: {
                key: str(value) for key, value in config["network"].items()
            },
            SECTION_TARGET: dict(config["target"]),
            SECTION_SECURITY: {
                key: str(value) for key, value in config["security"].items()
            },
            SECTION_INSTALL: {
                key: str(value) for key, value in config["install"].items()
            },
        }

        with self.settings_file.open("w", encoding="utf-8") as f:
            f.write(_FILE_HEADER)
            f.write(f"\n[{SECTION_DEFAULT}]\n")
            f.write(f"{KEY_CONFIG_VERSION} = {config['config_version']}\n")
            f.write(f"{KEY_LOG_LEVEL} = {config['log_level']}\n")
            f.write(
                f"{KEY_CONSOLE_LOG_LEVEL} = {config['console_log_level']}\n"
            )
            for section, values in sections.items():
                f.write(f"\n[{section}]\n")
                for key, value in values.items():
                    f.write(f"{key} = {value}\n")

    def _convert_to_global_config(
        self, config: configparser.ConfigParser
    ) -> GlobalConfig:
        """Convert configparser to typed GlobalConfig.

        Args:
            config: Configuration to convert

        Returns:
            Typed global configuration

        """

        def get_positive_int(section: str, key: str, default: int) -> int:
            raw = config.get(section, key, fallback=str(default))
            try:
                value = int(raw)
            except ValueError:
                value = 0
            if value > 0:
                return value

            logger.warning(
                "Invalid positive integer for [%s] %s: %r, using %d",
                section,
                key,
                raw,
                default,
            )
            return default

        def get_str(section: str, key: str, default: str) -> str:
            return config.get(section, key, fallback=default).strip()

        network = NetworkConfig(
            timeout_seconds=get_positive_int(
                SECTION_NETWORK, "timeout_seconds", DEFAULT_TIMEOUT_SECONDS
            ),
            checkpoint_timeout_seconds=get_positive_int(
                SECTION_NETWORK,
                "checkpoint_timeout_seconds",
                DEFAULT_CHECKPOINT_TIMEOUT_SECONDS,
            ),
            user_agent=get_str(
                SECTION_NETWORK, "user_agent", DEFAULT_USER_AGENT
            ),
            release_base_url=get_str(
                SECTION_NETWORK, "release_base_url", DEFAULT_RELEASE_BASE_URL
            ).rstrip("/"),
            checkpoint_url=get_str(
                SECTION_NETWORK, "checkpoint_url", DEFAULT_CHECKPOINT_URL
            ),
        )

        target = TargetConfig(
            os=get_str(SECTION_TARGET, "os", DEFAULT_TARGET_OS),
            arch=get_str(SECTION_TARGET, "arch", detect_arch()),
        )

        security = SecurityConfig(
            key_name=get_str(SECTION_SECURITY, "key_name", DEFAULT_KEY_NAME),
            keys_dir=Paths.expand_path(
                get_str(
                    SECTION_SECURITY,
                    "keys_dir",
                    str(self.config_dir / "keys"),
                )
            ),
        )

        install = InstallConfig(
            binary_dir=Paths.expand_path(
                get_str(SECTION_INSTALL, "binary_dir", DEFAULT_BINARY_DIR)
            ),
            service_dir=Paths.expand_path(
                get_str(SECTION_INSTALL, "service_dir", DEFAULT_SERVICE_DIR)
            ),
        )

        return GlobalConfig(
            config_version=get_str(
                SECTION_DEFAULT, KEY_CONFIG_VERSION, CONFIG_VERSION
            ),
            log_level=get_str(
                SECTION_DEFAULT, KEY_LOG_LEVEL, DEFAULT_LOG_LEVEL
            ).upper(),
            console_log_level=get_str(
                SECTION_DEFAULT,
                KEY_CONSOLE_LOG_LEVEL,
                DEFAULT_CONSOLE_LOG_LEVEL,
            ).upper(),
            network=network,
            target=target,
            security=security,
            install=install,
        )
