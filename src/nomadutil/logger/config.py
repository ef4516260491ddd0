"""Configuration loading and updating for logging system.

Bootstrap defaults are used while the config package is still importing;
``update_logger_from_config`` applies the configured levels afterwards.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from nomadutil.constants import (
    CONFIG_DIR_ENV,
    CONFIG_DIR_NAME,
    DEFAULT_CONFIG_SUBDIR,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    LOG_DIR_ENV,
    LOG_FILE_NAME,
)

if TYPE_CHECKING:
    from nomadutil.logger.state import _LoggerState
    from nomadutil.types import GlobalConfig


def load_log_settings() -> tuple[str, str, Path]:
    """Load default console level, file level, and file path.

    Environment Variable Override:
        NOMADUTIL_LOG_DIR: log directory, used by the test suite to keep
        test logs out of the user's config directory.
        NOMADUTIL_CONFIG_DIR: config directory; logs go to its ``logs``
        subdirectory when NOMADUTIL_LOG_DIR is unset.

    Returns:
        Tuple of (console_level, file_level, log_path)

    """
    env_log_dir = os.getenv(LOG_DIR_ENV)
    env_config_dir = os.getenv(CONFIG_DIR_ENV)
    if env_log_dir:
        log_dir = Path(env_log_dir).expanduser()
    elif env_config_dir:
        log_dir = Path(env_config_dir).expanduser() / "logs"
    else:
        log_dir = (
            Path.home() / DEFAULT_CONFIG_SUBDIR / CONFIG_DIR_NAME / "logs"
        )

    return DEFAULT_CONSOLE_LOG_LEVEL, DEFAULT_LOG_LEVEL, log_dir / LOG_FILE_NAME


def update_logger_from_config(
    state: "_LoggerState", config: "GlobalConfig | None" = None
) -> None:
    """Update logger handler levels from global config.

    Only handler levels change; handlers are never added or removed.

    Args:
        state: Logger state object (from logger.state module)
        config: Already loaded configuration; read from the settings
            file when omitted

    Note:
        Import and lookup errors are ignored so logging configuration
        cannot break application startup.

    """
    try:
        if config is None:
            from nomadutil.config import GlobalConfigManager  # noqa: PLC0415

            config = GlobalConfigManager().load_global_config()

        console_level = getattr(
            logging, config["console_log_level"], logging.INFO
        )
        file_level = getattr(logging, config["log_level"], logging.INFO)

        if state.queue_listener is not None:
            for handler in state.queue_listener.handlers:
                if isinstance(handler, RotatingFileHandler):
                    handler.setLevel(file_level)
                elif isinstance(handler, logging.StreamHandler):
                    handler.setLevel(console_level)

        state.config_applied = True

    except (ImportError, KeyError, AttributeError):
        # Config not ready yet, keep bootstrap defaults
        pass
