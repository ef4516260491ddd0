"""Logging utilities for nomadutil.

This package provides structured logging with:
- Colored console output (message only for INFO records)
- File rotation using standard RotatingFileHandler
- QueueHandler/QueueListener so handlers never block callers
- Hierarchical logger naming (e.g., nomadutil.core.release)

Usage:
    >>> from nomadutil.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Processing %s", version)  # Use %-style formatting

Rules:
    1. Always use: logger = get_logger(__name__)
    2. Never call logging.basicConfig()
    3. Never attach handlers to child loggers
    4. Never use f-strings in log calls
"""

from typing import TYPE_CHECKING

from nomadutil.logger.config import (
    update_logger_from_config as _update_config,
)
from nomadutil.logger.formatters import (
    ColoredConsoleFormatter,
    HybridConsoleFormatter,
    SimpleConsoleFormatter,
)
from nomadutil.logger.handlers import ConfigurationError
from nomadutil.logger.handlers import set_console_level as _set_console_level
from nomadutil.logger.logger import (
    clear_logger_state,
    flush_all_handlers,
    get_logger,
    setup_logging,
)
from nomadutil.logger.state import get_state

if TYPE_CHECKING:
    from nomadutil.types import GlobalConfig

__all__ = [
    "ColoredConsoleFormatter",
    "ConfigurationError",
    "HybridConsoleFormatter",
    "SimpleConsoleFormatter",
    "clear_logger_state",
    "flush_all_handlers",
    "get_logger",
    "set_console_level",
    "setup_logging",
    "update_logger_from_config",
]


def update_logger_from_config(config: "GlobalConfig | None" = None) -> None:
    """Update logger handler levels from the global config."""
    _update_config(get_state(), config)


def set_console_level(level: str) -> None:
    """Change the console handler level (used for -v on the CLI)."""
    _set_console_level(get_state(), level)
