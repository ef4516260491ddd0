"""Main logger module providing public API functions.

- setup_logging(): Configure the QueueHandler based logging once
- get_logger(): Get a module logger, initializing the root on first use
- flush_all_handlers(): Ensure pending records reach their handlers
- clear_logger_state(): Reset global logger state for testing
"""

import atexit
import contextlib
import logging
import time
from pathlib import Path

from nomadutil.logger.config import load_log_settings
from nomadutil.logger.handlers import ROOT_LOGGER_NAME, setup_root_logger
from nomadutil.logger.state import get_state

_FLUSH_TIMEOUT_SECONDS = 5.0


def flush_all_handlers() -> None:
    """Wait for the queue to drain, then flush every handler."""
    state = get_state()
    if state.queue_listener is None or state.log_queue is None:
        return

    # QueueListener doesn't use task_done(), so poll the queue
    start_time = time.time()
    while not state.log_queue.empty():
        if time.time() - start_time > _FLUSH_TIMEOUT_SECONDS:
            break
        time.sleep(0.01)

    time.sleep(0.05)

    for handler in state.queue_listener.handlers:
        with contextlib.suppress(OSError, ValueError):
            handler.flush()


def _cleanup_logging() -> None:
    """Stop the QueueListener on interpreter exit."""
    state = get_state()
    if state.queue_listener is not None:
        flush_all_handlers()
        state.queue_listener.stop()
        state.queue_listener = None


atexit.register(_cleanup_logging)


def setup_logging(
    name: str = ROOT_LOGGER_NAME,
    console_level: str | None = None,
    file_level: str | None = None,
    log_file: Path | None = None,
    enable_file_logging: bool = True,  # noqa: FBT001, FBT002
) -> logging.Logger:
    """Configure logging and return the logger called ``name``.

    The root ``nomadutil`` logger is initialized exactly once; child
    loggers propagate to it.

    Args:
        name: Logger name, typically __name__
        console_level: Console log level ("DEBUG", "INFO", "WARNING")
        file_level: File log level ("DEBUG", "INFO")
        log_file: Path to log file
        enable_file_logging: Whether to enable file logging

    Returns:
        Logger instance

    Raises:
        ConfigurationError: If file logging setup fails

    """
    state = get_state()
    with state.lock:
        if not state.root_initialized:
            cfg_console, cfg_file, cfg_path = load_log_settings()
            setup_root_logger(
                state,
                console_level or cfg_console,
                file_level or cfg_file,
                log_file or cfg_path,
                enable_file_logging,
            )

    return logging.getLogger(name)


def get_logger(
    name: str = ROOT_LOGGER_NAME,
    enable_file_logging: bool = True,  # noqa: FBT001, FBT002
) -> logging.Logger:
    """Get or create logger instance.

    Example:
        >>> from nomadutil.logger import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("downloaded checksums for version %s", version)

    """
    return setup_logging(name=name, enable_file_logging=enable_file_logging)


def clear_logger_state() -> None:
    """Clear global logger state for testing purposes.

    Stops the QueueListener, closes handlers and resets state flags so the
    next ``get_logger`` call starts from a clean slate.

    Warning:
        Intended for tests only.

    """
    state = get_state()
    with state.lock:
        if state.queue_listener is not None:
            flush_all_handlers()
            state.queue_listener.stop()
            for handler in state.queue_listener.handlers:
                handler.close()
            state.queue_listener = None

        state.log_queue = None
        state.root_initialized = False
        state.config_applied = False

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in root_logger.handlers[:]:
            handler.close()
            root_logger.removeHandler(handler)
