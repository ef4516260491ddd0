"""Centralized constants module for nomadutil.

This module serves as the single source of truth for all shared constants
across the nomadutil codebase. Constants are organized by logical categories
and use typing.Final annotations to ensure immutability.

Usage:
    from nomadutil.constants import PRODUCT_NAME
"""

from typing import Final

# =============================================================================
# Product Constants
# =============================================================================

PRODUCT_NAME: Final[str] = "nomad"

# Name of the single entry expected inside a release zip archive
BINARY_ENTRY_NAME: Final[str] = "nomad"

# File name of the generated systemd unit
SERVICE_FILE_NAME: Final[str] = "nomad.service"

# =============================================================================
# Release Server Constants
# =============================================================================

DEFAULT_RELEASE_BASE_URL: Final[str] = "https://releases.hashicorp.com"
DEFAULT_CHECKPOINT_URL: Final[str] = (
    "https://checkpoint-api.hashicorp.com/v1/check/nomad"
)
DEFAULT_USER_AGENT: Final[str] = "github.com/cezarmathe/nomadutil"

# Accept headers per remote artifact kind
ACCEPT_MANIFEST: Final[str] = "text/plain"
ACCEPT_SIGNATURE: Final[str] = "application/octet-stream"
ACCEPT_ARCHIVE: Final[str] = "application/zip"
ACCEPT_JSON: Final[str] = "application/json"

# Per-request budgets in seconds
DEFAULT_TIMEOUT_SECONDS: Final[int] = 10
DEFAULT_CHECKPOINT_TIMEOUT_SECONDS: Final[int] = 3

# =============================================================================
# Verification Constants
# =============================================================================

# SHA-256 digest width in bytes
DIGEST_SIZE: Final[int] = 32

# Manifest filename layout: <product>_<version>_<os>_<arch>.zip
ARCHIVE_SUFFIX: Final[str] = ".zip"
ARTIFACT_NAME_SEPARATOR: Final[str] = "_"
ARTIFACT_NAME_FIELDS: Final[int] = 4

# Default trusted key resource name
DEFAULT_KEY_NAME: Final[str] = "security@hashicorp.com.key"

# =============================================================================
# Platform Constants
# =============================================================================

DEFAULT_TARGET_OS: Final[str] = "linux"
DEFAULT_TARGET_ARCH: Final[str] = "amd64"

# platform.machine() values mapped to release arch names
MACHINE_ARCH_MAP: Final[dict[str, str]] = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
    "armv6l": "arm",
    "i386": "386",
    "i686": "386",
}

# =============================================================================
# Installation Constants
# =============================================================================

DEFAULT_BINARY_DIR: Final[str] = "/usr/local/bin"
DEFAULT_SERVICE_DIR: Final[str] = "/etc/systemd/system"
BINARY_FILE_MODE: Final[int] = 0o755
SERVICE_FILE_MODE: Final[int] = 0o644
NOMAD_CONFIG_DIR: Final[str] = "/etc/nomad.d"

# =============================================================================
# Configuration Constants
# =============================================================================

CONFIG_VERSION: Final[str] = "1.0.0"
CONFIG_FILE_NAME: Final[str] = "settings.conf"
CONFIG_DIR_NAME: Final[str] = "nomadutil"
DEFAULT_CONFIG_SUBDIR: Final[str] = ".config"
CONFIG_DIR_ENV: Final[str] = "NOMADUTIL_CONFIG_DIR"

DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_CONSOLE_LOG_LEVEL: Final[str] = "INFO"

SECTION_DEFAULT: Final[str] = "DEFAULT"
SECTION_NETWORK: Final[str] = "network"
SECTION_TARGET: Final[str] = "target"
SECTION_SECURITY: Final[str] = "security"
SECTION_INSTALL: Final[str] = "install"

KEY_CONFIG_VERSION: Final[str] = "config_version"
KEY_LOG_LEVEL: Final[str] = "log_level"
KEY_CONSOLE_LOG_LEVEL: Final[str] = "console_log_level"

# =============================================================================
# Logging Constants
# =============================================================================

LOG_ROTATION_THRESHOLD_BYTES: Final[int] = 10 * 1024 * 1024
LOG_BACKUP_COUNT: Final[int] = 5
LOG_FILE_NAME: Final[str] = "nomadutil.log"
LOG_DIR_ENV: Final[str] = "NOMADUTIL_LOG_DIR"

LOG_CONSOLE_FORMAT: Final[str] = "%(asctime)s %(levelname)-7s > %(message)s"
LOG_CONSOLE_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
LOG_FILE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(funcName)s:%(lineno)d] - %(message)s"
)
LOG_FILE_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

LOG_COLORS: Final[dict[str, str]] = {
    "DEBUG": "\033[36m",
    "INFO": "\033[34m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
    "RESET": "\033[0m",
}

# Console level used when -v is given on the command line
VERBOSE_CONSOLE_LOG_LEVEL: Final[str] = "DEBUG"
