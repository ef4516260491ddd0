"""Placement of the Nomad binary and its systemd service unit."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from nomadutil.constants import (
    BINARY_ENTRY_NAME,
    BINARY_FILE_MODE,
    NOMAD_CONFIG_DIR,
    SERVICE_FILE_MODE,
    SERVICE_FILE_NAME,
)
from nomadutil.exceptions import InstallationError
from nomadutil.logger import get_logger

logger = get_logger(__name__)

SERVICE_TEMPLATE = """\
[Unit]
Description=Nomad
Documentation=https://nomadproject.io/docs/
Wants=network-online.target
After=network-online.target

[Service]
ExecReload=/bin/kill -HUP $MAINPID
ExecStart={binary} agent -config {config_dir}
KillMode=process
KillSignal=SIGINT
LimitNOFILE=infinity
LimitNPROC=infinity
Restart=on-failure
RestartSec=2
StartLimitBurst=3
StartLimitIntervalSec=10
TasksMax=infinity

[Install]
WantedBy=multi-user.target
"""


def render_service_unit(
    binary_path: Path, config_dir: str = NOMAD_CONFIG_DIR
) -> str:
    """Render the systemd unit running ``binary_path`` as an agent."""
    return SERVICE_TEMPLATE.format(binary=binary_path, config_dir=config_dir)


def resolve_target(path: Path, default_name: str) -> Path:
    """Resolve an output location.

    Relative paths are made absolute and an existing directory gets
    ``default_name`` appended.
    """
    target = path if path.is_absolute() else path.resolve()
    if target.is_dir():
        target = target / default_name
    return target


def write_file(path: Path, content: bytes, mode: int) -> None:
    """Write ``content`` to ``path`` and set ``mode``.

    Raises:
        InstallationError: If the file cannot be written completely

    """
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
        with os.fdopen(fd, "wb") as f:
            written = f.write(content)
        # O_CREAT only applies the mode to new files
        os.chmod(path, mode)
    except OSError as e:
        raise InstallationError(str(e), target=str(path)) from e

    if written != len(content):
        msg = f"written {written} bytes instead of {len(content)}"
        raise InstallationError(msg, target=str(path))


@dataclass(frozen=True, slots=True)
class InstallResult:
    """Where the binary and the service unit were written."""

    binary_path: Path
    service_path: Path | None


class NomadInstaller:
    """Writes a verified binary and its service unit to disk."""

    def __init__(self, config_dir: str = NOMAD_CONFIG_DIR) -> None:
        self.config_dir = config_dir

    def install_binary(self, binary: bytes, out: Path) -> Path:
        """Write the binary with mode 0755.

        Returns:
            Final binary path

        """
        target = resolve_target(out, BINARY_ENTRY_NAME)
        write_file(target, binary, BINARY_FILE_MODE)
        logger.info("nomad binary installed to %s", target)
        return target

    def install_service(self, binary_path: Path, service_out: Path) -> Path:
        """Write the systemd unit with mode 0644.

        Returns:
            Final unit path

        """
        target = resolve_target(service_out, SERVICE_FILE_NAME)
        unit = render_service_unit(binary_path, self.config_dir)
        write_file(target, unit.encode("utf-8"), SERVICE_FILE_MODE)
        logger.info("nomad service file installed to %s", target)
        return target

    def install(
        self,
        binary: bytes,
        out: Path,
        service_out: Path | None = None,
    ) -> InstallResult:
        """Install the binary and, when ``service_out`` is set, its unit."""
        binary_path = self.install_binary(binary, out)
        service_path = None
        if service_out is not None:
            service_path = self.install_service(binary_path, service_out)
        return InstallResult(binary_path=binary_path, service_path=service_path)
