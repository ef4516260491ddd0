"""Install application service.

Runs the install use case: checkpoint lookup, verified acquisition of the
binary, then placement of the binary and its service unit.
"""

from dataclasses import dataclass
from pathlib import Path

from nomadutil.core.checkpoint import CheckpointClient, evaluate
from nomadutil.core.install import InstallResult, NomadInstaller
from nomadutil.core.release import ReleaseAcquisition, ReleaseGetOptions
from nomadutil.logger import get_logger

logger = get_logger(__name__)


@dataclass
class InstallOptions:
    """Installation options data class."""

    out: Path
    service_out: Path | None
    version: str | None = None
    verify_integrity: bool = True
    verify_signature: bool = True
    ignore_alerts: bool = False
    ignore_outdated: bool = False


class InstallApplicationService:
    """Application service for installing Nomad."""

    def __init__(
        self,
        acquisition: ReleaseAcquisition,
        checkpoint: CheckpointClient,
        installer: NomadInstaller | None = None,
    ) -> None:
        """Initialize install application service.

        Args:
            acquisition: Verified release acquisition pipeline
            checkpoint: Checkpoint API client
            installer: Writes binary and service unit

        """
        self.acquisition = acquisition
        self.checkpoint = checkpoint
        self.installer = installer or NomadInstaller()

    def install(self, options: InstallOptions) -> InstallResult:
        """Install the requested (or newest) version.

        Raises:
            NomadUtilError: From the checkpoint, acquisition or installer

        """
        response = self.checkpoint.check(options.version)
        version = options.version or response.current_version
        evaluate(
            response,
            version,
            ignore_outdated=options.ignore_outdated,
            ignore_alerts=options.ignore_alerts,
        )

        logger.info("attempting to install version %s", version)
        binary = self.acquisition.get(
            version,
            ReleaseGetOptions(
                verify_integrity=options.verify_integrity,
                verify_signature=options.verify_signature,
            ),
        )
        logger.info("nomad binary ready for installation")

        return self.installer.install(binary, options.out, options.service_out)
