"""Install command coordinator.

Thin coordinator that turns CLI flags into InstallOptions and delegates to
InstallApplicationService.
"""

from argparse import Namespace
from pathlib import Path

from nomadutil.config import Paths
from nomadutil.core.checkpoint import CheckpointClient
from nomadutil.core.release import ReleaseAcquisition
from nomadutil.core.services.install_service import (
    InstallApplicationService,
    InstallOptions,
)
from nomadutil.core.transport import RequestsHttpClient
from nomadutil.core.verification.signature import (
    DirectoryKeyProvider,
    SignatureVerifier,
)
from nomadutil.logger import get_logger

from .base import BaseCommandHandler

logger = get_logger(__name__)


class InstallCommandHandler(BaseCommandHandler):
    """Thin coordinator for install command."""

    def build_options(self, args: Namespace) -> InstallOptions:
        """Translate parsed flags into install options."""
        install_dirs = self.global_config["install"]
        out = (
            Paths.expand_path(args.out)
            if args.out
            else install_dirs["binary_dir"]
        )

        service_out: Path | None = None
        if not args.no_service:
            service_out = (
                Paths.expand_path(args.service_out)
                if args.service_out
                else install_dirs["service_dir"]
            )

        return InstallOptions(
            out=out,
            service_out=service_out,
            version=args.release_version,
            verify_integrity=not args.skip_sums,
            verify_signature=not args.skip_sig,
            ignore_alerts=args.ignore_alerts,
            ignore_outdated=args.ignore_outdated,
        )

    def build_signature_verifier(self, args: Namespace) -> SignatureVerifier:
        """Trusted keys come from --keys-dir or the configured directory."""
        security = self.global_config["security"]
        keys_dir = (
            Paths.expand_path(args.keys_dir)
            if args.keys_dir
            else security["keys_dir"]
        )
        return SignatureVerifier(
            DirectoryKeyProvider(keys_dir), key_name=security["key_name"]
        )

    def execute(self, args: Namespace) -> None:
        """Execute install command."""
        options = self.build_options(args)
        network = self.global_config["network"]
        target = self.global_config["target"]

        with (
            RequestsHttpClient(
                timeout_seconds=network["timeout_seconds"],
                user_agent=network["user_agent"],
            ) as release_client,
            RequestsHttpClient(
                timeout_seconds=network["checkpoint_timeout_seconds"],
                user_agent=network["user_agent"],
            ) as checkpoint_client,
        ):
            service = InstallApplicationService(
                acquisition=ReleaseAcquisition.from_config(
                    self.global_config,
                    release_client,
                    self.build_signature_verifier(args),
                ),
                checkpoint=CheckpointClient(
                    checkpoint_client,
                    os=target["os"],
                    arch=target["arch"],
                    url=network["checkpoint_url"],
                ),
            )
            result = service.install(options)

        logger.info("installed nomad to %s", result.binary_path)
        if result.service_path is not None:
            logger.info("installed service unit to %s", result.service_path)
