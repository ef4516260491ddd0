"""Acquisition of a verified Nomad binary.

``ReleaseAcquisition.get`` runs the whole pipeline for one version::

    manifest -> select digest -> [signature -> verify manifest]
             -> archive -> [verify digest] -> extract binary

Every step blocks until it is done and any failure aborts the run; there is
no partial result and no retry.
"""

from __future__ import annotations

from dataclasses import dataclass

from nomadutil.config.paths import Paths
from nomadutil.constants import BINARY_ENTRY_NAME
from nomadutil.core.archive import ArchiveExtractor
from nomadutil.core.transport import (
    HttpClient,
    ReleaseEndpoints,
    ReleaseTransport,
)
from nomadutil.core.verification import checksum_parser
from nomadutil.core.verification.digest import DigestVerifier
from nomadutil.core.verification.signature import (
    DirectoryKeyProvider,
    SignatureVerifier,
)
from nomadutil.logger import get_logger
from nomadutil.types import GlobalConfig

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ReleaseGetOptions:
    """Which checks to run while getting a release.

    Attributes:
        verify_integrity: Check the archive digest against the manifest
        verify_signature: Check the manifest signature; ignored when
            ``verify_integrity`` is false

    """

    verify_integrity: bool = True
    verify_signature: bool = True


class ReleaseAcquisition:
    """Downloads, authenticates and unpacks one release."""

    def __init__(
        self,
        transport: ReleaseTransport,
        signature_verifier: SignatureVerifier | None = None,
        digest_verifier: DigestVerifier | None = None,
        extractor: ArchiveExtractor | None = None,
        expected_entry_name: str = BINARY_ENTRY_NAME,
    ) -> None:
        """Wire the pipeline stages.

        Args:
            transport: Fetches manifest, signature and archive; its
                endpoints define the target platform pair
            signature_verifier: Manifest signature check (defaults to keys
                from the user's keys directory)
            digest_verifier: Archive digest check
            extractor: Archive extractor
            expected_entry_name: Name of the binary inside the archive

        """
        self.transport = transport
        self.signature_verifier = signature_verifier or SignatureVerifier(
            DirectoryKeyProvider(Paths.keys_dir())
        )
        self.digest_verifier = digest_verifier or DigestVerifier()
        self.extractor = extractor or ArchiveExtractor()
        self.expected_entry_name = expected_entry_name

    @classmethod
    def from_config(
        cls,
        config: GlobalConfig,
        client: HttpClient,
        signature_verifier: SignatureVerifier | None = None,
    ) -> ReleaseAcquisition:
        """Build an acquisition for the configured server and platform."""
        endpoints = ReleaseEndpoints(
            os=config["target"]["os"],
            arch=config["target"]["arch"],
            base_url=config["network"]["release_base_url"],
        )
        verifier = signature_verifier or SignatureVerifier(
            DirectoryKeyProvider(config["security"]["keys_dir"]),
            key_name=config["security"]["key_name"],
        )
        return cls(ReleaseTransport(client, endpoints), verifier)

    @property
    def target_os(self) -> str:
        """Operating system artifacts are selected for."""
        return self.transport.endpoints.os

    @property
    def target_arch(self) -> str:
        """Architecture artifacts are selected for."""
        return self.transport.endpoints.arch

    def get(self, version: str, options: ReleaseGetOptions | None = None) -> bytes:
        """Get the verified binary of ``version``.

        Args:
            version: Release version, e.g. ``1.2.3``
            options: Checks to run (all by default)

        Returns:
            The extracted binary

        Raises:
            NomadUtilError: Any subclass, from whichever step failed

        """
        options = options or ReleaseGetOptions()

        expected_digest: bytes | None = None
        if options.verify_integrity:
            manifest = self.transport.fetch_manifest(version)
            logger.info("downloaded checksums for version %s", version)
            expected_digest = checksum_parser.select(
                manifest, version, self.target_os, self.target_arch
            )

            if options.verify_signature:
                signature = self.transport.fetch_signature(version)
                logger.info(
                    "downloaded checksums signature for version %s", version
                )
                self.signature_verifier.verify(signature, manifest)
                logger.info("checksums signature ok")
            else:
                logger.warning("not checking the signature of the shasums")
        elif options.verify_signature:
            logger.warning(
                "not checking the signature of the shasums: "
                "integrity checking is disabled"
            )

        archive = self.transport.fetch_archive(version)
        logger.info("downloaded nomad zip archive for version %s", version)

        if expected_digest is None:
            logger.warning("not checking the integrity of the zip archive")
        else:
            self.digest_verifier.verify(archive, expected_digest)
            logger.info("zip archive ok")

        binary = self.extractor.extract_single(
            archive, self.expected_entry_name
        )
        logger.info("unzipped the nomad artifact")
        return binary
