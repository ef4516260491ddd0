"""Exception classes for nomadutil operations.

Every failure of the acquisition pipeline maps to exactly one class below so
callers can handle each category explicitly. All of them are terminal: the
pipeline never degrades to a partial or best-effort result.

Hierarchy::

    NomadUtilError
    ├── NetworkError
    ├── ChecksumError
    │   ├── MalformedLineError
    │   ├── MalformedFilenameError
    │   ├── MalformedDigestError
    │   ├── VersionMismatchError
    │   └── ChecksumNotFoundError
    ├── VerificationError
    │   ├── KeyringLoadError
    │   ├── SignatureInvalidError
    │   └── DigestMismatchError
    ├── ArchiveError
    │   ├── MalformedArchiveError
    │   ├── EmptyArchiveError
    │   ├── MultipleEntriesError
    │   └── EntryNotFoundError
    ├── CheckpointError
    └── InstallationError
"""

from __future__ import annotations

from collections.abc import Sequence


class NomadUtilError(Exception):
    """Base exception for nomadutil operations."""

    error_prefix: str = "Operation failed"

    def __init__(self, message: str, target: str | None = None) -> None:
        """Initialize error with message and optional target.

        Args:
            message: Error message describing the failure.
            target: Optional name of the target that failed.

        """
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.target:
            return f"{self.error_prefix} for '{self.target}': {self.message}"
        return f"{self.error_prefix}: {self.message}"


class NetworkError(NomadUtilError):
    """Raised when a remote artifact cannot be retrieved.

    ``status`` is ``None`` when no HTTP response was received at all
    (connection refused, DNS failure, timeout).
    """

    error_prefix = "Download failed"

    def __init__(
        self,
        status: int | None,
        url: str,
        message: str | None = None,
    ) -> None:
        self.status = status
        self.url = url
        if message is None:
            message = f"{url} responded with status {status}"
        super().__init__(message)


# =============================================================================
# Checksum manifest errors
# =============================================================================


class ChecksumError(NomadUtilError):
    """Base class for checksum manifest parsing failures."""

    error_prefix = "Checksum manifest invalid"


class MalformedLineError(ChecksumError):
    """Raised when a manifest line is not exactly ``<digest> <filename>``."""

    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(f"malformed sums line: {line!r}")


class MalformedFilenameError(ChecksumError):
    """Raised when an artifact name is not ``product_version_os_arch.zip``."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(f"malformed sums artifact name: {filename!r}")


class MalformedDigestError(ChecksumError):
    """Raised when a digest is not valid hex of the expected width."""

    def __init__(self, digest: str, reason: str) -> None:
        self.digest = digest
        self.reason = reason
        super().__init__(f"malformed digest {digest!r}: {reason}")


class VersionMismatchError(ChecksumError):
    """Raised when an artifact for the target platform has another version."""

    def __init__(self, found: str, expected: str) -> None:
        self.found = found
        self.expected = expected
        super().__init__(
            f"version {found} in artifact name does not match "
            f"version {expected}"
        )


class ChecksumNotFoundError(ChecksumError):
    """Raised when no manifest line matches the requested artifact."""

    def __init__(self, version: str, os: str, arch: str) -> None:
        self.version = version
        self.os = os
        self.arch = arch
        super().__init__(
            f"no sums found for version {version}, os {os} and arch {arch}"
        )


# =============================================================================
# Authentication and integrity errors
# =============================================================================


class VerificationError(NomadUtilError):
    """Base class for authentication and integrity failures."""

    error_prefix = "Verification failed"


class KeyringLoadError(VerificationError):
    """Raised when the trusted keyring cannot be built."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(reason, target=name)


class SignatureInvalidError(VerificationError):
    """Raised when a detached signature does not verify."""

    def __init__(self, message: str = "signature does not match") -> None:
        super().__init__(message)


class DigestMismatchError(VerificationError):
    """Raised when the computed digest differs from the expected one.

    Both values are lowercase hex strings.
    """

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"artifact digest {actual} does not match provided digest "
            f"{expected}"
        )


# =============================================================================
# Archive errors
# =============================================================================


class ArchiveError(NomadUtilError):
    """Base class for archive extraction failures."""

    error_prefix = "Archive extraction failed"


class MalformedArchiveError(ArchiveError):
    """Raised when the archive container cannot be parsed."""


class EmptyArchiveError(ArchiveError):
    """Raised when the archive holds no entries."""

    def __init__(self) -> None:
        super().__init__("empty archive")


class MultipleEntriesError(ArchiveError):
    """Raised when the archive holds more than one entry."""

    def __init__(self, names: Sequence[str]) -> None:
        self.names = list(names)
        super().__init__(
            f"expected a single entry, found {len(self.names)}: "
            f"{', '.join(self.names)}"
        )


class EntryNotFoundError(ArchiveError):
    """Raised when the only archive entry has an unexpected name."""

    def __init__(self, actual: str, expected: str) -> None:
        self.actual = actual
        self.expected = expected
        super().__init__(f"found entry {actual!r}, expected {expected!r}")


# =============================================================================
# Errors outside the acquisition pipeline
# =============================================================================


class CheckpointError(NomadUtilError):
    """Raised when the checkpoint lookup fails or rejects a version."""

    error_prefix = "Checkpoint check failed"


class InstallationError(NomadUtilError):
    """Raised when placing the binary or the service unit fails."""

    error_prefix = "Installation failed"
